"""
This module contains the functions and classes used to score the
prediction cliques against the reference ones and to summarise the results.
"""

from .statistics import StructuralStats, NucleotideStats, ComparisonStats
from .clique_pair import ClassCode, CliquePair, score, classify
from .cliques import cliques_for
from .selector import select, best_matching, Selection
from .accountant import Accountant
