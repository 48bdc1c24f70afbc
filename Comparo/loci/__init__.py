"""
This module defines the classes and functions used to group overlapping
annotations into loci, either from a single source or from a reference
and a prediction source at once.
"""

from .annotation_index import AnnotationSource, AnnotationIndex
from .locus import Locus
from .builder import build_loci, build_loci_pairwise
from .locus_index import LocusIndex
