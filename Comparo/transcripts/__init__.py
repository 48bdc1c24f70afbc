"""
This module defines the annotation objects compared by Comparo: immutable
transcript intervals and the cliques they are grouped into.
"""

from .annotation import AnnotationInterval, Provenance
from .clique import TranscriptClique
