"""
This module loads the input annotation files into indexed annotation sources.
"""

from .annotation_loader import load_from_gff, load_annotation
