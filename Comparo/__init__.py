#!/usr/bin/env python3
# coding: utf_8

"""
Comparo is a Python suite to compare two gene structure annotations,
a reference and a prediction, over the same genomic sequences. It groups
overlapping annotations into loci and evaluates the agreement of the
predicted transcripts against the reference ones within each locus.
"""

from Comparo.version import __version__

__title__ = "Comparo"
__license__ = 'LGPL3'

__all__ = ["configuration",
           "exceptions",
           "loci",
           "parsers",
           "preparation",
           "scales",
           "subprograms",
           "transcripts",
           "utilities",
           "__version__"]


from .utilities.log_utils import create_default_logger
