"""
This module contains the command line parsers of the Comparo subprograms.
"""

from . import compare
