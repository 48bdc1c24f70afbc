#!/usr/bin/env python3
# coding: utf_8

"""
    This module defines the iterators that will parse the input GFF3 files.
"""

import io
import os
from ..exceptions import InvalidParsingFormat
from .parser import Parser
from . import GFF


def to_gff(string):
    """
    Function to recognize the input file type, used in the command line parsers.
    Only GFF3 files are accepted.
    :param string: name of the file
    :rtype: GFF.GFF3
    """

    if isinstance(string, io.IOBase):
        return GFF.GFF3(string)
    if not os.path.exists(string):
        raise InvalidParsingFormat("File not found: {}".format(string))
    stripped = string
    for suffix in (".gz", ".bz2"):
        if stripped.endswith(suffix):
            stripped = stripped[:-len(suffix)]
    if not stripped.endswith((".gff", ".gff3")):
        raise InvalidParsingFormat("Invalid file specified: {} should be a GFF3 file.".format(string))
    return GFF.GFF3(string)
