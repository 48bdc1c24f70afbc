#!/usr/bin/env python3

"""
This subprogram compares a prediction annotation against a reference one, in the
fashion of ParsEval: the annotations are grouped into loci, the transcripts of each
locus into cliques, and each prediction clique is scored against its best
reference counterpart.
"""

import argparse
import sys
from multiprocessing import cpu_count
from ..parsers import to_gff
from ..scales.compare import compare


__author__ = "Luca Venturini"


def compare_parser():
    """
    The parser for the comparison function

    :return: the argument parser
    """

    def get_procs(arg):

        return max(min(int(arg), cpu_count()), 1)

    def positive(arg):
        arg = int(arg)
        if arg < 0:
            raise ValueError("Only non-negative values are accepted")
        return arg

    parser = argparse.ArgumentParser(
        'Tool to define the spec/sens of predictions vs. references.')
    input_files = parser.add_argument_group(
        'Prediction and annotation files.')
    input_files.add_argument('-r', '--reference',
                             type=to_gff,
                             required=True,
                             help="Reference annotation file (GFF3).")
    input_files.add_argument('-p', '--prediction',
                             type=to_gff,
                             required=True,
                             help='Prediction annotation file (GFF3).')
    parser.add_argument("--configuration", default=None, type=str,
                        help="Optional configuration file, in YAML, TOML or JSON format.")
    parser.add_argument("-t", "--max-transcripts", dest="max_transcripts", default=None, type=positive,
                        help="""Maximum number of transcripts of each source in a locus.
                        Larger loci will not be compared. 0 disables the limit.""")
    parser.add_argument("-c", "--max-comparisons", dest="max_comparisons", default=None, type=positive,
                        help="""Maximum number of clique comparisons in a locus.
                        Larger loci will not be compared. 0 disables the limit.""")
    parser.add_argument("-o", "--out", default="comparo", type=str,
                        help="Prefix for the output files. Default: %(default)s")
    parser.add_argument("-l", "--log", default=None, type=str)
    parser.add_argument("-v", "--verbose",
                        action="store_true",
                        default=False)
    parser.add_argument("-x", "--processes", default=None,
                        type=get_procs)
    parser.set_defaults(func=compare, command_line=sys.argv)

    return parser


if __name__ == '__main__':
    __args__ = compare_parser().parse_args()
    __args__.func(__args__)
