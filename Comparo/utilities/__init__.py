"""
This module contains basic utilities for the suite, like interval arithmetics
and log creation.
"""

from . import log_utils
from .file_type import filetype


__author__ = 'Luca Venturini'


def overlap(first, second, flank=0, positive=False):

    """
    Function to calculate the overlap between two closed, 1-based intervals.
    The returned value is the number of shared bases; values <= 0 indicate no overlap
    (a value of 0 means that the two intervals are adjacent).

    :param first: first interval, as a (start, end) tuple
    :param second: second interval, as a (start, end) tuple
    :param flank: optional number of bases by which to extend the intervals
    :type flank: int
    :param positive: flag. If set, negative values are reported as 0.
    :type positive: bool
    :rtype: int
    """

    first, second = sorted(first[:2]), sorted(second[:2])
    left = max(first[0], second[0])
    right = min(first[1], second[1])
    value = right - left + 1 + flank
    if positive is True:
        return max(value, 0)
    return value


def merge_ranges(ranges, adjacent=False):

    """
    Function to merge a list of closed intervals into their union.
    Overlapping intervals are merged; adjacent ones are merged only if requested.

    :param ranges: iterable of (start, end) tuples
    :param adjacent: flag. If set, intervals separated by no base (e.g. 1-10 and 11-20) are merged.
    :rtype: list
    """

    gap = 1 if adjacent is True else 0
    merged = []
    for start, end in sorted(tuple(sorted(_[:2])) for _ in ranges):
        if merged and start <= merged[-1][1] + gap:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def calc_f1(recall, precision):

    """
    Static method to calculate the F1 statistic given precision
    and recall (order is unimportant). Definition:
    F1 = (2 * precision * recall) / (precision + recall)
    If both are 0 the F1 is 0 as well.
    """

    if recall is None or precision is None:
        return None
    if recall + precision == 0:
        return 0.0
    return 2 * recall * precision / (recall + precision)


def safe_ratio(numerator, denominator):
    """Division returning None when the denominator is 0."""
    if denominator == 0:
        return None
    return numerator / denominator
