# coding: utf-8

"""
This module defines the contract that any annotation store must satisfy to be
used by the locus builder, plus an in-memory implementation backed by interval trees.
"""

import abc
import collections
from intervaltree import Interval, IntervalTree
from ..exceptions import RedundantNames, SourceQueryError
from ..transcripts.annotation import AnnotationInterval


__author__ = 'Luca Venturini'


class AnnotationSource(metaclass=abc.ABCMeta):

    """
    Abstract read-only collection of transcript annotations, grouped by sequence.
    Failures to answer a query must be signalled with a SourceQueryError.
    """

    @abc.abstractmethod
    def sequence_ids(self):
        """Return the list of sequence identifiers known to the source, in source order."""
        raise NotImplementedError("This is only an abstract method!")

    def has_sequence(self, seqid):
        return seqid in self.sequence_ids()

    @abc.abstractmethod
    def transcripts_for_sequence(self, seqid):
        """Return all the transcripts on a sequence, in source order."""
        raise NotImplementedError("This is only an abstract method!")

    @abc.abstractmethod
    def transcripts_overlapping(self, seqid, start, end):
        """Return the transcripts on a sequence which share at least one base
        with the closed interval [start, end], in source order."""
        raise NotImplementedError("This is only an abstract method!")


class AnnotationIndex(AnnotationSource):

    """
    In-memory annotation source. Transcripts are stored per sequence in an
    IntervalTree; the source order is the positional one (start, end), with
    ties broken by insertion order.
    """

    def __init__(self, transcripts=None):
        self.__trees = collections.OrderedDict()
        self.__counter = 0
        self.__ids = set()
        self.__sorted = dict()
        if transcripts is not None:
            for transcript in transcripts:
                self.add(transcript)

    def add(self, transcript: AnnotationInterval):
        """
        Insert a transcript into the index.
        :raises RedundantNames: if a transcript with the same identifier is already present.
        """

        if not isinstance(transcript, AnnotationInterval):
            raise TypeError("Only AnnotationInterval objects can be indexed, not {}".format(type(transcript)))
        if transcript.id in self.__ids:
            raise RedundantNames("Transcript {} is already present in the index".format(transcript.id))
        self.__ids.add(transcript.id)
        tree = self.__trees.setdefault(transcript.seqid, IntervalTree())
        # Interval trees are half-open
        tree.add(Interval(transcript.start, transcript.end + 1, (self.__counter, transcript)))
        self.__counter += 1
        self.__sorted.pop(transcript.seqid, None)

    def __len__(self):
        return len(self.__ids)

    def __contains__(self, tid):
        return tid in self.__ids

    def __iter__(self):
        for seqid in self.__trees:
            yield from self.transcripts_for_sequence(seqid)

    @staticmethod
    def _order(data):
        counter, transcript = data
        return transcript.start, transcript.end, counter

    def sequence_ids(self):
        return list(self.__trees.keys())

    def has_sequence(self, seqid):
        return seqid in self.__trees

    def __get_tree(self, seqid, query_range=None):
        try:
            return self.__trees[seqid]
        except KeyError:
            raise SourceQueryError(seqid, "sequence not present in the index", query_range)

    def transcripts_for_sequence(self, seqid):
        if seqid not in self.__sorted:
            tree = self.__get_tree(seqid)
            self.__sorted[seqid] = [data[1] for data in sorted((_.data for _ in tree), key=self._order)]
        return list(self.__sorted[seqid])

    def transcripts_overlapping(self, seqid, start, end):
        tree = self.__get_tree(seqid, (start, end))
        if start > end:
            start, end = end, start
        hits = tree.overlap(start, end + 1)
        return [data[1] for data in sorted((_.data for _ in hits), key=self._order)]
