# coding: utf-8

"""
A clique is a maximal group of same-provenance transcripts, inside a locus,
which are connected by overlap.
"""

from ..utilities import overlap


class TranscriptClique:

    """
    Ordered, immutable collection of transcripts sharing the same provenance.
    An empty clique stands for "no annotation of this provenance at this locus".
    """

    __slots__ = ["members", "provenance", "seqid"]

    def __init__(self, members, provenance=None, seqid=None):
        self.members = tuple(members)
        if provenance is None and self.members:
            provenance = self.members[0].provenance
        if seqid is None and self.members:
            seqid = self.members[0].seqid
        self.provenance = provenance
        self.seqid = seqid

    @classmethod
    def empty(cls, provenance, seqid=None):
        return cls((), provenance=provenance, seqid=seqid)

    def __len__(self):
        return len(self.members)

    def __iter__(self):
        return iter(self.members)

    def __repr__(self):
        return "TranscriptClique({0}, {1})".format(self.provenance, self.id)

    def __eq__(self, other):
        if not isinstance(other, TranscriptClique):
            return NotImplemented
        return (self.members, self.provenance) == (other.members, other.provenance)

    def __hash__(self):
        return hash((self.members, self.provenance))

    def __getstate__(self):
        return dict((key, getattr(self, key)) for key in self.__slots__)

    def __setstate__(self, state):
        for key, value in state.items():
            setattr(self, key, value)

    @property
    def is_empty(self):
        return len(self.members) == 0

    @property
    def start(self):
        return min(member.start for member in self.members) if self.members else None

    @property
    def end(self):
        return max(member.end for member in self.members) if self.members else None

    @property
    def ids(self):
        return [member.id for member in self.members]

    @property
    def id(self):
        return ";".join(self.ids) if self.members else "None"

    @property
    def exon_num(self):
        return sum(member.exon_num for member in self.members)

    @property
    def cds_length(self):
        return sum(member.cds_length for member in self.members)

    @property
    def is_coding(self):
        return any(member.is_coding for member in self.members)

    def overlaps(self, other):
        """True if the ranges of the two cliques share at least one base."""
        if self.is_empty or other.is_empty or self.seqid != other.seqid:
            return False
        return overlap((self.start, self.end), (other.start, other.end)) > 0
