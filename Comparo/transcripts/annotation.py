# coding: utf-8

"""
This module defines the AnnotationInterval class, ie an immutable
transcript annotation with its exons, its coding sequence and its provenance.
"""

import enum
from ..exceptions import InvalidTranscript, InvalidCDS, ModificationError


__author__ = 'Luca Venturini'


class Provenance(enum.Enum):
    """Origin of an annotation in a dual-source comparison."""

    REFERENCE = "refr"
    PREDICTION = "pred"

    def __str__(self):
        return self.value


def _to_segments(segments, kind):
    try:
        segments = sorted(tuple(int(_) for _ in segment) for segment in segments)
    except (TypeError, ValueError):
        raise InvalidTranscript("Invalid {0} coordinates: {1}".format(kind, segments))
    for segment in segments:
        if len(segment) != 2:
            raise InvalidTranscript("Invalid {0} segment: {1}".format(kind, segment))
        if segment[0] > segment[1]:
            raise InvalidTranscript("Inverted {0} segment: {1}".format(kind, segment))
    for first, second in zip(segments[:-1], segments[1:]):
        if second[0] <= first[1]:
            raise InvalidTranscript("Overlapping {0} segments: {1}, {2}".format(kind, first, second))
    return tuple(segments)


class AnnotationInterval:

    """
    An immutable transcript annotation. It is defined by:

    - seqid: the sequence it is located on
    - start, end: 1-based, inclusive coordinates (start <= end)
    - id: a stable identifier
    - exons: ordered, non-overlapping exon segments spanning exactly [start, end].
      If not provided, the transcript is considered monoexonic.
    - cds: ordered coding segments, each contained in an exon. Consecutive CDS
      segments must be separated only by introns.
    - strand: "+", "-" or None
    - parent: optional identifier of the gene
    - provenance: a Provenance tag, or None in single-source mode

    Once created, the object cannot be modified: any attribute assignment
    raises a ModificationError. Use "with_provenance" to obtain a tagged copy.
    """

    __slots__ = ["seqid", "start", "end", "id", "exons", "cds", "strand",
                 "parent", "provenance", "_finalized"]

    def __init__(self, seqid, start, end, tid, exons=None, cds=None, strand=None,
                 parent=None, provenance=None):

        object.__setattr__(self, "_finalized", False)
        try:
            start, end = int(start), int(end)
        except (TypeError, ValueError):
            raise InvalidTranscript("Invalid coordinates for {0}: {1}, {2}".format(tid, start, end))
        if start < 1 or start > end:
            raise InvalidTranscript("Invalid coordinates for {0}: {1}, {2}".format(tid, start, end))
        if tid is None:
            raise InvalidTranscript("Transcripts must have an identifier")
        if strand in (".", "?"):
            strand = None
        if strand not in ("+", "-", None):
            raise InvalidTranscript("Invalid strand for {0}: {1}".format(tid, strand))
        if provenance is not None and not isinstance(provenance, Provenance):
            provenance = Provenance(provenance)

        self.seqid = seqid
        self.start = start
        self.end = end
        self.id = str(tid)
        self.strand = strand
        self.parent = parent
        self.provenance = provenance

        if not exons:
            exons = [(start, end)]
        self.exons = _to_segments(exons, "exon")
        if self.exons[0][0] != self.start or self.exons[-1][1] != self.end:
            raise InvalidTranscript("The exons of {0} do not span its coordinates ({1}-{2}): {3}".format(
                self.id, self.start, self.end, self.exons))
        self.cds = self.__check_cds(cds or [])
        self._finalized = True

    def __check_cds(self, cds):

        try:
            cds = _to_segments(cds, "CDS")
        except InvalidTranscript as exc:
            raise InvalidCDS(str(exc))

        indices = []
        for segment in cds:
            found = [pos for pos, exon in enumerate(self.exons)
                     if exon[0] <= segment[0] and segment[1] <= exon[1]]
            if not found:
                raise InvalidCDS("CDS segment {0} of {1} is not contained in any exon".format(segment, self.id))
            indices.append(found[0])

        for (first, first_index), (second, second_index) in zip(zip(cds[:-1], indices[:-1]),
                                                                zip(cds[1:], indices[1:])):
            if (second_index != first_index + 1 or
                    first[1] != self.exons[first_index][1] or
                    second[0] != self.exons[second_index][0]):
                raise InvalidCDS("Untranslated sequence between the CDS segments {0} and {1} of {2}".format(
                    first, second, self.id))
        return cds

    def __setattr__(self, key, value):
        if getattr(self, "_finalized", False) is True:
            raise ModificationError("Annotation {0} cannot be modified ({1})".format(self.id, key))
        object.__setattr__(self, key, value)

    def __delattr__(self, item):
        raise ModificationError("Annotation {0} cannot be modified ({1})".format(self.id, item))

    def __reduce__(self):
        return (self.__class__, (self.seqid, self.start, self.end, self.id, self.exons, self.cds,
                                 self.strand, self.parent, self.provenance))

    def __repr__(self):
        return "AnnotationInterval({0}, {1}:{2}-{3}{4})".format(
            self.id, self.seqid, self.start, self.end, "" if self.strand is None else self.strand)

    def __str__(self):
        return "{0}\t{1}:{2}-{3}".format(self.id, self.seqid, self.start, self.end)

    def __len__(self):
        return self.end - self.start + 1

    @property
    def _key(self):
        return (self.seqid, self.start, self.end, self.id, self.exons, self.cds,
                self.strand, self.parent, self.provenance)

    def __eq__(self, other):
        if not isinstance(other, AnnotationInterval):
            return NotImplemented
        return self._key == other._key

    def __hash__(self):
        return hash((self.provenance, self.id, self.seqid, self.start, self.end))

    def with_provenance(self, provenance):
        """Return a copy of the annotation tagged with a different provenance."""
        return self.__class__(self.seqid, self.start, self.end, self.id,
                              exons=self.exons, cds=self.cds, strand=self.strand,
                              parent=self.parent, provenance=provenance)

    @property
    def key(self):
        """Identifier of the annotation within a comparison: (provenance, id)."""
        return self.provenance, self.id

    @property
    def introns(self):
        return tuple((first[1] + 1, second[0] - 1) for first, second in zip(self.exons[:-1], self.exons[1:]))

    @property
    def exon_num(self):
        return len(self.exons)

    @property
    def monoexonic(self):
        return len(self.exons) == 1

    @property
    def cdna_length(self):
        return sum(exon[1] - exon[0] + 1 for exon in self.exons)

    @property
    def is_coding(self):
        return len(self.cds) > 0

    @property
    def cds_length(self):
        return sum(segment[1] - segment[0] + 1 for segment in self.cds)

    @property
    def coding_start(self):
        """Leftmost coding base, regardless of strand. None for non-coding transcripts."""
        return self.cds[0][0] if self.cds else None

    @property
    def coding_end(self):
        """Rightmost coding base, regardless of strand. None for non-coding transcripts."""
        return self.cds[-1][1] if self.cds else None

    def __left_and_right_utrs(self):
        left, right = [], []
        if not self.cds:
            return left, right
        cstart, cend = self.coding_start, self.coding_end
        for start, end in self.exons:
            if start < cstart:
                left.append((start, min(end, cstart - 1)))
            if end > cend:
                right.append((max(start, cend + 1), end))
        return left, right

    @property
    def utrs(self):
        """Untranslated exonic segments of a coding transcript, in genomic order."""
        left, right = self.__left_and_right_utrs()
        return tuple(left + right)

    @property
    def five_utrs(self):
        """5' UTR segments. The strand decides which side of the CDS they lie on."""
        left, right = self.__left_and_right_utrs()
        return tuple(right) if self.strand == "-" else tuple(left)

    @property
    def three_utrs(self):
        """3' UTR segments. The strand decides which side of the CDS they lie on."""
        left, right = self.__left_and_right_utrs()
        return tuple(left) if self.strand == "-" else tuple(right)

    def as_dict(self):
        return {"seqid": self.seqid,
                "start": self.start,
                "end": self.end,
                "id": self.id,
                "exons": [list(_) for _ in self.exons],
                "cds": [list(_) for _ in self.cds],
                "strand": self.strand,
                "parent": self.parent,
                "provenance": None if self.provenance is None else self.provenance.value}

    @classmethod
    def from_dict(cls, state):
        return cls(state["seqid"], state["start"], state["end"], state["id"],
                   exons=state.get("exons"), cds=state.get("cds"), strand=state.get("strand"),
                   parent=state.get("parent"), provenance=state.get("provenance"))
