# coding: utf-8

"""
A Locus is a maximal group of overlapping annotations on a single sequence.
In dual-source mode it keeps track of the provenance of each of its members,
and after the comparison it carries the results for the locus.
"""

from ..exceptions import NotInLocusError
from ..transcripts.annotation import AnnotationInterval, Provenance
from ..utilities import overlap


class Locus:

    """
    Container of overlapping transcripts. The range of the locus is the union of the
    ranges of its members. The comparison stage attaches its results to the
    "refr_cliques", "pred_cliques", "pairs", "unique_refr_cliques", "unique_pred_cliques"
    and "skipped" attributes.
    """

    def __init__(self, seqid, transcripts=None):
        self.seqid = seqid
        self.start, self.end = None, None
        self.transcripts = []
        self.refr_transcripts = []
        self.pred_transcripts = []
        self.__keys = set()
        self.refr_cliques = []
        self.pred_cliques = []
        self.num_comparisons = 0
        self.pairs = []
        self.unique_refr_cliques = []
        self.unique_pred_cliques = []
        self.skipped = None
        if transcripts is not None:
            for transcript in transcripts:
                self.add(transcript, check_in_locus=False)

    def __repr__(self):
        return "Locus({0}, {1} transcripts)".format(self.id, len(self.transcripts))

    def __len__(self):
        return len(self.transcripts)

    def __iter__(self):
        return iter(self.transcripts)

    def __contains__(self, transcript):
        return transcript.key in self.__keys

    def in_locus(self, transcript):
        """True if the transcript shares at least one base with the current locus range."""
        if self.start is None:
            return True
        return (transcript.seqid == self.seqid and
                overlap((self.start, self.end), (transcript.start, transcript.end)) > 0)

    def add(self, transcript: AnnotationInterval, provenance=None, check_in_locus=True):

        """
        Add a transcript to the locus, expanding its range.

        :param transcript: the transcript to add
        :param provenance: optional provenance; if not provided, the one of the transcript is used.
        :param check_in_locus: flag. If set, the transcript must overlap the current range.
        :raises NotInLocusError: if the transcript is on another sequence, does not overlap
        the locus while check_in_locus is set, or is already present.
        """

        if transcript.seqid != self.seqid:
            raise NotInLocusError("{0} is on {1}, not on {2}".format(transcript.id, transcript.seqid, self.seqid))
        if check_in_locus is True and not self.in_locus(transcript):
            raise NotInLocusError("{0} does not overlap {1}".format(transcript.id, self.id))
        if provenance is None:
            provenance = transcript.provenance
        elif transcript.provenance != provenance:
            transcript = transcript.with_provenance(provenance)
        if transcript.key in self.__keys:
            raise NotInLocusError("{0} is already in {1}".format(transcript.id, self.id))

        self.__keys.add(transcript.key)
        self.transcripts.append(transcript)
        if provenance == Provenance.REFERENCE:
            self.refr_transcripts.append(transcript)
        elif provenance == Provenance.PREDICTION:
            self.pred_transcripts.append(transcript)

        if self.start is None:
            self.start, self.end = transcript.start, transcript.end
        else:
            self.start = min(self.start, transcript.start)
            self.end = max(self.end, transcript.end)

    @property
    def id(self):
        return "{0}_{1}-{2}".format(self.seqid, self.start, self.end)

    @property
    def length(self):
        return 0 if self.start is None else self.end - self.start + 1

    @property
    def refr_gene_ids(self):
        return sorted(set(_.parent or _.id for _ in self.refr_transcripts))

    @property
    def pred_gene_ids(self):
        return sorted(set(_.parent or _.id for _ in self.pred_transcripts))

    def members(self, provenance=None):
        """Members of the locus with the given provenance; all of them if None."""
        if provenance == Provenance.REFERENCE:
            return list(self.refr_transcripts)
        elif provenance == Provenance.PREDICTION:
            return list(self.pred_transcripts)
        return list(self.transcripts)

    def as_dict(self):
        return {"id": self.id,
                "seqid": self.seqid,
                "start": self.start,
                "end": self.end,
                "transcripts": [_.id for _ in self.transcripts],
                "refr_transcripts": [_.id for _ in self.refr_transcripts],
                "pred_transcripts": [_.id for _ in self.pred_transcripts],
                "skipped": None if self.skipped is None else str(self.skipped)}
