# coding: utf-8

"""
This module scores a reference clique against a prediction clique.
Each clique is summarised by a model vector, which assigns to every position
of the union range of the two cliques one of the following codes:

- G: outside of any transcript
- I: intron
- N: exon of a non-coding transcript
- T: 3' UTR
- F: 5' UTR
- C: CDS

When members disagree on a position, the code on the right of the list wins.
All statistics are derived from the comparison of the two vectors.
"""

import enum
import numpy as np
from ..transcripts.clique import TranscriptClique
from .statistics import ComparisonStats, NucleotideStats, StructuralStats


__author__ = 'Luca Venturini'


CODES = "GINTFC"
GENOMIC, INTRON, NONCODING, THREE_UTR, FIVE_UTR, CDS = range(len(CODES))
UTR_CODES = (NONCODING, THREE_UTR, FIVE_UTR)
_letters = np.array(list(CODES))


class ClassCode(enum.IntEnum):
    """Classification of a scored clique pair. Lower values are better matches."""

    PERFECT_MATCH = 0
    MISLABELED = 1
    CDS_MATCH = 2
    EXON_MATCH = 3
    UTR_MATCH = 4
    NON_MATCH = 5

    @property
    def description(self):
        return {ClassCode.PERFECT_MATCH: "perfect matches",
                ClassCode.MISLABELED: "perfect matches with mislabeled UTRs",
                ClassCode.CDS_MATCH: "CDS structure matches",
                ClassCode.EXON_MATCH: "exon structure matches",
                ClassCode.UTR_MATCH: "UTR structure matches",
                ClassCode.NON_MATCH: "non-matches"}[self]


def model_vector(clique: TranscriptClique, start, end):

    """
    Compute the model vector of a clique over the closed range [start, end].
    :rtype: numpy.ndarray
    """

    vector = np.zeros(end - start + 1, dtype=np.uint8)

    def paint(segments, code):
        for seg_start, seg_end in segments:
            left, right = max(seg_start, start) - start, min(seg_end, end) - start
            if left <= right:
                view = vector[left:right + 1]
                np.maximum(view, code, out=view)

    for member in clique:
        paint([(member.start, member.end)], INTRON)
        if member.is_coding:
            paint(member.three_utrs, THREE_UTR)
            paint(member.five_utrs, FIVE_UTR)
            paint(member.cds, CDS)
        else:
            paint(member.exons, NONCODING)
    return vector


def _runs(mask, offset):
    """Maximal runs of True values in a boolean array, as closed genomic intervals."""
    padded = np.concatenate(([False], mask, [False]))
    changes = np.flatnonzero(padded[1:] != padded[:-1])
    return [(int(run_start) + offset, int(run_end) - 1 + offset)
            for run_start, run_end in zip(changes[::2], changes[1::2])]


def cds_segments(vector, offset):
    return _runs(vector == CDS, offset)


def exon_segments(vector, offset):
    return _runs(vector >= NONCODING, offset)


def utr_segments(vector, offset, codes=UTR_CODES):
    """UTR runs, labelled with their code letter."""
    return [(CODES[code], run_start, run_end) for code in codes
            for run_start, run_end in _runs(vector == code, offset)]


class CliquePair:

    """
    A reference clique paired with a prediction clique. Only pairs
    where both cliques are non-empty are scored and classified;
    the others represent unique annotations.
    """

    def __init__(self, refr_clique, pred_clique):
        self.refr_clique = refr_clique
        self.pred_clique = pred_clique
        starts = [_.start for _ in (refr_clique, pred_clique) if not _.is_empty]
        ends = [_.end for _ in (refr_clique, pred_clique) if not _.is_empty]
        self.start = min(starts) if starts else None
        self.end = max(ends) if ends else None
        self.refr_model = None
        self.pred_model = None
        self.stats = None
        self.classification = None

    def __repr__(self):
        return "CliquePair({0}, {1}, {2})".format(
            self.refr_clique.id, self.pred_clique.id,
            None if self.classification is None else self.classification.name)

    @property
    def needs_comparison(self):
        return not self.refr_clique.is_empty and not self.pred_clique.is_empty

    @property
    def is_simple(self):
        """True if each clique contains a single transcript."""
        return len(self.refr_clique) == 1 and len(self.pred_clique) == 1

    @property
    def has_utrs(self):
        return any(member.utrs for clique in (self.refr_clique, self.pred_clique) for member in clique)

    @property
    def length(self):
        return 0 if self.start is None else self.end - self.start + 1

    @property
    def refr_vector(self):
        return None if self.refr_model is None else "".join(_letters[self.refr_model])

    @property
    def pred_vector(self):
        return None if self.pred_model is None else "".join(_letters[self.pred_model])

    @property
    def identity(self):
        return None if self.stats is None else self.stats.overall_identity

    def build_models(self):
        if self.start is None:
            return
        self.refr_model = model_vector(self.refr_clique, self.start, self.end)
        self.pred_model = model_vector(self.pred_clique, self.start, self.end)

    def compare(self):

        """Compute the statistics of the pair from the two model vectors."""

        refr, pred, offset = self.refr_model, self.pred_model, self.start
        utr_codes = np.array(UTR_CODES, dtype=np.uint8)
        self.stats = ComparisonStats(
            cds_struct=StructuralStats.from_segments(cds_segments(refr, offset), cds_segments(pred, offset)),
            exon_struct=StructuralStats.from_segments(exon_segments(refr, offset), exon_segments(pred, offset)),
            utr_struct=StructuralStats.from_segments(utr_segments(refr, offset), utr_segments(pred, offset)),
            cds_nuc=NucleotideStats.from_masks(refr == CDS, pred == CDS),
            utr_nuc=NucleotideStats.from_masks(np.isin(refr, utr_codes), np.isin(pred, utr_codes)),
            overall_matches=int((refr == pred).sum()),
            overall_length=int(refr.shape[0]))

    def utrs_swapped(self):
        """True if the 5' UTRs of the reference are the 3' UTRs of the prediction and vice versa."""
        offset = self.start

        def positions(vector, code):
            return [(run_start, run_end) for _, run_start, run_end in utr_segments(vector, offset, (code,))]

        return (positions(self.refr_model, FIVE_UTR) == positions(self.pred_model, THREE_UTR) and
                positions(self.refr_model, THREE_UTR) == positions(self.pred_model, FIVE_UTR))

    def characteristics(self):
        """Descriptive values of the pair, used for the per-class summaries."""
        return {"total_length": self.length,
                "refr_exon_count": self.refr_clique.exon_num,
                "pred_exon_count": self.pred_clique.exon_num,
                "refr_cds_length": self.refr_clique.cds_length // 3,
                "pred_cds_length": self.pred_clique.cds_length // 3}

    def as_row(self):

        """Flat dictionary describing the pair, for tabular outputs."""

        row = {"seqid": self.refr_clique.seqid or self.pred_clique.seqid,
               "start": self.start,
               "end": self.end,
               "refr_ids": self.refr_clique.id,
               "pred_ids": self.pred_clique.id,
               "class_code": "-" if self.classification is None else self.classification.name}
        stats = self.stats
        for key, value in (
                ("cds_struct_sn", None if stats is None else stats.cds_struct.sensitivity),
                ("cds_struct_sp", None if stats is None else stats.cds_struct.specificity),
                ("cds_struct_f1", None if stats is None else stats.cds_struct.f1),
                ("exon_struct_sn", None if stats is None else stats.exon_struct.sensitivity),
                ("exon_struct_sp", None if stats is None else stats.exon_struct.specificity),
                ("exon_struct_f1", None if stats is None else stats.exon_struct.f1),
                ("utr_struct_sn", None if stats is None else stats.utr_struct.sensitivity),
                ("utr_struct_sp", None if stats is None else stats.utr_struct.specificity),
                ("utr_struct_f1", None if stats is None else stats.utr_struct.f1),
                ("cds_nuc_mc", None if stats is None else stats.cds_nuc.matching_coefficient),
                ("cds_nuc_cc", None if stats is None else stats.cds_nuc.correlation_coefficient),
                ("utr_nuc_mc", None if stats is None else stats.utr_nuc.matching_coefficient),
                ("utr_nuc_cc", None if stats is None else stats.utr_nuc.correlation_coefficient),
                ("overall_identity", None if stats is None else stats.overall_identity)):
            row[key] = "NA" if value is None else round(value, 4)
        return row


def classify(pair: CliquePair, tolerance=1e-9):

    """
    Classify a scored pair. The rules are evaluated in order, the first one matching wins:

    1. PERFECT_MATCH: overall identity is 1 (within the tolerance)
    2. MISLABELED: perfect CDS nucleotides and exon structure, imperfect UTR structure explained
       by a swap of the 5' and 3' UTRs
    3. CDS_MATCH: perfect CDS structure, imperfect exon structure
    4. EXON_MATCH: perfect exon structure, imperfect CDS structure
    5. UTR_MATCH: UTRs annotated, perfect UTR structure, imperfect CDS and exon structure
    6. NON_MATCH

    :returns: a ClassCode, or None if the pair does not need to be compared.
    """

    if not pair.needs_comparison:
        return None
    stats = pair.stats
    if abs(stats.overall_identity - 1) < tolerance:
        return ClassCode.PERFECT_MATCH
    if (stats.cds_nuc.perfect and stats.exon_struct.perfect and not stats.utr_struct.perfect and
            pair.utrs_swapped()):
        return ClassCode.MISLABELED
    if stats.cds_struct.perfect and not stats.exon_struct.perfect:
        return ClassCode.CDS_MATCH
    if stats.exon_struct.perfect and not stats.cds_struct.perfect:
        return ClassCode.EXON_MATCH
    if (pair.has_utrs and stats.utr_struct.perfect and
            not stats.cds_struct.perfect and not stats.exon_struct.perfect):
        return ClassCode.UTR_MATCH
    return ClassCode.NON_MATCH


def score(refr_clique: TranscriptClique, pred_clique: TranscriptClique, tolerance=1e-9) -> CliquePair:

    """
    Create and score the pair of a reference and a prediction clique.
    Pairs with an empty clique get their model vectors but no statistics.
    """

    pair = CliquePair(refr_clique, pred_clique)
    pair.build_models()
    if pair.needs_comparison:
        pair.compare()
        pair.classification = classify(pair, tolerance=tolerance)
    return pair
