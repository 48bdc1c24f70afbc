# coding: utf-8

"""
Containers for the raw counts of a comparison. Derived ratios (sensitivity,
specificity, F1, edit distance, ...) are always computed on access from the
raw counts, so that containers can be summed without any bias; a ratio whose
denominator is 0 is reported as None ("undefined").
"""

import math
from ..utilities import calc_f1, safe_ratio


class StructuralStats:

    """Counts of the segments of a region type (CDS, exon, UTR) which are
    present in both annotations (correct), only in the reference (missing)
    or only in the prediction (wrong)."""

    __slots__ = ["correct", "missing", "wrong"]

    def __init__(self, correct=0, missing=0, wrong=0):
        self.correct = correct
        self.missing = missing
        self.wrong = wrong

    @classmethod
    def from_segments(cls, refr_segments, pred_segments):
        refr_segments, pred_segments = set(refr_segments), set(pred_segments)
        return cls(correct=len(refr_segments & pred_segments),
                   missing=len(refr_segments - pred_segments),
                   wrong=len(pred_segments - refr_segments))

    def __iadd__(self, other):
        self.correct += other.correct
        self.missing += other.missing
        self.wrong += other.wrong
        return self

    def __add__(self, other):
        new = self.__class__(self.correct, self.missing, self.wrong)
        new += other
        return new

    def __eq__(self, other):
        if not isinstance(other, StructuralStats):
            return NotImplemented
        return (self.correct, self.missing, self.wrong) == (other.correct, other.missing, other.wrong)

    def __repr__(self):
        return "StructuralStats(correct={0}, missing={1}, wrong={2})".format(self.correct, self.missing, self.wrong)

    def __getstate__(self):
        return self.correct, self.missing, self.wrong

    def __setstate__(self, state):
        self.correct, self.missing, self.wrong = state

    @property
    def perfect(self):
        return self.missing == 0 and self.wrong == 0

    @property
    def sensitivity(self):
        return safe_ratio(self.correct, self.correct + self.missing)

    @property
    def specificity(self):
        return safe_ratio(self.correct, self.correct + self.wrong)

    @property
    def f1(self):
        return calc_f1(self.sensitivity, self.specificity)

    @property
    def edit_distance(self):
        f1 = self.f1
        return None if f1 is None else 1 - f1

    def as_dict(self):
        return {"correct": self.correct,
                "missing": self.missing,
                "wrong": self.wrong,
                "sensitivity": self.sensitivity,
                "specificity": self.specificity,
                "f1": self.f1,
                "edit_distance": self.edit_distance}


class NucleotideStats:

    """2x2 confusion matrix (reference has the region x prediction has the region)
    over the positions of a comparison."""

    __slots__ = ["true_positives", "false_negatives", "false_positives", "true_negatives"]

    def __init__(self, true_positives=0, false_negatives=0, false_positives=0, true_negatives=0):
        self.true_positives = true_positives
        self.false_negatives = false_negatives
        self.false_positives = false_positives
        self.true_negatives = true_negatives

    @classmethod
    def from_masks(cls, refr_mask, pred_mask):
        """Build the matrix from two boolean numpy arrays of the same length."""
        return cls(true_positives=int((refr_mask & pred_mask).sum()),
                   false_negatives=int((refr_mask & ~pred_mask).sum()),
                   false_positives=int((~refr_mask & pred_mask).sum()),
                   true_negatives=int((~refr_mask & ~pred_mask).sum()))

    def __iadd__(self, other):
        self.true_positives += other.true_positives
        self.false_negatives += other.false_negatives
        self.false_positives += other.false_positives
        self.true_negatives += other.true_negatives
        return self

    def __add__(self, other):
        new = self.__class__(*self.__getstate__())
        new += other
        return new

    def __eq__(self, other):
        if not isinstance(other, NucleotideStats):
            return NotImplemented
        return self.__getstate__() == other.__getstate__()

    def __repr__(self):
        return "NucleotideStats(tp={0}, fn={1}, fp={2}, tn={3})".format(*self.__getstate__())

    def __getstate__(self):
        return self.true_positives, self.false_negatives, self.false_positives, self.true_negatives

    def __setstate__(self, state):
        self.true_positives, self.false_negatives, self.false_positives, self.true_negatives = state

    @property
    def total(self):
        return sum(self.__getstate__())

    @property
    def perfect(self):
        return self.false_negatives == 0 and self.false_positives == 0

    @property
    def matching_coefficient(self):
        return safe_ratio(self.true_positives + self.true_negatives, self.total)

    @property
    def correlation_coefficient(self):
        """Matthews correlation coefficient; 0 when undefined."""
        tp, fn, fp, tn = self.__getstate__()
        denominator = (tp + fp) * (tp + fn) * (tn + fp) * (tn + fn)
        if denominator == 0:
            return 0.0
        return (tp * tn - fp * fn) / math.sqrt(denominator)

    @property
    def sensitivity(self):
        return safe_ratio(self.true_positives, self.true_positives + self.false_negatives)

    @property
    def specificity(self):
        return safe_ratio(self.true_positives, self.true_positives + self.false_positives)

    @property
    def f1(self):
        return calc_f1(self.sensitivity, self.specificity)

    @property
    def edit_distance(self):
        f1 = self.f1
        return None if f1 is None else 1 - f1

    def as_dict(self):
        return {"true_positives": self.true_positives,
                "false_negatives": self.false_negatives,
                "false_positives": self.false_positives,
                "true_negatives": self.true_negatives,
                "matching_coefficient": self.matching_coefficient,
                "correlation_coefficient": self.correlation_coefficient,
                "sensitivity": self.sensitivity,
                "specificity": self.specificity,
                "f1": self.f1,
                "edit_distance": self.edit_distance}


class ComparisonStats:

    """All the statistics of a comparison: structural counts for CDS, exons and UTRs,
    nucleotide confusion matrices for CDS and UTRs, and the overall identity."""

    __slots__ = ["cds_struct", "exon_struct", "utr_struct",
                 "cds_nuc", "utr_nuc",
                 "overall_matches", "overall_length"]

    def __init__(self, cds_struct=None, exon_struct=None, utr_struct=None,
                 cds_nuc=None, utr_nuc=None, overall_matches=0, overall_length=0):
        self.cds_struct = cds_struct or StructuralStats()
        self.exon_struct = exon_struct or StructuralStats()
        self.utr_struct = utr_struct or StructuralStats()
        self.cds_nuc = cds_nuc or NucleotideStats()
        self.utr_nuc = utr_nuc or NucleotideStats()
        self.overall_matches = overall_matches
        self.overall_length = overall_length

    def __iadd__(self, other):
        self.cds_struct += other.cds_struct
        self.exon_struct += other.exon_struct
        self.utr_struct += other.utr_struct
        self.cds_nuc += other.cds_nuc
        self.utr_nuc += other.utr_nuc
        self.overall_matches += other.overall_matches
        self.overall_length += other.overall_length
        return self

    def __add__(self, other):
        new = self.__class__()
        new += self
        new += other
        return new

    def __eq__(self, other):
        if not isinstance(other, ComparisonStats):
            return NotImplemented
        return all(getattr(self, key) == getattr(other, key) for key in self.__slots__)

    def __getstate__(self):
        return dict((key, getattr(self, key)) for key in self.__slots__)

    def __setstate__(self, state):
        for key, value in state.items():
            setattr(self, key, value)

    @property
    def overall_identity(self):
        return safe_ratio(self.overall_matches, self.overall_length)

    def as_dict(self):
        return {"cds_structure": self.cds_struct.as_dict(),
                "exon_structure": self.exon_struct.as_dict(),
                "utr_structure": self.utr_struct.as_dict(),
                "cds_nucleotides": self.cds_nuc.as_dict(),
                "utr_nucleotides": self.utr_nuc.as_dict(),
                "overall_matches": self.overall_matches,
                "overall_length": self.overall_length,
                "overall_identity": self.overall_identity}
