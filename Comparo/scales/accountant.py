# coding: utf-8

"""
This class is used to store all the data calculated in the comparison of the loci,
in order to produce the final summary statistics.
"""

import collections
from ..loci.locus import Locus
from .clique_pair import ClassCode
from .statistics import ComparisonStats


class ClassDescription:

    """Sums of the characteristics of the pairs belonging to a classification."""

    __slots__ = ["transcript_count", "total_length",
                 "refr_exon_count", "pred_exon_count",
                 "refr_cds_length", "pred_cds_length"]

    def __init__(self):
        for key in self.__slots__:
            setattr(self, key, 0)

    def record(self, pair):
        self.transcript_count += 1
        for key, value in pair.characteristics().items():
            setattr(self, key, getattr(self, key) + value)

    def __iadd__(self, other):
        for key in self.__slots__:
            setattr(self, key, getattr(self, key) + getattr(other, key))
        return self

    def __getstate__(self):
        return dict((key, getattr(self, key)) for key in self.__slots__)

    def __setstate__(self, state):
        for key, value in state.items():
            setattr(self, key, value)

    def as_dict(self):
        state = self.__getstate__()
        for key in self.__slots__[1:]:
            state["average_" + key] = (None if self.transcript_count == 0
                                       else getattr(self, key) / self.transcript_count)
        return state


# pylint: disable=too-many-instance-attributes
class Accountant:

    """This class stores the raw counts of the comparisons. Accountants
    can be merged in any order; the derived ratios are only calculated
    from the summed counts, when the summary is requested."""

    def __init__(self):
        self.stats = ComparisonStats()
        self.counts = collections.Counter()
        self.class_counts = collections.Counter()
        self.descriptions = dict((code, ClassDescription()) for code in ClassCode)
        self.skipped = []

    def fold(self, locus: Locus):

        """
        Add the results of a compared locus to the running totals.
        Only the selected pairs which needed a comparison contribute to the statistics.
        """

        self.counts["num_loci"] += 1
        self.counts["refr_genes"] += len(locus.refr_gene_ids)
        self.counts["pred_genes"] += len(locus.pred_gene_ids)
        self.counts["refr_transcripts"] += len(locus.refr_transcripts)
        self.counts["pred_transcripts"] += len(locus.pred_transcripts)
        if not locus.pred_transcripts:
            self.counts["unique_refr"] += 1
        elif not locus.refr_transcripts:
            self.counts["unique_pred"] += 1

        if locus.skipped is not None:
            self.skipped.append(str(locus.skipped))
            return

        self.counts["unmatched_refr_cliques"] += len(locus.unique_refr_cliques)
        self.counts["unmatched_pred_cliques"] += len(locus.unique_pred_cliques)
        for pair in locus.pairs:
            if not pair.needs_comparison:
                continue
            self.counts["num_comparisons"] += 1
            self.stats += pair.stats
            self.class_counts[pair.classification] += 1
            self.descriptions[pair.classification].record(pair)

    def merge(self, other):
        """Add the totals of another accountant to this one."""
        self.stats += other.stats
        self.counts.update(other.counts)
        self.class_counts.update(other.class_counts)
        for code in ClassCode:
            self.descriptions[code] += other.descriptions[code]
        self.skipped.extend(other.skipped)
        return self

    def __iadd__(self, other):
        return self.merge(other)

    def as_dict(self):

        counts = dict((key, self.counts[key]) for key in (
            "num_loci", "unique_refr", "unique_pred",
            "refr_genes", "refr_transcripts", "pred_genes", "pred_transcripts",
            "num_comparisons", "unmatched_refr_cliques", "unmatched_pred_cliques"))
        counts["skipped_loci"] = len(self.skipped)
        classes = dict()
        for code in ClassCode:
            classes[code.name.lower()] = {
                "description": code.description,
                "count": self.class_counts[code],
                "fraction": (None if counts["num_comparisons"] == 0
                             else self.class_counts[code] / counts["num_comparisons"]),
                "characteristics": self.descriptions[code].as_dict()}
        return {"counts": counts,
                "classifications": classes,
                "statistics": self.stats.as_dict(),
                "skipped": list(self.skipped)}
