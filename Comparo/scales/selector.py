# coding: utf-8

"""
Selection of the best one-to-one pairing between the reference and the
prediction cliques of a locus.
"""

import collections
import itertools
import networkx as nx
from ..exceptions import LocusCapExceeded
from ..transcripts import Provenance, TranscriptClique
from .clique_pair import score


__author__ = 'Luca Venturini'


Selection = collections.namedtuple("Selection", ["pairs", "unmatched_refr", "unmatched_pred"])


def _matching_weight(weights, refr_indices, pred_indices):

    """Weight of the maximum weight matching restricted to the given indices."""

    graph = nx.Graph()
    for i, j in itertools.product(refr_indices, pred_indices):
        if weights[i][j] > 0:
            graph.add_edge(("r", i), ("p", j), weight=weights[i][j])
    if graph.number_of_edges() == 0:
        return 0
    matching = nx.max_weight_matching(graph)
    return sum(graph.edges[edge]["weight"] for edge in matching)


def best_matching(weights, num_refr, num_pred, tolerance=1e-9):

    """
    Maximum weight one-to-one matching between num_refr reference items and
    num_pred prediction items, where weights[i][j] is the weight of the pair (i, j).
    Pairs with a weight of 0 are never matched.
    Among the matchings with maximum total weight, the one pairing the earliest
    items is returned: reference items are considered in order, and each is paired
    with the earliest prediction item which still allows to reach the optimum.

    :returns: the sorted list of matched (i, j) index pairs.
    """

    refr_left = list(range(num_refr))
    pred_left = list(range(num_pred))
    remaining = _matching_weight(weights, refr_left, pred_left)
    matching = []
    for i in range(num_refr):
        refr_left.remove(i)
        for j in pred_left:
            if weights[i][j] <= 0:
                continue
            rest = [_ for _ in pred_left if _ != j]
            candidate = weights[i][j] + _matching_weight(weights, refr_left, rest)
            if abs(candidate - remaining) <= tolerance:
                matching.append((i, j))
                pred_left = rest
                remaining -= weights[i][j]
                break
    return matching


def check_caps(locus, refr_cliques, pred_cliques, max_transcripts=0, max_comparisons=0):

    """
    Verify that a locus can be compared.
    :returns: None, or a LocusCapExceeded describing the cap which was exceeded.
    """

    if max_transcripts > 0:
        for name, members in (("reference transcripts", locus.refr_transcripts),
                              ("prediction transcripts", locus.pred_transcripts)):
            if len(members) > max_transcripts:
                return LocusCapExceeded(locus.id, name, max_transcripts, len(members))
    comparisons = (sum(1 for _ in refr_cliques if not _.is_empty) *
                   sum(1 for _ in pred_cliques if not _.is_empty))
    if max_comparisons > 0 and comparisons > max_comparisons:
        return LocusCapExceeded(locus.id, "comparisons", max_comparisons, comparisons)
    return None


def select(refr_cliques, pred_cliques, tolerance=1e-9, logger=None):

    """
    Score every candidate pair between non-empty reference and prediction cliques
    and select the best one-to-one pairing, ie the one maximising the total overall identity.
    Cliques whose ranges do not overlap are never paired. With a single non-empty clique
    on each side the pairing is forced.

    :returns: a Selection with the selected pairs (in reference order), the reference
    cliques without a match and the prediction cliques without a match.
    Empty cliques are never reported as unmatched. When one side has no annotation,
    each clique of the other side is paired with an empty clique, which does not
    need a comparison.
    """

    refr = [_ for _ in refr_cliques if not _.is_empty]
    pred = [_ for _ in pred_cliques if not _.is_empty]
    if not refr or not pred:
        # Unique annotations: paired with the empty clique, never scored
        pairs = [score(clique, TranscriptClique.empty(Provenance.PREDICTION, clique.seqid)) for clique in refr]
        pairs.extend(score(TranscriptClique.empty(Provenance.REFERENCE, clique.seqid), clique) for clique in pred)
        return Selection(pairs, refr, pred)

    if len(refr) == 1 and len(pred) == 1:
        return Selection([score(refr[0], pred[0], tolerance=tolerance)], [], [])

    pairs = dict()
    weights = [[0] * len(pred) for _ in refr]
    for (i, refr_clique), (j, pred_clique) in itertools.product(enumerate(refr), enumerate(pred)):
        if not refr_clique.overlaps(pred_clique):
            continue
        pair = score(refr_clique, pred_clique, tolerance=tolerance)
        pairs[(i, j)] = pair
        weights[i][j] = pair.identity or 0

    if logger is not None:
        logger.debug("Scored %d candidate pairs for %d reference and %d prediction cliques",
                     len(pairs), len(refr), len(pred))
    matching = best_matching(weights, len(refr), len(pred), tolerance=tolerance)
    matched_refr = set(i for i, _ in matching)
    matched_pred = set(j for _, j in matching)
    return Selection([pairs[key] for key in matching],
                     [clique for i, clique in enumerate(refr) if i not in matched_refr],
                     [clique for j, clique in enumerate(pred) if j not in matched_pred])
