# coding: utf-8

"""
Functions to group the annotations of a sequence into loci. Starting from a seed
annotation, a locus is repeatedly expanded with every unassigned annotation
overlapping its current range, until an expansion round adds nothing.
Each annotation is moved exactly once from the unassigned pool into a locus,
so the loci of a sequence partition its annotations.
"""

import collections
from ..transcripts.annotation import Provenance
from ..utilities.log_utils import create_null_logger
from .locus import Locus


__author__ = 'Luca Venturini'


def _fill_pool(seqid, sources):

    """Collect the annotations of every source into an ordered pool
    keyed by (provenance, identifier)."""

    pool = collections.OrderedDict()
    for provenance, source in sources:
        for transcript in source.transcripts_for_sequence(seqid):
            if provenance is not None and transcript.provenance != provenance:
                transcript = transcript.with_provenance(provenance)
            pool[(provenance, transcript.id)] = transcript
    return pool


def _expand(locus, query_sources, pool):

    """
    Expand the locus to a fixed point, querying the sources in order at every round.
    :returns: the number of rounds performed, the last of which added nothing.
    """

    rounds = 0
    while True:
        rounds += 1
        added = 0
        for provenance, source in query_sources:
            for hit in source.transcripts_overlapping(locus.seqid, locus.start, locus.end):
                member = pool.pop((provenance, hit.id), None)
                if member is None:
                    continue
                locus.add(member)
                added += 1
        if added == 0:
            return rounds


def _build(seqid, plan, sources, logger):

    pool = _fill_pool(seqid, sources)
    logger.debug("%d annotations to assign on %s", len(pool), seqid)
    loci = []
    for seed_provenance, query_sources in plan:
        for key in [key for key in pool if key[0] == seed_provenance]:
            if key not in pool:
                continue
            locus = Locus(seqid)
            locus.add(pool.pop(key))
            rounds = _expand(locus, query_sources, pool)
            logger.debug("Locus %s (%d transcripts) completed after %d rounds",
                         locus.id, len(locus), rounds)
            loci.append(locus)
    assert len(pool) == 0, pool
    return loci


def build_loci(seqid, source, logger=None):

    """
    Group the annotations of a single source on a sequence into loci.

    :param seqid: the sequence to analyse
    :param source: an AnnotationSource
    :param logger: optional logger
    :returns: the list of loci, in the order of their seed annotations.
    A source lacking the sequence yields no loci.
    """

    if logger is None:
        logger = create_null_logger()
    if not source.has_sequence(seqid):
        return []
    sources = [(None, source)]
    return _build(seqid, [(None, sources)], sources, logger)


def build_loci_pairwise(seqid, refr_source, pred_source, logger=None):

    """
    Group the annotations of a reference and a prediction source on a sequence into loci.
    Loci are first seeded from the reference annotations, expanding with both sources
    (reference first); any prediction annotation left unassigned then seeds a
    prediction-only locus. Every member is tagged with the provenance of its source.

    :param seqid: the sequence to analyse
    :param refr_source: the reference AnnotationSource
    :param pred_source: the prediction AnnotationSource
    :param logger: optional logger
    :rtype: list[Locus]
    """

    if logger is None:
        logger = create_null_logger()
    sources = [(provenance, source) for provenance, source in
               ((Provenance.REFERENCE, refr_source), (Provenance.PREDICTION, pred_source))
               if source.has_sequence(seqid)]
    if not sources:
        return []
    pred_only = [(provenance, source) for provenance, source in sources if provenance == Provenance.PREDICTION]
    plan = [(Provenance.REFERENCE, sources), (Provenance.PREDICTION, pred_only)]
    return _build(seqid, plan, sources, logger)
