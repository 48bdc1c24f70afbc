# coding: utf-8

"""
Enumeration of the transcript cliques of a locus.
"""

from ..loci.annotation_index import AnnotationIndex
from ..loci.builder import build_loci
from ..transcripts.clique import TranscriptClique


def cliques_for(locus, provenance, logger=None):

    """
    Partition the transcripts of a locus with the given provenance into cliques,
    ie groups closed under overlap. The grouping uses the same fixed-point expansion
    as the construction of the loci, restricted to the members of the locus.

    :param locus: the Locus to analyse
    :param provenance: a Provenance (None to use all the members of the locus)
    :param logger: optional logger
    :returns: the list of cliques, in positional order. If the locus has no transcript
    with the requested provenance, a list with a single empty clique.
    """

    members = locus.members(provenance)
    if not members:
        return [TranscriptClique.empty(provenance, seqid=locus.seqid)]
    index = AnnotationIndex(members)
    return [TranscriptClique(component.transcripts, provenance=provenance, seqid=locus.seqid)
            for component in build_loci(locus.seqid, index, logger=logger)]
