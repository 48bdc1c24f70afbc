# coding: utf-8

"""
Functions to load the transcripts of a GFF3 file into an AnnotationIndex.
Transcripts are recognised from their features (mRNA, ncRNA, transcript, ...);
their exons are either declared explicitly or, if missing, derived from the
union of their CDS and UTR segments.
"""

import collections
from ..exceptions import InvalidTranscript, RedundantNames
from ..loci.annotation_index import AnnotationIndex
from ..parsers import to_gff
from ..parsers.GFF import GFF3
from ..transcripts.annotation import AnnotationInterval
from ..utilities import merge_ranges
from ..utilities.log_utils import create_null_logger


__author__ = 'Luca Venturini'


def _new_record(row):
    return {"seqid": row.chrom,
            "start": row.start,
            "end": row.end,
            "strand": row.strand,
            "gene": row.parent[0] if row.parent else None,
            "exons": [],
            "cds": [],
            "utrs": []}


def load_from_gff(gff_handle: GFF3, logger=None, provenance=None, index=None):

    """
    Method to load the transcripts from a GFF3 file.

    :param gff_handle: the parser for the GFF3 file.
    :param logger: a logger to be used to pass messages
    :param provenance: optional provenance to tag the transcripts with
    :param index: optional AnnotationIndex to add the transcripts to.
    :returns: the AnnotationIndex
    :raises RedundantNames: if a transcript ID is present more than once.
    """

    if logger is None:
        logger = create_null_logger()
    if index is None:
        index = AnnotationIndex()

    records = collections.OrderedDict()
    orphans = collections.Counter()

    for row in gff_handle:
        if row.header is True:
            continue
        if row.is_transcript:
            if row.id is None:
                logger.warning("Transcript without an ID at %s:%s-%s, skipping it", row.chrom, row.start, row.end)
                continue
            if row.id in records:
                raise RedundantNames("Transcript {0} is present multiple times in {1}".format(
                    row.id, gff_handle.name))
            records[row.id] = _new_record(row)
        elif row.is_exon or row.is_cds or row.is_utr:
            for parent in row.parent:
                if parent not in records:
                    orphans[row.feature] += 1
                    continue
                if row.is_exon:
                    key = "exons"
                elif row.is_cds:
                    key = "cds"
                else:
                    key = "utrs"
                records[parent][key].append((row.start, row.end))

    for feature, count in orphans.items():
        logger.warning("%d %s features without a transcript parent have been ignored in %s",
                       count, feature, gff_handle.name)

    discarded = 0
    for tid, record in records.items():
        if record["exons"]:
            exons = merge_ranges(record["exons"])
        elif record["cds"] or record["utrs"]:
            exons = merge_ranges(record["cds"] + record["utrs"], adjacent=True)
        else:
            exons = [(record["start"], record["end"])]
        if (exons[0][0], exons[-1][1]) != (record["start"], record["end"]):
            logger.debug("Resetting the coordinates of %s to its exons (%s-%s)",
                         tid, exons[0][0], exons[-1][1])
        try:
            transcript = AnnotationInterval(record["seqid"], exons[0][0], exons[-1][1], tid,
                                            exons=exons,
                                            cds=merge_ranges(record["cds"]),
                                            strand=record["strand"],
                                            parent=record["gene"],
                                            provenance=provenance)
        except InvalidTranscript as exc:
            logger.warning("Discarding invalid transcript %s: %s", tid, exc)
            discarded += 1
            continue
        index.add(transcript)

    logger.info("Loaded %d transcripts from %s (%d discarded)", len(records) - discarded,
                gff_handle.name, discarded)
    return index


def load_annotation(filename, logger=None, provenance=None):
    """Load a GFF3 file, given its name or an opened parser, into an AnnotationIndex."""
    if isinstance(filename, GFF3):
        gff_handle = filename
    else:
        gff_handle = to_gff(filename)
    with gff_handle:
        return load_from_gff(gff_handle, logger=logger, provenance=provenance)
