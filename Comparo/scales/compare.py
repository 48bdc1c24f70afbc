# coding: utf-8

"""
Functions to compare a prediction annotation against a reference one.
"""

import collections
import csv
import logging
import rapidjson as json
from ..configuration import load_and_validate_config
from ..loci.locus_index import LocusIndex
from ..preparation.annotation_loader import load_from_gff
from ..transcripts.annotation import Provenance
from ..utilities.log_utils import create_logger_from_conf, create_null_logger
from .accountant import Accountant
from .cliques import cliques_for
from .selector import check_caps, select


__author__ = "Luca Venturini"


ComparisonRun = collections.namedtuple("ComparisonRun", ["loci", "errors", "accountant"])


class LocusComparer:

    """
    Callable which compares the reference and prediction cliques of a locus
    and attaches the results to it. It is applied to each locus inside
    the worker which built it, so it must be picklable.
    """

    def __init__(self, max_transcripts=32, max_comparisons=512, tolerance=1e-9):
        self.max_transcripts = max_transcripts
        self.max_comparisons = max_comparisons
        self.tolerance = tolerance

    @classmethod
    def from_configuration(cls, configuration):
        return cls(max_transcripts=configuration.max_transcripts,
                   max_comparisons=configuration.max_comparisons,
                   tolerance=configuration.tolerance)

    def __call__(self, locus):
        locus.refr_cliques = cliques_for(locus, Provenance.REFERENCE)
        locus.pred_cliques = cliques_for(locus, Provenance.PREDICTION)
        locus.skipped = check_caps(locus, locus.refr_cliques, locus.pred_cliques,
                                   max_transcripts=self.max_transcripts,
                                   max_comparisons=self.max_comparisons)
        if locus.skipped is not None:
            return locus
        selection = select(locus.refr_cliques, locus.pred_cliques, tolerance=self.tolerance)
        locus.pairs = selection.pairs
        locus.num_comparisons = sum(1 for pair in selection.pairs if pair.needs_comparison)
        locus.unique_refr_cliques = selection.unmatched_refr
        locus.unique_pred_cliques = selection.unmatched_pred
        return locus


def compare_sources(refr_source, pred_source, configuration=None, logger=None) -> ComparisonRun:

    """
    Compare two annotation sources.

    :param refr_source: the reference AnnotationSource
    :param pred_source: the prediction AnnotationSource
    :param configuration: a ComparisonConfiguration, a dictionary or a configuration file
    :param logger: optional logger
    :returns: a ComparisonRun with the compared loci per sequence, the errors per sequence
    and the Accountant holding the totals.
    """

    if logger is None:
        logger = create_null_logger()
    configuration = load_and_validate_config(configuration, logger=logger)

    accountant = Accountant()

    def fold(seqid, loci):
        for locus in loci:
            accountant.fold(locus)
        logger.debug("Folded %d loci from %s", len(loci), seqid)

    index = LocusIndex(processes=configuration.threads,
                       multiprocessing_method=configuration.multiprocessing_method,
                       logger=logger)
    index.parse_pairwise(refr_source, pred_source,
                         visitor=LocusComparer.from_configuration(configuration),
                         callback=fold)
    return ComparisonRun(index.loci, index.errors, accountant)


def setup_logger(args):

    """
    Function to setup the logger for the compare function.
    :param args: the argparse namespace
    :return: the logger
    """

    logger = create_logger_from_conf(args.configuration, name="main_compare", mode="wt")
    if args.verbose is True:
        logger.setLevel(logging.DEBUG)
    return logger


def _update_configuration(args):

    configuration = load_and_validate_config(args.configuration, logger=create_null_logger())
    for key in ("max_transcripts", "max_comparisons", "tolerance"):
        value = getattr(args, key, None)
        if value is not None:
            setattr(configuration, key, value)
    if getattr(args, "processes", None) is not None:
        configuration.threads = args.processes
    if getattr(args, "log", None) is not None:
        configuration.log_settings.log = args.log
    configuration.check()
    return configuration


def print_pairs(run: ComparisonRun, handle):

    """Write the table of all the pairs of the compared loci."""

    fields = ["locus", "seqid", "start", "end", "refr_ids", "pred_ids", "class_code",
              "cds_struct_sn", "cds_struct_sp", "cds_struct_f1",
              "exon_struct_sn", "exon_struct_sp", "exon_struct_f1",
              "utr_struct_sn", "utr_struct_sp", "utr_struct_f1",
              "cds_nuc_mc", "cds_nuc_cc", "utr_nuc_mc", "utr_nuc_cc",
              "overall_identity"]
    writer = csv.DictWriter(handle, fields, delimiter="\t", lineterminator="\n")
    writer.writeheader()
    for loci in run.loci.values():
        for locus in loci:
            if locus.skipped is not None:
                continue
            for pair in locus.pairs:
                row = pair.as_row()
                row["locus"] = locus.id
                writer.writerow(row)


def compare(args):

    """
    Main entry point for the compare subprogram.
    :param args: the argparse namespace
    """

    args.configuration = _update_configuration(args)
    logger = setup_logger(args)
    logger.info("Command line: %s", " ".join(getattr(args, "command_line", [])))

    refr_source = load_from_gff(args.reference, logger=logger, provenance=Provenance.REFERENCE)
    pred_source = load_from_gff(args.prediction, logger=logger, provenance=Provenance.PREDICTION)
    args.reference.close()
    args.prediction.close()

    run = compare_sources(refr_source, pred_source, configuration=args.configuration, logger=logger)
    for seqid, error in run.errors.items():
        logger.error("Sequence %s has not been analysed: %s", seqid, error)

    with open("{0}.pairs.tsv".format(args.out), "wt") as out:
        print_pairs(run, out)
    summary = run.accountant.as_dict()
    summary["errors"] = dict((seqid, str(error)) for seqid, error in run.errors.items())
    with open("{0}.summary.json".format(args.out), "wt") as out:
        print(json.dumps(summary, indent=2), file=out)

    logger.info("Finished comparing %d loci; %d comparisons performed.",
                summary["counts"]["num_loci"], summary["counts"]["num_comparisons"])
