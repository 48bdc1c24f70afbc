# coding: utf-8

"""
This module dispatches the construction of loci to a pool of worker processes,
one task per sequence. Results and per-sequence failures are collected in
the parent process.
"""

import collections
import logging
import logging.handlers as log_handlers
import multiprocessing as mp
import threading
from ..exceptions import SourceQueryError
from ..utilities.log_utils import create_null_logger, create_queue_logger
from .builder import build_loci, build_loci_pairwise


__author__ = 'Luca Venturini'


# Per-process state, set up once by the pool initializer
_worker_state = dict()


def _init_worker(sources, visitor, log_queue, log_level):
    _worker_state["sources"] = sources
    _worker_state["visitor"] = visitor
    _worker_state["logger"] = create_queue_logger("comparo.worker", log_queue, level=log_level)


def analyse_sequence(seqid, sources, visitor=None, logger=None):

    """
    Build the loci of a sequence and apply the visitor to each of them.

    :param seqid: the sequence to analyse
    :param sources: a list with one (single-source) or two (reference, prediction) AnnotationSources
    :param visitor: optional callable applied to each locus
    :param logger: optional logger
    :returns: a (seqid, loci, error) tuple. A SourceQueryError aborts the sequence and is
    returned as the error; the loci are then None.
    """

    if logger is None:
        logger = create_null_logger()
    try:
        if len(sources) == 1:
            loci = build_loci(seqid, sources[0], logger=logger)
        else:
            loci = build_loci_pairwise(seqid, sources[0], sources[1], logger=logger)
    except SourceQueryError as exc:
        logger.warning("Failed to build the loci on %s: %s", seqid, exc)
        return seqid, None, exc

    if visitor is not None:
        for locus in loci:
            visitor(locus)
    logger.debug("Finished with %s (%d loci)", seqid, len(loci))
    return seqid, loci, None


def _analyse_in_worker(seqid):
    return analyse_sequence(seqid, _worker_state["sources"],
                            visitor=_worker_state["visitor"],
                            logger=_worker_state["logger"])


class LocusIndex:

    """
    Class to build the loci of all the sequences of one or two annotation sources.
    Sequences are independent and are analysed in parallel when more than one
    process is requested. After parsing:

    - "loci" maps each sequence to its list of loci
    - "errors" maps each failed sequence to its SourceQueryError
    """

    def __init__(self, processes=1, multiprocessing_method="spawn", logger=None):
        self.processes = max(1, processes)
        self.multiprocessing_method = multiprocessing_method
        if logger is None:
            logger = create_null_logger()
        self.logger = logger
        self.seqids = []
        self.loci = collections.OrderedDict()
        self.errors = collections.OrderedDict()
        self.__lock = threading.Lock()
        self.__callback = None

    def __iter__(self):
        """Iterate over the loci, following the order of the sequences in the sources."""
        for seqid in self.seqids:
            yield from self.loci.get(seqid, [])

    def __len__(self):
        return sum(len(_) for _ in self.loci.values())

    def _store(self, result):
        seqid, loci, error = result
        with self.__lock:
            if error is not None:
                self.errors[seqid] = error
                return
            self.loci[seqid] = loci
            if self.__callback is not None:
                self.__callback(seqid, loci)

    def parse(self, source, visitor=None, callback=None):
        """
        Build the loci of a single source.
        :param visitor: optional picklable callable applied to each locus inside the worker.
        :param callback: optional callable(seqid, loci), called in this process once per sequence.
        """
        return self.__parse([source], source.sequence_ids(), visitor, callback)

    def parse_pairwise(self, refr_source, pred_source, visitor=None, callback=None):
        """
        Build the loci of a reference and a prediction source. The sequences analysed are
        the union of those of the two sources, reference ones first.
        """
        seqids = list(refr_source.sequence_ids())
        known = set(seqids)
        seqids.extend(seqid for seqid in pred_source.sequence_ids() if seqid not in known)
        return self.__parse([refr_source, pred_source], seqids, visitor, callback)

    def __parse(self, sources, seqids, visitor, callback):

        self.seqids = list(seqids)
        self.loci.clear()
        self.errors.clear()
        self.__callback = callback
        self.logger.info("Starting to build the loci for %d sequences, using %d process%s",
                         len(self.seqids), self.processes, "es" if self.processes > 1 else "")
        if self.processes == 1 or len(self.seqids) < 2:
            for seqid in self.seqids:
                self._store(analyse_sequence(seqid, sources, visitor=visitor, logger=self.logger))
        else:
            self.__parse_parallel(sources, visitor)

        for seqid, error in self.errors.items():
            self.logger.warning("Sequence %s could not be analysed: %s", seqid, error)
        self.logger.info("Built %d loci on %d sequences (%d failed)",
                         len(self), len(self.loci), len(self.errors))
        self.__callback = None
        return self

    def __parse_parallel(self, sources, visitor):

        context = mp.get_context(self.multiprocessing_method)
        log_queue = context.Queue(-1)
        listener = log_handlers.QueueListener(log_queue, self.logger)
        listener.start()
        level = self.logger.level or logging.WARNING
        try:
            with context.Pool(self.processes, initializer=_init_worker,
                              initargs=(sources, visitor, log_queue, level)) as pool:
                results = [pool.apply_async(_analyse_in_worker, (seqid,), callback=self._store)
                           for seqid in self.seqids]
                pool.close()
                pool.join()
                for result in results:
                    # Re-raise unexpected failures from the workers
                    result.get()
        finally:
            listener.stop()
