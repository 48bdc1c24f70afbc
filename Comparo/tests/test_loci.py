import itertools
import random
import unittest
import networkx as nx
from Comparo import create_default_logger
from Comparo.exceptions import NotInLocusError, RedundantNames, SourceQueryError
from Comparo.loci import AnnotationIndex, Locus, LocusIndex, build_loci, build_loci_pairwise
from Comparo.transcripts import AnnotationInterval, Provenance


def _interval(tid, start, end, seqid="chr1", provenance=None):
    return AnnotationInterval(seqid, start, end, tid, provenance=provenance)


def _overlapping(first, second):
    return first.seqid == second.seqid and first.start <= second.end and second.start <= first.end


class RecordingIndex(AnnotationIndex):

    """Index which records all the ranges it has been queried with."""

    def __init__(self, transcripts=None):
        self.queries = []
        super().__init__(transcripts)

    def transcripts_overlapping(self, seqid, start, end):
        self.queries.append((start, end))
        return super().transcripts_overlapping(seqid, start, end)


class FailingIndex(AnnotationIndex):

    """Index whose range queries fail for the sequences whose name starts with "bad"."""

    def transcripts_overlapping(self, seqid, start, end):
        if seqid.startswith("bad"):
            raise SourceQueryError(seqid, "simulated I/O failure", (start, end))
        return super().transcripts_overlapping(seqid, start, end)


class AnnotationIndexTester(unittest.TestCase):

    def setUp(self):
        self.index = AnnotationIndex([_interval("c", 500, 600), _interval("a", 1, 100),
                                      _interval("b", 50, 150), _interval("d", 10, 20, seqid="chr2")])

    def test_sequences(self):
        self.assertEqual(self.index.sequence_ids(), ["chr1", "chr2"])
        self.assertTrue(self.index.has_sequence("chr2"))
        self.assertFalse(self.index.has_sequence("chr3"))
        self.assertEqual(len(self.index), 4)
        self.assertIn("a", self.index)

    def test_positional_order(self):
        self.assertEqual([_.id for _ in self.index.transcripts_for_sequence("chr1")], ["a", "b", "c"])
        self.index.add(_interval("e", 1, 100))
        self.assertEqual([_.id for _ in self.index.transcripts_for_sequence("chr1")], ["a", "e", "b", "c"])

    def test_overlap_is_closed(self):
        self.assertEqual([_.id for _ in self.index.transcripts_overlapping("chr1", 150, 500)], ["b", "c"])
        self.assertEqual([_.id for _ in self.index.transcripts_overlapping("chr1", 151, 499)], [])
        self.assertEqual([_.id for _ in self.index.transcripts_overlapping("chr1", 100, 100)], ["a", "b"])

    def test_missing_sequence(self):
        with self.assertRaises(SourceQueryError) as exc:
            self.index.transcripts_overlapping("chr3", 1, 10)
        self.assertEqual(exc.exception.seqid, "chr3")
        with self.assertRaises(SourceQueryError):
            self.index.transcripts_for_sequence("chr3")

    def test_redundant(self):
        with self.assertRaises(RedundantNames):
            self.index.add(_interval("a", 1000, 2000, seqid="chr5"))
        with self.assertRaises(TypeError):
            self.index.add((1, 10))


class LocusTester(unittest.TestCase):

    def test_add(self):
        locus = Locus("chr1")
        locus.add(_interval("a", 100, 200, provenance=Provenance.REFERENCE))
        locus.add(_interval("b", 150, 400), provenance=Provenance.PREDICTION)
        self.assertEqual((locus.start, locus.end), (100, 400))
        self.assertEqual(locus.id, "chr1_100-400")
        self.assertEqual([_.id for _ in locus.refr_transcripts], ["a"])
        self.assertEqual([_.id for _ in locus.pred_transcripts], ["b"])
        self.assertEqual(locus.pred_transcripts[0].provenance, Provenance.PREDICTION)
        self.assertEqual(len(locus), 2)

    def test_not_in_locus(self):
        locus = Locus("chr1", [_interval("a", 100, 200)])
        with self.assertRaises(NotInLocusError):
            locus.add(_interval("b", 201, 300))
        with self.assertRaises(NotInLocusError):
            locus.add(_interval("c", 150, 300, seqid="chr2"))
        with self.assertRaises(NotInLocusError):
            locus.add(_interval("a", 100, 200))
        locus.add(_interval("b", 201, 300), check_in_locus=False)
        self.assertEqual(locus.end, 300)


class BuilderTester(unittest.TestCase):

    @staticmethod
    def _random_intervals(rng, number, seqid="chr1", prefix="t", provenance=None):
        intervals = []
        for num in range(number):
            start = rng.randint(1, 5000)
            intervals.append(_interval("{}{}".format(prefix, num), start, start + rng.randint(0, 300),
                                       seqid=seqid, provenance=provenance))
        return intervals

    def _check_partition(self, intervals, loci):
        keys = [transcript.key for locus in loci for transcript in locus.transcripts]
        self.assertEqual(len(keys), len(set(keys)))
        self.assertEqual(set(keys), set(_.key for _ in intervals))
        # No two loci overlap
        for first, second in itertools.combinations(loci, 2):
            self.assertFalse(first.start <= second.end and second.start <= first.end, (first, second))
        # Each locus is a connected component
        for locus in loci:
            graph = nx.Graph()
            graph.add_nodes_from(range(len(locus.transcripts)))
            graph.add_edges_from((i, j) for (i, first), (j, second) in
                                 itertools.combinations(enumerate(locus.transcripts), 2)
                                 if _overlapping(first, second))
            self.assertTrue(nx.is_connected(graph), locus)
            self.assertEqual(locus.start, min(_.start for _ in locus.transcripts))
            self.assertEqual(locus.end, max(_.end for _ in locus.transcripts))

    def test_random_partition(self):
        rng = random.Random(1035)
        for trial in range(20):
            with self.subTest(trial=trial):
                intervals = self._random_intervals(rng, rng.randint(1, 60))
                loci = build_loci("chr1", AnnotationIndex(intervals))
                self._check_partition(intervals, loci)

    def test_idempotence(self):
        rng = random.Random(42)
        intervals = self._random_intervals(rng, 50)
        for locus in build_loci("chr1", AnnotationIndex(intervals)):
            rebuilt = build_loci("chr1", AnnotationIndex(locus.transcripts))
            self.assertEqual(len(rebuilt), 1)
            self.assertEqual(set(_.id for _ in rebuilt[0].transcripts), set(_.id for _ in locus.transcripts))
            self.assertEqual((rebuilt[0].start, rebuilt[0].end), (locus.start, locus.end))

    def test_monotonic_growth(self):
        # A chain: each interval only overlaps its neighbours
        intervals = [_interval("t{}".format(num), 1 + num * 90, 100 + num * 90) for num in range(8)]
        index = RecordingIndex(intervals)
        loci = build_loci("chr1", index)
        self.assertEqual(len(loci), 1)
        for (first_start, first_end), (second_start, second_end) in zip(index.queries[:-1], index.queries[1:]):
            self.assertLessEqual(second_start, first_start)
            self.assertGreaterEqual(second_end, first_end)
        self.assertEqual(index.queries[-1], (1, 730))
        self.assertGreater(len(index.queries), 2)

    def test_missing_sequence(self):
        self.assertEqual(build_loci("chr9", AnnotationIndex([_interval("a", 1, 10)])), [])
        self.assertEqual(build_loci_pairwise("chr9", AnnotationIndex(), AnnotationIndex()), [])

    def test_pairwise_bridge(self):
        refr = AnnotationIndex([_interval("r1", 1, 100), _interval("r2", 200, 300)])
        pred = AnnotationIndex([_interval("p1", 50, 250)])
        loci = build_loci_pairwise("chr1", refr, pred)
        self.assertEqual(len(loci), 1)
        self.assertEqual([_.id for _ in loci[0].refr_transcripts], ["r1", "r2"])
        self.assertEqual([_.id for _ in loci[0].pred_transcripts], ["p1"])
        self.assertTrue(all(_.provenance == Provenance.REFERENCE for _ in loci[0].refr_transcripts))

    def test_pairwise_ordering(self):
        refr = AnnotationIndex([_interval("r1", 500, 600), _interval("r2", 1000, 1100)])
        pred = AnnotationIndex([_interval("p0", 1, 50), _interval("p1", 550, 700), _interval("p2", 2000, 2100)])
        loci = build_loci_pairwise("chr1", refr, pred)
        self.assertEqual([_.id for _ in loci], ["chr1_500-700", "chr1_1000-1100", "chr1_1-50", "chr1_2000-2100"])
        self.assertEqual([len(_.refr_transcripts) for _ in loci], [1, 1, 0, 0])
        self.assertEqual([len(_.pred_transcripts) for _ in loci], [1, 0, 1, 1])

    def test_pairwise_shared_ids(self):
        # The same identifier in the two sources denotes two different annotations
        refr = AnnotationIndex([_interval("t1", 1, 100)])
        pred = AnnotationIndex([_interval("t1", 1, 100)])
        loci = build_loci_pairwise("chr1", refr, pred)
        self.assertEqual(len(loci), 1)
        self.assertEqual(len(loci[0].transcripts), 2)

    def test_pairwise_random_partition(self):
        rng = random.Random(7)
        for trial in range(10):
            with self.subTest(trial=trial):
                refr = self._random_intervals(rng, rng.randint(0, 30), prefix="r", provenance=Provenance.REFERENCE)
                pred = self._random_intervals(rng, rng.randint(1, 30), prefix="p", provenance=Provenance.PREDICTION)
                loci = build_loci_pairwise("chr1", AnnotationIndex(refr), AnnotationIndex(pred))
                self._check_partition(refr + pred, loci)

    def test_source_failure(self):
        with self.assertRaises(SourceQueryError):
            build_loci("bad1", FailingIndex([_interval("a", 1, 10, seqid="bad1")]))


class LocusIndexTester(unittest.TestCase):

    def setUp(self):
        self.refr = FailingIndex([_interval("r1", 1, 100), _interval("r2", 1, 100, seqid="bad1"),
                                  _interval("r3", 1, 100, seqid="chr2")])
        self.pred = FailingIndex([_interval("p1", 50, 150), _interval("p2", 1, 100, seqid="chr3")])

    def _check(self, index):
        self.assertEqual(index.seqids, ["chr1", "bad1", "chr2", "chr3"])
        self.assertEqual(list(index.errors.keys()), ["bad1"])
        self.assertIsInstance(index.errors["bad1"], SourceQueryError)
        self.assertEqual(set(index.loci.keys()), {"chr1", "chr2", "chr3"})
        self.assertEqual([_.id for _ in index], ["chr1_1-150", "chr2_1-100", "chr3_1-100"])

    def test_serial(self):
        seen = []
        index = LocusIndex(processes=1, logger=create_default_logger("test_serial", level="CRITICAL"))
        index.parse_pairwise(self.refr, self.pred, callback=lambda seqid, loci: seen.append(seqid))
        self._check(index)
        self.assertEqual(sorted(seen), ["chr1", "chr2", "chr3"])

    def test_parallel(self):
        seen = []
        index = LocusIndex(processes=2, logger=create_default_logger("test_parallel", level="CRITICAL"))
        index.parse_pairwise(self.refr, self.pred, callback=lambda seqid, loci: seen.append(seqid))
        self._check(index)
        self.assertEqual(sorted(seen), ["chr1", "chr2", "chr3"])

    def test_single_source(self):
        index = LocusIndex().parse(AnnotationIndex([_interval("a", 1, 10), _interval("b", 5, 20),
                                                    _interval("c", 1, 10, seqid="chr2")]))
        self.assertEqual(len(index), 2)
        self.assertEqual(index.errors, dict())


if __name__ == "__main__":
    unittest.main()
