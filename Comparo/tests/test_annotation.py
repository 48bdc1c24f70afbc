import pickle
import unittest
from Comparo.exceptions import InvalidTranscript, InvalidCDS, ModificationError
from Comparo.transcripts import AnnotationInterval, Provenance, TranscriptClique


class AnnotationIntervalTester(unittest.TestCase):

    def setUp(self):
        self.transcript = AnnotationInterval("chr1", 101, 600, "t1",
                                             exons=[(401, 600), (101, 300)],
                                             cds=[(151, 300), (401, 550)],
                                             strand="+", parent="g1")

    def test_basics(self):
        self.assertEqual(self.transcript.exons, ((101, 300), (401, 600)))
        self.assertEqual(self.transcript.introns, ((301, 400),))
        self.assertEqual(self.transcript.exon_num, 2)
        self.assertEqual(self.transcript.cdna_length, 400)
        self.assertEqual(self.transcript.cds_length, 300)
        self.assertEqual(len(self.transcript), 500)
        self.assertTrue(self.transcript.is_coding)
        self.assertFalse(self.transcript.monoexonic)
        self.assertIsNone(self.transcript.provenance)

    def test_utrs_follow_strand(self):
        self.assertEqual(self.transcript.utrs, ((101, 150), (551, 600)))
        self.assertEqual(self.transcript.five_utrs, ((101, 150),))
        self.assertEqual(self.transcript.three_utrs, ((551, 600),))
        minus = AnnotationInterval("chr1", 101, 600, "t2", exons=self.transcript.exons,
                                   cds=self.transcript.cds, strand="-")
        self.assertEqual(minus.five_utrs, ((551, 600),))
        self.assertEqual(minus.three_utrs, ((101, 150),))

    def test_monoexonic_default(self):
        transcript = AnnotationInterval("chr1", 10, 20, "mono")
        self.assertEqual(transcript.exons, ((10, 20),))
        self.assertFalse(transcript.is_coding)
        self.assertEqual(transcript.utrs, ())

    def test_immutable(self):
        with self.assertRaises(ModificationError):
            self.transcript.start = 50
        with self.assertRaises(ModificationError):
            self.transcript.new_attribute = 1
        with self.assertRaises(ModificationError):
            del self.transcript.end

    def test_with_provenance(self):
        tagged = self.transcript.with_provenance(Provenance.REFERENCE)
        self.assertIsNot(tagged, self.transcript)
        self.assertEqual(tagged.provenance, Provenance.REFERENCE)
        self.assertEqual(tagged.key, (Provenance.REFERENCE, "t1"))
        self.assertIsNone(self.transcript.provenance)
        self.assertEqual(AnnotationInterval("chr1", 1, 10, "t", provenance="pred").provenance,
                         Provenance.PREDICTION)

    def test_pickle(self):
        tagged = self.transcript.with_provenance(Provenance.PREDICTION)
        unpickled = pickle.loads(pickle.dumps(tagged))
        self.assertEqual(unpickled, tagged)
        with self.assertRaises(ModificationError):
            unpickled.start = 1

    def test_dict_conversion(self):
        self.assertEqual(AnnotationInterval.from_dict(self.transcript.as_dict()), self.transcript)

    def test_invalid_coordinates(self):
        for start, end in ((10, 5), (0, 10), ("a", 10)):
            with self.subTest(start=start, end=end), self.assertRaises(InvalidTranscript):
                AnnotationInterval("chr1", start, end, "bad")

    def test_invalid_exons(self):
        for exons in ([(1, 50), (40, 100)],  # Overlapping
                      [(1, 50), (60, 90)],  # Does not reach the end
                      [(5, 50), (60, 100)],  # Does not reach the start
                      [(1, 50), (70, 60), (80, 100)]):  # Inverted
            with self.subTest(exons=exons), self.assertRaises(InvalidTranscript):
                AnnotationInterval("chr1", 1, 100, "bad", exons=exons)

    def test_invalid_strand(self):
        with self.assertRaises(InvalidTranscript):
            AnnotationInterval("chr1", 1, 100, "bad", strand="x")
        self.assertIsNone(AnnotationInterval("chr1", 1, 100, "unstranded", strand=".").strand)

    def test_invalid_cds(self):
        exons = [(1, 50), (101, 150), (201, 250)]
        for cds in ([(40, 60)],  # Outside the exons
                    [(30, 40), (101, 120)],  # UTR between the CDS segments
                    [(30, 50), (121, 150)],
                    [(30, 50), (201, 220)],  # Skips an exon
                    [(10, 20), (30, 40)]):  # Two segments in the same exon
            with self.subTest(cds=cds), self.assertRaises(InvalidCDS):
                AnnotationInterval("chr1", 1, 250, "bad", exons=exons, cds=cds)
        valid = AnnotationInterval("chr1", 1, 250, "good", exons=exons, cds=[(30, 50), (101, 150), (201, 220)])
        self.assertEqual(valid.cds_length, 21 + 50 + 20)


class CliqueTester(unittest.TestCase):

    def test_empty(self):
        clique = TranscriptClique.empty(Provenance.REFERENCE, seqid="chr1")
        self.assertTrue(clique.is_empty)
        self.assertEqual(len(clique), 0)
        self.assertIsNone(clique.start)
        self.assertEqual(clique.id, "None")
        self.assertEqual(clique.exon_num, 0)
        self.assertFalse(clique.overlaps(clique))

    def test_members(self):
        first = AnnotationInterval("chr1", 1, 100, "a", exons=[(1, 40), (61, 100)], cds=[(20, 40), (61, 80)],
                                   provenance=Provenance.PREDICTION)
        second = AnnotationInterval("chr1", 90, 200, "b", provenance=Provenance.PREDICTION)
        clique = TranscriptClique([first, second])
        self.assertEqual(clique.provenance, Provenance.PREDICTION)
        self.assertEqual(clique.seqid, "chr1")
        self.assertEqual((clique.start, clique.end), (1, 200))
        self.assertEqual(clique.id, "a;b")
        self.assertEqual(clique.exon_num, 3)
        self.assertEqual(clique.cds_length, 41)
        other = TranscriptClique([AnnotationInterval("chr1", 200, 300, "c")])
        self.assertTrue(clique.overlaps(other))
        self.assertFalse(clique.overlaps(TranscriptClique([AnnotationInterval("chr1", 201, 300, "d")])))
        self.assertEqual(pickle.loads(pickle.dumps(clique)), clique)


if __name__ == "__main__":
    unittest.main()
