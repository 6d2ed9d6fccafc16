import hashlib
import pathlib
import sys
import unittest


ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from field import Fr
from transcript import Blake2bTranscript


class TranscriptTests(unittest.TestCase):
    def test_init_matches_blake2b_padded_label(self):
        label = b"drgporep_graph"
        expected = hashlib.blake2b(label + b"\x00" * (32 - len(label)), digest_size=32).digest()
        t = Blake2bTranscript.new(label)
        self.assertEqual(t.state, expected)
        self.assertEqual(t.n_rounds, 0)
        self.assertEqual(Blake2bTranscript.new("drgporep_graph").state, expected)

    def test_label_constraints(self):
        with self.assertRaises(ValueError):
            Blake2bTranscript.new(b"a" * 33)
        t = Blake2bTranscript.new(b"ok")
        with self.assertRaises(ValueError):
            t.append_label(b"a" * 33)

    def test_round_count_append_and_challenge(self):
        t = Blake2bTranscript.new(b"drgporep")
        t.append_u64(b"lbl", 7)
        self.assertEqual(t.n_rounds, 2)
        t.append_bytes(b"b", b"\x01\x02\x03")
        self.assertEqual(t.n_rounds, 4)
        t.append_scalar(b"s", Fr(9))
        self.assertEqual(t.n_rounds, 6)
        _ = t.challenge_u128()
        self.assertEqual(t.n_rounds, 7)
        _ = t.challenge_bytes(33)
        self.assertEqual(t.n_rounds, 9)

    def test_challenge_u128_reads_little_endian(self):
        t_bytes, t_u128 = Blake2bTranscript.new(b"drgporep"), Blake2bTranscript.new(b"drgporep")
        t_bytes.append_u64(b"node", 3)
        t_u128.append_u64(b"node", 3)
        self.assertEqual(t_u128.challenge_u128(), int.from_bytes(t_bytes.challenge_bytes(16), "little"))
        self.assertEqual(t_u128.state, t_bytes.state)

    def test_challenge_index(self):
        t = Blake2bTranscript.new(b"drgporep")
        draws = [t.challenge_index(5) for _ in range(50)]
        self.assertTrue(all(0 <= d < 5 for d in draws))
        self.assertGreater(len(set(draws)), 1)
        with self.assertRaises(ValueError):
            t.challenge_index(0)


if __name__ == "__main__":
    unittest.main()
