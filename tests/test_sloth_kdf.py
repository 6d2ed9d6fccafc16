import random
import pathlib
import sys
import unittest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
import kdf as kdf_ref
import sloth
from circuit.boolean import Boolean, bytes_into_boolean_vec, field_into_boolean_vec_le
from circuit.kdf import kdf
from field import Fr
from r1cs import ShapeError, TestConstraintSystem


class SlothTests(unittest.TestCase):
    def test_roundtrip(self):
        rng = random.Random(8)
        for rounds in (0, 1, 3):
            key, x = Fr(rng.randrange(Fr.MODULUS)), Fr(rng.randrange(Fr.MODULUS))
            self.assertEqual(sloth.decode(key, sloth.encode(key, x, rounds), rounds), x)

    def test_fifth_root_exponent(self):
        self.assertEqual((5 * sloth.SLOTH_V) % (Fr.MODULUS - 1), 1)
        self.assertEqual(sloth.DEFAULT_ROUNDS, 1)

    def test_key_matters(self):
        x = Fr(42)
        c = sloth.encode(Fr(1), x)
        self.assertNotEqual(sloth.decode(Fr(2), c), x)


class KdfTests(unittest.TestCase):
    prover_id = bytes(range(32))

    def test_reference_validation(self):
        parents = [Fr(1), Fr(2)]
        with self.assertRaises(ValueError):
            kdf_ref.kdf(b"\x00" * 31, parents, 2)
        with self.assertRaises(ValueError):
            kdf_ref.kdf(self.prover_id, parents, 3)
        self.assertEqual(len(kdf_ref.parent_bits(Fr(5))), 256)

    def test_order_sensitive(self):
        a = kdf_ref.kdf(self.prover_id, [Fr(1), Fr(2)], 2)
        b = kdf_ref.kdf(self.prover_id, [Fr(2), Fr(1)], 2)
        self.assertNotEqual(a, b)

    def test_circuit_matches_reference(self):
        rng = random.Random(9)
        parents = [Fr(rng.randrange(Fr.MODULUS)) for _ in range(2)]
        cs = TestConstraintSystem()
        id_bits = bytes_into_boolean_vec(cs.namespace("id"), self.prover_id, 256)
        parents_bits = []
        for i, p in enumerate(parents):
            bits = field_into_boolean_vec_le(cs.namespace(f"parent {i}"), p)
            parents_bits.append(bits + [Boolean.const(False)])
        before = cs.num_constraints()
        key = kdf(cs.namespace("kdf"), id_bits, parents_bits, 2)
        self.assertEqual(key.value, kdf_ref.kdf(self.prover_id, parents, 2))
        self.assertTrue(cs.is_satisfied())
        # 256 windows, one with a constant and-gate, 255 additions.
        self.assertEqual(cs.num_constraints() - before, 256 * 3 - 1 + 255 * 6)

    def test_circuit_length_mismatch(self):
        cs = TestConstraintSystem()
        id_bits = [Boolean.const(False)] * 256
        with self.assertRaises(ShapeError):
            kdf(cs, id_bits, [[Boolean.const(False)] * 256], 2)
        self.assertEqual(cs.num_constraints(), 0)


if __name__ == "__main__":
    unittest.main()
