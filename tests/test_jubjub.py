import pathlib
import sys
import unittest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
import jubjub
from field import Fr


class JubjubTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.g = jubjub.group_hash(b"test generator")
        cls.h = jubjub.group_hash(b"another generator")

    def test_d_is_non_square(self):
        self.assertFalse(jubjub.D.is_square())

    def test_group_hash_points(self):
        for P in (self.g, self.h):
            self.assertTrue(jubjub.is_on_curve(P))
            self.assertFalse(jubjub.is_identity(P))
            self.assertTrue(jubjub.is_in_subgroup(P))
        self.assertNotEqual(self.g, self.h)
        self.assertEqual(jubjub.group_hash(b"test generator"), self.g)

    def test_group_law(self):
        g, h = self.g, self.h
        self.assertEqual(jubjub.add(g, jubjub.IDENTITY), g)
        self.assertEqual(jubjub.add(g, h), jubjub.add(h, g))
        self.assertEqual(jubjub.add(g, jubjub.neg(g)), jubjub.IDENTITY)
        self.assertEqual(jubjub.double(g), jubjub.add(g, g))
        self.assertEqual(jubjub.mul(g, 5), jubjub.add(jubjub.double(jubjub.double(g)), g))
        self.assertEqual(jubjub.mul(g, -3), jubjub.neg(jubjub.mul(g, 3)))
        self.assertEqual(jubjub.mul_by_cofactor(g), jubjub.mul(g, 8))
        self.assertTrue(jubjub.is_on_curve(jubjub.add(g, h)))

    def test_identity_and_order_two_point(self):
        self.assertTrue(jubjub.is_on_curve(jubjub.IDENTITY))
        t = (Fr.zero(), -Fr.one())
        self.assertTrue(jubjub.is_on_curve(t))
        self.assertEqual(jubjub.double(t), jubjub.IDENTITY)
        self.assertFalse(jubjub.is_in_subgroup(t))


if __name__ == "__main__":
    unittest.main()
