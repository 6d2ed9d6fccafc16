import pathlib
import sys
import unittest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
from field import Fr
from merkle import MerkleTree
from pedersen import hash_leaf, hash_node


class MerkleTreeTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.values = [Fr(1000 + i) for i in range(5)]
        cls.tree = MerkleTree(cls.values)

    def test_shape(self):
        self.assertEqual(len(self.tree), 5)
        self.assertEqual(self.tree.height(), 3)
        self.assertEqual([len(level) for level in self.tree.levels], [5, 3, 2, 1])

    def test_odd_level_duplicates_last(self):
        leaves = self.tree.levels[0]
        self.assertEqual(self.tree.levels[1][2], hash_node(0, leaves[4], leaves[4]))

    def test_proofs(self):
        for i in range(5):
            proof = self.tree.gen_proof(i)
            self.assertEqual(len(proof), 3)
            self.assertEqual(proof.index(), i)
            self.assertEqual(proof.leaf, hash_leaf(self.values[i], 32))
            self.assertTrue(proof.validate())
            self.assertTrue(proof.validate_data(self.values[i]))
            self.assertFalse(proof.validate_data(self.values[i] + 1))
            self.assertEqual(proof.root(), self.tree.root())
            self.assertEqual(proof.as_options(), proof.path)

    def test_data_proof(self):
        dp = self.tree.gen_data_proof(3)
        self.assertEqual(dp.data, self.values[3])
        self.assertTrue(dp.validate())

    def test_tampered_path(self):
        proof = self.tree.gen_proof(2)
        sibling, is_right = proof.path[1]
        proof.path[1] = (sibling + 1, is_right)
        self.assertFalse(proof.validate())

    def test_errors(self):
        with self.assertRaises(IndexError):
            self.tree.gen_proof(5)
        with self.assertRaises(ValueError):
            MerkleTree([])

    def test_single_leaf(self):
        tree = MerkleTree([Fr(7)])
        self.assertEqual(tree.height(), 0)
        self.assertEqual(tree.root(), hash_leaf(Fr(7), 32))
        self.assertTrue(tree.gen_proof(0).validate())


if __name__ == "__main__":
    unittest.main()
