import random
import pathlib
import sys
import unittest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
from drgporep import (
    DrgParams,
    DrgPoRep,
    DrgPoRepError,
    PrivateInputs,
    Proof,
    PublicInputs,
    SetupParams,
    data_at_node,
    derive_challenges,
    leaves_from_data,
)
from drgraph import Graph
from field import Fr


def random_data(rng, n):
    return bytearray(b"".join(Fr(rng.randrange(Fr.MODULUS)).to_bytes_le() for _ in range(n)))


class GraphTests(unittest.TestCase):
    def test_parents(self):
        g = Graph(12, 6)
        self.assertEqual(g.size(), 12)
        self.assertEqual(g.degree(), 6)
        self.assertEqual(g.parents(0), [0] * 6)
        for v in range(1, 12):
            parents = g.parents(v)
            self.assertEqual(len(parents), 6)
            self.assertTrue(all(0 <= p < v for p in parents))
        self.assertEqual(Graph(12, 6).parents(7), g.parents(7))
        with self.assertRaises(IndexError):
            g.parents(12)

    def test_seed_changes_graph(self):
        a, b = Graph(64, 4), Graph(64, 4, seed=b"other")
        self.assertNotEqual([a.parents(v) for v in range(64)], [b.parents(v) for v in range(64)])

    def test_invalid(self):
        with self.assertRaises(ValueError):
            Graph(1, 2)
        with self.assertRaises(ValueError):
            Graph(4, 0)


class DrgPoRepTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        rng = random.Random(10)
        cls.n, cls.m = 12, 6
        cls.prover_id = Fr(rng.randrange(Fr.MODULUS)).to_bytes_le()
        cls.original = random_data(rng, cls.n)
        cls.pp = DrgPoRep.setup(SetupParams(32, DrgParams(cls.n, cls.m)))
        cls.replica = bytearray(cls.original)
        cls.tau, cls.aux = DrgPoRep.replicate(cls.pp, cls.prover_id, cls.replica)

    def prove(self, challenge):
        pub = PublicInputs(self.prover_id, challenge, self.tau)
        return pub, DrgPoRep.prove(self.pp, pub, PrivateInputs(bytes(self.replica), self.aux))

    def test_replica_differs_and_commitments(self):
        self.assertNotEqual(self.replica, self.original)
        self.assertEqual(self.aux.tree_d.root(), self.tau.comm_d)
        self.assertEqual(self.aux.tree_r.root(), self.tau.comm_r)
        self.assertEqual(self.aux.tree_r.values, leaves_from_data(self.replica, 32))

    def test_extract(self):
        for node in range(1, self.n):
            expected = Fr.from_bytes_le(data_at_node(self.original, node, 32))
            self.assertEqual(DrgPoRep.extract(self.pp, self.prover_id, self.replica, node), expected)
        with self.assertRaises(DrgPoRepError):
            DrgPoRep.extract(self.pp, self.prover_id, self.replica, 0)

    def test_prove_verify(self):
        for challenge in (1, 2, 11):
            pub, proof = self.prove(challenge)
            self.assertTrue(DrgPoRep.verify(self.pp, pub, proof))
            self.assertEqual([p for p, _ in proof.replica_parents], self.pp.graph.parents(challenge))

    def test_verify_rejects(self):
        pub, proof = self.prove(5)
        wrong_challenge = PublicInputs(self.prover_id, 6, self.tau)
        self.assertFalse(DrgPoRep.verify(self.pp, wrong_challenge, proof))
        wrong_id = PublicInputs(bytes(32), 5, self.tau)
        self.assertFalse(DrgPoRep.verify(self.pp, wrong_id, proof))
        p, parent = proof.replica_parents[0]
        other = self.aux.tree_r.gen_data_proof((p + 1) % 5)
        proof.replica_parents[0] = (p, other)
        self.assertFalse(DrgPoRep.verify(self.pp, pub, proof))

    def test_input_errors(self):
        with self.assertRaises(DrgPoRepError):
            self.prove(0)
        with self.assertRaises(DrgPoRepError):
            self.prove(self.n)
        with self.assertRaises(DrgPoRepError):
            DrgPoRep.replicate(self.pp, self.prover_id, bytearray(31))
        with self.assertRaises(DrgPoRepError):
            DrgPoRep.replicate(self.pp, b"short", bytearray(self.original))
        with self.assertRaises(DrgPoRepError):
            DrgPoRep.setup(SetupParams(16, DrgParams(4, 2)))
        with self.assertRaises(DrgPoRepError):
            leaves_from_data(b"\xff" * 32, 32)

    def test_proof_requires_data_path(self):
        _, proof = self.prove(4)
        with self.assertRaises(TypeError):
            Proof(replica_node=proof.replica_node, replica_parents=proof.replica_parents)

    def test_derive_challenges(self):
        challenges = derive_challenges(self.prover_id, self.tau, self.n, 20)
        self.assertEqual(len(challenges), 20)
        self.assertTrue(all(1 <= c < self.n for c in challenges))
        self.assertEqual(challenges, derive_challenges(self.prover_id, self.tau, self.n, 20))


if __name__ == "__main__":
    unittest.main()
