"""Reference (non-circuit) DRG-PoRep: setup, replicate, extract, prove, verify.

Replication walks the graph in node order and seals every leaf with a sloth
key derived from the prover id and the already-sealed parents. A proof for a
challenge opens the replica leaf, its parents (all in the replica tree) and
the original data leaf. The circuit in `circuit.drgporep` checks the same
relation for one challenge.
"""
from dataclasses import dataclass, field  # public/private input containers

import sloth  # verifiable-delay encoding
from drgraph import Graph  # parent selection for replication
from field import Fr  # leaf values
from kdf import kdf  # per-node key derivation
from merkle import DataProof, MerkleProof, MerkleTree  # commitments
from params import DEFAULT_GRAPH_SEED, IDENTITY_SIZE, LEAF_SIZE, dbg  # protocol constants + debug sink
from transcript import Blake2bTranscript  # challenge derivation


class DrgPoRepError(Exception):  # Raised on malformed reference-scheme inputs.
    pass


@dataclass(frozen=True)
class DrgParams:  # Graph shape: n nodes, degree m.
    n: int
    m: int
    seed: bytes = DEFAULT_GRAPH_SEED


@dataclass(frozen=True)
class SetupParams:
    lambda_: int  # leaf size in bytes
    drg: DrgParams
    sloth_rounds: int = sloth.DEFAULT_ROUNDS


@dataclass(frozen=True)
class PublicParams:
    lambda_: int
    graph: Graph
    sloth_rounds: int = sloth.DEFAULT_ROUNDS


@dataclass(frozen=True)
class Tau:  # Replica and data commitments.
    comm_r: Fr
    comm_d: Fr


@dataclass(frozen=True)
class ProverAux:  # Trees the prover keeps to answer challenges.
    tree_d: MerkleTree
    tree_r: MerkleTree


@dataclass(frozen=True)
class PublicInputs:
    prover_id: bytes
    challenge: int
    tau: Tau


@dataclass(frozen=True)
class PrivateInputs:
    replica: bytes
    aux: ProverAux


@dataclass(frozen=True)
class Proof:
    replica_node: DataProof  # challenged replica leaf
    node: MerkleProof  # data-tree path of the challenged leaf
    replica_parents: list = field(default_factory=list)  # [(parent index, DataProof)] in graph order


def data_at_node(data, node, lambda_):  # Slice the lambda_ bytes of one leaf.
    start = int(node) * int(lambda_)
    end = start + int(lambda_)
    if end > len(data):
        raise DrgPoRepError(f"node {node} out of range for {len(data)} bytes")
    return bytes(data[start:end])


def bytes_into_fr(data):  # Canonical little-endian leaf bytes to Fr.
    try:
        return Fr.from_bytes_le(data)
    except ValueError as e:
        raise DrgPoRepError(str(e)) from e


def leaves_from_data(data, lambda_):  # Every leaf of a buffer as Fr.
    if len(data) % lambda_ != 0:
        raise DrgPoRepError(f"data length {len(data)} is not a multiple of {lambda_}")
    return [bytes_into_fr(data_at_node(data, i, lambda_)) for i in range(len(data) // lambda_)]


def derive_challenges(prover_id, tau, n, count):  # Fiat-Shamir challenges in [1, n); node 0 is self-parented.
    if n < 2:
        raise DrgPoRepError("need at least 2 nodes to challenge")
    t = Blake2bTranscript.new(b"drgporep_challenges")
    t.append_bytes(b"prover_id", prover_id)
    t.append_scalar(b"comm_r", tau.comm_r)
    t.append_scalar(b"comm_d", tau.comm_d)
    return [1 + t.challenge_index(n - 1) for _ in range(int(count))]


class DrgPoRep:  # Proof-of-replication scheme over a bucket-sampled DRG.
    @staticmethod
    def setup(sp):  # Build public parameters (graph sampling is deterministic in the seed).
        if sp.lambda_ != LEAF_SIZE:
            raise DrgPoRepError(f"leaf size must be {LEAF_SIZE} bytes")
        return PublicParams(sp.lambda_, Graph(sp.drg.n, sp.drg.m, sp.drg.seed), sp.sloth_rounds)

    @staticmethod
    def _check_prover_id(prover_id):
        if len(prover_id) != IDENTITY_SIZE:
            raise DrgPoRepError(f"prover id must be {IDENTITY_SIZE} bytes")

    @staticmethod
    def replicate(pp, prover_id, data):  # Seal `data` (bytearray) in place; return (Tau, ProverAux).
        DrgPoRep._check_prover_id(prover_id)
        lam = pp.lambda_
        if len(data) != pp.graph.size() * lam:
            raise DrgPoRepError(f"expected {pp.graph.size() * lam} bytes of data, got {len(data)}")
        leaves = leaves_from_data(data, lam)
        tree_d = MerkleTree(leaves, lam)
        for node in range(pp.graph.size()):
            parents = [leaves[p] for p in pp.graph.parents(node)]
            key = kdf(prover_id, parents, pp.graph.degree())
            leaves[node] = sloth.encode(key, leaves[node], pp.sloth_rounds)
            data[node * lam : (node + 1) * lam] = leaves[node].to_bytes_le()
        tree_r = MerkleTree(leaves, lam)
        dbg("drgporep.py:replicate", "replicated", {"n": pp.graph.size(), "m": pp.graph.degree(), "height": tree_r.height()})
        return Tau(comm_r=tree_r.root(), comm_d=tree_d.root()), ProverAux(tree_d=tree_d, tree_r=tree_r)

    @staticmethod
    def extract(pp, prover_id, replica, node):  # Decode one leaf of a replica.
        DrgPoRep._check_prover_id(prover_id)
        if not 1 <= int(node) < pp.graph.size():
            raise DrgPoRepError(f"node {node} cannot be extracted; node 0 is sealed under its own plaintext")
        lam = pp.lambda_
        parents = [bytes_into_fr(data_at_node(replica, p, lam)) for p in pp.graph.parents(node)]
        key = kdf(prover_id, parents, pp.graph.degree())
        return sloth.decode(key, bytes_into_fr(data_at_node(replica, node, lam)), pp.sloth_rounds)

    @staticmethod
    def prove(pp, pub_inputs, priv_inputs):  # Open the challenged leaf, its parents and the data leaf.
        challenge = int(pub_inputs.challenge)
        n = pp.graph.size()
        if not 1 <= challenge < n:
            raise DrgPoRepError(f"challenge {challenge} outside [1, {n})")
        tree_d, tree_r = priv_inputs.aux.tree_d, priv_inputs.aux.tree_r
        replica_node = tree_r.gen_data_proof(challenge)
        replica_parents = [(p, tree_r.gen_data_proof(p)) for p in pp.graph.parents(challenge)]
        dbg("drgporep.py:prove", "proved challenge", {"challenge": challenge, "parents": [p for p, _ in replica_parents]})
        return Proof(replica_node=replica_node, replica_parents=replica_parents, node=tree_d.gen_proof(challenge))

    @staticmethod
    def verify(pp, pub_inputs, proof):  # Check every opening and that the replica leaf decodes to the data leaf.
        challenge = int(pub_inputs.challenge)
        tau = pub_inputs.tau
        lam = pp.lambda_
        if proof.replica_node.proof.root() != tau.comm_r or proof.node.root() != tau.comm_d:
            return False
        if not proof.replica_node.validate(lam) or proof.replica_node.proof.index() != challenge:
            return False
        if not proof.node.validate() or proof.node.index() != challenge:
            return False
        expected_parents = pp.graph.parents(challenge)
        if [p for p, _ in proof.replica_parents] != expected_parents:
            return False
        for p, parent in proof.replica_parents:
            if parent.proof.root() != tau.comm_r or not parent.validate(lam) or parent.proof.index() != p:
                return False
        key = kdf(pub_inputs.prover_id, [parent.data for _, parent in proof.replica_parents], pp.graph.degree())
        decoded = sloth.decode(key, proof.replica_node.data, pp.sloth_rounds)
        return proof.node.validate_data(decoded, lam)
