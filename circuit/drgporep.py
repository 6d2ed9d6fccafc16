"""DRG-PoRep circuit for one challenge.

Public inputs, in order:

* prover_id, packed (two elements for a 32-byte identity)
* replica value, replica auth_path bits, replica root
* for every parent: parent value, parent auth_path bits, replica root
* data value, data auth_path bits, data root

Known limitations: the parents are not checked against the dependency graph
for the challenged node, the parent bits are allocated fresh rather than
taken from the parent inclusion checks, and the ciphertext fed to the decoder
is allocated fresh rather than taken from the replica inclusion check.
"""
from dataclasses import dataclass  # circuit container

import sloth as sloth_ref  # shared round count
from circuit import sloth  # in-circuit decode
from circuit.boolean import Boolean, bytes_into_boolean_vec, field_into_boolean_vec_le  # bit wiring
from circuit.kdf import kdf  # in-circuit key derivation
from circuit.multipack import compute_multipacking, pack_into_inputs  # identity inputs
from circuit.num import AllocatedNum  # data node
from circuit.por import por_public_inputs, proof_of_retrievability  # inclusion checks
from field import Fr, bytes_to_bits_le  # field sizes and identity bits
from params import IDENTITY_SIZE, PARENT_BITS_WIDTH, dbg  # shape constants + debug sink
from r1cs import LC, ONE, ShapeError, assigned  # substrate


def _check_shape(lambda_, replica_node_path, replica_parents, replica_parents_paths, data_node_path, prover_id, m):
    leaf_bits = 8 * int(lambda_)
    if leaf_bits < Fr.NUM_BITS:
        raise ShapeError(f"leaf of {lambda_} bytes cannot hold a field element")
    if leaf_bits > PARENT_BITS_WIDTH:
        raise ShapeError(f"leaf of {leaf_bits} bits exceeds the {PARENT_BITS_WIDTH}-bit kdf block")
    if len(data_node_path) != len(replica_node_path):
        raise ShapeError(f"data path has {len(data_node_path)} levels, replica path has {len(replica_node_path)}")
    if len(replica_parents) != len(replica_parents_paths):
        raise ShapeError(f"{len(replica_parents)} parents but {len(replica_parents_paths)} parent paths")
    if len(replica_parents) != int(m):
        raise ShapeError(f"{len(replica_parents)} parents for degree {m}")
    if prover_id is not None and len(prover_id) != IDENTITY_SIZE:
        raise ShapeError(f"prover id must be {IDENTITY_SIZE} bytes, got {len(prover_id)}")


def drgporep(
    cs,
    lambda_,
    replica_node,
    replica_node_path,
    replica_root,
    replica_parents,
    replica_parents_paths,
    data_node,
    data_node_path,
    data_root,
    prover_id,
    m,
):
    """Assemble the DRG-PoRep relation for one challenge into `cs`.

    Every witness argument may be `None` when `cs` only records the shape.
    Shape errors are raised before anything is allocated.
    """
    _check_shape(lambda_, replica_node_path, replica_parents, replica_parents_paths, data_node_path, prover_id, m)
    dbg(
        "circuit/drgporep.py:drgporep",
        "synthesize start",
        {"mode": cs.mode, "lambda": lambda_, "m": m, "depth": len(replica_node_path)},
    )

    prover_id_bits = bytes_into_boolean_vec(cs.namespace("prover_id bits"), prover_id, 8 * int(lambda_))
    pack_into_inputs(cs.namespace("prover_id"), prover_id_bits)

    proof_of_retrievability(
        cs.namespace("replica_node merkle proof"), replica_node, lambda_, replica_node_path, replica_root
    )
    for i, (parent, path) in enumerate(zip(replica_parents, replica_parents_paths)):
        proof_of_retrievability(cs.namespace(f"replica parent: {i}"), parent, lambda_, path, replica_root)
    proof_of_retrievability(cs.namespace("data node commitment"), data_node, lambda_, data_node_path, data_root)

    pcs = cs.namespace("parents to bits")
    parents_bits = []
    for i, parent in enumerate(replica_parents):
        bits = field_into_boolean_vec_le(pcs.namespace(f"parent {i}"), parent)
        bits += [Boolean.const(False)] * (PARENT_BITS_WIDTH - len(bits))
        parents_bits.append(bits)

    key = kdf(cs.namespace("kdf"), prover_id_bits, parents_bits, m)
    decoded = sloth.decode(cs.namespace("decode replica node commitment"), key, replica_node, sloth_ref.DEFAULT_ROUNDS)

    expected = AllocatedNum.alloc(cs.namespace("data node"), data_node)
    # expected * 1 = decoded
    cs.enforce("encrypted matches data_node constraint", expected.lc(), LC.of(ONE), decoded.lc())

    dbg(
        "circuit/drgporep.py:drgporep",
        "synthesize done",
        {"inputs": cs.num_inputs(), "constraints": cs.num_constraints()},
    )


def drgporep_public_inputs(
    prover_id,
    replica_node,
    replica_node_path,
    replica_root,
    replica_parents,
    replica_parents_paths,
    data_node,
    data_node_path,
    data_root,
):  # The input vector (ONE excluded) a verifier checks a proof against; AssignmentMissing on absent values.
    inputs = compute_multipacking(bytes_to_bits_le(assigned(prover_id)))
    inputs += por_public_inputs(replica_node, replica_node_path, replica_root)
    for parent, path in zip(replica_parents, replica_parents_paths):
        inputs += por_public_inputs(parent, path, replica_root)
    inputs += por_public_inputs(data_node, data_node_path, data_root)
    return inputs


@dataclass
class DrgPoRepCircuit:  # Everything one challenge needs; `blank` builds the witness-free shape.
    lambda_: int
    replica_node: object
    replica_node_path: list
    replica_root: object
    replica_parents: list
    replica_parents_paths: list
    data_node: object
    data_node_path: list
    data_root: object
    prover_id: object
    m: int

    def synthesize(self, cs):
        drgporep(
            cs.namespace("drgporep"),
            self.lambda_,
            self.replica_node,
            self.replica_node_path,
            self.replica_root,
            self.replica_parents,
            self.replica_parents_paths,
            self.data_node,
            self.data_node_path,
            self.data_root,
            self.prover_id,
            self.m,
        )

    @classmethod
    def blank(cls, lambda_, m, depth):  # No witness values; for ShapeConstraintSystem.
        return cls(
            lambda_=lambda_,
            replica_node=None,
            replica_node_path=[None] * depth,
            replica_root=None,
            replica_parents=[None] * m,
            replica_parents_paths=[[None] * depth for _ in range(m)],
            data_node=None,
            data_node_path=[None] * depth,
            data_root=None,
            prover_id=None,
            m=m,
        )

    @classmethod
    def from_proof(cls, pp, prover_id, proof, data_node):  # Witness a reference-scheme proof plus the original data leaf.
        return cls(
            lambda_=pp.lambda_,
            replica_node=proof.replica_node.data,
            replica_node_path=proof.replica_node.proof.as_options(),
            replica_root=proof.replica_node.proof.root(),
            replica_parents=[parent.data for _, parent in proof.replica_parents],
            replica_parents_paths=[parent.proof.as_options() for _, parent in proof.replica_parents],
            data_node=data_node,
            data_node_path=proof.node.as_options(),
            data_root=proof.node.root(),
            prover_id=bytes(prover_id),
            m=pp.graph.degree(),
        )

    def public_inputs(self):
        return drgporep_public_inputs(
            self.prover_id,
            self.replica_node,
            self.replica_node_path,
            self.replica_root,
            self.replica_parents,
            self.replica_parents_paths,
            self.data_node,
            self.data_node_path,
            self.data_root,
        )
