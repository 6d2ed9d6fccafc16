"""Proof of retrievability: Merkle inclusion of one leaf against a public root.

Public inputs, in order: the leaf value, its packed path direction bits, the root.
"""
from circuit.boolean import AllocatedBit, Boolean  # path direction bits
from circuit.multipack import compute_multipacking, pack_into_inputs  # direction bits as inputs
from circuit.num import AllocatedNum  # leaf, siblings, running hash
from circuit.pedersen_hash import pedersen_hash  # leaf and node compression
from field import Fr  # field width
from pedersen import Personalization, merkle_personalization  # domain tags
from r1cs import LC, ONE, ShapeError, as_fr, assigned  # substrate


def proof_of_retrievability(cs, value, lambda_, auth_path, root):
    """Verify `value` sits at the leaf addressed by `auth_path` under `root`.

    auth_path is `[(sibling, cur_is_right)]` from the leaf level up, or `None`
    per element in shape mode. The leaf is hashed over its field bits padded
    with constant zeros to `8 * lambda_` bits.
    """
    leaf_width = 8 * int(lambda_)
    if leaf_width < Fr.NUM_BITS:
        raise ShapeError(f"leaf of {lambda_} bytes cannot hold a field element")

    value_num = AllocatedNum.alloc(cs.namespace("value num"), value)
    value_num.inputize(cs.namespace("value"))
    value_bits = value_num.into_bits_le(cs.namespace("value bits"))
    value_bits += [Boolean.const(False)] * (leaf_width - len(value_bits))
    cur = pedersen_hash(cs.namespace("value hash"), Personalization.Leaf, value_bits).get_x()

    auth_path_bits = []
    for i, elt in enumerate(auth_path):
        lcs = cs.namespace(f"merkle tree hash {i}")
        sibling, is_right = (None, None) if elt is None else elt
        cur_is_right = Boolean.is_(AllocatedBit.alloc(lcs.namespace("position bit"), is_right))
        path_element = AllocatedNum.alloc(lcs.namespace("path element"), sibling)
        xl, xr = AllocatedNum.conditionally_reverse(
            lcs.namespace("conditional reversal of preimage"), cur, path_element, cur_is_right
        )
        preimage = xl.into_bits_le(lcs.namespace("xl into bits")) + xr.into_bits_le(lcs.namespace("xr into bits"))
        cur = pedersen_hash(lcs.namespace("computation of pedersen hash"), merkle_personalization(i), preimage).get_x()
        auth_path_bits.append(cur_is_right)

    pack_into_inputs(cs.namespace("packed auth_path"), auth_path_bits)

    rt = AllocatedNum.alloc(cs.namespace("root value"), root)
    cs.enforce("enforce root", cur.lc(), LC.of(ONE), rt.lc())
    rt.inputize(cs.namespace("root"))


def por_public_inputs(value, auth_path, root):  # Verifier-side inputs for one inclusion check; needs every value.
    directions = [bool(assigned(elt)[1]) for elt in auth_path]
    return [as_fr(assigned(value)), *compute_multipacking(directions), as_fr(assigned(root))]
