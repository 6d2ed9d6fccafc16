"""Packing bit vectors into as few public inputs as the field capacity allows."""
from field import Fr, bytes_to_bits_le  # capacity and off-circuit bit order
from r1cs import LC, ONE, assigned  # substrate


def pack_into_inputs(cs, bits):  # One public input and one packing constraint per Fr.CAPACITY-bit chunk.
    inputs = []
    for i in range(0, len(bits), Fr.CAPACITY):
        chunk = bits[i : i + Fr.CAPACITY]
        if any(b.value is None for b in chunk):
            value = None
        else:
            value = Fr(sum(1 << k for k, b in enumerate(chunk) if b.value))
        idx = i // Fr.CAPACITY
        inp = cs.alloc_input(f"input {idx}", lambda value=value: assigned(value))
        packed = LC([t for k, b in enumerate(chunk) for t in b.lc(1 << k).terms])
        cs.enforce(f"packing constraint {idx}", packed, LC.of(ONE), LC.of(inp))
        inputs.append(inp)
    return inputs


def compute_multipacking(bits):  # Off-circuit counterpart: the field elements pack_into_inputs exposes.
    bits = [bool(b) for b in bits]
    return [
        Fr(sum(1 << k for k, b in enumerate(bits[i : i + Fr.CAPACITY]) if b))
        for i in range(0, len(bits), Fr.CAPACITY)
    ]


def bytes_to_packed_inputs(data): return compute_multipacking(bytes_to_bits_le(data))
