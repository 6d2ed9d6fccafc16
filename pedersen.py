import functools  # cache generators and window tables
from enum import StrEnum  # typed personalization tags

import jubjub  # Edwards arithmetic + group hash
from field import Fr  # leaf/node values
from params import PEDERSEN_SEGMENT_WINDOWS, PEDERSEN_WINDOW_BITS  # window geometry


class Personalization(StrEnum):  # Domain tags; every tag gets its own generator family.
    Leaf = "leaf"
    MerkleTree = "merkle_tree"
    Kdf = "kdf"


def merkle_personalization(level):  # Per-level tag for interior Merkle nodes.
    return f"{Personalization.MerkleTree}/{int(level)}"


@functools.lru_cache(maxsize=None)
def generator(personalization, segment):  # Independent generator G_s for one segment of one tag.
    return jubjub.group_hash(f"{personalization}/{int(segment)}")


@functools.lru_cache(maxsize=None)
def window_base(personalization, window):  # 8^j * G_s for global window index (s, j) = divmod(window, 63).
    segment, j = divmod(int(window), PEDERSEN_SEGMENT_WINDOWS)
    if j == 0:
        return generator(personalization, segment)
    return jubjub.mul_by_cofactor(window_base(personalization, window - 1))  # 8 * previous


@functools.lru_cache(maxsize=None)
def window_table(personalization, window):  # The 8 points w * base for w in 0..7.
    base = window_base(personalization, window)
    table = [jubjub.IDENTITY, base]
    for _ in range(2, 1 << PEDERSEN_WINDOW_BITS):
        table.append(jubjub.add(table[-1], base))
    return tuple(table)


def window_values(bits):  # Split bits into little-endian 3-bit window values, zero-padding the tail.
    bits = [bool(b) for b in bits]
    out = []
    for i in range(0, len(bits), PEDERSEN_WINDOW_BITS):
        chunk = bits[i : i + PEDERSEN_WINDOW_BITS]
        out.append(sum(int(b) << k for k, b in enumerate(chunk)))
    return out


def pedersen_hash(personalization, bits):  # Sum of per-window table lookups; returns the point.
    values = window_values(bits)
    if not values:
        raise ValueError("pedersen hash of empty input")
    acc = jubjub.IDENTITY
    for w, value in enumerate(values):
        acc = jubjub.add(acc, window_table(personalization, w)[value])
    return acc


def pedersen_hash_x(personalization, bits): return pedersen_hash(personalization, bits)[0]  # x-coordinate digest.


def leaf_bits(value, lambda_):  # Field bits of a leaf, right-padded with zeros to 8 * lambda_.
    bits = (value if isinstance(value, Fr) else Fr(value)).to_bits_le()
    width = 8 * int(lambda_)
    if len(bits) > width:
        raise ValueError(f"leaf of {len(bits)} bits does not fit in {lambda_} bytes")
    return bits + [False] * (width - len(bits))


def hash_leaf(value, lambda_):  # Leaf commitment: Pedersen(Leaf) over the padded leaf bits.
    return pedersen_hash_x(Personalization.Leaf, leaf_bits(value, lambda_))


def hash_node(level, left, right):  # Interior node: Pedersen(MerkleTree/level) over left || right bits.
    return pedersen_hash_x(merkle_personalization(level), left.to_bits_le() + right.to_bits_le())
