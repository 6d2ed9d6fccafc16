"""In-circuit key derivation: Pedersen(Kdf) over identity bits and padded parent bits."""
from circuit.pedersen_hash import pedersen_hash  # compression
from params import PARENT_BITS_WIDTH  # fixed block width
from pedersen import Personalization  # Kdf domain tag
from r1cs import ShapeError  # input length mismatch


def kdf(cs, id_bits, parents_bits, m):  # Derived key as an AllocatedNum (x-coordinate of the hash).
    ciphertexts = list(id_bits)
    for bits in parents_bits:
        ciphertexts.extend(bits)
    expected = PARENT_BITS_WIDTH * (1 + int(m))
    if len(ciphertexts) != expected:
        raise ShapeError(f"invalid kdf input length {len(ciphertexts)}, expected {expected} for degree {m}")
    return pedersen_hash(cs.namespace("hash"), Personalization.Kdf, ciphertexts).get_x()
