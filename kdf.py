from field import Fr, bytes_to_bits_le  # parent values, derived key, identity bits
from params import IDENTITY_SIZE, PARENT_BITS_WIDTH  # fixed KDF block widths
from pedersen import Personalization, pedersen_hash_x  # KDF compression

def parent_bits(value):  # Field bits of one parent, right-padded to PARENT_BITS_WIDTH.
    bits = value.to_bits_le()
    return bits + [False] * (PARENT_BITS_WIDTH - len(bits))

def kdf(prover_id, parents, m):  # Derive the per-node key from identity bytes and ordered parent values.
    prover_id = bytes(prover_id)
    if len(prover_id) != IDENTITY_SIZE:
        raise ValueError(f"prover id must be {IDENTITY_SIZE} bytes, got {len(prover_id)}")
    ciphertexts = bytes_to_bits_le(prover_id)
    for parent in parents:
        ciphertexts.extend(parent_bits(parent if isinstance(parent, Fr) else Fr(parent)))
    if len(ciphertexts) != PARENT_BITS_WIDTH * (1 + int(m)):
        raise ValueError(f"invalid kdf input length {len(ciphertexts)} for degree {m}")
    return pedersen_hash_x(Personalization.Kdf, ciphertexts)
