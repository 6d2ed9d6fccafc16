from field import Fr  # sloth operates over the BLS12-381 scalar field
from params import SLOTH_DEFAULT_ROUNDS  # shared encode/decode round count

DEFAULT_ROUNDS = SLOTH_DEFAULT_ROUNDS
SLOTH_V = pow(5, -1, Fr.MODULUS - 1)  # Fifth-root exponent: 5 * SLOTH_V == 1 mod (r - 1).

def encode(key, plaintext, rounds=DEFAULT_ROUNDS):  # Slow direction: x <- (x + key)^(1/5) per round.
    c = plaintext
    for _ in range(int(rounds)):
        c = (c + key) ** SLOTH_V
    return c

def decode(key, ciphertext, rounds=DEFAULT_ROUNDS):  # Fast direction: x <- x^5 - key per round.
    p = ciphertext
    for _ in range(int(rounds)):
        p = p ** 5 - key
    return p
