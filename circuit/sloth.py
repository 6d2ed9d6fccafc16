"""In-circuit sloth decode: x <- x^5 - key per round, four constraints per round."""
from circuit.num import AllocatedNum  # ciphertext and round values


def decode(cs, key, ciphertext, rounds):  # key: AllocatedNum; ciphertext: Fr/int or None.
    plaintext = AllocatedNum.alloc(cs.namespace("decoded"), ciphertext)
    for i in range(int(rounds)):
        rcs = cs.namespace(f"round {i}")
        c = plaintext
        c2 = c.square(rcs.namespace("c^2"))
        c4 = c2.square(rcs.namespace("c^4"))
        c5 = c4.mul(rcs.namespace("c^5"), c)
        plaintext = c5.sub(rcs.namespace("c^5 - k"), key)
    return plaintext
