import hashlib  # blake2b for hash-to-curve

from field import Fr  # Jubjub base field = BLS12-381 scalar field

D = -(Fr(10240) / Fr(10241))  # Edwards d for -x^2 + y^2 = 1 + d x^2 y^2 (non-square, so addition is complete).
SUBGROUP_ORDER = 6554484396890773809930967563523245729705921265872317281365359162392183254199  # r_J
COFACTOR = 8
IDENTITY = (Fr.zero(), Fr.one())  # Neutral element (0, 1).
GROUP_HASH_DOMAIN = b"drgporep_jubjub_group_hash"  # Prefix for every group_hash preimage.

def is_on_curve(P):  # Check -x^2 + y^2 == 1 + d x^2 y^2.
    x, y = P
    xx, yy = x * x, y * y
    return yy - xx == Fr.one() + D * xx * yy

def is_identity(P): return P == IDENTITY

def neg(P): return (-P[0], P[1])  # Edwards negation flips x.

def add(P, Q):  # Complete twisted Edwards addition (a = -1).
    x1, y1 = P
    x2, y2 = Q
    t = D * x1 * x2 * y1 * y2
    x3 = (x1 * y2 + y1 * x2) / (Fr.one() + t)
    y3 = (y1 * y2 + x1 * x2) / (Fr.one() - t)
    return (x3, y3)

def double(P): return add(P, P)

def mul(P, n):  # Double-and-add scalar multiplication.
    if n < 0:
        return mul(neg(P), -n)
    out, a = IDENTITY, P
    while n:
        if n & 1:
            out = add(out, a)
        a, n = double(a), n >> 1
    return out

def mul_by_cofactor(P): return double(double(double(P)))  # Clear the 8-torsion component.

def is_in_subgroup(P): return is_on_curve(P) and is_identity(mul(P, SUBGROUP_ORDER))

def group_hash(tag):  # Hash a tag to a prime-order point by try-and-increment on y.
    tag = tag.encode() if isinstance(tag, str) else bytes(tag)
    ctr = 0
    while True:
        h = hashlib.blake2b(digest_size=64)
        h.update(GROUP_HASH_DOMAIN)
        h.update(tag)
        h.update(ctr.to_bytes(4, "little"))
        ctr += 1
        y = Fr(int.from_bytes(h.digest(), "little"))
        yy = y * y
        x = ((yy - Fr.one()) / (D * yy + Fr.one())).sqrt()  # d y^2 + 1 != 0 since d is a non-square
        if x is None:
            continue
        P = mul_by_cofactor((x, y))
        if not is_identity(P) and is_in_subgroup(P):
            return P
