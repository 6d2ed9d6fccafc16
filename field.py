class MontgomeryField:  # Prime field element in Montgomery representation.
    R = 1 << 256  # Montgomery radix.
    MASK = R - 1  # Low-256-bit mask.

    def __init_subclass__(cls):  # Precompute Montgomery constants and bit sizes for each subclass.
        if "MODULUS" not in cls.__dict__:
            return
        p = cls.MODULUS
        if p % 2 == 0 or p >= cls.R:
            raise ValueError("MODULUS must be odd and < 2^256")
        cls.NP = (-pow(p, -1, cls.R)) & cls.MASK
        cls.R1 = cls.R % p
        cls.R2 = (cls.R1 * cls.R1) % p
        cls.NUM_BITS = p.bit_length()  # Bits needed for any canonical element.
        cls.CAPACITY = cls.NUM_BITS - 1  # Bits that always fit without reduction.
        cls.BYTES = (cls.NUM_BITS + 7) // 8

    def __init__(self, x=0, mont=False):  # Build element from canonical int or raw Montgomery value.
        p = type(self).MODULUS
        self.v = x % p if mont else type(self)._red((x % p) * type(self).R2)

    @classmethod
    def _red(cls, t):  # Montgomery reduction: t * R^-1 mod MODULUS.
        m = ((t & cls.MASK) * cls.NP) & cls.MASK
        u = (t + m * cls.MODULUS) >> 256
        return u - cls.MODULUS if u >= cls.MODULUS else u

    zero = classmethod(lambda cls: cls(0, mont=True))  # Additive identity in Montgomery form.

    one = classmethod(lambda cls: cls(cls.R1, mont=True))  # Multiplicative identity in Montgomery form.

    def to_int(self): return type(self)._red(self.v)  # Convert to canonical integer form.

    @classmethod
    def from_bytes_le(cls, data):  # Parse canonical little-endian bytes; reject values >= MODULUS.
        data = bytes(data)
        if len(data) > cls.BYTES:
            raise ValueError(f"expected at most {cls.BYTES} bytes, got {len(data)}")
        x = int.from_bytes(data, "little")
        if x >= cls.MODULUS:
            raise ValueError("bytes do not encode a canonical field element")
        return cls(x)

    def to_bytes_le(self): return self.to_int().to_bytes(type(self).BYTES, "little")  # Canonical little-endian bytes.

    def to_bits_le(self):  # NUM_BITS little-endian bits of the canonical integer.
        x = self.to_int()
        return [bool((x >> i) & 1) for i in range(type(self).NUM_BITS)]

    def is_zero(self): return self.v == 0

    def inv(self):  # Multiplicative inverse in the same field.
        if self.v == 0: raise ZeroDivisionError("cannot invert zero")
        return type(self)(pow(self.to_int(), -1, type(self).MODULUS))

    def is_square(self):  # Euler's criterion (zero counts as a square).
        p = type(self).MODULUS
        return self.v == 0 or pow(self.to_int(), (p - 1) // 2, p) == 1

    def sqrt(self):  # Tonelli-Shanks square root; None for non-residues.
        cls = type(self)
        p = cls.MODULUS
        a = self.to_int()
        if a == 0:
            return cls.zero()
        if pow(a, (p - 1) // 2, p) != 1:
            return None
        q, s = p - 1, 0
        while q % 2 == 0:
            q //= 2
            s += 1
        z = 2
        while pow(z, (p - 1) // 2, p) != p - 1:
            z += 1
        m, c, t, r = s, pow(z, q, p), pow(a, q, p), pow(a, (q + 1) // 2, p)
        while t != 1:
            i, t2 = 0, t
            while t2 != 1:
                t2 = t2 * t2 % p
                i += 1
            b = pow(c, 1 << (m - i - 1), p)
            m, c, t, r = i, b * b % p, t * b * b % p, r * b % p
        return cls(r)

    def _c(self, other):  # Coerce int/same-type operand into field element.
        cls = type(self)
        if isinstance(other, cls):
            return other
        if isinstance(other, int):
            return cls(other)
        raise TypeError(f"expected {cls.__name__} or int")

    def __add__(self, other):  # Field addition modulo MODULUS.
        v = self.v + self._c(other).v
        return type(self)(v - type(self).MODULUS if v >= type(self).MODULUS else v, mont=True)

    def __sub__(self, other):  # Field subtraction modulo MODULUS.
        v = self.v - self._c(other).v
        return type(self)(v + type(self).MODULUS if v < 0 else v, mont=True)

    def __mul__(self, other):  # Field multiplication via Montgomery reduction.
        return type(self)(type(self)._red(self.v * self._c(other).v), mont=True)

    def __pow__(self, e):  # Exponentiation with modular power semantics.
        return (self.inv()) ** (-e) if e < 0 else type(self)(pow(self.to_int(), e, type(self).MODULUS))

    def __truediv__(self, other):  # Division as multiply by inverse.
        return self * self._c(other).inv()

    def __neg__(self):  # Additive inverse modulo MODULUS.
        return self if self.v == 0 else type(self)(type(self).MODULUS - self.v, mont=True)

    def __eq__(self, other):  # Equality with field elements or canonical ints.
        if isinstance(other, type(self)):
            return self.v == other.v
        return self.to_int() == (other % type(self).MODULUS) if isinstance(other, int) else False

    def __hash__(self): return hash((type(self).__name__, self.v))

    def __int__(self): return self.to_int()  # int(...) exposes canonical integer.

    def __repr__(self): return f"{type(self).__name__}({self.to_int()})"  # Debug-friendly printable form.

class Fr(MontgomeryField):  # BLS12-381 scalar field (also the Jubjub base field).
    MODULUS = 52435875175126190479447740508185965837690552500527637822603658699938581184513  # BLS12-381 r

def bytes_to_bits_le(data):  # Bytes in order, bits least-significant first within each byte.
    return [bool((byte >> i) & 1) for byte in bytes(data) for i in range(8)]
