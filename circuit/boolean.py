"""Boolean wires: allocated bits, negations and constants."""
from field import Fr, bytes_to_bits_le  # bit decomposition of witness values
from r1cs import LC, ONE, ShapeError, as_fr, assigned  # substrate


class AllocatedBit:  # Aux variable constrained to {0, 1}.
    def __init__(self, variable, value):
        self.variable = variable
        self.value = value  # bool or None in shape mode

    @classmethod
    def alloc(cls, cs, value):  # Allocate one bit with its booleanity constraint (1 - a) * a = 0.
        var = cs.alloc("boolean", lambda: assigned(value))
        cs.enforce("boolean constraint", LC.of(ONE) - var, LC.of(var), LC.zero())
        return cls(var, None if value is None else bool(value))


class Boolean:  # Either an allocated bit, its negation, or a constant.
    __slots__ = ("bit", "negated", "constant")

    def __init__(self, bit=None, negated=False, constant=None):
        self.bit = bit
        self.negated = negated
        self.constant = constant

    @classmethod
    def is_(cls, bit): return cls(bit=bit)

    @classmethod
    def not_(cls, bit): return cls(bit=bit, negated=True)

    @classmethod
    def const(cls, value): return cls(constant=bool(value))

    def is_constant(self): return self.bit is None

    @property
    def value(self):  # bool, or None when the underlying bit is unassigned.
        if self.bit is None:
            return self.constant
        if self.bit.value is None:
            return None
        return self.bit.value != self.negated

    def lc(self, coeff=1):  # coeff * self as a linear combination over ONE and the bit.
        coeff = coeff if isinstance(coeff, Fr) else Fr(int(coeff))
        if self.bit is None:
            return LC.of(ONE, coeff) if self.constant else LC.zero()
        if self.negated:
            return LC(((ONE, coeff), (self.bit.variable, -coeff)))
        return LC.of(self.bit.variable, coeff)

    def negate(self):
        if self.bit is None:
            return Boolean.const(not self.constant)
        return Boolean(bit=self.bit, negated=not self.negated)

    @staticmethod
    def and_(cs, a, b):  # a AND b; constants fold away without constraints.
        for x, y in ((a, b), (b, a)):
            if x.is_constant():
                return y if x.constant else Boolean.const(False)
        value = None if a.value is None or b.value is None else a.value and b.value
        var = cs.alloc("and result", lambda: assigned(value))
        cs.enforce("and constraint", a.lc(), b.lc(), LC.of(var))
        return Boolean.is_(AllocatedBit(var, value))

    def __repr__(self):
        if self.bit is None:
            return f"Boolean.const({self.constant})"
        return f"Boolean({'not ' if self.negated else ''}{self.bit.variable})"


def field_into_allocated_bits_le(cs, value):  # Fr/int value as Fr.NUM_BITS allocated bits, little-endian; no range check.
    values = as_fr(value).to_bits_le() if value is not None else [None] * Fr.NUM_BITS
    return [AllocatedBit.alloc(cs.namespace(f"bit {i}"), b) for i, b in enumerate(values)]


def field_into_boolean_vec_le(cs, value):
    return [Boolean.is_(b) for b in field_into_allocated_bits_le(cs, value)]


def bytes_into_boolean_vec(cs, value, size_bits):  # Allocate the little-endian bits of a byte string.
    if value is None:
        values = [None] * int(size_bits)
    else:
        values = bytes_to_bits_le(value)
        if len(values) != int(size_bits):
            raise ShapeError(f"expected {size_bits} bits, got {len(values)}")
    return [Boolean.is_(AllocatedBit.alloc(cs.namespace(f"bit {i}"), b)) for i, b in enumerate(values)]
