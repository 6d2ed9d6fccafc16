"""Allocated field elements and the arithmetic gadgets built on them."""
from circuit.boolean import Boolean, field_into_allocated_bits_le  # bit decomposition
from r1cs import LC, ONE, as_fr, assigned  # substrate


class AllocatedNum:  # One aux variable plus its witness value (None in shape mode).
    def __init__(self, variable, value):
        self.variable = variable
        self.value = value

    @classmethod
    def alloc(cls, cs, value):  # value: Fr/int or None.
        value = None if value is None else as_fr(value)
        var = cs.alloc("num", lambda: assigned(value))
        return cls(var, value)

    def lc(self, coeff=1): return LC.of(self.variable, coeff)

    def inputize(self, cs):  # Expose as a public input bound to this variable.
        inp = cs.alloc_input("input variable", lambda: assigned(self.value))
        cs.enforce("enforce input is correct", LC.of(inp), LC.of(ONE), self.lc())
        return inp

    def into_bits_le(self, cs):  # Fr.NUM_BITS little-endian bits with one packing constraint (non-strict).
        bits = field_into_allocated_bits_le(cs, self.value)
        packed = LC([(b.variable, 1 << i) for i, b in enumerate(bits)])
        cs.enforce("unpacking constraint", packed, LC.of(ONE), self.lc())
        return [Boolean.is_(b) for b in bits]

    def mul(self, cs, other):
        value = None if self.value is None or other.value is None else self.value * other.value
        out = AllocatedNum(cs.alloc("product num", lambda: assigned(value)), value)
        cs.enforce("multiplication constraint", self.lc(), other.lc(), out.lc())
        return out

    def square(self, cs):
        value = None if self.value is None else self.value * self.value
        out = AllocatedNum(cs.alloc("squared num", lambda: assigned(value)), value)
        cs.enforce("squaring constraint", self.lc(), self.lc(), out.lc())
        return out

    def sub(self, cs, other):
        value = None if self.value is None or other.value is None else self.value - other.value
        out = AllocatedNum(cs.alloc("difference num", lambda: assigned(value)), value)
        cs.enforce("subtraction constraint", self.lc() - other.variable, LC.of(ONE), out.lc())
        return out

    @staticmethod
    def conditionally_reverse(cs, a, b, condition):  # (b, a) when condition holds, else (a, b).
        cond = condition.value
        if cond is None or a.value is None or b.value is None:
            vc = vd = None
        else:
            vc, vd = (b.value, a.value) if cond else (a.value, b.value)
        c = AllocatedNum(cs.alloc("conditional reversal result 1", lambda: assigned(vc)), vc)
        # (a - b) * condition = a - c
        cs.enforce("first conditional reversal", a.lc() - b.variable, condition.lc(), a.lc() - c.variable)
        d = AllocatedNum(cs.alloc("conditional reversal result 2", lambda: assigned(vd)), vd)
        # (b - a) * condition = b - d
        cs.enforce("second conditional reversal", b.lc() - a.variable, condition.lc(), b.lc() - d.variable)
        return c, d

    def __repr__(self): return f"AllocatedNum({self.variable}, {self.value!r})"