"""Twisted Edwards point gadget over Jubjub (a = -1)."""
from circuit.num import AllocatedNum  # coordinates
from jubjub import D  # curve constant
from r1cs import LC, ONE, DivisionByZero, assigned  # substrate


class EdwardsPoint:  # Affine (x, y) with allocated coordinates.
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def get_x(self): return self.x

    def get_y(self): return self.y

    def value(self):  # (Fr, Fr) or None in shape mode.
        if self.x.value is None or self.y.value is None:
            return None
        return (self.x.value, self.y.value)

    def add(self, cs, other):  # Complete addition in six constraints.
        x1, y1, x2, y2 = self.x, self.y, other.x, other.y

        def product(name, compute):
            value = None if self.value() is None or other.value() is None else compute()
            return AllocatedNum(cs.alloc(name, lambda: assigned(value)), value)

        # U = (x1 + y1) * (x2 + y2)
        u = product("U", lambda: (x1.value + y1.value) * (x2.value + y2.value))
        cs.enforce("U computation", x1.lc() + y1.variable, x2.lc() + y2.variable, u.lc())
        # A = x1 * y2
        a = product("A", lambda: x1.value * y2.value)
        cs.enforce("A computation", x1.lc(), y2.lc(), a.lc())
        # B = y1 * x2
        b = product("B", lambda: y1.value * x2.value)
        cs.enforce("B computation", y1.lc(), x2.lc(), b.lc())
        # C = d * A * B
        c = product("C", lambda: D * a.value * b.value)
        cs.enforce("C computation", a.lc(D), b.lc(), c.lc())

        def quotient(name, num, den):
            if c.value is None:
                return AllocatedNum(cs.alloc(name, lambda: assigned(None)), None)
            n, d = num(), den()
            if d.is_zero():
                def fail():
                    raise DivisionByZero(f"{name}: denominator is zero")
                return AllocatedNum(cs.alloc(name, fail), None)
            value = n / d
            return AllocatedNum(cs.alloc(name, lambda: value), value)

        # x3 = (A + B) / (1 + C)
        x3 = quotient("x3", lambda: a.value + b.value, lambda: c.value + 1)
        cs.enforce("x3 computation", LC.of(ONE) + c.variable, x3.lc(), a.lc() + b.variable)
        # y3 = (U - A - B) / (1 - C)
        y3 = quotient("y3", lambda: u.value - a.value - b.value, lambda: -c.value + 1)
        cs.enforce("y3 computation", LC.of(ONE) - c.variable, y3.lc(), u.lc() - a.variable - b.variable)
        return EdwardsPoint(x3, y3)
