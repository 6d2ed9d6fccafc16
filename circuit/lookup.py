"""Three-bit window lookup of constant curve points."""
from circuit.boolean import Boolean  # window selector bits
from circuit.num import AllocatedNum  # looked-up coordinates
from r1cs import LC, ONE, assigned  # substrate


def _window_index(bits):  # b0 + 2 b1 + 4 b2, or None when any bit is unassigned.
    values = [b.value for b in bits]
    if any(v is None for v in values):
        return None
    return sum(int(v) << i for i, v in enumerate(values))


def _select(cs, name, bits, p01, coords):  # Enforce b2 * L1 = out - L0 for one coordinate column.
    b0, b1, b2 = bits
    c = coords
    index = _window_index(bits)
    value = None if index is None else c[index]
    out = AllocatedNum(cs.alloc(name, lambda: assigned(value)), value)
    l0 = LC.of(ONE, c[0]) + b0.lc(c[1] - c[0]) + b1.lc(c[2] - c[0]) + p01.lc(c[3] - c[2] - c[1] + c[0])
    l1 = (
        LC.of(ONE, c[4] - c[0])
        + b0.lc(c[5] - c[4] - c[1] + c[0])
        + b1.lc(c[6] - c[4] - c[2] + c[0])
        + p01.lc(c[7] - c[6] - c[5] + c[4] - c[3] + c[2] + c[1] - c[0])
    )
    cs.enforce(f"{name} lookup", b2.lc(), l1, out.lc() - l0)
    return out


def lookup3_xy(cs, bits, table):  # Select table[b0 + 2 b1 + 4 b2] as (x, y) nums.
    if len(bits) != 3 or len(table) != 8:
        raise ValueError("lookup3_xy needs 3 bits and an 8-entry table")
    p01 = Boolean.and_(cs.namespace("b0 and b1"), bits[0], bits[1])
    x = _select(cs, "x", bits, p01, [pt[0] for pt in table])
    y = _select(cs, "y", bits, p01, [pt[1] for pt in table])
    return x, y
