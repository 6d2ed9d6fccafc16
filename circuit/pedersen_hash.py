"""In-circuit windowed Pedersen hash, matching `pedersen.pedersen_hash` window for window."""
from circuit.boolean import Boolean  # input bits and padding
from circuit.edwards import EdwardsPoint  # accumulator
from circuit.lookup import lookup3_xy  # per-window table selection
from params import PEDERSEN_WINDOW_BITS  # window width
from pedersen import window_table  # constant window tables
from r1cs import ShapeError  # empty input


def pedersen_hash(cs, personalization, bits):  # Returns the digest point; callers use its x-coordinate.
    bits = list(bits)
    if not bits:
        raise ShapeError("pedersen hash of empty input")
    while len(bits) % PEDERSEN_WINDOW_BITS:
        bits.append(Boolean.const(False))
    acc = None
    for w in range(len(bits) // PEDERSEN_WINDOW_BITS):
        wcs = cs.namespace(f"window {w}")
        window = bits[w * PEDERSEN_WINDOW_BITS : (w + 1) * PEDERSEN_WINDOW_BITS]
        x, y = lookup3_xy(wcs.namespace("lookup"), window, window_table(personalization, w))
        point = EdwardsPoint(x, y)
        acc = point if acc is None else acc.add(wcs.namespace("addition"), point)
    return acc
