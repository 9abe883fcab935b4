from __future__ import annotations

import math
from typing import Tuple

from .constants import M_RSIN60, M_SQRT3_2


IJK = Tuple[int, int, int]
Vec2d = Tuple[float, float]

# Digits (directions) within the aperture-7 hierarchy.
CENTER_DIGIT = 0
K_AXES_DIGIT = 1
J_AXES_DIGIT = 2
JK_AXES_DIGIT = 3
I_AXES_DIGIT = 4
IK_AXES_DIGIT = 5
IJ_AXES_DIGIT = 6
INVALID_DIGIT = 7
NUM_DIGITS = INVALID_DIGIT

UNIT_VECS: Tuple[IJK, ...] = (
    (0, 0, 0),
    (0, 0, 1),
    (0, 1, 0),
    (0, 1, 1),
    (1, 0, 0),
    (1, 0, 1),
    (1, 1, 0),
)

_DIGIT_ROT_CCW = (0, 5, 3, 1, 6, 4, 2, 7)
_DIGIT_ROT_CW = (0, 3, 6, 2, 5, 1, 4, 7)


def _lround(x: float) -> int:
    """Round half away from zero (C lround)."""

    if x >= 0:
        return int(math.floor(x + 0.5))
    return -int(math.floor(-x + 0.5))


def normalize(c: IJK) -> IJK:
    """Return the canonical form: non-negative with at least one zero component."""

    i, j, k = c
    if i < 0:
        j -= i
        k -= i
        i = 0
    if j < 0:
        i -= j
        k -= j
        j = 0
    if k < 0:
        i -= k
        j -= k
        k = 0

    m = min(i, j, k)
    if m > 0:
        i -= m
        j -= m
        k -= m
    return (i, j, k)


def add(a: IJK, b: IJK) -> IJK:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: IJK, b: IJK) -> IJK:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(c: IJK, factor: int) -> IJK:
    return (c[0] * factor, c[1] * factor, c[2] * factor)


def _combine(c: IJK, i_vec: IJK, j_vec: IJK, k_vec: IJK) -> IJK:
    i, j, k = c
    return normalize(
        (
            i_vec[0] * i + j_vec[0] * j + k_vec[0] * k,
            i_vec[1] * i + j_vec[1] * j + k_vec[1] * k,
            i_vec[2] * i + j_vec[2] * j + k_vec[2] * k,
        )
    )


def neighbor(c: IJK, digit: int) -> IJK:
    """Step one unit in the given digit direction; center and invalid digits are no-ops."""

    if CENTER_DIGIT < digit < NUM_DIGITS:
        return normalize(add(c, UNIT_VECS[digit]))
    return c


def rotate60ccw(c: IJK) -> IJK:
    return _combine(c, (1, 1, 0), (0, 1, 1), (1, 0, 1))


def rotate60cw(c: IJK) -> IJK:
    return _combine(c, (1, 0, 1), (1, 1, 0), (0, 1, 1))


def down_ap7(c: IJK) -> IJK:
    """Coordinates of the center of this cell's aperture-7 children (ccw)."""

    return _combine(c, (3, 0, 1), (1, 3, 0), (0, 1, 3))


def down_ap7r(c: IJK) -> IJK:
    """Coordinates of the center of this cell's aperture-7 children (cw)."""

    return _combine(c, (3, 1, 0), (0, 3, 1), (1, 0, 3))


def down_ap3(c: IJK) -> IJK:
    return _combine(c, (2, 0, 1), (1, 2, 0), (0, 1, 2))


def down_ap3r(c: IJK) -> IJK:
    return _combine(c, (2, 1, 0), (0, 2, 1), (1, 0, 2))


def up_ap7(c: IJK) -> IJK:
    """Coordinates of the containing aperture-7 parent (ccw)."""

    i = c[0] - c[2]
    j = c[1] - c[2]
    return normalize((_lround((3 * i - j) / 7.0), _lround((i + 2 * j) / 7.0), 0))


def up_ap7r(c: IJK) -> IJK:
    """Coordinates of the containing aperture-7 parent (cw)."""

    i = c[0] - c[2]
    j = c[1] - c[2]
    return normalize((_lround((2 * i + j) / 7.0), _lround((3 * j - i) / 7.0), 0))


def unit_to_digit(c: IJK) -> int:
    """Digit for a unit vector, or INVALID_DIGIT if `c` is not one."""

    n = normalize(c)
    for digit, unit in enumerate(UNIT_VECS):
        if n == unit:
            return digit
    return INVALID_DIGIT


def rotate_digit60ccw(digit: int) -> int:
    return _DIGIT_ROT_CCW[digit]


def rotate_digit60cw(digit: int) -> int:
    return _DIGIT_ROT_CW[digit]


def to_hex2d(c: IJK) -> Vec2d:
    i = c[0] - c[2]
    j = c[1] - c[2]
    return (i - 0.5 * j, j * M_SQRT3_2)


def from_hex2d(v: Vec2d) -> IJK:
    """Lattice coordinates of the hex containing a 2D point."""

    x, y = v
    a1 = abs(x)
    a2 = abs(y)

    # First quadrant, then fold.
    x2 = a2 * M_RSIN60
    x1 = a1 + x2 / 2.0

    m1 = int(x1)
    m2 = int(x2)

    r1 = x1 - m1
    r2 = x2 - m2

    if r1 < 0.5:
        if r1 < 1.0 / 3.0:
            if r2 < (1.0 + r1) / 2.0:
                i, j = m1, m2
            else:
                i, j = m1, m2 + 1
        else:
            if r2 < (1.0 - r1):
                j = m2
            else:
                j = m2 + 1

            if (1.0 - r1) <= r2 and r2 < (2.0 * r1):
                i = m1 + 1
            else:
                i = m1
    else:
        if r1 < 2.0 / 3.0:
            if r2 < (1.0 - r1):
                j = m2
            else:
                j = m2 + 1

            if (2.0 * r1 - 1.0) < r2 and r2 < (1.0 - r1):
                i = m1
            else:
                i = m1 + 1
        else:
            if r2 < (r1 / 2.0):
                i, j = m1 + 1, m2
            else:
                i, j = m1 + 1, m2 + 1

    if x < 0.0:
        if j % 2 == 0:
            axis_i = j // 2
            diff = i - axis_i
            i = i - 2 * diff
        else:
            axis_i = (j + 1) // 2
            diff = i - axis_i
            i = i - (2 * diff + 1)

    if y < 0.0:
        i = i - (2 * j + 1) // 2
        j = -j

    return normalize((i, j, 0))
