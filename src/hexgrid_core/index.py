from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Sequence, Tuple

from .basecells import is_base_cell_pentagon
from .constants import MAX_RES, NUM_BASE_CELLS
from .errors import ParseError
from .ijk import (
    CENTER_DIGIT,
    INVALID_DIGIT,
    K_AXES_DIGIT,
    rotate_digit60ccw,
    rotate_digit60cw,
)


# Bit layout of a 64-bit cell index.
HIGH_BIT_OFFSET = 63
MODE_OFFSET = 59
RESERVED_OFFSET = 56
RES_OFFSET = 52
BC_OFFSET = 45
PER_DIGIT_OFFSET = 3

HIGH_BIT_MASK = 1 << HIGH_BIT_OFFSET
MODE_MASK = 15 << MODE_OFFSET
RESERVED_MASK = 7 << RESERVED_OFFSET
RES_MASK = 15 << RES_OFFSET
BC_MASK = 127 << BC_OFFSET
DIGIT_MASK = 7
UINT64_MASK = (1 << 64) - 1

CELL_MODE = 1

# Resolution 0, base cell 0, every digit slot holding the unused sentinel.
H3_INIT = 35184372088831

H3_NULL = 0

MAX_STRING_LEN = 16


@dataclass(frozen=True)
class UnpackedIndex:
    mode: int
    resolution: int
    base_cell: int
    digits: Tuple[int, ...]


def _digit_offset(res: int) -> int:
    return (MAX_RES - res) * PER_DIGIT_OFFSET


def get_high_bit(h: int) -> int:
    return (h & HIGH_BIT_MASK) >> HIGH_BIT_OFFSET


def get_mode(h: int) -> int:
    return (h & MODE_MASK) >> MODE_OFFSET


def set_mode(h: int, mode: int) -> int:
    return (h & ~MODE_MASK) | ((mode & 15) << MODE_OFFSET)


def get_reserved_bits(h: int) -> int:
    return (h & RESERVED_MASK) >> RESERVED_OFFSET


def get_resolution(h: int) -> int:
    return (h & RES_MASK) >> RES_OFFSET


def set_resolution(h: int, res: int) -> int:
    return (h & ~RES_MASK) | ((res & 15) << RES_OFFSET)


def get_base_cell(h: int) -> int:
    return (h & BC_MASK) >> BC_OFFSET


def set_base_cell(h: int, base_cell: int) -> int:
    return (h & ~BC_MASK) | ((base_cell & 127) << BC_OFFSET)


def get_digit(h: int, res: int) -> int:
    return (h >> _digit_offset(res)) & DIGIT_MASK


def set_digit(h: int, res: int, digit: int) -> int:
    offset = _digit_offset(res)
    return (h & ~(DIGIT_MASK << offset)) | ((digit & DIGIT_MASK) << offset)


def pack(mode: int, resolution: int, base_cell: int, digits: Sequence[int] = ()) -> int:
    """Build an index from its fields.

    `digits[n - 1]` is the digit at resolution n; slots not supplied hold the
    unused sentinel. Fields are masked to width, so any input yields some
    64-bit pattern. Use `is_valid_cell` to check the result.
    """

    h = set_mode(H3_INIT, mode)
    h = set_resolution(h, resolution)
    h = set_base_cell(h, base_cell)
    for r, digit in enumerate(digits[:MAX_RES], start=1):
        h = set_digit(h, r, digit)
    return h


def unpack(h: int) -> UnpackedIndex:
    """Split an index into (mode, resolution, base cell, digits up to its resolution)."""

    h &= UINT64_MASK
    res = get_resolution(h)
    return UnpackedIndex(
        mode=get_mode(h),
        resolution=res,
        base_cell=get_base_cell(h),
        digits=tuple(get_digit(h, r) for r in range(1, res + 1)),
    )


def leading_non_zero_digit(h: int) -> int:
    """First non-zero digit, or CENTER_DIGIT if every digit is zero."""

    for r in range(1, get_resolution(h) + 1):
        digit = get_digit(h, r)
        if digit:
            return digit
    return CENTER_DIGIT


def is_valid_cell(h: int) -> bool:
    if h < 0 or h > UINT64_MASK:
        return False
    if get_high_bit(h) != 0:
        return False
    if get_mode(h) != CELL_MODE:
        return False
    if get_reserved_bits(h) != 0:
        return False

    base_cell = get_base_cell(h)
    if base_cell >= NUM_BASE_CELLS:
        return False

    res = get_resolution(h)
    found_first_non_zero = False
    for r in range(1, res + 1):
        digit = get_digit(h, r)
        if not found_first_non_zero and digit != CENTER_DIGIT:
            found_first_non_zero = True
            if is_base_cell_pentagon(base_cell) and digit == K_AXES_DIGIT:
                return False
        if digit < CENTER_DIGIT or digit >= INVALID_DIGIT:
            return False

    for r in range(res + 1, MAX_RES + 1):
        if get_digit(h, r) != INVALID_DIGIT:
            return False

    return True


def is_pentagon(h: int) -> bool:
    """True when the cell is one of the twelve pentagons at its resolution."""

    return is_base_cell_pentagon(get_base_cell(h)) and leading_non_zero_digit(h) == CENTER_DIGIT


def rotate60ccw(h: int) -> int:
    """Rotate every digit of the index 60 degrees counter-clockwise."""

    for r in range(1, get_resolution(h) + 1):
        h = set_digit(h, r, rotate_digit60ccw(get_digit(h, r)))
    return h


def rotate60cw(h: int) -> int:
    for r in range(1, get_resolution(h) + 1):
        h = set_digit(h, r, rotate_digit60cw(get_digit(h, r)))
    return h


def rotate_pent60ccw(h: int) -> int:
    """Rotate a pentagon-based index ccw, stepping over the deleted K sub-sequence."""

    found_first_non_zero = False
    for r in range(1, get_resolution(h) + 1):
        h = set_digit(h, r, rotate_digit60ccw(get_digit(h, r)))

        if not found_first_non_zero and get_digit(h, r) != CENTER_DIGIT:
            found_first_non_zero = True
            if leading_non_zero_digit(h) == K_AXES_DIGIT:
                h = rotate60ccw(h)
    return h


def cell_to_string(h: int) -> str:
    """Lowercase hexadecimal form without prefix, e.g. `8a2a10766d87fff`."""

    return format(h & UINT64_MASK, "x")


def string_to_cell(s: str) -> int:
    """Parse the hexadecimal form of an index.

    Accepts upper or lower case and an optional `0x` prefix. The result is
    not checked for validity.
    """

    v = s.strip().lower().removeprefix("0x")
    if not v:
        raise ParseError("empty cell index string")
    if len(v) > MAX_STRING_LEN:
        raise ParseError(f"cell index string too long (expected <= {MAX_STRING_LEN} hex digits)")
    if any(ch not in string.hexdigits for ch in v):
        raise ParseError(f"invalid hex in cell index string: {s!r}")
    return int(v, 16)
