from __future__ import annotations

from typing import Iterator, List, Optional

from .constants import MAX_RES
from .errors import DomainError, InvalidIndexError
from .ijk import CENTER_DIGIT, IJ_AXES_DIGIT, INVALID_DIGIT, K_AXES_DIGIT
from .index import get_resolution, is_pentagon, is_valid_cell, set_digit, set_resolution
from .projection import check_resolution


def parent(h: int, res: int) -> Optional[int]:
    """Ancestor of `h` at resolution `res`.

    Returns None when `res` is outside [0, resolution of h] or `h` is invalid.
    """

    if not is_valid_cell(h):
        return None
    child_res = get_resolution(h)
    if res < 0 or res > child_res:
        return None
    if res == child_res:
        return h

    p = set_resolution(h, res)
    for r in range(res + 1, child_res + 1):
        p = set_digit(p, r, INVALID_DIGIT)
    return p


def center_child(h: int, res: int) -> Optional[int]:
    """Descendant at `res` sharing the center of `h` (digit 0 at every new level)."""

    if not is_valid_cell(h):
        return None
    parent_res = get_resolution(h)
    if res < parent_res or res > MAX_RES:
        return None
    if res == parent_res:
        return h

    c = set_resolution(h, res)
    for r in range(parent_res + 1, res + 1):
        c = set_digit(c, r, CENTER_DIGIT)
    return c


def _check_child_res(h: int, res: int) -> int:
    if not is_valid_cell(h):
        raise InvalidIndexError(f"invalid cell index: {h:#x}")
    check_resolution(res)
    parent_res = get_resolution(h)
    if res < parent_res:
        raise DomainError(f"child resolution {res} is coarser than cell resolution {parent_res}")
    return parent_res


def iter_children(h: int, res: int) -> Iterator[int]:
    """Yield the descendants of `h` at `res` in ascending order.

    Pentagons skip the K digit while on their center chain, so they have
    6 children per level instead of 7.
    """

    parent_res = _check_child_res(h, res)
    yield from _expand(h, parent_res + 1, res)


def _expand(h: int, r: int, res: int) -> Iterator[int]:
    if r > res:
        yield h
        return
    skip_k = is_pentagon(h)
    base = set_resolution(h, r)
    for digit in range(CENTER_DIGIT, IJ_AXES_DIGIT + 1):
        if skip_k and digit == K_AXES_DIGIT:
            continue
        yield from _expand(set_digit(base, r, digit), r + 1, res)


def children(h: int, res: int) -> List[int]:
    """All descendants of `h` at resolution `res`, ascending."""

    return list(iter_children(h, res))


def children_count(h: int, res: int) -> int:
    parent_res = _check_child_res(h, res)
    n = res - parent_res
    if is_pentagon(h):
        return 1 + 5 * (7**n - 1) // 6
    return 7**n
