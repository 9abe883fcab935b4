from __future__ import annotations

import logging
from collections import deque
from itertools import product
from typing import Callable, Dict, List, Optional, Tuple

from .basecells import (
    BASE_CELL_DATA,
    BASE_CELL_NEIGHBOR_60CCW_ROTS,
    BASE_CELL_NEIGHBORS,
    INVALID_BASE_CELL,
    base_cell_is_cw_offset,
    is_base_cell_pentagon,
    is_base_cell_polar_pentagon,
)
from .constants import is_class_iii
from .errors import DomainError, InvalidIndexError, UnsupportedTopologyError
from .ijk import (
    CENTER_DIGIT,
    IJ_AXES_DIGIT,
    IJK,
    IK_AXES_DIGIT,
    INVALID_DIGIT,
    I_AXES_DIGIT,
    JK_AXES_DIGIT,
    J_AXES_DIGIT,
    K_AXES_DIGIT,
    UNIT_VECS,
    add,
    down_ap7,
    down_ap7r,
    normalize,
    rotate_digit60ccw,
)
from .index import (
    get_base_cell,
    get_digit,
    get_resolution,
    is_pentagon,
    is_valid_cell,
    leading_non_zero_digit,
    rotate60ccw,
    rotate60cw,
    rotate_pent60ccw,
    set_base_cell,
    set_digit,
)

logger = logging.getLogger(__name__)

# Order of the sides walked around each ring, after stepping out along NEXT_RING_DIRECTION.
DIRECTIONS = (J_AXES_DIGIT, JK_AXES_DIGIT, K_AXES_DIGIT, IK_AXES_DIGIT, I_AXES_DIGIT, IJ_AXES_DIGIT)
NEXT_RING_DIRECTION = I_AXES_DIGIT

# Base cells adjacent to the polar pentagons that keep their orientation.
_POLAR_PENTAGON_EXEMPT = (118, 8)


def _build_digit_tables(down: Callable[[IJK], IJK]) -> Tuple[Tuple[Tuple[int, ...], ...], Tuple[Tuple[int, ...], ...]]:
    """Result of moving from child digit `old` in direction `dir`.

    Returns (new_digit[old][dir], adjustment[old][dir]): the digit that
    replaces `old`, and the direction the parent must move in (CENTER when the
    move stays within the parent).
    """

    decompose = {}
    for adj, new in product(range(7), repeat=2):
        decompose.setdefault(normalize(add(down(UNIT_VECS[adj]), UNIT_VECS[new])), (adj, new))

    new_digit = []
    adjustment = []
    for old in range(7):
        digits_row = []
        adjust_row = []
        for direction in range(7):
            adj, new = decompose[normalize(add(UNIT_VECS[old], UNIT_VECS[direction]))]
            digits_row.append(new)
            adjust_row.append(adj)
        new_digit.append(tuple(digits_row))
        adjustment.append(tuple(adjust_row))
    return tuple(new_digit), tuple(adjustment)


# Class III digits sit below a parent via down_ap7, Class II via down_ap7r.
NEW_DIGIT_III, NEW_ADJUSTMENT_III = _build_digit_tables(down_ap7)
NEW_DIGIT_II, NEW_ADJUSTMENT_II = _build_digit_tables(down_ap7r)


def neighbor_rotations(h: int, direction: int, rotations: int) -> Optional[Tuple[int, int]]:
    """Step from `h` one cell in `direction`.

    `rotations` is the number of ccw rotations already accumulated along a
    walk; it is applied to `direction` and returned updated along with the
    neighbor. Returns None when `direction` is the deleted K direction out of
    a pentagon.
    """

    if direction < CENTER_DIGIT or direction >= INVALID_DIGIT:
        raise DomainError(f"direction must be in [0, 6], got {direction}")

    current = h
    rotations %= 6
    for _ in range(rotations):
        direction = rotate_digit60ccw(direction)

    new_rotations = 0
    old_base_cell = get_base_cell(current)
    if old_base_cell >= len(BASE_CELL_DATA):
        raise InvalidIndexError(f"invalid base cell {old_base_cell}")
    old_leading_digit = leading_non_zero_digit(current)

    # Carry the move up through the digits until it is absorbed.
    r = get_resolution(current) - 1
    while True:
        if r == -1:
            current = set_base_cell(current, BASE_CELL_NEIGHBORS[old_base_cell][direction])
            new_rotations = BASE_CELL_NEIGHBOR_60CCW_ROTS[old_base_cell][direction]

            if get_base_cell(current) == INVALID_BASE_CELL:
                # The deleted K vertex: this edge borders the IK neighbor.
                current = set_base_cell(current, BASE_CELL_NEIGHBORS[old_base_cell][IK_AXES_DIGIT])
                new_rotations = BASE_CELL_NEIGHBOR_60CCW_ROTS[old_base_cell][IK_AXES_DIGIT]
                current = rotate60ccw(current)
                rotations += 1
            break

        old_digit = get_digit(current, r + 1)
        if old_digit == INVALID_DIGIT:
            raise InvalidIndexError(f"invalid digit at resolution {r + 1}")
        if is_class_iii(r + 1):
            current = set_digit(current, r + 1, NEW_DIGIT_III[old_digit][direction])
            next_dir = NEW_ADJUSTMENT_III[old_digit][direction]
        else:
            current = set_digit(current, r + 1, NEW_DIGIT_II[old_digit][direction])
            next_dir = NEW_ADJUSTMENT_II[old_digit][direction]

        if next_dir == CENTER_DIGIT:
            break
        direction = next_dir
        r -= 1

    new_base_cell = get_base_cell(current)
    if is_base_cell_pentagon(new_base_cell):
        already_adjusted_k = False

        if leading_non_zero_digit(current) == K_AXES_DIGIT:
            if old_base_cell != new_base_cell:
                # Entered the deleted K sub-sequence from another base cell.
                if base_cell_is_cw_offset(new_base_cell, BASE_CELL_DATA[old_base_cell].face):
                    current = rotate60cw(current)
                else:
                    current = rotate60ccw(current)
                already_adjusted_k = True
            else:
                if old_leading_digit == CENTER_DIGIT:
                    return None
                if old_leading_digit == JK_AXES_DIGIT:
                    current = rotate60ccw(current)
                    rotations += 1
                elif old_leading_digit == IK_AXES_DIGIT:
                    current = rotate60cw(current)
                    rotations += 5
                else:
                    raise UnsupportedTopologyError(
                        f"cannot step from {h:#x} in direction {direction}: crosses more than one pentagon distortion"
                    )

        for _ in range(new_rotations):
            current = rotate_pent60ccw(current)

        if old_base_cell != new_base_cell:
            if is_base_cell_polar_pentagon(new_base_cell):
                if old_base_cell not in _POLAR_PENTAGON_EXEMPT and leading_non_zero_digit(current) != JK_AXES_DIGIT:
                    rotations += 1
            elif leading_non_zero_digit(current) == IK_AXES_DIGIT and not already_adjusted_k:
                rotations += 1
    else:
        for _ in range(new_rotations):
            current = rotate60ccw(current)

    return current, (rotations + new_rotations) % 6


def max_grid_disk_size(k: int) -> int:
    """Upper bound on the number of cells within distance k."""

    if k < 0:
        raise DomainError(f"k must be >= 0, got {k}")
    return 3 * k * (k + 1) + 1


def _check_disk_args(origin: int, k: int) -> None:
    if k < 0:
        raise DomainError(f"k must be >= 0, got {k}")
    if not is_valid_cell(origin):
        raise InvalidIndexError(f"invalid cell index: {origin:#x}")


def _grid_disk_rings(origin: int, k: int) -> Optional[Dict[int, int]]:
    """Walk hexagonal rings around `origin`; None if a pentagon is met."""

    out = {origin: 0}
    if is_pentagon(origin):
        return None

    ring = 1
    direction = 0
    i = 0
    rotations = 0
    current = origin
    while ring <= k:
        if direction == 0 and i == 0:
            step = neighbor_rotations(current, NEXT_RING_DIRECTION, rotations)
            if step is None:
                return None
            current, rotations = step
            if is_pentagon(current):
                return None

        step = neighbor_rotations(current, DIRECTIONS[direction], rotations)
        if step is None:
            return None
        current, rotations = step
        out[current] = ring

        i += 1
        if i == ring:
            i = 0
            direction += 1
            if direction == 6:
                direction = 0
                ring += 1

        if is_pentagon(current):
            return None
    return out


def _grid_disk_search(origin: int, k: int) -> Dict[int, int]:
    """Breadth-first expansion; correct around pentagons."""

    out = {origin: 0}
    queue = deque([origin])
    while queue:
        cell = queue.popleft()
        dist = out[cell]
        if dist >= k:
            continue
        for direction in range(K_AXES_DIGIT, IJ_AXES_DIGIT + 1):
            step = neighbor_rotations(cell, direction, 0)
            if step is None:
                continue
            nb = step[0]
            if nb not in out:
                out[nb] = dist + 1
                queue.append(nb)
    return out


def grid_disk_distances(origin: int, k: int) -> Dict[int, int]:
    """Map every cell within grid distance `k` of `origin` to its distance."""

    _check_disk_args(origin, k)
    out = _grid_disk_rings(origin, k)
    if out is None:
        logger.debug("pentagon within k=%d of %x; falling back to search", k, origin)
        out = _grid_disk_search(origin, k)
    return out


def grid_disk(origin: int, k: int) -> List[int]:
    """Cells within grid distance `k` of `origin`, origin first.

    Away from pentagons the order is the ring walk order; near a pentagon it
    is breadth-first order.
    """

    return list(grid_disk_distances(origin, k))

