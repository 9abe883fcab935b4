from __future__ import annotations

import math
from typing import List, Tuple

from .basecells import (
    MAX_FACE_COORD,
    base_cell_is_cw_offset,
    base_cell_to_face_ijk,
    face_ijk_to_base_cell,
    face_ijk_to_base_cell_ccwrot60,
    is_base_cell_pentagon,
)
from .constants import MAX_RES, NO_OVERAGE, is_class_iii
from .errors import DomainError, InvalidIndexError
from .faceijk import (
    FaceIJK,
    adjust_overage_class_ii,
    face_ijk_pent_to_cell_boundary,
    face_ijk_to_cell_boundary,
    face_ijk_to_geo,
    geo_to_face_ijk,
)
from .geo import LatLng
from .ijk import (
    IK_AXES_DIGIT,
    I_AXES_DIGIT,
    K_AXES_DIGIT,
    down_ap7,
    down_ap7r,
    neighbor,
    normalize,
    sub,
    unit_to_digit,
    up_ap7,
    up_ap7r,
)
from .index import (
    CELL_MODE,
    H3_INIT,
    H3_NULL,
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
    set_mode,
    set_resolution,
)


def check_resolution(res: int) -> int:
    if not isinstance(res, int) or isinstance(res, bool):
        raise DomainError(f"resolution must be an int, got {type(res).__name__}")
    if res < 0 or res > MAX_RES:
        raise DomainError(f"resolution must be in [0, {MAX_RES}], got {res}")
    return res


def face_ijk_to_cell(fijk: FaceIJK, res: int) -> int:
    """Index of the cell at lattice position `fijk` (Class II/III per `res`).

    Returns H3_NULL if the position is too far off its face to resolve.
    """

    face, c = fijk
    h = set_resolution(set_mode(H3_INIT, CELL_MODE), res)

    if res == 0:
        if max(c) > MAX_FACE_COORD:
            return H3_NULL
        return set_base_cell(h, face_ijk_to_base_cell(face, c))

    # Walk up the hierarchy recording the digit at each level.
    for r in range(res - 1, -1, -1):
        last = c
        if is_class_iii(r + 1):
            c = up_ap7(c)
            last_center = down_ap7(c)
        else:
            c = up_ap7r(c)
            last_center = down_ap7r(c)
        h = set_digit(h, r + 1, unit_to_digit(normalize(sub(last, last_center))))

    if max(c) > MAX_FACE_COORD:
        return H3_NULL

    base_cell = face_ijk_to_base_cell(face, c)
    h = set_base_cell(h, base_cell)

    num_rots = face_ijk_to_base_cell_ccwrot60(face, c)
    if is_base_cell_pentagon(base_cell):
        # Rotate out of the deleted K sub-sequence.
        if leading_non_zero_digit(h) == K_AXES_DIGIT:
            if base_cell_is_cw_offset(base_cell, face):
                h = rotate60cw(h)
            else:
                h = rotate60ccw(h)
        for _ in range(num_rots):
            h = rotate_pent60ccw(h)
    else:
        for _ in range(num_rots):
            h = rotate60ccw(h)
    return h


def cell_to_face_ijk(h: int) -> FaceIJK:
    """Lattice position of a cell on the face containing its center."""

    base_cell = get_base_cell(h)
    if is_base_cell_pentagon(base_cell) and leading_non_zero_digit(h) == IK_AXES_DIGIT:
        h = rotate60cw(h)

    face, c = base_cell_to_face_ijk(base_cell)
    res = get_resolution(h)

    possible_overage = is_base_cell_pentagon(base_cell) or not (res == 0 or c == (0, 0, 0))
    for r in range(1, res + 1):
        c = down_ap7(c) if is_class_iii(r) else down_ap7r(c)
        c = neighbor(c, get_digit(h, r))

    if not possible_overage:
        return face, c

    orig = c
    adj_res = res
    if is_class_iii(res):
        # Drop into the next finer Class II grid.
        c = down_ap7r(c)
        adj_res += 1

    pent_leading4 = is_base_cell_pentagon(base_cell) and leading_non_zero_digit(h) == I_AXES_DIGIT
    overage, fijk = adjust_overage_class_ii((face, c), adj_res, pent_leading4=pent_leading4)
    if overage != NO_OVERAGE:
        # Pentagons can spill over more than one face.
        if is_base_cell_pentagon(base_cell):
            while overage != NO_OVERAGE:
                overage, fijk = adjust_overage_class_ii(fijk, adj_res)
        if adj_res != res:
            fijk = (fijk[0], up_ap7r(fijk[1]))
        return fijk
    return face, orig


def _require_valid(h: int) -> None:
    if not is_valid_cell(h):
        raise InvalidIndexError(f"invalid cell index: {h:#x}" if isinstance(h, int) else "invalid cell index")


def latlng_to_cell(lat: float, lng: float, res: int) -> int:
    """Index of the cell containing (lat, lng) degrees at resolution `res`."""

    check_resolution(res)
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise DomainError(f"non-finite coordinate: ({lat}, {lng})")

    h = face_ijk_to_cell(geo_to_face_ijk((math.radians(lat), math.radians(lng)), res), res)
    if h == H3_NULL:
        raise DomainError(f"coordinate ({lat}, {lng}) could not be indexed")
    return h


def cell_to_latlng_rads(h: int) -> LatLng:
    _require_valid(h)
    return face_ijk_to_geo(cell_to_face_ijk(h), get_resolution(h))


def cell_to_latlng(h: int) -> Tuple[float, float]:
    """Center of a cell as (lat, lng) degrees."""

    lat, lng = cell_to_latlng_rads(h)
    return math.degrees(lat), math.degrees(lng)


def cell_to_boundary_rads(h: int, *, distortion: bool = False) -> List[LatLng]:
    _require_valid(h)
    fijk = cell_to_face_ijk(h)
    res = get_resolution(h)
    if is_pentagon(h):
        return face_ijk_pent_to_cell_boundary(fijk, res, distortion=distortion)
    return face_ijk_to_cell_boundary(fijk, res, distortion=distortion)


def cell_to_boundary(h: int, *, distortion: bool = False) -> List[Tuple[float, float]]:
    """Boundary vertices as (lat, lng) degrees, counter-clockwise.

    Hexagons have 6 vertices and pentagons 5. With `distortion`, Class III
    cells also carry the points where their edges cross icosahedron edges.
    """

    return [(math.degrees(lat), math.degrees(lng)) for lat, lng in cell_to_boundary_rads(h, distortion=distortion)]

