from __future__ import annotations

from itertools import product
from typing import Dict, List, NamedTuple, Tuple

from .constants import (
    FACE_NEIGHBORS,
    IJ_QUADRANT,
    JK_QUADRANT,
    KI_QUADRANT,
    NUM_BASE_CELLS,
    NUM_ICOSA_FACES,
)
from .faceijk import face_ijk_to_geo
from .geo import geo_to_vec3, square_distance
from .ijk import (
    IJ_AXES_DIGIT,
    IJK,
    IK_AXES_DIGIT,
    I_AXES_DIGIT,
    JK_AXES_DIGIT,
    J_AXES_DIGIT,
    K_AXES_DIGIT,
    UNIT_VECS,
    add,
    normalize,
    rotate60ccw,
)


INVALID_BASE_CELL = 127
MAX_FACE_COORD = 2


class BaseCellData(NamedTuple):
    """Home face and res 0 position of a base cell."""

    face: int
    ijk: IJK
    is_pentagon: bool
    # The two faces on which a pentagon's leading K digit rotates clockwise.
    cw_offset_pent: Tuple[int, int]


class BaseCellRotation(NamedTuple):
    base_cell: int
    ccw_rot60: int


def _h(face: int, ijk: IJK) -> BaseCellData:
    return BaseCellData(face, ijk, False, (0, 0))


def _p(face: int, ijk: IJK, cw: Tuple[int, int]) -> BaseCellData:
    return BaseCellData(face, ijk, True, cw)


BASE_CELL_DATA: Tuple[BaseCellData, ...] = (
    _h(1, (1, 0, 0)), _h(2, (1, 1, 0)), _h(1, (0, 0, 0)), _h(2, (1, 0, 0)),
    _p(0, (2, 0, 0), (-1, -1)), _h(1, (1, 1, 0)), _h(1, (0, 0, 1)), _h(2, (0, 0, 0)),
    _h(0, (1, 0, 0)), _h(2, (0, 1, 0)), _h(1, (0, 1, 0)), _h(1, (0, 1, 1)),
    _h(3, (1, 0, 0)), _h(3, (1, 1, 0)), _p(11, (2, 0, 0), (2, 6)), _h(4, (1, 0, 0)),
    _h(0, (0, 0, 0)), _h(6, (0, 1, 0)), _h(0, (0, 0, 1)), _h(2, (0, 1, 1)),
    _h(7, (0, 0, 1)), _h(2, (0, 0, 1)), _h(0, (1, 1, 0)), _h(6, (0, 0, 1)),
    _p(10, (2, 0, 0), (1, 5)), _h(6, (0, 0, 0)), _h(3, (0, 0, 0)), _h(11, (1, 0, 0)),
    _h(4, (1, 1, 0)), _h(3, (0, 1, 0)), _h(0, (0, 1, 1)), _h(4, (0, 0, 0)),
    _h(5, (0, 1, 0)), _h(0, (0, 1, 0)), _h(7, (0, 1, 0)), _h(11, (1, 1, 0)),
    _h(7, (0, 0, 0)), _h(10, (1, 0, 0)), _p(12, (2, 0, 0), (3, 7)), _h(6, (1, 0, 1)),
    _h(7, (1, 0, 1)), _h(4, (0, 0, 1)), _h(3, (0, 0, 1)), _h(3, (0, 1, 1)),
    _h(4, (0, 1, 0)), _h(6, (1, 0, 0)), _h(11, (0, 0, 0)), _h(8, (0, 0, 1)),
    _h(5, (0, 0, 1)), _p(14, (2, 0, 0), (0, 9)), _h(5, (0, 0, 0)), _h(12, (1, 0, 0)),
    _h(10, (1, 1, 0)), _h(4, (0, 1, 1)), _h(12, (1, 1, 0)), _h(7, (1, 0, 0)),
    _h(11, (0, 1, 0)), _h(10, (0, 0, 0)), _p(13, (2, 0, 0), (4, 8)), _h(10, (0, 0, 1)),
    _h(11, (0, 0, 1)), _h(9, (0, 1, 0)), _h(8, (0, 1, 0)), _p(6, (2, 0, 0), (11, 15)),
    _h(8, (0, 0, 0)), _h(9, (0, 0, 1)), _h(14, (1, 0, 0)), _h(5, (1, 0, 1)),
    _h(16, (0, 1, 1)), _h(8, (1, 0, 1)), _h(5, (1, 0, 0)), _h(12, (0, 0, 0)),
    _p(7, (2, 0, 0), (12, 16)), _h(12, (0, 1, 0)), _h(10, (0, 1, 0)), _h(9, (0, 0, 0)),
    _h(13, (1, 0, 0)), _h(16, (0, 0, 1)), _h(15, (0, 1, 1)), _h(15, (0, 1, 0)),
    _h(16, (0, 1, 0)), _h(14, (1, 1, 0)), _h(13, (1, 1, 0)), _p(5, (2, 0, 0), (10, 19)),
    _h(8, (1, 0, 0)), _h(14, (0, 0, 0)), _h(9, (1, 0, 1)), _h(14, (0, 0, 1)),
    _h(17, (0, 0, 1)), _h(12, (0, 0, 1)), _h(16, (0, 0, 0)), _h(17, (0, 1, 1)),
    _h(15, (0, 0, 1)), _h(16, (1, 0, 1)), _h(9, (1, 0, 0)), _h(15, (0, 0, 0)),
    _h(13, (0, 0, 0)), _p(8, (2, 0, 0), (13, 17)), _h(13, (0, 1, 0)), _h(17, (1, 0, 1)),
    _h(19, (0, 1, 0)), _h(14, (0, 1, 0)), _h(19, (0, 1, 1)), _h(17, (0, 1, 0)),
    _h(13, (0, 0, 1)), _h(17, (0, 0, 0)), _h(16, (1, 0, 0)), _p(9, (2, 0, 0), (14, 18)),
    _h(15, (1, 0, 1)), _h(15, (1, 0, 0)), _h(18, (0, 1, 1)), _h(18, (0, 0, 1)),
    _h(19, (0, 0, 1)), _h(17, (1, 0, 0)), _h(19, (0, 0, 0)), _h(18, (0, 1, 0)),
    _h(18, (1, 0, 1)), _p(19, (2, 0, 0), (-1, -1)), _h(19, (1, 0, 0)), _h(18, (0, 0, 0)),
    _h(19, (1, 0, 1)), _h(18, (1, 0, 0)),
)

PENTAGON_BASE_CELLS: Tuple[int, ...] = tuple(bc for bc, d in enumerate(BASE_CELL_DATA) if d.is_pentagon)

# Face corner position -> the digit pointing at it from the face center.
_CORNER_DIGIT: Dict[IJK, int] = {(2, 0, 0): JK_AXES_DIGIT, (0, 2, 0): IK_AXES_DIGIT, (0, 0, 2): IJ_AXES_DIGIT}

# Ccw order of the five digits around a pentagon, K excluded.
_PENT_DIGIT_CYCLE = (JK_AXES_DIGIT, IK_AXES_DIGIT, I_AXES_DIGIT, IJ_AXES_DIGIT, J_AXES_DIGIT)

# Digit directions in 60 degree steps ccw from the i axis.
_DIGIT_SEXTANT = {
    K_AXES_DIGIT: 4,
    J_AXES_DIGIT: 2,
    JK_AXES_DIGIT: 3,
    I_AXES_DIGIT: 0,
    IK_AXES_DIGIT: 5,
    IJ_AXES_DIGIT: 1,
}


def is_base_cell_pentagon(base_cell: int) -> bool:
    if base_cell < 0 or base_cell >= NUM_BASE_CELLS:
        return False
    return BASE_CELL_DATA[base_cell].is_pentagon


def is_base_cell_polar_pentagon(base_cell: int) -> bool:
    return base_cell == 4 or base_cell == 117


def base_cell_is_cw_offset(base_cell: int, test_face: int) -> bool:
    return test_face in BASE_CELL_DATA[base_cell].cw_offset_pent


def _home_positions() -> Dict[Tuple[int, IJK], int]:
    return {(d.face, d.ijk): bc for bc, d in enumerate(BASE_CELL_DATA)}


def _pentagon_rings() -> Dict[int, Dict[int, Tuple[int, IJK]]]:
    """For each pentagon, map digit -> (face, corner of that face at the pentagon)."""

    corner_points = {}
    for face in range(NUM_ICOSA_FACES):
        for corner in _CORNER_DIGIT:
            corner_points[(face, corner)] = geo_to_vec3(face_ijk_to_geo((face, corner), 0))

    rings: Dict[int, Dict[int, Tuple[int, IJK]]] = {}
    for bc in PENTAGON_BASE_CELLS:
        data = BASE_CELL_DATA[bc]
        center = corner_points[(data.face, data.ijk)]
        around = {
            face: corner
            for (face, corner), point in corner_points.items()
            if square_distance(point, center) < 1e-12
        }

        ij_face = FACE_NEIGHBORS[data.face][IJ_QUADRANT].face
        ki_face = FACE_NEIGHBORS[data.face][KI_QUADRANT].face
        rest = [f for f in around if f not in (data.face, ij_face, ki_face)]

        def _touching(face: int) -> int:
            neighbors = [o.face for o in FACE_NEIGHBORS[face][1:]]
            return next(f for f in rest if f in neighbors)

        ring = {
            JK_AXES_DIGIT: data.face,
            J_AXES_DIGIT: ij_face,
            IK_AXES_DIGIT: ki_face,
            IJ_AXES_DIGIT: _touching(ij_face),
            I_AXES_DIGIT: _touching(ki_face),
        }
        rings[bc] = {digit: (face, around[face]) for digit, face in ring.items()}
    return rings


def _pentagon_rotation(ring: Dict[int, Tuple[int, IJK]], face: int) -> int:
    """Ccw rotations from `face`'s frame into the pentagon's home frame."""

    for digit, (f, corner) in ring.items():
        if f == face:
            start = _PENT_DIGIT_CYCLE.index(_CORNER_DIGIT[corner])
            return (_PENT_DIGIT_CYCLE.index(digit) - start) % 5
    raise ValueError(f"face {face} does not touch pentagon")


def _build_face_ijk_base_cells(
    homes: Dict[Tuple[int, IJK], int], rings: Dict[int, Dict[int, Tuple[int, IJK]]]
) -> Tuple[Tuple[Tuple[Tuple[BaseCellRotation, ...], ...], ...], ...]:
    pent_at = {}
    for bc, ring in rings.items():
        for face, corner in ring.values():
            pent_at[(face, corner)] = bc

    faces = []
    for face in range(NUM_ICOSA_FACES):
        table = [[[BaseCellRotation(INVALID_BASE_CELL, 0)] * 3 for _ in range(3)] for _ in range(3)]
        for i, j, k in product(range(3), repeat=3):
            n = normalize((i, j, k))
            if (face, n) in homes:
                entry = BaseCellRotation(homes[(face, n)], 0)
            elif (face, n) in pent_at:
                bc = pent_at[(face, n)]
                entry = BaseCellRotation(bc, _pentagon_rotation(rings[bc], face))
            else:
                if n[2] > 0:
                    quadrant = JK_QUADRANT if n[1] > 0 else KI_QUADRANT
                else:
                    quadrant = IJ_QUADRANT
                orient = FACE_NEIGHBORS[face][quadrant]
                m = n
                for _ in range(orient.ccw_rot60):
                    m = rotate60ccw(m)
                m = normalize(add(m, orient.translate))
                entry = BaseCellRotation(homes[(orient.face, m)], orient.ccw_rot60)
            table[i][j][k] = entry
        faces.append(tuple(tuple(tuple(row) for row in plane) for plane in table))
    return tuple(faces)


def _build_neighbors(
    homes: Dict[Tuple[int, IJK], int], rings: Dict[int, Dict[int, Tuple[int, IJK]]]
) -> Tuple[Tuple[Tuple[int, ...], ...], Tuple[Tuple[int, ...], ...]]:
    neighbors: List[Tuple[int, ...]] = []
    rotations: List[Tuple[int, ...]] = []
    for bc, data in enumerate(BASE_CELL_DATA):
        nbrs = [bc]
        rots = [0]
        if data.is_pentagon:
            nbrs.append(INVALID_BASE_CELL)
            rots.append(-1)
            ring = rings[bc]
            for digit in range(J_AXES_DIGIT, IJ_AXES_DIGIT + 1):
                face, corner = ring[digit]
                nbrs.append(homes[(face, (corner[0] // 2, corner[1] // 2, corner[2] // 2))])
                rots.append((_DIGIT_SEXTANT[_CORNER_DIGIT[corner]] - _DIGIT_SEXTANT[digit]) % 6)
        else:
            for digit in range(K_AXES_DIGIT, IJ_AXES_DIGIT + 1):
                i, j, k = normalize(add(data.ijk, UNIT_VECS[digit]))
                entry = FACE_IJK_BASE_CELLS[data.face][i][j][k]
                nbrs.append(entry.base_cell)
                rots.append(entry.ccw_rot60)
        neighbors.append(tuple(nbrs))
        rotations.append(tuple(rots))
    return tuple(neighbors), tuple(rotations)


_HOMES = _home_positions()
_RINGS = _pentagon_rings()

# [face][i][j][k] -> base cell containing that res 0 position, and the ccw
# rotations from the face's frame into the base cell's home frame.
FACE_IJK_BASE_CELLS = _build_face_ijk_base_cells(_HOMES, _RINGS)

# [base cell][digit] -> adjacent base cell and the ccw rotations into its frame.
BASE_CELL_NEIGHBORS, BASE_CELL_NEIGHBOR_60CCW_ROTS = _build_neighbors(_HOMES, _RINGS)


def face_ijk_to_base_cell(face: int, ijk: IJK) -> int:
    i, j, k = ijk
    return FACE_IJK_BASE_CELLS[face][i][j][k].base_cell


def face_ijk_to_base_cell_ccwrot60(face: int, ijk: IJK) -> int:
    i, j, k = ijk
    return FACE_IJK_BASE_CELLS[face][i][j][k].ccw_rot60


def base_cell_to_face_ijk(base_cell: int) -> Tuple[int, IJK]:
    data = BASE_CELL_DATA[base_cell]
    return data.face, data.ijk

