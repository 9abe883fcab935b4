from __future__ import annotations

import math
from typing import List, Tuple

from .constants import (
    CENTRAL,
    EPSILON,
    FACE_AXES_AZ_RADS_CII,
    FACE_CENTER_GEO,
    FACE_EDGE,
    FACE_NEIGHBORS,
    FLT_EPSILON,
    IJ_QUADRANT,
    JK_QUADRANT,
    KI_QUADRANT,
    M_AP7_ROT_RADS,
    M_RSQRT7,
    M_SQRT3_2,
    M_SQRT7,
    NEW_FACE,
    NO_OVERAGE,
    NUM_ICOSA_FACES,
    RES0_U_GNOMONIC,
    adjacent_face_dir,
    is_class_iii,
    max_dim_by_cii_res,
    unit_scale_by_cii_res,
)
from .geo import LatLng, geo_az_distance_rads, geo_azimuth_rads, geo_to_vec3, pos_angle_rads, square_distance
from .ijk import (
    IJK,
    Vec2d,
    add,
    down_ap3,
    down_ap3r,
    down_ap7r,
    from_hex2d,
    normalize,
    rotate60ccw,
    rotate60cw,
    scale,
    sub,
    to_hex2d,
)


FaceIJK = Tuple[int, IJK]

FACE_CENTER_POINT = tuple(geo_to_vec3(g) for g in FACE_CENTER_GEO)

NUM_HEX_VERTS = 6
NUM_PENT_VERTS = 5

# Vertex offsets in the aperture-3 substrate grid.
VERTS_CII: Tuple[IJK, ...] = ((2, 1, 0), (1, 2, 0), (0, 2, 1), (0, 1, 2), (1, 0, 2), (2, 0, 1))
VERTS_CIII: Tuple[IJK, ...] = ((5, 4, 0), (1, 5, 0), (0, 5, 4), (0, 1, 5), (4, 0, 5), (5, 0, 1))


def geo_to_closest_face(p: LatLng) -> Tuple[int, float]:
    """Return (face, squared chord distance) of the face whose center is nearest `p`."""

    v = geo_to_vec3(p)
    face = 0
    sqd = 5.0
    for f in range(NUM_ICOSA_FACES):
        d = square_distance(FACE_CENTER_POINT[f], v)
        if d < sqd:
            face = f
            sqd = d
    return face, sqd


def geo_to_hex2d(p: LatLng, res: int) -> Tuple[int, Vec2d]:
    """Gnomonic projection of `p` into the lattice plane of its closest face."""

    face, sqd = geo_to_closest_face(p)

    r = math.acos(1.0 - sqd / 2.0)
    if r < EPSILON:
        return face, (0.0, 0.0)

    theta = pos_angle_rads(
        FACE_AXES_AZ_RADS_CII[face] - pos_angle_rads(geo_azimuth_rads(FACE_CENTER_GEO[face], p))
    )
    if is_class_iii(res):
        theta = pos_angle_rads(theta - M_AP7_ROT_RADS)

    r = math.tan(r)
    r /= RES0_U_GNOMONIC
    for _ in range(res):
        r *= M_SQRT7

    return face, (r * math.cos(theta), r * math.sin(theta))


def hex2d_to_geo(v: Vec2d, face: int, res: int, substrate: bool) -> LatLng:
    """Inverse gnomonic projection from a face lattice plane back to the sphere.

    `substrate` selects the aperture-3 vertex grid used for cell boundaries.
    """

    x, y = v
    r = math.sqrt(x * x + y * y)
    if r < EPSILON:
        return FACE_CENTER_GEO[face]

    theta = math.atan2(y, x)

    for _ in range(res):
        r *= M_RSQRT7

    if substrate:
        r /= 3.0
        if is_class_iii(res):
            r *= M_RSQRT7

    r *= RES0_U_GNOMONIC
    r = math.atan(r)

    if not substrate and is_class_iii(res):
        theta = pos_angle_rads(theta + M_AP7_ROT_RADS)

    theta = pos_angle_rads(FACE_AXES_AZ_RADS_CII[face] - theta)
    return geo_az_distance_rads(FACE_CENTER_GEO[face], theta, r)


def geo_to_face_ijk(p: LatLng, res: int) -> FaceIJK:
    face, v = geo_to_hex2d(p, res)
    return face, from_hex2d(v)


def face_ijk_to_geo(fijk: FaceIJK, res: int) -> LatLng:
    face, c = fijk
    return hex2d_to_geo(to_hex2d(c), face, res, False)


def adjust_overage_class_ii(
    fijk: FaceIJK, res: int, *, pent_leading4: bool = False, substrate: bool = False
) -> Tuple[int, FaceIJK]:
    """Move a Class II position that lies beyond its face onto the adjacent face.

    Returns (overage, fijk) where overage is NO_OVERAGE, FACE_EDGE (substrate
    positions exactly on the edge) or NEW_FACE.
    """

    face, c = fijk
    max_dim = max_dim_by_cii_res(res)
    if substrate:
        max_dim *= 3

    total = c[0] + c[1] + c[2]
    if substrate and total == max_dim:
        return FACE_EDGE, fijk
    if total <= max_dim:
        return NO_OVERAGE, fijk

    if c[2] > 0:
        if c[1] > 0:
            orient = FACE_NEIGHBORS[face][JK_QUADRANT]
        else:
            orient = FACE_NEIGHBORS[face][KI_QUADRANT]
            # Pentagon: rotate out of the deleted sub-sequence around the vertex.
            if pent_leading4:
                origin = (max_dim, 0, 0)
                c = add(rotate60cw(sub(c, origin)), origin)
    else:
        orient = FACE_NEIGHBORS[face][IJ_QUADRANT]

    for _ in range(orient.ccw_rot60):
        c = rotate60ccw(c)

    unit_scale = unit_scale_by_cii_res(res)
    if substrate:
        unit_scale *= 3
    c = normalize(add(c, scale(orient.translate, unit_scale)))

    overage = NEW_FACE
    if substrate and c[0] + c[1] + c[2] == max_dim:
        overage = FACE_EDGE
    return overage, (orient.face, c)


def adjust_pent_vert_overage(fijk: FaceIJK, res: int) -> Tuple[int, FaceIJK]:
    """Repeat the substrate overage adjustment until the vertex settles on a face."""

    while True:
        overage, fijk = adjust_overage_class_ii(fijk, res, substrate=True)
        if overage != NEW_FACE:
            return overage, fijk


def _substrate_center(fijk: FaceIJK, res: int) -> Tuple[int, IJK]:
    face, c = fijk
    c = down_ap3r(down_ap3(c))
    if is_class_iii(res):
        c = down_ap7r(c)
        res += 1
    return res, c


def face_ijk_to_verts(fijk: FaceIJK, res: int) -> Tuple[int, List[FaceIJK]]:
    """Return (adjusted res, substrate vertices) of a hexagon cell."""

    offsets = VERTS_CIII if is_class_iii(res) else VERTS_CII
    adj_res, c = _substrate_center(fijk, res)
    return adj_res, [(fijk[0], normalize(add(c, o))) for o in offsets]


def face_ijk_pent_to_verts(fijk: FaceIJK, res: int) -> Tuple[int, List[FaceIJK]]:
    offsets = (VERTS_CIII if is_class_iii(res) else VERTS_CII)[:NUM_PENT_VERTS]
    adj_res, c = _substrate_center(fijk, res)
    return adj_res, [(fijk[0], normalize(add(c, o))) for o in offsets]


def _v2d_intersect(p0: Vec2d, p1: Vec2d, p2: Vec2d, p3: Vec2d) -> Vec2d:
    s1 = (p1[0] - p0[0], p1[1] - p0[1])
    s2 = (p3[0] - p2[0], p3[1] - p2[1])
    t = (s2[0] * (p0[1] - p2[1]) - s2[1] * (p0[0] - p2[0])) / (-s2[0] * s1[1] + s1[0] * s2[1])
    return (p0[0] + t * s1[0], p0[1] + t * s1[1])


def _v2d_almost_equals(a: Vec2d, b: Vec2d) -> bool:
    return abs(a[0] - b[0]) < FLT_EPSILON and abs(a[1] - b[1]) < FLT_EPSILON


def _face_edge(face: int, other: int, adj_res: int) -> Tuple[Vec2d, Vec2d]:
    """Endpoints of the icosahedron edge shared by `face` and `other`, in face lattice units."""

    max_dim = max_dim_by_cii_res(adj_res)
    v0 = (3.0 * max_dim, 0.0)
    v1 = (-1.5 * max_dim, 3.0 * M_SQRT3_2 * max_dim)
    v2 = (-1.5 * max_dim, -3.0 * M_SQRT3_2 * max_dim)

    quadrant = adjacent_face_dir(face, other)
    if quadrant == IJ_QUADRANT:
        return v0, v1
    if quadrant == JK_QUADRANT:
        return v1, v2
    return v2, v0


def face_ijk_to_cell_boundary(fijk: FaceIJK, res: int, *, distortion: bool = False) -> List[LatLng]:
    """Boundary of a hexagon cell as (lat, lng) radians.

    With `distortion`, points where a Class III edge crosses an icosahedron
    edge are inserted between the two topological vertices.
    """

    center_face = fijk[0]
    adj_res, verts = face_ijk_to_verts(fijk, res)
    crossings = distortion and is_class_iii(res)

    out: List[LatLng] = []
    last_face = -1
    last_overage = NO_OVERAGE
    # One extra iteration to catch a crossing on the closing edge.
    extra = 1 if crossings else 0
    for vert in range(NUM_HEX_VERTS + extra):
        v = vert % NUM_HEX_VERTS
        overage, adjusted = adjust_overage_class_ii(verts[v], adj_res, substrate=True)
        face, c = adjusted

        if crossings and vert > 0 and face != last_face and last_overage != FACE_EDGE:
            last_v = (v + 5) % NUM_HEX_VERTS
            orig0 = to_hex2d(verts[last_v][1])
            orig1 = to_hex2d(verts[v][1])

            face2 = face if last_face == center_face else last_face
            edge0, edge1 = _face_edge(center_face, face2, adj_res)
            inter = _v2d_intersect(orig0, orig1, edge0, edge1)
            if not (_v2d_almost_equals(orig0, inter) or _v2d_almost_equals(orig1, inter)):
                out.append(hex2d_to_geo(inter, center_face, adj_res, True))

        if vert < NUM_HEX_VERTS:
            out.append(hex2d_to_geo(to_hex2d(c), face, adj_res, True))

        last_face = face
        last_overage = overage
    return out


def face_ijk_pent_to_cell_boundary(fijk: FaceIJK, res: int, *, distortion: bool = False) -> List[LatLng]:
    """Boundary of a pentagon cell as (lat, lng) radians."""

    adj_res, verts = face_ijk_pent_to_verts(fijk, res)
    crossings = distortion and is_class_iii(res)

    out: List[LatLng] = []
    last: FaceIJK = verts[0]
    extra = 1 if crossings else 0
    for vert in range(NUM_PENT_VERTS + extra):
        v = vert % NUM_PENT_VERTS
        _, adjusted = adjust_pent_vert_overage(verts[v], adj_res)
        face, c = adjusted

        # Every Class III pentagon edge crosses an icosahedron edge.
        if crossings and vert > 0:
            orig0 = to_hex2d(last[1])

            orient = FACE_NEIGHBORS[face][max(adjacent_face_dir(face, last[0]), CENTRAL)]
            moved = c
            for _ in range(orient.ccw_rot60):
                moved = rotate60ccw(moved)
            moved = normalize(add(moved, scale(orient.translate, unit_scale_by_cii_res(adj_res) * 3)))
            orig1 = to_hex2d(moved)

            edge0, edge1 = _face_edge(orient.face, face, adj_res)
            inter = _v2d_intersect(orig0, orig1, edge0, edge1)
            out.append(hex2d_to_geo(inter, orient.face, adj_res, True))

        if vert < NUM_PENT_VERTS:
            out.append(hex2d_to_geo(to_hex2d(c), face, adj_res, True))

        last = adjusted
    return out
