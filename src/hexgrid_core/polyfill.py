from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Set, Tuple, Union

from .constants import AVG_EDGE_KM, DBL_EPSILON, EARTH_RADIUS_KM, M_2PI
from .errors import DomainError
from .geo import GeoCoordinate, LatLng, great_circle_distance_rads
from .projection import cell_to_latlng_rads, check_resolution, latlng_to_cell
from .traversal import grid_disk

logger = logging.getLogger(__name__)

PointLike = Union[GeoCoordinate, Tuple[float, float]]

# Boundary sample spacing as a fraction of the average edge length.
SAMPLE_FRACTION = 0.25


def _as_geo(p: PointLike) -> GeoCoordinate:
    if isinstance(p, GeoCoordinate):
        return p
    lat, lon = p
    return GeoCoordinate(float(lat), float(lon))


def _as_loop(points: Iterable[PointLike]) -> Tuple[GeoCoordinate, ...]:
    loop = tuple(_as_geo(p) for p in points)
    if len(loop) < 3:
        raise DomainError(f"a polygon loop needs at least 3 vertices, got {len(loop)}")
    return loop


@dataclass(frozen=True)
class Polygon:
    """An outer loop with optional holes; loops are implicitly closed."""

    outer: Tuple[GeoCoordinate, ...]
    holes: Tuple[Tuple[GeoCoordinate, ...], ...] = field(default=())

    @staticmethod
    def from_points(outer: Sequence[PointLike], holes: Sequence[Sequence[PointLike]] = ()) -> "Polygon":
        return Polygon(outer=_as_loop(outer), holes=tuple(_as_loop(h) for h in holes))


@dataclass(frozen=True)
class BBox:
    north: float
    south: float
    east: float
    west: float

    @property
    def is_transmeridian(self) -> bool:
        return self.east < self.west

    def contains(self, p: LatLng) -> bool:
        lat, lng = p
        if lat < self.south or lat > self.north:
            return False
        if self.is_transmeridian:
            return lng >= self.west or lng <= self.east
        return self.west <= lng <= self.east


def _normalize_lng(lng: float, transmeridian: bool) -> float:
    return lng + M_2PI if transmeridian and lng < 0 else lng


class GeoLoop:
    """A loop in radians with its bounding box."""

    def __init__(self, points: Sequence[GeoCoordinate]) -> None:
        self.verts: List[LatLng] = [p.to_radians() for p in points]
        self.bbox = self._bbox()

    def _bbox(self) -> BBox:
        south = west = sys.float_info.max
        north = east = -sys.float_info.max
        min_pos_lng = sys.float_info.max
        max_neg_lng = -sys.float_info.max
        transmeridian = False

        n = len(self.verts)
        for idx, (lat, lng) in enumerate(self.verts):
            next_lng = self.verts[(idx + 1) % n][1]
            south = min(south, lat)
            north = max(north, lat)
            west = min(west, lng)
            east = max(east, lng)
            if 0 < lng < min_pos_lng:
                min_pos_lng = lng
            if max_neg_lng < lng < 0:
                max_neg_lng = lng
            if abs(lng - next_lng) > math.pi:
                transmeridian = True

        if transmeridian:
            east, west = max_neg_lng, min_pos_lng
        return BBox(north=north, south=south, east=east, west=west)

    def edges(self) -> Iterable[Tuple[LatLng, LatLng]]:
        n = len(self.verts)
        for idx in range(n):
            yield self.verts[idx], self.verts[(idx + 1) % n]

    def contains(self, p: LatLng) -> bool:
        """Ray-casting test in latitude/longitude space."""

        if not self.bbox.contains(p):
            return False
        transmeridian = self.bbox.is_transmeridian
        inside = False

        lat = p[0]
        lng = _normalize_lng(p[1], transmeridian)
        for a, b in self.edges():
            if a[0] > b[0]:
                a, b = b, a

            # Nudge off vertex latitudes so the ray never grazes a vertex twice.
            if lat == a[0] or lat == b[0]:
                lat += DBL_EPSILON

            if lat < a[0] or lat > b[0]:
                continue

            a_lng = _normalize_lng(a[1], transmeridian)
            b_lng = _normalize_lng(b[1], transmeridian)

            # Ties bias westerly.
            if a_lng == lng or b_lng == lng:
                lng -= DBL_EPSILON

            ratio = (lat - a[0]) / (b[0] - a[0])
            test_lng = _normalize_lng(a_lng + (b_lng - a_lng) * ratio, transmeridian)
            if test_lng > lng:
                inside = not inside
        return inside


class _Region:
    def __init__(self, polygon: Polygon) -> None:
        self.outer = GeoLoop(polygon.outer)
        self.holes = [GeoLoop(h) for h in polygon.holes]

    def loops(self) -> List[GeoLoop]:
        return [self.outer, *self.holes]

    def contains(self, p: LatLng) -> bool:
        if not self.outer.contains(p):
            return False
        return not any(h.contains(p) for h in self.holes)


def point_in_polygon(polygon: Polygon, point: PointLike) -> bool:
    """True when `point` is inside the outer loop and outside every hole."""

    return _Region(polygon).contains(_as_geo(point).to_radians())


def _sample_edge(a: LatLng, b: LatLng, step_rads: float, transmeridian: bool) -> Iterable[LatLng]:
    n = max(1, int(math.ceil(great_circle_distance_rads(a, b) / step_rads)))
    a_lng = _normalize_lng(a[1], transmeridian)
    b_lng = _normalize_lng(b[1], transmeridian)
    for s in range(n + 1):
        t = s / n
        lng = a_lng + (b_lng - a_lng) * t
        if lng > math.pi:
            lng -= M_2PI
        yield (a[0] + (b[0] - a[0]) * t, lng)


def _seed_cells(region: _Region, res: int) -> Set[int]:
    step_rads = AVG_EDGE_KM[res] * SAMPLE_FRACTION / EARTH_RADIUS_KM
    touched: Set[int] = set()
    for loop in region.loops():
        transmeridian = loop.bbox.is_transmeridian
        for a, b in loop.edges():
            for lat, lng in _sample_edge(a, b, step_rads, transmeridian):
                touched.add(latlng_to_cell(math.degrees(lat), math.degrees(lng), res))

    candidates: Set[int] = set()
    for cell in touched:
        candidates.update(grid_disk(cell, 1))
    return {c for c in candidates if region.contains(cell_to_latlng_rads(c))}


def _ring_budget(region: _Region, res: int) -> int:
    box = region.outer.bbox
    west = box.west
    east = box.east + M_2PI if box.is_transmeridian else box.east
    extent_rads = great_circle_distance_rads((box.south, west), (box.north, east))
    extent_km = extent_rads * EARTH_RADIUS_KM
    return int(extent_km / (AVG_EDGE_KM[res] * 0.5)) + 3


def polygon_to_cells(polygon: Polygon, res: int) -> List[int]:
    """Cells at `res` whose centers lie inside `polygon`, ascending."""

    check_resolution(res)
    region = _Region(polygon)

    inside = _seed_cells(region, res)
    visited: Set[int] = set(inside)
    frontier = set(inside)
    budget = _ring_budget(region, res)
    logger.debug("polygon fill res=%d: %d seed cells, ring budget %d", res, len(inside), budget)

    rings = 0
    while frontier:
        if rings >= budget:
            logger.warning("polygon fill stopped after %d rings with %d cells pending", rings, len(frontier))
            break
        grown: Set[int] = set()
        for cell in frontier:
            for nb in grid_disk(cell, 1):
                if nb in visited:
                    continue
                visited.add(nb)
                if region.contains(cell_to_latlng_rads(nb)):
                    grown.add(nb)
        inside |= grown
        frontier = grown
        rings += 1

    return sorted(inside)
