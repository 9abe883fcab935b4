from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .constants import EPSILON, M_2PI
from .errors import DomainError


LatLng = Tuple[float, float]
Vec3d = Tuple[float, float, float]


@dataclass(frozen=True)
class GeoCoordinate:
    """A point on the sphere in degrees (latitude, longitude)."""

    lat: float
    lon: float

    def to_radians(self) -> LatLng:
        """Return (lat, lng) in radians, rejecting non-finite input."""

        if not (math.isfinite(self.lat) and math.isfinite(self.lon)):
            raise DomainError(f"non-finite coordinate: ({self.lat}, {self.lon})")
        return math.radians(self.lat), math.radians(self.lon)

    def __str__(self) -> str:
        return f"{self.lat:.9f},{self.lon:.9f}"


def pos_angle_rads(rads: float) -> float:
    """Normalize an angle into [0, 2pi)."""

    tmp = rads + M_2PI if rads < 0.0 else rads
    if rads >= M_2PI:
        tmp -= M_2PI
    return tmp


def constrain_lng(lng: float) -> float:
    """Wrap a longitude into [-pi, pi]."""

    while lng > math.pi:
        lng = lng - M_2PI
    while lng < -math.pi:
        lng = lng + M_2PI
    return lng


def geo_azimuth_rads(p1: LatLng, p2: LatLng) -> float:
    """Azimuth from p1 to p2, radians clockwise from north."""

    lat1, lng1 = p1
    lat2, lng2 = p2
    return math.atan2(
        math.cos(lat2) * math.sin(lng2 - lng1),
        math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lng2 - lng1),
    )


def geo_az_distance_rads(p1: LatLng, az: float, distance: float) -> LatLng:
    """Point at `distance` radians from p1 along azimuth `az`."""

    if distance < EPSILON:
        return p1

    lat1, lng1 = p1
    az = pos_angle_rads(az)

    # Due north or south.
    if az < EPSILON or abs(az - math.pi) < EPSILON:
        if az < EPSILON:
            lat = lat1 + distance
        else:
            lat = lat1 - distance

        if abs(lat - math.pi / 2.0) < EPSILON:
            return (math.pi / 2.0, 0.0)
        if abs(lat + math.pi / 2.0) < EPSILON:
            return (-math.pi / 2.0, 0.0)
        return (lat, constrain_lng(lng1))

    sinlat = math.sin(lat1) * math.cos(distance) + math.cos(lat1) * math.sin(distance) * math.cos(az)
    sinlat = max(-1.0, min(1.0, sinlat))
    lat = math.asin(sinlat)
    if abs(lat - math.pi / 2.0) < EPSILON:
        return (math.pi / 2.0, 0.0)
    if abs(lat + math.pi / 2.0) < EPSILON:
        return (-math.pi / 2.0, 0.0)

    inv_cos_lat = 1.0 / math.cos(lat)
    sinlng = math.sin(az) * math.sin(distance) * inv_cos_lat
    coslng = (math.cos(distance) - math.sin(lat1) * math.sin(lat)) / math.cos(lat1) * inv_cos_lat
    sinlng = max(-1.0, min(1.0, sinlng))
    coslng = max(-1.0, min(1.0, coslng))
    return (lat, constrain_lng(lng1 + math.atan2(sinlng, coslng)))


def geo_to_vec3(p: LatLng) -> Vec3d:
    lat, lng = p
    r = math.cos(lat)
    return (math.cos(lng) * r, math.sin(lng) * r, math.sin(lat))


def square_distance(a: Vec3d, b: Vec3d) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    dz = a[2] - b[2]
    return dx * dx + dy * dy + dz * dz


def great_circle_distance_rads(a: LatLng, b: LatLng) -> float:
    """Haversine distance in radians."""

    sin_lat = math.sin((b[0] - a[0]) / 2.0)
    sin_lng = math.sin((b[1] - a[1]) / 2.0)
    h = sin_lat * sin_lat + math.cos(a[0]) * math.cos(b[0]) * sin_lng * sin_lng
    return 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))
