from __future__ import annotations

import math
from typing import List, Optional, Tuple

from hexgrid_core.index import is_valid_cell, string_to_cell


def parse_cell(s: str, *, require_valid: bool = True) -> int:
    """Parse a cell index given in hex (optional `0x`, any case).

    Raises ValueError if the input is not hex, is longer than 16 hex digits,
    or (with `require_valid`) is not a valid cell.
    """

    h = string_to_cell(s)
    if require_valid and not is_valid_cell(h):
        raise ValueError(f"not a valid cell index: {s.strip()}")
    return h


def parse_lat_lon(s: str) -> Tuple[float, float]:
    """Parse 'lat,lon' in degrees.

    Examples:
    - "40.661,-73.944"
    - " 0 , 0 "
    """

    parts = [p.strip() for p in s.split(",")]
    if len(parts) != 2 or not all(parts):
        raise ValueError("expected 'lat,lon' (comma-separated)")
    try:
        lat = float(parts[0])
        lon = float(parts[1])
    except ValueError as e:
        raise ValueError(f"invalid number in {s.strip()!r}") from e
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError("latitude and longitude must be finite")
    return lat, lon


def resolve_lat_lon(at: Optional[str], lat: Optional[str], lon: Optional[str]) -> Tuple[float, float]:
    """Accept either a positional 'lat,lon' or separate --lat/--lon values."""

    if at is not None:
        if lat is not None or lon is not None:
            raise ValueError("use either 'lat,lon' or --lat/--lon (not both)")
        return parse_lat_lon(at)
    if lat is None or lon is None:
        raise ValueError("provide either 'lat,lon' or both --lat and --lon")
    return parse_lat_lon(f"{lat},{lon}")


def parse_loop(s: str) -> List[Tuple[float, float]]:
    """Parse a polygon loop written as 'lat,lon;lat,lon;...'.

    A trailing vertex equal to the first one is dropped (loops are implicitly closed).
    """

    points = [parse_lat_lon(p) for p in s.split(";") if p.strip()]
    if len(points) > 3 and points[0] == points[-1]:
        points.pop()
    if len(points) < 3:
        raise ValueError("a loop needs at least 3 'lat,lon' vertices separated by ';'")
    return points
