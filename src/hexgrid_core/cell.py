from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from . import hierarchy, index, polyfill, projection, traversal
from .constants import MAX_RES
from .errors import InvalidIndexError
from .geo import GeoCoordinate


@dataclass(frozen=True, order=True)
class CellIndex:
    """A 64-bit cell identifier.

    Wraps the integer form used by the module-level functions. Equality,
    hashing and ordering follow the integer value; `str()` gives the
    lowercase hex form.
    """

    value: int

    @staticmethod
    def from_coordinate(coord: GeoCoordinate, resolution: int) -> "CellIndex":
        """The cell containing `coord` at `resolution`."""

        return CellIndex(projection.latlng_to_cell(coord.lat, coord.lon, resolution))

    @staticmethod
    def from_string(s: str) -> "CellIndex":
        return CellIndex(index.string_to_cell(s))

    @staticmethod
    def from_parts(resolution: int, base_cell: int, digits: Sequence[int] = ()) -> "CellIndex":
        return CellIndex(index.pack(index.CELL_MODE, resolution, base_cell, digits))

    def __str__(self) -> str:
        return index.cell_to_string(self.value)

    def __int__(self) -> int:
        return self.value

    @property
    def resolution(self) -> int:
        return index.get_resolution(self.value)

    @property
    def base_cell(self) -> int:
        return index.get_base_cell(self.value)

    @property
    def digits(self) -> tuple:
        return index.unpack(self.value).digits

    @property
    def is_valid(self) -> bool:
        return index.is_valid_cell(self.value)

    @property
    def is_pentagon(self) -> bool:
        return self.is_valid and index.is_pentagon(self.value)

    @property
    def coordinate(self) -> GeoCoordinate:
        """Center of the cell. Raises InvalidIndexError for invalid cells."""

        lat, lon = projection.cell_to_latlng(self.value)
        return GeoCoordinate(lat, lon)

    def boundary(self, *, distortion: bool = False) -> List[GeoCoordinate]:
        return [GeoCoordinate(lat, lon) for lat, lon in projection.cell_to_boundary(self.value, distortion=distortion)]

    def parent(self, resolution: int) -> Optional["CellIndex"]:
        p = hierarchy.parent(self.value, resolution)
        return None if p is None else CellIndex(p)

    @property
    def direct_parent(self) -> Optional["CellIndex"]:
        return self.parent(self.resolution - 1)

    def children(self, resolution: int) -> List["CellIndex"]:
        return [CellIndex(c) for c in hierarchy.iter_children(self.value, resolution)]

    def center_child(self, resolution: int) -> Optional["CellIndex"]:
        c = hierarchy.center_child(self.value, resolution)
        return None if c is None else CellIndex(c)

    @property
    def direct_center_child(self) -> Optional["CellIndex"]:
        if self.resolution >= MAX_RES:
            return None
        return self.center_child(self.resolution + 1)

    def grid_disk(self, k: int) -> List["CellIndex"]:
        return [CellIndex(c) for c in traversal.grid_disk(self.value, k)]

    def grid_disk_distances(self, k: int) -> Dict["CellIndex", int]:
        return {CellIndex(c): d for c, d in traversal.grid_disk_distances(self.value, k).items()}

    def require_valid(self) -> "CellIndex":
        if not self.is_valid:
            raise InvalidIndexError(f"invalid cell index: {self}")
        return self


def polygon_to_cells(polygon: polyfill.Polygon, resolution: int) -> List[CellIndex]:
    return [CellIndex(c) for c in polyfill.polygon_to_cells(polygon, resolution)]
