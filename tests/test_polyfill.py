import math
import unittest

from hexgrid_core.errors import DomainError
from hexgrid_core.geo import GeoCoordinate
from hexgrid_core.polyfill import Polygon, point_in_polygon, polygon_to_cells
from hexgrid_core.projection import cell_to_latlng
from hexgrid_core.traversal import grid_disk

BROOKLYN = [
    (40.69677766938962, -73.991369519561),
    (40.69677766938962, -73.97952787017276),
    (40.68136589520371, -73.97952787017276),
    (40.68136589520371, -73.991369519561),
]


def _box(north: float, south: float, west: float, east: float):
    return [(north, west), (north, east), (south, east), (south, west)]


class TestPointInPolygon(unittest.TestCase):
    def test_square(self) -> None:
        poly = Polygon.from_points(_box(1.0, -1.0, -1.0, 1.0))
        self.assertTrue(point_in_polygon(poly, (0.0, 0.0)))
        self.assertTrue(point_in_polygon(poly, GeoCoordinate(0.5, -0.5)))
        self.assertFalse(point_in_polygon(poly, (2.0, 0.0)))
        self.assertFalse(point_in_polygon(poly, (0.0, 1.5)))

    def test_hole(self) -> None:
        poly = Polygon.from_points(_box(2.0, -2.0, -2.0, 2.0), [_box(1.0, -1.0, -1.0, 1.0)])
        self.assertFalse(point_in_polygon(poly, (0.0, 0.0)))
        self.assertTrue(point_in_polygon(poly, (1.5, 1.5)))

    def test_transmeridian(self) -> None:
        poly = Polygon.from_points(_box(5.0, -5.0, 175.0, -175.0))
        self.assertTrue(point_in_polygon(poly, (0.0, 180.0)))
        self.assertTrue(point_in_polygon(poly, (0.0, -179.0)))
        self.assertTrue(point_in_polygon(poly, (0.0, 179.0)))
        self.assertFalse(point_in_polygon(poly, (0.0, 0.0)))
        self.assertFalse(point_in_polygon(poly, (0.0, 170.0)))

    def test_degenerate_loop(self) -> None:
        with self.assertRaises(DomainError):
            Polygon.from_points([(0.0, 0.0), (1.0, 1.0)])
        with self.assertRaises(DomainError):
            Polygon.from_points(_box(1.0, -1.0, -1.0, 1.0), [[(0.0, 0.0)]])

    def test_non_finite_vertex(self) -> None:
        poly = Polygon.from_points([(0.0, 0.0), (1.0, math.nan), (1.0, 1.0)])
        with self.assertRaises(DomainError):
            polygon_to_cells(poly, 5)


class TestPolygonToCells(unittest.TestCase):
    def test_known_rectangle(self) -> None:
        cells = polygon_to_cells(Polygon.from_points(BROOKLYN), 9)
        self.assertEqual(len(cells), 13)

    def test_centers_inside_and_closed_under_adjacency(self) -> None:
        poly = Polygon.from_points(BROOKLYN)
        cells = polygon_to_cells(poly, 10)
        got = set(cells)
        self.assertEqual(cells, sorted(got))
        for c in cells:
            self.assertTrue(point_in_polygon(poly, cell_to_latlng(c)))
            for nb in grid_disk(c, 1):
                if point_in_polygon(poly, cell_to_latlng(nb)):
                    self.assertIn(nb, got)

    def test_finer_resolution_has_more_cells(self) -> None:
        poly = Polygon.from_points(BROOKLYN)
        self.assertGreater(len(polygon_to_cells(poly, 10)), len(polygon_to_cells(poly, 9)))

    def test_hole_removes_cells(self) -> None:
        outer = _box(40.70, 40.68, -73.995, -73.975)
        hole = _box(40.695, 40.685, -73.99, -73.98)
        full = set(polygon_to_cells(Polygon.from_points(outer), 9))
        holed_poly = Polygon.from_points(outer, [hole])
        holed = set(polygon_to_cells(holed_poly, 9))
        self.assertTrue(holed < full)
        hole_poly = Polygon.from_points(hole)
        for c in holed:
            self.assertFalse(point_in_polygon(hole_poly, cell_to_latlng(c)))

    def test_transmeridian_polygon(self) -> None:
        cells = polygon_to_cells(Polygon.from_points(_box(2.0, -2.0, 178.0, -178.0)), 3)
        self.assertTrue(cells)
        for c in cells:
            lat, lon = cell_to_latlng(c)
            self.assertLess(abs(lat), 2.0)
            self.assertGreater(abs(lon), 178.0)

    def test_polygon_smaller_than_a_cell(self) -> None:
        tiny = _box(40.6601, 40.6600, -73.9441, -73.9440)
        self.assertEqual(polygon_to_cells(Polygon.from_points(tiny), 3), [])

    def test_resolution_out_of_range(self) -> None:
        with self.assertRaises(DomainError):
            polygon_to_cells(Polygon.from_points(BROOKLYN), 16)


if __name__ == "__main__":
    unittest.main()
