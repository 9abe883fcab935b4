import unittest

from hexgrid_core.cell import CellIndex, polygon_to_cells
from hexgrid_core.errors import InvalidIndexError, ParseError
from hexgrid_core.geo import GeoCoordinate
from hexgrid_core.polyfill import Polygon


class TestCellIndex(unittest.TestCase):
    def setUp(self) -> None:
        self.cell = CellIndex.from_string("8a2a10766d87fff")

    def test_from_coordinate(self) -> None:
        c = CellIndex.from_coordinate(GeoCoordinate(40.661, -73.944), 10)
        self.assertEqual(c, self.cell)
        self.assertEqual(str(c), "8a2a10766d87fff")
        self.assertEqual(int(c), 622236751692857343)

    def test_properties(self) -> None:
        self.assertEqual(self.cell.resolution, 10)
        self.assertEqual(self.cell.base_cell, 21)
        self.assertTrue(self.cell.is_valid)
        self.assertFalse(self.cell.is_pentagon)
        self.assertEqual(len(self.cell.digits), 10)

    def test_invalid_zero(self) -> None:
        zero = CellIndex(0)
        self.assertFalse(zero.is_valid)
        self.assertEqual(zero.resolution, 0)
        self.assertFalse(zero.is_pentagon)
        with self.assertRaises(InvalidIndexError):
            zero.coordinate
        with self.assertRaises(InvalidIndexError):
            zero.require_valid()

    def test_parse_errors(self) -> None:
        with self.assertRaises(ParseError):
            CellIndex.from_string("")
        with self.assertRaises(ParseError):
            CellIndex.from_string("zz")

    def test_coordinate(self) -> None:
        coord = self.cell.coordinate
        self.assertAlmostEqual(coord.lat, 40.66121200787385, delta=1e-4)
        self.assertAlmostEqual(coord.lon, -73.94380522623717, delta=1e-4)

    def test_boundary(self) -> None:
        verts = self.cell.boundary()
        self.assertEqual(len(verts), 6)
        self.assertTrue(all(isinstance(v, GeoCoordinate) for v in verts))

    def test_parents(self) -> None:
        self.assertEqual(self.cell.parent(4), CellIndex.from_string("842a107ffffffff"))
        self.assertEqual(self.cell.parent(1), CellIndex.from_string("812a3ffffffffff"))
        self.assertIsNone(self.cell.parent(11))
        self.assertEqual(self.cell.direct_parent, CellIndex.from_string("892a10766dbffff"))
        self.assertIsNone(self.cell.parent(0).direct_parent)

    def test_children(self) -> None:
        kids = self.cell.children(11)
        self.assertEqual([str(k) for k in kids][:2], ["8b2a10766d80fff", "8b2a10766d81fff"])
        self.assertEqual(len(kids), 7)
        self.assertEqual(len(self.cell.children(12)), 49)

    def test_center_children(self) -> None:
        self.assertEqual(self.cell.center_child(11), CellIndex.from_string("8b2a10766d80fff"))
        self.assertEqual(self.cell.direct_center_child, CellIndex.from_string("8b2a10766d80fff"))
        finest = self.cell.center_child(15)
        self.assertEqual(finest, CellIndex.from_string("8f2a10766d80000"))
        self.assertIsNone(finest.direct_center_child)
        self.assertIsNone(self.cell.center_child(9))

    def test_grid_disk(self) -> None:
        ring = self.cell.grid_disk(1)
        self.assertEqual(ring[0], self.cell)
        self.assertEqual(str(ring[1]), "8a2a10766db7fff")
        self.assertEqual(len(ring), 7)
        dist = self.cell.grid_disk_distances(1)
        self.assertEqual(dist[self.cell], 0)
        self.assertEqual(sorted(dist.values()), [0, 1, 1, 1, 1, 1, 1])

    def test_value_semantics(self) -> None:
        a = CellIndex.from_string("8a2a10766d87fff")
        self.assertEqual(a, self.cell)
        self.assertEqual(len({a, self.cell}), 1)
        self.assertLess(CellIndex(1), CellIndex(2))

    def test_from_parts(self) -> None:
        self.assertEqual(CellIndex.from_parts(10, 21, (0, 2, 0, 3, 5, 4, 6, 6, 6, 0)), self.cell)
        self.assertTrue(CellIndex.from_parts(0, 4).is_pentagon)

    def test_polygon_to_cells(self) -> None:
        poly = Polygon.from_points(
            [
                (40.69677766938962, -73.991369519561),
                (40.69677766938962, -73.97952787017276),
                (40.68136589520371, -73.97952787017276),
                (40.68136589520371, -73.991369519561),
            ]
        )
        cells = polygon_to_cells(poly, 9)
        self.assertTrue(all(isinstance(c, CellIndex) and c.resolution == 9 for c in cells))


if __name__ == "__main__":
    unittest.main()
