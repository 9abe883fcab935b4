import math
import unittest

from hexgrid_core.basecells import PENTAGON_BASE_CELLS, base_cell_to_face_ijk
from hexgrid_core.constants import AVG_EDGE_KM, EARTH_RADIUS_KM, FACE_CENTER_GEO, NUM_BASE_CELLS
from hexgrid_core.errors import DomainError, InvalidIndexError
from hexgrid_core.geo import great_circle_distance_rads
from hexgrid_core.hierarchy import children
from hexgrid_core.index import CELL_MODE, get_resolution, is_valid_cell, pack
from hexgrid_core.projection import cell_to_boundary, cell_to_latlng, latlng_to_cell

NYC_RES10 = 0x8A2A10766D87FFF

# Base cell centered on each icosahedron face, indexed by face.
FACE_CENTER_BASE_CELLS = (16, 2, 7, 26, 31, 50, 25, 36, 64, 75, 57, 46, 71, 96, 85, 95, 90, 105, 119, 114)


def _km(a, b) -> float:
    ra = (math.radians(a[0]), math.radians(a[1]))
    rb = (math.radians(b[0]), math.radians(b[1]))
    return great_circle_distance_rads(ra, rb) * EARTH_RADIUS_KM


class TestEncode(unittest.TestCase):
    def test_known_vectors(self) -> None:
        self.assertEqual(latlng_to_cell(40.661, -73.944, 10), 0x8A2A10766D87FFF)
        self.assertEqual(latlng_to_cell(40.661, -73.944, 5), 0x852A1077FFFFFFF)

    def test_origin_uses_pentagon_base_cell(self) -> None:
        self.assertEqual(latlng_to_cell(0.0, 0.0, 10), 623560421467684863)
        self.assertEqual(latlng_to_cell(0.0, 0.0, 5), 601042424243945471)

    def test_encode_returns_valid_cells_at_every_resolution(self) -> None:
        for lat, lon in ((40.661, -73.944), (-33.86, 151.21), (89.9, 10.0), (-89.9, -170.0), (0.0, 180.0)):
            for res in range(16):
                with self.subTest(lat=lat, lon=lon, res=res):
                    h = latlng_to_cell(lat, lon, res)
                    self.assertTrue(is_valid_cell(h))
                    self.assertEqual(get_resolution(h), res)

    def test_resolution_out_of_range(self) -> None:
        for res in (-1, 16):
            with self.assertRaises(DomainError):
                latlng_to_cell(0.0, 0.0, res)

    def test_non_finite_coordinates(self) -> None:
        for lat, lon in ((math.nan, 0.0), (0.0, math.inf), (-math.inf, 1.0)):
            with self.assertRaises(DomainError):
                latlng_to_cell(lat, lon, 5)


class TestDecode(unittest.TestCase):
    def test_known_center(self) -> None:
        lat, lon = cell_to_latlng(NYC_RES10)
        self.assertAlmostEqual(lat, 40.66121200787385, delta=1e-4)
        self.assertAlmostEqual(lon, -73.94380522623717, delta=1e-4)

    def test_every_base_cell_center_round_trips(self) -> None:
        for bc in range(NUM_BASE_CELLS):
            h = pack(CELL_MODE, 0, bc)
            with self.subTest(base_cell=bc):
                lat, lon = cell_to_latlng(h)
                self.assertEqual(latlng_to_cell(lat, lon, 0), h)

    def test_res1_and_res2_centers_round_trip(self) -> None:
        for bc in range(NUM_BASE_CELLS):
            for child in children(pack(CELL_MODE, 0, bc), 1):
                with self.subTest(cell=f"{child:x}"):
                    lat, lon = cell_to_latlng(child)
                    self.assertEqual(latlng_to_cell(lat, lon, 1), child)
        for bc in (0, 4, 14, 58, 117, 121):
            for child in children(pack(CELL_MODE, 0, bc), 2):
                with self.subTest(cell=f"{child:x}"):
                    lat, lon = cell_to_latlng(child)
                    self.assertEqual(latlng_to_cell(lat, lon, 2), child)

    def test_fine_cells_round_trip(self) -> None:
        for lat, lon in ((40.661, -73.944), (0.0, 0.0), (51.5, -0.12), (-45.0, 100.0)):
            for res in (7, 10, 13, 15):
                with self.subTest(lat=lat, lon=lon, res=res):
                    h = latlng_to_cell(lat, lon, res)
                    c_lat, c_lon = cell_to_latlng(h)
                    self.assertEqual(latlng_to_cell(c_lat, c_lon, res), h)
                    self.assertLess(_km((lat, lon), (c_lat, c_lon)), 2 * AVG_EDGE_KM[res])

    def test_invalid_cell(self) -> None:
        with self.assertRaises(InvalidIndexError):
            cell_to_latlng(0)
        with self.assertRaises(DomainError):
            cell_to_latlng(0)


class TestReferenceVectors(unittest.TestCase):
    def test_face_center_base_cells(self) -> None:
        for face, bc in enumerate(FACE_CENTER_BASE_CELLS):
            lat, lon = (math.degrees(x) for x in FACE_CENTER_GEO[face])
            with self.subTest(face=face, base_cell=bc):
                h = pack(CELL_MODE, 0, bc)
                self.assertEqual(latlng_to_cell(lat, lon, 0), h)
                c_lat, c_lon = cell_to_latlng(h)
                self.assertAlmostEqual(c_lat, lat, delta=1e-9)
                self.assertAlmostEqual(c_lon, lon, delta=1e-9)

    def test_face_centers_encode_to_center_children(self) -> None:
        for face in (0, 9, 15, 17, 18, 19):
            bc = FACE_CENTER_BASE_CELLS[face]
            lat, lon = (math.degrees(x) for x in FACE_CENTER_GEO[face])
            with self.subTest(face=face):
                self.assertEqual(latlng_to_cell(lat, lon, 10), pack(CELL_MODE, 10, bc, [0] * 10))

    def test_south_polar_base_cell_center(self) -> None:
        lat, lon = cell_to_latlng(0x80E5FFFFFFFFFFF)
        self.assertAlmostEqual(lat, -60.432795, delta=1e-4)
        self.assertAlmostEqual(lon, 102.792943, delta=1e-4)

    def test_southern_encodes(self) -> None:
        self.assertEqual(latlng_to_cell(-85.43702828217654, 14.439440551818905, 10), 0x8AF145B58657FFF)
        self.assertEqual(latlng_to_cell(0.0, 0.0, 5), 0x85754E67FFFFFFF)

    def test_south_polar_homes(self) -> None:
        expected = {
            114: (19, (0, 0, 0)),
            116: (18, (1, 0, 1)),
            118: (19, (1, 0, 0)),
            119: (18, (0, 0, 0)),
            120: (19, (1, 0, 1)),
            121: (18, (1, 0, 0)),
        }
        for bc, home in expected.items():
            with self.subTest(base_cell=bc):
                self.assertEqual(base_cell_to_face_ijk(bc), home)


class TestBoundary(unittest.TestCase):
    def test_hexagon_has_six_vertices(self) -> None:
        self.assertEqual(len(cell_to_boundary(NYC_RES10)), 6)
        self.assertEqual(len(cell_to_boundary(0x852A1077FFFFFFF)), 6)

    def test_pentagons_have_five_vertices(self) -> None:
        for bc in PENTAGON_BASE_CELLS:
            for res in (0, 1, 4):
                h = pack(CELL_MODE, res, bc, [0] * res)
                with self.subTest(base_cell=bc, res=res):
                    self.assertEqual(len(cell_to_boundary(h)), 5)

    def test_class_iii_pentagon_distortion_vertices(self) -> None:
        h = pack(CELL_MODE, 1, 4, [0])
        self.assertEqual(len(cell_to_boundary(h, distortion=True)), 10)
        # Class II pentagon vertices already lie on the face edges.
        self.assertEqual(len(cell_to_boundary(pack(CELL_MODE, 2, 4, [0, 0]), distortion=True)), 5)

    def test_distortion_keeps_topological_vertices(self) -> None:
        plain = cell_to_boundary(NYC_RES10)
        full = cell_to_boundary(NYC_RES10, distortion=True)
        self.assertGreaterEqual(len(full), 6)
        for v in plain:
            self.assertIn(v, full)

    def test_vertices_surround_center(self) -> None:
        for h in (NYC_RES10, latlng_to_cell(-33.86, 151.21, 6), latlng_to_cell(0.0, 0.0, 3)):
            res = get_resolution(h)
            center = cell_to_latlng(h)
            with self.subTest(cell=f"{h:x}"):
                for v in cell_to_boundary(h):
                    self.assertLess(_km(center, v), 2 * AVG_EDGE_KM[res])
                    mid = ((center[0] + v[0]) / 2.0, (center[1] + v[1]) / 2.0)
                    self.assertEqual(latlng_to_cell(mid[0], mid[1], res), h)

    def test_invalid_cell(self) -> None:
        with self.assertRaises(InvalidIndexError):
            cell_to_boundary(0)


if __name__ == "__main__":
    unittest.main()
