import unittest

from hexgrid_core.basecells import PENTAGON_BASE_CELLS
from hexgrid_core.constants import NUM_BASE_CELLS, NUM_PENTAGONS
from hexgrid_core.errors import ParseError
from hexgrid_core.index import (
    CELL_MODE,
    cell_to_string,
    get_base_cell,
    get_resolution,
    is_pentagon,
    is_valid_cell,
    leading_non_zero_digit,
    pack,
    rotate60ccw,
    rotate60cw,
    set_digit,
    set_mode,
    string_to_cell,
    unpack,
)

NYC_RES10 = 0x8A2A10766D87FFF


class TestIndexCodec(unittest.TestCase):
    def test_string_form_round_trip(self) -> None:
        self.assertEqual(string_to_cell("8a2a10766d87fff"), 622236751692857343)
        self.assertEqual(cell_to_string(622236751692857343), "8a2a10766d87fff")

    def test_string_parsing_accepts_prefix_and_case(self) -> None:
        self.assertEqual(string_to_cell("0x8A2A10766D87FFF"), NYC_RES10)
        self.assertEqual(string_to_cell("  8a2a10766d87fff\n"), NYC_RES10)

    def test_string_parsing_rejects_malformed(self) -> None:
        for bad in ("", "0x", "xyz", "8a2a10766d87fffff", "8a2a_10766d87fff", "-1"):
            with self.subTest(bad=bad):
                with self.assertRaises(ParseError):
                    string_to_cell(bad)

    def test_parse_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            string_to_cell("not hex")

    def test_unpack_known_cell(self) -> None:
        u = unpack(NYC_RES10)
        self.assertEqual(u.mode, CELL_MODE)
        self.assertEqual(u.resolution, 10)
        self.assertEqual(u.base_cell, 21)
        self.assertEqual(u.digits, (0, 2, 0, 3, 5, 4, 6, 6, 6, 0))

    def test_pack_inverts_unpack(self) -> None:
        u = unpack(NYC_RES10)
        self.assertEqual(pack(u.mode, u.resolution, u.base_cell, u.digits), NYC_RES10)

    def test_pack_fills_unused_slots_with_sentinel(self) -> None:
        h = pack(CELL_MODE, 0, 0)
        self.assertEqual(cell_to_string(h), "8001fffffffffff")
        self.assertTrue(is_valid_cell(h))

    def test_unpack_never_raises(self) -> None:
        for h in (0, 1, (1 << 64) - 1, 0x7FFFFFFFFFFFFFFF):
            u = unpack(h)
            self.assertLessEqual(u.resolution, 15)
            self.assertEqual(len(u.digits), u.resolution)

    def test_zero_is_invalid_res0(self) -> None:
        self.assertFalse(is_valid_cell(0))
        self.assertEqual(get_resolution(0), 0)

    def test_valid_cell(self) -> None:
        self.assertTrue(is_valid_cell(NYC_RES10))

    def test_invalid_header_fields(self) -> None:
        self.assertFalse(is_valid_cell(NYC_RES10 | (1 << 63)))
        self.assertFalse(is_valid_cell(set_mode(NYC_RES10, 2)))
        self.assertFalse(is_valid_cell(NYC_RES10 | (1 << 56)))
        self.assertFalse(is_valid_cell(pack(CELL_MODE, 0, 122)))
        self.assertFalse(is_valid_cell(-1))
        self.assertFalse(is_valid_cell(1 << 64))

    def test_invalid_digits(self) -> None:
        # Unused slot below the resolution must hold the sentinel.
        self.assertFalse(is_valid_cell(set_digit(NYC_RES10, 11, 0)))
        # Used slot must not hold the sentinel.
        self.assertFalse(is_valid_cell(set_digit(NYC_RES10, 3, 7)))

    def test_pentagon_deleted_k_subsequence(self) -> None:
        # Base cell 4 is a pentagon; its leading non-zero digit cannot be K (1).
        self.assertFalse(is_valid_cell(pack(CELL_MODE, 1, 4, [1])))
        self.assertFalse(is_valid_cell(pack(CELL_MODE, 3, 4, [0, 0, 1])))
        self.assertTrue(is_valid_cell(pack(CELL_MODE, 3, 4, [0, 2, 1])))
        self.assertTrue(is_valid_cell(pack(CELL_MODE, 1, 0, [1])))

    def test_is_pentagon(self) -> None:
        self.assertTrue(is_pentagon(pack(CELL_MODE, 0, 4)))
        self.assertTrue(is_pentagon(pack(CELL_MODE, 5, 117, [0] * 5)))
        self.assertFalse(is_pentagon(pack(CELL_MODE, 2, 4, [0, 2])))
        self.assertFalse(is_pentagon(pack(CELL_MODE, 0, 0)))
        self.assertFalse(is_pentagon(NYC_RES10))

    def test_twelve_pentagons_per_resolution(self) -> None:
        self.assertEqual(len(PENTAGON_BASE_CELLS), NUM_PENTAGONS)
        res0 = [pack(CELL_MODE, 0, bc) for bc in range(NUM_BASE_CELLS)]
        self.assertEqual(sum(1 for h in res0 if is_pentagon(h)), NUM_PENTAGONS)

    def test_leading_non_zero_digit(self) -> None:
        self.assertEqual(leading_non_zero_digit(NYC_RES10), 2)
        self.assertEqual(leading_non_zero_digit(pack(CELL_MODE, 3, 4, [0, 0, 0])), 0)

    def test_rotations_invert(self) -> None:
        self.assertEqual(rotate60cw(rotate60ccw(NYC_RES10)), NYC_RES10)
        h = NYC_RES10
        for _ in range(6):
            h = rotate60ccw(h)
        self.assertEqual(h, NYC_RES10)
        self.assertEqual(get_base_cell(rotate60ccw(NYC_RES10)), 21)


if __name__ == "__main__":
    unittest.main()
