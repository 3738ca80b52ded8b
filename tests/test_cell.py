"""Cell construction, concatenation and padding."""

from __future__ import annotations

import unittest

from lazyls.cell import Cell, concat


class CellTests(unittest.TestCase):
    def test_paint_tracks_width_of_unstyled_text(self) -> None:
        cell = Cell.paint("\033[32m", "9.6")
        self.assertEqual(cell.text, "\033[32m9.6\033[0m")
        self.assertEqual(cell.width, 3)

    def test_paint_with_empty_style_leaves_text_alone(self) -> None:
        self.assertEqual(Cell.paint("", "abc"), Cell("abc", 3))

    def test_addition_sums_widths(self) -> None:
        joined = Cell.paint("\033[1m", "9.4") + Cell.paint("\033[2m", "Ki")
        self.assertEqual(joined.width, 5)
        self.assertIn("Ki", joined.text)

    def test_concat_of_nothing_is_empty(self) -> None:
        self.assertEqual(concat([]), Cell.empty())

    def test_padding_respects_alignment(self) -> None:
        cell = Cell("ab", 2)
        self.assertEqual(cell.pad_left(5), Cell("   ab", 5))
        self.assertEqual(cell.pad_right(5), Cell("ab   ", 5))
        self.assertEqual(cell.pad_left(1), cell)


if __name__ == "__main__":
    unittest.main()
