"""Theme lookup and painting."""

from __future__ import annotations

import unittest

from lazyls.theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME, RESET, available_theme_names, paint, resolve_theme


class ThemeTests(unittest.TestCase):
    def test_resolve_by_name_with_fallback(self) -> None:
        self.assertIs(resolve_theme("Ocean"), OCEAN_THEME)
        self.assertIs(resolve_theme("unknown"), DEFAULT_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)

    def test_no_color_wins(self) -> None:
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertTrue(PLAIN_THEME.is_plain)
        self.assertFalse(DEFAULT_THEME.is_plain)

    def test_available_names_exclude_plain(self) -> None:
        self.assertEqual(available_theme_names(), ("default", "ocean"))

    def test_paint(self) -> None:
        self.assertEqual(paint("\033[1m", "x"), f"\033[1mx{RESET}")
        self.assertEqual(paint("", "x"), "x")
        self.assertEqual(paint("\033[1m", ""), "")


if __name__ == "__main__":
    unittest.main()
