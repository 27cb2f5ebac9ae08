"""Tests for ANSI width helpers and theme resolution."""

from __future__ import annotations

import unittest

from lazytree.ansi import clip_ansi_line, display_width, strip_ansi
from lazytree.ui_theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME, available_theme_names, resolve_theme


class AnsiTextTests(unittest.TestCase):
    def test_escape_sequences_do_not_count_toward_width(self) -> None:
        self.assertEqual(display_width("\033[1mabc\033[0m"), 3)
        self.assertEqual(strip_ansi("\033[38;5;42m[x] \033[0mB"), "[x] B")

    def test_wide_characters_take_two_columns(self) -> None:
        self.assertEqual(display_width("表a"), 3)
        self.assertEqual(clip_ansi_line("表表", 3), "表")

    def test_clip_keeps_trailing_reset(self) -> None:
        self.assertEqual(clip_ansi_line("\033[1mabcdef\033[0m", 3), "\033[1mabc")
        self.assertEqual(clip_ansi_line("\033[1mabc\033[0m", 3), "\033[1mabc\033[0m")
        self.assertEqual(clip_ansi_line("abc", 0), "")


class ThemeResolutionTests(unittest.TestCase):
    def test_named_themes(self) -> None:
        self.assertEqual(available_theme_names(), ("default", "ocean"))
        self.assertIs(resolve_theme(" Ocean "), OCEAN_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)

    def test_no_color_wins_over_name(self) -> None:
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)

    def test_unknown_name_falls_back_with_warning(self) -> None:
        with self.assertLogs("lazytree.ui_theme", level="WARNING"):
            theme = resolve_theme("neon")

        self.assertIs(theme, DEFAULT_THEME)


if __name__ == "__main__":
    unittest.main()
