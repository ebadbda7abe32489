"""Tests for color transforms and final-state formatting (spindle/colors.py)."""

import unittest
from unittest.mock import MagicMock, patch

from spindle.colors import (
    DEFAULT_COLOR,
    STATE_CONFIG,
    VALID_COLORS,
    format_final_line,
    get_color,
    get_state_formatters,
)


def console_with(color_system):
    console = MagicMock()
    console.color_system = color_system
    return console


class TestGetColor(unittest.TestCase):
    """Test color name lookup"""

    @patch("spindle.colors.console", console_with("standard"))
    def test_known_color_wraps_text_in_ansi_codes(self):
        self.assertEqual(get_color("red")("Boom"), "\x1b[31mBoom\x1b[0m")

    @patch("spindle.colors.console", console_with("standard"))
    def test_gray_is_bright_black(self):
        self.assertEqual(get_color("gray")("dim"), "\x1b[90mdim\x1b[0m")
        self.assertEqual(get_color("grey")("dim"), get_color("gray")("dim"))

    @patch("spindle.colors.console", console_with("standard"))
    def test_unknown_color_falls_back_to_default(self):
        self.assertEqual(get_color("chartreuse")("x"), get_color(DEFAULT_COLOR)("x"))

    @patch("spindle.colors.console", console_with(None))
    def test_no_color_system_returns_plain_text(self):
        self.assertEqual(get_color("red")("Boom"), "Boom")

    def test_default_color_is_valid(self):
        self.assertIn(DEFAULT_COLOR, VALID_COLORS)


class TestStateFormatters(unittest.TestCase):
    """Test final-state icons and colors"""

    def test_every_state_has_icon_and_known_colors(self):
        for state, config in STATE_CONFIG.items():
            self.assertTrue(config["icon"], state)
            self.assertIn(config["icon_color"], VALID_COLORS)
            self.assertIn(config["text_color"], VALID_COLORS)

    @patch("spindle.colors.console", console_with(None))
    def test_plain_icons(self):
        icons = {state: get_state_formatters(state).icon for state in ("completed", "failed", "warning", "info")}
        self.assertEqual(icons, {"completed": "✔", "failed": "✖", "warning": "⚠", "info": "ℹ"})

    @patch("spindle.colors.console", console_with(None))
    def test_unknown_state_uses_default_entry(self):
        self.assertEqual(get_state_formatters("paused").icon, "○")

    @patch("spindle.colors.console", console_with("standard"))
    def test_failed_line_is_red(self):
        self.assertEqual(format_final_line("failed", "Boom"), "\x1b[31m✖\x1b[0m \x1b[31mBoom\x1b[0m")

    @patch("spindle.colors.console", console_with(None))
    def test_plain_final_line(self):
        self.assertEqual(format_final_line("completed", "Done"), "✔ Done")


if __name__ == "__main__":
    unittest.main()
