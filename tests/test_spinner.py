"""
Tests for the Spinner renderable (spindle/spinner.py).

Colors are switched off by patching the console the color helpers consult, so
printed lines and rendered frames can be compared as plain text.
"""

import asyncio
import io
import sys
import unittest
from unittest.mock import patch

from rich.console import Console

from spindle import RendererManager, Spinner, spinner
from spindle.config import SPINNER_FRAMES


class FakeSurface:
    def __init__(self, console=None):
        self.calls = []

    def draw(self, text):
        self.calls.append(("draw", text))

    def clear(self):
        self.calls.append(("clear",))

    def done(self):
        self.calls.append(("done",))


class SpinnerTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        RendererManager.reset(force=True)
        self.stdout = io.StringIO()
        plain = Console(color_system=None, width=80)
        for patcher in (
            patch("sys.stdout", self.stdout),
            patch("spindle.manager.RenderSurface", FakeSurface),
            patch("spindle.colors.console", plain),
            patch("spindle.spinner.console", plain),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)
        # Keep the animation clock out of the way; tests tick it by hand.
        RendererManager.get_instance()._clock.interval = 60_000

    async def asyncTearDown(self):
        RendererManager.reset(force=True)

    @property
    def manager(self):
        return RendererManager.get_instance()


class TestSpinnerLifecycle(SpinnerTestCase):
    """Test start/stop"""

    async def test_start_registers_with_manager(self):
        spin = Spinner("Loading").start()
        self.assertTrue(spin.is_spinning)
        self.assertEqual(self.manager.renderers, (spin,))

    async def test_start_twice_registers_once(self):
        spin = Spinner("Loading").start()
        spin.start("Still loading")
        self.assertEqual(RendererManager.get_active_count(), 1)
        self.assertEqual(spin.text, "Still loading")

    async def test_stop_unregisters_without_printing(self):
        spin = Spinner("Loading").start()
        spin.stop()
        await asyncio.sleep(0)

        self.assertFalse(spin.is_spinning)
        self.assertEqual(RendererManager.get_active_count(), 0)
        self.assertEqual(self.stdout.getvalue(), "")
        self.assertIs(sys.stdout, self.stdout)

    async def test_stop_when_idle_is_noop(self):
        spin = Spinner("Loading")
        self.assertIs(spin.stop(), spin)
        self.assertEqual(self.manager._surface.calls, [])

    async def test_context_manager_starts_and_stops(self):
        with Spinner("Working") as spin:
            self.assertTrue(spin.is_spinning)
            self.assertTrue(RendererManager.is_active())
        self.assertFalse(spin.is_spinning)
        self.assertFalse(RendererManager.is_active())

    async def test_factory_returns_idle_spinner(self):
        spin = spinner("Queued")
        self.assertIsInstance(spin, Spinner)
        self.assertEqual(spin.text, "Queued")
        self.assertFalse(spin.is_spinning)


class TestSpinnerRendering(SpinnerTestCase):
    """Test render_to_string and field setters"""

    async def test_render_shows_frame_and_text(self):
        spin = Spinner("Loading").start()
        frame = self.manager.frames[0]
        self.assertEqual(spin.render_to_string(), f"{frame} Loading")

    async def test_tick_moves_to_next_frame(self):
        spin = Spinner("Loading").start()
        self.manager._advance_frame()
        self.assertEqual(self.manager._surface.calls[-1], ("draw", f"{self.manager.frames[1]} Loading"))

    async def test_text_setter_schedules_redraw(self):
        spin = Spinner("Loading").start()
        await asyncio.sleep(0)

        spin.text = "Almost done"
        self.assertTrue(self.manager._render_scheduled)
        await asyncio.sleep(0)
        self.assertEqual(self.manager._surface.calls[-1][1], f"{self.manager.frames[0]} Almost done")

    async def test_title_is_alias_for_text(self):
        spin = Spinner("Loading")
        spin.title = "Renamed"
        self.assertEqual(spin.text, "Renamed")
        self.assertEqual(spin.title, "Renamed")

    async def test_color_setter_schedules_redraw(self):
        spin = Spinner("Loading").start()
        await asyncio.sleep(0)
        spin.color = "magenta"
        self.assertEqual(spin.color, "magenta")
        self.assertTrue(self.manager._render_scheduled)

    async def test_idle_render_does_not_create_manager(self):
        RendererManager.reset(force=True)
        spin = Spinner("Waiting")
        self.assertEqual(spin.render_to_string(), f"{SPINNER_FRAMES[0]} Waiting")
        self.assertIsNone(RendererManager._instance)


class TestSpinnerCompletion(SpinnerTestCase):
    """Test succeed/fail/warn/info"""

    async def test_fail_while_spinning_prints_after_redraw_then_unregisters(self):
        spin = Spinner("Loading").start()
        manager = self.manager
        manager._advance_frame()
        self.assertEqual(manager._surface.calls[-1], ("draw", f"{manager.frames[1]} Loading"))

        spin.fail("Boom")

        # Same turn: no longer spinning, nothing printed, still registered.
        self.assertFalse(spin.is_spinning)
        self.assertEqual(spin.render_to_string(), "")
        self.assertEqual(self.stdout.getvalue(), "")
        self.assertEqual(manager.renderers, (spin,))

        await asyncio.sleep(0)

        self.assertEqual(self.stdout.getvalue(), "✖ Boom\n")
        self.assertEqual(RendererManager.get_active_count(), 0)
        self.assertIs(sys.stdout, self.stdout)
        self.assertIsNone(spin.final_state)
        # The live block is cleared before the final line reaches the terminal.
        self.assertIn(("clear",), manager._surface.calls[1:])

    async def test_completion_omits_spinner_from_live_block(self):
        other = Spinner("Other").start()
        spin = Spinner("Task").start()
        await asyncio.sleep(0)
        frame = self.manager.frames[0]
        self.assertEqual(self.manager._surface.calls[-1], ("draw", f"{frame} Other\n\n{frame} Task"))

        spin.succeed("Task done")
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        draws = [call[1] for call in self.manager._surface.calls if call[0] == "draw"]
        self.assertEqual(draws[-1], f"{frame} Other")
        self.assertEqual(self.stdout.getvalue(), "✔ Task done\n")
        self.assertEqual(self.manager.renderers, (other,))

    async def test_completion_uses_current_text_by_default(self):
        Spinner("Fetching").start().warn()
        await asyncio.sleep(0)
        self.assertEqual(self.stdout.getvalue(), "⚠ Fetching\n")

    async def test_info_icon(self):
        Spinner("Note").start().info("Heads up")
        await asyncio.sleep(0)
        self.assertEqual(self.stdout.getvalue(), "ℹ Heads up\n")

    async def test_completion_while_idle_prints_immediately(self):
        spin = Spinner("Idle")
        spin.succeed("Done")

        self.assertEqual(self.stdout.getvalue(), "✔ Done\n")
        self.assertFalse(self.manager.is_intercepting)
        self.assertEqual(self.manager._surface.calls, [])

    async def test_spinner_can_restart_after_completion(self):
        spin = Spinner("First").start()
        spin.succeed()
        await asyncio.sleep(0)

        spin.start("Second")
        self.assertTrue(spin.is_spinning)
        self.assertEqual(spin.render_to_string(), f"{self.manager.frames[0]} Second")


if __name__ == "__main__":
    unittest.main()
