"""
Spinner: the stock renderable shown in the live block.

A spinner is idle until start() registers it with the RendererManager. While
spinning it contributes `<frame> <text>` to every redraw. It leaves the live
block either silently (stop()) or by printing a final status line:

    succeed() -> ✔ text    fail() -> ✖ text
    warn()    -> ⚠ text    info() -> ℹ text

Finishing a spinning spinner happens over two loop turns so the output reads
in order: first a redraw without this spinner, then the final line, then the
spinner is unregistered.
"""

from __future__ import annotations

from types import TracebackType

from rich.text import Text

from .colors import DEFAULT_COLOR, FinalState, format_final_line, get_color
from .config import SPINNER_FRAMES
from .console import console
from .manager import RendererManager


def _print_line(line: str) -> None:
    console.print(Text.from_ansi(line))


class Spinner:
    """Animated status line with a final-state API.

    Usable directly or as a context manager:

        with Spinner("Loading"):
            await fetch()
    """

    def __init__(self, text: str = "", color: str = DEFAULT_COLOR):
        self._text = text
        self._color = color
        self._is_active = False
        self._final_state: FinalState | None = None
        self._manager: RendererManager | None = None

    def start(self, text: str | None = None) -> Spinner:
        if text is not None:
            self._text = text
        if self._is_active:
            return self

        manager = RendererManager.get_instance()
        manager.register(self)
        self._is_active = True
        self._final_state = None
        self._manager = manager
        return self

    def stop(self) -> Spinner:
        if not self._is_active:
            return self

        self._is_active = False
        if self._manager is not None:
            self._manager.unregister(self)
        self._manager = None
        return self

    def succeed(self, text: str | None = None) -> Spinner:
        return self._complete("completed", text)

    def fail(self, text: str | None = None) -> Spinner:
        return self._complete("failed", text)

    def warn(self, text: str | None = None) -> Spinner:
        return self._complete("warning", text)

    def info(self, text: str | None = None) -> Spinner:
        return self._complete("info", text)

    def _complete(self, state: FinalState, text: str | None) -> Spinner:
        self._final_state = state
        line = format_final_line(state, self._text if text is None else text)

        manager = self._manager
        loop = manager.loop if manager is not None else None
        if not self._is_active or manager is None or loop is None or loop.is_closed():
            self.stop()
            _print_line(line)
            self._final_state = None
            return self

        self._is_active = False
        manager.schedule_render()

        def finish() -> None:
            _print_line(line)
            manager.unregister(self)
            if self._manager is manager:
                self._manager = None
                self._final_state = None

        loop.call_soon(finish)
        return self

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value
        if self._manager is not None:
            self._manager.schedule_render()

    @property
    def title(self) -> str:
        return self._text

    @title.setter
    def title(self, value: str) -> None:
        self.text = value

    @property
    def color(self) -> str:
        return self._color

    @color.setter
    def color(self, value: str) -> None:
        self._color = value
        if self._manager is not None:
            self._manager.schedule_render()

    @property
    def is_spinning(self) -> bool:
        return self._is_active

    @property
    def final_state(self) -> FinalState | None:
        return self._final_state

    def render_to_string(self) -> str:
        if self._final_state:
            return ""

        frame = self._manager.get_spinner_frame() if self._manager is not None else SPINNER_FRAMES[0]
        return f"{get_color(self._color)(frame)} {get_color('white')(self._text)}"

    def __enter__(self) -> Spinner:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def __repr__(self) -> str:
        state = "spinning" if self._is_active else "idle"
        return f"Spinner({self._text!r}, {state})"


def spinner(text: str = "") -> Spinner:
    """Create a Spinner; call .start() to show it."""
    return Spinner(text)
