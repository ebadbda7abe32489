"""
In-place redraw of the live block.

RenderSurface keeps track of how many terminal rows the last block occupied,
and erases exactly that many rows before writing the next one. Rows are counted
after wrapping to the console width, so a long spinner message that wraps
still erases cleanly.

The surface writes to `console.file`. While interception is active that is the
InterceptedStream proxy, so the coordinator calls draw/clear/done inside its
internal-write scope to let the bytes through.

On a console that is not a terminal (pipes, files, captured test output) the
surface draws nothing: cursor movement codes would only litter the output.
"""

from rich.cells import cell_len
from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text

from .console import console as shared_console


class RenderSurface:
    def __init__(self, console: Console | None = None):
        self.console = console or shared_console
        self._previous = ""
        self._rows = 0
        self._cursor_hidden = False

    @property
    def enabled(self) -> bool:
        return self.console.is_terminal and not self.console.is_dumb_terminal

    def _count_rows(self, text: str) -> int:
        width = max(self.console.width, 1)
        rows = 0
        for line in text.split("\n"):
            length = cell_len(Text.from_ansi(line).plain)
            rows += max(1, -(-length // width))
        return rows

    def _erase(self) -> str:
        if not self._rows:
            return ""
        # The cursor sits on the empty row below the block.
        codes: list = []
        for index in range(self._rows + 1):
            codes.append((ControlType.ERASE_IN_LINE, 2))
            if index < self._rows:
                codes.append((ControlType.CURSOR_UP, 1))
        codes.append((ControlType.CURSOR_MOVE_TO_COLUMN, 0))
        return str(Control(*codes))

    def _write(self, text: str) -> None:
        file = self.console.file
        file.write(text)
        file.flush()

    def draw(self, text: str) -> None:
        """Replace the previously drawn block with `text`."""
        if not self.enabled or text == self._previous:
            return
        prefix = ""
        if not self._cursor_hidden:
            prefix = str(Control.show_cursor(False))
            self._cursor_hidden = True
        self._write(f"{prefix}{self._erase()}{text}\n")
        self._previous = text
        self._rows = self._count_rows(text)

    def clear(self) -> None:
        """Erase the current block, leaving the cursor where it started."""
        if not self.enabled:
            return
        erase = self._erase()
        if erase:
            self._write(erase)
        self._previous = ""
        self._rows = 0

    def done(self) -> None:
        """Stop tracking the current block; the next draw starts below it."""
        if self.enabled and self._cursor_hidden:
            self._write(str(Control.show_cursor(True)))
        self._cursor_hidden = False
        self._previous = ""
        self._rows = 0
