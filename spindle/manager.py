"""
Process-wide coordinator for live terminal renderables.

RendererManager owns the terminal while at least one renderable (usually a
Spinner) is registered. It is the only writer allowed to reach the real
streams during that time; everything else the program writes is captured into
a LogBuffer and replayed above the live block on the next redraw.

Lifecycle of one instance:

    uninitialized --register()--> active --dispose()--> disposed

The first register() starts interception and the animation clock, the last
unregister() stops both, replays whatever is still buffered and clears the
live block. A disposed instance stays disposed; get_instance() hands out a
fresh one.

All scheduling happens on the running asyncio event loop. "Next turn" means
`loop.call_soon`; schedule_render() calls made within one turn collapse into a
single redraw.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager, suppress
from typing import ClassVar, Protocol, runtime_checkable

from .buffer import LogBuffer, LogEntry
from .clock import AnimationClock
from .config import HANDLE_SIGNALS, SPINNER_FRAMES, SPINNER_INTERVAL
from .errors import DisposedError, NoEventLoopError
from .interception import OutputInterceptor
from .surface import RenderSurface

logger = logging.getLogger(__name__)

DEFAULT_FRAME = "⠋"
BLOCK_SEPARATOR = "\n\n"


@runtime_checkable
class Renderable(Protocol):
    """Anything that can show up in the live block.

    render_to_string() returns the current text (possibly multi-line), or an
    empty string when there is nothing to show. It must not block.
    """

    def render_to_string(self) -> str: ...


class RendererManager:
    _instance: ClassVar[RendererManager | None] = None

    def __init__(
        self,
        interval: int = SPINNER_INTERVAL,
        frames: Iterable[str] = SPINNER_FRAMES,
        logger_names: Iterable[str] = ("",),
    ):
        self.frames: tuple[str, ...] = tuple(frames)
        if not self.frames:
            raise ValueError("RendererManager needs at least one animation frame")
        self._active: dict[Renderable, None] = {}
        self._buffer = LogBuffer()
        self._interceptor = OutputInterceptor(self._capture, self._should_capture, logger_names)
        self._clock = AnimationClock(interval, self._advance_frame)
        self._surface = RenderSurface()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._is_internal_write = False
        self._render_scheduled = False
        self._frame_index = 0
        self._is_disposed = False

    # ------------------------------------------------------------------
    # Singleton access
    # ------------------------------------------------------------------

    @classmethod
    def get_instance(cls) -> RendererManager:
        """Return the shared manager, creating a new one if none is live."""
        inst = cls._instance
        if inst is None or inst._is_disposed:
            inst = cls()
            cls._instance = inst
            if HANDLE_SIGNALS:
                from .lifecycle import install_signal_handlers

                install_signal_handlers()
        return inst

    @classmethod
    def is_active(cls) -> bool:
        inst = cls._instance
        return bool(inst and not inst._is_disposed and inst._active)

    @classmethod
    def get_active_count(cls) -> int:
        inst = cls._instance
        return len(inst._active) if inst and not inst._is_disposed else 0

    @classmethod
    def reset(cls, force: bool = False) -> bool:
        """Dispose the shared manager so the next get_instance() builds a new one.

        With renderables still registered and `force` false, nothing changes:
        a warning with the number of active renderables is logged and False is
        returned.
        """
        inst = cls._instance
        if inst is None:
            return True

        if not force and inst._active:
            logger.warning(
                "RendererManager: %d active renderers. Use reset(force=True) to force.",
                len(inst._active),
            )
            return False

        inst.dispose()
        cls._instance = None
        return True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_disposed(self) -> bool:
        return self._is_disposed

    @property
    def is_intercepting(self) -> bool:
        return self._interceptor.active

    @property
    def renderers(self) -> tuple[Renderable, ...]:
        return tuple(self._active)

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def get_spinner_frame(self) -> str:
        if 0 <= self._frame_index < len(self.frames):
            return self.frames[self._frame_index]
        return DEFAULT_FRAME

    def register(self, renderer: Renderable) -> None:
        if self._is_disposed:
            raise DisposedError()

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise NoEventLoopError() from e

        was_empty = not self._active
        if loop is not self._loop:
            self._adopt_loop(loop)

        self._active[renderer] = None

        if was_empty:
            self._start_managing()
        self.schedule_render()

    def unregister(self, renderer: Renderable) -> None:
        if self._is_disposed:
            return

        self._active.pop(renderer, None)

        if not self._active:
            self._stop_managing()
        else:
            self.schedule_render()

    def schedule_render(self) -> None:
        """Queue one redraw for the next loop turn, unless one is already queued."""
        if self._is_disposed or self._render_scheduled or not self._active:
            return
        # Without a live loop the buffer waits for the final flush in dispose().
        if self._loop is None or self._loop.is_closed():
            return

        self._render_scheduled = True
        self._loop.call_soon(self._run_scheduled_render)

    def dispose(self) -> None:
        if self._is_disposed:
            return

        self._is_disposed = True
        self._stop_managing()
        self._active.clear()
        self._buffer.clear()

    # ------------------------------------------------------------------
    # Managing state
    # ------------------------------------------------------------------

    def _start_managing(self) -> None:
        if self._interceptor.active or self._is_disposed:
            return

        self._interceptor.start()
        assert self._loop is not None
        self._clock.start(self._loop)

    def _adopt_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        # Callbacks queued on a previous loop will never run once it has closed.
        self._loop = loop
        self._render_scheduled = False
        if self._clock.running:
            self._clock.stop()
            self._clock.start(loop)

    def _stop_managing(self) -> None:
        self._flush_log_buffer()
        self._clock.stop()

        if self._interceptor.active:
            self._interceptor.stop()
            self._surface.clear()
            self._surface.done()

        self._frame_index = 0

    def _advance_frame(self) -> None:
        if self._is_disposed:
            self._stop_managing()
            return
        self._frame_index = (self._frame_index + 1) % len(self.frames)
        self._render()

    def _run_scheduled_render(self) -> None:
        if self._is_disposed:
            return
        self._render_scheduled = False
        self._render()

    def _render(self) -> None:
        if self._is_disposed or not self._active:
            return

        self._flush_log_buffer()

        outputs: list[str] = []
        for renderer in list(self._active):
            try:
                output = renderer.render_to_string()
            except Exception:
                # Failures stay isolated to the renderable that raised.
                continue
            if output:
                outputs.append(output)

        if outputs:
            with self._internal_write():
                self._surface.draw(BLOCK_SEPARATOR.join(outputs))

    # ------------------------------------------------------------------
    # Capture and flush
    # ------------------------------------------------------------------

    def _should_capture(self) -> bool:
        return not self._is_disposed and not self._is_internal_write and self._interceptor.active

    def _capture(self, entry: LogEntry) -> None:
        self._buffer.append(entry)
        self.schedule_render()

    def _flush_log_buffer(self) -> None:
        entries = self._buffer.drain()
        if not entries:
            return

        with self._internal_write(), suppress(Exception):
            self._surface.clear()

        for entry in entries:
            with self._internal_write(), suppress(Exception):
                self._interceptor.replay(entry)

    @contextmanager
    def _internal_write(self) -> Iterator[None]:
        previous = self._is_internal_write
        self._is_internal_write = True
        try:
            yield
        finally:
            self._is_internal_write = previous
