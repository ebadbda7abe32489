"""
Output interception for the renderer coordinator.

While a live block is on screen, anything written to the terminal by the rest
of the program has to go through the coordinator, otherwise it lands in the
middle of the block and the next redraw erases it. Two entry points are
covered:

  - **Streams**: `sys.stdout` and `sys.stderr` are swapped for
    InterceptedStream proxies. `print()`, `console.print()` and direct
    `write()` calls (text or bytes, including writes to `.buffer`) all end up
    here.
  - **Logging**: the handlers of the intercepted loggers (the root logger by
    default) are swapped for a single capturing handler. Handlers hold a
    reference to the stream they were built with, so swapping `sys.stdout`
    alone would not catch them.

Each captured write becomes a LogEntry handed to the `capture` callback. When
`should_capture()` is false (the coordinator is drawing, flushing, or has been
disposed) calls pass straight through to the original stream or handlers.

Interception is a swap, not a wrapper chain: stop() puts back the exact
objects start() replaced, so repeated start/stop cycles never nest proxies.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable
from typing import IO, Any

from .buffer import Destination, LogEntry

CaptureFn = Callable[[LogEntry], None]
PredicateFn = Callable[[], bool]


def _decode(data: bytes | bytearray | memoryview, encoding: str | None) -> str:
    try:
        return bytes(data).decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return bytes(data).decode("utf-8", errors="replace")


class _InterceptedBuffer:
    """Binary side (`.buffer`) of an InterceptedStream."""

    def __init__(self, owner: InterceptedStream, original: IO[bytes]):
        self._owner = owner
        self._original = original

    def write(self, data: bytes | bytearray | memoryview) -> int:
        if not self._owner.capturing:
            return self._original.write(data)
        self._owner.capture_text(_decode(data, self._owner.encoding_name))
        return len(data)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._original, name)


class InterceptedStream:
    """Stand-in for `sys.stdout` / `sys.stderr` that captures writes.

    Everything except write/writelines/flush/buffer is delegated to the
    original stream, so `isatty()`, `fileno()` and `encoding` keep answering
    for the real terminal.
    """

    def __init__(self, original: IO[str], destination: Destination, interceptor: OutputInterceptor):
        self._original = original
        self._destination = destination
        self._interceptor = interceptor

    @property
    def original(self) -> IO[str]:
        return self._original

    @property
    def capturing(self) -> bool:
        return self._interceptor.should_capture()

    @property
    def encoding_name(self) -> str | None:
        return getattr(self._original, "encoding", None)

    @property
    def buffer(self) -> _InterceptedBuffer:
        return _InterceptedBuffer(self, self._original.buffer)  # type: ignore[attr-defined]

    def capture_text(self, text: str) -> None:
        # Whitespace-only writes (the "\n" print() sends separately) carry nothing to show.
        if text.strip():
            self._interceptor.capture(LogEntry.raw(text, self._destination))

    def write(self, data: Any, encoding: str | None = None) -> int:
        if not self.capturing:
            return self._original.write(data)
        if isinstance(data, (bytes, bytearray, memoryview)):
            text = _decode(data, encoding or self.encoding_name)
        else:
            text = str(data)
        self.capture_text(text)
        return len(data)

    def writelines(self, lines: Iterable[Any]) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        self._original.flush()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._original, name)


class _CaptureHandler(logging.Handler):
    """Handler installed in place of a logger's own handlers."""

    def __init__(self, interceptor: LoggingInterceptor, logger_name: str):
        super().__init__()
        self._interceptor = interceptor
        self._logger_name = logger_name

    def emit(self, record: logging.LogRecord) -> None:
        if self._interceptor.should_capture():
            self._interceptor.capture(LogEntry.structured(record, self._logger_name))
        else:
            self._interceptor.replay_record(self._logger_name, record)


class LoggingInterceptor:
    """Swaps logger handlers for a capturing handler and replays records later."""

    def __init__(self, capture: CaptureFn, should_capture: PredicateFn, logger_names: Iterable[str] = ("",)):
        self.capture = capture
        self.should_capture = should_capture
        self.logger_names = tuple(logger_names)
        self._saved: dict[str, list[logging.Handler]] = {}

    @property
    def active(self) -> bool:
        return bool(self._saved)

    def start(self) -> None:
        if self.active:
            return
        for name in self.logger_names:
            logger = logging.getLogger(name or None)
            self._saved[name] = logger.handlers
            logger.handlers = [_CaptureHandler(self, name)]

    def stop(self) -> None:
        for name, handlers in self._saved.items():
            logging.getLogger(name or None).handlers = handlers
        self._saved = {}

    def replay_record(self, logger_name: str, record: logging.LogRecord) -> None:
        """Hand a record to the handlers the logger had before interception."""
        handlers = self._saved.get(logger_name, [])
        if handlers:
            for handler in handlers:
                if record.levelno >= handler.level:
                    handler.handle(record)
        elif logging.lastResort is not None and record.levelno >= logging.lastResort.level:
            logging.lastResort.handle(record)


class OutputInterceptor:
    """Stream and logging interception switched on and off together."""

    def __init__(self, capture: CaptureFn, should_capture: PredicateFn, logger_names: Iterable[str] = ("",)):
        self.capture = capture
        self.should_capture = should_capture
        self.loggers = LoggingInterceptor(capture, should_capture, logger_names)
        self._stdout: IO[str] | None = None
        self._stderr: IO[str] | None = None

    @property
    def active(self) -> bool:
        return self._stdout is not None

    def start(self) -> None:
        if self.active:
            return
        self._stdout = sys.stdout
        self._stderr = sys.stderr
        sys.stdout = InterceptedStream(self._stdout, "stdout", self)  # type: ignore[assignment]
        sys.stderr = InterceptedStream(self._stderr, "stderr", self)  # type: ignore[assignment]
        self.loggers.start()

    def stop(self) -> None:
        if not self.active:
            return
        self.loggers.stop()
        sys.stdout = self._stdout  # type: ignore[assignment]
        sys.stderr = self._stderr  # type: ignore[assignment]
        self._stdout = None
        self._stderr = None

    def replay(self, entry: LogEntry) -> None:
        """Write a captured entry to its real destination."""
        if entry.channel == "structured":
            assert isinstance(entry.payload, logging.LogRecord)
            self.loggers.replay_record(entry.logger_name, entry.payload)
            return

        stream = self._stdout if entry.destination == "stdout" else self._stderr
        if stream is None:
            stream = sys.stdout if entry.destination == "stdout" else sys.stderr
        text = str(entry.payload)
        stream.write(text if text.endswith("\n") else f"{text}\n")
        stream.flush()
