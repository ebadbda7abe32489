"""
Ordered buffer of output captured while the live block is on screen.

Both interception paths (stream writes and log records) append to one
LogBuffer, so a single append-ordered list is enough to keep replay order equal
to emission order across the two paths.
"""

import logging
from dataclasses import dataclass
from typing import Literal

Channel = Literal["structured", "raw"]
Destination = Literal["stdout", "stderr"]


@dataclass(frozen=True)
class LogEntry:
    """One captured write.

    `payload` is the `logging.LogRecord` for structured entries and the decoded
    text for raw entries. `destination` names the real stream the entry was
    heading for.
    """

    channel: Channel
    payload: logging.LogRecord | str
    destination: Destination
    logger_name: str = ""

    @classmethod
    def raw(cls, text: str, destination: Destination) -> "LogEntry":
        return cls("raw", text, destination)

    @classmethod
    def structured(cls, record: logging.LogRecord, logger_name: str = "") -> "LogEntry":
        destination: Destination = "stderr" if record.levelno >= logging.WARNING else "stdout"
        return cls("structured", record, destination, logger_name)


class LogBuffer:
    """Append-ordered queue of LogEntry values."""

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)

    def drain(self) -> list[LogEntry]:
        """Take every buffered entry, leaving the buffer empty.

        Entries appended while the caller replays the returned list land in the
        fresh buffer and wait for the next drain.
        """
        entries, self._entries = self._entries, []
        return entries

    def clear(self) -> None:
        self._entries = []

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
