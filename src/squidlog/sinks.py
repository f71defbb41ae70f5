"""
Sinks (output destinations).

One manager, many sinks. Each sink gets its own level gate and may render
a record its own way. A sink receives plain text only; everything up to
the final string is decided by LogManager.dispatch().

Hooks a sink may override:
  raw_print(text)        required, writes the final text
  custom_format(record)  return None to reuse the manager's default line
  filter_text(text)      applied to custom_format() output only
"""

import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Optional, TextIO

from squidlog.records import LogLevel, LogRecord


@dataclass(frozen=True)
class SinkHandle:
    """
    Returned when a sink is registered. Pass it back to
    LogManager.set_sink_level() to target exactly that registration.
    `name` is the sink name at registration time.
    """
    token: int
    name: str


class Sink(ABC):
    """Base sink. Receives rendered text."""

    def __init__(self, name: str | None = None, log_level: LogLevel | None = None):
        self.name = name or type(self).__name__
        self.log_level: Optional[LogLevel] = log_level  # None → manager default

    @abstractmethod
    def raw_print(self, text: str) -> None:
        """Write final text. Must not raise into the caller."""
        ...

    def custom_format(self, record: LogRecord) -> str | None:
        """Sink-specific rendering. None means use the default line."""
        return None

    def filter_text(self, text: str) -> str:
        """Redact or rewrite custom-rendered text. Identity by default."""
        return text


class StreamSink(Sink):
    """
    Writes one line per message to a text stream.
    Writes are serialized so concurrent callers never interleave a line.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        name: str | None = None,
        log_level: LogLevel | None = None,
    ):
        super().__init__(name, log_level)
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def raw_print(self, text: str) -> None:
        try:
            with self._lock:
                stream = self.stream
                stream.write(text + "\n")
                stream.flush()
        except (OSError, ValueError):
            # Closed or broken stream: this sink goes quiet, the caller doesn't notice
            pass


class ConsoleSink(StreamSink):
    """Default sink: standard output, resolved at write time."""

    def __init__(self, name: str = "console", log_level: LogLevel | None = None):
        super().__init__(None, name, log_level)


class MemorySink(Sink):
    """
    Ring buffer of the last N rendered lines.
    For tests and in-process inspection. Does not grow unbounded.
    """

    def __init__(
        self,
        name: str = "memory",
        log_level: LogLevel | None = None,
        capacity: int = 10000,
    ):
        super().__init__(name, log_level)
        self._buffer: deque[str] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def raw_print(self, text: str) -> None:
        with self._lock:
            self._buffer.append(text)

    @property
    def lines(self) -> list[str]:
        with self._lock:
            return list(self._buffer)

    def get_recent(self, n: int = 100) -> list[str]:
        if n <= 0:
            return []
        return self.lines[-n:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    @property
    def count(self) -> int:
        return len(self._buffer)

    @property
    def capacity(self) -> int | None:
        return self._buffer.maxlen
