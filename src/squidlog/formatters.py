"""
Text formatters.

A TextFormatter renders a LogRecord to the line a sink prints.
  - default: "{symbol} {level} [{category}] {yyyy-MM-dd HH:mm:ss.SSS} {file}({line}) {function} - {message}"
  - payload: "{message}"

The default layout is relied upon by anything snapshot-testing output;
keep its punctuation stable.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from squidlog.records import LogRecord


class TextFormatter(ABC):
    """Base formatter. Transforms LogRecord → string."""

    @abstractmethod
    def format(self, record: LogRecord) -> str: ...


class DefaultTextFormatter(TextFormatter):
    """
    Single-line format with full context.
    Example: 🚫 error [Network] 2026-02-12 14:32:05.123 client.py(42) fetch - timeout
    """

    def format(self, record: LogRecord) -> str:
        return (
            f"{record.symbol} {record.level.label} [{record.category}] "
            f"{format_timestamp(record.timestamp)} "
            f"{record.file_name}({record.line}) {record.function} - {record.message}"
        )


class PayloadFormatter(TextFormatter):
    """Bare message text, no decoration."""

    def format(self, record: LogRecord) -> str:
        return record.message


def format_timestamp(ts: datetime) -> str:
    """yyyy-MM-dd HH:mm:ss.SSS (millisecond precision, truncated)."""
    return f"{ts.strftime('%Y-%m-%d %H:%M:%S')}.{ts.microsecond // 1000:03d}"
