"""
Log records and level definitions.

Levels form a fixed ladder: DEBUG < INFO < WARN < ERROR < FATAL < NONE.
A gate with threshold T emits a message at level M iff T <= M, so NONE as a
threshold suppresses everything.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from functools import cached_property
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from squidlog.symbols import SymbolStrategy


class LogLevel(IntEnum):
    """Severity ladder. Only ever compared with <=."""
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5
    NONE = 6

    @property
    def label(self) -> str:
        """Lowercase name used in rendered lines, e.g. 'error'."""
        return self.name.lower()

    @staticmethod
    def can_emit(threshold: "LogLevel", message_level: "LogLevel") -> bool:
        """The gate: True if a message at message_level passes threshold."""
        return threshold <= message_level

    def to_symbol(self, strategy: Optional["SymbolStrategy"] = None) -> str:
        """
        Render this level as a short symbol.

        Without an explicit strategy, the process-wide manager's current
        strategy is looked up on every call, so replacing the strategy
        changes how every level renders from then on.
        """
        if strategy is None:
            from squidlog.core import LogManager
            strategy = LogManager.instance().symbol_strategy
        return strategy.to_symbol(self)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve level from string name, case-insensitive."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.label for m in cls)}"
            )

    @classmethod
    def from_value(cls, value: "int | str | LogLevel") -> "LogLevel":
        """Resolve level from a member, rank or name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(
                    f"No log level with rank {value}. "
                    f"Valid ranks: {', '.join(f'{m.label}={m.value}' for m in cls)}"
                )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")


@dataclass(frozen=True)
class SourceLocation:
    """Call site of a log statement."""
    file: str = ""
    line: int = 0
    function: str = ""

    @property
    def file_name(self) -> str:
        """Last path component of file, empty if there is none."""
        if not self.file:
            return ""
        return os.path.basename(self.file.rstrip("/\\"))


@dataclass(frozen=True)
class LogRecord:
    """
    Immutable record of one log call.

    Built by a Category, handed to LogManager.dispatch(), then discarded.
    The payload is never rendered by the record itself: `message` applies
    `stringify` on first access, so a record rejected by the first gate
    costs no string conversion.
    """
    payload: Any
    level: LogLevel
    category: str
    location: SourceLocation = field(default_factory=SourceLocation)
    timestamp: datetime = field(default_factory=lambda: datetime.now().astimezone())
    category_level: Optional[LogLevel] = None  # category override, None = inherit
    stringify: Callable[[Any], str] = field(default=str, repr=False, compare=False)
    symbols: Optional["SymbolStrategy"] = field(default=None, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        payload: Any,
        level: LogLevel,
        category: str,
        file: str = "",
        line: int = 0,
        function: str = "",
        category_level: Optional[LogLevel] = None,
        stringify: Callable[[Any], str] = str,
    ) -> "LogRecord":
        """Factory with auto-timestamp."""
        return cls(
            payload=payload,
            level=level,
            category=category,
            location=SourceLocation(file=file, line=line, function=function),
            category_level=category_level,
            stringify=stringify,
        )

    @cached_property
    def message(self) -> str:
        return self.stringify(self.payload)

    @property
    def file_name(self) -> str:
        return self.location.file_name

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def function(self) -> str:
        return self.location.function

    @property
    def symbol(self) -> str:
        return self.level.to_symbol(self.symbols)
