"""
Level symbol strategies.

A SymbolStrategy turns a LogLevel into the short marker printed at the
start of each default-formatted line. Both built-ins are total over the
level ladder and map NONE to the empty string.
"""

from abc import ABC, abstractmethod

from squidlog.records import LogLevel


class SymbolStrategy(ABC):
    """Base strategy. Transforms LogLevel → symbol string."""

    @abstractmethod
    def to_symbol(self, level: LogLevel) -> str: ...


class DefaultSymbolStrategy(SymbolStrategy):
    """Emoji markers."""

    SYMBOLS = {
        LogLevel.DEBUG: "📋",
        LogLevel.INFO: "💡",
        LogLevel.WARN: "⚠️",
        LogLevel.ERROR: "🚫",
        LogLevel.FATAL: "💔",
        LogLevel.NONE: "",
    }

    def to_symbol(self, level: LogLevel) -> str:
        return self.SYMBOLS[level]


class LetterSymbolStrategy(SymbolStrategy):
    """
    Single-letter markers for terminals without emoji support.
    Example: E error [Default] 2026-02-12 14:32:05.123 app.py(12) main - boom
    """

    SYMBOLS = {
        LogLevel.DEBUG: "D",
        LogLevel.INFO: "I",
        LogLevel.WARN: "W",
        LogLevel.ERROR: "E",
        LogLevel.FATAL: "F",
        LogLevel.NONE: "",
    }

    def to_symbol(self, level: LogLevel) -> str:
        return self.SYMBOLS[level]
