"""
squidlog: a leveled, categorized logging façade.

Categories emit, the manager gates and renders, sinks print.
Two gates per message: the category's threshold, then each sink's.
"""

from squidlog.records import LogLevel, LogRecord, SourceLocation
from squidlog.symbols import SymbolStrategy, DefaultSymbolStrategy, LetterSymbolStrategy
from squidlog.formatters import TextFormatter, DefaultTextFormatter, PayloadFormatter
from squidlog.sinks import Sink, SinkHandle, StreamSink, ConsoleSink, MemorySink
from squidlog.core import LogManager
from squidlog.categories import Category, DefaultCategory
from squidlog.errors import ConfigurationError

__all__ = [
    "LogLevel",
    "LogRecord",
    "SourceLocation",
    "SymbolStrategy",
    "DefaultSymbolStrategy",
    "LetterSymbolStrategy",
    "TextFormatter",
    "DefaultTextFormatter",
    "PayloadFormatter",
    "Sink",
    "SinkHandle",
    "StreamSink",
    "ConsoleSink",
    "MemorySink",
    "LogManager",
    "Category",
    "DefaultCategory",
    "ConfigurationError",
]
