"""
LogManager: process-wide configuration and dispatch engine.

One instance owns the default level, the ordered sink registry and the two
rendering strategies. Every accepted message passes two gates:

  1. category gate   category override, else default level
  2. sink gate       sink override, else default level (per sink)

The sink gate is measured against the default level, not against the
category's effective threshold. A category that raises its own threshold
does not raise the baseline its sinks compare against.
"""

import threading
from dataclasses import replace
from itertools import count
from typing import Any, Iterable, Optional

from squidlog.errors import ConfigurationError
from squidlog.formatters import DefaultTextFormatter, TextFormatter
from squidlog.records import LogLevel, LogRecord
from squidlog.sinks import ConsoleSink, Sink, SinkHandle
from squidlog.symbols import DefaultSymbolStrategy, SymbolStrategy


class LogManager:
    """
    Singleton-by-convention logger configuration.

    Usage:
        manager = LogManager.instance()
        console, = manager.configure([ConsoleSink()])
        manager.set_sink_level(LogLevel.ERROR, console)
        Category("Network").warn("retrying")
    """

    _instance: Optional["LogManager"] = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tokens = count(1)
        self._default_level = LogLevel.INFO
        self._symbols: SymbolStrategy = DefaultSymbolStrategy()
        self._formatter: TextFormatter = DefaultTextFormatter()
        self._registry: tuple[tuple[SinkHandle, Sink], ...] = ()
        # set_sink_level() overrides, per registration; None = inherit default
        self._overrides: dict[SinkHandle, Optional[LogLevel]] = {}
        self.configure()

    @classmethod
    def instance(cls) -> "LogManager":
        """Get or create the process-wide instance."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the process-wide instance. For testing only."""
        with cls._instance_lock:
            cls._instance = None

    # ── Sink registry ─────────────────────────────────────────────

    def configure(self, sinks: Iterable[Sink] | None = None) -> list[SinkHandle]:
        """
        Replace the whole sink registry. Defaults to a single ConsoleSink.

        Handles issued before this call no longer resolve, and every
        set_sink_level() override is dropped, even for a sink instance that
        is registered again.
        """
        if sinks is None:
            sinks = [ConsoleSink()]
        registry = tuple((self._new_handle(sink), sink) for sink in sinks)
        with self._lock:
            self._registry = registry
            self._overrides = {}
        return [handle for handle, _ in registry]

    def add_sink(self, sink: Sink) -> SinkHandle:
        """Append a sink to the registry."""
        handle = self._new_handle(sink)
        with self._lock:
            self._registry = self._registry + ((handle, sink),)
        return handle

    def get_sink(self, target: SinkHandle | str) -> Sink:
        """
        Resolve a handle, or the first sink registered under a name.
        Raises ConfigurationError if nothing matches.
        """
        return self._resolve(target)[1]

    def _resolve(self, target: SinkHandle | str) -> tuple[SinkHandle, Sink]:
        with self._lock:
            for handle, sink in self._registry:
                if isinstance(target, SinkHandle):
                    if handle == target:
                        return handle, sink
                elif sink.name == target:
                    return handle, sink
        raise ConfigurationError(f"{target!r} was not found in registered sinks")

    @property
    def sinks(self) -> list[Sink]:
        with self._lock:
            return [sink for _, sink in self._registry]

    def _new_handle(self, sink: Sink) -> SinkHandle:
        return SinkHandle(token=next(self._tokens), name=sink.name)

    # ── Levels ────────────────────────────────────────────────────

    @property
    def default_level(self) -> LogLevel:
        return self._default_level

    @default_level.setter
    def default_level(self, value: LogLevel | int | str) -> None:
        self.set_default_level(value)

    def set_default_level(self, level: LogLevel | int | str) -> None:
        """Fallback threshold for every category and sink without an override."""
        level = LogLevel.from_value(level)
        with self._lock:
            self._default_level = level

    def set_sink_level(self, level: LogLevel | int | str | None, target: SinkHandle | str) -> None:
        """
        Set one registration's threshold override. None makes it inherit the
        default level. The override lives in the manager, not on the sink,
        and is dropped by the next configure().
        An unregistered target is a misconfiguration and raises.
        """
        if level is not None:
            level = LogLevel.from_value(level)
        with self._lock:
            handle, _ = self._resolve(target)
            self._overrides = {**self._overrides, handle: level}

    def sink_level(self, target: SinkHandle | str) -> Optional[LogLevel]:
        """Threshold override in force for a sink, None if it inherits the default."""
        with self._lock:
            handle, sink = self._resolve(target)
            return _sink_override(handle, sink, self._overrides)

    # ── Rendering strategies ──────────────────────────────────────

    @property
    def symbol_strategy(self) -> SymbolStrategy:
        return self._symbols

    def set_symbol_strategy(self, strategy: SymbolStrategy) -> None:
        with self._lock:
            self._symbols = strategy

    @property
    def text_formatter(self) -> TextFormatter:
        return self._formatter

    def set_text_formatter(self, formatter: TextFormatter) -> None:
        with self._lock:
            self._formatter = formatter

    # ── Dispatch ──────────────────────────────────────────────────

    def dispatch(self, record: LogRecord) -> None:
        """
        Gate, render and fan out one record.

        A record failing the category gate returns here with no rendering
        and no sink touched. Sink failures stay with the sink.
        """
        with self._lock:
            default_level = self._default_level
            registry = self._registry
            overrides = self._overrides
            symbols = self._symbols
            formatter = self._formatter

        threshold = record.category_level if record.category_level is not None else default_level
        if not LogLevel.can_emit(threshold, record.level):
            return

        record = replace(record, symbols=symbols)
        default_text = formatter.format(record)

        for handle, sink in registry:
            sink_level = _sink_override(handle, sink, overrides) or default_level
            if not LogLevel.can_emit(sink_level, record.level):
                continue
            try:
                custom = sink.custom_format(record)
                text = sink.filter_text(custom) if custom is not None else default_text
                sink.raw_print(text)
            except Exception:
                # Never let a sink failure reach the caller or the other sinks
                pass

    # ── Config & Status ───────────────────────────────────────────

    def apply_config(self, config: Any) -> list[SinkHandle]:
        """
        Install a LoggerConfig (or an equivalent dict).
        Returns the handles of the newly registered sinks.
        """
        from squidlog.config import LoggerConfig, build_formatter, build_sink, build_symbols

        if not isinstance(config, LoggerConfig):
            config = LoggerConfig.from_dict(config)

        sinks = [build_sink(cfg) for cfg in config.sinks] if config.sinks is not None else None
        symbols = build_symbols(config.symbols)
        formatter = build_formatter(config.formatter)

        with self._lock:
            self.set_default_level(config.default_level)
            self.set_symbol_strategy(symbols)
            self.set_text_formatter(formatter)
            return self.configure(sinks)

    def status(self) -> dict:
        """Current configuration, for display."""
        with self._lock:
            default_level = self._default_level
            registry = self._registry
            overrides = self._overrides
            symbols = self._symbols
            formatter = self._formatter

        sinks = []
        for handle, sink in registry:
            level = _sink_override(handle, sink, overrides)
            sinks.append({
                "name": sink.name,
                "type": type(sink).__name__,
                "log_level": level.label if level is not None else None,
                "effective_level": (level or default_level).label,
            })

        return {
            "default_level": default_level.label,
            "symbol_strategy": type(symbols).__name__,
            "text_formatter": type(formatter).__name__,
            "sinks": sinks,
        }


def _sink_override(
    handle: SinkHandle,
    sink: Sink,
    overrides: dict[SinkHandle, Optional[LogLevel]],
) -> Optional[LogLevel]:
    """Manager override for this registration, else the sink's own level."""
    if handle in overrides:
        return overrides[handle]
    return sink.log_level
