"""
Pydantic configuration schemas for squidlog.

A logger setup can be described in YAML and installed in one call:

    default_level: info
    symbols: letters
    sinks:
      - type: console
        log_level: error
      - type: memory
        name: buffer
        capacity: 500

Usage:
    config = LoggerConfig.from_yaml("logging.yaml")
    handles = LogManager.instance().apply_config(config)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from squidlog.errors import ConfigurationError
from squidlog.formatters import DefaultTextFormatter, PayloadFormatter, TextFormatter
from squidlog.records import LogLevel
from squidlog.sinks import ConsoleSink, MemorySink, Sink
from squidlog.symbols import DefaultSymbolStrategy, LetterSymbolStrategy, SymbolStrategy


SYMBOL_STRATEGIES: dict[str, type[SymbolStrategy]] = {
    "default": DefaultSymbolStrategy,
    "letters": LetterSymbolStrategy,
}

TEXT_FORMATTERS: dict[str, type[TextFormatter]] = {
    "default": DefaultTextFormatter,
    "payload": PayloadFormatter,
}


# ═══════════════════════════════════════════════════════════════════
#  Sink Config
# ═══════════════════════════════════════════════════════════════════

class SinkConfig(BaseModel):
    type: str = "console"
    name: Optional[str] = None
    log_level: Optional[LogLevel] = None      # None → manager default
    capacity: Optional[int] = Field(None, gt=0)   # memory

    @field_validator("log_level", mode="before")
    @classmethod
    def resolve_level(cls, value):
        return None if value is None else _level(value)


# ═══════════════════════════════════════════════════════════════════
#  Top-Level Logger Config
# ═══════════════════════════════════════════════════════════════════

class LoggerConfig(BaseModel):
    default_level: LogLevel = LogLevel.INFO
    symbols: str = "default"
    formatter: str = "default"
    sinks: Optional[list[SinkConfig]] = None  # None → one console sink

    @field_validator("default_level", mode="before")
    @classmethod
    def resolve_level(cls, value):
        return _level(value)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoggerConfig":
        """Load and validate from a YAML file."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.from_yaml_string(raw)

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "LoggerConfig":
        """Load and validate from a YAML string."""
        data = yaml.safe_load(yaml_string) or {}
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict) -> "LoggerConfig":
        """Load and validate from a dict."""
        return cls.model_validate(data)

    def to_dict(self, exclude_none: bool = True) -> dict:
        return self.model_dump(exclude_none=exclude_none)


# ── Builders ──────────────────────────────────────────────────────────

def _level(value) -> LogLevel:
    """LogLevel.from_value(), with type errors reported as validation errors."""
    try:
        return LogLevel.from_value(value)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc


def build_sink(cfg: SinkConfig) -> Sink:
    """Build a sink from its config entry."""
    if cfg.type == "console":
        return ConsoleSink(name=cfg.name or "console", log_level=cfg.log_level)
    elif cfg.type == "memory":
        return MemorySink(
            name=cfg.name or "memory",
            log_level=cfg.log_level,
            capacity=cfg.capacity or 10000,
        )
    else:
        raise ConfigurationError(
            f"Unknown sink type '{cfg.type}'. Valid types: console, memory"
        )


def build_symbols(name: str) -> SymbolStrategy:
    try:
        return SYMBOL_STRATEGIES[name.lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown symbol strategy '{name}'. "
            f"Valid strategies: {', '.join(SYMBOL_STRATEGIES)}"
        )


def build_formatter(name: str) -> TextFormatter:
    try:
        return TEXT_FORMATTERS[name.lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown text formatter '{name}'. "
            f"Valid formatters: {', '.join(TEXT_FORMATTERS)}"
        )
