"""
Tests for logger configuration schemas.

Covers:
- LoggerConfig / SinkConfig validation
- YAML parsing
- Builders (sinks, symbols, formatters)
- LogManager.apply_config()
"""

import pytest
from pydantic import ValidationError

from squidlog import (
    ConfigurationError,
    ConsoleSink,
    DefaultSymbolStrategy,
    DefaultTextFormatter,
    LetterSymbolStrategy,
    LogLevel,
    LogManager,
    MemorySink,
    PayloadFormatter,
)
from squidlog.config import (
    LoggerConfig,
    SinkConfig,
    build_formatter,
    build_sink,
    build_symbols,
)


FULL_YAML = """
default_level: debug
symbols: letters
formatter: payload
sinks:
  - type: console
    log_level: error
  - type: memory
    name: buffer
    capacity: 50
"""


@pytest.fixture(autouse=True)
def reset_manager():
    LogManager.reset()
    yield
    LogManager.reset()


# ═══════════════════════════════════════════════════════════════════
#  Schemas
# ═══════════════════════════════════════════════════════════════════

class TestLoggerConfig:
    def test_defaults(self):
        cfg = LoggerConfig()
        assert cfg.default_level is LogLevel.INFO
        assert cfg.symbols == "default"
        assert cfg.formatter == "default"
        assert cfg.sinks is None

    def test_level_by_name_or_rank(self):
        assert LoggerConfig(default_level="WARN").default_level is LogLevel.WARN
        assert LoggerConfig(default_level=4).default_level is LogLevel.ERROR

    def test_invalid_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggerConfig(default_level="verbose")

    @pytest.mark.parametrize("yaml_string", [
        "default_level: yes",
        "default_level: null",
        "default_level: 2.5",
    ])
    def test_wrong_level_type_rejected(self, yaml_string):
        with pytest.raises(ValidationError):
            LoggerConfig.from_yaml_string(yaml_string)

    def test_from_yaml_string(self):
        cfg = LoggerConfig.from_yaml_string(FULL_YAML)
        assert cfg.default_level is LogLevel.DEBUG
        assert cfg.symbols == "letters"
        assert len(cfg.sinks) == 2
        assert cfg.sinks[0].log_level is LogLevel.ERROR
        assert cfg.sinks[1].capacity == 50

    def test_empty_yaml_is_defaults(self):
        assert LoggerConfig.from_yaml_string("") == LoggerConfig()

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "logging.yaml"
        path.write_text(FULL_YAML, encoding="utf-8")
        cfg = LoggerConfig.from_yaml(path)
        assert cfg.sinks[1].name == "buffer"

    def test_to_dict_excludes_none(self):
        cfg = LoggerConfig.from_dict({"sinks": [{"type": "console"}]})
        assert cfg.to_dict()["sinks"] == [{"type": "console"}]


class TestSinkConfig:
    def test_defaults(self):
        cfg = SinkConfig()
        assert cfg.type == "console"
        assert cfg.log_level is None

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            SinkConfig(type="memory", capacity=0)

    @pytest.mark.parametrize("value", [2.5, True])
    def test_wrong_level_type_rejected(self, value):
        with pytest.raises(ValidationError):
            SinkConfig(log_level=value)


# ═══════════════════════════════════════════════════════════════════
#  Builders
# ═══════════════════════════════════════════════════════════════════

class TestBuilders:
    def test_build_console(self):
        sink = build_sink(SinkConfig(type="console", log_level="warn"))
        assert isinstance(sink, ConsoleSink)
        assert sink.name == "console"
        assert sink.log_level is LogLevel.WARN

    def test_build_memory(self):
        sink = build_sink(SinkConfig(type="memory", capacity=3))
        assert isinstance(sink, MemorySink)
        assert sink.capacity == 3

    def test_unknown_sink_type(self):
        with pytest.raises(ConfigurationError, match="Unknown sink type"):
            build_sink(SinkConfig(type="syslog"))

    def test_symbols(self):
        assert isinstance(build_symbols("default"), DefaultSymbolStrategy)
        assert isinstance(build_symbols("Letters"), LetterSymbolStrategy)
        with pytest.raises(ConfigurationError):
            build_symbols("runes")

    def test_formatters(self):
        assert isinstance(build_formatter("default"), DefaultTextFormatter)
        assert isinstance(build_formatter("payload"), PayloadFormatter)
        with pytest.raises(ConfigurationError):
            build_formatter("json")


# ═══════════════════════════════════════════════════════════════════
#  LogManager.apply_config
# ═══════════════════════════════════════════════════════════════════

class TestApplyConfig:
    def test_installs_everything(self):
        manager = LogManager()
        handles = manager.apply_config(LoggerConfig.from_yaml_string(FULL_YAML))

        assert [h.name for h in handles] == ["console", "buffer"]
        assert manager.default_level is LogLevel.DEBUG
        assert isinstance(manager.symbol_strategy, LetterSymbolStrategy)
        assert isinstance(manager.text_formatter, PayloadFormatter)
        assert [type(s) for s in manager.sinks] == [ConsoleSink, MemorySink]

    def test_accepts_dict(self):
        manager = LogManager()
        manager.apply_config({"default_level": "error", "sinks": [{"type": "memory"}]})
        assert manager.default_level is LogLevel.ERROR
        assert manager.status()["sinks"][0]["type"] == "MemorySink"

    def test_no_sinks_means_console(self):
        manager = LogManager()
        manager.configure([MemorySink()])
        manager.apply_config({})
        assert [type(s) for s in manager.sinks] == [ConsoleSink]

    def test_handles_target_configured_sinks(self):
        manager = LogManager()
        console, buffer = manager.apply_config(LoggerConfig.from_yaml_string(FULL_YAML))
        manager.set_sink_level(LogLevel.FATAL, buffer)
        assert manager.sink_level(buffer) is LogLevel.FATAL

    def test_unknown_strategy_leaves_config_untouched(self):
        manager = LogManager()
        with pytest.raises(ConfigurationError):
            manager.apply_config({"default_level": "fatal", "symbols": "runes"})
        assert manager.default_level is LogLevel.INFO
