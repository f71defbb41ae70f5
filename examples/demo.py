"""
Demo: wiring squidlog at startup and logging from two categories.

Shows:
1. A console sink with its own renderer and a redaction filter
2. Default level vs. per-sink level override
3. Replacing the symbol strategy and the default formatter
4. A per-category override

Run:
    python examples/demo.py
"""

import re

from squidlog import (
    Category,
    DefaultCategory,
    LetterSymbolStrategy,
    LogLevel,
    LogManager,
    PayloadFormatter,
    StreamSink,
)


class RedactingConsole(StreamSink):
    """Console sink printing "<level>:<message>" with "hello" redacted."""

    PATTERN = re.compile("hello")

    def custom_format(self, record):
        return f"{record.level.label}:{record.message}"

    def filter_text(self, text):
        return self.PATTERN.sub("<FILTERED>", text)


class NetworkCategory(Category):
    name = "Network"


def main():
    manager = LogManager.instance()
    console, = manager.configure([RedactingConsole(name="console")])
    manager.set_default_level(LogLevel.INFO)

    manager.set_sink_level(LogLevel.ERROR, console)
    manager.set_symbol_strategy(LetterSymbolStrategy())
    manager.set_text_formatter(PayloadFormatter())

    app = DefaultCategory()
    app.debug("hello world.")
    app.info("hello world.")
    app.warn("hello world.")
    app.error("hello world.")    # error:<FILTERED> world.
    app.fatal("hello world.")    # fatal:<FILTERED> world.

    NetworkCategory.log_level = LogLevel.ERROR
    network = NetworkCategory()
    network.warn("retrying")
    network.error("socket closed")  # error:socket closed

    print(manager.status())


if __name__ == "__main__":
    main()
