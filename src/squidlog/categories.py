"""
Categories: named sources of log messages.

A category carries a name and an optional threshold override. Subclass to
declare one per subsystem:

    class NetworkCategory(Category):
        name = "Network"
        log_level = LogLevel.WARN

    network = NetworkCategory()
    network.info("connected")          # suppressed, WARN > INFO
    network.error("socket closed")

Categories share no state with each other; they only read the manager.
"""

import sys
from typing import Any, Callable, Optional

from squidlog.core import LogManager
from squidlog.records import LogLevel, LogRecord

_UNSET: Any = object()


class Category:
    """Logging façade bound to one category name."""

    name: str = "Default"
    log_level: Optional[LogLevel] = None  # None → manager default

    def __init__(
        self,
        name: str | None = None,
        log_level: LogLevel | None = _UNSET,
        *,
        manager: LogManager | None = None,
        stringify: Callable[[Any], str] = str,
    ):
        if name is not None:
            self.name = name
        if log_level is not _UNSET:
            self.log_level = log_level  # None clears a class-level override
        self._manager = manager
        self._stringify = stringify

    @property
    def manager(self) -> LogManager:
        """Injected manager, else the process-wide one (looked up per call)."""
        return self._manager if self._manager is not None else LogManager.instance()

    @property
    def effective_level(self) -> LogLevel:
        return self.log_level if self.log_level is not None else self.manager.default_level

    # ── Core ──────────────────────────────────────────────────────

    def log(
        self,
        level: LogLevel,
        payload: Any,
        *,
        file: str | None = None,
        line: int | None = None,
        function: str | None = None,
        stacklevel: int = 1,
    ) -> None:
        """
        Build a record at `level` and hand it to the manager.

        The call site is taken from the frame `stacklevel` levels above
        this method unless file/line/function are given. Never raises.
        """
        try:
            if file is None or line is None or function is None:
                caller_file, caller_line, caller_function = _caller(stacklevel)
                file = caller_file if file is None else file
                line = caller_line if line is None else line
                function = caller_function if function is None else function

            record = LogRecord.create(
                payload,
                level,
                self.name,
                file=file,
                line=line,
                function=function,
                category_level=self.log_level,
                stringify=self._stringify,
            )
            self.manager.dispatch(record)
        except Exception:
            # Logging must never interrupt the caller
            pass

    # ── Convenience Methods ───────────────────────────────────────

    def debug(self, payload: Any, **site: Any) -> None:
        self.log(LogLevel.DEBUG, payload, stacklevel=2, **site)

    def info(self, payload: Any, **site: Any) -> None:
        self.log(LogLevel.INFO, payload, stacklevel=2, **site)

    def warn(self, payload: Any, **site: Any) -> None:
        self.log(LogLevel.WARN, payload, stacklevel=2, **site)

    def error(self, payload: Any, **site: Any) -> None:
        self.log(LogLevel.ERROR, payload, stacklevel=2, **site)

    def fatal(self, payload: Any, **site: Any) -> None:
        self.log(LogLevel.FATAL, payload, stacklevel=2, **site)

    def none(self, payload: Any, **site: Any) -> None:
        self.log(LogLevel.NONE, payload, stacklevel=2, **site)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, log_level={self.log_level!r})"


class DefaultCategory(Category):
    """The catch-all "Default" category."""
    name = "Default"


def _caller(depth: int) -> tuple[str, int, str]:
    """(file, line, function) of the frame `depth` levels above the caller of _caller()."""
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return "", 0, ""
    code = frame.f_code
    return code.co_filename, frame.f_lineno, code.co_name
