"""
TraceWriter over a standard library logging.Logger.

For hosts that already route output through `logging`: combine it with a
DiagnosticsWriter to trace to both.

    writer = combine(DiagnosticsWriter(), LoggingWriter(logging.getLogger("orders")))
"""

import logging
import threading

from tracewire.tracing.contracts import TraceWriter


class LoggingWriter(TraceWriter):
    """verbose → DEBUG, write_line → INFO, the rest by name."""

    def __init__(self, logger: logging.Logger, indent_size: int = 4):
        self.logger = logger
        self.indent_size = indent_size
        self._indent_level = 0
        self._lock = threading.Lock()

    def _log(self, level: int, message: str) -> None:
        prefix = " " * (self._indent_level * self.indent_size)
        self.logger.log(level, "%s%s", prefix, message)

    def verbose(self, message: str) -> None:
        self._log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._log(logging.WARNING, message)

    def error(self, message: str) -> None:
        self._log(logging.ERROR, message)

    def critical(self, message: str) -> None:
        self._log(logging.CRITICAL, message)

    def write_line(self, message: str) -> None:
        self._log(logging.INFO, message)

    def flush(self) -> None:
        for handler in self.logger.handlers:
            handler.flush()

    def indent(self) -> None:
        with self._lock:
            self._indent_level += 1

    def unindent(self) -> None:
        with self._lock:
            self._indent_level = max(0, self._indent_level - 1)
