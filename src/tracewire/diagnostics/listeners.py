"""
Trace listeners (output destinations attached to the TraceRegistry).

One registry, many listeners. Each listener decides for itself whether an
event passes its trace level; the registry does no filtering.

Listeners carry a free-form attribute map. Two keys are well known:
    LogFilePath  path of the file a TextWriterListener writes to
    traceLevel   TraceLevel name honoured by should_trace()
"""

import sys
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional, TextIO

from tracewire.config import LoggingConfiguration, TraceLevel, TraceOptions
from tracewire.diagnostics.formatters import EventFormatter, LineFormatter, TraceEvent
from tracewire.tracing.records import Severity

LOG_FILE_PATH_KEY = "LogFilePath"
TRACE_LEVEL_KEY = "traceLevel"

# Minimum listener level at which each severity is written
_REQUIRED_LEVEL: dict[Severity, TraceLevel] = {
    Severity.VERBOSE: TraceLevel.VERBOSE,
    Severity.INFO: TraceLevel.INFO,
    Severity.EVENT: TraceLevel.INFO,
    Severity.WARNING: TraceLevel.WARNING,
    Severity.ERROR: TraceLevel.ERROR,
    Severity.CRITICAL: TraceLevel.ERROR,
    Severity.WRITE: TraceLevel.ERROR,
}


class TraceListener(ABC):
    """Base listener. Receives events from the registry."""

    def __init__(
        self,
        name: str,
        trace_options: TraceOptions = TraceOptions.NONE,
        formatter: EventFormatter | None = None,
    ):
        self.name = name
        self.trace_options = trace_options
        self.attributes: dict[str, str] = {}
        self._formatter = formatter

    @property
    def formatter(self) -> EventFormatter:
        if self._formatter is None:
            self._formatter = self._default_formatter()
        return self._formatter

    @formatter.setter
    def formatter(self, value: EventFormatter) -> None:
        self._formatter = value

    def _default_formatter(self) -> EventFormatter:
        """Subclass-specific default."""
        return LineFormatter()

    # ── Trace level ───────────────────────────────────────────────

    @property
    def trace_level(self) -> TraceLevel:
        raw = self.attributes.get(TRACE_LEVEL_KEY)
        if raw is None:
            return TraceLevel.VERBOSE
        return TraceLevel.from_value(raw)

    @trace_level.setter
    def trace_level(self, value: TraceLevel | int | str) -> None:
        level = TraceLevel.from_value(value)
        self.attributes[TRACE_LEVEL_KEY] = level.name.capitalize()

    def should_trace(self, severity: Severity) -> bool:
        level = self.trace_level
        return level is not TraceLevel.OFF and level >= _REQUIRED_LEVEL[severity]

    # ── Output ────────────────────────────────────────────────────

    @abstractmethod
    def emit(self, severity: Severity, text: str) -> None:
        """Write one already formatted line, newline included."""
        ...

    def write(self, text: str) -> None:
        """Write raw text, no formatting and no newline added."""
        self.emit(Severity.WRITE, text)

    def write_line(self, message: str, indent: int = 0) -> None:
        event = TraceEvent.create(Severity.WRITE, message, self.name, indent)
        self.emit(Severity.WRITE, self.formatter.format(event, self.trace_options) + "\n")

    def trace_event(self, severity: Severity, message: str, indent: int = 0) -> None:
        event = TraceEvent.create(severity, message, self.name, indent)
        self.emit(severity, self.formatter.format(event, self.trace_options) + "\n")

    def flush(self) -> None:
        """Flush buffered output. Override if the listener buffers."""
        pass

    def close(self) -> None:
        """Cleanup. Override if listener holds resources."""
        self.flush()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class TextWriterListener(TraceListener):
    """
    Writes lines to a text stream (typically an open log file).

    The stream is closed on close() only when owns_stream is set.
    """

    def __init__(
        self,
        stream: TextIO,
        name: str = "text",
        trace_options: TraceOptions = TraceOptions.NONE,
        formatter: EventFormatter | None = None,
        owns_stream: bool = False,
    ):
        super().__init__(name, trace_options, formatter)
        self.stream = stream
        self.owns_stream = owns_stream
        self._lock = threading.Lock()

    def emit(self, severity: Severity, text: str) -> None:
        with self._lock:
            # Late writes from a pre-close snapshot are dropped
            if not self.stream.closed:
                self.stream.write(text)

    def flush(self) -> None:
        with self._lock:
            if not self.stream.closed:
                self.stream.flush()

    def close(self) -> None:
        self.flush()
        if self.owns_stream:
            with self._lock:
                self.stream.close()


class ConsoleListener(TraceListener):
    """
    Auxiliary listener writing to the terminal with ANSI colour coding.
    ERROR and CRITICAL go to stderr, everything else to stdout.

    Takes a LoggingConfiguration so the class itself can be passed as the
    auxiliary constructor. auxiliary_configuration may be a mapping with
    "name" and "color" keys. trace_options defaults to the configuration's.
    """

    COLORS = {
        Severity.VERBOSE: "\033[36m",       # cyan
        Severity.INFO: "\033[37m",          # white/default
        Severity.EVENT: "\033[97m",         # bright white
        Severity.WARNING: "\033[33m",       # yellow
        Severity.ERROR: "\033[31m",         # red
        Severity.CRITICAL: "\033[1;91m",    # bold bright red
    }
    RESET = "\033[0m"

    def __init__(
        self,
        config: Optional[LoggingConfiguration] = None,
        name: str | None = None,
        color: bool | None = None,
        trace_options: TraceOptions | None = None,
        formatter: EventFormatter | None = None,
    ):
        if trace_options is None:
            trace_options = config.trace_options if config is not None else TraceOptions.NONE
        options: dict[str, Any] = {}
        if config is not None and isinstance(config.auxiliary_configuration, dict):
            options = config.auxiliary_configuration
        if name is None:
            name = options.get("name", "console")
        if color is None:
            color = bool(options.get("color", False))
        super().__init__(name, trace_options, formatter)
        self.color = color

    def emit(self, severity: Severity, text: str) -> None:
        if self.color and severity in self.COLORS:
            body = text.rstrip("\n")
            text = f"{self.COLORS[severity]}{body}{self.RESET}" + text[len(body):]
        stream = sys.stderr if severity in (Severity.ERROR, Severity.CRITICAL) else sys.stdout
        stream.write(text)
        stream.flush()

    def flush(self) -> None:
        sys.stdout.flush()
        sys.stderr.flush()
