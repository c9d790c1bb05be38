"""
Attaching file and auxiliary listeners to the TraceRegistry.

Both entry points are create-or-reuse: a second registration for the same
component (file sink) or the same listener type (auxiliary sink) reuses the
attached listener instead of adding another one. The registry lock is held
across each lookup-then-add sequence.

Usage:
    config = LoggingConfiguration(title="Worker 1.2", component_name="worker")
    with register_file_and_auxiliary_sink(ConsoleListener, config) as sink:
        default_tracer().info("Writing to {}", sink.log_file_path)

Handles own what they opened. close() flushes, detaches and closes, and is
safe to call more than once. Nothing is closed implicitly at exit.
"""

from __future__ import annotations

import re
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, TextIO

from tracewire.config import LoggingConfiguration, TraceOptions
from tracewire.diagnostics.environment import trace_environment
from tracewire.diagnostics.listeners import (
    LOG_FILE_PATH_KEY,
    TextWriterListener,
    TraceListener,
)
from tracewire.diagnostics.registry import TraceRegistry
from tracewire.diagnostics.writer import default_tracer

# Characters that are invalid in a file name on at least one platform
_INVALID_FILE_NAME_CHARS = re.compile(r'[<>:"/\\|?*!\s\x00-\x1f]')


def sanitize_component_name(component_name: str) -> str:
    """Strip whitespace and characters that cannot appear in a file name."""
    return _INVALID_FILE_NAME_CHARS.sub("", component_name)


def log_file_name(component_name: str, now: datetime | None = None) -> str:
    """{sanitized}-{yyyyMMdd-hhmmss}.log, with a 12-hour clock."""
    now = now or datetime.now()
    return f"{sanitize_component_name(component_name)}-{now:%Y%m%d-%I%M%S}.log"


# ═══════════════════════════════════════════════════════════════════
#  Handles
# ═══════════════════════════════════════════════════════════════════

class SinkHandle(ABC):
    """Releasable registration. Usable as a context manager."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._closed = False

    @property
    @abstractmethod
    def log_file_path(self) -> str: ...

    @abstractmethod
    def flush(self) -> None: ...

    @abstractmethod
    def _release(self) -> None:
        """Free the owned resources. Called at most once."""
        ...

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._release()

    def release(self) -> None:
        self.close()

    def __enter__(self) -> "SinkHandle":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"{type(self).__name__}({self.log_file_path!r}, {state})"


class FileSinkHandle(SinkHandle):
    """Owns an open log file and the TextWriterListener writing to it."""

    def __init__(
        self,
        registry: TraceRegistry,
        listener: TextWriterListener,
        stream: TextIO,
        path: Path,
    ):
        super().__init__()
        self._registry = registry
        self._listener = listener
        self._stream = stream
        self._path = path

    @property
    def log_file_path(self) -> str:
        return str(self._path)

    @property
    def listener(self) -> TextWriterListener:
        return self._listener

    def flush(self) -> None:
        if self._closed:
            return
        self._listener.flush()
        self._stream.flush()

    def _release(self) -> None:
        self._listener.flush()
        self._stream.flush()
        self._registry.remove(self._listener)
        # The listener owns the stream and closes it under its write lock
        self._listener.close()


class ReusedFileSinkHandle(SinkHandle):
    """
    Returned when the component already has a file listener attached.
    Owns nothing: flush and close leave the original registration alone.
    """

    def __init__(self, listener: TextWriterListener):
        super().__init__()
        self._listener = listener

    @property
    def log_file_path(self) -> str:
        return self._listener.attributes[LOG_FILE_PATH_KEY]

    @property
    def listener(self) -> TextWriterListener:
        return self._listener

    def flush(self) -> None:
        pass

    def _release(self) -> None:
        pass


class CombinedSinkHandle(SinkHandle):
    """A file handle plus the auxiliary listener attached alongside it."""

    def __init__(
        self,
        file_handle: SinkHandle,
        registry: TraceRegistry,
        auxiliary: TraceListener,
    ):
        super().__init__()
        self._file_handle = file_handle
        self._registry = registry
        self._auxiliary = auxiliary

    @property
    def log_file_path(self) -> str:
        return self._file_handle.log_file_path

    @property
    def file_handle(self) -> SinkHandle:
        return self._file_handle

    @property
    def auxiliary(self) -> TraceListener:
        return self._auxiliary

    def flush(self) -> None:
        if self._closed:
            return
        self._auxiliary.flush()
        self._file_handle.flush()

    def _release(self) -> None:
        self._file_handle.close()
        self._registry.remove(self._auxiliary)
        self._auxiliary.close()


# ═══════════════════════════════════════════════════════════════════
#  Registration
# ═══════════════════════════════════════════════════════════════════

def register_file_sink(
    component_name: str,
    directory: str | Path | None = None,
    trace_options: TraceOptions = TraceOptions.DATETIME,
    registry: TraceRegistry | None = None,
) -> SinkHandle:
    """
    Attach a listener writing to {directory}/{component}-{timestamp}.log.

    directory defaults to the current working directory. If a file listener
    for component_name is already attached, its path is reused and the
    returned handle owns nothing.

    Raises:
        OSError: If the log file cannot be created. Nothing is attached.
    """
    if registry is None:
        registry = TraceRegistry.instance()

    with registry.lock:
        existing = registry.find(TextWriterListener, component_name)
        if existing is not None:
            return ReusedFileSinkHandle(existing)

        base = Path(directory) if directory is not None else Path.cwd()
        base.mkdir(parents=True, exist_ok=True)
        path = base / log_file_name(component_name)

        # Append, line buffered; other processes may open it for reading
        stream = open(path, "a", encoding="utf-8", buffering=1)
        listener = TextWriterListener(
            stream,
            name=component_name,
            trace_options=trace_options,
            owns_stream=True,
        )
        listener.attributes[LOG_FILE_PATH_KEY] = str(path)
        registry.add(listener)
        return FileSinkHandle(registry, listener, stream, path)


def register_file_and_auxiliary_sink(
    constructor: Callable[[LoggingConfiguration], TraceListener],
    config: LoggingConfiguration,
    listener_type: Optional[type[TraceListener]] = None,
    registry: TraceRegistry | None = None,
) -> SinkHandle:
    """
    Attach a file listener and an auxiliary listener built by constructor.

    The auxiliary listener is looked up by listener_type (defaults to the
    constructor when it is a class). If one is attached already, only its
    trace level is updated and the file handle is returned. Otherwise the
    constructor is called once, the listener is attached, and the title and
    environment banner are traced.

    Raises:
        OSError: If the log file cannot be created.
        TypeError: If listener_type cannot be inferred, or the constructor
            returns a different type.
        Any exception raised by constructor or while tracing the banner,
            unmodified. Listeners created by this call are detached first.
    """
    if listener_type is None:
        if not isinstance(constructor, type):
            raise TypeError("listener_type is required when constructor is not a class")
        listener_type = constructor

    if registry is None:
        registry = TraceRegistry.instance()

    with registry.lock:
        file_handle = register_file_sink(
            config.component_name,
            config.directory,
            config.trace_options,
            registry,
        )

        existing = registry.find(listener_type)
        if existing is not None:
            existing.trace_level = config.auxiliary_trace_level
            return file_handle

        try:
            auxiliary = constructor(config)
        except BaseException:
            file_handle.close()
            raise

        if type(auxiliary) is not listener_type:
            auxiliary.close()
            file_handle.close()
            raise TypeError(
                f"Constructor returned {type(auxiliary).__name__}, "
                f"expected {listener_type.__name__}"
            )

        try:
            auxiliary.trace_level = config.auxiliary_trace_level
            auxiliary.write_line(
                f"{datetime.now()} - [{auxiliary.name}] - Starting output to trace listener."
            )
            registry.add(auxiliary)

            tracer = default_tracer(registry)
            tracer.write_line(config.title)
            trace_environment(tracer)
        except BaseException:
            registry.remove(auxiliary)
            auxiliary.close()
            file_handle.close()
            raise

        return CombinedSinkHandle(file_handle, registry, auxiliary)
