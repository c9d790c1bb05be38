"""
Formatter front-end and runtime tracer adapters.

Tracer renders a str.format template with positional arguments and
forwards the result to one TraceWriter operation. TagsTracer does the same
for tagged writers, without templating.

Usage:
    trace = Tracer(DiagnosticsWriter())
    trace.info("Loaded {} rows from {}", 120, "orders.csv")
    with trace.indented():
        trace.verbose("detail")
    raise trace.fail("Cannot continue: {}", reason)
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator

from tracewire.tracing.contracts import TraceWriter, TagsTraceWriter
from tracewire.tracing.records import Tags


class TracedFailure(RuntimeError):
    """
    Raised by failwith() after the message has been written at critical.

    Distinguishes "we logged, then aborted" from unrelated faults.
    """

    def __init__(self, message: str, tags: Tags | None = None):
        super().__init__(message)
        self.message = message
        self.tags = list(tags) if tags else []


def render(template: str, *args: Any) -> str:
    """
    Format a template with positional arguments.

    Without arguments the template is returned as is and is not checked, so
    a template with placeholders and no arguments is written verbatim.
    """
    if not args:
        return template
    return template.format(*args)


class Tracer:
    """Untagged tracer over any TraceWriter."""

    def __init__(self, writer: TraceWriter):
        self._writer = writer

    @property
    def writer(self) -> TraceWriter:
        return self._writer

    def _emit(self, op: Callable[[str], None], template: str, args: tuple) -> str:
        message = render(template, *args)
        op(message)
        return message

    # ── Leveled output ────────────────────────────────────────────

    def verbose(self, template: str, *args: Any) -> None:
        self._emit(self._writer.verbose, template, args)

    def info(self, template: str, *args: Any) -> None:
        self._emit(self._writer.info, template, args)

    def warning(self, template: str, *args: Any) -> None:
        self._emit(self._writer.warning, template, args)

    def error(self, template: str, *args: Any) -> None:
        self._emit(self._writer.error, template, args)

    def critical(self, template: str, *args: Any) -> None:
        self._emit(self._writer.critical, template, args)

    def write_line(self, template: str, *args: Any) -> None:
        self._emit(self._writer.write_line, template, args)

    def event(self, template: str, *args: Any) -> None:
        """Untagged writers have no event channel; events are plain lines."""
        self._emit(self._writer.write_line, template, args)

    def track_exception(self, exc: BaseException) -> None:
        self._writer.error(f"Exception: {exc!r}")

    # ── Abort ─────────────────────────────────────────────────────

    def fail(self, template: str, *args: Any) -> TracedFailure:
        """Write at critical and return the failure for the caller to raise."""
        message = self._emit(self._writer.critical, template, args)
        return TracedFailure(message)

    def failwith(self, template: str, *args: Any) -> None:
        """Write at critical, then raise TracedFailure with the same message."""
        raise self.fail(template, *args)

    # ── Pass-through ──────────────────────────────────────────────

    def flush(self) -> None:
        self._writer.flush()

    def indent(self) -> None:
        self._writer.indent()

    def unindent(self) -> None:
        self._writer.unindent()

    @contextmanager
    def indented(self) -> Iterator["Tracer"]:
        self._writer.indent()
        try:
            yield self
        finally:
            self._writer.unindent()


class TagsTracer:
    """Tagged tracer forwarding 1:1 to a TagsTraceWriter."""

    def __init__(self, writer: TagsTraceWriter):
        self._writer = writer

    @property
    def writer(self) -> TagsTraceWriter:
        return self._writer

    def verbose(self, message: str, tags: Tags = ()) -> None:
        self._writer.verbose(message, tags)

    def info(self, message: str, tags: Tags = ()) -> None:
        self._writer.info(message, tags)

    def warning(self, message: str, tags: Tags = ()) -> None:
        self._writer.warning(message, tags)

    def error(self, message: str, tags: Tags = ()) -> None:
        self._writer.error(message, tags)

    def critical(self, message: str, tags: Tags = ()) -> None:
        self._writer.critical(message, tags)

    def write_line(self, message: str, tags: Tags = ()) -> None:
        self._writer.write_line(message, tags)

    def event(self, name: str, tags: Tags = ()) -> None:
        self._writer.event(name, tags)

    def track_exception(self, exc: BaseException, tags: Tags = ()) -> None:
        self._writer.track_exception(exc, tags)

    def fail(self, message: str, tags: Tags = ()) -> TracedFailure:
        self._writer.critical(message, tags)
        return TracedFailure(message, tags)

    def failwith(self, message: str, tags: Tags = ()) -> None:
        raise self.fail(message, tags)

    def flush(self) -> None:
        self._writer.flush()

    def indent(self) -> None:
        self._writer.indent()

    def unindent(self) -> None:
        self._writer.unindent()

    @contextmanager
    def indented(self) -> Iterator["TagsTracer"]:
        self._writer.indent()
        try:
            yield self
        finally:
            self._writer.unindent()


def from_trace_writer(writer: TraceWriter) -> Tracer:
    """Wrap a TraceWriter so it can be passed around as a plain value."""
    return Tracer(writer)


def from_tags_writer(writer: TagsTraceWriter) -> TagsTracer:
    """Wrap a TagsTraceWriter so it can be passed around as a plain value."""
    return TagsTracer(writer)
