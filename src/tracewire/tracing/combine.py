"""
Fan-out composition of trace writers.

A combined writer calls the same operation on its first constituent, then
on its second. Nesting gives a left-deep, depth-first order:

    combine(a, b, c)  ==  CombinedWriter(CombinedWriter(a, b), c)
    → a, b, c for every call

No isolation between branches: if the first constituent raises, the second
is never called and the exception reaches the caller. Constituents are not
owned; closing them is the caller's job.
"""

from __future__ import annotations

from functools import reduce

from tracewire.tracing.contracts import TraceWriter, TagsTraceWriter
from tracewire.tracing.records import Tags


class CombinedWriter(TraceWriter):
    """Two untagged writers behind one."""

    def __init__(self, first: TraceWriter, second: TraceWriter):
        self.first = first
        self.second = second

    def verbose(self, message: str) -> None:
        self.first.verbose(message)
        self.second.verbose(message)

    def info(self, message: str) -> None:
        self.first.info(message)
        self.second.info(message)

    def warning(self, message: str) -> None:
        self.first.warning(message)
        self.second.warning(message)

    def error(self, message: str) -> None:
        self.first.error(message)
        self.second.error(message)

    def critical(self, message: str) -> None:
        self.first.critical(message)
        self.second.critical(message)

    def write_line(self, message: str) -> None:
        self.first.write_line(message)
        self.second.write_line(message)

    def flush(self) -> None:
        self.first.flush()
        self.second.flush()

    def indent(self) -> None:
        self.first.indent()
        self.second.indent()

    def unindent(self) -> None:
        self.first.unindent()
        self.second.unindent()


class CombinedTagsWriter(TagsTraceWriter):
    """Two tagged writers behind one."""

    def __init__(self, first: TagsTraceWriter, second: TagsTraceWriter):
        self.first = first
        self.second = second

    def verbose(self, message: str, tags: Tags) -> None:
        self.first.verbose(message, tags)
        self.second.verbose(message, tags)

    def info(self, message: str, tags: Tags) -> None:
        self.first.info(message, tags)
        self.second.info(message, tags)

    def warning(self, message: str, tags: Tags) -> None:
        self.first.warning(message, tags)
        self.second.warning(message, tags)

    def error(self, message: str, tags: Tags) -> None:
        self.first.error(message, tags)
        self.second.error(message, tags)

    def critical(self, message: str, tags: Tags) -> None:
        self.first.critical(message, tags)
        self.second.critical(message, tags)

    def write_line(self, message: str, tags: Tags) -> None:
        self.first.write_line(message, tags)
        self.second.write_line(message, tags)

    def event(self, name: str, tags: Tags) -> None:
        self.first.event(name, tags)
        self.second.event(name, tags)

    def track_exception(self, exc: BaseException, tags: Tags) -> None:
        self.first.track_exception(exc, tags)
        self.second.track_exception(exc, tags)

    def flush(self) -> None:
        self.first.flush()
        self.second.flush()

    def indent(self) -> None:
        self.first.indent()
        self.second.indent()

    def unindent(self) -> None:
        self.first.unindent()
        self.second.unindent()


def combine(*writers):
    """
    Fold writers left into one fan-out writer.

    A single writer is returned unchanged. Tagged and untagged writers
    cannot be mixed.
    """
    if not writers:
        raise ValueError("combine() needs at least one writer")

    if all(isinstance(w, TraceWriter) for w in writers):
        pair = CombinedWriter
    elif all(isinstance(w, TagsTraceWriter) for w in writers):
        pair = CombinedTagsWriter
    else:
        kinds = ", ".join(type(w).__name__ for w in writers)
        raise TypeError(
            f"combine() needs writers of one contract, got: {kinds}"
        )

    return reduce(pair, writers)
