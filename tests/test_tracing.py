"""
Tests for the tracing façade.

Covers:
- Severity and tag rendering
- Tracer front-end (formatting, failwith/fail, track_exception, indented)
- TagsTracer adapter
- TagsWriterAdapter (tagged over untagged)
- combine() fan-out order and fail-fast behaviour
- LoggingWriter bridge to stdlib logging
"""

import logging
from itertools import count

import pytest

from tracewire.tracing.records import Severity, tags_to_string
from tracewire.tracing.contracts import TraceWriter, TagsTraceWriter
from tracewire.tracing.tracer import (
    Tracer,
    TagsTracer,
    TracedFailure,
    render,
    from_trace_writer,
    from_tags_writer,
)
from tracewire.tracing.combine import CombinedWriter, CombinedTagsWriter, combine
from tracewire.tracing.tags import TagsWriterAdapter
from tracewire.tracing.writers import LoggingWriter


# ═══════════════════════════════════════════════════════════════════
#  Test doubles
# ═══════════════════════════════════════════════════════════════════

class RecordingWriter(TraceWriter):
    """Appends (seq, name, op, message) to a journal shared across writers."""

    def __init__(self, name="w", journal=None, seq=None):
        self.name = name
        self.journal = journal if journal is not None else []
        self._seq = seq or count()

    def _record(self, op, message=None):
        self.journal.append((next(self._seq), self.name, op, message))

    @property
    def calls(self):
        return [(op, msg) for _, name, op, msg in self.journal if name == self.name]

    def verbose(self, message):
        self._record("verbose", message)

    def info(self, message):
        self._record("info", message)

    def warning(self, message):
        self._record("warning", message)

    def error(self, message):
        self._record("error", message)

    def critical(self, message):
        self._record("critical", message)

    def write_line(self, message):
        self._record("write_line", message)

    def flush(self):
        self._record("flush")

    def indent(self):
        self._record("indent")

    def unindent(self):
        self._record("unindent")


class RecordingTagsWriter(TagsTraceWriter):
    def __init__(self, name="t", journal=None):
        self.name = name
        self.journal = journal if journal is not None else []

    def _record(self, op, *args):
        self.journal.append((self.name, op, args))

    def verbose(self, message, tags):
        self._record("verbose", message, list(tags))

    def info(self, message, tags):
        self._record("info", message, list(tags))

    def warning(self, message, tags):
        self._record("warning", message, list(tags))

    def error(self, message, tags):
        self._record("error", message, list(tags))

    def critical(self, message, tags):
        self._record("critical", message, list(tags))

    def write_line(self, message, tags):
        self._record("write_line", message, list(tags))

    def event(self, name, tags):
        self._record("event", name, list(tags))

    def track_exception(self, exc, tags):
        self._record("track_exception", exc, list(tags))

    def flush(self):
        self._record("flush")

    def indent(self):
        self._record("indent")

    def unindent(self):
        self._record("unindent")


class ExplodingWriter(RecordingWriter):
    def info(self, message):
        self._record("info", message)
        raise RuntimeError("writer exploded")


# ═══════════════════════════════════════════════════════════════════
#  Records
# ═══════════════════════════════════════════════════════════════════

class TestRecords:
    def test_severity_from_name_case_insensitive(self):
        assert Severity.from_name("warning") is Severity.WARNING
        assert Severity.from_name("Event") is Severity.EVENT

    def test_severity_from_name_invalid(self):
        with pytest.raises(ValueError, match="Unknown severity"):
            Severity.from_name("fatal")

    def test_display_name(self):
        assert Severity.CRITICAL.display_name == "Critical"

    def test_tags_preserve_order_and_duplicates(self):
        tags = [("b", "2"), ("a", "1"), ("b", "3")]
        assert tags_to_string(tags) == "b: 2, a: 1, b: 3"

    def test_empty_tags(self):
        assert tags_to_string([]) == ""
        assert tags_to_string(None) == ""


# ═══════════════════════════════════════════════════════════════════
#  Contracts
# ═══════════════════════════════════════════════════════════════════

class TestContracts:
    def test_incomplete_writer_cannot_be_built(self):
        class Partial(TraceWriter):
            def info(self, message):
                pass

        with pytest.raises(TypeError):
            Partial()

    def test_incomplete_tags_writer_cannot_be_built(self):
        class Partial(TagsTraceWriter):
            def event(self, name, tags):
                pass

        with pytest.raises(TypeError):
            Partial()


# ═══════════════════════════════════════════════════════════════════
#  Tracer
# ═══════════════════════════════════════════════════════════════════

class TestRender:
    def test_positional_arguments(self):
        assert render("{} rows from {}", 3, "a.csv") == "3 rows from a.csv"

    def test_no_arguments_leaves_braces_alone(self):
        assert render("payload {raw}") == "payload {raw}"

    def test_placeholders_without_arguments_written_verbatim(self):
        assert render("{} rows") == "{} rows"

    def test_argument_mismatch_raises(self):
        with pytest.raises(IndexError):
            render("{} rows from {}", 3)

    def test_format_spec(self):
        assert render("{:.2f}", 1.23456) == "1.23"


class TestTracer:
    @pytest.mark.parametrize("op", ["verbose", "info", "warning", "error", "critical", "write_line"])
    def test_single_forwarded_call(self, op):
        writer = RecordingWriter()
        getattr(Tracer(writer), op)("value={} unit={}", 42, "ms")
        assert writer.calls == [(op, "value=42 unit=ms")]

    def test_event_goes_to_write_line(self):
        writer = RecordingWriter()
        Tracer(writer).event("Started {}", "job")
        assert writer.calls == [("write_line", "Started job")]

    def test_formatting_error_before_any_write(self):
        writer = RecordingWriter()
        with pytest.raises(IndexError):
            Tracer(writer).info("{} and {}", 1)
        assert writer.calls == []

    def test_failwith_writes_critical_then_raises(self):
        writer = RecordingWriter()
        with pytest.raises(TracedFailure) as excinfo:
            Tracer(writer).failwith("Cannot open {}", "db")
        assert writer.calls == [("critical", "Cannot open db")]
        assert excinfo.value.message == "Cannot open db"
        assert str(excinfo.value) == "Cannot open db"

    def test_fail_returns_failure_without_raising(self):
        writer = RecordingWriter()
        failure = Tracer(writer).fail("stop {}", 1)
        assert isinstance(failure, TracedFailure)
        assert isinstance(failure, RuntimeError)
        assert failure.message == "stop 1"
        assert writer.calls == [("critical", "stop 1")]

    def test_track_exception_uses_error(self):
        writer = RecordingWriter()
        Tracer(writer).track_exception(ValueError("boom"))
        assert writer.calls == [("error", "Exception: ValueError('boom')")]

    def test_pass_through_operations(self):
        writer = RecordingWriter()
        tracer = Tracer(writer)
        tracer.indent()
        tracer.unindent()
        tracer.flush()
        assert writer.calls == [("indent", None), ("unindent", None), ("flush", None)]

    def test_indented_unindents_on_error(self):
        writer = RecordingWriter()
        tracer = Tracer(writer)
        with pytest.raises(KeyError):
            with tracer.indented():
                raise KeyError("x")
        assert writer.calls == [("indent", None), ("unindent", None)]

    def test_from_trace_writer(self):
        writer = RecordingWriter()
        tracer = from_trace_writer(writer)
        assert isinstance(tracer, Tracer)
        assert tracer.writer is writer


class TestTagsTracer:
    def test_forwards_message_and_tags(self):
        writer = RecordingTagsWriter()
        tracer = TagsTracer(writer)
        tracer.warning("DiskLow", [("free", "3%")])
        tracer.event("Deployed", [("version", "1.2")])
        assert writer.journal == [
            ("t", "warning", ("DiskLow", [("free", "3%")])),
            ("t", "event", ("Deployed", [("version", "1.2")])),
        ]

    def test_tags_default_to_empty(self):
        writer = RecordingTagsWriter()
        TagsTracer(writer).info("plain")
        assert writer.journal == [("t", "info", ("plain", []))]

    def test_failwith_writes_critical_once_then_raises(self):
        writer = RecordingTagsWriter()
        tags = [("order", "17")]
        with pytest.raises(TracedFailure) as excinfo:
            TagsTracer(writer).failwith("OrderRejected", tags)
        assert writer.journal == [("t", "critical", ("OrderRejected", tags))]
        assert excinfo.value.message == "OrderRejected"
        assert excinfo.value.tags == tags

    def test_track_exception_forwarded(self):
        writer = RecordingTagsWriter()
        exc = OSError("disk")
        TagsTracer(writer).track_exception(exc, [("path", "/tmp")])
        assert writer.journal == [("t", "track_exception", (exc, [("path", "/tmp")]))]

    def test_from_tags_writer(self):
        writer = RecordingTagsWriter()
        assert from_tags_writer(writer).writer is writer


class TestTagsWriterAdapter:
    def test_tags_rendered_into_message(self):
        inner = RecordingWriter()
        TagsWriterAdapter(inner).info("OrderPlaced", [("id", "42"), ("qty", "3")])
        assert inner.calls == [("info", "OrderPlaced: id: 42, qty: 3")]

    def test_write_line_maps_to_info(self):
        inner = RecordingWriter()
        TagsWriterAdapter(inner).write_line("Note", [("k", "v")])
        assert inner.calls == [("info", "Note: k: v")]

    def test_event_is_prefixed_plain_line(self):
        inner = RecordingWriter()
        TagsWriterAdapter(inner).event("Started", [("k", "v")])
        assert inner.calls == [("write_line", "Event: Started: k: v")]

    def test_track_exception_goes_to_critical(self):
        inner = RecordingWriter()
        TagsWriterAdapter(inner).track_exception(ValueError("x"), [("k", "v")])
        assert inner.calls == [("critical", "Exception: ValueError('x'): k: v")]

    def test_tags_tracer_failwith_over_adapter(self):
        inner = RecordingWriter()
        tracer = TagsTracer(TagsWriterAdapter(inner))
        with pytest.raises(TracedFailure):
            tracer.failwith("Abort", [("reason", "quota")])
        assert inner.calls == [("critical", "Abort: reason: quota")]


# ═══════════════════════════════════════════════════════════════════
#  Combinator
# ═══════════════════════════════════════════════════════════════════

class TestCombine:
    def _writers(self, *names):
        journal, seq = [], count()
        return journal, [RecordingWriter(n, journal, seq) for n in names]

    @pytest.mark.parametrize(
        "op, arg",
        [
            ("verbose", "m"), ("info", "m"), ("warning", "m"), ("error", "m"),
            ("critical", "m"), ("write_line", "m"),
            ("flush", None), ("indent", None), ("unindent", None),
        ],
    )
    def test_first_strictly_before_second(self, op, arg):
        journal, (a, b) = self._writers("a", "b")
        combined = CombinedWriter(a, b)
        args = () if arg is None else (arg,)
        getattr(combined, op)(*args)
        assert [(name, o) for _, name, o, _ in journal] == [("a", op), ("b", op)]
        assert journal[0][0] < journal[1][0]

    def test_left_deep_nesting(self):
        journal, (a, b, c) = self._writers("a", "b", "c")
        combined = combine(a, b, c)
        assert isinstance(combined, CombinedWriter)
        assert isinstance(combined.first, CombinedWriter)
        assert combined.second is c
        combined.info("x")
        assert [name for _, name, _, _ in journal] == ["a", "b", "c"]

    def test_combined_through_tracer(self):
        journal, (a, b) = self._writers("a", "b")
        Tracer(combine(a, b)).info("{} done", "step")
        assert a.calls == [("info", "step done")]
        assert b.calls == [("info", "step done")]

    def test_failwith_through_combined(self):
        journal, (a, b) = self._writers("a", "b")
        with pytest.raises(TracedFailure):
            Tracer(combine(a, b)).failwith("fatal")
        assert [(name, op) for _, name, op, _ in journal] == [("a", "critical"), ("b", "critical")]

    def test_first_failure_skips_second(self):
        journal = []
        seq = count()
        first = ExplodingWriter("a", journal, seq)
        second = RecordingWriter("b", journal, seq)
        with pytest.raises(RuntimeError, match="writer exploded"):
            combine(first, second).info("x")
        assert second.calls == []

    def test_single_writer_returned_unchanged(self):
        writer = RecordingWriter()
        assert combine(writer) is writer

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            combine()

    def test_mixed_contracts_rejected(self):
        with pytest.raises(TypeError, match="one contract"):
            combine(RecordingWriter(), RecordingTagsWriter())

    def test_tagged_combination(self):
        journal = []
        a = RecordingTagsWriter("a", journal)
        b = RecordingTagsWriter("b", journal)
        combined = combine(a, b)
        assert isinstance(combined, CombinedTagsWriter)
        exc = ValueError("e")
        combined.track_exception(exc, [("k", "v")])
        combined.event("E", [])
        assert journal == [
            ("a", "track_exception", (exc, [("k", "v")])),
            ("b", "track_exception", (exc, [("k", "v")])),
            ("a", "event", ("E", [])),
            ("b", "event", ("E", [])),
        ]


# ═══════════════════════════════════════════════════════════════════
#  LoggingWriter
# ═══════════════════════════════════════════════════════════════════

class TestLoggingWriter:
    def test_levels_mapped(self, caplog):
        caplog.set_level(logging.DEBUG, logger="tracewire.tests")
        writer = LoggingWriter(logging.getLogger("tracewire.tests"))
        writer.verbose("v")
        writer.info("i")
        writer.warning("w")
        writer.error("e")
        writer.critical("c")
        writer.write_line("l")
        assert [r.levelno for r in caplog.records] == [
            logging.DEBUG, logging.INFO, logging.WARNING,
            logging.ERROR, logging.CRITICAL, logging.INFO,
        ]
        assert [r.getMessage() for r in caplog.records] == ["v", "i", "w", "e", "c", "l"]

    def test_indentation_prefix(self, caplog):
        caplog.set_level(logging.INFO, logger="tracewire.tests")
        writer = LoggingWriter(logging.getLogger("tracewire.tests"))
        writer.indent()
        writer.info("nested")
        writer.unindent()
        writer.unindent()  # Never below zero
        writer.info("top")
        assert [r.getMessage() for r in caplog.records] == ["    nested", "top"]

    def test_percent_in_message_is_literal(self, caplog):
        caplog.set_level(logging.INFO, logger="tracewire.tests")
        LoggingWriter(logging.getLogger("tracewire.tests")).info("100% done %s")
        assert caplog.records[0].getMessage() == "100% done %s"
