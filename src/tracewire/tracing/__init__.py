"""
Tracing façade.

Call sites hold a Tracer (or TagsTracer) over any writer that satisfies
TraceWriter (or TagsTraceWriter). combine() fans one call out to several
writers, first to last.
"""

from tracewire.tracing.records import Severity, Tags, tags_to_string
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

__all__ = [
    "Severity",
    "Tags",
    "tags_to_string",
    "TraceWriter",
    "TagsTraceWriter",
    "Tracer",
    "TagsTracer",
    "TracedFailure",
    "render",
    "from_trace_writer",
    "from_tags_writer",
    "CombinedWriter",
    "CombinedTagsWriter",
    "combine",
    "TagsWriterAdapter",
    "LoggingWriter",
]
