"""
tracewire: leveled, formatted, optionally tagged tracing over pluggable
writers, with idempotent file and auxiliary listener registration.
"""

from tracewire.config import LoggingConfiguration, TraceLevel, TraceOptions
from tracewire.tracing import (
    Severity,
    Tags,
    TraceWriter,
    TagsTraceWriter,
    Tracer,
    TagsTracer,
    TracedFailure,
    combine,
)
from tracewire.diagnostics import (
    TraceRegistry,
    TraceListener,
    TextWriterListener,
    ConsoleListener,
    DiagnosticsWriter,
    default_tracer,
    default_tags_tracer,
    register_file_sink,
    register_file_and_auxiliary_sink,
)

__version__ = "0.1.0"

__all__ = [
    "LoggingConfiguration",
    "TraceLevel",
    "TraceOptions",
    "Severity",
    "Tags",
    "TraceWriter",
    "TagsTraceWriter",
    "Tracer",
    "TagsTracer",
    "TracedFailure",
    "combine",
    "TraceRegistry",
    "TraceListener",
    "TextWriterListener",
    "ConsoleListener",
    "DiagnosticsWriter",
    "default_tracer",
    "default_tags_tracer",
    "register_file_sink",
    "register_file_and_auxiliary_sink",
]
