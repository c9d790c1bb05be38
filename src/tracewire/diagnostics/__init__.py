"""
Process-wide tracing surface.

TraceRegistry holds the attached listeners. The registration functions
attach a file listener and an auxiliary listener exactly once per
component / listener type, and hand back handles that detach them.
"""

from tracewire.diagnostics.formatters import TraceEvent, EventFormatter, LineFormatter, MessageFormatter
from tracewire.diagnostics.listeners import (
    LOG_FILE_PATH_KEY,
    TRACE_LEVEL_KEY,
    TraceListener,
    TextWriterListener,
    ConsoleListener,
)
from tracewire.diagnostics.registry import TraceRegistry
from tracewire.diagnostics.writer import DiagnosticsWriter, default_tracer, default_tags_tracer
from tracewire.diagnostics.environment import environment_info, trace_environment
from tracewire.diagnostics.registration import (
    SinkHandle,
    FileSinkHandle,
    ReusedFileSinkHandle,
    CombinedSinkHandle,
    sanitize_component_name,
    log_file_name,
    register_file_sink,
    register_file_and_auxiliary_sink,
)

__all__ = [
    "TraceEvent",
    "EventFormatter",
    "LineFormatter",
    "MessageFormatter",
    "LOG_FILE_PATH_KEY",
    "TRACE_LEVEL_KEY",
    "TraceListener",
    "TextWriterListener",
    "ConsoleListener",
    "TraceRegistry",
    "DiagnosticsWriter",
    "default_tracer",
    "default_tags_tracer",
    "environment_info",
    "trace_environment",
    "SinkHandle",
    "FileSinkHandle",
    "ReusedFileSinkHandle",
    "CombinedSinkHandle",
    "sanitize_component_name",
    "log_file_name",
    "register_file_sink",
    "register_file_and_auxiliary_sink",
]
