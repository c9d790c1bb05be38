"""
TraceWriter backed by the TraceRegistry, and the default tracers over it.

    from tracewire.diagnostics.writer import default_tracer
    trace = default_tracer()
    trace.info("Started {} workers", 4)
"""

from tracewire.diagnostics.registry import TraceRegistry
from tracewire.tracing.contracts import TraceWriter
from tracewire.tracing.records import Severity
from tracewire.tracing.tags import TagsWriterAdapter
from tracewire.tracing.tracer import TagsTracer, Tracer


class DiagnosticsWriter(TraceWriter):
    """
    Forwards every operation to a TraceRegistry.

    Without an explicit registry the singleton is looked up on each call,
    so TraceRegistry.reset() is picked up by existing writers.
    """

    def __init__(self, registry: TraceRegistry | None = None):
        self._registry = registry

    @property
    def registry(self) -> TraceRegistry:
        if self._registry is not None:
            return self._registry
        return TraceRegistry.instance()

    def verbose(self, message: str) -> None:
        self.registry.trace_event(Severity.VERBOSE, message)

    def info(self, message: str) -> None:
        self.registry.trace_event(Severity.INFO, message)

    def warning(self, message: str) -> None:
        self.registry.trace_event(Severity.WARNING, message)

    def error(self, message: str) -> None:
        self.registry.trace_event(Severity.ERROR, message)

    def critical(self, message: str) -> None:
        self.registry.trace_event(Severity.CRITICAL, message)

    def write_line(self, message: str) -> None:
        self.registry.write_line(message)

    def flush(self) -> None:
        self.registry.flush()

    def indent(self) -> None:
        self.registry.indent()

    def unindent(self) -> None:
        self.registry.unindent()


def default_tracer(registry: TraceRegistry | None = None) -> Tracer:
    """Untagged tracer writing to the process-wide registry."""
    return Tracer(DiagnosticsWriter(registry))


def default_tags_tracer(registry: TraceRegistry | None = None) -> TagsTracer:
    """Tagged tracer writing to the process-wide registry."""
    return TagsTracer(TagsWriterAdapter(DiagnosticsWriter(registry)))
