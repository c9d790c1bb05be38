"""
Tagged tracing on top of an untagged writer.

Tags are flattened into the message text:
    info("OrderPlaced", [("id", "42"), ("qty", "3")])
    → writer.info("OrderPlaced: id: 42, qty: 3")
"""

from tracewire.tracing.contracts import TraceWriter, TagsTraceWriter
from tracewire.tracing.records import Tags, tags_to_string


class TagsWriterAdapter(TagsTraceWriter):
    """Satisfies the tagged contract by rendering tags into the message."""

    def __init__(self, writer: TraceWriter):
        self._writer = writer

    @staticmethod
    def _line(message: str, tags: Tags) -> str:
        return f"{message}: {tags_to_string(tags)}"

    def verbose(self, message: str, tags: Tags) -> None:
        self._writer.verbose(self._line(message, tags))

    def info(self, message: str, tags: Tags) -> None:
        self._writer.info(self._line(message, tags))

    def warning(self, message: str, tags: Tags) -> None:
        self._writer.warning(self._line(message, tags))

    def error(self, message: str, tags: Tags) -> None:
        self._writer.error(self._line(message, tags))

    def critical(self, message: str, tags: Tags) -> None:
        self._writer.critical(self._line(message, tags))

    def write_line(self, message: str, tags: Tags) -> None:
        # Tagged plain lines go out at info
        self._writer.info(self._line(message, tags))

    def event(self, name: str, tags: Tags) -> None:
        self._writer.write_line(f"Event: {self._line(name, tags)}")

    def track_exception(self, exc: BaseException, tags: Tags) -> None:
        self._writer.critical(f"Exception: {exc!r}: {tags_to_string(tags)}")

    def flush(self) -> None:
        self._writer.flush()

    def indent(self) -> None:
        self._writer.indent()

    def unindent(self) -> None:
        self._writer.unindent()
