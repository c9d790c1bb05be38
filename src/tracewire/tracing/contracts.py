"""
Trace writer contracts.

A backend becomes usable for tracing by subclassing one of these and
implementing every abstract operation. Two contracts exist because tagged
and untagged tracing are different call shapes, not different severities.
"""

from abc import ABC, abstractmethod

from tracewire.tracing.records import Tags


class TraceWriter(ABC):
    """Receives finished message strings, one operation per severity."""

    @abstractmethod
    def verbose(self, message: str) -> None: ...

    @abstractmethod
    def info(self, message: str) -> None: ...

    @abstractmethod
    def warning(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...

    @abstractmethod
    def critical(self, message: str) -> None: ...

    @abstractmethod
    def write_line(self, message: str) -> None: ...

    @abstractmethod
    def flush(self) -> None: ...

    @abstractmethod
    def indent(self) -> None: ...

    @abstractmethod
    def unindent(self) -> None: ...


class TagsTraceWriter(ABC):
    """Receives a message plus ordered key/value tags."""

    @abstractmethod
    def verbose(self, message: str, tags: Tags) -> None: ...

    @abstractmethod
    def info(self, message: str, tags: Tags) -> None: ...

    @abstractmethod
    def warning(self, message: str, tags: Tags) -> None: ...

    @abstractmethod
    def error(self, message: str, tags: Tags) -> None: ...

    @abstractmethod
    def critical(self, message: str, tags: Tags) -> None: ...

    @abstractmethod
    def write_line(self, message: str, tags: Tags) -> None: ...

    @abstractmethod
    def event(self, name: str, tags: Tags) -> None: ...

    @abstractmethod
    def track_exception(self, exc: BaseException, tags: Tags) -> None: ...

    @abstractmethod
    def flush(self) -> None: ...

    @abstractmethod
    def indent(self) -> None: ...

    @abstractmethod
    def unindent(self) -> None: ...
