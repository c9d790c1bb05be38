"""
Listener line formatting.

A TraceEvent is the unit a listener receives from the registry. The
formatter turns it into one line, decorated according to TraceOptions:

    DATETIME    2026-02-12T14:32:05.123456+00:00
    TIMESTAMP   monotonic nanoseconds
    PROCESS_ID  pid=4242
    THREAD_ID   tid=139872
"""

import os
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone

from tracewire.config import TraceOptions
from tracewire.tracing.records import Severity


@dataclass(frozen=True)
class TraceEvent:
    """Immutable event handed to listeners. Created by TraceEvent.create()."""
    timestamp: datetime
    severity: Severity
    message: str
    source: str = ""
    indent: int = 0
    process_id: int = 0
    thread_id: int = 0
    monotonic_ns: int = field(default=0, compare=False)

    @classmethod
    def create(
        cls,
        severity: Severity,
        message: str,
        source: str = "",
        indent: int = 0,
    ) -> "TraceEvent":
        """Factory with auto-timestamp and process/thread identity."""
        return cls(
            timestamp=datetime.now(timezone.utc),
            severity=severity,
            message=message,
            source=source,
            indent=indent,
            process_id=os.getpid(),
            thread_id=threading.get_ident(),
            monotonic_ns=time.monotonic_ns(),
        )


class EventFormatter(ABC):
    """Base formatter. Transforms TraceEvent → single line (no newline)."""

    @abstractmethod
    def format(self, event: TraceEvent, options: TraceOptions) -> str: ...


class LineFormatter(EventFormatter):
    """
    Default listener format.
    Example: 2026-02-12T14:32:05+00:00 orders Warning: queue is 90% full
    Plain lines (Severity.WRITE) carry no source/severity header.
    """

    def format(self, event: TraceEvent, options: TraceOptions) -> str:
        parts = []
        if options & TraceOptions.DATETIME:
            parts.append(event.timestamp.isoformat())
        if options & TraceOptions.TIMESTAMP:
            parts.append(str(event.monotonic_ns))
        if options & TraceOptions.PROCESS_ID:
            parts.append(f"pid={event.process_id}")
        if options & TraceOptions.THREAD_ID:
            parts.append(f"tid={event.thread_id}")

        body = " " * event.indent
        if event.severity is Severity.WRITE:
            body += event.message
        else:
            header = f"{event.source} " if event.source else ""
            body += f"{header}{event.severity.display_name}: {event.message}"

        parts.append(body)
        return " ".join(parts)


class MessageFormatter(EventFormatter):
    """Message text only, indented. Ignores options."""

    def format(self, event: TraceEvent, options: TraceOptions) -> str:
        return " " * event.indent + event.message
