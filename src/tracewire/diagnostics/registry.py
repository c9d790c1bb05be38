"""
TraceRegistry: the process-wide tracing surface.

One instance, many listeners. Every trace_event / write_line goes to each
registered listener in registration order, indented by the shared indent
level. Listeners that raise are not shielded; the error reaches the caller.

Invariant: at most one listener per (exact listener type, name). Callers
that look up and then add (the registration functions) hold `lock` across
both steps.
"""

import threading
from typing import Optional, TypeVar

from tracewire.diagnostics.listeners import TraceListener
from tracewire.tracing.records import Severity

L = TypeVar("L", bound=TraceListener)


class TraceRegistry:
    """
    Singleton list of attached listeners.

    Usage:
        registry = TraceRegistry.instance()
        registry.add(TextWriterListener(sys.stdout, name="stdout"))
        registry.trace_event(Severity.INFO, "ready")
    """

    _instance: Optional["TraceRegistry"] = None
    _instance_lock = threading.Lock()

    def __init__(self, indent_size: int = 4) -> None:
        self._listeners: list[TraceListener] = []
        self._indent_level = 0
        self.indent_size = indent_size
        # Reentrant: registration holds it while calling add()/find()
        self.lock = threading.RLock()

    @classmethod
    def instance(cls) -> "TraceRegistry":
        """Get or create the singleton instance."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton. For testing only.
        Closes all listeners before resetting.
        """
        with cls._instance_lock:
            if cls._instance is not None:
                cls._instance.close()
                cls._instance = None

    # ── Listener Management ───────────────────────────────────────

    def add(self, listener: TraceListener) -> None:
        """Attach a listener. Adding the same object twice is a no-op."""
        with self.lock:
            if any(existing is listener for existing in self._listeners):
                return
            if self.find(type(listener), listener.name) is not None:
                raise ValueError(
                    f"A {type(listener).__name__} named '{listener.name}' "
                    f"is already registered"
                )
            self._listeners.append(listener)

    def remove(self, listener: TraceListener) -> bool:
        """Detach a listener. Returns False if it was not attached."""
        with self.lock:
            for i, existing in enumerate(self._listeners):
                if existing is listener:
                    del self._listeners[i]
                    return True
            return False

    def find(self, listener_type: type[L], name: str | None = None) -> L | None:
        """First listener of exactly listener_type (and name, if given)."""
        with self.lock:
            for listener in self._listeners:
                if type(listener) is listener_type and (name is None or listener.name == name):
                    return listener
            return None

    @property
    def listeners(self) -> tuple[TraceListener, ...]:
        with self.lock:
            return tuple(self._listeners)

    def __contains__(self, listener: TraceListener) -> bool:
        return any(existing is listener for existing in self.listeners)

    def __len__(self) -> int:
        return len(self.listeners)

    # ── Indentation ───────────────────────────────────────────────

    @property
    def indent_level(self) -> int:
        return self._indent_level

    def indent(self) -> None:
        with self.lock:
            self._indent_level += 1

    def unindent(self) -> None:
        with self.lock:
            self._indent_level = max(0, self._indent_level - 1)

    # ── Output ────────────────────────────────────────────────────

    def trace_event(self, severity: Severity, message: str) -> None:
        """Write an event to every listener whose trace level admits it."""
        indent = self._indent_level * self.indent_size
        for listener in self.listeners:
            if listener.should_trace(severity):
                listener.trace_event(severity, message, indent)

    def write_line(self, message: str) -> None:
        """Write a plain line to every listener that is not switched off."""
        indent = self._indent_level * self.indent_size
        for listener in self.listeners:
            if listener.should_trace(Severity.WRITE):
                listener.write_line(message, indent)

    # ── Status / Cleanup ──────────────────────────────────────────

    def status(self) -> dict:
        """Current registry state for display."""
        return {
            "indent_level": self._indent_level,
            "listeners": [
                {
                    "type": type(listener).__name__,
                    "name": listener.name,
                    "trace_level": listener.trace_level.name,
                    "attributes": dict(listener.attributes),
                }
                for listener in self.listeners
            ],
        }

    def flush(self) -> None:
        """Flush all listeners."""
        for listener in self.listeners:
            listener.flush()

    def close(self) -> None:
        """Close and detach all listeners. Call during shutdown."""
        with self.lock:
            listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener.close()
