"""
Pydantic configuration schemas for tracewire.

LoggingConfiguration is the record handed to the auxiliary registration
path. It is immutable once validated; the auxiliary_configuration field is
an opaque blob that only the auxiliary listener constructor interprets.

Usage:
    config = LoggingConfiguration.from_yaml("logging.yaml")
    handle = register_file_and_auxiliary_sink(ConsoleListener, config)
"""

from __future__ import annotations

from enum import IntEnum, IntFlag
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, field_validator


# ═══════════════════════════════════════════════════════════════════
#  Enums
# ═══════════════════════════════════════════════════════════════════

class TraceOptions(IntFlag):
    """Per-line decorations applied by a listener."""
    NONE = 0
    LOGICAL_OPERATION_STACK = 1
    DATETIME = 2
    TIMESTAMP = 4
    PROCESS_ID = 8
    THREAD_ID = 16
    CALLSTACK = 32

    @classmethod
    def parse(cls, value: "int | str | list[str] | TraceOptions") -> "TraceOptions":
        """Accept an int, a flag name, a "A|B" string or a list of names."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            value = value.replace(",", "|").split("|")
        result = cls.NONE
        for name in value:
            name = name.strip().upper()
            if not name:
                continue
            try:
                result |= cls[name]
            except KeyError:
                raise ValueError(
                    f"Unknown trace option '{name}'. "
                    f"Valid options: {', '.join(m.name for m in cls if m.name)}"
                )
        return result


class TraceLevel(IntEnum):
    """Listener verbosity. Higher values let more through."""
    OFF = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    VERBOSE = 4

    @classmethod
    def from_value(cls, value: "int | str | TraceLevel") -> "TraceLevel":
        """Resolve a level from int or case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(
                    f"Unknown trace level '{value}'. "
                    f"Valid levels: {', '.join(m.name for m in cls)}"
                )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")


# ═══════════════════════════════════════════════════════════════════
#  Logging Configuration
# ═══════════════════════════════════════════════════════════════════

class LoggingConfiguration(BaseModel):
    """
    Configuration passed to register_file_and_auxiliary_sink.

    Minimal YAML:
        title: My service starting
        component_name: my-service
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    title: str
    component_name: str
    directory: Optional[Path] = None
    trace_options: TraceOptions = TraceOptions.DATETIME
    auxiliary_trace_level: TraceLevel = TraceLevel.INFO
    auxiliary_configuration: Any = None

    @field_validator("component_name")
    @classmethod
    def _component_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("component_name must not be blank")
        return value

    @field_validator("trace_options", mode="plain")
    @classmethod
    def _parse_trace_options(cls, value: Any) -> TraceOptions:
        return TraceOptions.parse(value)

    @field_validator("auxiliary_trace_level", mode="before")
    @classmethod
    def _parse_trace_level(cls, value: Any) -> TraceLevel:
        return TraceLevel.from_value(value)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoggingConfiguration":
        """Load and validate from a YAML file."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.from_yaml_string(raw)

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "LoggingConfiguration":
        """Load and validate from a YAML string."""
        data = yaml.safe_load(yaml_string) or {}
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict) -> "LoggingConfiguration":
        """Load and validate from a dict."""
        return cls.model_validate(data)

    def to_dict(self, exclude_none: bool = True) -> dict:
        """Export as dict."""
        return self.model_dump(exclude_none=exclude_none)


__all__ = ["TraceOptions", "TraceLevel", "LoggingConfiguration"]
