"""
Severity levels and tag helpers.

Each severity maps to exactly one backend operation. Severities carry no
ordering: filtering is the listener's business, not the façade's.
"""

from enum import Enum
from typing import Sequence


class Severity(Enum):
    """Trace channel a message is written to."""
    VERBOSE = "verbose"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    WRITE = "write"      # Untagged line, no severity decoration
    EVENT = "event"

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        """Resolve severity from string name, case-insensitive."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown severity '{name}'. "
                f"Valid severities: {', '.join(m.name for m in cls)}"
            )

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


# Ordered (key, value) pairs. Duplicate keys are allowed and kept.
Tags = Sequence[tuple[str, str]]


def tags_to_string(tags: Tags | None) -> str:
    """Render tags as "k1: v1, k2: v2", preserving order."""
    if not tags:
        return ""
    return ", ".join(f"{key}: {value}" for key, value in tags)
