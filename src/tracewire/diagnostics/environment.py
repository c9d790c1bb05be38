"""Environment banner traced once when an auxiliary listener is attached."""

import getpass
import platform
import shlex
import sys

from tracewire.tracing.tracer import Tracer


def _user_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # No passwd entry / no login name (containers, services)
        return "unknown"


def environment_info() -> list[tuple[str, str]]:
    """(label, value) pairs in banner order."""
    return [
        ("Operating system", platform.platform()),
        ("Computer name", platform.node()),
        ("User name", _user_name()),
        ("Python runtime version", platform.python_version()),
        ("Command line", shlex.join([sys.executable, *sys.argv])),
    ]


def trace_environment(tracer: Tracer) -> None:
    """Write the banner through tracer, indented one level."""
    with tracer.indented():
        for label, value in environment_info():
            tracer.write_line("{}: {}", label, value)
