"""Process log port - Line-oriented diagnostic sink.

Loaders report their progress (one line per processed vertex and so
on) through this port instead of a process-wide logger, so the core
can run with no logging side channel at all.
"""

from __future__ import annotations

from typing import Protocol


class ProcessLogPort(Protocol):
    """Port for diagnostic lines.

    Implementations:
    - adapters/process_log/sinks.py (LoggingProcessLog) - Production
    - adapters/process_log/sinks.py (NullProcessLog) - Testing

    Failing to log must never fail the caller.
    """

    def log(self, line: str) -> None:
        """Record one diagnostic line."""
        ...
