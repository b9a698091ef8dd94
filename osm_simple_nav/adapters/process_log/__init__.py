"""Process log adapters - Implementations of ProcessLogPort.

Available implementations:
- LoggingProcessLog: Forwards lines to the standard logging module
- NullProcessLog: No-op sink
- RecordingProcessLog: Keeps lines in memory
"""

from .sinks import LoggingProcessLog, NullProcessLog, RecordingProcessLog

__all__ = ["LoggingProcessLog", "NullProcessLog", "RecordingProcessLog"]
