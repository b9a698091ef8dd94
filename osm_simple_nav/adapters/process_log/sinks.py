"""Process log adapters - Implementations of ProcessLogPort."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List


@dataclass
class LoggingProcessLog:
    """Forwards diagnostic lines to a standard-library logger.

    Attributes:
        name: Name of the target logger
        level: Level the lines are emitted at
    """

    name: str = "osm_simple_nav.process"
    level: int = logging.DEBUG
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(self.name)

    def log(self, line: str) -> None:
        # logging reports handler failures itself and never raises here
        self._logger.log(self.level, line)


@dataclass
class NullProcessLog:
    """Discards every line."""

    def log(self, line: str) -> None:
        pass


@dataclass
class RecordingProcessLog:
    """Keeps every line in memory, for inspection in tests and tooling."""

    lines: List[str] = field(default_factory=list)

    def log(self, line: str) -> None:
        self.lines.append(line)
