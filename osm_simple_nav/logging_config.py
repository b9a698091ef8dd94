"""Logging setup for the command-line front-end.

Installs two handlers on the package logger:
- File: the process log (every diagnostic line, at the configured level)
- Console: stderr, warnings and above by default

Library code never calls this; it only obtains loggers with
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import ObservabilityConfig, get_config

PACKAGE_LOGGER = "osm_simple_nav"

_installed: list[logging.Handler] = []


def setup_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Configure the package logger.

    Calling it again replaces the handlers installed by a previous call.
    A log file that cannot be opened is reported on the console and skipped.

    Args:
        config: Observability settings, defaults to the application config.

    Returns:
        The configured package logger.
    """
    config = config or get_config().observability
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in _installed:
        logger.removeHandler(handler)
        handler.close()
    _installed.clear()

    formatter = logging.Formatter(config.format)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(config.console_level.upper())
    console.setFormatter(formatter)
    _installed.append(console)
    logger.addHandler(console)

    # The logger itself passes everything the handlers may want
    logger.setLevel(logging.DEBUG)

    if config.file is not None:
        try:
            config.file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(config.file, encoding="utf-8")
        except OSError as e:
            logger.warning(
                "Cannot open log file, continuing without it",
                extra={"log_file": str(config.file), "error": str(e)},
            )
        else:
            file_handler.setLevel(config.level.upper())
            file_handler.setFormatter(formatter)
            _installed.append(file_handler)
            logger.addHandler(file_handler)

    return logger
