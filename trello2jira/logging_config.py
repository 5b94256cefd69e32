"""Centralized logging configuration for trello2jira."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "trello2jira"

# Per-card progress lines and dropped-card warnings come from here
PROGRESS_LOGGER = "trello2jira.exporter"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for trello2jira.

    ``level`` applies to the package as a whole, but the exporter's
    progress logger never goes above INFO: the per-card lines and the
    warnings for dropped cards are printed even with ``--quiet``.
    Console output goes to stdout, where the export progress belongs.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR). Default: INFO.
        log_file: Optional path to log file, written with timestamps in
                  addition to the console.

    Example:
        >>> setup_logging("DEBUG")  # Verbose output to console
        >>> setup_logging("ERROR", "export.log")  # Progress and errors only
    """
    package_level = LEVELS.get(level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(package_level)
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        logger.addHandler(file_handler)

    logger.propagate = False

    # Handlers carry no level, so records from the progress logger are
    # emitted by the package handlers whatever the package level is
    logging.getLogger(PROGRESS_LOGGER).setLevel(min(package_level, logging.INFO))
