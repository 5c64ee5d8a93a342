"""Logging setup for samcompare.

stdout is reserved for the concordance report, so every handler installed here
writes to stderr or to a log file. Modules obtain their loggers through
:func:`get_logger`, which keeps them under the ``samcompare`` namespace.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


APP_LOGGER = "samcompare"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "[%(levelname)s]: %(message)s"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5

LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """(Re)configure the ``samcompare`` logger.

    Args:
        level: Threshold for console messages
        log_file: Also record every message (DEBUG and up) in this file,
            rotated at ``max_bytes`` with ``backup_count`` old copies kept
        max_bytes: Rotation size of the log file
        backup_count: Number of rotated log files kept

    Calling it again replaces the handlers of the previous call. The root
    logger stays at WARNING, so pandas/pysam chatter is not shown.
    """
    logging.getLogger().setLevel(logging.WARNING)

    app_logger = logging.getLogger(APP_LOGGER)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    app_logger.setLevel(level)
    app_logger.propagate = False

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    app_logger.addHandler(console)

    if not log_file:
        return

    log_file = Path(log_file)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count
        )
    except OSError as e:
        app_logger.warning(f"Cannot write log file {log_file}: {e}")
        return
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    app_logger.addHandler(file_handler)
    app_logger.setLevel(logging.DEBUG)


def level_from_verbosity(verbose: int) -> int:
    """Console level for a count of ``-v`` flags."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def level_from_name(name: str, default: int = logging.WARNING) -> int:
    """Map a config-file level name to a logging level."""
    return LEVEL_NAMES.get(str(name).upper(), default)


def get_logger(name: str) -> logging.Logger:
    """Child logger ``samcompare.<name>``."""
    return logging.getLogger(APP_LOGGER).getChild(name)


class LogTemplates:
    """Message templates shared by the loaders, engine and reporter."""

    FILE_LOADED = "Loaded {count:,} records from {path}"
    READ_COUNT = "{count} reads"
    CATEGORY_FILES = "Writing gain/loss/diff read names with prefix {prefix}"
    CLASSIFY_STATS = (
        "Classified {total:,} reads: {concordant:,} concordant, {gain:,} gained, "
        "{loss:,} lost, {diff:,} discordant"
    )
