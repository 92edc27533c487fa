from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from taskrank.config import PROJECT_ROOT, SETTINGS, Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(settings: Settings = SETTINGS, verbose: bool = False) -> Path:
    """Log to a rotating file and to stderr.

    A relative ``log_dir`` resolves against the working directory, or next
    to the executable for frozen builds.

    Console output goes to stderr so ranked output on stdout stays clean
    when piped. ``verbose`` forces DEBUG regardless of ``LOG_LEVEL``.
    """
    log_dir = Path(settings.log_dir)
    if not log_dir.is_absolute():
        base = PROJECT_ROOT if getattr(sys, "frozen", False) else Path.cwd()
        log_dir = base / log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskrank.log"

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=3)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    level = "DEBUG" if verbose else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        handlers=[file_handler, console_handler],
        force=True,
    )
    return log_file
