"""
Logging setup for cryptwalk.

Library modules log through ``logging.getLogger(__name__)`` and never print.
Applications and tools call ``setup_logging()`` once to attach handlers to the
``cryptwalk`` logger:

    from cryptwalk.logging_config import setup_logging
    setup_logging(logging.DEBUG, log_file="out/cryptwalk.log")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "cryptwalk"
MAX_LOG_SIZE = 5 * 1024 * 1024
BACKUP_COUNT = 3

CONSOLE_FORMAT = "%(levelname)-8s | %(name)-30s | %(message)s"
FILE_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-30s | %(funcName)-22s | %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Attach a console handler (and optionally a rotating file handler)."""
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(min(level, file_level) if log_file else level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(path, maxBytes=MAX_LOG_SIZE, backupCount=BACKUP_COUNT, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)
        root.debug("file logging to %s", path.absolute())

    return root


def get_logger(name: str) -> logging.Logger:
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
