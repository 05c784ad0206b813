"""Logging setup for the command line entry points. Library modules only ever call logging.getLogger(__name__)."""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "[%(levelname)s][%(filename)s:%(lineno)s][%(asctime)s] %(message)s"
DATE_FORMAT = "%Y:%m:%d, %H:%M:%S"

# handlers added by init_logger, replaced (not stacked) when it is called again
_installed_handlers: list[logging.Handler] = []


def init_logger(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Console output always, a log file on request"""
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    root = logging.getLogger()
    root.setLevel(level.upper())

    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    _installed_handlers.append(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _installed_handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in _installed_handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
