"""Rotating JSON log file."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ..formatters import JsonFormatter


class FileHandler(RotatingFileHandler):
    """Size-rotated log file; the parent directory is created on demand."""

    def __init__(self, filename: str,
                 max_bytes: int = 10 * 1024 * 1024,
                 backup_count: int = 3,
                 level: int = logging.DEBUG,
                 use_json: bool = True):
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(str(path), maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')

        formatter = JsonFormatter() if use_json else logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s'
        )
        self.setFormatter(formatter)
        self.setLevel(level)
