"""Install the console and file handlers for a run."""

import logging
import sys
from pathlib import Path
from typing import Optional

from .handlers import ConsoleHandler, FileHandler
from .structured_logger import get_logger


def _reset_root(log_level: str) -> int:
    """Drop existing root handlers and set the root level; returns the level."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(level)
    return level


def setup_logging(config,
                  log_file: Optional[str] = None,
                  console: Optional[bool] = None,
                  log_level: Optional[str] = None):
    """Configure logging from the ``logging`` and ``paths`` config sections.

    Explicit arguments win over configuration. The file handler always
    records DEBUG and above as JSON lines.

    Args:
        config: Config instance (anything with a dot-notation ``get``)
        log_file: Log file path; defaults to ``logging.log_file`` or
            ``<paths.logs_dir>/gridprops.log``
        console: Whether to log to stderr (``logging.console``)
        log_level: Root and console level (``logging.level``)
    """
    log_level = log_level or config.get('logging.level', 'INFO')
    if console is None:
        console = config.get('logging.console', True)
    log_file = log_file or config.get('logging.log_file') or \
        Path(config.get('paths.logs_dir', 'logs')) / 'gridprops.log'

    level = _reset_root(log_level)
    root = logging.getLogger()
    if console:
        root.addHandler(ConsoleHandler(use_colors=sys.stderr.isatty(), level=level))
    root.addHandler(FileHandler(
        str(log_file),
        max_bytes=config.get('logging.max_file_size', 10 * 1024 * 1024),
        backup_count=config.get('logging.backup_count', 3),
    ))

    get_logger(__name__).info(
        "Structured logging initialized",
        extra={'context': {'log_level': log_level, 'log_file': str(log_file), 'console': console}}
    )


def setup_simple_logging(log_level: str = 'INFO'):
    """Console-only logging for scripts and debugging."""
    level = _reset_root(log_level)
    logging.getLogger().addHandler(ConsoleHandler(show_context=True, level=level))
