"""Structured logging with deck context propagation."""

import logging
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Where in the deck the current operation is
keyword_context: ContextVar[Optional[str]] = ContextVar('keyword', default=None)
section_context: ContextVar[Optional[str]] = ContextVar('section', default=None)
location_context: ContextVar[Optional[str]] = ContextVar('location', default=None)

# Keys of ``extra`` that StructuredLogger interprets itself
_RESERVED_EXTRA = ('context', 'performance', 'traceback')


def _format_traceback(exc_info) -> Optional[str]:
    """Normalise ``exc_info`` (True, an exception or a tuple) into text."""
    if isinstance(exc_info, BaseException):
        exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
    elif not isinstance(exc_info, tuple):
        exc_info = sys.exc_info()
    if exc_info[0] is None:
        return None
    return ''.join(traceback.format_exception(*exc_info))


class StructuredLogger(logging.Logger):
    """Logger whose records carry ``context``, ``performance`` and ``traceback``.

    ``context`` always holds the deck keyword, section and location active in
    the calling ``keyword_scope`` plus any persistent fields added with
    ``add_context``. Callers merge their own fields through
    ``extra={'context': {...}}``.
    """

    def __init__(self, name: str):
        super().__init__(name)
        self._context_fields: Dict[str, Any] = {}

    def deck_context(self) -> Dict[str, Any]:
        """Snapshot of the deck position and persistent fields."""
        context = {
            'keyword': keyword_context.get(),
            'section': section_context.get(),
            'location': location_context.get(),
            'logger_name': self.name,
            'timestamp': datetime.now(timezone.utc).isoformat(),
        }
        context.update(self._context_fields)
        return {k: v for k, v in context.items() if v is not None}

    def _log(self, level, msg, args, exc_info=None, extra=None, stack_info=False, **kwargs):
        caller = dict(extra) if isinstance(extra, dict) else {}
        context = self.deck_context()
        context.update(caller.pop('context', None) or {})
        performance = caller.pop('performance', None)
        tb = caller.pop('traceback', None)
        if tb is None and exc_info:
            tb = _format_traceback(exc_info)

        caller.update(zip(_RESERVED_EXTRA, (context, performance, tb)))
        super()._log(level, msg, args, exc_info=False, extra=caller,
                     stack_info=stack_info, **kwargs)

    def add_context(self, **fields):
        """Attach fields to every later record of this logger."""
        self._context_fields.update(fields)

    def remove_context(self, *keys):
        for key in keys:
            self._context_fields.pop(key, None)

    def clear_context(self):
        self._context_fields.clear()

    def log_performance(self, operation: str, duration: float, **metrics):
        """Log how long an operation took.

        Args:
            operation: Operation name
            duration: Duration in seconds
            **metrics: Extra figures; ``cells_processed`` adds a cell rate
        """
        performance = {'operation': operation, 'duration_seconds': round(duration, 3)}
        performance.update(metrics)
        cells = metrics.get('cells_processed')
        if cells is not None and duration > 0:
            performance['cells_per_second'] = round(cells / duration, 2)

        self.info(f"Performance: {operation} completed in {duration:.3f}s",
                  extra={'performance': performance})

    def log_error_with_context(self, error: Exception, operation: Optional[str] = None,
                               performance: Optional[Dict[str, Any]] = None, **context):
        """Log an error together with the context carried by the exception."""
        error_context = {'error_type': type(error).__name__}
        error_context.update(getattr(error, 'context', None) or {})
        error_context.update(context)
        if operation:
            error_context['operation'] = operation

        self.error(f"{type(error).__name__}: {error}", exc_info=error,
                   extra={'context': error_context, 'performance': performance})


_logger_cache: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Return the logger registered under ``name``.

    The logger is a StructuredLogger unless a plain logger claimed the name
    before this call; package modules only use their own ``__name__``.

    Example:
        from gridprops.infrastructure.logging import get_logger
        logger = get_logger(__name__)
    """
    cached = _logger_cache.get(name)
    if cached is not None:
        return cached

    previous_class = logging.getLoggerClass()
    logging.setLoggerClass(StructuredLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(previous_class)

    _logger_cache[name] = logger
    return logger
