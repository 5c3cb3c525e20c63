"""Structured logging infrastructure for deck processing."""

from .structured_logger import StructuredLogger, get_logger
from .context import keyword_context, section_context, location_context, keyword_scope
from .decorators import log_operation
from .setup import setup_logging, setup_simple_logging

__all__ = [
    'StructuredLogger',
    'get_logger',
    'keyword_context',
    'section_context',
    'location_context',
    'keyword_scope',
    'log_operation',
    'setup_logging',
    'setup_simple_logging',
]
