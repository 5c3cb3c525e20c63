"""Deck context management for log correlation."""

from contextlib import contextmanager
from typing import Any, Optional

from .structured_logger import keyword_context, section_context, location_context


@contextmanager
def keyword_scope(keyword: str, location: Optional[Any] = None, section: Optional[str] = None):
    """Tag every log record emitted inside the block with a deck keyword.

    Example:
        with keyword_scope('EQUALS', kw.location):
            apply_edit(kw)
    """
    tokens = [keyword_context.set(keyword)]
    if location is not None:
        tokens.append(location_context.set(str(location)))
    if section is not None:
        tokens.append(section_context.set(section))
    try:
        yield
    finally:
        for token in reversed(tokens):
            token.var.reset(token)
