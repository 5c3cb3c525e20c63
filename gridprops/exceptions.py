"""Grid property exceptions with diagnostic context."""

from typing import Any, Dict, Optional


class GridPropertyError(Exception):
    """Base error for grid property handling.

    Carries a context dict (keyword, bounds, indices, deck location) so callers
    can build a diagnostic without parsing the message.
    """
    def __init__(self, message: str,
                 context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.context = context or {}
        self.original_exception = original_exception


class InvalidRangeError(GridPropertyError, ValueError):
    """Raised when box bounds fall outside the grid or are inverted."""
    pass


class SizeMismatchError(GridPropertyError, ValueError):
    """Raised when a record does not supply one value per target cell."""
    pass


class UnsupportedRecordShapeError(GridPropertyError, ValueError):
    """Raised when a keyword cannot be read as a full-grid array."""
    pass


class DimensionMismatchError(GridPropertyError, ValueError):
    """Raised when two properties (or a property and a box) differ in shape."""
    pass


class OutOfRangeError(GridPropertyError, ValueError):
    """Raised when property values violate configured limits."""
    pass


class UnsupportedKeywordError(GridPropertyError, KeyError):
    """Raised when a keyword is not part of the registry schema."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0] if self.args else ''


class KeywordNotFoundError(GridPropertyError, KeyError):
    """Raised when a read-only lookup hits a keyword that was never created."""

    def __str__(self) -> str:
        return self.args[0] if self.args else ''


class DuplicateDeclarationError(GridPropertyError, ValueError):
    """Raised when the same cell is declared twice for one aquifer."""
    pass


class ActionNotFoundError(GridPropertyError, KeyError):
    """Raised when an action name is not registered."""

    def __str__(self) -> str:
        return self.args[0] if self.args else ''


def format_location(location: Any) -> str:
    """Render a deck location for error messages."""
    if location is None:
        return "<unknown location>"
    return str(location)
