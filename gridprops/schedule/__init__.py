"""Schedule-level containers."""

from .actions import ActionX, Actions

__all__ = ['ActionX', 'Actions']
