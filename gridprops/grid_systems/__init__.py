# gridprops/grid_systems/__init__.py
"""Grid topology and box selection."""

from .cartesian_grid import CartesianGrid
from .box import Box
from .box_manager import BoxManager

__all__ = [
    'CartesianGrid',
    'Box',
    'BoxManager',
]
