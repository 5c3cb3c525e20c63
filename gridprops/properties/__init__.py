# gridprops/properties/__init__.py
"""Grid property containers."""

from .policy import Operation, DefaultedEffect, DEFAULT_POLICY
from .grid_property import GridProperty, IntGridProperty, DoubleGridProperty
from .grid_properties import GridProperties
from .field_properties import FieldProperties

__all__ = [
    'Operation',
    'DefaultedEffect',
    'DEFAULT_POLICY',
    'GridProperty',
    'IntGridProperty',
    'DoubleGridProperty',
    'GridProperties',
    'FieldProperties',
]
