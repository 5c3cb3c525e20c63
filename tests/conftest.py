"""Shared fixtures for gridprops tests."""

import pytest

from gridprops.abstractions.types import DeckItem, DeckKeyword, DeckRecord, KeywordLocation
from gridprops.grid_systems import CartesianGrid


@pytest.fixture
def grid_4x4x2():
    """Fully active 4x4x2 grid."""
    return CartesianGrid(4, 4, 2)


@pytest.fixture
def layered_grid():
    """3x3x3 grid whose first cell in every layer is inactive."""
    actnum = [0 if g % 9 == 0 else 1 for g in range(27)]
    return CartesianGrid(3, 3, 3, actnum)


@pytest.fixture
def make_record():
    """Build a record from keyword arguments; None marks a defaulted item."""
    def _make(**items):
        return DeckRecord([DeckItem(name, [value]) for name, value in items.items()])
    return _make


@pytest.fixture
def make_keyword():
    """Build a non-data keyword from a list of records."""
    def _make(name, records=(), lineno=1):
        return DeckKeyword(name, list(records), KeywordLocation('CASE.DATA', lineno))
    return _make


@pytest.fixture
def box_keyword(make_record, make_keyword):
    """BOX keyword from 1-based bounds."""
    def _make(i1, i2, j1, j2, k1, k2):
        return make_keyword('BOX', [make_record(I1=i1, I2=i2, J1=j1, J2=j2, K1=k1, K2=k2)])
    return _make
