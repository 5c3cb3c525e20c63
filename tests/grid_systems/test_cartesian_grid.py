"""Tests for grid topology and index translation."""

import numpy as np
import pytest

from gridprops.abstractions.types import DeckItem, DeckKeyword, DeckRecord
from gridprops.exceptions import InvalidRangeError, SizeMismatchError
from gridprops.grid_systems import CartesianGrid


class TestCartesianGrid:
    """Test grid construction and activity."""

    def test_fully_active_by_default(self):
        """Without ACTNUM every cell is active."""
        grid = CartesianGrid(3, 2, 4)
        assert grid.dims == (3, 2, 4)
        assert grid.cartesian_size == 24
        assert grid.num_active == 24
        np.testing.assert_array_equal(grid.active_map, np.arange(24))

    def test_non_positive_dimensions_rejected(self):
        """Zero or negative dimensions are invalid."""
        with pytest.raises(InvalidRangeError):
            CartesianGrid(0, 2, 2)
        with pytest.raises(InvalidRangeError):
            CartesianGrid(2, -1, 2)

    def test_actnum_size_checked(self):
        """ACTNUM must have one entry per cell."""
        with pytest.raises(SizeMismatchError) as exc_info:
            CartesianGrid(2, 2, 2, [1] * 7)
        assert exc_info.value.context['expected'] == 8

    def test_global_index_ordering(self):
        """i runs fastest, then j, then k."""
        grid = CartesianGrid(4, 3, 2)
        assert grid.get_global_index(0, 0, 0) == 0
        assert grid.get_global_index(1, 0, 0) == 1
        assert grid.get_global_index(0, 1, 0) == 4
        assert grid.get_global_index(0, 0, 1) == 12
        assert grid.get_ijk(17) == (1, 1, 1)

    def test_global_index_out_of_range(self):
        grid = CartesianGrid(2, 2, 2)
        with pytest.raises(InvalidRangeError):
            grid.get_global_index(2, 0, 0)
        with pytest.raises(InvalidRangeError):
            grid.get_ijk(8)


class TestActiveMapping:
    """Test global <-> compressed index translation."""

    def test_inactive_cells_excluded(self, layered_grid):
        """First cell of each layer is inactive."""
        assert layered_grid.num_active == 24
        assert not layered_grid.cell_active(0)
        assert not layered_grid.cell_active(0, 0, 1)
        assert layered_grid.cell_active(1, 0, 0)

    def test_round_trip(self, layered_grid):
        """global_index_of and active_index_of are inverse on active cells."""
        for c in range(layered_grid.num_active):
            g = layered_grid.global_index_of(c)
            assert layered_grid.cell_active(g)
            assert layered_grid.active_index_of(g) == c

    def test_inactive_has_no_compressed_index(self, layered_grid):
        assert layered_grid.active_index_of(9) == -1

    def test_compressed_index_out_of_range(self, layered_grid):
        with pytest.raises(InvalidRangeError):
            layered_grid.global_index_of(24)

    def test_arrays_are_read_only(self, layered_grid):
        """Topology arrays cannot be modified by consumers."""
        with pytest.raises(ValueError):
            layered_grid.actnum[0] = True
        with pytest.raises(ValueError):
            layered_grid.active_map[0] = 5


class TestFromKeywords:
    """Test building a grid from DIMENS / ACTNUM keywords."""

    def test_dimens_and_actnum(self):
        """Defaulted ACTNUM entries count as active."""
        dimens = DeckKeyword('DIMENS', [DeckRecord([
            DeckItem('NX', [2]), DeckItem('NY', [2]), DeckItem('NZ', [1]),
        ])])
        actnum = DeckKeyword.data('ACTNUM', ['0', '1*', '2*1'], value_type=int)

        grid = CartesianGrid.from_keywords(dimens, actnum)

        assert grid.dims == (2, 2, 1)
        np.testing.assert_array_equal(grid.actnum, [False, True, True, True])

    def test_dimens_only(self):
        dimens = DeckKeyword('DIMENS', [DeckRecord([
            DeckItem('NX', [5]), DeckItem('NY', [5]), DeckItem('NZ', [1]),
        ])])
        grid = CartesianGrid.from_keywords(dimens)
        assert grid.num_active == 25
