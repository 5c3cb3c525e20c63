"""Per-cell property arrays with box-scoped mutation and default tracking."""

from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np

from ..abstractions.types import DeckKeyword, SupportedKeywordInfo
from ..exceptions import (
    DimensionMismatchError, InvalidRangeError, OutOfRangeError,
    SizeMismatchError, UnsupportedRecordShapeError
)
from ..grid_systems import Box
from ..infrastructure.logging import get_logger
from .policy import DEFAULT_POLICY, DefaultedEffect, Operation

logger = get_logger(__name__)


class GridProperty:
    """
    One value per global cell of an nx x ny x nz grid.

    Alongside the values a boolean array records which cells still hold the
    keyword default. How each operation updates that array is governed by
    ``DEFAULT_POLICY``.

    Subclasses fix the scalar type; the base class infers it from the
    default value.
    """

    dtype: Optional[type] = None

    def __init__(self, nx: int, ny: int, nz: int, keyword_info: SupportedKeywordInfo):
        """
        Initialize property filled with the keyword default.

        Args:
            nx, ny, nz: Grid dimensions
            keyword_info: Keyword name, default value and dimension
        """
        if min(nx, ny, nz) <= 0:
            raise InvalidRangeError(
                f"Grid dimensions must be positive, got: ({nx}, {ny}, {nz})",
                context={'keyword': keyword_info.keyword, 'dims': (nx, ny, nz)}
            )

        self._nx, self._ny, self._nz = int(nx), int(ny), int(nz)
        self._keyword_info = keyword_info

        size = self.cartesian_size
        self._data = np.full(size, keyword_info.default_value, dtype=self.dtype)
        self._defaulted = np.ones(size, dtype=bool)
        self._inactive_loaded = np.zeros(size, dtype=bool)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def keyword_name(self) -> str:
        return self._keyword_info.keyword

    @property
    def keyword_info(self) -> SupportedKeywordInfo:
        return self._keyword_info

    @property
    def nx(self) -> int:
        return self._nx

    @property
    def ny(self) -> int:
        return self._ny

    @property
    def nz(self) -> int:
        return self._nz

    @property
    def dims(self) -> Tuple[int, int, int]:
        return (self._nx, self._ny, self._nz)

    @property
    def cartesian_size(self) -> int:
        return self._nx * self._ny * self._nz

    def get_data(self) -> np.ndarray:
        """Read-only view of the values in global order."""
        return self._readonly(self._data)

    def was_defaulted(self) -> np.ndarray:
        """Read-only view of the defaulted flags in global order."""
        return self._readonly(self._defaulted)

    def inactive_loaded(self) -> np.ndarray:
        """Inactive cells that received a value from a deck record."""
        return self._readonly(self._inactive_loaded)

    @staticmethod
    def _readonly(array: np.ndarray) -> np.ndarray:
        view = array.view()
        view.setflags(write=False)
        return view

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    def _check_same_dims(self, other: 'GridProperty'):
        if other.dims != self.dims:
            raise DimensionMismatchError(
                f"{self.keyword_name}: dimensions {self.dims} do not match "
                f"{other.keyword_name} {other.dims}",
                context={'keyword': self.keyword_name, 'dims': self.dims, 'other_dims': other.dims}
            )

    def _box_index(self, box: Optional[Box]) -> np.ndarray:
        """Validated global indices for a box; None means every cell."""
        if box is None:
            return np.arange(self.cartesian_size)
        if box.dims != self.dims:
            raise DimensionMismatchError(
                f"{self.keyword_name}: box built for grid {box.dims}, property has {self.dims}",
                context={'keyword': self.keyword_name, 'dims': self.dims, 'box_dims': box.dims}
            )
        return box.index_list()

    def _cast(self, value: Any):
        return self._data.dtype.type(value)

    def _update_defaulted(self, operation: Operation, index: np.ndarray,
                          selected: Optional[np.ndarray] = None,
                          source: Optional[np.ndarray] = None):
        effect = DEFAULT_POLICY[operation]
        if effect is DefaultedEffect.KEEP:
            return
        if effect is DefaultedEffect.CLEAR:
            self._defaulted[index] = False
        elif effect is DefaultedEffect.CLEAR_SELECTED:
            self._defaulted[index[selected]] = False
        elif effect is DefaultedEffect.COPY_SOURCE:
            self._defaulted[index] = source[index]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_from_record(self, keyword: DeckKeyword,
                         allow_inactive_cells_only: bool = False,
                         grid=None,
                         box: Optional[Box] = None,
                         multiplier: bool = False):
        """
        Load values from a full-grid array keyword.

        Explicit values overwrite the cell (or multiply it when ``multiplier``)
        and clear its defaulted flag. Values the deck left defaulted keep the
        cell at its current value and flag.

        Args:
            keyword: Data keyword with exactly one record holding one item
            allow_inactive_cells_only: The keyword legitimately carries values
                for inactive cells; when False, inactive cells written from the
                record are flagged in ``inactive_loaded()``
            grid: Grid topology used for the inactive-cell flagging
            box: Load into this box only (the item then holds one value per
                box cell); None or a global box means the whole grid
            multiplier: Multiply current values instead of assigning
        """
        if not keyword.data_keyword:
            raise UnsupportedRecordShapeError(
                f"Keyword {keyword.name} is not a grid data keyword",
                context={'keyword': keyword.name, 'location': keyword.location}
            )
        if len(keyword) != 1 or len(keyword.get_record(0)) != 1:
            raise UnsupportedRecordShapeError(
                f"Grid property {keyword.name} must have a single record with a single item",
                context={'keyword': keyword.name, 'location': keyword.location}
            )

        item = keyword.get_record(0).get_item(0)
        index = self._box_index(None if box is None or box.is_global else box)

        if len(item) != index.size:
            raise SizeMismatchError(
                f"Size mismatch when setting data for {keyword.name}: "
                f"got {len(item)} values, expected {index.size}",
                context={'keyword': keyword.name, 'expected': int(index.size),
                         'actual': len(item), 'location': keyword.location}
            )

        if grid is not None and tuple(grid.dims) != self.dims:
            raise DimensionMismatchError(
                f"{self.keyword_name}: grid {tuple(grid.dims)} does not match property {self.dims}",
                context={'keyword': self.keyword_name, 'dims': self.dims}
            )

        explicit = ~np.asarray(item.defaulted, dtype=bool)
        raw = [0 if defaulted else value for value, defaulted in zip(item.values, item.defaulted)]
        values = np.asarray(raw).astype(self._data.dtype)
        targets = index[explicit]

        if multiplier:
            self._data[targets] = self._data[targets] * values[explicit]
        else:
            self._data[targets] = values[explicit]
        self._update_defaulted(Operation.LOAD, index, selected=explicit)

        if grid is not None and not allow_inactive_cells_only:
            inactive = targets[~np.asarray(grid.actnum)[targets]]
            self._inactive_loaded[inactive] = True

        logger.debug(
            f"Loaded {int(explicit.sum())}/{index.size} values into {self.keyword_name}",
            extra={'context': {'keyword': keyword.name, 'multiplier': multiplier}}
        )

    def assign_data(self, values: Union[Sequence[Any], np.ndarray]):
        """Replace every value at once."""
        values = np.asarray(values)
        if values.size != self.cartesian_size:
            raise SizeMismatchError(
                f"{self.keyword_name}: got {values.size} values, expected {self.cartesian_size}",
                context={'keyword': self.keyword_name, 'expected': self.cartesian_size,
                         'actual': int(values.size)}
            )
        self._data[:] = values.ravel()
        self._update_defaulted(Operation.ASSIGN, np.arange(self.cartesian_size))

    # ------------------------------------------------------------------
    # Box-scoped operations
    # ------------------------------------------------------------------

    def set_scalar(self, value: Any, box: Box):
        index = self._box_index(box)
        self._data[index] = self._cast(value)
        self._update_defaulted(Operation.SET, index)

    def add(self, delta: Any, box: Box):
        index = self._box_index(box)
        self._data[index] = self._data[index] + self._cast(delta)
        self._update_defaulted(Operation.ADD, index)

    def scale(self, factor: Any, box: Box):
        index = self._box_index(box)
        self._data[index] = self._data[index] * self._cast(factor)
        self._update_defaulted(Operation.SCALE, index)

    def multiply_with(self, other: 'GridProperty', box: Optional[Box] = None):
        """Element-wise multiplication by another property of the same shape."""
        self._check_same_dims(other)
        index = self._box_index(box)
        self._data[index] = self._data[index] * other._data[index]
        self._update_defaulted(Operation.MULTIPLY, index)

    def copy_from(self, other: 'GridProperty', box: Box):
        """Copy values and defaulted flags from ``other`` inside the box."""
        self._check_same_dims(other)
        index = self._box_index(box)
        self._data[index] = other._data[index]
        self._update_defaulted(Operation.COPY, index, source=other._defaulted)

    def min_value(self, bound: Any, box: Box):
        """Raise every value in the box to at least ``bound``.

        Only cells the bound actually changes lose their defaulted flag; a
        defaulted cell already at or above ``bound`` stays defaulted.
        """
        self._clamp(Operation.MINVALUE, np.fmax, bound, box)

    def max_value(self, bound: Any, box: Box):
        """Lower every value in the box to at most ``bound``; see ``min_value``."""
        self._clamp(Operation.MAXVALUE, np.fmin, bound, box)

    def _clamp(self, operation: Operation, func, bound: Any, box: Box):
        index = self._box_index(box)
        old = self._data[index]
        new = func(old, self._cast(bound))
        # NaN cells take the bound and count as clamped
        clamped = ~(old == new)
        self._data[index] = new
        self._update_defaulted(operation, index, selected=clamped)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def check_limits(self, min_value: Any, max_value: Any):
        outside = np.flatnonzero((self._data < min_value) | (self._data > max_value))
        if outside.size:
            first = int(outside[0])
            raise OutOfRangeError(
                f"Property {self.keyword_name}: {outside.size} value(s) outside "
                f"[{min_value}, {max_value}], first at global index {first} "
                f"(value {self._data[first]})",
                context={'keyword': self.keyword_name, 'limits': (min_value, max_value),
                         'indices': outside[:10].tolist()}
            )

    def init_mask(self, value: Any, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Boolean mask of the cells equal to ``value``; fills ``out`` if given."""
        mask = self._data == value
        if out is not None:
            if out.shape != mask.shape:
                raise SizeMismatchError(
                    f"{self.keyword_name}: mask has shape {out.shape}, expected {mask.shape}",
                    context={'keyword': self.keyword_name}
                )
            out[...] = mask
            return out
        return mask

    def masked_set(self, value: Any, mask: Union[Sequence[bool], np.ndarray]):
        mask = np.asarray(mask, dtype=bool)
        if mask.size != self.cartesian_size:
            raise SizeMismatchError(
                f"{self.keyword_name}: mask has {mask.size} entries, expected {self.cartesian_size}",
                context={'keyword': self.keyword_name, 'expected': self.cartesian_size,
                         'actual': int(mask.size)}
            )
        index = np.flatnonzero(mask)
        self._data[index] = self._cast(value)
        self._update_defaulted(Operation.MASKED_SET, index)

    def cells_equal(self, value: Any, active_map, use_active_indexing: bool = True) -> np.ndarray:
        """
        Indices of the cells whose value equals ``value``.

        Args:
            value: Value to look for
            active_map: A grid (its ``active_map`` is used) or a sequence
                giving the global index of each compressed index
            use_active_indexing: Return compressed indices of matching active
                cells; when False return global indices of every matching cell

        Returns:
            Indices in increasing compressed or global order
        """
        if not use_active_indexing:
            return self.index_equal(value)
        active = np.asarray(getattr(active_map, 'active_map', active_map), dtype=np.int64)
        return np.flatnonzero(self._data[active] == value)

    def index_equal(self, value: Any) -> np.ndarray:
        return np.flatnonzero(self._data == value)

    def compressed_copy(self, grid) -> np.ndarray:
        """Values of the active cells in compressed order."""
        if tuple(grid.dims) != self.dims:
            raise DimensionMismatchError(
                f"{self.keyword_name}: grid {tuple(grid.dims)} does not match property {self.dims}",
                context={'keyword': self.keyword_name, 'dims': self.dims}
            )
        return self._data[grid.active_map].copy()

    def run_post_processor(self):
        if self._keyword_info.post_processor is not None:
            self._keyword_info.post_processor(self._data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.keyword_name!r}, dims={self.dims})"


class IntGridProperty(GridProperty):
    """Integer-valued property (region numbers, flags)."""
    dtype = np.int64


class DoubleGridProperty(GridProperty):
    """Floating point property."""
    dtype = np.float64

    def contains_nan(self) -> bool:
        return bool(np.isnan(self._data).any())
