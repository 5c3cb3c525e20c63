"""Rectangular cell selections."""

from typing import Iterator, Optional, Tuple

import numpy as np

from ..exceptions import InvalidRangeError


class Box:
    """
    A global box or an inclusive ``[i1,i2] x [j1,j2] x [k1,k2]`` sub-range.

    ``index_list()`` enumerates global indices with k outer, j middle and
    i inner. Activity is not filtered here.
    """

    def __init__(self, grid,
                 i1: Optional[int] = None, i2: Optional[int] = None,
                 j1: Optional[int] = None, j2: Optional[int] = None,
                 k1: Optional[int] = None, k2: Optional[int] = None):
        """
        Initialize box.

        Args:
            grid: Anything exposing ``nx``, ``ny`` and ``nz``
            i1..k2: Zero-based inclusive bounds; omit all six for a global box
        """
        self._dims = (int(grid.nx), int(grid.ny), int(grid.nz))
        bounds = (i1, i2, j1, j2, k1, k2)

        if all(b is None for b in bounds):
            nx, ny, nz = self._dims
            self._bounds = (0, nx - 1, 0, ny - 1, 0, nz - 1)
            self._is_global = True
        elif any(b is None for b in bounds):
            raise InvalidRangeError(
                f"Box needs all six bounds or none, got {bounds}",
                context={'bounds': bounds}
            )
        else:
            self._bounds = tuple(int(b) for b in bounds)
            self._validate()
            self._is_global = False

        self._index_list: Optional[np.ndarray] = None

    @classmethod
    def from_one_based(cls, grid, i1: int, i2: int, j1: int, j2: int, k1: int, k2: int) -> 'Box':
        """Build from deck-style 1-based inclusive bounds."""
        return cls(grid, i1 - 1, i2 - 1, j1 - 1, j2 - 1, k1 - 1, k2 - 1)

    def _validate(self):
        for axis, lo, hi, n in zip('ijk', self._bounds[0::2], self._bounds[1::2], self._dims):
            if not 0 <= lo <= hi < n:
                raise InvalidRangeError(
                    f"Invalid box bounds {axis}1={lo} {axis}2={hi} for {axis}-dimension {n}",
                    context={'bounds': self._bounds, 'dims': self._dims, 'axis': axis}
                )

    @property
    def is_global(self) -> bool:
        return self._is_global

    @property
    def bounds(self) -> Tuple[int, int, int, int, int, int]:
        """Zero-based ``(i1, i2, j1, j2, k1, k2)``."""
        return self._bounds

    @property
    def dims(self) -> Tuple[int, int, int]:
        """Dimensions of the grid this box was built for."""
        return self._dims

    @property
    def cartesian_size(self) -> int:
        nx, ny, nz = self._dims
        return nx * ny * nz

    @property
    def shape(self) -> Tuple[int, int, int]:
        i1, i2, j1, j2, k1, k2 = self._bounds
        return (i2 - i1 + 1, j2 - j1 + 1, k2 - k1 + 1)

    @property
    def size(self) -> int:
        ni, nj, nk = self.shape
        return ni * nj * nk

    def index_list(self) -> np.ndarray:
        """Ordered global indices covered by the box (read-only)."""
        if self._index_list is None:
            nx, ny, _ = self._dims
            i1, i2, j1, j2, k1, k2 = self._bounds
            ii = np.arange(i1, i2 + 1)
            jj = np.arange(j1, j2 + 1)
            kk = np.arange(k1, k2 + 1)
            index = (kk[:, None, None] * (nx * ny) + jj[None, :, None] * nx + ii[None, None, :]).ravel()
            index.setflags(write=False)
            self._index_list = index
        return self._index_list

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[int]:
        return (int(g) for g in self.index_list())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Box):
            return NotImplemented
        return self._dims == other._dims and self._bounds == other._bounds

    def __hash__(self) -> int:
        return hash((self._dims, self._bounds))

    def __repr__(self) -> str:
        if self._is_global:
            return f"Box(global, dims={self._dims})"
        return f"Box(bounds={self._bounds}, dims={self._dims})"
