"""Cartesian grid topology with ACTNUM-driven cell activity."""

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from ..abstractions.types import DeckKeyword
from ..exceptions import InvalidRangeError, SizeMismatchError
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


class CartesianGrid:
    """
    Logical nx x ny x nz grid.

    Global indices run i fastest, then j, then k. Compressed (active) indices
    number the active cells in increasing global order.
    """

    def __init__(self, nx: int, ny: int, nz: int,
                 actnum: Optional[Union[Sequence[int], np.ndarray]] = None):
        """
        Initialize grid topology.

        Args:
            nx, ny, nz: Number of cells in each direction (all positive)
            actnum: Optional per-cell activity flags in global order;
                every cell is active when omitted
        """
        if min(nx, ny, nz) <= 0:
            raise InvalidRangeError(
                f"Grid dimensions must be positive, got: ({nx}, {ny}, {nz})",
                context={'dims': (nx, ny, nz)}
            )

        self._nx, self._ny, self._nz = int(nx), int(ny), int(nz)
        size = self._nx * self._ny * self._nz

        if actnum is None:
            self._actnum = np.ones(size, dtype=bool)
        else:
            actnum = np.asarray(actnum).ravel()
            if actnum.size != size:
                raise SizeMismatchError(
                    f"ACTNUM has {actnum.size} values, grid has {size} cells",
                    context={'keyword': 'ACTNUM', 'expected': size, 'actual': actnum.size}
                )
            self._actnum = actnum != 0
        self._actnum.setflags(write=False)

        self._active_map = np.flatnonzero(self._actnum)
        self._active_map.setflags(write=False)

        self._global_to_active = np.full(size, -1, dtype=np.int64)
        self._global_to_active[self._active_map] = np.arange(self._active_map.size)

        logger.debug(f"Grid {self._nx}x{self._ny}x{self._nz}: {self.num_active}/{size} active cells")

    @classmethod
    def from_keywords(cls, dimens: DeckKeyword, actnum: Optional[DeckKeyword] = None) -> 'CartesianGrid':
        """Build from a DIMENS keyword and an optional ACTNUM data keyword."""
        record = dimens.get_record(0)
        nx, ny, nz = (int(record.get_item(name).get(0)) for name in ('NX', 'NY', 'NZ'))

        actnum_values = None
        if actnum is not None:
            item = actnum.get_record(0).get_item(0)
            # Defaulted ACTNUM entries mean active
            actnum_values = [1 if d else int(v) for v, d in zip(item.values, item.defaulted)]

        return cls(nx, ny, nz, actnum_values)

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

    @property
    def num_active(self) -> int:
        return int(self._active_map.size)

    @property
    def actnum(self) -> np.ndarray:
        return self._actnum

    @property
    def active_map(self) -> np.ndarray:
        """Global index for each compressed index."""
        return self._active_map

    def get_global_index(self, i: int, j: int, k: int) -> int:
        if not (0 <= i < self._nx and 0 <= j < self._ny and 0 <= k < self._nz):
            raise InvalidRangeError(
                f"Cell ({i}, {j}, {k}) outside grid {self.dims}",
                context={'ijk': (i, j, k), 'dims': self.dims}
            )
        return i + j * self._nx + k * self._nx * self._ny

    def get_ijk(self, global_index: int) -> Tuple[int, int, int]:
        self._check_global_index(global_index)
        k, rest = divmod(global_index, self._nx * self._ny)
        j, i = divmod(rest, self._nx)
        return (i, j, k)

    def cell_active(self, i: int, j: Optional[int] = None, k: Optional[int] = None) -> bool:
        """Activity of a cell given as (i, j, k) or as a single global index."""
        if j is None and k is None:
            self._check_global_index(i)
            return bool(self._actnum[i])
        return bool(self._actnum[self.get_global_index(i, j, k)])

    def global_index_of(self, active_index: int) -> int:
        """Global index of a compressed index."""
        if not 0 <= active_index < self.num_active:
            raise InvalidRangeError(
                f"Active index {active_index} outside [0, {self.num_active})",
                context={'active_index': active_index}
            )
        return int(self._active_map[active_index])

    def active_index_of(self, global_index: int) -> int:
        """Compressed index of a global index, -1 for inactive cells."""
        self._check_global_index(global_index)
        return int(self._global_to_active[global_index])

    def _check_global_index(self, global_index: int):
        if not 0 <= global_index < self.cartesian_size:
            raise InvalidRangeError(
                f"Global index {global_index} outside [0, {self.cartesian_size})",
                context={'global_index': global_index}
            )

    def __repr__(self) -> str:
        return f"CartesianGrid(nx={self._nx}, ny={self._ny}, nz={self._nz}, active={self.num_active})"
