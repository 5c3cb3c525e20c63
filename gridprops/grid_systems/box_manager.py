"""Tracking of BOX / ENDBOX state while walking a deck."""

from typing import Optional

from ..abstractions.types import DeckRecord
from .box import Box

BOX_ITEMS = ('I1', 'I2', 'J1', 'J2', 'K1', 'K2')


class BoxManager:
    """
    Resolve which box an operation applies to.

    The input box opened by BOX applies until ENDBOX or the next section;
    otherwise operations cover the whole grid. Edit records may narrow it
    through their own bounds.
    """

    def __init__(self, grid):
        self._grid = grid
        self._input_box: Optional[Box] = None

    def set_input_box(self, i1: int, i2: int, j1: int, j2: int, k1: int, k2: int):
        self._input_box = Box(self._grid, i1, i2, j1, j2, k1, k2)

    def end_input_box(self):
        self._input_box = None

    def end_section(self):
        self._input_box = None

    @property
    def input_box(self) -> Optional[Box]:
        return self._input_box

    def active_box(self) -> Box:
        if self._input_box is not None:
            return self._input_box
        return Box(self._grid)

    def box_from_record(self, record: DeckRecord) -> Box:
        """
        Box named by the 1-based I1..K2 items of an edit record.

        All six defaulted (or absent) selects the current active box; a single
        defaulted item inherits that bound from the active box.
        """
        values = [record.get_value(name) for name in BOX_ITEMS]
        base = self.active_box()
        if all(v is None for v in values):
            return base

        bounds = [
            int(v) - 1 if v is not None else fallback
            for v, fallback in zip(values, base.bounds)
        ]
        return Box(self._grid, *bounds)
