"""Cell face directions."""

from enum import Enum
from typing import Tuple


class FaceDir(Enum):
    """Face of a cell, named by the axis and side it points to."""
    X_PLUS = "I+"
    X_MINUS = "I-"
    Y_PLUS = "J+"
    Y_MINUS = "J-"
    Z_PLUS = "K+"
    Z_MINUS = "K-"

    @classmethod
    def from_string(cls, value: str) -> 'FaceDir':
        """Parse deck spellings such as ``I+``, ``X-`` or a bare ``K``."""
        token = value.strip().upper()
        if token and token[0] in 'XYZ':
            token = 'IJK'['XYZ'.index(token[0])] + token[1:]
        if len(token) == 1:
            token += '+'
        for face in cls:
            if face.value == token:
                return face
        raise ValueError(f"Unknown face direction '{value}'")

    @property
    def offset(self) -> Tuple[int, int, int]:
        return _OFFSETS[self]


_OFFSETS = {
    FaceDir.X_PLUS: (1, 0, 0),
    FaceDir.X_MINUS: (-1, 0, 0),
    FaceDir.Y_PLUS: (0, 1, 0),
    FaceDir.Y_MINUS: (0, -1, 0),
    FaceDir.Z_PLUS: (0, 0, 1),
    FaceDir.Z_MINUS: (0, 0, -1),
}


def neighbor_inside_and_active(grid, i: int, j: int, k: int, face: FaceDir) -> bool:
    """Whether the cell across ``face`` lies inside the grid and is active."""
    di, dj, dk = face.offset
    ni, nj, nk = i + di, j + dj, k + dk
    if not (0 <= ni < grid.nx and 0 <= nj < grid.ny and 0 <= nk < grid.nz):
        return False
    return grid.cell_active(ni, nj, nk)
