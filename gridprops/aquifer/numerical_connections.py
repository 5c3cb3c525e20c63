"""Connections between numerical aquifers and reservoir cells (AQUCON)."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..abstractions.types import DeckKeyword, DeckRecord
from ..config import config as default_config
from ..exceptions import (
    DuplicateDeclarationError, KeywordNotFoundError, UnsupportedRecordShapeError,
    format_location
)
from ..grid_systems import Box
from ..infrastructure.logging import get_logger, keyword_scope
from .face_dir import FaceDir, neighbor_inside_and_active

logger = get_logger(__name__)

_TRUE_STRINGS = {'YES', 'Y', 'TRUE', 'T', '1'}
_FALSE_STRINGS = {'NO', 'N', 'FALSE', 'F', '0'}


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    token = str(value).strip().upper()
    if token in _TRUE_STRINGS:
        return True
    if token in _FALSE_STRINGS:
        return False
    raise ValueError(f"Cannot interpret '{value}' as a boolean")


@dataclass(frozen=True)
class NumAquiferCon:
    """One aquifer-to-cell connection. I, J, K are zero-based."""
    aquifer_id: int
    I: int
    J: int
    K: int
    global_index: int
    face_dir: FaceDir
    trans_multiplier: float = 1.0
    trans_option: int = 0
    connect_active_cell: bool = False
    ve_frac_relperm: float = 1.0
    ve_frac_cappress: float = 1.0

    @staticmethod
    def generate_connections(grid, record: DeckRecord,
                             defaults: Optional[Dict[str, Any]] = None) -> List['NumAquiferCon']:
        """
        Connections declared by one AQUCON record.

        Cells of the 1-based I1..K2 box are visited k outer, i inner. Inactive
        cells are skipped, as are cells whose neighbour across the connection
        face is an active reservoir cell, unless ALLOW_INTERNAL_CELLS is set.
        """
        if defaults is None:
            defaults = default_config.get('aquifer.connection_defaults', {})

        required = ('ID', 'I1', 'I2', 'J1', 'J2', 'K1', 'K2', 'CONNECT_FACE')
        values = {name: record.get_value(name) for name in required}
        missing = [name for name, value in values.items() if value is None]
        if missing:
            raise UnsupportedRecordShapeError(
                f"AQUCON record is missing items {missing}",
                context={'keyword': 'AQUCON', 'missing': missing}
            )

        def optional(name):
            return record.get_value(name, defaults.get(name))

        face_dir = FaceDir.from_string(values['CONNECT_FACE'])
        allow_internal = _to_bool(optional('ALLOW_INTERNAL_CELLS'))
        box = Box.from_one_based(grid, *(int(values[n]) for n in ('I1', 'I2', 'J1', 'J2', 'K1', 'K2')))

        connections = []
        for global_index in box:
            i, j, k = grid.get_ijk(global_index)
            if not grid.cell_active(i, j, k):
                continue
            if allow_internal or not neighbor_inside_and_active(grid, i, j, k, face_dir):
                connections.append(NumAquiferCon(
                    aquifer_id=int(values['ID']),
                    I=i, J=j, K=k,
                    global_index=global_index,
                    face_dir=face_dir,
                    trans_multiplier=float(optional('TRANS_MULT')),
                    trans_option=int(optional('TRANS_OPTION')),
                    connect_active_cell=allow_internal,
                    ve_frac_relperm=float(optional('VEFRAC')),
                    ve_frac_cappress=float(optional('VEFRACP')),
                ))
        return connections


class NumericalAquiferConnections:
    """Aquifer id -> {global cell index -> connection}, from AQUCON keywords."""

    def __init__(self, keywords: Iterable[DeckKeyword], grid, config=None):
        cfg = config or default_config
        defaults = cfg.get('aquifer.connection_defaults', {})
        self._connections: Dict[int, Dict[int, NumAquiferCon]] = {}

        for keyword in keywords:
            if keyword.name != 'AQUCON':
                continue
            with keyword_scope(keyword.name, keyword.location):
                logger.info(
                    f"Initializing numerical aquifer connections from {keyword.name} "
                    f"in {format_location(keyword.location)}"
                )
                for record in keyword:
                    for con in NumAquiferCon.generate_connections(grid, record, defaults):
                        self._add(con, keyword)

    def _add(self, con: NumAquiferCon, keyword: DeckKeyword):
        aquifer_cons = self._connections.setdefault(con.aquifer_id, {})
        if con.global_index in aquifer_cons:
            raise DuplicateDeclarationError(
                f"Numerical aquifer cell at ({con.I + 1}, {con.J + 1}, {con.K + 1}) is declared "
                f"more than once for numerical aquifer {con.aquifer_id} "
                f"({format_location(keyword.location)})",
                context={'keyword': keyword.name, 'aquifer_id': con.aquifer_id,
                         'ijk': (con.I + 1, con.J + 1, con.K + 1),
                         'location': keyword.location}
            )
        aquifer_cons[con.global_index] = con

    def get_connections(self, aquifer_id: int) -> Dict[int, NumAquiferCon]:
        if aquifer_id not in self._connections:
            raise KeywordNotFoundError(
                f"Numerical aquifer {aquifer_id} does not have any connections",
                context={'aquifer_id': aquifer_id}
            )
        return self._connections[aquifer_id]

    def aquifer_ids(self) -> List[int]:
        return list(self._connections)

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, aquifer_id: int) -> bool:
        return aquifer_id in self._connections
