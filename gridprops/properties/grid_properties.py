"""Schema-restricted, lazily populated keyword -> property registry."""

from typing import Dict, Iterable, Iterator, List, Optional, Type

from ..abstractions.types import SupportedKeywordInfo
from ..exceptions import KeywordNotFoundError, UnsupportedKeywordError
from ..infrastructure.logging import get_logger
from .grid_property import GridProperty

logger = get_logger(__name__)


class GridProperties:
    """
    Named grid properties of one scalar type.

    The schema is fixed at construction. Properties are created on first
    mutable access (``get_keyword`` / ``assert_keyword``) or by
    ``add_keyword``; ``supports_keyword``, ``has_keyword`` and ``lookup`` never
    create anything.
    """

    def __init__(self, grid,
                 supported_keywords: Iterable[SupportedKeywordInfo],
                 property_class: Type[GridProperty] = GridProperty):
        """
        Args:
            grid: Grid topology providing nx, ny, nz
            supported_keywords: Schema entries
            property_class: Property type to instantiate
        """
        self._grid = grid
        self._property_class = property_class
        self._schema: Dict[str, SupportedKeywordInfo] = {}
        for info in supported_keywords:
            self._schema[info.keyword] = info
        self._properties: Dict[str, GridProperty] = {}

    def supports_keyword(self, name: str) -> bool:
        return name in self._schema

    def has_keyword(self, name: str) -> bool:
        return name in self._properties

    def lookup(self, name: str) -> Optional[GridProperty]:
        """The property if it has been instantiated, else None."""
        return self._properties.get(name)

    def get_keyword_info(self, name: str) -> SupportedKeywordInfo:
        self._require_supported(name)
        return self._schema[name]

    def add_keyword(self, name: str) -> bool:
        """
        Instantiate a supported keyword with its default.

        Returns:
            True if created, False if it already existed

        Raises:
            UnsupportedKeywordError: If the keyword is not in the schema
        """
        if self.has_keyword(name):
            return False
        self._require_supported(name)

        info = self._schema[name]
        self._properties[name] = self._property_class(
            self._grid.nx, self._grid.ny, self._grid.nz, info
        )
        logger.debug(f"Instantiated {name} with default {info.default_value}")
        return True

    def get_keyword(self, name: str) -> GridProperty:
        """Mutable access; creates the property with its default if absent."""
        self.add_keyword(name)
        return self._properties[name]

    def assert_keyword(self, name: str) -> None:
        """Force the property into existence."""
        self.add_keyword(name)

    def get_deck_keyword(self, name: str) -> GridProperty:
        """Read-only access to an already instantiated property."""
        prop = self.lookup(name)
        if prop is None:
            raise KeywordNotFoundError(
                f"Keyword '{name}' has not been instantiated. "
                f"Available: {self.keywords()}",
                context={'keyword': name}
            )
        return prop

    def keywords(self) -> List[str]:
        """Instantiated keyword names in creation order."""
        return list(self._properties)

    def supported_keywords(self) -> List[str]:
        return list(self._schema)

    def _require_supported(self, name: str):
        if not self.supports_keyword(name):
            raise UnsupportedKeywordError(
                f"Keyword '{name}' is not supported. "
                f"Supported: {self.supported_keywords()}",
                context={'keyword': name}
            )

    def __contains__(self, name: str) -> bool:
        return self.has_keyword(name)

    def __len__(self) -> int:
        return len(self._properties)

    def __iter__(self) -> Iterator[GridProperty]:
        return iter(list(self._properties.values()))
