"""Apply grid-section keywords to int and double property registries."""

import dataclasses
from typing import Callable, Dict, Iterable, Optional

import numpy as np

from ..abstractions.types import DeckKeyword, DeckRecord, SupportedKeywordInfo
from ..config import config as default_config
from ..exceptions import (
    InvalidRangeError, UnsupportedKeywordError, UnsupportedRecordShapeError,
    format_location
)
from ..grid_systems import BoxManager
from ..grid_systems.box_manager import BOX_ITEMS
from ..infrastructure.logging import get_logger, keyword_scope, log_operation
from .grid_properties import GridProperties
from .grid_property import DoubleGridProperty, GridProperty, IntGridProperty

logger = get_logger(__name__)

SECTION_KEYWORDS = frozenset({
    'RUNSPEC', 'GRID', 'EDIT', 'PROPS', 'REGIONS', 'SOLUTION', 'SUMMARY', 'SCHEDULE'
})

# Edit keyword -> name of the item holding its operand
EDIT_OPERAND_ITEMS = {
    'EQUALS': 'VALUE',
    'ADD': 'SHIFT',
    'MULTIPLY': 'FACTOR',
    'MINVALUE': 'VALUE',
    'MAXVALUE': 'VALUE',
}


def _attach_post_processors(post_processors, int_schema, double_schema):
    """Return both schemas with the given callables set on their entries."""
    remaining = dict(post_processors)

    def attach(schema):
        return [
            dataclasses.replace(info, post_processor=remaining.pop(info.keyword))
            if info.keyword in remaining else info
            for info in schema
        ]

    int_schema, double_schema = attach(int_schema), attach(double_schema)
    if remaining:
        raise UnsupportedKeywordError(
            f"Post-processors given for unsupported keywords: {sorted(remaining)}",
            context={'keywords': sorted(remaining)}
        )
    return int_schema, double_schema


class FieldProperties:
    """
    Integer and floating point grid properties built from deck keywords.

    Keywords are applied strictly in the order given. Section keywords close
    any open BOX, ``BOX``/``ENDBOX`` set the input box, edit keywords mutate
    existing (or lazily created) properties and data keywords load arrays into
    the active box.
    """

    def __init__(self, grid, keywords: Optional[Iterable[DeckKeyword]] = None, config=None,
                 post_processors: Optional[Dict[str, Callable[[np.ndarray], None]]] = None):
        """
        Args:
            grid: Grid topology the properties are defined on
            keywords: Deck keywords to apply immediately
            config: Config instance (defaults to the global config)
            post_processors: Keyword name -> callable run once on the data
                array of that property after loading

        Raises:
            UnsupportedKeywordError: If a post-processor names a keyword
                outside both schemas
        """
        cfg = config or default_config
        self._grid = grid
        int_schema = [SupportedKeywordInfo.from_dict(e) for e in cfg.get('properties.int_keywords', [])]
        double_schema = [SupportedKeywordInfo.from_dict(e) for e in cfg.get('properties.double_keywords', [])]
        if post_processors:
            int_schema, double_schema = _attach_post_processors(
                post_processors, int_schema, double_schema
            )
        self.int_properties = GridProperties(grid, int_schema, IntGridProperty)
        self.double_properties = GridProperties(grid, double_schema, DoubleGridProperty)
        self._inactive_keywords = set(cfg.get('loading.inactive_cell_keywords', []))
        self._multiplier_keywords = set(cfg.get('loading.multiplier_keywords', []))
        self._box_manager = BoxManager(grid)
        self._section: Optional[str] = None
        self._post_processed = set()

        if keywords is not None:
            self.load(keywords)

    @log_operation("load_field_properties")
    def load(self, keywords: Iterable[DeckKeyword]):
        """Apply keywords in order, then run keyword post-processors once."""
        count = 0
        for keyword in keywords:
            self.process_keyword(keyword)
            count += 1
        self._run_post_processors()
        logger.info(
            f"Processed {count} keywords: {len(self.int_properties)} integer and "
            f"{len(self.double_properties)} double properties instantiated"
        )

    def process_keyword(self, keyword: DeckKeyword):
        name = keyword.name
        with keyword_scope(name, keyword.location, self._section):
            if name in SECTION_KEYWORDS:
                self._section = name
                self._box_manager.end_section()
            elif name == 'BOX':
                self._set_input_box(keyword)
            elif name == 'ENDBOX':
                self._box_manager.end_input_box()
            elif name in EDIT_OPERAND_ITEMS or name == 'COPY':
                for record in keyword:
                    self._apply_edit(keyword, record)
            elif self._registry_for(name) is not None:
                self._load_data_keyword(keyword)
            else:
                logger.debug(f"Ignoring keyword {name}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_int_property(self, name: str) -> bool:
        """Whether a supported integer keyword has been instantiated.

        Raises:
            UnsupportedKeywordError: For names outside the integer schema
        """
        self.int_properties.get_keyword_info(name)
        return self.int_properties.has_keyword(name)

    def has_double_property(self, name: str) -> bool:
        self.double_properties.get_keyword_info(name)
        return self.double_properties.has_keyword(name)

    def get_int_property(self, name: str) -> IntGridProperty:
        return self.int_properties.get_keyword(name)

    def get_double_property(self, name: str) -> DoubleGridProperty:
        return self.double_properties.get_keyword(name)

    # ------------------------------------------------------------------
    # Keyword handlers
    # ------------------------------------------------------------------

    def _registry_for(self, name: str) -> Optional[GridProperties]:
        if self.int_properties.supports_keyword(name):
            return self.int_properties
        if self.double_properties.supports_keyword(name):
            return self.double_properties
        return None

    def _property_for(self, keyword: DeckKeyword, field: Optional[str]) -> GridProperty:
        if field is None:
            raise UnsupportedRecordShapeError(
                f"{keyword.name} record without a target keyword at {format_location(keyword.location)}",
                context={'keyword': keyword.name, 'location': keyword.location}
            )
        registry = self._registry_for(field)
        if registry is None:
            raise UnsupportedKeywordError(
                f"{keyword.name}: keyword '{field}' is not a supported grid property "
                f"({format_location(keyword.location)})",
                context={'keyword': field, 'operation': keyword.name, 'location': keyword.location}
            )
        return registry.get_keyword(field)

    def _set_input_box(self, keyword: DeckKeyword):
        record = keyword.get_record(0)
        values = [record.get_value(item) for item in BOX_ITEMS]
        if any(v is None for v in values):
            raise InvalidRangeError(
                f"BOX requires all six bounds at {format_location(keyword.location)}",
                context={'keyword': 'BOX', 'bounds': values, 'location': keyword.location}
            )
        self._box_manager.set_input_box(*(int(v) - 1 for v in values))

    def _load_data_keyword(self, keyword: DeckKeyword):
        prop = self._registry_for(keyword.name).get_keyword(keyword.name)
        box = self._box_manager.active_box()
        prop.load_from_record(
            keyword,
            allow_inactive_cells_only=keyword.name in self._inactive_keywords,
            grid=self._grid,
            box=box,
            multiplier=keyword.name in self._multiplier_keywords,
        )

    def _apply_edit(self, keyword: DeckKeyword, record: DeckRecord):
        box = self._box_manager.box_from_record(record)

        if keyword.name == 'COPY':
            source = self._property_for(keyword, record.get_value('SRC'))
            target = self._property_for(keyword, record.get_value('TARGET'))
            target.copy_from(source, box)
            return

        prop = self._property_for(keyword, record.get_value('FIELD'))
        operand_item = EDIT_OPERAND_ITEMS[keyword.name]
        operand = record.get_value(operand_item)
        if operand is None:
            raise UnsupportedRecordShapeError(
                f"{keyword.name} {prop.keyword_name}: missing {operand_item} "
                f"at {format_location(keyword.location)}",
                context={'keyword': prop.keyword_name, 'operation': keyword.name,
                         'location': keyword.location}
            )

        if keyword.name == 'EQUALS':
            prop.set_scalar(operand, box)
        elif keyword.name == 'ADD':
            prop.add(operand, box)
        elif keyword.name == 'MULTIPLY':
            prop.scale(operand, box)
        elif keyword.name == 'MINVALUE':
            prop.min_value(operand, box)
        elif keyword.name == 'MAXVALUE':
            prop.max_value(operand, box)

        logger.debug(f"{keyword.name} {prop.keyword_name} {operand} on {box!r}")

    def _run_post_processors(self):
        for registry in (self.int_properties, self.double_properties):
            for prop in registry:
                if prop.keyword_name not in self._post_processed:
                    prop.run_post_processor()
                    self._post_processed.add(prop.keyword_name)
