# gridprops/abstractions/types/deck_types.py
"""Already-parsed deck record types.

Values are assumed to be unit converted. A value the deck left defaulted
(``1*``) is kept as ``None`` with its ``defaulted`` flag set, so it stays
distinguishable from an explicit zero.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class KeywordLocation:
    """Where a keyword was read from."""
    filename: str
    lineno: int

    def __str__(self) -> str:
        return f"{self.filename} line {self.lineno}"


def expand_repeat_tokens(tokens: Iterable[Any],
                         value_type: Callable[[Any], Any] = float) -> Tuple[List[Any], List[bool]]:
    """Expand ``N*value`` and ``N*`` tokens into values and defaulted flags.

    Non-string tokens are taken as explicit values.

    Returns:
        (values, defaulted) with ``None`` in place of each defaulted value
    """
    values: List[Any] = []
    defaulted: List[bool] = []

    for token in tokens:
        if isinstance(token, str) and '*' in token:
            count_str, _, value_str = token.partition('*')
            count = int(count_str) if count_str else 1
            if count < 1:
                raise ValueError(f"Invalid repeat count in token '{token}'")
            if value_str == '':
                values.extend([None] * count)
                defaulted.extend([True] * count)
            else:
                value = value_type(value_str)
                values.extend([value] * count)
                defaulted.extend([False] * count)
        else:
            values.append(value_type(token))
            defaulted.append(False)

    return values, defaulted


@dataclass
class DeckItem:
    """One named item of a record, possibly holding many values."""
    name: str
    values: List[Any] = field(default_factory=list)
    defaulted: List[bool] = field(default_factory=list)

    def __post_init__(self):
        if not self.defaulted:
            self.defaulted = [v is None for v in self.values]
        if len(self.defaulted) != len(self.values):
            raise ValueError(
                f"Item '{self.name}': {len(self.values)} values but "
                f"{len(self.defaulted)} defaulted flags"
            )

    @classmethod
    def from_tokens(cls, name: str, tokens: Iterable[Any],
                    value_type: Callable[[Any], Any] = float) -> 'DeckItem':
        values, defaulted = expand_repeat_tokens(tokens, value_type)
        return cls(name=name, values=values, defaulted=defaulted)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, index: int = 0) -> Any:
        return self.values[index]

    def default_applied(self, index: int = 0) -> bool:
        return self.defaulted[index]

    def all_defaulted(self) -> bool:
        return all(self.defaulted)


@dataclass
class DeckRecord:
    """Ordered items of one slash-terminated record."""
    items: List[DeckItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[DeckItem]:
        return iter(self.items)

    def __getitem__(self, key: Union[int, str]) -> DeckItem:
        return self.get_item(key)

    def has_item(self, name: str) -> bool:
        return any(item.name == name for item in self.items)

    def get_item(self, key: Union[int, str]) -> DeckItem:
        if isinstance(key, int):
            return self.items[key]
        for item in self.items:
            if item.name == key:
                return item
        available = [item.name for item in self.items]
        raise KeyError(f"Item '{key}' not found in record. Available: {available}")

    def get_value(self, name: str, default: Any = None) -> Any:
        """First value of an item, or ``default`` if missing or defaulted."""
        if not self.has_item(name):
            return default
        item = self.get_item(name)
        if len(item) == 0 or item.default_applied(0):
            return default
        return item.get(0)


@dataclass
class DeckKeyword:
    """A keyword block: name, records and source location."""
    name: str
    records: List[DeckRecord] = field(default_factory=list)
    location: Optional[KeywordLocation] = None
    data_keyword: bool = False

    @classmethod
    def data(cls, name: str, tokens: Sequence[Any],
             value_type: Callable[[Any], Any] = float,
             location: Optional[KeywordLocation] = None) -> 'DeckKeyword':
        """Build a full-grid array keyword (one record, one item)."""
        item = DeckItem.from_tokens('data', tokens, value_type)
        return cls(name=name, records=[DeckRecord([item])], location=location, data_keyword=True)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[DeckRecord]:
        return iter(self.records)

    def get_record(self, index: int) -> DeckRecord:
        return self.records[index]
