# gridprops/abstractions/types/__init__.py
"""Type definitions for the abstractions layer."""

# Deck record types
from .deck_types import KeywordLocation, DeckItem, DeckRecord, DeckKeyword, expand_repeat_tokens

# Keyword schema types
from .keyword_types import SupportedKeywordInfo

__all__ = [
    # Deck
    'KeywordLocation', 'DeckItem', 'DeckRecord', 'DeckKeyword', 'expand_repeat_tokens',

    # Keyword schema
    'SupportedKeywordInfo',
]
