"""
Grid property containers for reservoir simulation decks.

This package builds validated per-cell property arrays from already-parsed
deck records, applies box-scoped edits (EQUALS, ADD, MULTIPLY, MINVALUE,
MAXVALUE, COPY) in deck order and tracks which cells still hold their
default value.
"""

__version__ = "1.0.0"
__description__ = "Grid-indexed property containers for reservoir simulation decks"

# Note: Submodules are imported explicitly by callers; importing the package
# must stay free of config discovery and logging setup.

__all__ = [
    '__version__',
    '__description__',
]
