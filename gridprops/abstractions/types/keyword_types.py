# gridprops/abstractions/types/keyword_types.py
"""Keyword schema type definitions."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import numpy as np


@dataclass(frozen=True)
class SupportedKeywordInfo:
    """Schema entry for one grid property keyword."""
    keyword: str
    default_value: Any
    dimension: str = "1"
    # Called with the data array once loading has finished
    post_processor: Optional[Callable[[np.ndarray], None]] = None

    @classmethod
    def from_dict(cls, entry: Dict[str, Any]) -> 'SupportedKeywordInfo':
        """Create from a config entry ``{'name': ..., 'default': ..., 'dimension': ...}``."""
        return cls(
            keyword=entry['name'],
            default_value=entry.get('default', 0),
            dimension=entry.get('dimension', '1'),
        )
