"""Terminal output for interactive deck processing."""

import logging
import os
import sys
from typing import Optional

from ..formatters import HumanFormatter


def stream_supports_color(stream) -> bool:
    """ANSI colours only on a real terminal, honouring NO_COLOR and TERM=dumb."""
    isatty = getattr(stream, 'isatty', None)
    if isatty is None or not isatty():
        return False
    return not os.environ.get('NO_COLOR') and os.environ.get('TERM', '') != 'dumb'


class ConsoleHandler(logging.StreamHandler):
    """StreamHandler (stderr by default) using HumanFormatter."""

    def __init__(self, stream=None,
                 use_colors: Optional[bool] = None,
                 show_context: bool = True,
                 level: int = logging.INFO):
        stream = stream if stream is not None else sys.stderr
        super().__init__(stream)
        if use_colors is None:
            use_colors = stream_supports_color(stream)
        self.setFormatter(HumanFormatter(use_colors=use_colors, show_context=show_context))
        self.setLevel(level)
