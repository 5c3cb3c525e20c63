"""Console formatter showing which deck keyword a message belongs to."""

import logging
from datetime import datetime
from typing import Any, Dict


class HumanFormatter(logging.Formatter):
    """Readable one-line records, e.g.

        2024-01-01 12:00:00 WARNING  [...field_properties] [GRID/EQUALS @ CASE.DATA line 40] ...

    A performance summary and any traceback follow on extra lines.
    """

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.WARNING: '\033[93m',
        logging.ERROR: '\033[91m',
        logging.CRITICAL: '\033[95m',
    }
    RESET = '\033[0m'
    DIM = '\033[2m'

    def __init__(self, use_colors: bool = True, show_context: bool = True,
                 max_name_length: int = 24):
        super().__init__()
        self.use_colors = use_colors
        self.show_context = show_context
        self.max_name_length = max_name_length

    def _paint(self, text: str, color: str) -> str:
        if not self.use_colors or not color:
            return text
        return f"{color}{text}{self.RESET}"

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        fields = [
            self._paint(stamp, self.DIM),
            self._paint(f"{record.levelname:8}", self.LEVEL_COLORS.get(record.levelno, '')),
            self._paint(f"[{self._short_name(record.name)}]", self.DIM),
        ]
        if self.show_context:
            deck = self._deck_position(getattr(record, 'context', None) or {})
            if deck:
                fields.append(deck)
        fields.append(record.getMessage())
        lines = [' '.join(fields)]

        summary = self._performance_summary(getattr(record, 'performance', None) or {})
        if summary:
            lines.append(self._paint(f"  Performance: {summary}", self.DIM))

        tb = getattr(record, 'traceback', None)
        if tb:
            lines.append(tb.rstrip())
        elif record.exc_info:
            lines.append(self.formatException(record.exc_info))

        return '\n'.join(lines)

    @staticmethod
    def _deck_position(context: Dict[str, Any]) -> str:
        keyword = context.get('keyword')
        if not keyword:
            return ''
        section = context.get('section')
        label = f"{section}/{keyword}" if section else keyword
        location = context.get('location')
        return f"[{label} @ {location}]" if location else f"[{label}]"

    def _short_name(self, name: str) -> str:
        limit = self.max_name_length
        if len(name) <= limit:
            return name
        tail = name.rsplit('.', 1)[-1]
        if len(tail) <= limit - 3:
            return f"...{tail}"
        return f"{name[:limit - 3]}..."

    @staticmethod
    def _performance_summary(perf: Dict[str, Any]) -> str:
        parts = []
        if 'duration_seconds' in perf:
            parts.append(f"{perf['duration_seconds']:.3f}s")
        if 'cells_per_second' in perf:
            parts.append(f"{perf['cells_per_second']:.1f} cells/s")
        if 'status' in perf:
            parts.append(str(perf['status']))
        return ' | '.join(parts)
