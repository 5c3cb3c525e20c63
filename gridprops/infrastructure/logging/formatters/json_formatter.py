"""JSON lines formatter for deck processing logs."""

import json
import logging
import traceback
from datetime import datetime

# Context fields promoted to the top level of each JSON line
DECK_FIELDS = ('keyword', 'section', 'location')


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Deck keyword, section and location sit next to the message so a log file
    can be filtered per keyword without unpacking ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        context = dict(getattr(record, 'context', None) or {})

        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for name in DECK_FIELDS:
            if name in context:
                entry[name] = context.pop(name)
        entry['source'] = f"{record.module}:{record.funcName}:{record.lineno}"

        if context:
            entry['context'] = context
        if getattr(record, 'performance', None):
            entry['performance'] = record.performance

        tb = getattr(record, 'traceback', None)
        if not tb and record.exc_info:
            tb = ''.join(traceback.format_exception(*record.exc_info))
        if tb:
            entry['traceback'] = tb

        return json.dumps(entry, separators=(',', ':'), default=str)
