"""JSON logging for the shortener Lambdas

Each handler package calls `initialize_logging()` on import, so every record
emitted during an invocation lands on stdout as a single JSON line that
CloudWatch Logs Insights can query by field. Keyword data passed through
`extra=` becomes top-level fields:

    >>> logger.warning('Short id collision. Retrying with a new candidate.',
    ...                extra={'shortId': 'Xk3_9a', 'attempt': 1, 'maxAttempts': 5})
    {"timestamp": "2025-12-26T12:00:00.000Z", "level": "WARNING", "logger": "shorturl.service",
     "message": "Short id collision. Retrying with a new candidate.", "shortId": "Xk3_9a",
     "attempt": 1, "maxAttempts": 5}

The root level comes from LOG_LEVEL (default INFO).
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shorturl.constants import Defaults, ENV


# Attributes every LogRecord carries; anything else on a record came from `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


def _timestamp(record: logging.LogRecord) -> str:
    """ISO-8601 UTC time of the record with millisecond precision and a 'Z' suffix."""
    created = datetime.fromtimestamp(record.created, tz=UTC)
    return created.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, its `extra` fields and its traceback as one JSON object"""

    def format(self, record: logging.LogRecord) -> str:
        fields = {
            'timestamp': _timestamp(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            fields['exception'] = self.formatException(record.exc_info)

        fields.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)
        return json.dumps(fields, default=str)


def initialize_logging() -> None:
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': os.getenv(ENV.App.LOG_LEVEL, Defaults.LOG_LEVEL).upper(),
                'handlers': ['stdout'],
            },
        }
    )
