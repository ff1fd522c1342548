"""Structured JSON logging for the lambda functions

`initialize_logging()` must run in each lambda package's `__init__.py`, before
the handler module creates its logger. Every record becomes one JSON line on
stdout, with `extra` fields merged into the document:

    >>> logger.info('Redirecting client.', extra={'token': 'a9b9f04336', 'event': 'REDIRECT_SUCCESS'})
    {"timestamp": "2026-01-05T12:00:00.000Z", "level": "INFO", "logger": "golinks.lambdas.redirect_url.app",
     "message": "Redirecting client.", "token": "a9b9f04336", "event": "REDIRECT_SUCCESS"}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from golinks.utils.constants import LOG_LEVEL_ENV


# Attributes every LogRecord carries; anything else was passed through `extra`
RESERVED_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        document = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        document.update((key, value) for key, value in vars(record).items() if key not in RESERVED_ATTRS)

        if record.exc_info:
            document['exception'] = self.formatException(record.exc_info)

        # Unknown types (sets, datetimes, models) are logged via str()
        return json.dumps(document, default=str)


def logging_config(level: str) -> dict:
    return {
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
        'root': {'level': level, 'handlers': ['stdout']},
    }


def initialize_logging() -> None:
    """Route all logging through JsonFormatter at the LOG_LEVEL level (default INFO)"""
    logging.config.dictConfig(logging_config(os.getenv(LOG_LEVEL_ENV, 'INFO').upper()))
