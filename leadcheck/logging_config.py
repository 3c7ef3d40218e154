"""
Logging for the lead service.

Called once from create_app(). LOG_FORMAT picks text or JSON output, LOG_LEVEL
the threshold (default INFO). Records emitted while a request is being served
carry its request id, method and path; handlers may add lead_id, status and
duration_ms through `extra`.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone

from flask import g, has_request_context, request

# Optional record attributes copied into JSON output when present
CONTEXT_FIELDS = ('request_id', 'method', 'path', 'lead_id', 'status', 'duration_ms')

TEXT_FORMAT = '[%(asctime)s] %(levelname)s %(name)s [%(request_id)s] %(message)s'


class RequestContextFilter(logging.Filter):
    """Attach the current Flask request's id, method and path to each record."""

    def filter(self, record):
        if has_request_context():
            request_id = g.get('request_id')
            if request_id:
                record.request_id = request_id
            record.method = request.method
            record.path = request.path
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


# urllib3 logs every PageSpeed connection; sqlalchemy.engine every statement
_NOISY_LOGGERS = [
    'urllib3',
    'sqlalchemy.engine',
    'werkzeug',
    'alembic',
]


def _resolve_level(name):
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(app=None):
    """
    Set up the root logger from LOG_LEVEL / LOG_FORMAT.

    Replaces existing root handlers, so calling it twice is harmless.
    """
    level = _resolve_level(os.getenv('LOG_LEVEL', 'INFO'))
    log_format = os.getenv('LOG_FORMAT', 'text').lower()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())

    if log_format == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            TEXT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S', defaults={'request_id': '-'},
        ))

    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if app is not None:
        app.logger.setLevel(level)
