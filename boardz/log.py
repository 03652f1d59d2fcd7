"""
Logging setup

setup_logging() is called once at process start and decides where records go:
one-line JSON in production (picked up by the platform log collector),
readable text everywhere else. Services get their logger passed in.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON objects"""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'severity': record.levelname,
            'service': self.service_name,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(service_name: str, log_level: str = 'INFO',
                  environment: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger for the process

    Args:
        service_name: Name reported with every record
        log_level: Minimum level name (DEBUG, INFO, ...)
        environment: 'production' switches to JSON output

    Returns:
        Logger named after the service
    """
    handler = logging.StreamHandler(sys.stdout)
    if environment == 'production':
        handler.setFormatter(JsonFormatter(service_name))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    handler._boardz_handler = True

    root = logging.getLogger()
    # Replace only a handler installed by an earlier call
    for existing in list(root.handlers):
        if getattr(existing, '_boardz_handler', False):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    return logging.getLogger(service_name)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
