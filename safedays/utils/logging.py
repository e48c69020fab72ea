"""Shared logging configuration."""
import os
import sys
import json
import traceback
from aws_lambda_powertools import Logger

from safedays import __version__

def format_exception(exc_info):
    """Format exception info into a single line."""
    if exc_info is True:  # logger.exception passes exc_info=True
        exc_info = sys.exc_info()

    if exc_info and isinstance(exc_info, tuple) and len(exc_info) == 3 and exc_info[0] is not None:
        trace = ''.join(traceback.format_exception(*exc_info))
        return trace.replace('\n', ' | ').strip()
    return None

class SingleLineLogger(Logger):
    """Logger that keeps tracebacks on a single line of JSON output."""

    def exception(self, message, *args, **kwargs):
        """Log an error with its traceback flattened into the `exception` key."""
        exc_info = kwargs.pop('exc_info', True)
        extra = kwargs.pop('extra', {})
        extra['exception'] = format_exception(exc_info)
        kwargs['exc_info'] = False
        kwargs['extra'] = extra
        super().exception(message, *args, **kwargs)

logger = SingleLineLogger(
    service="safedays",
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    json_serializer=json.dumps,
    use_rfc3339=True
)

logger.append_keys(
    data_file=os.environ.get('SAFEDAYS_DATA_FILE'),
    version=__version__
)
