#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Logging: GELF (JSON lines) for production, plain text for humans
#

import os
import time
import json
import logging
from traceback import format_exc
from typing import Dict

from . import tracing

# Default log level: DEBUG
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")

# Default log format: GELF
LOG_FORMAT = os.environ.get('LOG_FORMAT', 'gelf')

# Maximal length of a string to log
LOG_ENTRY_MAX_STRING = 253

# Envelope keys holding secrets that never go to the log
SECRET_KEYS = ('apiAccessToken', 'accessToken', 'consentToken')

# Plain text format, trace id is added by TraceIdFilter
HUMAN_FORMAT = '%(asctime)s %(levelname)-8s [%(trace_id)s] %(name)s: %(message)s'

logging.basicConfig(level=LOG_LEVEL)


def _active_ids():
    """ (trace_id, span_id) of the active span or (None, None) """
    span = tracing.global_tracer().active_span
    return (getattr(span, 'trace_id', None), getattr(span, 'span_id', None)) if span else (None, None)


class GELFFormatter(logging.Formatter):
    """ Graylog Extended Format (GELF): one JSON object per line
    """

    def format(self, record):
        tracer = tracing.global_tracer()
        trace_id, span_id = _active_ids()

        line = {
            # Timestamp in milliseconds
            "@timestamp": int(round(time.time() * 1000)),
            "level": record.levelname,
            "process": os.getpid(),
            "thread": str(record.thread),
            "logger": record.name,
            "message": record.getMessage(),
            "traceId": trace_id,
            "spanId": span_id,
            # Service name
            "tenant": getattr(tracer, 'service_name', tracing.get_service_name())
        }
        if record.exc_info:
            line['_traceback'] = format_exc()

        return json.dumps(line)


class TraceIdFilter(logging.Filter):
    """ Adds `trace_id` attribute to records for the plain text format """

    def filter(self, record):
        record.trace_id = _active_ids()[0] or '-'
        return True


def _preset(formatter: Dict, level: str = None) -> Dict:
    """ dictConfig for the root logger writing to stderr with `formatter` """
    level = level or LOG_LEVEL
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'standard': formatter},
        'filters': {'trace_id': {'()': TraceIdFilter}},
        'handlers': {
            'default': {
                'level': level,
                'formatter': 'standard',
                'filters': ['trace_id'],
                'class': 'logging.StreamHandler',
            },
        },
        'loggers': {
            '': {'handlers': ['default'], 'level': level, 'propagate': True},
        },
    }


conf = {
    'gelf': _preset({'()': GELFFormatter}),
    'human': _preset({'format': HUMAN_FORMAT}),
}

#
#   Under Windows we're going to run without Gunicorn anyway
#
try:
    from gunicorn.glogging import Logger

    class GunicornLogger(Logger):
        """ Gunicorn error and access logs in GELF format
        """

        def setup(self, cfg):
            self.loglevel = getattr(logging, LOG_LEVEL)
            self.error_log.setLevel(self.loglevel)
            self.access_log.setLevel(logging.INFO)

            self.error_log.name = 'gunicorn'
            self._set_handler(self.error_log, cfg.errorlog, GELFFormatter())
            self._set_handler(self.access_log, cfg.errorlog, GELFFormatter())

# Handle `no module named 'fcntl'`
except ModuleNotFoundError:         # pragma: no cover
    pass


###############################################################################
#                                                                             #
#  Helper functions: mask secrets, limit log message size                     #
#                                                                             #
###############################################################################

def _trim(s):
    """ Trim long string to LOG_ENTRY_MAX_STRING(+3) length """
    return s if not isinstance(s, str) or len(s) < LOG_ENTRY_MAX_STRING else s[:LOG_ENTRY_MAX_STRING] + '...'


def _copy(d):
    """ Copy the envelope: secrets masked, long strings trimmed """
    if isinstance(d, dict):
        return {k: '*****' if k in SECRET_KEYS else _copy(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_copy(v) for v in d]
    return _trim(d)


def prepare_for_logging(envelope):
    """ Mask access tokens and trim long strings before logging a request envelope

    :param envelope:
    :return:    a copy, the envelope itself is untouched
    """
    if not isinstance(envelope, dict):
        return envelope

    return _copy(envelope)
