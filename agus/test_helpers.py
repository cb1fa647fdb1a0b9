#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Unit testing helpers
#

import io
import json
import uuid
import logging
import contextlib
from typing import Any, Dict, Mapping, Optional, Tuple
from wsgiref.util import setup_testing_defaults

from . import l10n
from .intents import (
    REQUEST_TYPE_INTENT,
    REQUEST_TYPE_LAUNCH,
    REQUEST_TYPE_SESSION_ENDED,
    Request,
    parse_request,
)
from .responses import Response

logger = logging.getLogger(__name__)

REQUEST_TYPES = (REQUEST_TYPE_LAUNCH, REQUEST_TYPE_INTENT, REQUEST_TYPE_SESSION_ENDED)


def _is_request_type(name: str) -> bool:
    """ Request types end with "Request", intent names do not """
    return name in REQUEST_TYPES or name.endswith('Request')


def create_envelope(type_: str,
                    locale: str = None,
                    session: Dict[str, Any] = None,
                    reason: str = None,
                    **slots) -> Dict:
    """ Create request envelope as sent by the platform

        `type_` is either a request type ("LaunchRequest", "SessionEndedRequest", any "*Request")
        or an intent name, in this case an "IntentRequest" is created with `slots`

    :param type_:   Request type or intent name
    :param locale:  Request locale
    :param session: Session attributes (sessionId, new)
    :param reason:  Session end reason (for "SessionEndedRequest")
    :param slots:   Intent slots: name=value
    :return:
    """
    session = session or {}
    request = {
        'type': type_ if _is_request_type(type_) else REQUEST_TYPE_INTENT,
        'requestId': f'amzn1.echo-api.request.{uuid.uuid4()}',
        'locale': locale or 'en-US',
    }

    if request['type'] == REQUEST_TYPE_INTENT:
        request['intent'] = {
            'name': type_,
            'slots': {name: {'name': name, 'value': None if value is None else str(value)}
                      for name, value in slots.items()},
        }

    if request['type'] == REQUEST_TYPE_SESSION_ENDED:
        request['reason'] = reason or 'USER_INITIATED'

    return {
        'version': '1.0',
        'session': {
            'sessionId': session.get('sessionId', 'amzn1.echo-api.session.12345'),
            'new': session.get('new', True),
        },
        'request': request,
    }


def create_request(type_: str, locale: str = None, **kwargs) -> Request:
    """ Create request object, see `create_envelope`

    :param type_:
    :param locale:
    :param kwargs:
    :return:
    """
    return parse_request(create_envelope(type_, locale, **kwargs))


def invoke_request(type_: str, skill=None, **kwargs) -> Response:
    """ Dispatch a request to the skill, **kwargs are passed over to create_request

    :param type_:   Request type or intent name
    :param skill:
    :param kwargs:
    :return:
    """
    from bottle import app

    # If skill not supplied with arguments, get the current default app from stack
    skill = skill or app()
    return skill.dispatcher.dispatch(create_request(type_, **kwargs))


@contextlib.contextmanager
def override_catalog(messages: Mapping[str, Mapping[str, str]], default_locale: str = None, strict: bool = False):
    """ Context manager replacing the process-wide catalog

    :param messages:
    :param default_locale:
    :param strict:
    :return:
    """
    previous = l10n.set_catalog(l10n.Catalog(messages, default_locale, strict))
    try:
        yield l10n.get_catalog()
    finally:
        l10n.set_catalog(previous)


def call_wsgi(app, method: str = 'GET', path: str = '/', body: Any = None,
              content_type: str = 'application/json') -> Tuple[int, Optional[Any]]:
    """ Call WSGI app and return status code and decoded JSON body

    :param app:
    :param method:
    :param path:
    :param body:    dict (sent as JSON), string or bytes
    :param content_type:
    :return:
    """
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode('utf-8')
    body = body or b''

    environ = {
        'REQUEST_METHOD': method,
        'PATH_INFO': path,
        'CONTENT_TYPE': content_type,
        'CONTENT_LENGTH': str(len(body)),
        'wsgi.input': io.BytesIO(body),
    }
    setup_testing_defaults(environ)

    status = []

    def start_response(status_line, headers, exc_info=None):
        status.append(int(status_line.split(' ', 1)[0]))

    data = b''.join(app(environ, start_response))
    try:
        return status[0], json.loads(data) if data else None
    except ValueError:
        return status[0], data.decode('utf-8')
