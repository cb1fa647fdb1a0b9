#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Inbound request model
#

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

# : the request sent when the user opens the skill
REQUEST_TYPE_LAUNCH = 'LaunchRequest'

# : the request carrying a classified intent with slots
REQUEST_TYPE_INTENT = 'IntentRequest'

# : the request sent when the session is closed by the platform
REQUEST_TYPE_SESSION_ENDED = 'SessionEndedRequest'


class InvalidRequestError(Exception):
    """
    Raised when the envelope does not contain a request object.
    """


class Request:
    """ Base class for the inbound requests.

        A request is created once per inbound event and is never modified.

    :ivar type_: the request type tag as sent by the platform
    :ivar locale: the request locale, eg. "en-US"
    :ivar request_id: the request id
    :ivar session_id: the session id (if session is present)
    """

    type_: str = ''

    def __init__(self, locale: str = None, request_id: str = None, session_id: str = None):
        self.locale = locale
        self.request_id = request_id
        self.session_id = session_id

    def dict(self) -> Dict:
        """ Export as dictionary

        :return:
        """
        return dict(
            type=self.type_,
            locale=self.locale,
            request_id=self.request_id,
            session_id=self.session_id,
        )

    def __eq__(self, other):
        return type(self) is type(other) and self.dict() == other.dict()

    def __hash__(self):
        return hash((type(self), self.request_id))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.dict()})'


class LaunchRequest(Request):
    """ User opened the skill without an intent """

    type_ = REQUEST_TYPE_LAUNCH


class IntentRequest(Request):
    """ A classified intent

    :ivar name: intent name
    :ivar slots: read-only mapping of slot name to raw string value (or `None` if slot is empty)
    """

    type_ = REQUEST_TYPE_INTENT

    def __init__(self, name: str, slots: Mapping[str, Optional[str]] = None, **kwargs):
        if not name:
            raise ValueError('Intent name is required.')
        super().__init__(**kwargs)
        self.name = name
        self.slots = MappingProxyType(dict(slots or {}))

    def get_slot(self, name: str, default: Any = None) -> Optional[str]:
        """ Get raw slot value

        :param name:
        :param default:
        :return:
        """
        value = self.slots.get(name)
        return default if value is None else value

    def dict(self) -> Dict:
        return dict(super().dict(), name=self.name, slots=dict(self.slots))


class SessionEndedRequest(Request):
    """ Session closed: user said nothing, exceeded re-prompts, or an error occurred

    :ivar reason: the reason reported by the platform, eg. "USER_INITIATED"
    :ivar error: error object reported by the platform, if any
    """

    type_ = REQUEST_TYPE_SESSION_ENDED

    def __init__(self, reason: str = None, error: Mapping = None, **kwargs):
        super().__init__(**kwargs)
        self.reason = reason
        self.error = dict(error) if error else None

    def dict(self) -> Dict:
        return dict(super().dict(), reason=self.reason, error=self.error)


class UnknownRequest(Request):
    """ Any request type we do not model """

    def __init__(self, type_: str, **kwargs):
        super().__init__(**kwargs)
        self.type_ = type_ or ''


def _parse_slots(slots: Any) -> Dict[str, Optional[str]]:
    """ Convert the platform slots to {name: value}:

            {"cent": {"name": "cent", "value": "0"}} -> {"cent": "0"}

    """
    if not isinstance(slots, dict):
        return {}

    result = {}
    for name, slot in slots.items():
        value = slot.get('value') if isinstance(slot, dict) else slot
        result[name] = None if value is None else str(value)
    return result


def parse_request(envelope: Mapping) -> Request:
    """ Create a request from the inbound envelope

    :param envelope:    the request envelope as sent by the platform
    :return:
    """
    if not isinstance(envelope, Mapping) or not isinstance(envelope.get('request'), Mapping):
        raise InvalidRequestError('No request object in envelope.')

    data = envelope['request']
    session = envelope.get('session') if isinstance(envelope.get('session'), Mapping) else {}

    type_ = data.get('type')
    common = dict(
        locale=data.get('locale'),
        request_id=data.get('requestId'),
        session_id=session.get('sessionId'),
    )
    logger.debug('Request type: %s, locale: %s', type_, common['locale'])

    if type_ == REQUEST_TYPE_LAUNCH:
        return LaunchRequest(**common)

    if type_ == REQUEST_TYPE_INTENT:
        intent = data.get('intent') if isinstance(data.get('intent'), Mapping) else {}
        name = intent.get('name')
        if not name:
            logger.warning('Intent request without intent name, treating as unknown.')
            return UnknownRequest(type_, **common)
        return IntentRequest(name, _parse_slots(intent.get('slots')), **common)

    if type_ == REQUEST_TYPE_SESSION_ENDED:
        return SessionEndedRequest(data.get('reason'), data.get('error'), **common)

    return UnknownRequest(type_, **common)
