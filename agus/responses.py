#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Skill responses
#

import json
from typing import Dict, Optional

from bottle import HTTPResponse

from . import l10n
from .__version__ import __envelope_version__

# : the type for responses that will ask the user for more input (session stays open)
RESPONSE_TYPE_ASK = 'ASK'

# : the type for responses that will return information to the user
RESPONSE_TYPE_TELL = 'TELL'

# : speech output type
SPEECH_TYPE_PLAIN_TEXT = 'PlainText'


def _speech(text: str) -> Dict:
    return {'type': SPEECH_TYPE_PLAIN_TEXT, 'text': str(text)}


class Card:
    """ Simple card to be displayed in the companion app """

    TYPE_SIMPLE = 'Simple'

    def __init__(self, title: str, content: str, type_: str = None):
        if not title:
            raise ValueError('No title specified')

        self.type_ = type_ or self.TYPE_SIMPLE
        self.title = title
        self.content = content

    def dict(self) -> Dict:
        """ Export as dictionary

        :return:
        """
        return {
            'type': self.type_,
            'title': str(self.title),
            'content': str(self.content or ''),
        }


class Response:
    """ A response to the platform.

        The class will handle responses of the types :py:const:`RESPONSE_TYPE_ASK` and :py:const:`RESPONSE_TYPE_TELL`.
        For transport level errors see :py:class:`ErrorResponse`.

    :ivar text: text spoken to the user (empty text produces no speech output)
    :ivar type_: the type of the response, can be :py:const:`RESPONSE_TYPE_ASK` or :py:const:`RESPONSE_TYPE_TELL`
    :ivar reprompt: text spoken if the user does not answer an ASK response, defaults to `text`
    :ivar card: This can be ``None`` or a :py:class:`Card` presented in the companion app of the user
    :ivar end_session: explicit end-of-session flag, ``None`` leaves it to the platform.
        ASK responses always keep the session open.
    """

    def __init__(self, text: str = '', type_: str = None, reprompt: str = None,
                 card: Card = None, end_session: Optional[bool] = None):

        type_ = type_ or RESPONSE_TYPE_TELL
        if type_ not in (RESPONSE_TYPE_TELL, RESPONSE_TYPE_ASK):
            raise ValueError(f'Type {type_} is not a valid type.')
        if type_ == RESPONSE_TYPE_ASK and end_session:
            raise ValueError('ASK response cannot end the session.')

        self.text = text
        self.type_ = type_
        self.reprompt = (reprompt or text) if type_ == RESPONSE_TYPE_ASK else None
        self.card = card
        self.end_session = False if type_ == RESPONSE_TYPE_ASK else end_session

    @property
    def key(self) -> Optional[str]:
        """ Message key of the spoken text, if it was translated """
        return self.text.key if isinstance(self.text, l10n.Message) else None

    def dict(self) -> Dict:
        """ Dump the response into the envelope expected by the platform.
        """
        response = {}

        # Optional properties
        if self.text:
            response['outputSpeech'] = _speech(self.text)
        if self.reprompt:
            response['reprompt'] = {'outputSpeech': _speech(self.reprompt)}
        if self.card:
            response['card'] = self.card.dict()
        if self.end_session is not None:
            response['shouldEndSession'] = self.end_session

        return {'version': __envelope_version__, 'response': response}

    def json(self) -> str:
        return json.dumps(self.dict())

    def as_response(self) -> HTTPResponse:
        """ Converts the instance to an actual :py:class:HTTPResponse instance
        """
        return HTTPResponse(self.json(), 200, {'Content-type': 'application/json'})

    def __repr__(self) -> str:
        """ String representation

        :return:
        """
        return str(self.__dict__)


def tell(*args, **kwargs) -> Response:
    """ Wrapper to return Response of RESPONSE_TYPE_TELL type

    :param args:
    :param kwargs:
    :return:
    """
    kwargs.update(type_=RESPONSE_TYPE_TELL)
    return Response(*args, **kwargs)


def ask(*args, **kwargs) -> Response:
    """ Wrapper to return Response of RESPONSE_TYPE_ASK type

    :param args:
    :param kwargs:
    :return:
    """
    kwargs.update(type_=RESPONSE_TYPE_ASK)
    return Response(*args, **kwargs)


def empty() -> Response:
    """ Response without speech output """
    return Response()


class ErrorResponse:
    """
    A transport level error response, returned by the HTTP routes if the request could not be dispatched.

    The following combinations are defined:

    **not found**
      ``{"code": 1, "text": "Not Found"}`` HTTP code: *404*

    **malformed envelope**
      ``{"code": 3, "text": "Bad request"}`` HTTP code: *400*

    **unhandled exception**
      ``{"code": 999, "text": "internal error"}`` HTTP code: *500*

    :ivar code: The error code
    :ivar text: the error text
    """
    code_map = {
        1: 404,
        3: 400,
        999: 500
    }

    def __init__(self, code: int, text: str):
        self.code = code
        self.text = text

    @property
    def status(self) -> int:
        return self.code_map.get(self.code, 500)

    def json(self) -> str:
        """ Serialize to JSON

        :return:
        """
        data = {"code": self.code, "text": self.text}
        return json.dumps(data)

    def as_response(self) -> HTTPResponse:
        """ Send error as HTTP response

        :return:
        """
        return HTTPResponse(self.json(), self.status, {'Content-type': 'application/json'})
