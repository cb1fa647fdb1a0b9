#
# voice-skill-sdk
#
# (C) 2020, Magenta Hypercube, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#
#
import logging

from agus import skill, Response, ask, tell, empty
from agus.intents import REQUEST_TYPE_SESSION_ENDED, IntentRequest, SessionEndedRequest
from agus.l10n import Translator
from agus.predicates import is_intent_name, is_request_type

#
# Platform built-in intents
#

HELP_INTENT = 'AMAZON.HelpIntent'
CANCEL_INTENT = 'AMAZON.CancelIntent'
STOP_INTENT = 'AMAZON.StopIntent'
FALLBACK_INTENT = 'AMAZON.FallbackIntent'

logger = logging.getLogger(__name__)


@skill.request_handler(is_intent_name(HELP_INTENT))
def help_handler(request: IntentRequest, _: Translator) -> Response:
    msg = _('HELP_MESSAGE')
    return ask(msg, reprompt=msg)


@skill.request_handler(is_intent_name(CANCEL_INTENT, STOP_INTENT))
def cancel_and_stop_handler(request: IntentRequest, _: Translator) -> Response:
    """ Say goodbye, no reprompt: the session is over """
    return tell(_('GOODBYE_MESSAGE'), end_session=True)


@skill.request_handler(is_intent_name(FALLBACK_INTENT))
def fallback_handler(request: IntentRequest, _: Translator) -> Response:
    """ The utterance did not map to any intent: apologize and let the user try again """
    msg = _('FALLBACK_MESSAGE')
    return ask(msg, reprompt=msg)


@skill.request_handler(is_request_type(REQUEST_TYPE_SESSION_ENDED))
def session_ended_handler(request: SessionEndedRequest, _: Translator) -> Response:
    """ Nothing to say: log the reason and return an empty response """
    logger.info('Session ended: %s', request.dict())
    if request.error:
        logger.warning('Session ended with error: %s', request.error)
    return empty()
