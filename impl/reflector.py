#
# voice-skill-sdk
#
# (C) 2020, Magenta Hypercube, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#
#
from agus import skill, Response, tell
from agus.intents import IntentRequest
from agus.l10n import Translator
from agus.predicates import is_intent_except

from .builtin import FALLBACK_INTENT


# Must stay the last intent handler: it takes every intent nobody else did
@skill.request_handler(is_intent_except(FALLBACK_INTENT))
def intent_reflector(request: IntentRequest, _: Translator) -> Response:
    """ Debugging aid: repeat the intent name back to the user

    :return:        Response
    """
    return tell(f'You just triggered {request.name}')
