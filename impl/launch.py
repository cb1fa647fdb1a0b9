#
# voice-skill-sdk
#
# (C) 2020, Magenta Hypercube, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#
#
from agus import skill, Response, ask
from agus.intents import REQUEST_TYPE_LAUNCH, LaunchRequest
from agus.l10n import Translator
from agus.predicates import is_request_type


@skill.request_handler(is_request_type(REQUEST_TYPE_LAUNCH))
def launch(request: LaunchRequest, _: Translator) -> Response:
    """ User opened the skill: welcome and ask which conversion to do

    :return:        Response
    """
    msg = _('WELCOME_MESSAGE')
    return ask(msg, reprompt=msg)
