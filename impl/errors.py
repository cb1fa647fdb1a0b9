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

from agus import skill, Request, Response, ask
from agus.l10n import Translator

logger = logging.getLogger(__name__)


@skill.error_handler
def error_handler(request: Request, _: Translator, error: Exception) -> Response:
    """ Any failure ends up here: apologize in the request language and keep the session open

    :return:        Response
    """
    logger.error('Error handled: %s (%s)', repr(error), type(error).__name__)
    msg = _('ERROR_MESSAGE')
    return ask(msg, reprompt=msg)
