#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Bottle route definitions
#

import logging
from json import dumps, JSONDecodeError

from bottle import HTTPError

from .__version__ import __version__
from .config import config
from .intents import InvalidRequestError
from .l10n import get_catalog
from .responses import ErrorResponse
from .skill import app, get, post, request, response, error

from . import log, tracing

logger = logging.getLogger(__name__)


def api_base():
    """ Get API base """
    return config.get('skill', 'api_base', fallback=f"/v1/{config.get('skill', 'name')}")


@get(f'{api_base()}/info')
def info():
    """ Get skill info endpoint

        returns basic skill info:
            - skill id
            - skill and SDK versions
            - supported locales
    """

    with tracing.start_active_span('info', request):
        logger.debug('Handling info request.')

        try:
            response.content_type = 'application/json'
            data = {
                'skillId': config.get('skill', 'id', fallback=config.get('skill', 'name')),
                'skillVersion': f"{config.get('skill', 'version')} {__version__}",
                'supportedLocales': get_catalog().locales(),
                'handlers': [handler.name for handler in app().get_handlers()],
            }
            logger.debug('Info request result: %s', data)
            return dumps(data)

        except Exception:
            logger.exception('Internal error.')
            return ErrorResponse(999, 'internal error').as_response()


@post(api_base())
def invoke():
    """ Invoke endpoint:

        returns the response envelope or ErrorResponse
    """

    with tracing.start_active_span('invoke', request):
        logger.debug('Handling skill request.')

        try:
            envelope = request.json
            logger.debug('Request data: %s', log.prepare_for_logging(envelope))
            result = app().invoke(envelope)
            logger.debug('Skill response: %s', result)
            response.content_type = 'application/json'
            return dumps(result)

        except (InvalidRequestError, JSONDecodeError, HTTPError):
            logger.exception('Bad request.')
            return ErrorResponse(3, 'Bad request').as_response()
        except Exception:
            logger.exception('Internal error.')
            return ErrorResponse(999, 'internal error').as_response()


@get('/k8s/liveness')
def liveness():
    """ Liveness probe: the process is up """
    response.content_type = 'application/json'
    return dumps({'status': 'alive'})


@get('/k8s/readiness')
def readiness():
    """ Readiness probe: handlers and translations are loaded """
    ready = bool(app().get_handlers()) and bool(get_catalog().locales())
    if not ready:
        logger.warning('Not ready: handlers=%d', len(app().get_handlers()))
        response.status = 503
    response.content_type = 'application/json'
    return dumps({'status': 'ready' if ready else 'not ready'})


@error(400)
def json_400(err):
    """ Bad request """

    logger.warning('400 raised, returning: bad request.')
    logger.debug('Error: %s', err)
    return ErrorResponse(3, 'Bad request!').as_response()


@error(404)
def json_404(err):
    """ Not found """

    logger.warning('404 raised, returning: not found.')
    logger.debug('Error: %s', err)
    return ErrorResponse(1, 'Not Found!').as_response()


@error(500)
def json_500(err):
    """ Internal server error """

    logger.warning('500 error raised, returning: internal error.')
    logger.debug('Error: %s', err)
    return ErrorResponse(999, 'internal error').as_response()
