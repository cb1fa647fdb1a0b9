#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Wrapper around Bottle
#

import functools
import importlib
from typing import Callable, Dict, Mapping
import logging.config

import bottle
from bottle import get, post, error, request, response, app, HTTPResponse    # noqa: F401

from . import l10n
from . import intents
from . import responses
from .config import config
from .dispatcher import Dispatcher
from .predicates import Predicate

logger = logging.getLogger(__name__)

# Module with the skill implementation
DEFAULT_MODULE = 'impl'


def initialize(config_file: str = None, dev: bool = False, module: str = None) -> 'Skill':
    """ Initialize the app

          * configure logging
          * load the handlers
          * load the translations
          * setup the routes
          * return default app

    :param config_file: read configuration from file
    :param dev:         initialize development mode
    :param module:      import the handlers from module, if set
    :return:
    """

    if config_file:
        config.read_conf(config_file)

    configure_logging()

    if module:
        importlib.import_module(module)

    skill = app()
    if not skill.get_handlers():
        raise RuntimeError("No request handlers loaded. Check the log messages for import errors...")

    l10n.set_catalog(l10n.load_catalog())

    from . import routes      # Add standard routes

    if dev:
        set_dev_mode()

    # Copy configuration to Skill instance
    skill.config.load_dict({section: dict(config.items(section)) for section in config.sections()})
    return skill


def configure_logging():
    """ Configure logging """

    from .tracing import initialize_tracer
    from . import log

    initialize_tracer()
    logging.config.dictConfig(log.conf[log.LOG_FORMAT])

    if log.LOG_FORMAT == 'gelf':
        config.set('http', 'logger_class', 'agus.log.GunicornLogger')

    # as bottle writes to stdout/stderr directly, patch it
    bottle_logger = logging.getLogger('bottle')
    bottle._stdout = lambda msg: bottle_logger.debug(msg)
    bottle._stderr = lambda msg: bottle_logger.info(msg)


def set_dev_mode():
    """ Setup `development` mode to run the skill """

    # Start builtin WSGIRefServer
    logger.warning("Starting bottle with WSGIRefServer. Do not use in production!")
    config.set('http', 'server', 'wsgiref')
    config.set('http', 'host', 'localhost')


class Skill(bottle.Bottle):
    """ Bottle app with a request dispatcher """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.dispatcher = Dispatcher()

    def get_handlers(self):
        return self.dispatcher.handlers

    def request_handler(self, predicate: Predicate, name: str = None) -> Callable:
        """ Decorator to define request handler

        :param predicate:   a function telling if the handler can take the request
        :param name:        handler name
        :return:
        """
        return self.dispatcher.request_handler(predicate, name)

    def error_handler(self, func: Callable) -> Callable:
        """ Decorator to define the error handler

        :param func:
        :return:
        """
        return self.dispatcher.error_handler(func)

    def invoke(self, envelope: Mapping) -> Dict:
        """ Parse the envelope, dispatch the request and return the response envelope

        :param envelope:
        :return:
        """
        req = intents.parse_request(envelope)
        return self.dispatcher.dispatch(req).dict()

    def test_request(self, type_: str, **kwargs) -> responses.Response:
        """ Test a request handler

        :param type_:   Request type or intent name
        :param kwargs:  Locale and slots
        :return:
        """
        from .test_helpers import invoke_request
        return invoke_request(type_, skill=self, **kwargs)

    def run(self, **kwargs):
        """ Start the skill service

        :param kwargs:
        :return:
        """

        # Overwrite config arguments with function arguments
        kwargs = dict(config.items('http'), **kwargs)

        logger.info('Starting server')
        logger.debug('with arguments: %s', kwargs)

        super().run(**kwargs)


def run(config_file: str = None, dev: bool = False, module: str = None, **kwargs):
    """ Init and start the skill service """

    skill = initialize(config_file=config_file, dev=dev, module=module)
    skill.run(**kwargs)


def lambda_handler(event: Mapping, context=None) -> Dict:
    """ Serverless entry point: handle the request envelope and return the response envelope

    :param event:   request envelope
    :param context: runtime context (unused)
    :return:
    """
    return app().invoke(event)


def make_default_app_wrapper(name):
    """ Decorator to apply a property to default bottle app """

    @functools.wraps(getattr(Skill, name))
    def wrapper(*args, **kwargs):   # NOSONAR
        return getattr(app(), name)(*args, **kwargs)
    return wrapper


request_handler = make_default_app_wrapper('request_handler')
error_handler = make_default_app_wrapper('error_handler')
test_request = make_default_app_wrapper('test_request')

app.push(Skill())
