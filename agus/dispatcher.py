#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Request dispatcher: ordered (predicate, handler) registrations and a single error handler
#

import logging
from typing import Any, Callable, List, Optional

from . import l10n
from .intents import Request
from .predicates import Predicate
from .responses import Response, ask
from .tracing import start_span

logger = logging.getLogger(__name__)

# Message spoken by the built-in error handler
ERROR_MESSAGE = 'ERROR_MESSAGE'

Implementation = Callable[[Request, l10n.Translator], Any]
ErrorImplementation = Callable[[Request, l10n.Translator, Exception], Any]


class UnmatchedRequestError(Exception):
    """
    Raised when no registered predicate matches the request.
    """

    def __init__(self, request: Request):
        self.request = request
        super().__init__(f'No handler for {request!r}')


def _to_response(result: Any, name: str) -> Response:
    """ Check the handler result: a `Response` is returned as is, a string becomes a TELL response

    :param result:
    :param name:    handler name (for logging)
    :return:
    """
    if isinstance(result, Response):
        logger.debug('Result is of type %s. Returning it.', type(result))
        return result
    if isinstance(result, str):
        logger.debug('Result is a string. Returning it as a TELL response.')
        return Response(result)

    logger.error('Unknown return type %s when calling %s.', type(result), name)
    raise ValueError(f'Unknown return value from {name}: {type(result)}')


class Handler:
    """ A registered request handler: the predicate deciding whether the handler
        can take the request, and the implementation to call.

    """
    name: str
    predicate: Predicate
    implementation: Implementation

    def __init__(self, predicate: Predicate, implementation: Implementation, name: str = None):
        if not callable(predicate):
            raise ValueError('Predicate is required.')
        if not implementation or not callable(implementation):
            raise ValueError('Implementation is required.')

        self.name = name or implementation.__name__
        self.predicate = predicate
        self.implementation = implementation

    def can_handle(self, request: Request) -> bool:
        return bool(self.predicate(request))

    def __call__(self, request: Request, translator: l10n.Translator) -> Response:
        """ Call the implementation with request and translator

        :param request:
        :param translator:
        :return:
        """
        with start_span(f'handler_call: {self.name}'):
            logger.info('Calling handler: %s', self.name)
            logger.debug('Calling %s with request: %s', self.name, repr(request))
            result = self.implementation(request, translator)
            return _to_response(result, self.name)

    def dict(self):
        return dict(
            name=self.name,
            predicate=self.predicate.__name__,
            implementation=self.implementation.__name__,
        )

    def __repr__(self) -> str:
        return str(self.dict())


def default_error_handler(request: Request, translator: l10n.Translator, error: Exception) -> Response:
    """ Last resort: apologize and ask the user to try again """

    speak_output = translator(ERROR_MESSAGE)
    return ask(speak_output)


class Dispatcher:
    """ Dispatches a request to the first handler whose predicate matches:

            dispatcher = Dispatcher()

            @dispatcher.request_handler(is_request_type('LaunchRequest'))
            def launch(request, _):
                return ask(_('WELCOME_MESSAGE'))

        Registration order is priority order.
        Any exception is passed to exactly one error handler that produces the response.
    """

    def __init__(self, catalog: l10n.Catalog = None):
        self.catalog = catalog
        self.handlers: List[Handler] = []
        self.request_interceptors: List[Callable[[Request], None]] = []
        self.response_interceptors: List[Callable[[Request, Response], None]] = []
        self._error_handler: ErrorImplementation = default_error_handler

    def add_handler(self, predicate: Predicate, implementation: Implementation, name: str = None) -> Handler:
        """ Append a handler to the registrations

        :param predicate:       a function telling if the handler can take the request
        :param implementation:  handler implementation: `(request, translator) -> Response`
        :param name:            handler name, defaults to implementation's name
        :return:
        """
        handler = Handler(predicate, implementation, name)
        if any(each.name == handler.name for each in self.handlers):
            raise ValueError(f'Duplicate handler {handler.name} with implementation {implementation}')
        self.handlers.append(handler)
        logger.debug('Registered handler #%d: %s', len(self.handlers), handler)
        return handler

    def request_handler(self, predicate: Predicate, name: str = None) -> Callable:
        """ Decorator to register a request handler

        :param predicate:
        :param name:
        :return:
        """
        def decorator(func):
            self.add_handler(predicate, func, name)
            return func
        return decorator

    def error_handler(self, func: ErrorImplementation) -> ErrorImplementation:
        """ Decorator to set the error handler: `(request, translator, error) -> Response`

        :param func:
        :return:
        """
        logger.debug('Error handler set to %s', func.__name__)
        self._error_handler = func
        return func

    def add_request_interceptor(self, func: Callable[[Request], None]):
        self.request_interceptors.append(func)
        return func

    def add_response_interceptor(self, func: Callable[[Request, Response], None]):
        self.response_interceptors.append(func)
        return func

    def select(self, request: Request) -> Handler:
        """ Find the first handler that can take the request

        :param request:
        :return:
        """
        handler = next((handler for handler in self.handlers if handler.can_handle(request)), None)
        if handler is None:
            raise UnmatchedRequestError(request)
        return handler

    def dispatch(self, request: Request, translator: l10n.Translator = None) -> Response:
        """ Handle the request: always returns a response, unless there is no catalog to speak from

        :param request:
        :param translator:  translator to use, created from request locale if not set
        :return:
        """
        with start_span(f'dispatch: {request.type_}'):
            try:
                translator = translator or l10n.create_translator(request.locale, self.catalog)

                for interceptor in self.request_interceptors:
                    interceptor(request)

                response = self.select(request)(request, translator)

                for interceptor in self.response_interceptors:
                    interceptor(request, response)

            except Exception as ex:
                logger.exception('Exception while handling %s', repr(request))
                if translator is None:
                    raise
                response = self.handle_error(request, translator, ex)

        return response

    def handle_error(self, request: Request, translator: l10n.Translator, error: Exception) -> Response:
        """ Call the error handler

        :param request:
        :param translator:
        :param error:
        :return:
        """
        with start_span('error_handler_call'):
            logger.info('Calling error handler: %s', self._error_handler.__name__)
            return _to_response(self._error_handler(request, translator, error), self._error_handler.__name__)

    def get_handler(self, name: str) -> Optional[Handler]:
        return next((handler for handler in self.handlers if handler.name == name), None)
