#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Tracing adapter: no-op opentracing implementation with ids for the log formatter
#

import uuid
import logging
from functools import wraps

import opentracing
from opentracing import global_tracer, set_global_tracer
from opentracing.propagation import Format

logger = logging.getLogger(__name__)


class SpanContext(opentracing.SpanContext):
    """ Carries "trace_id"/"span_id" for logging """

    __slots__ = ['trace_id', 'span_id']

    def __init__(self, trace_id, span_id):
        self.trace_id = trace_id
        self.span_id = span_id


class Span(opentracing.Span):
    """ Span with an "operation_name" """

    __slots__ = ['_context', '_tracer', 'operation_name']

    def __init__(self, tracer, context, operation_name):
        super().__init__(tracer=tracer, context=context)
        self.operation_name = operation_name

    def set_operation_name(self, operation_name):
        self.operation_name = operation_name
        return self

    @property
    def context(self):
        return self._context

    @property
    def trace_id(self):
        return self.context.trace_id

    @property
    def span_id(self):
        return self.context.span_id


class ScopeManager(opentracing.ScopeManager):
    """ Scope manager that keeps track of the last activated span """

    def __init__(self):
        super().__init__()
        self._active = None

    def activate(self, span, finish_on_close):
        scope = _Scope(self, span, self._active)
        self._active = scope
        return scope

    @property
    def active(self):
        return self._active


class _Scope(opentracing.Scope):
    """ Restores the previous scope when closed """

    def __init__(self, manager, span, previous):
        super().__init__(manager, span)
        self._previous = previous

    def close(self):
        self.manager._active = self._previous


class Tracer(opentracing.Tracer):
    """ Tracer with a "service_name": creates spans with random ids, reports nothing
    """

    def __init__(self, service_name, scope_manager=None):
        super().__init__(scope_manager=scope_manager or ScopeManager())
        self.service_name = service_name

    def start_span(self,
                   operation_name=None,
                   child_of=None,
                   references=None,
                   tags=None,
                   start_time=None,
                   ignore_active_span=False):
        parent = child_of.context if isinstance(child_of, Span) else child_of
        if parent is None and not ignore_active_span and self.active_span is not None:
            parent = self.active_span.context

        trace_id = getattr(parent, 'trace_id', None) or uuid.uuid4().hex
        context = SpanContext(trace_id, uuid.uuid4().hex[:16])
        return Span(tracer=self, context=context, operation_name=operation_name)

    def start_active_span(self,
                          operation_name,
                          child_of=None,
                          references=None,
                          tags=None,
                          start_time=None,
                          ignore_active_span=False,
                          finish_on_close=True):
        span = self.start_span(operation_name, child_of, references, tags, start_time, ignore_active_span)
        return self.scope_manager.activate(span, finish_on_close)

    def extract(self, format, carrier):
        # Nothing is propagated by the no-op tracer
        return None


class start_span:   # NOSONAR
    """ Tracing helper: can be used as both context manager and decorator

        with start_span('span'):
            ...

        @start_span('span')
        def decorated():
            ...

    """

    def __init__(self, operation_name, tracer: Tracer = None, **kwargs):
        self.span = None
        self.tracer = tracer
        self.kwargs = kwargs
        self.operation_name = operation_name

    def __enter__(self):
        return self.start().__enter__()

    def __exit__(self, _exc_type, _exc_value, _exc_traceback):
        self.span.__exit__(_exc_type, _exc_value, _exc_traceback)

    def __call__(self, func):
        @wraps(func)
        def decorated(*args, **kwargs):     # NOSONAR
            with start_span(self.operation_name, self.tracer, **self.kwargs):
                return func(*args, **kwargs)
        return decorated

    def start(self):
        self.tracer = self.tracer or global_tracer()
        self.span = self.tracer.start_span(self.operation_name, **self.kwargs)
        logger.debug('Starting span [%s] for service [%s]',
                     self.operation_name, getattr(self.tracer, 'service_name', 'unknown'))
        return self.span


def get_service_name():
    """ Returns the service name: skill name from config """
    from .config import config
    return config.get('skill', 'name', fallback='unnamed_service')


def start_active_span(operation_name, request, **kwargs):
    """ Start a new span for HTTP request and return activated scope
    """
    tracer = global_tracer()

    tags = kwargs.pop('tags', {})
    if hasattr(request, 'url'):
        tags.update({'http.url': request.url})
    if hasattr(request, 'remote_addr'):
        tags.update({'peer.ipv4': request.remote_addr})

    headers = {key: value for key, value in request.headers.items()}
    context = tracer.extract(format=Format.HTTP_HEADERS, carrier=headers)
    return tracer.start_active_span(operation_name, child_of=context, tags=tags, **kwargs)


def initialize_tracer(tracer=None):
    """ Initialize the global tracer

    :return:
    """
    tracer = tracer or Tracer(get_service_name())
    set_global_tracer(tracer)
    return tracer
