#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Request predicates: pure functions deciding whether a handler can take a request
#
# An exception raised by a predicate is not a "no match": the dispatcher
# passes it to the error handler like any other failure.
#

from typing import Callable

from .intents import Request, IntentRequest

Predicate = Callable[[Request], bool]


def always(request) -> bool:
    """ Matches any request """
    return True


def is_request_type(*types: str) -> Predicate:
    """ Matches requests of the given type(s), eg. `is_request_type('LaunchRequest')`

    :param types:
    :return:
    """
    def predicate(request) -> bool:
        return getattr(request, 'type_', None) in types

    predicate.__name__ = f"is_request_type({', '.join(types)})"
    return predicate


def is_intent_name(*names: str) -> Predicate:
    """ Matches intent requests with the exact intent name(s)

    :param names:
    :return:
    """
    def predicate(request) -> bool:
        return isinstance(request, IntentRequest) and request.name in names

    predicate.__name__ = f"is_intent_name({', '.join(names)})"
    return predicate


def is_intent_except(*names: str) -> Predicate:
    """ Matches any intent request whose name is not one of `names`

    :param names:
    :return:
    """
    def predicate(request) -> bool:
        return isinstance(request, IntentRequest) and request.name not in names

    predicate.__name__ = f"is_intent_except({', '.join(names)})"
    return predicate


def any_of(*predicates: Predicate) -> Predicate:
    def predicate(request) -> bool:
        return any(p(request) for p in predicates)

    predicate.__name__ = f"any_of({', '.join(p.__name__ for p in predicates)})"
    return predicate


def all_of(*predicates: Predicate) -> Predicate:
    def predicate(request) -> bool:
        return all(p(request) for p in predicates)

    predicate.__name__ = f"all_of({', '.join(p.__name__ for p in predicates)})"
    return predicate


def negate(func: Predicate) -> Predicate:
    def predicate(request) -> bool:
        return not func(request)

    predicate.__name__ = f'not {func.__name__}'
    return predicate
