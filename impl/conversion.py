#
# voice-skill-sdk
#
# (C) 2020, Magenta Hypercube, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#
#
import math
import logging
from typing import Optional, Union

from agus import skill, Response, tell
from agus.intents import IntentRequest
from agus.l10n import Translator
from agus.predicates import is_intent_name

#
# Temperature conversion: the spoken value arrives as a raw slot string,
# we parse it, convert and render the result with two decimals
#

CELSIUS_INTENT = 'centIntent'
CELSIUS_SLOT = 'cent'

FAHRENHEIT_INTENT = 'FarenIntent'
FAHRENHEIT_SLOT = 'farent'

logger = logging.getLogger(__name__)


class ConversionInputError(ValueError):
    """
    Raised when a slot value is not a finite number.
    """

    def __init__(self, slot: str, value: Optional[str]):
        self.slot = slot
        self.value = value
        super().__init__(f'Slot {slot!r}: cannot convert {value!r} to degrees')


def parse_degrees(value: Optional[str], slot: str = None) -> float:
    """ Parse slot value: "36.6", "36,6", "-40"

    :param value:   raw slot value
    :param slot:    slot name (for error reporting)
    :return:
    """
    # Whole value must be a finite number: "12abc", "inf" and "nan" are rejected, not truncated
    try:
        degrees = float(value.strip().replace(',', '.'))
    except (AttributeError, TypeError, ValueError):
        raise ConversionInputError(slot, value) from None

    if not math.isfinite(degrees):
        raise ConversionInputError(slot, value)

    return degrees


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def spoken_number(value: float) -> Union[int, float]:
    """ Say "100" rather than "100.0" """
    return int(value) if value.is_integer() else value


@skill.request_handler(is_intent_name(CELSIUS_INTENT))
def celsius_handler(request: IntentRequest, _: Translator) -> Response:
    """ Convert degrees Celsius to Fahrenheit

    :return:        Response
    """
    celsius = parse_degrees(request.get_slot(CELSIUS_SLOT), CELSIUS_SLOT)
    fahrenheit = celsius_to_fahrenheit(celsius)
    logger.debug('%s C -> %s F', celsius, fahrenheit)

    msg = _('FAHRENHEIT_CONVERSION', degreesCent=spoken_number(celsius), degreesFarent=f'{fahrenheit:.2f}')
    return tell(msg)


@skill.request_handler(is_intent_name(FAHRENHEIT_INTENT))
def fahrenheit_handler(request: IntentRequest, _: Translator) -> Response:
    """ Convert degrees Fahrenheit to Celsius

    :return:        Response
    """
    fahrenheit = parse_degrees(request.get_slot(FAHRENHEIT_SLOT), FAHRENHEIT_SLOT)
    celsius = fahrenheit_to_celsius(fahrenheit)
    logger.debug('%s F -> %s C', fahrenheit, celsius)

    msg = _('CELSIUS_CONVERSION', degreesFarent=spoken_number(fahrenheit), degreesCent=f'{celsius:.2f}')
    return tell(msg)
