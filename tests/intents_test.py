#
# voice-skill-sdk
#
# (C) 2020, Magenta Hypercube, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#
#
import unittest
from types import MappingProxyType

from agus.intents import (
    InvalidRequestError,
    IntentRequest,
    LaunchRequest,
    SessionEndedRequest,
    UnknownRequest,
    parse_request,
)
from agus.test_helpers import create_envelope


class TestParseRequest(unittest.TestCase):

    def test_launch(self):
        request = parse_request(create_envelope('LaunchRequest', locale='es-ES'))
        self.assertIsInstance(request, LaunchRequest)
        self.assertEqual(request.type_, 'LaunchRequest')
        self.assertEqual(request.locale, 'es-ES')
        self.assertEqual(request.session_id, 'amzn1.echo-api.session.12345')
        self.assertTrue(request.request_id.startswith('amzn1.echo-api.request.'))

    def test_intent(self):
        request = parse_request(create_envelope('centIntent', cent='36,6'))
        self.assertIsInstance(request, IntentRequest)
        self.assertEqual(request.name, 'centIntent')
        self.assertEqual(request.get_slot('cent'), '36,6')
        self.assertEqual(request.locale, 'en-US')

    def test_intent_slots(self):
        envelope = {
            'request': {
                'type': 'IntentRequest',
                'locale': 'en-US',
                'intent': {
                    'name': 'FarenIntent',
                    'slots': {
                        'farent': {'name': 'farent', 'value': 212},
                        'empty': {'name': 'empty'},
                    },
                },
            },
        }
        request = parse_request(envelope)
        self.assertEqual(request.slots, {'farent': '212', 'empty': None})
        self.assertIsNone(request.get_slot('empty'))
        self.assertEqual(request.get_slot('empty', 'default'), 'default')
        self.assertEqual(request.get_slot('unknown', 0), 0)
        self.assertIsNone(request.session_id)

    def test_slots_read_only(self):
        request = parse_request(create_envelope('centIntent', cent=0))
        self.assertIsInstance(request.slots, MappingProxyType)
        with self.assertRaises(TypeError):
            request.slots['cent'] = '1'

    def test_session_ended(self):
        envelope = create_envelope('SessionEndedRequest', reason='ERROR')
        envelope['request']['error'] = {'type': 'INVALID_RESPONSE', 'message': 'Oops'}
        request = parse_request(envelope)
        self.assertIsInstance(request, SessionEndedRequest)
        self.assertEqual(request.reason, 'ERROR')
        self.assertEqual(request.error, {'type': 'INVALID_RESPONSE', 'message': 'Oops'})

    def test_unknown_type(self):
        request = parse_request(create_envelope('CanFulfillIntentRequest'))
        self.assertIsInstance(request, UnknownRequest)
        self.assertEqual(request.type_, 'CanFulfillIntentRequest')

    def test_intent_without_name(self):
        request = parse_request({'request': {'type': 'IntentRequest', 'intent': {}}})
        self.assertIsInstance(request, UnknownRequest)
        self.assertEqual(request.type_, 'IntentRequest')

    def test_invalid(self):
        for envelope in (None, [], {}, {'request': None}, {'request': 'LaunchRequest'}):
            with self.subTest(envelope=envelope):
                with self.assertRaises(InvalidRequestError):
                    parse_request(envelope)


class TestRequest(unittest.TestCase):

    def test_equality(self):
        envelope = create_envelope('centIntent', cent=1)
        self.assertEqual(parse_request(envelope), parse_request(envelope))
        self.assertNotEqual(parse_request(envelope), parse_request(create_envelope('centIntent', cent=2)))
        self.assertEqual(len({parse_request(envelope), parse_request(envelope)}), 1)

    def test_dict(self):
        request = IntentRequest('FarenIntent', {'farent': '212'}, locale='en', request_id='1', session_id='2')
        self.assertEqual(request.dict(), {
            'type': 'IntentRequest',
            'locale': 'en',
            'request_id': '1',
            'session_id': '2',
            'name': 'FarenIntent',
            'slots': {'farent': '212'},
        })
        self.assertIn('FarenIntent', repr(request))

    def test_intent_name_required(self):
        with self.assertRaises(ValueError):
            IntentRequest('')
