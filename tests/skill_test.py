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
from unittest.mock import patch

import impl
from agus import l10n, skill
from agus.skill import Skill, initialize, lambda_handler
from agus.test_helpers import create_envelope, invoke_request, override_catalog
from agus.predicates import always


class TestLambdaHandler(unittest.TestCase):

    def test_handler(self):
        self.assertIs(impl.handler, lambda_handler)

    def test_invoke(self):
        result = lambda_handler(create_envelope('AMAZON.StopIntent', locale='en-US'), None)
        self.assertEqual(result, {
            'version': '1.0',
            'response': {
                'outputSpeech': {'type': 'PlainText', 'text': 'Goodbye!'},
                'shouldEndSession': True,
            },
        })

    def test_launch(self):
        result = lambda_handler(create_envelope('LaunchRequest', locale='es-US'))
        self.assertEqual(result['response']['reprompt']['outputSpeech']['text'],
                         'Bienvenido al conversor . ¿Qué conversión te gustaría probar?')


class TestSkill(unittest.TestCase):

    def test_own_dispatcher(self):
        app = Skill()

        @app.request_handler(always)
        def hello(request, _):
            return _('HELLO')

        @app.error_handler
        def oops(request, _, error):
            return 'Oops'

        self.assertEqual([handler.name for handler in app.get_handlers()], ['hello'])
        with override_catalog({'en': {'HELLO': 'Hi'}}):
            self.assertEqual(app.test_request('LaunchRequest').text, 'Hi')
            self.assertEqual(invoke_request('AnyIntent', skill=app).text, 'Hi')
            self.assertEqual(app.invoke(create_envelope('LaunchRequest', locale='de-DE')),
                             {'version': '1.0', 'response': {'outputSpeech': {'type': 'PlainText', 'text': 'Hi'}}})

        with override_catalog({'en': {}}):
            self.assertEqual(app.test_request('LaunchRequest').text, 'Oops')


class TestInitialize(unittest.TestCase):

    @patch('agus.skill.configure_logging')
    @patch('agus.l10n.load_catalog')
    def test_initialize(self, load_catalog, configure_logging):
        catalog = l10n.Catalog({'en': {'ERROR_MESSAGE': 'Sorry'}})
        load_catalog.return_value = catalog
        previous = l10n.get_catalog()
        try:
            app = initialize(module='impl')
            self.assertIs(app, skill.app())
            self.assertIs(l10n.get_catalog(), catalog)
            self.assertEqual(app.config.get('skill.name'), 'agus')
            configure_logging.assert_called_once()
        finally:
            l10n.set_catalog(previous)

    @patch('agus.skill.configure_logging')
    def test_no_handlers(self, configure_logging):
        skill.app.push(Skill())
        try:
            with self.assertRaises(RuntimeError):
                initialize()
        finally:
            skill.app.pop()


class TestRun(unittest.TestCase):

    @patch('bottle.Bottle.run')
    def test_run(self, run):
        skill.app().run(port=8080)
        kwargs = run.call_args[1]
        self.assertEqual(kwargs['port'], 8080)
        self.assertEqual(kwargs['server'], 'gunicorn')
        self.assertEqual(kwargs['worker_class'], 'gevent')
