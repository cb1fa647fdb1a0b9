#
# voice-skill-sdk
#
# (C) 2020, Magenta Hypercube, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#
#
import io
import sys
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from agus import manage
from agus.l10n import Catalog

MESSAGES = {
    'en': {'HELLO': 'Hello', 'BYE': 'Bye'},
    'es': {'HELLO': 'Hola'},
}


class TestManage(unittest.TestCase):

    @patch('agus.l10n.load_catalog', return_value=Catalog(MESSAGES, 'en'))
    def test_check_catalog(self, load_catalog):
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(manage.check_catalog(), 1)
        self.assertEqual(out.getvalue().splitlines(), [
            'Default locale: en',
            'en: 2 messages',
            'es: 1 messages, missing: BYE',
        ])

    @patch('agus.l10n.load_catalog', return_value=Catalog(MESSAGES, 'en'))
    @patch.object(sys, 'argv', ['manage.py', 'catalog', '--strict'])
    def test_catalog_strict(self, load_catalog):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            manage.manage()
        self.assertEqual(ctx.exception.code, 'FAIL: 1 locale(s) with missing keys')

    @patch.object(sys, 'argv', ['manage.py', 'version'])
    def test_version(self):
        out = io.StringIO()
        with redirect_stdout(out):
            manage.manage()
        self.assertEqual(out.getvalue().strip(), manage.config.get('skill', 'version'))

    @patch.object(sys, 'argv', ['manage.py'])
    def test_usage(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit):
            manage.manage()

    @patch('agus.manage.run_tests', return_value=0)
    @patch.object(sys, 'argv', ['manage.py', 'test', '-c', '80'])
    def test_test(self, run_tests):
        with self.assertRaises(SystemExit) as ctx:
            manage.manage()
        self.assertEqual(ctx.exception.code, 0)
        run_tests.assert_called_once_with(80)

    @patch('agus.skill.run')
    @patch.object(sys, 'argv', ['manage.py', '--dev', 'run'])
    def test_run_dev(self, run):
        manage.manage()
        run.assert_called_once_with(dev=True)

    def test_import_module(self):
        manage.import_module('impl/conversion.py')
        with self.assertRaises(ModuleNotFoundError):
            manage.import_module('no_such_module')

    def test_split(self):
        self.assertEqual(manage._split('agus/*, impl/*\ntests/*'), ['agus/*', 'impl/*', 'tests/*'])
