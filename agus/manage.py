#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Run/test/display version/check catalog
#

import sys
import logging
import pathlib
import argparse
import unittest
import importlib
from coverage import Coverage

from .config import config

ARG_RUN: str = 'run'
ARG_TEST: str = 'test'
ARG_VERSION: str = 'version'
ARG_CATALOG: str = 'catalog'

logger = logging.getLogger(__name__)


def _split(value: str):
    """ Split comma/newline separated config value """
    return [_.strip() for line in value.splitlines() for _ in line.split(',') if line and _.strip()]


def create_coverage():
    """ Create Coverage instance

    :return:
    """
    include = _split(config.get('tests', 'include', fallback='agus/*, impl/*'))
    exclude = _split(config.get('tests', 'exclude', fallback='tests/*, .venv/*, venv/*'))

    cov = Coverage(include=include, omit=exclude)
    cov.start()
    return cov


def run_tests(cover: int = 0):
    """ Discover and run an included unittest suite

    :param cover:       display coverage report, fail if coverage is below `cover` percent
    :return: int:       0 for success, error message otherwise
    """

    cov = create_coverage() if cover else None

    if not run_unit_tests():
        return 'FAIL: unit tests'

    # Report coverage if requested
    if cov:
        cov.stop()
        result = cov.report()
        if not isinstance(cover, bool) and round(result) < cover:
            return f'\nFAIL: expected {cover}% coverage'

    return 0


def run_unit_tests() -> bool:
    """ Discover and run unit tests:
            unit tests are expected in `tests` directory, and following `*_test.py` file naming convention by default

    """
    test_dir = config.get('tests', 'dir', fallback='tests')
    pattern = config.get('tests', 'patterns', fallback='*_test.py')
    test_suite = unittest.defaultTestLoader.discover(test_dir, pattern=pattern, top_level_dir='.')

    test_runner = unittest.TextTestRunner()
    result = test_runner.run(test_suite)
    return result.wasSuccessful()


def check_catalog() -> int:
    """ Print supported locales and the keys each locale lacks

    :return:    number of locales with missing keys
    """
    from .l10n import load_catalog

    catalog = load_catalog()
    print(f'Default locale: {catalog.default_locale}')
    gaps = 0
    for locale, missing in sorted(catalog.missing_keys().items()):
        print(f"{locale}: {len(catalog.keys(locale))} messages" + (f", missing: {', '.join(sorted(missing))}"
                                                                    if missing else ''))
        gaps += bool(missing)
    return gaps


def import_module(module: str) -> None:
    """ Import from either python file or package

    :param module:
    :return:
    """
    path = pathlib.Path(module)

    try:
        if module.endswith('.py'):
            importlib.import_module(module[:-3].replace('/', '.'))
        else:
            importlib.import_module(module)
    except ModuleNotFoundError as ex:
        logger.error("Cannot load %s: %s", path.absolute(), repr(ex))
        raise


def manage():
    """ Entry point """

    from .skill import DEFAULT_MODULE

    parser = argparse.ArgumentParser(prog='manage.py',
                                     description="helper for several skill related tasks")
    subparsers = parser.add_subparsers(dest='subcmd')
    epilog = 'The following environmental variable will modify the behavior:\n\n' \
             'LOG_FORMAT    Switch the log format between GELF (JSON) or human readable. Values: "gelf", "human"\n' \
             'LOG_LEVEL     Set the logging level. Values: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL" \n' \
             'SKILL_CONF    Set configuration file. Default: "skill.conf" in project root \n' \
             '              '
    run = subparsers.add_parser(ARG_RUN, formatter_class=argparse.RawDescriptionHelpFormatter, epilog=epilog,
                                help='Run the HTTP server',
                                description='Run the HTTP server as configured to handle requests')

    run.add_argument('module', help=f'Run module, default "{DEFAULT_MODULE}"', nargs='?', default=DEFAULT_MODULE)

    parser.add_argument('-t', '--dev', action='store_true', help='start in "development" mode')

    test = subparsers.add_parser(ARG_TEST, help='Run tests', description='Run included unittest suite')
    test.add_argument('module', help=f'Run module, default "{DEFAULT_MODULE}"', nargs='?', default=DEFAULT_MODULE)
    test.add_argument('-c', '--coverage', help='display coverage report', const=True, type=int,
                      default=0, action='store', nargs='?')

    subparsers.add_parser(ARG_VERSION, help='Print version', description='Print the skill version')

    catalog = subparsers.add_parser(ARG_CATALOG, help='Check translations',
                                    description='Print supported locales and the message keys missing per locale')
    catalog.add_argument('-s', '--strict', action='store_true', help='fail if any locale lacks a message key')

    args = parser.parse_args()

    if len(sys.argv) <= 1 or not args.subcmd:
        # Print usage
        parser.print_usage()
        sys.exit()

    if args.subcmd in (ARG_RUN, ARG_TEST):
        import_module(args.module)

    if args.subcmd == ARG_RUN:
        # Strip arguments to prevent them being passed over to Gunicorn
        if not args.dev:
            patch()
            sys.argv = [arg for arg in sys.argv if arg not in ('-t', '--dev')]

        from . import skill
        skill.run(dev=args.dev)

    if args.subcmd == ARG_TEST:
        sys.exit(run_tests(args.coverage))

    if args.subcmd == ARG_VERSION:
        print(f"{config.get('skill', ARG_VERSION)}")

    if args.subcmd == ARG_CATALOG:
        # Each conversion exists in one locale only
        gaps = check_catalog()
        if args.strict and gaps:
            sys.exit(f'FAIL: {gaps} locale(s) with missing keys')


def patch():
    """ We use gevent, so try to monkey-patch as early as possible (http://www.gevent.org/api/gevent.monkey.html).

        Note: Monkey-patched "threading" module interferes with source reloading feature
    """
    worker_class = config.get('http', 'worker_class', fallback=None)

    if worker_class == 'gevent':
        from gevent import monkey
        monkey.patch_all()
