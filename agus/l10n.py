#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Localization: message catalog and per-request translators
#

import re
import pathlib
import logging
import threading
from typing import Dict, List, Mapping, Optional, Set

import yaml

from .config import config

LOCALE_DIR = 'locale'
DEFAULT_LOCALE = 'en'
RE_TRANSLATIONS = re.compile(r'^[a-z]{2}(-[A-Z]{2})?$')
RE_PLACEHOLDER = re.compile(r'{{\s*(\w+)\s*}}')

logger = logging.getLogger(__name__)

_catalog: Optional['Catalog'] = None
_catalog_lock = threading.Lock()


class TranslationError(Exception):
    """
    Base class for localization errors.
    """


class MissingTranslationError(TranslationError):
    """
    Raised when a message key is not available in the catalog for the resolved locale.
    """

    def __init__(self, locale: str, key: str):
        self.locale = locale
        self.key = key
        super().__init__(f'No translation for {key!r} in locale {locale!r}')


class FormatError(TranslationError):
    """
    Raised in strict mode when a template references an argument that was not supplied.
    """

    def __init__(self, key: str, placeholder: str):
        self.key = key
        self.placeholder = placeholder
        super().__init__(f'Message {key!r} requires argument {placeholder!r}')


class Message(str):
    """ A string that remembers the message `key`, the un-formatted template `value`
        and the format arguments it was rendered with

    """

    # Message id
    key: str
    # Message template (un-formatted)
    value: str
    # Format arguments
    kwargs: Dict

    def __new__(cls, text, key=None, value=None, kwargs=None):
        string = super().__new__(cls, text)
        string.key = key or text
        string.value = value if value is not None else text
        string.kwargs = dict(kwargs or {})
        return string


def normalize_locale(locale: Optional[str]) -> str:
    """ Normalize locale tag: "en_us" -> "en-US"

    :param locale:
    :return:
    """
    if not locale:
        return ''
    language, _, region = locale.replace('_', '-').partition('-')
    return f'{language.lower()}-{region.upper()}' if region else language.lower()


def render(template: str, key: str, kwargs: Mapping, strict: bool = False) -> str:
    """ Replace every {{name}} token with str(kwargs[name])

    :param template:    message template
    :param key:         message key (for error reporting)
    :param kwargs:      format arguments
    :param strict:      raise FormatError if argument is missing, otherwise leave the token as is
    :return:
    """
    def substitute(match):
        name = match.group(1)
        if name in kwargs:
            return str(kwargs[name])
        if strict:
            raise FormatError(key, name)
        logger.warning('Message %s: argument %s is missing, leaving placeholder.', key, name)
        return match.group(0)

    return RE_PLACEHOLDER.sub(substitute, template)


class Catalog:
    """ Read-only translation catalog: locale -> message key -> template

    """

    def __init__(self, messages: Mapping[str, Mapping[str, str]], default_locale: str = None, strict: bool = False):
        self._messages = {normalize_locale(locale): dict(templates) for locale, templates in messages.items()}
        self.default_locale = normalize_locale(default_locale or DEFAULT_LOCALE)
        # Translators created from this catalog raise FormatError on missing arguments
        self.strict = strict
        if self._messages and self.default_locale not in self._messages:
            raise ValueError(f'Default locale {self.default_locale!r} is not in catalog: {self.locales()}')

    def locales(self) -> List[str]:
        """ Get list of supported locales, eg. ['en', 'es']
        """
        return list(self._messages)

    def resolve(self, locale: Optional[str]) -> str:
        """ Resolve locale tag to a supported locale:
                exact match, then language part ("en-US" -> "en"), then default locale

        :param locale:
        :return:
        """
        tag = normalize_locale(locale)
        if tag in self._messages:
            return tag

        language = tag.split('-', 1)[0]
        if language in self._messages:
            return language

        logger.warning('Locale %s is not supported, falling back to %s.', repr(locale), self.default_locale)
        return self.default_locale

    def keys(self, locale: str) -> Set[str]:
        return set(self._messages.get(self.resolve(locale), {}))

    def get(self, locale: str, key: str) -> str:
        """ Get message template

        :param locale:  locale tag (unsupported tags fall back to default locale)
        :param key:     message key
        :return:
        """
        resolved = self.resolve(locale)
        try:
            return self._messages[resolved][key]
        except KeyError:
            raise MissingTranslationError(resolved, key) from None

    def missing_keys(self) -> Dict[str, Set[str]]:
        """ For every locale, the keys defined elsewhere in the catalog but not in this locale
        """
        every_key = set().union(*self._messages.values()) if self._messages else set()
        return {locale: every_key - set(templates) for locale, templates in self._messages.items()}

    def __contains__(self, locale):
        return normalize_locale(locale) in self._messages

    def __repr__(self) -> str:
        return f'Catalog(locales={self.locales()}, default_locale={self.default_locale!r})'


class Translator:
    """ Translation function bound to a resolved locale:

            _ = Translator(catalog, 'en')
            _('CELSIUS_CONVERSION', degreesFarent=212, degreesCent='100.00')

    """

    def __init__(self, catalog: Catalog, locale: str, strict: bool = False):
        self.catalog = catalog
        self.locale = catalog.resolve(locale)
        self.strict = strict

    def __call__(self, key: str, **kwargs) -> Message:
        template = self.catalog.get(self.locale, key)
        return Message(render(template, key, kwargs, self.strict), key, template, kwargs)

    gettext = __call__

    def __repr__(self) -> str:
        return f'Translator(locale={self.locale!r}, strict={self.strict})'


def create_translator(locale: Optional[str], catalog: Catalog = None, strict: bool = None) -> Translator:
    """ Create a translator for request locale: never fails, unsupported locales fall back to default

    :param locale:  request locale
    :param catalog: catalog to use, the process-wide catalog if not set
    :param strict:  fail on missing format arguments, catalog setting if not set
    :return:
    """
    catalog = catalog or get_catalog()
    return Translator(catalog, locale, catalog.strict if strict is None else strict)


#
#   Catalog loading: YAML files named after the locale, eg. `locale/en.yaml`
#

def get_locale_dir(locale_dir: str = None) -> pathlib.Path:
    """ Returns locales folder location """
    return pathlib.Path(locale_dir or config.get('l10n', 'locale_dir', fallback=LOCALE_DIR))


def load_catalog(locale_dir: str = None, default_locale: str = None, strict: bool = None) -> Catalog:
    """ Load messages from locale_dir

    :param locale_dir:
    :param default_locale:
    :param strict:  strict formatting, `[l10n] strict` if not set (an invalid value raises ValueError)
    :return:
    """
    if strict is None:
        strict = config.getboolean('l10n', 'strict', fallback=False)

    logger.info('Loading translations...')

    messages: Dict[str, Dict[str, str]] = {}
    search_glob = get_locale_dir(locale_dir) / '*.yaml'
    for yaml_file in sorted(config.resolve_glob(search_glob)):
        lang = yaml_file.stem
        if not RE_TRANSLATIONS.match(lang):
            logger.debug('Skipping %s: not a locale name', yaml_file.name)
            continue

        with yaml_file.open(encoding='utf-8') as f:
            templates = yaml.safe_load(f) or {}

        if not isinstance(templates, dict):
            raise TranslationError(f'{yaml_file.name}: expected mapping of message keys, got {type(templates)}')

        messages[lang] = {str(key): str(value) for key, value in templates.items()}
        logger.debug('Loaded %d messages for %s', len(messages[lang]), lang)

    if not messages:
        logger.error('No translations found in %s.', repr(str(search_glob)))

    return Catalog(messages, default_locale or config.get('l10n', 'default_locale', fallback=DEFAULT_LOCALE), strict)


def get_catalog() -> Catalog:
    """ Get the process-wide catalog, loading it on first use
    """
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = load_catalog()
    return _catalog


def set_catalog(catalog: Optional[Catalog]) -> Optional[Catalog]:
    """ Replace the process-wide catalog (`None` to reload on next use)

    :param catalog:
    :return:    previous catalog
    """
    global _catalog
    previous, _catalog = _catalog, catalog
    return previous
