#
# voice-skill-sdk
#
# (C) 2020, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#

#
# Skill configuration: defaults < skill.conf < environment overrides
#

import os
import re
import logging
import configparser
from pathlib import Path
from typing import Iterator, List, Tuple

#
#   Built-in defaults, any of them can be overridden in `skill.conf`
#

DEFAULT_VALUES = {
    'skill': {
        'name': 'agus',
        'version': 1.0,
    },
    'http': {
        'host': '0.0.0.0',
        'port': 4242,
        'server': 'gunicorn',
        'workers': 1,
        'threads': 1,
        'worker_class': 'gevent',
        'keepalive': 30,
    },
    'l10n': {
        'locale_dir': 'locale',
        'default_locale': 'en',
        'strict': False,
    },
}

# Environment variables that replace a config value when set: env -> (section, option)
ENVIRONMENT_OVERRIDES = {
    'SKILL_LOCALE_DIR': ('l10n', 'locale_dir'),
    'SKILL_DEFAULT_LOCALE': ('l10n', 'default_locale'),
}

# Config file name, unless set with SKILL_CONF
DEFAULT_CONFIG_FILE = 'skill.conf'

# Folders searched for the config file, in this order
SEARCH_PATH = [Path('./'), Path('../'), Path('/'), Path('~')]

# ${ENV_VAR} or ${ENV_VAR:default}
ENV_VAR_TEMPLATE = re.compile(r'\${([^}^{]+)\}')

logger = logging.getLogger(__name__)


def get_config_file() -> str:
    return os.environ.get('SKILL_CONF', DEFAULT_CONFIG_FILE)


def _split_reference(reference: str) -> Tuple[str, str]:
    """ "PORT:4242" -> ("PORT", "4242"), "PORT" -> ("PORT", None) """
    name, _, default = reference.partition(':')
    return name, default if _ else None


class EnvVarInterpolation(configparser.BasicInterpolation):
    """ Values of the form `${ENV_VAR:default}` are read from the environment:

            [http]
            port = ${PORT:4242}

        Other values go through `os.path.expandvars`.
    """

    def before_get(self, parser, section, option, value, defaults):
        match = ENV_VAR_TEMPLATE.match(value)
        if match is None:
            return os.path.expandvars(value)

        name, default = _split_reference(match.group(1))
        env_value = os.getenv(name)
        if env_value:
            logger.debug("[%s] %s: read %s from environment", section, option, name)
            return env_value

        logger.debug("[%s] %s: %s is not set, using %s", section, option, name, repr(default))
        return default or None


class Config(configparser.ConfigParser):
    """ Skill configuration

        Sections:
            [skill]     name, id, version, api_base
            [http]      WSGI server settings
            [l10n]      locale_dir, default_locale, strict
            [tests]     test discovery and coverage settings

    """

    # Config files read so far: the locale folder is relative to them
    config_files: List = []

    def __init__(self):
        super().__init__(interpolation=EnvVarInterpolation())
        self.read_dict(DEFAULT_VALUES)
        self.read_conf()
        for env, (section, option) in ENVIRONMENT_OVERRIDES.items():
            self.read_environment(env, section, option)

    def read_conf(self, config_file: str = None) -> 'Config':
        """ Read configuration file from the folders in SEARCH_PATH, later files override earlier ones

        :param config_file: file name or path, `SKILL_CONF` if not set
        :return:    self
        """
        config_file = config_file or get_config_file()
        logger.info("Reading configuration from %s", config_file)

        candidates = dict.fromkeys(path.expanduser().joinpath(config_file) for path in SEARCH_PATH)
        self.config_files = self.read(list(candidates))
        if not self.config_files:
            logger.info("%s not found, using defaults", config_file)

        return self

    def read_environment(self, env: str, section: str, option: str) -> 'Config':
        """ Overwrite config value with environment variable, if it is set

        :param env:         environment variable
        :param section:     config section
        :param option:      config option
        :return:    self
        """
        value = os.environ.get(env)
        if value:
            logger.debug("[%s] %s overridden by %s", section, option, env)
            self.read_dict({section: {option: value}})
        return self

    @property
    def config_dirs(self) -> List[Path]:
        """ Folders of the config files read, current folder if none """
        dirs = dict.fromkeys(Path(file_name).resolve().parent for file_name in self.config_files)
        return list(dirs) or [Path('.')]

    def resolve_glob(self, glob_to_resolve: Path) -> Iterator[Path]:
        """ Find files by glob pattern: a relative pattern is matched next to the config files

        :param glob_to_resolve:
        :return:
        """
        if glob_to_resolve.is_absolute():
            return glob_to_resolve.parent.glob(glob_to_resolve.name)

        return (file for path in self.config_dirs for file in path.glob(str(glob_to_resolve)))


config = Config()
