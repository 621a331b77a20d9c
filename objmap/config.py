# Copyright (c) 2026 NASK. All rights reserved.

"""
Obtaining the date conversion policy from configuration.

The configuration may come from INI files (by default, those found in
the system-wide and the user-specific configuration directories, see:
`objmap.const.ETC_DIR` and `objmap.const.USER_DIR`) and/or from a
*settings* mapping (e.g., the settings of a Pyramid application).

An example configuration file (e.g., `/etc/objmap/10_dates.conf`):

    [date_conversion]
    date_format = %Y-%m-%d %H:%M:%S
    time_zone = Europe/Warsaw

Both options are optional (defaults: see `objmap.const`).  Interpolation
is disabled, so `%` characters are taken literally.
"""

import configparser
import os
import os.path as osp
import re

from objmap.common_helpers import ascii_str
from objmap.const import (
    DATE_CONVERSION_CONFIG_SECTION,
    DEFAULT_DATE_FORMAT,
    DEFAULT_TIME_ZONE,
    ETC_DIR,
    USER_DIR,
)
from objmap.datetime_policy import DateConversionPolicy
from objmap.log_helpers import get_logger


__all__ = [
    'ConfigError',
    'load_date_conversion_policy',
]


LOGGER = get_logger(__name__)


CONFIG_FILENAME_REGEX = re.compile(r'\.conf\Z')
CONFIG_FILENAME_EXCLUDING_REGEX = re.compile(r'\Alogging(-.*)?\.conf\Z')

DATE_CONVERSION_OPTION_DEFAULTS = {
    'date_format': DEFAULT_DATE_FORMAT,
    'time_zone': DEFAULT_TIME_ZONE,
}


class ConfigError(Exception):

    """
    A generic, configuration-related, exception class.

    >>> print(ConfigError('Some Message'))
    [configuration-related error] Some Message
    """

    def __str__(self):
        return '[configuration-related error] ' + super().__str__()


def load_date_conversion_policy(config_paths=None, settings=None):
    """
    Make a `DateConversionPolicy` based on configuration.

    Args/kwargs:
        `config_paths` (default: `None`):
            A list of paths of INI files to read; `None` means: all files
            whose names end with `.conf` (excluding `logging*.conf`)
            found in `objmap.const.ETC_DIR` and `objmap.const.USER_DIR`.
            Later files override earlier ones.
        `settings` (default: `None`):
            A mapping with keys such as `'date_conversion.date_format'`
            and `'date_conversion.time_zone'`; its values override those
            read from files.  Other keys are ignored.

    Returns:
        A new `objmap.datetime_policy.DateConversionPolicy`.

    Raises:
        `ConfigError` -- if any file cannot be parsed, the section
        contains unknown options or any option value is invalid.

    >>> load_date_conversion_policy(config_paths=[], settings={
    ...     'date_conversion.time_zone': 'Europe/Warsaw',
    ...     'some_other.setting': 'foo',
    ... })
    DateConversionPolicy(date_format='%Y-%m-%dT%H:%M:%S.%f', time_zone='Europe/Warsaw')
    """
    if config_paths is None:
        config_paths = (_get_config_file_paths(ETC_DIR) +
                        _get_config_file_paths(USER_DIR))
    opt_name_to_value = dict(DATE_CONVERSION_OPTION_DEFAULTS)
    opt_name_to_value.update(_read_config_files(config_paths))
    if settings is not None:
        opt_name_to_value.update(_extract_from_settings(settings))
    try:
        return DateConversionPolicy(**opt_name_to_value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            'invalid [{}] configuration: {}'.format(
                DATE_CONVERSION_CONFIG_SECTION,
                ascii_str(exc))) from exc


def _get_config_file_paths(path):
    config_files = []
    for directory, _, fnames in os.walk(path):
        for fname in fnames:
            if (CONFIG_FILENAME_REGEX.search(fname)
                  and not CONFIG_FILENAME_EXCLUDING_REGEX.search(fname)):
                config_files.append(osp.join(directory, fname))
    return sorted(config_files)


def _read_config_files(config_paths):
    config_parser = configparser.ConfigParser(interpolation=None)
    try:
        ok_config_files = config_parser.read(config_paths, encoding='utf-8')
    except configparser.Error as exc:
        raise ConfigError('cannot parse configuration: {}'.format(ascii_str(exc))) from exc
    err_config_files = [path for path in config_paths if path not in ok_config_files]
    if err_config_files:
        LOGGER.warning(
            'Config files that could not be read: %s', ', '.join(
                '"{0}"'.format(ascii_str(name))
                for name in err_config_files))
    if ok_config_files:
        LOGGER.info('Config files read properly: %s', ', '.join(
            '"{0}"'.format(ascii_str(name))
            for name in ok_config_files))
    if not config_parser.has_section(DATE_CONVERSION_CONFIG_SECTION):
        return {}
    opt_name_to_value = dict(config_parser.items(DATE_CONVERSION_CONFIG_SECTION))
    _verify_opt_names(opt_name_to_value, 'in the config section [{}]'.format(
        DATE_CONVERSION_CONFIG_SECTION))
    return opt_name_to_value


def _extract_from_settings(settings):
    prefix = DATE_CONVERSION_CONFIG_SECTION + '.'
    opt_name_to_value = {
        key[len(prefix):]: value
        for key, value in settings.items()
        if isinstance(key, str) and key.startswith(prefix)}
    _verify_opt_names(opt_name_to_value, 'among the settings')
    return opt_name_to_value


def _verify_opt_names(opt_name_to_value, where):
    illegal_opt_names = sorted(opt_name_to_value.keys() - DATE_CONVERSION_OPTION_DEFAULTS.keys())
    if illegal_opt_names:
        raise ConfigError('illegal options {}: {}'.format(
            where,
            ', '.join(map(ascii, illegal_opt_names))))
