# -*- coding: utf-8 -*-

"""Manages settings and config file.

Settings are loaded from a configuration file. If they don't exists, default
values are provided.
When an option is set, the config file is updated.

``get()`` can be used before ``load()``; it returns the default values.
"""

import configparser
import logging
import os.path
from . import path as defer_path

_logger = logging.getLogger(__name__)


# Default config dict. Values not present in this dict are not valid.
# Each entry contains the type expected, and the default value.
_default_config = {
    'debug_mode': {'type': bool, 'default': False},
    'log_levels': {'type': dict, 'default': {}},
    # Timer threads of the scheduled actions don't block the interpreter exit.
    'daemon_timers': {'type': bool, 'default': True},
    'timer_name': {'type': str, 'default': 'Deferred'},
}

# Actual config parser
_config_parser = configparser.ConfigParser()
_config_parser.add_section('config')


def _get_config_file_path():
    return os.path.join(defer_path.get_config_dir(), 'defer.ini')


def _parse_dict(value):
    """Read a dict entry written as 'name=value;name2=value2'.

    Pairs can also be put on separate lines. Pairs without '=' or without
    name are ignored.
    """
    result = {}
    for pair in value.replace('\n', ';').split(';'):
        name, sep, item = pair.partition('=')
        if not pair.strip():
            continue
        if not sep or not name.strip():
            _logger.warning('Ignore malformed pair "%s" in config', pair)
            continue
        result[name.strip()] = item.strip()
    return result


def load():
    """Find and load the config file."""
    config_file_path = _get_config_file_path()

    if not _config_parser.read(config_file_path):
        _logger.warning('Unable to load config file: %s', config_file_path)


def get(key):
    """Find and return a configuration entry

    If the entry is not specified in the config file, a default value is
    returned.

    Args:
        key (string): the entry key.
    Returns:
        The corresponding value found.
    Raises:
        KeyError: if the config entry doesn't exists.
    """
    if key not in _default_config:
        raise KeyError(key)
    entry_type = _default_config[key]['type']
    try:
        if entry_type is bool:
            return _config_parser.getboolean('config', key)
        value = _config_parser.get('config', key)
        if entry_type is dict:
            return _parse_dict(value)
        return entry_type(value)
    except configparser.NoOptionError:
        return _default_config[key]['default']
    except ValueError:
        _logger.warning('Invalid value for config entry "%s". The default '
                        'value will be used.', key)
        return _default_config[key]['default']


def set(key, value):
    """Set a configuration entry.

    Args:
        key (string): the entry key.
        value: the new value to set. It will be converted to string. Dict
            values are written in the form 'key=value;key2=value2'.
    Raises:
        KeyError: if the config entry is not valid.
    """
    if key not in _default_config:
        raise KeyError(key)
    if isinstance(value, dict):
        value = ';'.join('%s=%s' % pair for pair in value.items())
    _config_parser.set('config', key, str(value))
    config_file_path = _get_config_file_path()
    try:
        with open(config_file_path, 'w') as config_file:
            _config_parser.write(config_file)
        _logger.debug('Config file modified.')
    except IOError:
        _logger.warning('Unable to write in the config file', exc_info=True)
