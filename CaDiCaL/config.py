#
# This file is part of CaDiCaL4Py (CaDiCaL Python API).
#
# CaDiCaL, an incremental solver for propositional satisfiability (SAT).
#
# CaDiCaL4Py is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.  CaDiCaL4Py is distributed in the
# hope that it will be useful, but WITHOUT ANY WARRANTY; without even
# the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR
# PURPOSE.  See the GNU General Public License for more details.  You
# should have received a copy of the GNU General Public License along
# with CaDiCaL4Py.  If not, see <http://www.gnu.org/licenses/>.

import logging
from logging.config import dictConfig
from os import path

import yaml

__all__ = ['DEFAULT_CONFIG_FILE', 'load_config', 'apply_logging']

DEFAULT_CONFIG_FILE = path.join(path.dirname(__file__), 'config.yaml')


def _read(config_file):
    with open(config_file, 'r') as f:
        config = yaml.safe_load(f)
    if not config:
        return {}
    if not isinstance(config, dict):
        raise ValueError('configuration file "%s" must contain a mapping' % config_file)
    return config


def load_config(config_file=None):
    """Return the packaged defaults merged with 'config_file'.

    >>> config = load_config()
    >>> config['lib_name']
    'libcadical.so*'
    >>> config['options']
    {}
    """
    config = _read(DEFAULT_CONFIG_FILE)
    if config_file:
        logging.debug('Config: reading "%s"', config_file)
        user = _read(config_file)
        for key, value in user.items():
            if key == 'options' and value:
                options = dict(config.get('options') or {})
                options.update(value)
                config['options'] = options
            else:
                config[key] = value
    config['options'] = dict(config.get('options') or {})
    return config


def apply_logging(config):
    """Configure logging from the 'logging' section, if there is one."""
    section = config.get('logging')
    if section:
        dictConfig(section)
        logging.debug('Config: logging configured')
