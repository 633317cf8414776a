# <license>
#
#     This file is part of the Sapphire Operating System.
#
#     Copyright (C) 2013-2022  Jeremy Billheimer
#
#
#     This program is free software: you can redistribute it and/or modify
#     it under the terms of the GNU General Public License as published by
#     the Free Software Foundation, either version 3 of the License, or
#     (at your option) any later version.
#
#     This program is distributed in the hope that it will be useful,
#     but WITHOUT ANY WARRANTY; without even the implied warranty of
#     MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#     GNU General Public License for more details.
#
#     You should have received a copy of the GNU General Public License
#     along with this program.  If not, see <http://www.gnu.org/licenses/>.
#
# </license>

import os
import json
import logging

from appdirs import user_config_dir

from .common.util import setup_basic_logging


CONFIG_FILENAME = 'taskingmap.conf'

def get_config_dir():
    return user_config_dir('taskingmap')

_log_levels = {"debug": logging.DEBUG,
               "info": logging.INFO,
               "warning": logging.WARNING,
               "error": logging.ERROR,
               "critical": logging.CRITICAL}

##################
# DEFAULT CONFIG #
##################
LOG_LEVEL = "info"
LOG_FILENAME = None
HIGHLIGHT_ONLY = False
MAP_EXTENSIONS = ['.map', '.xmap']
SKIP_DIRS = ['node_modules', '.git']
WATCH_INTERVAL = 0.5


###################
# INTERNAL CONFIG #
###################
_SETTINGS_PATH = None
_INITIALIZED = False


def load_config(path=None, override_settings=None):
    global _SETTINGS_PATH

    if not path:
        # cwd first, then the user config directory
        for candidate in [CONFIG_FILENAME, os.path.join(get_config_dir(), CONFIG_FILENAME)]:
            if os.path.isfile(candidate):
                load_config(path=candidate, override_settings=override_settings)
                return

    else:
        with open(path, 'r') as f:
            config = json.loads(f.read())

        _SETTINGS_PATH = path

        mod_dict = globals()
        for k, v in config.items():
            mod_dict[k] = v

    if override_settings:
        mod_dict = globals()
        for k, v in override_settings.items():
            mod_dict[k] = v

def log_level():
    return _log_levels.get(str(LOG_LEVEL).lower(), logging.INFO)

def init(override_settings=None):
    global _INITIALIZED

    if _INITIALIZED:
        return

    try:
        load_config(override_settings=override_settings)
        setup_basic_logging(filename=LOG_FILENAME, level=log_level())

        if _SETTINGS_PATH:
            logging.debug(f"Loaded config from: {_SETTINGS_PATH}")

        else:
            logging.debug("Loaded default config")

    except ValueError as e:
        if override_settings:
            globals().update(override_settings)

        setup_basic_logging(level=log_level())

        logging.error(f"Parse error in config file: {e}")

    _INITIALIZED = True
