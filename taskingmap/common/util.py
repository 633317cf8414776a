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
import hashlib
import logging
import logging.handlers

import colorlog


DT_FORMAT = '%Y-%m-%dT%H:%M:%S'
LOG_FORMAT = '%(levelname)s %(asctime)s.%(msecs)03d %(message)s'

logging_initialized = False


def coerce_to_list(obj):
    if isinstance(obj, str) or not hasattr(obj, '__iter__'):
        return [obj]

    return list(obj)

def file_hash(filename):
    m = hashlib.md5()

    with open(filename, 'rb') as f:
        m.update(f.read())

    return m.hexdigest()

def read_text(filename):
    # map files are ASCII, but some toolchains drop in stray latin-1 bytes
    with open(filename, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()

def setup_basic_logging(console=True, filename=None, level=logging.INFO):
    global logging_initialized

    if logging_initialized:
        return

    logging_initialized = True

    root = logging.getLogger('')
    root.setLevel(logging.DEBUG)

    if console:
        handler = colorlog.StreamHandler()
        handler.setLevel(level)
        formatter = colorlog.ColoredFormatter('%(log_color)s' + LOG_FORMAT, datefmt=DT_FORMAT)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if filename:
        path, name = os.path.split(filename)

        if len(path) > 0:
            if not os.path.exists(path):
                os.makedirs(path)

        handler = logging.handlers.RotatingFileHandler(filename, maxBytes=32*1048576, backupCount=4)
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DT_FORMAT)
        handler.setFormatter(formatter)
        root.addHandler(handler)
