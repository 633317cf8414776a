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
import threading

from appdirs import user_data_dir

from . import settings
from .common.util import coerce_to_list, file_hash, read_text
from .exceptions import MapFileNotFound
from .mapparser import TaskingMapParser


STATE_FILENAME = 'selection.json'


def data_dir():
    return user_data_dir('taskingmap')

def state_file():
    return os.path.join(data_dir(), STATE_FILENAME)

def is_map_file_name(name):
    ext = os.path.splitext(name)[1].lower()

    return ext in [e.lower() for e in settings.MAP_EXTENSIONS]

def collect_map_files(folder):
    results = []

    for root, dirs, files in os.walk(folder):
        dirs[:] = [d for d in dirs if d not in settings.SKIP_DIRS]

        for name in files:
            if is_map_file_name(name):
                results.append(os.path.join(root, name))

    return sorted(results)

def list_workspace_map_files(folders):
    results = []
    for folder in coerce_to_list(folders):
        results.extend(collect_map_files(folder))

    return results

def is_in_workspace(path, folders):
    path = os.path.abspath(path)

    for folder in coerce_to_list(folders):
        try:
            rel = os.path.relpath(path, os.path.abspath(folder))

        except ValueError:
            # different drive
            continue

        if rel == os.curdir:
            return True

        if not rel.startswith(os.pardir) and not os.path.isabs(rel):
            return True

    return False

def save_selection(path):
    filename = state_file()
    os.makedirs(os.path.dirname(filename), exist_ok=True)

    with open(filename, 'w') as f:
        f.write(json.dumps({'path': path}))

def load_selection():
    try:
        with open(state_file(), 'r') as f:
            return json.loads(f.read()).get('path')

    except (IOError, ValueError):
        return None


class MapSession(object):
    """The currently selected map file and a parser over its text"""
    def __init__(self, folders=None):
        if not folders:
            folders = [os.getcwd()]

        self.folders = [os.path.abspath(f) for f in coerce_to_list(folders)]
        self.path = None
        self.parser = None

    def __str__(self):
        return f'MapSession({self.path})'

    def select(self, path, allow_external=False):
        path = os.path.abspath(path)

        if not allow_external and not is_in_workspace(path, self.folders):
            logging.debug(f'Ignoring MAP file outside workspace: {path}')
            return False

        if not os.path.isfile(path):
            raise MapFileNotFound(path)

        self.parser = TaskingMapParser(read_text(path))
        self.path = path

        logging.debug(f'Using MAP file: {os.path.basename(path)}')

        return True

    def clear(self):
        self.path = None
        self.parser = None

    def reload(self):
        if self.path is None:
            return False

        return self.select(self.path, allow_external=True)

    def candidates(self):
        return [os.path.abspath(p) for p in list_workspace_map_files(self.folders)]

    def ensure_selected(self, chooser=None):
        if self.parser is not None and self.path is not None:
            if is_in_workspace(self.path, self.folders):
                return True

            self.clear()

        candidates = self.candidates()

        if len(candidates) == 0:
            return False

        if len(candidates) == 1:
            return self.select(candidates[0])

        if chooser is None:
            return False

        picked = chooser(candidates)
        if not picked:
            return False

        return self.select(picked, allow_external=not is_in_workspace(picked, self.folders))


class MapWatcher(threading.Thread):
    def __init__(self, session, interval=None):
        super().__init__()

        self.session = session
        self.filename = session.path
        self.interval = interval or settings.WATCH_INTERVAL

        self._file_hash = self._get_hash()

        self.daemon = True

        self._event = threading.Event()
        self._stop_event = threading.Event()

    def _get_hash(self):
        try:
            return file_hash(self.filename)

        except FileNotFoundError:
            return None

    def poll(self):
        # locked or half-written files are retried on the next poll
        try:
            new_hash = self._get_hash()

        except OSError as e:
            logging.warning(f'Unable to read MAP file {self.filename}: {e}')
            return False

        if new_hash == self._file_hash:
            return False

        if new_hash is None:
            logging.info(f'MAP file removed: {self.filename}')
            self.session.clear()

        else:
            try:
                self.session.select(self.filename, allow_external=True)

            except (OSError, MapFileNotFound) as e:
                logging.warning(f'Unable to reload MAP file {self.filename}: {e}')
                return False

            logging.info(f'MAP file changed: {self.filename}')

        self._file_hash = new_hash
        self._event.set()

        return True

    def run(self):
        while not self._stop_event.is_set():
            self.poll()

            self._stop_event.wait(self.interval)

    def changed(self):
        is_changed = self._event.is_set()

        if is_changed:
            self._event.clear()

        return is_changed

    def stop(self):
        self._stop_event.set()
