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

import pytest

from taskingmap import settings
from taskingmap import mapfiles


SAMPLE_MAP = """\
TASKING VX-toolset for TriCore: object linker
Date   : Oct 18, 2026 10:00:00
Version: v6.3r1

*******************************************  Link Result  *******************************************

[in]  = local section name
[out] = global section name

+--------------------------------------------------------------------------------------------------+
| [in] File    | [in] Section   | [in] Size (MAU) | [out] Offset | [out] Section | [out] Size (MAU) |
|==================================================================================================|
| obj.o        | .text.main     | 0x00000120      | 0x08000100   | .text         | 0x00000120       |
|--------------------------------------------------------------------------------------------------|
| [in]         | .text.extra    | 0x00000010      | 0x08000220   | .text         | 0x00000010       |
|--------------------------------------------------------------------------------------------------|
| util.o       | .data.table    | 0x00000040      | 0x70000000   | .data         | 0x00000040       |
+--------------------------------------------------------------------------------------------------+

*******************************************  Memory usage in bytes  *******************************************

+-----------------------------------------------------------------+
| Memory   | Code     | Data     | Reserved | Free     | Total    |
|=================================================================|
| FLASH    | 0x1000   | 0x200    | 0x0      | 0x3E00   | 0x5000   |
| RAM      | 0x0      | 0x800    | 0x100    | 0x700    | 0x1000   |
|-----------------------------------------------------------------|
| Total    | 0x1000   | 0xa00    | 0x100    | 0x4500   | 0x6000   |
+-----------------------------------------------------------------+

*******************************************  Symbols  *******************************************

* Symbols (sorted on name)
  ========================

+---------------------------------------+
| Name      | Address    | Space        |
|=======================================|
| _start    | 0x08000000 | CODE         |
| main      | 0x08001234 | DATA         |
| main      | 0x08009999 | CODE         |
| table     | 0x70000000 |              |
+---------------------------------------+

* Symbols (sorted on address)
  ===========================

+---------------------------------------+
| Address    | Name      | Space        |
|=======================================|
| 0x08000000 | _start    | CODE         |
| 0x08001234 | main      | DATA         |
| 0x70000000 | table     |              |
| 0x80000000 | late_sym  | DATA         |
+---------------------------------------+

* Locate Rules
  ============

"""


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
    # keep tests away from the user's config, data dir and log handlers
    monkeypatch.setattr(settings, '_INITIALIZED', True)
    monkeypatch.setattr(settings, 'HIGHLIGHT_ONLY', False)
    monkeypatch.setattr(mapfiles, 'data_dir', lambda: str(tmp_path / '_data'))

@pytest.fixture
def sample_text():
    return SAMPLE_MAP

@pytest.fixture
def workspace(tmp_path):
    path = tmp_path / 'workspace'
    path.mkdir()

    return path

@pytest.fixture
def map_file(workspace):
    path = workspace / 'firmware.map'
    path.write_text(SAMPLE_MAP)

    return path
