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

"""
Turn parsed symbols back into positions inside the map text.

Positions are zero-based, the way an editor addresses a document.
"""

import re
import logging
from collections import namedtuple

from .mapparser import slice_section, SYMBOLS_BY_ADDRESS, LOCATE_RULES


MapPosition = namedtuple('MapPosition', ['offset', 'line', 'column'])


def position_at(text, offset):
    line = text.count('\n', 0, offset)
    column = offset - (text.rfind('\n', 0, offset) + 1)

    return MapPosition(offset, line, column)

def locate_symbol_row(text, symbol):
    """Find the row for symbol in the address sorted listing.

    Rows may list the address before the name or after it.  Falls back to
    searching the whole text when the listing is missing.
    """
    section, offset = slice_section(text, SYMBOLS_BY_ADDRESS, LOCATE_RULES)

    if section:
        haystack = section
        base = offset

    else:
        haystack = text
        base = 0

    name = re.escape(symbol.name)
    address = re.escape(symbol.address)

    addr_name = re.compile(rf'^\|\s*{address}\s*\|\s*{name}\b', re.MULTILINE)
    name_addr = re.compile(rf'^\|\s*{name}\b\s*\|\s*{address}\b', re.MULTILINE)

    match = addr_name.search(haystack) or name_addr.search(haystack)
    if match is None:
        logging.debug(f'No row for {symbol.name} @ {symbol.address}')
        return None

    return position_at(text, base + match.start())

def find_definition(text, parser, word):
    symbol = parser.find_symbol(word)
    if symbol is None:
        return None

    pattern = re.compile(rf'\|\s+{re.escape(word)}\s+\|\s+{re.escape(symbol.address)}')

    match = pattern.search(text)
    if match is None:
        return None

    return position_at(text, match.start())

def hover_text(parser, word):
    address = parser.get_symbol_address(word)
    if not address:
        return None

    return f'**MAP Address**: `{address}`'
