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
TASKING linker map parser.

Pulls memory usage, symbols and linked sections out of the textual map
report.  Nothing here raises on bad input: a missing banner or a row that
does not fit its column pattern simply yields fewer records.
"""

import re
import logging
from collections import namedtuple
from dataclasses import dataclass
from typing import Optional


MEMORY_USAGE_TITLE      = 'Memory usage in bytes'
LINK_RESULT_TITLE       = 'Link Result'
SYMBOLS_BY_NAME         = '* Symbols (sorted on name)'
SYMBOLS_BY_ADDRESS      = '* Symbols (sorted on address)'
LOCATE_RULES            = '* Locate Rules'

HEX = r'0x[0-9a-fA-F]+'

# fields never span a pipe or a line break, so a |=====| separator line
# can not be read as the first column of the row below it
WORD = r'[ \t]+([^|\s]+)[ \t]+'
TEXT = r'[ \t]+([^|\n]+?)[ \t]+'
NUM = r'[ \t]+(' + HEX + r')[ \t]+'

# | name | code | data | reserved | free | total |
MEMORY_ROW = re.compile(r'\|' + WORD + (r'\|' + NUM) * 5 + r'\|')

# | name | address | space | [section |]
SYMBOL_ROW = re.compile(
    r'^\|[ \t]*([A-Za-z_]\w*)[ \t]*'
    r'\|[ \t]*(' + HEX + r')[ \t]*'
    r'\|[ \t]*([^|\n]*)\|'
    r'(?:[ \t]*([^|\n]*?)[ \t]*\|)?',
    re.MULTILINE)

# | file | section | size | offset | output section | output size |
LINK_ROW = re.compile(r'\|' + WORD + r'\|' + TEXT + r'\|' + NUM + r'\|' + NUM + r'\|' + TEXT + r'\|' + NUM + r'\|')

MEMORY_SKIP_NAMES = ('Memory', 'Total')
SYMBOL_HEADER = 'Name'
LINK_CONTINUATION = '[in]'


@dataclass(frozen=True)
class MemoryRegion:
    name: str
    code: int
    data: int
    reserved: int
    free: int
    total: int


@dataclass(frozen=True)
class Symbol:
    name: str
    address: str
    space: str
    section: Optional[str] = None


@dataclass(frozen=True)
class Section:
    file: str
    name: str
    size: int
    offset: int
    output_section: str


@dataclass(frozen=True)
class MemoryStats:
    used: int
    total: int
    percentage: float


SectionSlice = namedtuple('SectionSlice', ['text', 'offset'])


def slice_section(text, start_marker, end_marker=None):
    """Cut text from a literal start marker up to an optional end marker.

    The returned offset is the position of the slice within text, so a
    match found inside the slice can be moved back to document coordinates
    by adding it.  A missing start marker gives an empty slice at 0.
    """
    start = text.find(start_marker)
    if start < 0:
        return SectionSlice('', 0)

    end = len(text)
    if end_marker:
        idx = text.find(end_marker, start + len(start_marker))
        if idx >= 0:
            end = idx

    return SectionSlice(text[start:end], start)


def _banner_pattern(title):
    words = [re.escape(w) for w in title.split()]

    return re.compile(r'\*+\s+' + r'\s+'.join(words) + r'\s+\*+([\s\S]*?)(?=\n\*+|\Z)',
                      re.IGNORECASE)


def _hex(*fields):
    return [int(f, 16) for f in fields]


class TaskingMapParser(object):
    def __init__(self, content):
        self._content = content

    @property
    def content(self):
        return self._content

    def extract_section(self, title):
        """Return the body of the banner block named title, or None"""
        match = _banner_pattern(title).search(self._content)
        if match is None:
            logging.debug(f'Section not found: {title}')
            return None

        return match.group(1)

    def parse_memory_usage(self):
        regions = []

        section = self.extract_section(MEMORY_USAGE_TITLE)
        if section is None:
            return regions

        for match in MEMORY_ROW.finditer(section):
            name = match.group(1)
            if name in MEMORY_SKIP_NAMES:
                continue

            try:
                code, data, reserved, free, total = _hex(*match.group(2, 3, 4, 5, 6))

            except ValueError:
                logging.debug(f'Skipping memory row: {match.group(0)}')
                continue

            regions.append(MemoryRegion(name, code, data, reserved, free, total))

        return regions

    def parse_symbols(self):
        symbols = []

        section, _ = slice_section(self._content, SYMBOLS_BY_NAME, SYMBOLS_BY_ADDRESS)
        if not section:
            return symbols

        seen = set()

        for match in SYMBOL_ROW.finditer(section):
            name, address, space, column = match.groups()

            if name == SYMBOL_HEADER:
                continue

            if name in seen:
                continue

            seen.add(name)

            symbols.append(Symbol(name, address, space.strip(), column or None))

        return symbols

    def parse_sections(self):
        sections = []

        section = self.extract_section(LINK_RESULT_TITLE)
        if section is None:
            return sections

        for match in LINK_ROW.finditer(section):
            file = match.group(1)
            if file == LINK_CONTINUATION:
                continue

            try:
                size, offset = _hex(match.group(3), match.group(4))

            except ValueError:
                logging.debug(f'Skipping link row: {match.group(0)}')
                continue

            sections.append(Section(file,
                                    match.group(2).strip(),
                                    size,
                                    offset,
                                    match.group(5).strip()))

        return sections

    def get_total_memory_stats(self):
        used = 0
        total = 0

        for region in self.parse_memory_usage():
            used += region.code + region.data + region.reserved
            total += region.total

        if total > 0:
            percentage = (used / total) * 100

        else:
            percentage = 0.0

        return MemoryStats(used, total, percentage)

    def find_symbol(self, name):
        for symbol in self.parse_symbols():
            if symbol.name == name:
                return symbol

        return None

    def get_symbol_address(self, name):
        symbol = self.find_symbol(name)
        if symbol is None:
            return None

        return symbol.address

    def get_symbols_in_section(self, section_name):
        # only tables with a fourth column carry a section
        return [s for s in self.parse_symbols() if s.section and section_name in s.section]
