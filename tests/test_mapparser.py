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

from taskingmap.mapparser import TaskingMapParser, MemoryRegion, Symbol, Section, MemoryStats, slice_section
from taskingmap.mapparser import SYMBOLS_BY_NAME, SYMBOLS_BY_ADDRESS, LOCATE_RULES


def memory_map(*rows):
    lines = ['*****  Memory usage in bytes  *****',
             '',
             '| Memory | Code | Data | Reserved | Free | Total |']
    lines.extend(rows)

    return '\n'.join(lines) + '\n'

def symbol_map(*rows, address_rows=()):
    lines = [SYMBOLS_BY_NAME, '', '| Name | Address | Space |']
    lines.extend(rows)
    lines.extend(['', SYMBOLS_BY_ADDRESS, ''])
    lines.extend(address_rows)

    return '\n'.join(lines) + '\n'

def link_map(*rows):
    lines = ['*****  Link Result  *****', '']
    lines.extend(rows)

    return '\n'.join(lines) + '\n'


@pytest.fixture
def parser(sample_text):
    return TaskingMapParser(sample_text)


def test_memory_region_row():
    p = TaskingMapParser(memory_map('| FLASH | 0x1000 | 0x200 | 0x0 | 0x3E00 | 0x5000 |'))

    assert p.parse_memory_usage() == [MemoryRegion('FLASH', 4096, 512, 0, 15872, 20480)]

def test_memory_skips_header_and_total(parser):
    regions = parser.parse_memory_usage()

    assert [r.name for r in regions] == ['FLASH', 'RAM']
    assert regions[1] == MemoryRegion('RAM', 0, 0x800, 0x100, 0x700, 0x1000)

def test_memory_total_row_not_last():
    p = TaskingMapParser(memory_map(
        '| Total | 0x10 | 0x0 | 0x0 | 0x0 | 0x10 |',
        '| PSPR | 0x10 | 0x0 | 0x0 | 0x0 | 0x10 |',
        '| Memory | 0x1 | 0x1 | 0x1 | 0x1 | 0x1 |'))

    assert [r.name for r in p.parse_memory_usage()] == ['PSPR']

def test_memory_repeated_region_is_appended():
    p = TaskingMapParser(memory_map(
        '| RAM | 0x1 | 0x0 | 0x0 | 0x0 | 0x10 |',
        '| RAM | 0x2 | 0x0 | 0x0 | 0x0 | 0x10 |'))

    assert [r.code for r in p.parse_memory_usage()] == [1, 2]

def test_memory_requires_hex_prefix():
    p = TaskingMapParser(memory_map('| FLASH | 1000 | 0x200 | 0x0 | 0x3E00 | 0x5000 |'))

    assert p.parse_memory_usage() == []

def test_memory_banner_case_and_spacing():
    p = TaskingMapParser('**  MEMORY   usage in\tBYTES  **\n| DSPR | 0x4 | 0x4 | 0x0 | 0x8 | 0x10 |\n')

    assert p.parse_memory_usage() == [MemoryRegion('DSPR', 4, 4, 0, 8, 16)]

def test_memory_stops_at_next_banner():
    text = memory_map('| FLASH | 0x1 | 0x0 | 0x0 | 0x0 | 0x1 |')
    text += '*****  Other  *****\n| LATE | 0x1 | 0x0 | 0x0 | 0x0 | 0x1 |\n'

    assert [r.name for r in TaskingMapParser(text).parse_memory_usage()] == ['FLASH']

def test_symbol_row():
    p = TaskingMapParser(symbol_map('| main | 0x08001234 | DATA |'))

    assert p.parse_symbols() == [Symbol(name='main', address='0x08001234', space='DATA')]

def test_symbols_first_occurrence_wins(parser):
    symbols = parser.parse_symbols()

    assert [s.name for s in symbols] == ['_start', 'main', 'table']
    assert symbols[1] == Symbol('main', '0x08001234', 'DATA')
    assert symbols[2].space == ''

def test_symbols_ignore_address_listing():
    p = TaskingMapParser(symbol_map('| main | 0x08001234 | DATA |',
                                    address_rows=['| late | 0x1 | DATA |', '| main | 0x2 | CODE |']))

    assert [(s.name, s.address) for s in p.parse_symbols()] == [('main', '0x08001234')]

def test_symbols_without_address_listing():
    text = SYMBOLS_BY_NAME + '\n| a | 0x1 | X |\n| b | 0x2 | Y |\n'

    assert [s.name for s in TaskingMapParser(text).parse_symbols()] == ['a', 'b']

def test_symbol_header_by_value():
    p = TaskingMapParser(symbol_map('| Name | 0x0 | Space |', '| foo | 0x10 | CODE |'))

    assert [s.name for s in p.parse_symbols()] == ['foo']

def test_symbol_address_kept_verbatim():
    p = TaskingMapParser(symbol_map('| foo | 0x000000AB | CODE |'))

    assert p.get_symbol_address('foo') == '0x000000AB'

def test_symbol_section_column():
    p = TaskingMapParser(symbol_map('| foo | 0x10 | CODE | .text.foo |',
                                    '| bar | 0x20 | DATA |'))

    foo, bar = p.parse_symbols()

    assert foo.section == '.text.foo'
    assert foo.space == 'CODE'
    assert bar.section is None

def test_symbols_in_section():
    p = TaskingMapParser(symbol_map('| foo | 0x10 | CODE | .text.foo |',
                                    '| bar | 0x20 | DATA | .bss.bar |',
                                    '| baz | 0x30 | DATA |'))

    assert [s.name for s in p.get_symbols_in_section('.text')] == ['foo']
    assert [s.name for s in p.get_symbols_in_section('bar')] == ['bar']

def test_symbols_in_section_three_columns(parser):
    assert parser.get_symbols_in_section('.text') == []

def test_link_result_row():
    p = TaskingMapParser(link_map('| obj.o | .text.main | 0x00000120 | 0x08000100 | .text | 0x00000000 |'))

    assert p.parse_sections() == [Section('obj.o', '.text.main', 288, 134217984, '.text')]

def test_link_result_skips_continuation(parser):
    sections = parser.parse_sections()

    assert [s.file for s in sections] == ['obj.o', 'util.o']
    assert sections[1] == Section('util.o', '.data.table', 0x40, 0x70000000, '.data')

def test_link_result_name_with_spaces():
    p = TaskingMapParser(link_map('| a.o | .text.a (cloned) | 0x4 | 0x8 | .text code | 0x4 |'))

    s, = p.parse_sections()

    assert s.name == '.text.a (cloned)'
    assert s.output_section == '.text code'

def test_link_result_separator_not_a_row():
    p = TaskingMapParser(link_map('| [in] File | [in] Section | [in] Size | [out] Offset | [out] Section | [out] Size |',
                                  '|==========================================================================|',
                                  '| a.o | .text.a | 0x4 | 0x8 | .text | 0x4 |'))

    assert [s.file for s in p.parse_sections()] == ['a.o']

def test_total_memory_stats(parser):
    assert parser.get_total_memory_stats() == MemoryStats(used=6912, total=24576, percentage=28.125)

def test_total_memory_stats_empty():
    stats = TaskingMapParser('').get_total_memory_stats()

    assert stats == MemoryStats(0, 0, 0)
    assert isinstance(stats.percentage, float)

def test_total_memory_stats_zero_total():
    p = TaskingMapParser(memory_map('| X | 0x1 | 0x0 | 0x0 | 0x0 | 0x0 |'))

    assert p.get_total_memory_stats() == MemoryStats(1, 0, 0)

def test_find_symbol(parser):
    assert parser.find_symbol('_start') == Symbol('_start', '0x08000000', 'CODE')
    assert parser.get_symbol_address('main') == '0x08001234'

@pytest.mark.parametrize('name', ['', 'late_sym', 'Name', 'Total', 'Memory', 'MAIN'])
def test_find_symbol_missing(parser, name):
    assert parser.find_symbol(name) is None
    assert parser.get_symbol_address(name) is None

def test_missing_sections():
    p = TaskingMapParser('nothing to see here\n')

    assert p.extract_section('Link Result') is None
    assert p.extract_section('Memory usage in bytes') is None
    assert p.parse_memory_usage() == []
    assert p.parse_symbols() == []
    assert p.parse_sections() == []
    assert p.get_symbols_in_section('') == []

def test_extract_section_runs_to_end():
    p = TaskingMapParser('*** Tail ***\nline 1\nline 2')

    assert p.extract_section('tail') == '\nline 1\nline 2'

def test_slice_section(sample_text):
    section, offset = slice_section(sample_text, SYMBOLS_BY_ADDRESS, LOCATE_RULES)

    assert offset == sample_text.index(SYMBOLS_BY_ADDRESS)
    assert section.startswith(SYMBOLS_BY_ADDRESS)
    assert LOCATE_RULES not in section
    assert sample_text[offset:offset + len(section)] == section

def test_slice_section_without_end(sample_text):
    section, offset = slice_section(sample_text, LOCATE_RULES, '* Not There')

    assert section == sample_text[offset:]

def test_slice_section_missing(sample_text):
    assert slice_section(sample_text, '* Not There') == ('', 0)

def test_results_are_recomputed(parser):
    assert parser.parse_symbols() == parser.parse_symbols()
    assert parser.parse_symbols() is not parser.parse_symbols()
