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


def format_bytes(n):
    if n < 1024:
        return f'{n}B'

    if n < 1024 * 1024:
        return f'{n / 1024:.1f}KB'

    return f'{n / (1024 * 1024):.1f}MB'

def region_usage(region):
    used = region.code + region.data + region.reserved

    if region.total > 0:
        percentage = (used / region.total) * 100

    else:
        percentage = 0.0

    return used, percentage

def describe_region(region):
    used, percentage = region_usage(region)

    return f'{percentage:.1f}% ({format_bytes(used)} / {format_bytes(region.total)})'

def region_tooltip(region):
    return '\n'.join([region.name,
                      f'Code: {format_bytes(region.code)}',
                      f'Data: {format_bytes(region.data)}',
                      f'Reserved: {format_bytes(region.reserved)}',
                      f'Free: {format_bytes(region.free)}',
                      f'Total: {format_bytes(region.total)}'])

def symbol_tooltip(symbol):
    lines = [symbol.name,
             f'Address: {symbol.address}',
             f'Space: {symbol.space}']

    if symbol.section:
        lines.append(f'Section: {symbol.section}')

    return '\n'.join(lines)
