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
import time
import logging

import click

from . import VERSION
from . import settings
from .exceptions import MapFileNotFound, NoMapSelected
from .mapfiles import MapSession, MapWatcher, load_selection, save_selection
from .navigation import locate_symbol_row, find_definition, hover_text
from .report import describe_region, format_bytes, region_tooltip, symbol_tooltip


NAME_COLOR = 'cyan'
ADDR_COLOR = 'yellow'
VAL_COLOR = 'green'


def choose_map(candidates):
    click.echo('Select a MAP file:')

    for i, path in enumerate(candidates):
        click.echo(f'  {i + 1:2}: {path}')

    index = click.prompt('MAP file', type=click.IntRange(1, len(candidates)))

    return candidates[index - 1]

def get_session(ctx):
    session = ctx.obj['SESSION']

    if session.parser is not None:
        return session

    try:
        if ctx.obj['MAP']:
            session.select(ctx.obj['MAP'], allow_external=True)
            return session

        remembered = load_selection()
        if remembered and os.path.isfile(remembered) and session.select(remembered):
            return session

        if not session.ensure_selected():
            raise NoMapSelected()

    except (MapFileNotFound, NoMapSelected) as e:
        raise click.ClickException(str(e))

    return session

def echo_memory(session, details=False):
    parser = session.parser
    if parser is None:
        click.echo('MAP file is gone.')
        return

    regions = parser.parse_memory_usage()
    if len(regions) == 0:
        click.echo('No memory usage section in this MAP file.')
        return

    for region in regions:
        click.echo(f"{click.style(f'{region.name:<24}', fg=NAME_COLOR)} {describe_region(region)}")

        if details:
            for line in region_tooltip(region).splitlines()[1:]:
                click.echo(f"    {line}")

    stats = parser.get_total_memory_stats()
    click.echo(f"{'Total':<24} {stats.percentage:.1f}% ({format_bytes(stats.used)} / {format_bytes(stats.total)})")


@click.group(invoke_without_command=True)
@click.pass_context
@click.option('--map', '-m', 'map_path', default=None, type=click.Path(dir_okay=False), help='MAP file to use.  Overrides the remembered selection.')
@click.option('--workspace', '-w', multiple=True, type=click.Path(file_okay=False), help='Folder to search for MAP files.  Defaults to the current directory.')
@click.option('--log-level', default=None, type=click.Choice(['debug', 'info', 'warning', 'error']), help='Console log level.')
@click.version_option(VERSION, message='v%(version)s')
def cli(ctx, map_path, workspace, log_level):
    """TASKING MAP file viewer

    Reads memory usage, symbols and linked sections from a TASKING linker
    MAP file.  Without --map, the file chosen by the last select command is
    used, or the only MAP file found in the workspace.

    \b
    taskingmap select
        Choose a MAP file from the workspace and remember it.

    \b
    taskingmap goto main
        Print the location of the row for 'main' in the MAP file.

    """
    overrides = {}
    if log_level:
        overrides['LOG_LEVEL'] = log_level

    settings.init(override_settings=overrides)

    ctx.ensure_object(dict)
    ctx.obj['MAP'] = map_path
    ctx.obj['SESSION'] = MapSession(list(workspace))

    if ctx.invoked_subcommand is None:
        click.echo("No command given.  Run with --help for documentation.")
        return

    if settings.HIGHLIGHT_ONLY:
        click.echo('MAP views are disabled by the HIGHLIGHT_ONLY setting.')
        ctx.exit(0)


@cli.command()
@click.pass_context
def select(ctx):
    """Choose the MAP file to use"""
    session = ctx.obj['SESSION']

    try:
        if ctx.obj['MAP']:
            ok = session.select(ctx.obj['MAP'], allow_external=True)

        else:
            ok = session.ensure_selected(chooser=choose_map)

    except MapFileNotFound as e:
        raise click.ClickException(str(e))

    if not ok:
        raise click.ClickException('No MAP files found')

    save_selection(session.path)

    click.echo(f'Using MAP file: {os.path.basename(session.path)}')


@cli.command()
@click.pass_context
@click.option('--details', is_flag=True, help='Show the code, data, reserved and free split for each region.')
def memory(ctx, details):
    """Memory usage per region"""
    echo_memory(get_session(ctx), details=details)


@cli.command()
@click.pass_context
def stats(ctx):
    """Total memory usage"""
    parser = get_session(ctx).parser
    s = parser.get_total_memory_stats()

    click.echo(f'Used:  {s.used} bytes ({format_bytes(s.used)})')
    click.echo(f'Total: {s.total} bytes ({format_bytes(s.total)})')
    click.echo(f'Usage: {s.percentage:.1f}%')


@cli.command()
@click.pass_context
@click.option('--space', default=None, help='Only symbols whose space contains this text.')
@click.option('--section', default=None, help='Only symbols placed in a matching section.')
def symbols(ctx, space, section):
    """List symbols"""
    parser = get_session(ctx).parser

    if section:
        result = parser.get_symbols_in_section(section)

    else:
        result = parser.parse_symbols()

    if space:
        result = [s for s in result if space in s.space]

    for s in result:
        click.echo(f"{click.style(f'{s.name:<40}', fg=NAME_COLOR)} {click.style(s.address, fg=ADDR_COLOR)} {s.space}")

    logging.debug(f'{len(result)} symbols')


@cli.command()
@click.pass_context
def sections(ctx):
    """List linked sections"""
    parser = get_session(ctx).parser

    for s in parser.parse_sections():
        click.echo(f'{s.file:<24} {s.name:<32} {s.size:>8} 0x{s.offset:08x} {s.output_section}')


@cli.command()
@click.pass_context
@click.argument('name')
def find(ctx, name):
    """Show a symbol"""
    symbol = get_session(ctx).parser.find_symbol(name)

    if symbol is None:
        click.echo(f"Symbol '{name}' not found in MAP file", err=True)
        ctx.exit(1)

    click.echo(symbol_tooltip(symbol))


@cli.command()
@click.pass_context
@click.argument('name')
def address(ctx, name):
    """Print the address of a symbol"""
    addr = get_session(ctx).parser.get_symbol_address(name)

    if addr is None:
        click.echo(f"Symbol '{name}' not found in MAP file", err=True)
        ctx.exit(1)

    click.echo(addr)


@cli.command()
@click.pass_context
@click.argument('name')
def goto(ctx, name):
    """Print the location of a symbol's row in the address listing"""
    session = get_session(ctx)
    symbol = session.parser.find_symbol(name)

    if symbol is None:
        click.echo(f"Symbol '{name}' not found in MAP file", err=True)
        ctx.exit(1)

    pos = locate_symbol_row(session.parser.content, symbol)

    if pos is None:
        click.echo(f"Symbol '{name}' found (addr={symbol.address}) but its row wasn't found in the MAP section", err=True)
        ctx.exit(1)

    click.echo(f'{session.path}:{pos.line + 1}:{pos.column + 1}')


@cli.command()
@click.pass_context
@click.argument('word')
def definition(ctx, word):
    """Print where a source identifier is defined in the MAP file"""
    session = get_session(ctx)
    pos = find_definition(session.parser.content, session.parser, word)

    if pos is None:
        click.echo(f"Symbol '{word}' not found in MAP file", err=True)
        ctx.exit(1)

    click.echo(f'{session.path}:{pos.line + 1}:{pos.column + 1}')


@cli.command()
@click.pass_context
@click.argument('word')
def hover(ctx, word):
    """Print hover text for a source identifier"""
    text = hover_text(get_session(ctx).parser, word)

    if text is None:
        click.echo(f"Symbol '{word}' not found in MAP file", err=True)
        ctx.exit(1)

    click.echo(text)


@cli.command()
@click.pass_context
def watch(ctx):
    """Print memory usage each time the MAP file changes"""
    session = get_session(ctx)

    echo_memory(session)

    watcher = MapWatcher(session)
    watcher.start()

    try:
        while True:
            time.sleep(watcher.interval)

            if watcher.changed():
                click.echo()
                echo_memory(session)

    except KeyboardInterrupt:
        pass

    finally:
        watcher.stop()


def main():
    import colored_traceback
    colored_traceback.add_hook()

    cli(obj={})


if __name__ == '__main__':
    main()
