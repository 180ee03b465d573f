"""Blame command - show who last changed a line."""

import asyncio
from datetime import datetime

import click

from hunkline.cli.output import error, info, warning
from hunkline.cli.session import attach, read_buffer
from hunkline.core.config import get_config


async def _blame(path, line, ignore_whitespace):
    obj = await attach(path)
    config = get_config(obj.repo.gitdir)
    if ignore_whitespace is None:
        ignore_whitespace = config.get_bool('blame', 'ignore_whitespace')

    blame = await obj.run_blame(read_buffer(obj), line, ignore_whitespace)
    if blame is None:
        click.echo(error(f"No blame information for line {line}"))
        raise click.Abort()

    if not blame.is_committed:
        click.echo(warning(f"{blame.author} {blame.author_mail}"))
        return

    when = ''
    if blame.author_time is not None:
        when = datetime.fromtimestamp(blame.author_time).strftime('%Y-%m-%d %H:%M')

    click.echo(info(f"{blame.abbrev_sha} {blame.author} {blame.author_mail} {when}"))
    click.echo(f"    {blame.summary}")
    if blame.previous_sha:
        click.echo(f"    previous: {blame.previous_sha[:8]} {blame.previous_filename}")


@click.command('blame')
@click.argument('path')
@click.argument('line', type=int)
@click.option('-w', '--ignore-whitespace', 'ignore_whitespace', flag_value=True, default=None,
              help='Ignore whitespace-only changes')
def blame_cmd(path, line, ignore_whitespace):
    """
    Show the commit that last changed a line.

    The work tree copy of the file is used, so uncommitted edits above
    the line are taken into account.

    Examples:
        hunkline blame file.txt 42
        hunkline blame -w file.txt 42
    """
    asyncio.run(_blame(path, line, ignore_whitespace))
