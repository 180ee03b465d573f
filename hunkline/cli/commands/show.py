"""Show command - print a file as stored at a revision."""

import asyncio

import click

from hunkline.cli.output import error
from hunkline.cli.session import attach


async def _show(path, rev):
    obj = await attach(path)
    lines, stderr = await obj.get_show_text(rev)
    if not lines and stderr:
        click.echo(error(stderr.strip()))
        raise click.Abort()

    for line in lines:
        click.echo(line)


@click.command('show')
@click.argument('path')
@click.option('-r', '--rev', default=':0', show_default=True,
              help="Revision; ':0' is the index")
def show_cmd(path, rev):
    """
    Print a file as stored in the index or at a revision.

    Examples:
        hunkline show file.txt
        hunkline show file.txt --rev HEAD~1
    """
    asyncio.run(_show(path, rev))
