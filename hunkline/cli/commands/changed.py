"""Changed command - list files modified in the work tree."""

import asyncio
import os

import click

from hunkline.cli.output import error, info
from hunkline.cli.session import make_registry


async def _changed(path):
    registry = await make_registry()
    repo = await registry.get(os.path.abspath(path))
    if repo is None:
        click.echo(error(f"Not in a git repository: {path}"))
        raise click.Abort()

    files = await repo.files_changed()
    if not files:
        click.echo(info("No unstaged modifications"))
        return

    for name in files:
        click.echo(name)


@click.command('changed')
@click.argument('path', default='.')
def changed_cmd(path):
    """
    List files whose work tree copy differs from the index.

    Examples:
        hunkline changed
        hunkline changed ~/src/project
    """
    asyncio.run(_changed(path))
