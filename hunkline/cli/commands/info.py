"""Info command - show repository and index state of a file."""

import asyncio

import click

from hunkline.cli.output import info, warning
from hunkline.cli.session import attach


async def _info(path):
    obj = await attach(path)
    repo = obj.repo

    moved = await obj.has_moved()

    click.echo(info(f"toplevel:   {repo.toplevel}"))
    click.echo(info(f"gitdir:     {repo.gitdir}"))
    click.echo(info(f"head:       {repo.abbrev_head or '(no commits)'}"))
    click.echo(info(f"user:       {repo.username or '(unset)'}"))
    click.echo(info(f"path:       {obj.relpath}"))

    if moved:
        click.echo(warning(f"renamed:    {obj.orig_relpath} -> {moved}"))

    if obj.has_conflicts:
        click.echo(warning("conflicts:  yes"))

    if obj.object_name:
        click.echo(info(f"blob:       {obj.object_name}"))
        click.echo(info(f"mode:       {obj.mode_bits}"))
    elif not obj.has_conflicts:
        click.echo(warning("untracked"))

    eol = 'crlf' if obj.i_crlf else 'lf'
    weol = 'crlf' if obj.w_crlf else 'lf'
    click.echo(info(f"eol:        index={eol} worktree={weol}"))


@click.command('info')
@click.argument('path')
def info_cmd(path):
    """
    Show repository and index state of a file.

    Examples:
        hunkline info src/main.py
    """
    asyncio.run(_info(path))
