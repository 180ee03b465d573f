"""Stage and unstage commands - move hunks in and out of the index."""

import asyncio

import click

from hunkline.cli.output import error, hunk_line, info, success, warning
from hunkline.cli.session import attach, read_buffer
from hunkline.core.config import get_config
from hunkline.operations.diff import diff_lines


async def _hunks(obj, base_rev, current):
    config = get_config(obj.repo.gitdir)
    if obj.has_conflicts:
        # Staging resets a conflicted entry to the common ancestor first
        base_rev = ':1'
    base = []
    if obj.object_name:
        base, _ = await obj.get_show_text(base_rev)
    return await diff_lines(
        base, current,
        diff_algo=config.get('diff', 'algorithm'),
        indent_heuristic=config.get_bool('diff', 'indent_heuristic'),
        command=obj.repo.command_name,
    )


def _select(hunks, numbers):
    if not numbers:
        return hunks
    selected = []
    for n in sorted(set(numbers)):
        if n < 1 or n > len(hunks):
            click.echo(error(f"No hunk {n} (file has {len(hunks)})"))
            raise click.Abort()
        selected.append(hunks[n - 1])
    return selected


def _print_hunks(hunks):
    for n, hunk in enumerate(hunks, 1):
        click.echo(hunk_line(f"{hunk}  [{n}]"))
        for line in hunk.removed.lines:
            click.echo(hunk_line(f"-{line}"))
        for line in hunk.added.lines:
            click.echo(hunk_line(f"+{line}"))


async def _stage(path, numbers, dry_run):
    obj = await attach(path)
    hunks = await _hunks(obj, ':0', read_buffer(obj))
    if not hunks:
        click.echo(info("Nothing to stage"))
        return

    if dry_run:
        _print_hunks(hunks)
        return

    selected = _select(hunks, numbers)
    await obj.stage_hunks(selected)
    await obj.update_file_info()
    click.echo(success(f"Staged {len(selected)} of {len(hunks)} hunk(s) in {obj.relpath}"))


async def _unstage(path, numbers, dry_run):
    obj = await attach(path)

    if not numbers and not dry_run:
        await obj.unstage_file()
        await obj.update_file_info()
        click.echo(success(f"Unstaged {obj.relpath}"))
        return

    if not obj.repo.abbrev_head:
        click.echo(warning("No commits yet; unstage the whole file instead"))
        raise click.Abort()

    index_lines, _ = await obj.get_show_text(':0')
    head_lines, _ = await obj.get_show_text('HEAD')
    config = get_config(obj.repo.gitdir)
    hunks = await diff_lines(
        head_lines, index_lines,
        diff_algo=config.get('diff', 'algorithm'),
        indent_heuristic=config.get_bool('diff', 'indent_heuristic'),
        command=obj.repo.command_name,
    )
    if not hunks:
        click.echo(info("Nothing staged"))
        return

    if dry_run:
        _print_hunks(hunks)
        return

    selected = _select(hunks, numbers)
    await obj.stage_hunks(selected, invert=True)
    await obj.update_file_info()
    click.echo(success(f"Unstaged {len(selected)} of {len(hunks)} hunk(s) in {obj.relpath}"))


@click.command('stage')
@click.argument('path')
@click.option('-n', '--hunk', 'numbers', type=int, multiple=True,
              help='Hunk number to stage (repeatable); default is all')
@click.option('--dry-run', is_flag=True, help='List the hunks instead of staging')
def stage_cmd(path, numbers, dry_run):
    """
    Stage hunks of a file without touching the work tree.

    Examples:
        hunkline stage file.txt --dry-run
        hunkline stage file.txt -n 1 -n 3
    """
    asyncio.run(_stage(path, numbers, dry_run))


@click.command('unstage')
@click.argument('path')
@click.option('-n', '--hunk', 'numbers', type=int, multiple=True,
              help='Staged hunk number to unstage (repeatable); default is the whole file')
@click.option('--dry-run', is_flag=True, help='List the staged hunks instead')
def unstage_cmd(path, numbers, dry_run):
    """
    Take staged changes of a file back out of the index.

    Examples:
        hunkline unstage file.txt
        hunkline unstage file.txt -n 2
    """
    asyncio.run(_unstage(path, numbers, dry_run))
