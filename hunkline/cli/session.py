"""Attach helpers shared by the CLI commands."""

import os
from pathlib import Path
from typing import List, Optional

import click

from hunkline.core.config import Config, get_config
from hunkline.core.file import FileObject
from hunkline.core.repository import RepositoryRegistry
from hunkline.core.runner import split_output
from hunkline.core.version import Version, detect_version, parse_version
from hunkline.cli.output import error


async def load_version(config: Config) -> Version:
    """Use the configured git version, or ask git when set to 'auto'."""
    value = config.get('core', 'version')
    if value == 'auto':
        return await detect_version(config.get('core', 'command'))
    return parse_version(value)


async def make_registry(config: Optional[Config] = None) -> RepositoryRegistry:
    """Build a repository registry from the global configuration."""
    config = config or get_config()
    return RepositoryRegistry(
        await load_version(config),
        command=config.get('core', 'command'),
        yadm=config.get_bool('yadm', 'enable'),
    )


async def attach(path: str) -> FileObject:
    """
    Attach to a file or abort the command.

    Args:
        path: File path as given on the command line

    Returns:
        FileObject
    """
    registry = await make_registry()
    obj = await FileObject.new(os.path.abspath(path), registry=registry)
    if obj is None:
        click.echo(error(f"Not in a git repository: {path}"))
        raise click.Abort()
    return obj


def read_buffer(obj: FileObject) -> List[str]:
    """Read the work tree copy of a file the way an editor buffer holds it."""
    path = Path(obj.file)
    if not path.exists():
        return []
    return split_output(path.read_bytes().decode(obj.encoding, errors='replace'))
