"""Main CLI entry point for hunkline."""

import logging

import click
from colorama import init

from hunkline import __version__
from hunkline.cli.output import BANNER
from hunkline.cli.commands import (info_cmd, changed_cmd, show_cmd, blame_cmd,
                                   stage_cmd, unstage_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class HunklineGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=HunklineGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log every git command')
def cli(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


# Register commands
cli.add_command(info_cmd)
cli.add_command(changed_cmd)
cli.add_command(show_cmd)
cli.add_command(blame_cmd)
cli.add_command(stage_cmd)
cli.add_command(unstage_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
