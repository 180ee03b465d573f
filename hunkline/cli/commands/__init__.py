"""CLI commands for hunkline."""

from hunkline.cli.commands.info import info_cmd
from hunkline.cli.commands.changed import changed_cmd
from hunkline.cli.commands.show import show_cmd
from hunkline.cli.commands.blame import blame_cmd
from hunkline.cli.commands.stage import stage_cmd, unstage_cmd

__all__ = ['info_cmd', 'changed_cmd', 'show_cmd', 'blame_cmd', 'stage_cmd', 'unstage_cmd']
