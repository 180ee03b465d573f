"""Hunk records and the git-backed diff used to produce them."""

import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from hunkline.core.runner import JobSpec, run_job

logger = logging.getLogger(__name__)


@dataclass
class HunkSide:
    """One side (removed or added) of a hunk."""
    start: int
    count: int
    lines: List[str] = field(default_factory=list)


class Hunk:
    """Represents a single hunk (continuous block of changes) in a diff."""

    def __init__(self, old_start: int, old_count: int, new_start: int, new_count: int):
        self.removed = HunkSide(old_start, old_count)
        self.added = HunkSide(new_start, new_count)

    @property
    def type(self) -> str:
        """One of 'add', 'delete' or 'change'."""
        if self.removed.count == 0:
            return 'add'
        if self.added.count == 0:
            return 'delete'
        return 'change'

    def add_line(self, line: str) -> None:
        """Add a '-' or '+' prefixed line to this hunk."""
        if line.startswith('-'):
            self.removed.lines.append(line[1:])
        elif line.startswith('+'):
            self.added.lines.append(line[1:])

    def __str__(self):
        return (f"@@ -{self.removed.start},{self.removed.count} "
                f"+{self.added.start},{self.added.count} @@")

    def __repr__(self):
        return f"Hunk({self.type} {self})"


def _parse_range(part: str):
    if ',' in part:
        start, count = part.split(',', 1)
        return int(start), int(count)
    return int(part), 1


def parse_diff_line(line: str) -> Hunk:
    """
    Parse a hunk header.

    Format: @@ -old_start[,old_count] +new_start[,new_count] @@

    Args:
        line: Header line

    Returns:
        Hunk with no content lines yet
    """
    parts = line.split('@@')[1].strip().split()
    old_start, old_count = _parse_range(parts[0][1:])
    new_start, new_count = _parse_range(parts[1][1:])
    return Hunk(old_start, old_count, new_start, new_count)


def parse_diff_output(lines: Sequence[str]) -> List[Hunk]:
    """Parse zero-context diff output into hunks."""
    hunks: List[Hunk] = []
    for line in lines:
        if line.startswith('@@'):
            hunks.append(parse_diff_line(line))
        elif hunks:
            hunks[-1].add_line(line)
    return hunks


async def run_diff(file_cmp: str, file_buf: str, indent_heuristic: bool = False,
                   diff_algo: str = 'myers', command: str = 'git',
                   runner=run_job) -> List[Hunk]:
    """
    Let git compute the hunks between two files.

    Args:
        file_cmp: Path of the base text
        file_buf: Path of the current text
        indent_heuristic: Use git's indent heuristic
        diff_algo: myers, minimal, patience or histogram
        command: git executable
        runner: Process runner

    Returns:
        List of Hunk objects
    """
    results, _ = await runner(JobSpec(
        command=command,
        args=[
            '-c', 'core.safecrlf=false',
            'diff',
            '--no-index',
            '--color=never',
            '--no-ext-diff',
            '--indent-heuristic' if indent_heuristic else '--no-indent-heuristic',
            f'--diff-algorithm={diff_algo}',
            '--patch-with-raw',
            '--unified=0',
            file_cmp,
            file_buf,
        ],
        suppress_stderr=True,
    ))
    return parse_diff_output(results)


async def diff_lines(base: Sequence[str], current: Sequence[str], **kwargs) -> List[Hunk]:
    """
    Diff two in-memory texts through temporary files.

    Keyword arguments are passed on to run_diff().
    """
    with tempfile.TemporaryDirectory(prefix='hunkline-') as tmpdir:
        file_cmp = Path(tmpdir) / 'base'
        file_buf = Path(tmpdir) / 'current'
        file_cmp.write_text(''.join(f"{line}\n" for line in base), encoding='utf-8')
        file_buf.write_text(''.join(f"{line}\n" for line in current), encoding='utf-8')
        return await run_diff(str(file_cmp), str(file_buf), **kwargs)
