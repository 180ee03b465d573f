"""Single-line blame against in-memory buffer content."""

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

IGNORE_REVS_FILE = '.git-blame-ignore-revs'

NOT_COMMITTED_NAME = 'Not Committed Yet'
NOT_COMMITTED_MAIL = '<not.committed.yet>'


@dataclass
class BlameInfo:
    """
    Blame metadata for one line.

    Fields are filled from --line-porcelain output; keys git adds in the
    future end up in extra.
    """
    sha: Optional[str] = None
    abbrev_sha: Optional[str] = None
    orig_lnum: Optional[int] = None
    final_lnum: Optional[int] = None
    author: Optional[str] = None
    author_mail: Optional[str] = None
    author_time: Optional[int] = None
    author_tz: Optional[str] = None
    committer: Optional[str] = None
    committer_mail: Optional[str] = None
    committer_time: Optional[int] = None
    committer_tz: Optional[str] = None
    summary: Optional[str] = None
    previous: Optional[str] = None
    previous_sha: Optional[str] = None
    previous_filename: Optional[str] = None
    filename: Optional[str] = None
    boundary: bool = False
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def not_committed(cls) -> 'BlameInfo':
        """Placeholder for lines that have no commit yet."""
        return cls(
            author=NOT_COMMITTED_NAME,
            author_mail=NOT_COMMITTED_MAIL,
            committer=NOT_COMMITTED_NAME,
            committer_mail=NOT_COMMITTED_MAIL,
        )

    @property
    def is_committed(self) -> bool:
        return self.sha is not None


_TEXT_KEYS = {f.name for f in fields(BlameInfo)} - {
    'sha', 'abbrev_sha', 'orig_lnum', 'final_lnum', 'boundary', 'extra',
    'previous_sha', 'previous_filename',
}
_INT_KEYS = {'author_time', 'committer_time'}


def parse_blame(output: Sequence[str]) -> Optional[BlameInfo]:
    """
    Parse git blame --line-porcelain output for a single line.

    The first line is the header "<sha> <orig_lnum> <final_lnum>"; the
    rest are "<key> <value>" pairs. Tab-prefixed lines carry the blamed
    content and are skipped.

    Args:
        output: Output lines

    Returns:
        BlameInfo, or None if there was no output
    """
    if not output:
        return None

    header = output[0].split(' ')
    info = BlameInfo(
        sha=header[0],
        abbrev_sha=header[0][:8],
        orig_lnum=int(header[1]),
        final_lnum=int(header[2]),
    )

    for line in output[1:]:
        if line.startswith('\t'):
            continue

        key, _, value = line.partition(' ')
        key = key.replace('-', '_')

        if key == 'boundary':
            info.boundary = True
        elif key in _INT_KEYS:
            setattr(info, key, int(value))
        elif key in _TEXT_KEYS:
            setattr(info, key, value)
        else:
            info.extra[key] = value

        if key == 'previous':
            parts = value.split(' ')
            info.previous_sha = parts[0]
            info.previous_filename = parts[1] if len(parts) > 1 else None

    return info


async def run_blame(obj, lines: Sequence[str], lnum: int,
                    ignore_whitespace: bool = False) -> Optional[BlameInfo]:
    """
    Blame one line of a file using the given buffer content.

    Args:
        obj: FileObject to blame
        lines: Current buffer content, used instead of the work tree file
        lnum: 1-based line number
        ignore_whitespace: Ignore whitespace-only changes

    Returns:
        BlameInfo, a placeholder for uncommitted files, or None if git
        produced no output (e.g. the line is out of range)
    """
    if not obj.object_name or obj.repo.abbrev_head == '':
        return BlameInfo.not_committed()

    args: List[str] = [
        'blame',
        '--contents', '-',
        '-L', f"{lnum},+1",
        '--line-porcelain',
        obj.file,
    ]

    if ignore_whitespace:
        args.append('-w')

    ignore_file = os.path.join(obj.repo.toplevel, IGNORE_REVS_FILE)
    if os.path.isfile(ignore_file):
        args += ['--ignore-revs-file', ignore_file]

    results, _ = await obj.command(args, input_lines=lines)
    return parse_blame(results)
