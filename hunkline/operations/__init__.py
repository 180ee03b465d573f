"""Operations built on top of the core layer.

- Hunk records and git-backed diffing
- Patch construction for partial staging
- Single-line blame
"""

from hunkline.operations.diff import Hunk, HunkSide, parse_diff_line, parse_diff_output, run_diff, diff_lines
from hunkline.operations.patch import create_patch
from hunkline.operations.blame import BlameInfo, parse_blame, run_blame

__all__ = [
    'Hunk', 'HunkSide', 'parse_diff_line', 'parse_diff_output', 'run_diff', 'diff_lines',
    'create_patch',
    'BlameInfo', 'parse_blame', 'run_blame',
]
