"""Patch construction for staging individual hunks."""

from typing import List, Sequence

from .diff import Hunk


def create_patch(relpath: str, hunks: Sequence[Hunk], mode_bits: str,
                 invert: bool = False) -> List[str]:
    """
    Build a zero-context unified diff covering exactly the given hunks.

    Hunks are expected in file order. Their old side is relative to the
    text the patch is applied to; new-side positions are recomputed from
    the running offset so that skipped hunks do not matter.

    With invert, added and removed swap roles: a hunk that was staged can
    be taken out of the index again by applying the same hunk inverted.

    Args:
        relpath: Path relative to the repository root
        hunks: Hunks to include
        mode_bits: File mode, e.g. '100644'
        invert: Reverse the direction of every hunk

    Returns:
        List of patch lines
    """
    results = [
        f"diff --git a/{relpath} b/{relpath}",
        f"index 000000..000000 {mode_bits}",
        f"--- a/{relpath}",
        f"+++ b/{relpath}",
    ]

    offset = 0
    for hunk in hunks:
        pre, now = hunk.removed, hunk.added
        if invert:
            pre, now = now, pre

        # Pure additions are anchored after pre.start
        start = pre.start + 1 if pre.count == 0 else pre.start

        results.append(f"@@ -{start},{pre.count} +{start + offset},{now.count} @@")
        results.extend(f"-{line}" for line in pre.lines)
        results.extend(f"+{line}" for line in now.lines)

        offset += now.count - pre.count

    return results
