"""Asynchronous process execution for hunkline."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass
class JobSpec:
    """
    Describes a single external process invocation.

    One JobSpec is built per command and thrown away afterwards.
    """
    command: str
    args: List[str] = field(default_factory=list)
    cwd: Optional[str] = None
    input_lines: Optional[Sequence[str]] = None
    suppress_stderr: bool = False
    encoding: str = 'utf-8'

    def __repr__(self) -> str:
        """String representation."""
        return f"JobSpec({self.command} {' '.join(self.args)})"


def split_output(text: str) -> List[str]:
    """
    Split process output into lines.

    A trailing newline does not produce a final empty entry, so
    "a\\nb\\n" and "a\\nb" both give ['a', 'b'].

    Args:
        text: Decoded process output

    Returns:
        List of lines without line terminators
    """
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return lines


async def run_job(spec: JobSpec) -> Tuple[List[str], str]:
    """
    Run a process and wait for it without blocking other tasks.

    The exit status is not interpreted: callers decide what empty output
    or a non-empty stderr means for them.

    Args:
        spec: Process description

    Returns:
        Tuple of (stdout lines, raw stderr)
    """
    logger.debug("running %s %s (cwd=%s)", spec.command, ' '.join(spec.args), spec.cwd)

    stdin_data = None
    if spec.input_lines is not None:
        stdin_data = ''.join(f"{line}\n" for line in spec.input_lines).encode(spec.encoding)

    process = await asyncio.create_subprocess_exec(
        spec.command,
        *spec.args,
        cwd=spec.cwd,
        stdin=asyncio.subprocess.PIPE if stdin_data is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate(stdin_data)

    output = stdout.decode(spec.encoding, errors='replace') if stdout else ''
    err = stderr.decode('utf-8', errors='replace') if stderr else ''

    if err and not spec.suppress_stderr:
        logger.warning("%s: %s", spec.command, err.rstrip('\n'))

    return split_output(output), err
