"""Git version parsing and feature gating."""

import re
from dataclasses import dataclass
from typing import Optional

from .runner import JobSpec, run_job

VERSION_PATTERN = re.compile(r'(\d+)\.(\d+)\.(\w+)')


class InvalidVersion(ValueError):
    """Raised when a version string is not of the form major.minor.patch."""


@dataclass(frozen=True)
class Version:
    """
    A parsed git version.

    Built once at startup and handed to every component that needs to
    decide which command-line flags are safe to use.
    """
    major: int
    minor: int
    patch: int = 0

    def at_least(self, major: int, minor: Optional[int] = None, patch: Optional[int] = None) -> bool:
        """
        Check whether this version is at least major.minor.patch.

        Omitted components are not constrained, so at_least(2) is true
        for every 2.x.y.

        Args:
            major: Minimum major version
            minor: Minimum minor version, if any
            patch: Minimum patch version, if any

        Returns:
            bool: True if this version satisfies the bound
        """
        if self.major != major:
            return self.major > major
        if minor is None:
            return True
        if self.minor != minor:
            return self.minor > minor
        if patch is None:
            return True
        return self.patch >= patch

    @property
    def has_absolute_git_dir(self) -> bool:
        """rev-parse --absolute-git-dir appeared in 2.13."""
        return self.at_least(2, 13)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(version: str) -> Version:
    """
    Parse a "major.minor.patch" version string.

    The third component may be a development marker such as "GIT",
    in which case patch is 0.

    Args:
        version: Version string, e.g. "2.30.1" or "2.20.GIT"

    Returns:
        Version

    Raises:
        InvalidVersion: If the string does not start with major.minor.x
    """
    match = VERSION_PATTERN.match(version.strip())
    if not match:
        raise InvalidVersion(f"Invalid git version: {version!r}")

    major, minor, patch = match.groups()
    return Version(
        major=int(major),
        minor=int(minor),
        patch=int(patch) if patch.isdigit() else 0,
    )


async def detect_version(command: str = 'git') -> Version:
    """
    Ask the installed git for its version.

    Args:
        command: Executable to query

    Returns:
        Version

    Raises:
        InvalidVersion: If the output is not a git version banner
    """
    lines, _ = await run_job(JobSpec(command=command, args=['--version']))
    line = lines[0] if lines else ''
    if not line.startswith('git version '):
        raise InvalidVersion(f"Unexpected output from {command} --version: {line!r}")
    return parse_version(line.split()[2])
