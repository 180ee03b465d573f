"""Repository handle for hunkline."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Awaitable, Dict, List, Optional, Sequence, Tuple

from .runner import JobSpec, run_job
from .version import Version

logger = logging.getLogger(__name__)

Runner = Callable[[JobSpec], Awaitable[Tuple[List[str], str]]]

GIT_DIR_NAME = '.git'
REBASE_MARKERS = ('rebase-merge', 'rebase-apply')


def in_git_dir(path: str) -> bool:
    """
    Check whether a path lies inside a repository metadata directory.

    Args:
        path: File path

    Returns:
        bool: True if any directory component is .git
    """
    return GIT_DIR_NAME in Path(path).parts


@dataclass
class RepoInfo:
    """Result of a single rev-parse query."""
    toplevel: Optional[str]
    gitdir: Optional[str]
    abbrev_head: str


async def _abbrev_head(gitdir: Optional[str], head: str, path: str,
                       command: str, runner: Runner) -> str:
    if not gitdir:
        return head

    if head == 'HEAD':
        # Detached or unborn: fall back to the short commit hash
        lines, _ = await runner(JobSpec(
            command=command,
            args=['rev-parse', '--short', '--verify', '--quiet', 'HEAD'],
            cwd=path,
            suppress_stderr=True,
        ))
        head = lines[0] if lines else ''

    if any(os.path.isdir(os.path.join(gitdir, marker)) for marker in REBASE_MARKERS):
        head += '(rebasing)'

    return head


async def get_repo_info(path: str, version: Version, command: str = 'git',
                        gitdir: Optional[str] = None, toplevel: Optional[str] = None,
                        runner: Runner = run_job) -> RepoInfo:
    """
    Resolve toplevel, metadata directory and current ref for a path.

    Args:
        path: Directory to resolve from
        version: Installed git version
        command: Executable to run (git, or the dotfile tool)
        gitdir: Explicit metadata directory, if known
        toplevel: Explicit work tree, if known
        runner: Process runner

    Returns:
        RepoInfo; toplevel and gitdir are None outside a repository
    """
    git_dir_opt = '--absolute-git-dir' if version.has_absolute_git_dir else '--git-dir'

    args = []
    if gitdir:
        args += ['--git-dir', gitdir]
    if toplevel:
        args += ['--work-tree', toplevel]
    args += ['rev-parse', '--show-toplevel', git_dir_opt, '--abbrev-ref', 'HEAD']

    results, _ = await runner(JobSpec(command=command, args=args, cwd=path, suppress_stderr=True))

    found_toplevel = results[0] if len(results) > 0 else None
    found_gitdir = results[1] if len(results) > 1 else None
    head = results[2] if len(results) > 2 else ''

    if found_gitdir and not version.has_absolute_git_dir:
        found_gitdir = os.path.realpath(os.path.join(path, found_gitdir))

    return RepoInfo(
        toplevel=found_toplevel,
        gitdir=found_gitdir,
        abbrev_head=await _abbrev_head(found_gitdir, head, path, command, runner),
    )


async def _tracked_by_yadm(file: str, runner: Runner) -> bool:
    home = os.environ.get('HOME')
    if not home:
        return False
    home = home.rstrip(os.sep)
    file = os.path.abspath(file)
    if file != home and not file.startswith(home + os.sep):
        return False
    lines, _ = await runner(JobSpec(command='yadm', args=['ls-files', '--error-unmatch', file],
                                    cwd=home, suppress_stderr=True))
    return len(lines) != 0



class Repository:
    """
    A git repository as seen from one or more files.

    Toplevel and gitdir are resolved together once; the ref label can be
    refreshed on its own with update_abbrev_head().
    """

    def __init__(self, toplevel: str, gitdir: str, version: Version,
                 abbrev_head: str = '', command: str = 'git',
                 detached: bool = False, runner: Runner = run_job):
        """
        Initialize repository handle.

        Args:
            toplevel: Work tree root
            gitdir: Absolute metadata directory
            version: Installed git version
            abbrev_head: Current ref label
            command: git executable
            detached: Pass --work-tree explicitly (gitdir is outside the work tree)
            runner: Process runner
        """
        self.toplevel = toplevel
        self.gitdir = gitdir
        self.version = version
        self.abbrev_head = abbrev_head
        self.command_name = command
        self.detached = detached
        self.runner = runner
        self.username: Optional[str] = None

    @classmethod
    async def resolve(cls, path: str, version: Version, command: str = 'git',
                      gitdir: Optional[str] = None, toplevel: Optional[str] = None,
                      yadm: bool = False, runner: Runner = run_job,
                      file: Optional[str] = None) -> Optional['Repository']:
        """
        Find the repository a directory belongs to.

        Falls back to yadm for dotfiles under $HOME when enabled.

        Args:
            path: Directory to resolve from
            version: Installed git version
            command: git executable
            gitdir: Explicit metadata directory, if known
            toplevel: Explicit work tree, if known
            yadm: Try yadm when no ordinary repository is found
            runner: Process runner
            file: File being attached; yadm is asked about this path
                (defaults to path)

        Returns:
            Repository if found, None otherwise
        """
        info = await get_repo_info(path, version, command, gitdir, toplevel, runner)
        detached = gitdir is not None or toplevel is not None

        if not info.gitdir and yadm and await _tracked_by_yadm(file or path, runner):
            logger.debug("%s is tracked by yadm", file or path)
            info = await get_repo_info(path, version, 'yadm', gitdir, toplevel, runner)
            detached = True

        if not info.gitdir or not info.toplevel:
            logger.debug("%s is not in a repository", path)
            return None

        repo = cls(info.toplevel, info.gitdir, version, info.abbrev_head,
                   command=command, detached=detached, runner=runner)
        await repo.update_username()
        return repo

    async def command(self, args: Sequence[str], input_lines: Optional[Sequence[str]] = None,
                      suppress_stderr: bool = False, encoding: str = 'utf-8') -> Tuple[List[str], str]:
        """
        Run a git command scoped to this repository.

        Args:
            args: git arguments
            input_lines: Lines written to stdin, if any
            suppress_stderr: Do not log stderr
            encoding: Encoding of stdout

        Returns:
            Tuple of (stdout lines, stderr)
        """
        full_args = ['--git-dir', self.gitdir]
        if self.detached:
            full_args += ['--work-tree', self.toplevel]
        full_args += list(args)

        return await self.runner(JobSpec(
            command=self.command_name,
            args=full_args,
            cwd=self.toplevel,
            input_lines=input_lines,
            suppress_stderr=suppress_stderr,
            encoding=encoding,
        ))

    async def update_username(self) -> None:
        """Read user.name from git config."""
        lines, _ = await self.command(['config', 'user.name'], suppress_stderr=True)
        self.username = lines[0] if lines else None

    async def update_abbrev_head(self) -> str:
        """
        Recompute the current ref label, e.g. after a checkout.

        Returns:
            str: New label
        """
        lines, _ = await self.command(['rev-parse', '--abbrev-ref', 'HEAD'], suppress_stderr=True)
        head = lines[0] if lines else ''
        self.abbrev_head = await _abbrev_head(self.gitdir, head, self.toplevel,
                                              self.command_name, self.runner)
        return self.abbrev_head

    async def files_changed(self) -> List[str]:
        """
        List paths whose work tree copy differs from the index.

        Returns:
            List of paths relative to toplevel
        """
        results, _ = await self.command([
            '-c', 'core.quotepath=off', 'status', '--porcelain', '--ignore-submodules',
        ])
        return [line[3:] for line in results if len(line) > 3 and line[1] == 'M']

    async def get_show_text(self, object_path: str, encoding: str = 'utf-8') -> Tuple[List[str], str]:
        """
        Get the content of a blob.

        Args:
            object_path: Object in revision:path form
            encoding: Encoding of the blob content

        Returns:
            Tuple of (content lines, stderr)
        """
        return await self.command(['show', object_path], suppress_stderr=True, encoding=encoding)

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(toplevel={self.toplevel}, head={self.abbrev_head!r})"


class RepositoryRegistry:
    """
    Hands out one Repository per metadata directory.

    Files in the same repository share a handle, so refreshing the ref
    label once updates every file attached to it.
    """

    def __init__(self, version: Version, command: str = 'git', yadm: bool = False,
                 runner: Runner = run_job):
        self.version = version
        self.command = command
        self.yadm = yadm
        self.runner = runner
        self._repos: Dict[str, Repository] = {}

    async def get(self, path: str, gitdir: Optional[str] = None,
                  toplevel: Optional[str] = None, file: Optional[str] = None) -> Optional[Repository]:
        """
        Resolve the repository for a directory, reusing a known handle.

        Args:
            path: Directory to resolve from
            gitdir: Explicit metadata directory, if known
            toplevel: Explicit work tree, if known
            file: File being attached, for the yadm fallback

        Returns:
            Repository if found, None otherwise
        """
        info = await get_repo_info(path, self.version, self.command, gitdir, toplevel, self.runner)

        if info.gitdir and info.toplevel:
            repo = self._repos.get(info.gitdir)
            if repo is not None:
                repo.abbrev_head = info.abbrev_head
                return repo
            repo = Repository(info.toplevel, info.gitdir, self.version, info.abbrev_head,
                              command=self.command,
                              detached=gitdir is not None or toplevel is not None,
                              runner=self.runner)
            await repo.update_username()
        elif self.yadm:
            repo = await Repository.resolve(path, self.version, self.command, gitdir, toplevel,
                                            yadm=True, runner=self.runner, file=file)
        else:
            return None

        if repo is not None:
            self._repos[repo.gitdir] = repo
        return repo

    def forget(self, gitdir: str) -> None:
        """Drop a cached repository."""
        self._repos.pop(gitdir, None)

    def __len__(self) -> int:
        return len(self._repos)
