"""Per-file index state and index-mutating operations."""

import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .repository import Repository, RepositoryRegistry, in_git_dir
from .version import Version

logger = logging.getLogger(__name__)

# ls-files warns about this when probing a directory that does not exist yet
MISSING_DIR_WARNING = re.compile(r"^warning: could not open directory '.*': No such file or directory")


@dataclass
class FileProps:
    """
    Index snapshot of a single file.

    object_name is None for untracked files. While the file is conflicted
    object_name and mode_bits describe the stage-1 common ancestor, if any.
    """
    relpath: Optional[str] = None
    orig_relpath: Optional[str] = None
    object_name: Optional[str] = None
    mode_bits: Optional[str] = None
    has_conflicts: bool = False
    i_crlf: bool = False
    w_crlf: bool = False

    def __repr__(self) -> str:
        """String representation."""
        obj = self.object_name[:7] if self.object_name else 'untracked'
        return f"FileProps({self.mode_bits} {obj} {self.relpath})"


def parse_ls_files(lines: Sequence[str]) -> FileProps:
    """
    Parse ls-files --stage --others --eol output for one path.

    Tracked lines have three tab-separated fields
    ("mode hash stage", "i/<eol> w/<eol> attr/...", path); untracked
    lines have two (eol info, path).

    Args:
        lines: Output lines

    Returns:
        FileProps
    """
    props = FileProps()

    for line in lines:
        parts = line.split('\t')
        if len(parts) > 2:
            eol = parts[1].split()
            props.i_crlf = len(eol) > 0 and eol[0] == 'i/crlf'
            props.w_crlf = len(eol) > 1 and eol[1] == 'w/crlf'
            props.relpath = parts[2]

            mode_bits, object_name, stage = parts[0].split()
            if int(stage) <= 1:
                props.mode_bits = mode_bits
                props.object_name = object_name
            else:
                props.has_conflicts = True
        else:
            props.relpath = parts[-1]

    return props


class FileObject:
    """
    A file attached to by a consumer.

    Holds the index snapshot (FileProps) of the file and a shared
    reference to its Repository.
    """

    def __init__(self, file: str, repo: Repository, encoding: str = 'utf-8'):
        """
        Initialize file object.

        Use FileObject.new() to resolve the repository and load the
        index state.

        Args:
            file: Absolute path of the file
            repo: Repository the file belongs to
            encoding: Text encoding of the file
        """
        self.file = file
        self.encoding = encoding
        self.repo = repo

        self.relpath: Optional[str] = None
        self.orig_relpath: Optional[str] = None
        self.object_name: Optional[str] = None
        self.mode_bits: Optional[str] = None
        self.has_conflicts = False
        self.i_crlf = False
        self.w_crlf = False

    @classmethod
    async def new(cls, file: str, encoding: str = 'utf-8', version: Optional[Version] = None,
                  registry: Optional[RepositoryRegistry] = None,
                  gitdir: Optional[str] = None, toplevel: Optional[str] = None,
                  **kwargs) -> Optional['FileObject']:
        """
        Attach to a file.

        Either a registry (to share Repository handles) or a version must
        be given. Extra keyword arguments go to Repository.resolve().

        Args:
            file: Absolute path of the file
            encoding: Text encoding of the file
            version: Installed git version
            registry: Repository registry to reuse handles from
            gitdir: Explicit metadata directory, if known
            toplevel: Explicit work tree, if known

        Returns:
            FileObject, or None if the file is not in a repository or lies
            inside a metadata directory
        """
        if in_git_dir(file):
            logger.debug("%s is inside a git directory", file)
            return None

        dirname = os.path.dirname(file)
        if registry is not None:
            repo = await registry.get(dirname, gitdir, toplevel, file=file)
        elif version is not None:
            repo = await Repository.resolve(dirname, version, gitdir=gitdir,
                                            toplevel=toplevel, file=file, **kwargs)
        else:
            raise ValueError("FileObject.new() needs a version or a registry")

        if repo is None:
            return None

        obj = cls(file, repo, encoding)
        await obj.update_file_info(update_relpath=True)
        return obj

    @property
    def props(self) -> FileProps:
        """Current index snapshot."""
        return FileProps(
            relpath=self.relpath,
            orig_relpath=self.orig_relpath,
            object_name=self.object_name,
            mode_bits=self.mode_bits,
            has_conflicts=self.has_conflicts,
            i_crlf=self.i_crlf,
            w_crlf=self.w_crlf,
        )

    async def command(self, args: Sequence[str], **kwargs) -> Tuple[List[str], str]:
        """Run a git command in this file's repository."""
        return await self.repo.command(args, **kwargs)

    async def file_info(self, file: Optional[str] = None, silent: bool = False) -> FileProps:
        """
        Read the index entry of the file.

        Args:
            file: Path to query, defaults to this file
            silent: Do not log stderr

        Returns:
            FileProps
        """
        results, stderr = await self.command([
            '-c', 'core.quotepath=off',
            'ls-files',
            '--stage',
            '--others',
            '--exclude-standard',
            '--eol',
            file or self.file,
        ], suppress_stderr=True)

        if stderr and not silent and not MISSING_DIR_WARNING.match(stderr):
            logger.warning("ls-files: %s", stderr.rstrip('\n'))

        return parse_ls_files(results)

    async def update_file_info(self, update_relpath: bool = False, silent: bool = False) -> bool:
        """
        Refresh the index snapshot.

        Args:
            update_relpath: Also take the path reported by git
            silent: Do not log stderr

        Returns:
            bool: True if the blob hash changed
        """
        old_object_name = self.object_name
        props = await self.file_info(silent=silent)

        if update_relpath:
            self.relpath = props.relpath
        self.object_name = props.object_name
        self.mode_bits = props.mode_bits
        self.has_conflicts = props.has_conflicts
        self.i_crlf = props.i_crlf
        self.w_crlf = props.w_crlf

        return old_object_name != self.object_name

    async def ensure_file_in_index(self) -> None:
        """
        Make sure the index has a single entry for the file.

        Untracked files get an intent-to-add entry. Conflicted files are
        reset to the common ancestor so later staging is relative to it.
        """
        if self.object_name and not self.has_conflicts:
            return

        if not self.object_name:
            await self.command(['add', '--intent-to-add', self.file])
        else:
            info = f"{self.mode_bits},{self.object_name},{self.relpath}"
            await self.command(['update-index', '--add', '--cacheinfo', info])

        await self.update_file_info()

    async def stage_lines(self, lines: Sequence[str]) -> None:
        """
        Replace the staged content of the file with the given lines.

        Args:
            lines: New content
        """
        stdout, stderr = await self.command(['hash-object', '-w', '--stdin'], input_lines=lines,
                                            suppress_stderr=True)
        if not stdout:
            logger.warning("hash-object failed for %s: %s", self.relpath, stderr.rstrip('\n'))
            return
        new_object = stdout[0]
        info = f"{self.mode_bits or '100644'},{new_object},{self.relpath}"
        await self.command(['update-index', '--add', '--cacheinfo', info])

    async def stage_hunks(self, hunks, invert: bool = False) -> None:
        """
        Apply hunks to the index only.

        Args:
            hunks: Hunks to stage, in file order
            invert: Remove previously staged hunks instead
        """
        from hunkline.operations.patch import create_patch

        await self.ensure_file_in_index()
        await self.command(
            ['apply', '--whitespace=nowarn', '--cached', '--unidiff-zero', '-'],
            input_lines=create_patch(self.relpath, hunks, self.mode_bits, invert),
        )

    async def unstage_file(self) -> None:
        """Reset the index entry of the file to HEAD."""
        await self.command(['reset', '--quiet', '--', self.relpath or self.file])

    async def get_show_text(self, revision: str) -> Tuple[List[str], Optional[str]]:
        """
        Get the content of the file at a revision.

        Lines get a trailing '\\r' when the blob uses LF but the work tree
        copy uses CRLF, so they compare equal to buffer lines.

        Args:
            revision: Revision, e.g. ':0' for the index or 'HEAD'

        Returns:
            Tuple of (content lines, stderr)
        """
        if not self.relpath:
            return [], None

        stdout, stderr = await self.repo.get_show_text(f"{revision}:{self.relpath}", self.encoding)

        if not self.i_crlf and self.w_crlf:
            stdout = [f"{line}\r" for line in stdout]

        return stdout, stderr

    async def run_blame(self, lines: Sequence[str], lnum: int, ignore_whitespace: bool = False):
        """Blame one line; see hunkline.operations.blame.run_blame()."""
        from hunkline.operations.blame import run_blame

        return await run_blame(self, lines, lnum, ignore_whitespace)

    async def has_moved(self) -> Optional[str]:
        """
        Check the staged changes for a rename of this file.

        Returns:
            The new relative path if the file was renamed, else None
        """
        results, _ = await self.command(
            ['-c', 'core.quotepath=off', 'diff', '--name-status', '-C', '--cached'])
        orig_relpath = self.orig_relpath or self.relpath

        for line in results:
            parts = line.split('\t')
            if len(parts) != 3:
                continue
            orig, new = parts[1], parts[2]
            if orig == orig_relpath:
                logger.debug("%s moved to %s", orig, new)
                self.orig_relpath = orig_relpath
                self.relpath = new
                self.file = os.path.join(self.repo.toplevel, new)
                return new

        return None

    def __repr__(self) -> str:
        """String representation."""
        return f"FileObject({self.file})"
