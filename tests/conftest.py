"""Shared pytest fixtures for hunkline tests."""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from hunkline.core.repository import Repository
from hunkline.core.runner import JobSpec
from hunkline.core.version import Version

requires_git = pytest.mark.skipif(shutil.which('git') is None, reason='git is not installed')


def strip_repo_args(args: Sequence[str]) -> List[str]:
    """Drop leading --git-dir/--work-tree/-c options from a git argument list."""
    args = list(args)
    while args and args[0] in ('--git-dir', '--work-tree', '-c'):
        args = args[2:]
    return args


class FakeRunner:
    """
    Records JobSpecs instead of spawning processes.

    Responses are matched on the leading git arguments (after repository
    options), first match wins; unmatched commands produce no output.
    """

    def __init__(self):
        self.calls: List[JobSpec] = []
        self.responses = []

    def on(self, *prefix, lines: Sequence[str] = (), stderr: str = '') -> 'FakeRunner':
        self.responses.append((tuple(prefix), list(lines), stderr))
        return self

    async def __call__(self, spec: JobSpec):
        self.calls.append(spec)
        args = strip_repo_args(spec.args)
        for prefix, lines, stderr in self.responses:
            if tuple(args[:len(prefix)]) == prefix:
                return list(lines), stderr
        return [], ''

    def subcommands(self) -> List[str]:
        """First git argument of every recorded call."""
        return [strip_repo_args(spec.args)[0] for spec in self.calls]

    def find(self, subcommand: str) -> Optional[JobSpec]:
        for spec in self.calls:
            if strip_repo_args(spec.args)[:1] == [subcommand]:
                return spec
        return None


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def version():
    """A git version with every feature we gate on."""
    return Version(2, 40, 0)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def fake_repo(temp_dir, version, fake_runner):
    """Repository handle backed by a FakeRunner; gitdir exists on disk."""
    gitdir = temp_dir / '.git'
    gitdir.mkdir()
    return Repository(str(temp_dir), str(gitdir), version, abbrev_head='main',
                      runner=fake_runner)


def git(cwd, *args, check=True) -> str:
    """Run git synchronously in a test repository."""
    result = subprocess.run(
        ['git', *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=check,
    )
    return result.stdout


@pytest.fixture
def git_env(monkeypatch, temp_dir):
    """Keep the user's git configuration out of the tests."""
    monkeypatch.setenv('GIT_CONFIG_NOSYSTEM', '1')
    monkeypatch.setenv('GIT_CONFIG_GLOBAL', os.devnull)
    monkeypatch.setenv('HOME', str(temp_dir))
    monkeypatch.setenv('HUNKLINE_CORE_VERSION', 'auto')


@pytest.fixture
def empty_repo(temp_dir, git_env):
    """A real git repository without commits."""
    work_tree = temp_dir / 'work'
    work_tree.mkdir()
    git(work_tree, 'init', '-q')
    git(work_tree, 'symbolic-ref', 'HEAD', 'refs/heads/main')
    git(work_tree, 'config', 'user.name', 'Test User')
    git(work_tree, 'config', 'user.email', 'test@example.com')
    git(work_tree, 'config', 'commit.gpgsign', 'false')
    return work_tree


@pytest.fixture
def git_repo(empty_repo):
    """A real git repository with one commit of file.txt (lines l1..l10)."""
    work_tree = empty_repo
    (work_tree / 'file.txt').write_text(''.join(f"l{i}\n" for i in range(1, 11)))
    git(work_tree, 'add', 'file.txt')
    git(work_tree, 'commit', '-q', '-m', 'Initial commit')
    return work_tree
