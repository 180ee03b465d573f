"""Unit tests for blame parsing."""

import pytest

from conftest import strip_repo_args
from hunkline.core.file import FileObject
from hunkline.operations.blame import BlameInfo, parse_blame

SHA = 'abc123ef0123456789abcdef0123456789abcdef'

PORCELAIN = [
    f"{SHA} 4 10 1",
    'author Jane Doe',
    'author-mail <jane@example.com>',
    'author-time 1700000000',
    'author-tz +0100',
    'committer John Roe',
    'committer-mail <john@example.com>',
    'committer-time 1700000500',
    'committer-tz -0500',
    'summary Fix the frobnicator',
    'previous 0123456789abcdef0123456789abcdef01234567 src/old.c',
    'filename src/frob.c',
    '\tint frob(void);',
]


class TestParseBlame:
    """Tests for --line-porcelain parsing."""

    def test_header_and_author(self):
        """Test the minimal header plus author fields."""
        info = parse_blame(['abc123ef 4 10', 'author Jane', 'author-mail <j@x.com>'])

        assert info.sha == 'abc123ef'
        assert info.abbrev_sha == 'abc123ef'
        assert info.orig_lnum == 4
        assert info.final_lnum == 10
        assert info.author == 'Jane'
        assert info.author_mail == '<j@x.com>'

    def test_full_record(self):
        """Test every known field."""
        info = parse_blame(PORCELAIN)

        assert info.abbrev_sha == SHA[:8]
        assert info.author == 'Jane Doe'
        assert info.author_time == 1700000000
        assert info.author_tz == '+0100'
        assert info.committer == 'John Roe'
        assert info.committer_mail == '<john@example.com>'
        assert info.committer_time == 1700000500
        assert info.committer_tz == '-0500'
        assert info.summary == 'Fix the frobnicator'
        assert info.filename == 'src/frob.c'
        assert info.is_committed
        assert not info.boundary
        assert info.extra == {}

    def test_previous(self):
        """Test previous is split into sha and filename."""
        info = parse_blame(PORCELAIN)

        assert info.previous == '0123456789abcdef0123456789abcdef01234567 src/old.c'
        assert info.previous_sha == '0123456789abcdef0123456789abcdef01234567'
        assert info.previous_filename == 'src/old.c'

    def test_content_line_skipped(self):
        """Test tab-prefixed content does not become a field."""
        info = parse_blame([f"{SHA} 1 1", '\tsummary not a key'])

        assert info.summary is None
        assert info.extra == {}

    def test_boundary_and_unknown_keys(self):
        """Test boundary flag and forward compatible extra keys."""
        info = parse_blame([f"{SHA} 1 1", 'boundary', 'new-thing some value'])

        assert info.boundary
        assert info.extra == {'new_thing': 'some value'}

    def test_no_output(self):
        """Test no output gives None."""
        assert parse_blame([]) is None


def _obj(repo, object_name='e69de29bb2d1d6434b8b29ae775ad8c2e48c5391'):
    obj = FileObject(f"{repo.toplevel}/file.txt", repo)
    obj.relpath = 'file.txt'
    obj.object_name = object_name
    obj.mode_bits = '100644'
    return obj


class TestRunBlame:
    """Tests for running blame through a file object."""

    @pytest.mark.asyncio
    async def test_untracked_never_runs_git(self, fake_repo, fake_runner):
        """Test untracked files get the placeholder without a process call."""
        obj = _obj(fake_repo, object_name=None)

        info = await obj.run_blame(['a'], 1)

        assert fake_runner.calls == []
        assert info.author == 'Not Committed Yet'
        assert info.author_mail == '<not.committed.yet>'
        assert info.committer == 'Not Committed Yet'
        assert info.committer_mail == '<not.committed.yet>'
        assert not info.is_committed

    @pytest.mark.asyncio
    async def test_no_commits_never_runs_git(self, fake_repo, fake_runner):
        """Test a repository without commits gets the placeholder."""
        fake_repo.abbrev_head = ''
        obj = _obj(fake_repo)

        info = await obj.run_blame(['a'], 1)

        assert fake_runner.calls == []
        assert info == BlameInfo.not_committed()

    @pytest.mark.asyncio
    async def test_arguments_and_input(self, fake_repo, fake_runner):
        """Test blame is run for one line against the buffer content."""
        fake_runner.on('blame', lines=PORCELAIN)
        obj = _obj(fake_repo)

        info = await obj.run_blame(['x', 'y', 'z'], 3)

        spec = fake_runner.calls[0]
        assert strip_repo_args(spec.args) == [
            'blame', '--contents', '-', '-L', '3,+1', '--line-porcelain', obj.file,
        ]
        assert list(spec.input_lines) == ['x', 'y', 'z']
        assert info.sha == SHA

    @pytest.mark.asyncio
    async def test_ignore_whitespace(self, fake_repo, fake_runner):
        """Test -w is passed when requested."""
        obj = _obj(fake_repo)

        await obj.run_blame(['x'], 1, ignore_whitespace=True)

        assert strip_repo_args(fake_runner.calls[0].args)[-1] == '-w'

    @pytest.mark.asyncio
    async def test_ignore_revs_file(self, fake_repo, fake_runner, temp_dir):
        """Test the ignore-revs file is used when present."""
        ignore_file = temp_dir / '.git-blame-ignore-revs'
        ignore_file.write_text(f"{SHA}\n")
        obj = _obj(fake_repo)

        await obj.run_blame(['x'], 1)

        args = strip_repo_args(fake_runner.calls[0].args)
        assert args[-2:] == ['--ignore-revs-file', str(ignore_file)]

    @pytest.mark.asyncio
    async def test_out_of_range(self, fake_repo, fake_runner):
        """Test no output is None rather than an error."""
        fake_runner.on('blame', stderr='fatal: file has only 3 lines\n')
        obj = _obj(fake_repo)

        assert await obj.run_blame(['x'], 99) is None
