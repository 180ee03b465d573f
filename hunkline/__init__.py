"""hunkline - asynchronous git access for tracking a single file."""

__version__ = '0.1.0'

from hunkline.core.repository import Repository, RepositoryRegistry
from hunkline.core.file import FileObject, FileProps
from hunkline.core.version import Version, parse_version, InvalidVersion

__all__ = [
    'Repository',
    'RepositoryRegistry',
    'FileObject',
    'FileProps',
    'Version',
    'parse_version',
    'InvalidVersion',
]
