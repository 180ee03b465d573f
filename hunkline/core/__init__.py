"""Core functionality for hunkline.

This module contains the data-access layer:
- Process execution (JobSpec, run_job)
- Git version gating
- Repository resolution
- Per-file index state and staging
- Configuration management

For blame, hunks and patches, see hunkline.operations
"""

from hunkline.core.runner import JobSpec, run_job, split_output
from hunkline.core.version import Version, InvalidVersion, parse_version, detect_version
from hunkline.core.repository import Repository, RepositoryRegistry, get_repo_info, in_git_dir
from hunkline.core.file import FileObject, FileProps, parse_ls_files
from hunkline.core.config import Config, get_config

__all__ = [
    'JobSpec',
    'run_job',
    'split_output',
    'Version',
    'InvalidVersion',
    'parse_version',
    'detect_version',
    'Repository',
    'RepositoryRegistry',
    'get_repo_info',
    'in_git_dir',
    'FileObject',
    'FileProps',
    'parse_ls_files',
    'Config',
    'get_config',
]
