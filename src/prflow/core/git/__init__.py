"""Git operations subpackage.

This subpackage provides abstractions over git operations with support for
testing via fakes and dry-run via wrappers.
"""

from prflow.core.git.abc import Git, WorktreeInfo
from prflow.core.git.dry_run import DryRunGit
from prflow.core.git.real import RealGit

__all__ = [
    "Git",
    "WorktreeInfo",
    "RealGit",
    "DryRunGit",
]
