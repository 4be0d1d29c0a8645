"""GitHub operations subpackage."""

from prflow.core.github.abc import GitHub
from prflow.core.github.cache import PrCache
from prflow.core.github.dry_run import DryRunGitHub
from prflow.core.github.real import RealGitHub
from prflow.core.github.types import PullRequestInfo

__all__ = [
    "GitHub",
    "PrCache",
    "DryRunGitHub",
    "RealGitHub",
    "PullRequestInfo",
]
