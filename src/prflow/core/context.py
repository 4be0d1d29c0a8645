"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

import click

from prflow.cli.output import user_output
from prflow.core.config import PrflowConfig, load_config
from prflow.core.git.abc import Git
from prflow.core.git.real import RealGit
from prflow.core.github.abc import GitHub
from prflow.core.github.cache import PrCache
from prflow.core.github.real import RealGitHub
from prflow.core.time.abc import Time
from prflow.core.time.real import RealTime


@dataclass(frozen=True)
class PrflowContext:
    """Immutable context holding all dependencies for prflow operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    github: GitHub
    time: Time
    pr_cache: PrCache
    cwd: Path  # Current working directory at CLI invocation
    repo_root: Path | None  # None outside a repository
    config: PrflowConfig
    dry_run: bool


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        (path, None) on success, (None, error_message) if the directory was deleted
    """
    try:
        return (Path.cwd(), None)
    except OSError:
        return (None, "Current working directory no longer exists")


def create_context() -> PrflowContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution. Commands that support --dry-run wrap the gateways
    themselves.

    Returns:
        PrflowContext with real implementations
    """
    cwd, error_msg = safe_cwd()
    if cwd is None:
        user_output(click.style("Error: ", fg="red") + (error_msg or ""))
        raise SystemExit(1)

    git: Git = RealGit()
    github: GitHub = RealGitHub()
    time: Time = RealTime()

    repo_root = git.get_repository_root(cwd)
    try:
        config = load_config(repo_root)
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    return PrflowContext(
        git=git,
        github=github,
        time=time,
        pr_cache=PrCache(time),
        cwd=cwd,
        repo_root=repo_root,
        config=config,
        dry_run=False,
    )
