"""High-level git operations interface.

This module provides a clean abstraction over git subprocess calls, making the
state engine testable without a real repository.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
- DryRunGit: Wrapper that runs queries and only prints mutations
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WorktreeInfo:
    """Information about a single git worktree."""

    path: Path
    branch: str | None
    is_root: bool = False


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    """

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    @abstractmethod
    def get_repository_root(self, cwd: Path) -> Path | None:
        """Get the top-level directory of the repository containing cwd.

        Returns:
            Repository root, or None if cwd is not inside a repository
        """
        ...

    @abstractmethod
    def get_head_sha(self, cwd: Path) -> str | None:
        """Get the full SHA of HEAD, or None if the repository has no commits."""
        ...

    @abstractmethod
    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the currently checked-out branch, or None if HEAD is detached."""
        ...

    @abstractmethod
    def get_ahead_behind(self, cwd: Path, ref: str) -> tuple[int, int] | None:
        """Count commits ahead of and behind a reference.

        Args:
            cwd: Working directory
            ref: Reference to compare HEAD against (e.g., 'origin/main')

        Returns:
            (ahead, behind) tuple, or None if ref does not exist
        """
        ...

    @abstractmethod
    def get_commits_ahead(self, cwd: Path, ref: str) -> list[str]:
        """List one-line summaries of commits reachable from HEAD but not ref.

        Returns:
            Summaries newest first, empty if ref does not exist
        """
        ...

    @abstractmethod
    def get_file_status(self, cwd: Path) -> tuple[list[str], list[str], list[str]]:
        """Get lists of staged, modified, and untracked files."""
        ...

    @abstractmethod
    def list_worktrees(self, repo_root: Path) -> list[WorktreeInfo]:
        """List all worktrees in the repository; the first is marked as root."""
        ...

    @abstractmethod
    def get_remote_url(self, repo_root: Path, remote: str) -> str | None:
        """Get the URL of a remote, or None if the remote is not configured."""
        ...

    @abstractmethod
    def branch_exists(self, cwd: Path, branch: str) -> bool:
        """Check whether a local branch exists."""
        ...

    @abstractmethod
    def is_valid_branch_name(self, cwd: Path, branch: str) -> bool:
        """Check whether branch is an acceptable branch name (git check-ref-format --branch)."""
        ...

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @abstractmethod
    def add_paths(self, cwd: Path, paths: list[str]) -> None:
        """Stage paths (git add)."""
        ...

    @abstractmethod
    def stash_push(self, cwd: Path, *, message: str, keep_index: bool) -> str | None:
        """Stash changes including untracked files.

        Args:
            cwd: Working directory
            message: Stash message
            keep_index: Leave staged changes in place and stash only the rest

        Returns:
            Stash reference, or None if there was nothing to stash
        """
        ...

    @abstractmethod
    def stash_apply(self, cwd: Path, stash_ref: str) -> None:
        """Apply a stash without dropping it."""
        ...

    @abstractmethod
    def stash_drop(self, cwd: Path, stash_ref: str) -> None:
        """Drop a stash entry."""
        ...

    @abstractmethod
    def stash_pop(self, cwd: Path, stash_ref: str) -> None:
        """Apply and drop a stash entry."""
        ...

    @abstractmethod
    def commit(self, cwd: Path, message: str, *, allow_empty: bool) -> None:
        """Commit the index."""
        ...

    @abstractmethod
    def push(self, cwd: Path, remote: str, branch: str, *, set_upstream: bool) -> None:
        """Push a branch (or 'HEAD') to a remote."""
        ...

    @abstractmethod
    def checkout_new_branch(self, cwd: Path, branch: str, start_point: str) -> None:
        """Create and check out a branch (git checkout -b branch start_point)."""
        ...

    @abstractmethod
    def checkout_branch(self, cwd: Path, branch: str) -> None:
        """Checkout a branch in the given directory."""
        ...

    @abstractmethod
    def checkout_detached(self, cwd: Path, ref: str) -> None:
        """Checkout a detached HEAD at the given ref."""
        ...

    @abstractmethod
    def force_branch(self, cwd: Path, branch: str, sha: str) -> None:
        """Point an existing, not checked-out branch at sha (git branch -f)."""
        ...

    @abstractmethod
    def reset_soft(self, cwd: Path, sha: str) -> None:
        """Move the checked-out branch (or detached HEAD) to sha, keeping changes staged."""
        ...

    @abstractmethod
    def delete_branch(self, cwd: Path, branch: str) -> None:
        """Delete a local branch that is not checked out (git branch -D)."""
        ...

    @abstractmethod
    def add_worktree(self, repo_root: Path, path: Path, branch: str) -> None:
        """Add a worktree at path with an existing branch checked out."""
        ...
