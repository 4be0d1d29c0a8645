"""Dry-run Git wrapper.

This module provides a Git wrapper that prevents execution of mutating
operations while delegating read-only operations to the wrapped implementation.
"""

from pathlib import Path

from prflow.cli.output import user_output
from prflow.core.git.abc import Git, WorktreeInfo

# ============================================================================
# Dry-run Wrapper
# ============================================================================


class DryRunGit(Git):
    """Wrapper that prints mutating operations instead of executing them.

    Usage:
        real_ops = RealGit()
        dry_run_ops = DryRunGit(real_ops)

        # Prints message instead of committing
        dry_run_ops.commit(repo_root, "feat: x", allow_empty=False)
    """

    def __init__(self, wrapped: Git) -> None:
        """Create a dry-run wrapper around a Git implementation.

        Args:
            wrapped: The Git implementation to wrap (usually RealGit or FakeGit)
        """
        self._wrapped = wrapped

    # Read-only operations: delegate to wrapped implementation

    def get_repository_root(self, cwd: Path) -> Path | None:
        return self._wrapped.get_repository_root(cwd)

    def get_head_sha(self, cwd: Path) -> str | None:
        return self._wrapped.get_head_sha(cwd)

    def get_current_branch(self, cwd: Path) -> str | None:
        return self._wrapped.get_current_branch(cwd)

    def get_ahead_behind(self, cwd: Path, ref: str) -> tuple[int, int] | None:
        return self._wrapped.get_ahead_behind(cwd, ref)

    def get_commits_ahead(self, cwd: Path, ref: str) -> list[str]:
        return self._wrapped.get_commits_ahead(cwd, ref)

    def get_file_status(self, cwd: Path) -> tuple[list[str], list[str], list[str]]:
        return self._wrapped.get_file_status(cwd)

    def list_worktrees(self, repo_root: Path) -> list[WorktreeInfo]:
        return self._wrapped.list_worktrees(repo_root)

    def get_remote_url(self, repo_root: Path, remote: str) -> str | None:
        return self._wrapped.get_remote_url(repo_root, remote)

    def branch_exists(self, cwd: Path, branch: str) -> bool:
        return self._wrapped.branch_exists(cwd, branch)

    def is_valid_branch_name(self, cwd: Path, branch: str) -> bool:
        return self._wrapped.is_valid_branch_name(cwd, branch)

    # Mutating operations: print dry-run message instead of executing

    def add_paths(self, cwd: Path, paths: list[str]) -> None:
        user_output(f"[DRY RUN] Would run: git add -- {' '.join(paths)}")

    def stash_push(self, cwd: Path, *, message: str, keep_index: bool) -> str | None:
        keep_flag = "--keep-index " if keep_index else ""
        user_output(
            f'[DRY RUN] Would run: git stash push --include-untracked {keep_flag}-m "{message}"'
        )
        return None

    def stash_apply(self, cwd: Path, stash_ref: str) -> None:
        user_output(f"[DRY RUN] Would run: git stash apply {stash_ref}")

    def stash_drop(self, cwd: Path, stash_ref: str) -> None:
        user_output(f"[DRY RUN] Would run: git stash drop {stash_ref}")

    def stash_pop(self, cwd: Path, stash_ref: str) -> None:
        user_output(f"[DRY RUN] Would run: git stash pop {stash_ref}")

    def commit(self, cwd: Path, message: str, *, allow_empty: bool) -> None:
        empty_flag = " --allow-empty" if allow_empty else ""
        first_line = message.splitlines()[0] if message else ""
        user_output(f'[DRY RUN] Would run: git commit -m "{first_line}"{empty_flag}')

    def push(self, cwd: Path, remote: str, branch: str, *, set_upstream: bool) -> None:
        upstream_flag = "-u " if set_upstream else ""
        user_output(f"[DRY RUN] Would run: git push {upstream_flag}{remote} {branch}")

    def checkout_new_branch(self, cwd: Path, branch: str, start_point: str) -> None:
        user_output(f"[DRY RUN] Would run: git checkout -b {branch} {start_point}")

    def checkout_branch(self, cwd: Path, branch: str) -> None:
        user_output(f"[DRY RUN] Would run: git checkout {branch}")

    def checkout_detached(self, cwd: Path, ref: str) -> None:
        user_output(f"[DRY RUN] Would run: git checkout --detach {ref}")

    def force_branch(self, cwd: Path, branch: str, sha: str) -> None:
        user_output(f"[DRY RUN] Would run: git branch -f {branch} {sha}")

    def reset_soft(self, cwd: Path, sha: str) -> None:
        user_output(f"[DRY RUN] Would run: git reset --soft {sha}")

    def delete_branch(self, cwd: Path, branch: str) -> None:
        user_output(f"[DRY RUN] Would run: git branch -D {branch}")

    def add_worktree(self, repo_root: Path, path: Path, branch: str) -> None:
        user_output(f"[DRY RUN] Would run: git worktree add {path} {branch}")
