"""Production Git implementation using subprocess.

This module provides the real Git implementation that executes actual git
commands via subprocess.
"""

import subprocess
from pathlib import Path

from prflow.core.git.abc import Git, WorktreeInfo
from prflow.core.subprocess import run_subprocess_with_context

NOTHING_TO_STASH = "No local changes to save"

# ============================================================================
# Production Implementation
# ============================================================================


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def get_repository_root(self, cwd: Path) -> Path | None:
        """Get the top-level directory of the repository containing cwd."""
        if not cwd.exists():
            return None

        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        return Path(result.stdout.strip())

    def get_head_sha(self, cwd: Path) -> str | None:
        """Get the full SHA of HEAD, or None if the repository has no commits."""
        result = subprocess.run(
            ["git", "rev-parse", "--verify", "--quiet", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        return result.stdout.strip()

    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the currently checked-out branch."""
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        branch = result.stdout.strip()
        if branch == "HEAD":
            return None

        return branch

    def _ref_exists(self, cwd: Path, ref: str) -> bool:
        result = subprocess.run(
            ["git", "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0

    def get_ahead_behind(self, cwd: Path, ref: str) -> tuple[int, int] | None:
        """Get number of commits ahead and behind a reference."""
        if not self._ref_exists(cwd, ref):
            return None

        result = run_subprocess_with_context(
            ["git", "rev-list", "--left-right", "--count", f"{ref}...HEAD"],
            operation_context=f"get ahead/behind counts against '{ref}'",
            cwd=cwd,
        )

        parts = result.stdout.strip().split()
        if len(parts) != 2:
            return 0, 0

        behind = int(parts[0])
        ahead = int(parts[1])
        return ahead, behind

    def get_commits_ahead(self, cwd: Path, ref: str) -> list[str]:
        """List one-line summaries of commits in HEAD but not in ref."""
        if not self._ref_exists(cwd, ref):
            return []

        result = run_subprocess_with_context(
            ["git", "log", "--format=%h %s", f"{ref}..HEAD"],
            operation_context=f"list commits ahead of '{ref}'",
            cwd=cwd,
        )
        return [line for line in result.stdout.splitlines() if line]

    def get_file_status(self, cwd: Path) -> tuple[list[str], list[str], list[str]]:
        """Get lists of staged, modified, and untracked files."""
        result = run_subprocess_with_context(
            ["git", "status", "--porcelain", "--untracked-files=all"],
            operation_context="get file status",
            cwd=cwd,
        )

        staged = []
        modified = []
        untracked = []

        for line in result.stdout.splitlines():
            if not line:
                continue

            status_code = line[:2]
            filename = line[3:]
            # Renames are reported as "old -> new"
            if " -> " in filename:
                filename = filename.split(" -> ", 1)[1]

            if status_code == "??":
                untracked.append(filename)
                continue

            if status_code[0] != " ":
                staged.append(filename)

            if status_code[1] != " ":
                modified.append(filename)

        return staged, modified, untracked

    def list_worktrees(self, repo_root: Path) -> list[WorktreeInfo]:
        """List all worktrees in the repository."""
        result = run_subprocess_with_context(
            ["git", "worktree", "list", "--porcelain"],
            operation_context="list worktrees",
            cwd=repo_root,
        )

        worktrees: list[WorktreeInfo] = []
        current_path: Path | None = None
        current_branch: str | None = None

        for line in result.stdout.splitlines():
            line = line.strip()
            if line.startswith("worktree "):
                current_path = Path(line.split(maxsplit=1)[1])
                current_branch = None
            elif line.startswith("branch "):
                if current_path is None:
                    continue
                branch_ref = line.split(maxsplit=1)[1]
                current_branch = branch_ref.replace("refs/heads/", "")
            elif line == "" and current_path is not None:
                worktrees.append(WorktreeInfo(path=current_path, branch=current_branch))
                current_path = None
                current_branch = None

        if current_path is not None:
            worktrees.append(WorktreeInfo(path=current_path, branch=current_branch))

        # Mark first worktree as root (git guarantees this ordering)
        if worktrees:
            first = worktrees[0]
            worktrees[0] = WorktreeInfo(path=first.path, branch=first.branch, is_root=True)

        return worktrees

    def get_remote_url(self, repo_root: Path, remote: str) -> str | None:
        """Get the URL of a remote."""
        result = subprocess.run(
            ["git", "remote", "get-url", remote],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        return result.stdout.strip()

    def branch_exists(self, cwd: Path, branch: str) -> bool:
        """Check whether a local branch exists."""
        return self._ref_exists(cwd, f"refs/heads/{branch}")

    def is_valid_branch_name(self, cwd: Path, branch: str) -> bool:
        """Check whether branch is an acceptable branch name."""
        result = subprocess.run(
            ["git", "check-ref-format", "--branch", branch],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0

    def add_paths(self, cwd: Path, paths: list[str]) -> None:
        """Stage paths."""
        run_subprocess_with_context(
            ["git", "add", "--", *paths],
            operation_context=f"stage {', '.join(paths)}",
            cwd=cwd,
        )

    def stash_push(self, cwd: Path, *, message: str, keep_index: bool) -> str | None:
        """Stash changes including untracked files."""
        cmd = ["git", "stash", "push", "--include-untracked"]
        if keep_index:
            cmd.append("--keep-index")
        cmd.extend(["-m", message])

        result = run_subprocess_with_context(
            cmd,
            operation_context="stash changes",
            cwd=cwd,
        )
        if NOTHING_TO_STASH in result.stdout:
            return None

        return "stash@{0}"

    def stash_apply(self, cwd: Path, stash_ref: str) -> None:
        """Apply a stash without dropping it."""
        run_subprocess_with_context(
            ["git", "stash", "apply", stash_ref],
            operation_context=f"apply stash '{stash_ref}'",
            cwd=cwd,
        )

    def stash_drop(self, cwd: Path, stash_ref: str) -> None:
        """Drop a stash entry."""
        run_subprocess_with_context(
            ["git", "stash", "drop", stash_ref],
            operation_context=f"drop stash '{stash_ref}'",
            cwd=cwd,
        )

    def stash_pop(self, cwd: Path, stash_ref: str) -> None:
        """Apply and drop a stash entry."""
        run_subprocess_with_context(
            ["git", "stash", "pop", stash_ref],
            operation_context=f"pop stash '{stash_ref}'",
            cwd=cwd,
        )

    def commit(self, cwd: Path, message: str, *, allow_empty: bool) -> None:
        """Commit the index."""
        cmd = ["git", "commit", "-m", message]
        if allow_empty:
            cmd.append("--allow-empty")

        run_subprocess_with_context(
            cmd,
            operation_context="create commit",
            cwd=cwd,
        )

    def push(self, cwd: Path, remote: str, branch: str, *, set_upstream: bool) -> None:
        """Push a branch to a remote."""
        cmd = ["git", "push"]
        if set_upstream:
            cmd.append("-u")
        cmd.extend([remote, branch])

        run_subprocess_with_context(
            cmd,
            operation_context=f"push '{branch}' to '{remote}'",
            cwd=cwd,
        )

    def checkout_new_branch(self, cwd: Path, branch: str, start_point: str) -> None:
        """Create and check out a branch."""
        run_subprocess_with_context(
            ["git", "checkout", "-b", branch, start_point],
            operation_context=f"create branch '{branch}' from '{start_point}'",
            cwd=cwd,
        )

    def checkout_branch(self, cwd: Path, branch: str) -> None:
        """Checkout a branch in the given directory."""
        run_subprocess_with_context(
            ["git", "checkout", branch],
            operation_context=f"checkout branch '{branch}'",
            cwd=cwd,
        )

    def checkout_detached(self, cwd: Path, ref: str) -> None:
        """Checkout a detached HEAD at the given ref."""
        run_subprocess_with_context(
            ["git", "checkout", "--detach", ref],
            operation_context=f"checkout detached HEAD at '{ref}'",
            cwd=cwd,
        )

    def force_branch(self, cwd: Path, branch: str, sha: str) -> None:
        """Point an existing branch at sha."""
        run_subprocess_with_context(
            ["git", "branch", "-f", branch, sha],
            operation_context=f"move branch '{branch}' to {sha[:7]}",
            cwd=cwd,
        )

    def reset_soft(self, cwd: Path, sha: str) -> None:
        """Move HEAD to sha, keeping changes staged."""
        run_subprocess_with_context(
            ["git", "reset", "--soft", sha],
            operation_context=f"reset to {sha[:7]}",
            cwd=cwd,
        )

    def delete_branch(self, cwd: Path, branch: str) -> None:
        """Delete a local branch."""
        run_subprocess_with_context(
            ["git", "branch", "-D", branch],
            operation_context=f"delete branch '{branch}'",
            cwd=cwd,
        )

    def add_worktree(self, repo_root: Path, path: Path, branch: str) -> None:
        """Add a worktree with an existing branch checked out."""
        run_subprocess_with_context(
            ["git", "worktree", "add", str(path), branch],
            operation_context=f"add worktree for branch '{branch}' at {path}",
            cwd=repo_root,
        )
