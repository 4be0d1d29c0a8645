"""Builders for GitState values used across state tests."""

from pathlib import Path

from prflow.core.state.types import BranchType, CommitRelationship, GitState, WorktreeType


def make_state(
    *,
    branch: str | None = "main",
    base: str = "main",
    relationship: CommitRelationship = CommitRelationship.SAME,
    staged: tuple[str, ...] = (),
    unstaged: tuple[str, ...] = (),
    local_commits: tuple[str, ...] = (),
    worktree_type: WorktreeType = WorktreeType.MAIN_WORKTREE,
) -> GitState:
    return GitState(
        worktree_type=worktree_type,
        branch_type=BranchType.MAIN if branch == base else BranchType.OTHER,
        current_branch=branch,
        commit_relationship=relationship,
        local_commits=local_commits,
        staged_files=frozenset(staged),
        unstaged_files=frozenset(unstaged),
        repo_root=Path("/repo"),
        repo_name="repo",
    )
