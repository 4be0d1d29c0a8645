"""Repository facts collector.

Runs read-only git queries and assembles a GitState. Never mutates the
repository.
"""

import logging
import re
from pathlib import Path

from prflow.core.config import DEFAULT_REMOTE, DEFAULT_WORKTREE_PATTERN, worktree_name_regex
from prflow.core.git.abc import Git
from prflow.core.state.types import (
    BranchType,
    CommitRelationship,
    GitState,
    NotARepository,
    WorktreeType,
)

logger = logging.getLogger(__name__)

_REMOTE_NAME_RE = re.compile(r"[/:]([^/:]+?)(?:\.git)?/?$")


def relationship_from_counts(ahead: int, behind: int, *, on_base: bool) -> CommitRelationship:
    """Map ahead/behind counts against the remote base to a relationship.

    Zero ahead with commits behind is BEHIND on the base branch itself and
    ANCESTOR (already merged) on any other branch.
    """
    if ahead == 0 and behind == 0:
        return CommitRelationship.SAME
    if behind == 0:
        return CommitRelationship.AHEAD
    if ahead == 0:
        return CommitRelationship.BEHIND if on_base else CommitRelationship.ANCESTOR
    return CommitRelationship.DIVERGENT


def repo_name_from_remote(remote_url: str | None, repo_root: Path) -> str:
    """Extract the repository name from a remote URL, else use the directory name.

    git@github.com:org/repo.git -> repo
    https://github.com/org/repo.git -> repo
    """
    if remote_url:
        match = _REMOTE_NAME_RE.search(remote_url)
        if match:
            return match.group(1)
    return repo_root.name


def detect_worktree_type(git: Git, repo_root: Path, worktree_pattern: str) -> WorktreeType:
    """Classify the checkout at repo_root as the main worktree or a PR worktree.

    A directory named after the PR worktree pattern is always a PR worktree.
    Otherwise the first entry of `git worktree list` is the main worktree and
    any other entry is a secondary (PR) worktree.
    """
    if worktree_name_regex(worktree_pattern).fullmatch(repo_root.name):
        return WorktreeType.PR_WORKTREE

    worktrees = git.list_worktrees(repo_root)
    resolved_root = repo_root.resolve()
    for wt in worktrees:
        if wt.path.resolve() == resolved_root:
            return WorktreeType.MAIN_WORKTREE if wt.is_root else WorktreeType.PR_WORKTREE

    return WorktreeType.MAIN_WORKTREE


def analyze_git_state(
    git: Git,
    base_branch: str,
    cwd: Path,
    *,
    remote: str = DEFAULT_REMOTE,
    worktree_pattern: str = DEFAULT_WORKTREE_PATTERN,
) -> GitState | NotARepository:
    """Collect the facts that drive scenario classification.

    Args:
        git: Git operations (only queries are used)
        base_branch: Configured base branch name (e.g., 'main')
        cwd: Directory inside the repository
        remote: Remote whose tracking branch of base_branch is the reference
        worktree_pattern: Naming pattern of PR worktree directories

    Returns:
        GitState, or NotARepository if cwd is outside a repository or the
        repository has no commits
    """
    repo_root = git.get_repository_root(cwd)
    if repo_root is None:
        return NotARepository(message=f"Not inside a git repository: {cwd}")

    head_sha = git.get_head_sha(cwd)
    if head_sha is None:
        return NotARepository(message=f"Repository at {repo_root} has no commits yet")

    current_branch = git.get_current_branch(cwd)
    on_base = current_branch == base_branch
    branch_type = BranchType.MAIN if on_base else BranchType.OTHER

    base_ref = f"{remote}/{base_branch}"
    counts = git.get_ahead_behind(cwd, base_ref)
    if counts is None:
        logger.debug("Remote base %s not found; treating as divergent", base_ref)
        commit_relationship = CommitRelationship.DIVERGENT
        local_commits: tuple[str, ...] = ()
    else:
        ahead, behind = counts
        commit_relationship = relationship_from_counts(ahead, behind, on_base=on_base)
        local_commits = tuple(git.get_commits_ahead(cwd, base_ref))

    staged, modified, untracked = git.get_file_status(cwd)
    staged_files = frozenset(staged)
    unstaged_files = frozenset(modified) | frozenset(untracked)

    worktree_type = detect_worktree_type(git, repo_root, worktree_pattern)
    repo_name = repo_name_from_remote(git.get_remote_url(repo_root, remote), repo_root)

    state = GitState(
        worktree_type=worktree_type,
        branch_type=branch_type,
        current_branch=current_branch,
        commit_relationship=commit_relationship,
        local_commits=local_commits,
        staged_files=staged_files,
        unstaged_files=unstaged_files,
        repo_root=repo_root,
        repo_name=repo_name,
    )

    logger.debug("Collected git state for %s", repo_root)
    logger.debug("  - Current branch: %s (head %s)", current_branch, head_sha[:7])
    logger.debug("  - Branch type: %s", branch_type.value)
    logger.debug("  - Relationship to %s: %s", base_ref, commit_relationship.value)
    logger.debug("  - Local commits: %d", len(local_commits))
    logger.debug("  - Working tree: %s", state.working_tree_status.value)
    logger.debug("  - Worktree type: %s", worktree_type.value)

    return state
