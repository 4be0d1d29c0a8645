"""Core types for repository state classification and action execution.

All types are immutable value objects. A GitState is collected fresh for
every invocation; a StateAction lives for one user decision and is consumed
once by the executor.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class WorktreeType(Enum):
    """Whether the checkout is the repository's primary working directory."""

    MAIN_WORKTREE = "main_worktree"
    PR_WORKTREE = "pr_worktree"


class BranchType(Enum):
    """Whether the current branch is the configured base branch."""

    MAIN = "main"
    OTHER = "other"


class CommitRelationship(Enum):
    """Relationship of the current tip to the remote-tracking base tip.

    BEHIND and ANCESTOR both mean the current tip is contained in the remote
    base. The collector reports BEHIND when the current branch is the base
    branch itself and ANCESTOR for a feature branch that was already merged.
    """

    SAME = "same"
    AHEAD = "ahead"
    BEHIND = "behind"
    ANCESTOR = "ancestor"
    DIVERGENT = "divergent"


class WorkingTreeStatus(Enum):
    """Summary of uncommitted changes in the working tree and index."""

    CLEAN = "clean"
    STAGED_ONLY = "staged_only"
    UNSTAGED_ONLY = "unstaged_only"
    BOTH = "both"


class Scenario(Enum):
    """The twelve named classifications of repository state."""

    MAIN_CLEAN_SAME = "main_clean_same"
    MAIN_STAGED_SAME = "main_staged_same"
    MAIN_UNSTAGED_SAME = "main_unstaged_same"
    MAIN_BOTH_SAME = "main_both_same"
    MAIN_CLEAN_AHEAD = "main_clean_ahead"
    MAIN_CHANGES_AHEAD = "main_changes_ahead"
    BRANCH_SAME_AS_MAIN = "branch_same_as_main"
    BRANCH_ANCESTOR = "branch_ancestor"
    BRANCH_DIVERGENT = "branch_divergent"
    BRANCH_WITH_CHANGES = "branch_with_changes"
    DETACHED_HEAD = "detached_head"
    PR_WORKTREE = "pr_worktree"


class ActionKind(Enum):
    """What the executor does on the current checkout before branching."""

    EMPTY_COMMIT = "empty_commit"
    COMMIT_STAGED = "commit_staged"
    COMMIT_ALL = "commit_all"
    STASH_AND_BRANCH = "stash_and_branch"
    STASH_AND_EMPTY_COMMIT = "stash_and_empty_commit"
    BRANCH_ONLY = "branch_only"
    PUSH_THEN_EMPTY_COMMIT = "push_then_empty_commit"

    @property
    def commits_before_branching(self) -> bool:
        """True if the action stages or commits on the current checkout."""
        return self in _COMMITTING_KINDS


_COMMITTING_KINDS = frozenset(
    {
        ActionKind.EMPTY_COMMIT,
        ActionKind.COMMIT_STAGED,
        ActionKind.COMMIT_ALL,
        ActionKind.STASH_AND_EMPTY_COMMIT,
        ActionKind.PUSH_THEN_EMPTY_COMMIT,
    }
)


class BranchFrom(Enum):
    """Source revision for the new branch."""

    HEAD = "head"
    ORIGIN_MAIN = "origin_main"


def working_tree_status_for(
    staged_files: frozenset[str], unstaged_files: frozenset[str]
) -> WorkingTreeStatus:
    """Derive the working tree status from the staged and unstaged path sets."""
    if staged_files and unstaged_files:
        return WorkingTreeStatus.BOTH
    if staged_files:
        return WorkingTreeStatus.STAGED_ONLY
    if unstaged_files:
        return WorkingTreeStatus.UNSTAGED_ONLY
    return WorkingTreeStatus.CLEAN


@dataclass(frozen=True)
class GitState:
    """Immutable snapshot of the facts that drive scenario classification.

    working_tree_status is derived from staged_files and unstaged_files and
    has no storage of its own, so the two can never disagree.

    Fields:
        worktree_type: Primary checkout or secondary (PR) worktree
        branch_type: MAIN when the current branch is the base branch
        current_branch: Branch name, or None when HEAD is detached
        commit_relationship: Current tip relative to <remote>/<base>
        local_commits: One-line summaries of commits not in <remote>/<base>
        staged_files: Repository-relative paths with staged changes
        unstaged_files: Repository-relative paths modified or untracked
        repo_root: Repository root (executor context only)
        repo_name: Repository name (executor context only)
    """

    worktree_type: WorktreeType
    branch_type: BranchType
    current_branch: str | None
    commit_relationship: CommitRelationship
    local_commits: tuple[str, ...] = ()
    staged_files: frozenset[str] = field(default_factory=frozenset)
    unstaged_files: frozenset[str] = field(default_factory=frozenset)
    repo_root: Path = Path(".")
    repo_name: str = ""

    @property
    def working_tree_status(self) -> WorkingTreeStatus:
        return working_tree_status_for(self.staged_files, self.unstaged_files)

    @property
    def has_changes(self) -> bool:
        return self.working_tree_status is not WorkingTreeStatus.CLEAN

    @property
    def has_local_commits(self) -> bool:
        return len(self.local_commits) > 0


@dataclass(frozen=True)
class NotARepository:
    """Sentinel returned when the directory cannot yield a GitState.

    Covers directories outside any repository and repositories without
    commits. Callers check with isinstance() and print a targeted message.
    """

    message: str = "Not inside a git repository"


@dataclass(frozen=True)
class StateAction:
    """An action chosen from the catalog, consumed once by the executor.

    Raises:
        ValueError: If an action that stages or commits would branch from
            the remote base. Checking out <remote>/<base> over a modified
            index resets files that changed upstream and drops the work.
    """

    action: ActionKind
    branch_from: BranchFrom = BranchFrom.HEAD
    stash_unstaged: bool = False

    def __post_init__(self) -> None:
        if self.branch_from is BranchFrom.ORIGIN_MAIN and self.action.commits_before_branching:
            raise ValueError(
                f"Action '{self.action.value}' modifies the current checkout and "
                f"must branch from HEAD, not from the remote base"
            )


@dataclass(frozen=True)
class Choice:
    """A menu entry. Choices without an action cancel the flow."""

    label: str
    action: StateAction | None


@dataclass(frozen=True)
class ScenarioContext:
    """Message and ordered choices presented for one scenario."""

    message: str
    choices: tuple[Choice, ...]
    sub_message: str | None = None

    @property
    def actionable_choices(self) -> tuple[Choice, ...]:
        return tuple(choice for choice in self.choices if choice.action is not None)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of executing a StateAction.

    Fields:
        success: False when an injected git operation failed
        message: Human-readable summary of what was done
        error: Failure description when success is False
        stash_ref: Stash created by the action, if any (kept on failure)
        committed: True if a commit was created on the current checkout
    """

    success: bool
    message: str | None = None
    error: str | None = None
    stash_ref: str | None = None
    committed: bool = False
