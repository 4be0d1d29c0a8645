"""Scenario classifier: a pure decision table from GitState to Scenario."""

from prflow.core.state.types import (
    BranchType,
    CommitRelationship,
    GitState,
    Scenario,
    WorkingTreeStatus,
    WorktreeType,
)


class UnclassifiableStateError(RuntimeError):
    """Raised when a GitState falls through the decision table.

    This indicates a programming defect (a new enum member without a table
    entry), never a user error. Defaulting to some scenario instead could
    offer actions that lose work.
    """


_MAIN_SAME_BY_STATUS = {
    WorkingTreeStatus.CLEAN: Scenario.MAIN_CLEAN_SAME,
    WorkingTreeStatus.STAGED_ONLY: Scenario.MAIN_STAGED_SAME,
    WorkingTreeStatus.UNSTAGED_ONLY: Scenario.MAIN_UNSTAGED_SAME,
    WorkingTreeStatus.BOTH: Scenario.MAIN_BOTH_SAME,
}


def _classify_main(state: GitState) -> Scenario:
    status = state.working_tree_status
    match state.commit_relationship:
        # Local base lagging the remote is not blocking: only the working
        # tree matters until there are local commits.
        case CommitRelationship.SAME | CommitRelationship.BEHIND | CommitRelationship.ANCESTOR:
            if status in _MAIN_SAME_BY_STATUS:
                return _MAIN_SAME_BY_STATUS[status]
        case CommitRelationship.AHEAD | CommitRelationship.DIVERGENT:
            if status is WorkingTreeStatus.CLEAN:
                return Scenario.MAIN_CLEAN_AHEAD
            return Scenario.MAIN_CHANGES_AHEAD
    raise UnclassifiableStateError(
        f"No scenario for base branch state: relationship={state.commit_relationship!r}, "
        f"working tree={status!r}"
    )


def _classify_other(state: GitState) -> Scenario:
    if state.has_changes:
        return Scenario.BRANCH_WITH_CHANGES

    if state.has_local_commits:
        return Scenario.BRANCH_DIVERGENT

    match state.commit_relationship:
        case CommitRelationship.ANCESTOR | CommitRelationship.BEHIND:
            return Scenario.BRANCH_ANCESTOR
        case CommitRelationship.SAME | CommitRelationship.AHEAD | CommitRelationship.DIVERGENT:
            return Scenario.BRANCH_SAME_AS_MAIN
    raise UnclassifiableStateError(
        f"No scenario for branch state: relationship={state.commit_relationship!r}"
    )


def detect_scenario(state: GitState) -> Scenario:
    """Classify a GitState into exactly one Scenario.

    Priority:
    1. Detached HEAD wins over every other fact.
    2. A PR worktree operates on its own branch, so it is not compared
       against the base branch.
    3. Otherwise the base branch and feature branches have their own tables.

    Raises:
        UnclassifiableStateError: If the state falls through the table
    """
    if state.current_branch is None:
        return Scenario.DETACHED_HEAD

    if state.worktree_type is WorktreeType.PR_WORKTREE:
        return Scenario.PR_WORKTREE

    match state.branch_type:
        case BranchType.MAIN:
            return _classify_main(state)
        case BranchType.OTHER:
            return _classify_other(state)
    raise UnclassifiableStateError(f"Unknown branch type: {state.branch_type!r}")


_DESCRIPTIONS = {
    Scenario.MAIN_CLEAN_SAME: "On {base}, same as {remote_base}, no uncommitted changes",
    Scenario.MAIN_STAGED_SAME: "On {base}, same as {remote_base}, staged changes only",
    Scenario.MAIN_UNSTAGED_SAME: "On {base}, same as {remote_base}, unstaged changes only",
    Scenario.MAIN_BOTH_SAME: "On {base}, same as {remote_base}, staged and unstaged changes",
    Scenario.MAIN_CLEAN_AHEAD: "On {base}, ahead of {remote_base}, no uncommitted changes",
    Scenario.MAIN_CHANGES_AHEAD: "On {base}, ahead of {remote_base}, with uncommitted changes",
    Scenario.BRANCH_SAME_AS_MAIN: "On feature branch with no commits beyond {base}",
    Scenario.BRANCH_ANCESTOR: "On feature branch that is already merged into {base}",
    Scenario.BRANCH_DIVERGENT: "On feature branch with commits not in {base}",
    Scenario.BRANCH_WITH_CHANGES: "On feature branch with uncommitted changes",
    Scenario.DETACHED_HEAD: "In detached HEAD state",
    Scenario.PR_WORKTREE: "In a PR worktree (not the main worktree)",
}


def describe_scenario(scenario: Scenario, base_branch: str, remote: str = "origin") -> str:
    """Human-readable one-line description of a scenario."""
    return _DESCRIPTIONS[scenario].format(base=base_branch, remote_base=f"{remote}/{base_branch}")
