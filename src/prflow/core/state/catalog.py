"""Per-scenario catalog of safe actions.

Every action offered here branches from HEAD: each one either stages,
commits, or keeps the local commits that a branch from the remote base
would silently drop.
"""

from prflow.core.state.types import (
    ActionKind,
    BranchFrom,
    Choice,
    GitState,
    Scenario,
    ScenarioContext,
    StateAction,
)


def _action(kind: ActionKind, *, stash_unstaged: bool = False) -> StateAction:
    return StateAction(action=kind, branch_from=BranchFrom.HEAD, stash_unstaged=stash_unstaged)


def _cancel(label: str = "Cancel") -> Choice:
    return Choice(label=label, action=None)


def _main_context(scenario: Scenario, state: GitState, base_branch: str) -> ScenarioContext:
    match scenario:
        case Scenario.MAIN_CLEAN_SAME:
            return ScenarioContext(
                message=f"No changes detected on '{base_branch}'.",
                sub_message="A PR needs at least one commit, so the new branch starts "
                "with an empty commit.",
                choices=(
                    Choice("Continue with empty initial commit", _action(ActionKind.EMPTY_COMMIT)),
                    _cancel("Cancel - I'll make some changes first"),
                ),
            )
        case Scenario.MAIN_STAGED_SAME:
            return ScenarioContext(
                message="You have staged changes ready to commit.",
                choices=(
                    Choice(
                        "Commit staged changes to the new PR branch",
                        _action(ActionKind.COMMIT_STAGED),
                    ),
                    Choice(
                        "Stash changes (restored after) and continue with empty initial commit",
                        _action(ActionKind.STASH_AND_EMPTY_COMMIT),
                    ),
                    _cancel(),
                ),
            )
        case Scenario.MAIN_UNSTAGED_SAME:
            return ScenarioContext(
                message="You have unstaged changes.",
                choices=(
                    Choice(
                        "Stage all and commit to the new PR branch",
                        _action(ActionKind.COMMIT_ALL),
                    ),
                    Choice(
                        "Stash changes (restored after) and continue with empty initial commit",
                        _action(ActionKind.STASH_AND_EMPTY_COMMIT),
                    ),
                    _cancel(),
                ),
            )
        case Scenario.MAIN_BOTH_SAME:
            return ScenarioContext(
                message="You have both staged and unstaged changes.",
                choices=(
                    Choice(
                        "Commit staged to PR branch, move unstaged to new worktree",
                        _action(ActionKind.COMMIT_STAGED, stash_unstaged=True),
                    ),
                    Choice(
                        "Stage all and commit everything to the new PR branch",
                        _action(ActionKind.COMMIT_ALL),
                    ),
                    Choice(
                        "Stash all changes (restored after) and continue with empty initial commit",
                        _action(ActionKind.STASH_AND_EMPTY_COMMIT),
                    ),
                    _cancel(),
                ),
            )
        case Scenario.MAIN_CLEAN_AHEAD:
            return ScenarioContext(
                message=f"You have local commits on '{base_branch}' not yet pushed.",
                sub_message=_commit_summary(state),
                choices=(
                    Choice(
                        "Use these commits for the PR (create branch from HEAD)",
                        _action(ActionKind.BRANCH_ONLY),
                    ),
                    Choice(
                        f"Push commits to {base_branch} first, then create PR branch "
                        "with empty initial commit",
                        _action(ActionKind.PUSH_THEN_EMPTY_COMMIT),
                    ),
                    _cancel(),
                ),
            )
        case Scenario.MAIN_CHANGES_AHEAD:
            choices = [
                Choice(
                    "Include commits and commit all uncommitted changes to the PR branch",
                    _action(ActionKind.COMMIT_ALL),
                )
            ]
            if state.staged_files and state.unstaged_files:
                choices.append(
                    Choice(
                        "Include commits and staged changes, move unstaged to new worktree",
                        _action(ActionKind.COMMIT_STAGED, stash_unstaged=True),
                    )
                )
            choices.append(
                Choice(
                    "Include commits only, stash uncommitted changes (restored after)",
                    _action(ActionKind.STASH_AND_BRANCH),
                )
            )
            choices.append(_cancel())
            return ScenarioContext(
                message="You have local commits AND uncommitted changes.",
                sub_message=_commit_summary(state),
                choices=tuple(choices),
            )
    raise ValueError(f"Not a base branch scenario: {scenario!r}")


def _branch_with_changes_context(state: GitState, branch: str) -> ScenarioContext:
    choices = [
        Choice(
            "Stage all and commit to the new PR branch",
            _action(ActionKind.COMMIT_ALL),
        )
    ]
    if state.staged_files:
        if state.unstaged_files:
            choices.append(
                Choice(
                    "Commit staged to PR branch, move unstaged to new worktree",
                    _action(ActionKind.COMMIT_STAGED, stash_unstaged=True),
                )
            )
        else:
            choices.append(
                Choice(
                    "Commit staged changes to the new PR branch",
                    _action(ActionKind.COMMIT_STAGED),
                )
            )
    if state.has_local_commits:
        choices.append(
            Choice(
                "Create PR from this branch's commits, stash uncommitted changes",
                _action(ActionKind.STASH_AND_BRANCH),
            )
        )
        sub_message: str | None = "Branch also has commits not in the base branch."
    else:
        choices.append(
            Choice(
                "Stash changes (restored after) and continue with empty initial commit",
                _action(ActionKind.STASH_AND_EMPTY_COMMIT),
            )
        )
        sub_message = None
    choices.append(_cancel())
    return ScenarioContext(
        message=f"You are on branch '{branch}' with uncommitted changes.",
        sub_message=sub_message,
        choices=tuple(choices),
    )


def _commit_summary(state: GitState) -> str:
    count = len(state.local_commits)
    noun = "commit" if count == 1 else "commits"
    return f"{count} local {noun} will be included in the new PR branch."


def get_scenario_context(
    scenario: Scenario, state: GitState, base_branch: str
) -> ScenarioContext | None:
    """Build the message and ordered choices for a scenario.

    The result depends only on the arguments. Every context ends with a
    Cancel choice that carries no action.

    Returns:
        ScenarioContext, or None if no choice would be actionable
    """
    branch = state.current_branch or "HEAD"

    match scenario:
        case (
            Scenario.MAIN_CLEAN_SAME
            | Scenario.MAIN_STAGED_SAME
            | Scenario.MAIN_UNSTAGED_SAME
            | Scenario.MAIN_BOTH_SAME
            | Scenario.MAIN_CLEAN_AHEAD
            | Scenario.MAIN_CHANGES_AHEAD
        ):
            context = _main_context(scenario, state, base_branch)
        case Scenario.BRANCH_SAME_AS_MAIN:
            context = ScenarioContext(
                message=f"Branch '{branch}' is at the same commit as '{base_branch}'.",
                sub_message="No divergent commits detected. A PR requires at least one "
                "commit difference.",
                choices=(
                    Choice("Continue with empty initial commit", _action(ActionKind.EMPTY_COMMIT)),
                    _cancel(),
                ),
            )
        case Scenario.BRANCH_ANCESTOR:
            context = ScenarioContext(
                message=f"Branch '{branch}' appears to be already merged into '{base_branch}'.",
                sub_message="Creating a PR from it would result in no changes.",
                choices=(
                    Choice("Continue with empty initial commit", _action(ActionKind.EMPTY_COMMIT)),
                    _cancel("Cancel - I'll check the branch status first"),
                ),
            )
        case Scenario.BRANCH_DIVERGENT:
            context = ScenarioContext(
                message=f"You are on branch '{branch}' with commits not in '{base_branch}'.",
                sub_message=_commit_summary(state),
                choices=(
                    Choice(
                        f"Create PR from this branch's commits ({branch} -> {base_branch})",
                        _action(ActionKind.BRANCH_ONLY),
                    ),
                    _cancel(),
                ),
            )
        case Scenario.BRANCH_WITH_CHANGES:
            context = _branch_with_changes_context(state, branch)
        case Scenario.DETACHED_HEAD:
            choices = [
                Choice("Create branch from this commit", _action(ActionKind.BRANCH_ONLY)),
                Choice(
                    "Create branch from this commit with empty initial commit",
                    _action(ActionKind.EMPTY_COMMIT),
                ),
            ]
            if state.has_changes:
                choices.append(
                    Choice(
                        "Stage all and commit to the new PR branch",
                        _action(ActionKind.COMMIT_ALL),
                    )
                )
            choices.append(_cancel())
            context = ScenarioContext(
                message="You are in detached HEAD state.",
                choices=tuple(choices),
            )
        case Scenario.PR_WORKTREE:
            choices = [
                Choice(
                    "Create a stacked PR branch from this worktree's HEAD",
                    _action(ActionKind.BRANCH_ONLY),
                )
            ]
            if state.has_changes:
                choices.append(
                    Choice(
                        "Stage all and commit to the new PR branch",
                        _action(ActionKind.COMMIT_ALL),
                    )
                )
                choices.append(
                    Choice(
                        "Stash uncommitted changes (restored after) and branch",
                        _action(ActionKind.STASH_AND_BRANCH),
                    )
                )
            choices.append(_cancel())
            context = ScenarioContext(
                message=f"You are inside a PR worktree on '{branch}'.",
                sub_message="The new branch stacks on this worktree's branch.",
                choices=tuple(choices),
            )
        case _:
            raise ValueError(f"Unknown scenario: {scenario!r}")

    if not context.actionable_choices:
        return None
    return context


def recommended_choice(context: ScenarioContext) -> Choice | None:
    """The first actionable choice, used as the default selection."""
    actionable = context.actionable_choices
    if not actionable:
        return None
    return actionable[0]
