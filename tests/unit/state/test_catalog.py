"""Tests for the per-scenario action catalog."""

import pytest

from prflow.core.state.catalog import get_scenario_context, recommended_choice
from prflow.core.state.classifier import detect_scenario
from prflow.core.state.types import (
    ActionKind,
    BranchFrom,
    CommitRelationship,
    GitState,
    Scenario,
    ScenarioContext,
    WorktreeType,
)
from tests.unit.state.helpers import make_state

STATE_FOR_SCENARIO: dict[Scenario, GitState] = {
    Scenario.MAIN_CLEAN_SAME: make_state(),
    Scenario.MAIN_STAGED_SAME: make_state(staged=("a.py",)),
    Scenario.MAIN_UNSTAGED_SAME: make_state(unstaged=("b.py",)),
    Scenario.MAIN_BOTH_SAME: make_state(staged=("a.py",), unstaged=("b.py",)),
    Scenario.MAIN_CLEAN_AHEAD: make_state(
        relationship=CommitRelationship.AHEAD, local_commits=("abc1234 local",)
    ),
    Scenario.MAIN_CHANGES_AHEAD: make_state(
        relationship=CommitRelationship.AHEAD,
        local_commits=("abc1234 local",),
        staged=("a.py",),
        unstaged=("b.py",),
    ),
    Scenario.BRANCH_SAME_AS_MAIN: make_state(branch="feature"),
    Scenario.BRANCH_ANCESTOR: make_state(
        branch="feature", relationship=CommitRelationship.ANCESTOR
    ),
    Scenario.BRANCH_DIVERGENT: make_state(
        branch="feature",
        relationship=CommitRelationship.AHEAD,
        local_commits=("abc1234 work",),
    ),
    Scenario.BRANCH_WITH_CHANGES: make_state(branch="feature", staged=("a.py",)),
    Scenario.DETACHED_HEAD: make_state(branch=None),
    Scenario.PR_WORKTREE: make_state(
        branch="feat/x", worktree_type=WorktreeType.PR_WORKTREE
    ),
}


def _context(scenario: Scenario) -> ScenarioContext:
    context = get_scenario_context(scenario, STATE_FOR_SCENARIO[scenario], "main")
    assert context is not None
    return context


def _kinds(context: ScenarioContext) -> list[ActionKind]:
    return [choice.action.action for choice in context.choices if choice.action is not None]


def test_fixture_states_classify_as_their_scenario() -> None:
    for scenario, state in STATE_FOR_SCENARIO.items():
        assert detect_scenario(state) is scenario


@pytest.mark.parametrize("scenario", list(Scenario))
def test_every_scenario_has_an_actionable_choice(scenario: Scenario) -> None:
    context = _context(scenario)
    assert context.actionable_choices
    assert context.message


@pytest.mark.parametrize("scenario", list(Scenario))
def test_every_context_ends_with_cancel(scenario: Scenario) -> None:
    last = _context(scenario).choices[-1]
    assert last.action is None
    assert last.label.startswith("Cancel")


@pytest.mark.parametrize("scenario", list(Scenario))
def test_every_action_branches_from_head(scenario: Scenario) -> None:
    """Actions offered today all stage, commit or keep local commits."""
    for choice in _context(scenario).actionable_choices:
        assert choice.action is not None
        assert choice.action.branch_from is BranchFrom.HEAD


@pytest.mark.parametrize("scenario", list(Scenario))
def test_committing_actions_never_branch_from_remote(scenario: Scenario) -> None:
    for choice in _context(scenario).actionable_choices:
        assert choice.action is not None
        if choice.action.action.commits_before_branching:
            assert choice.action.branch_from is not BranchFrom.ORIGIN_MAIN


@pytest.mark.parametrize("scenario", list(Scenario))
def test_catalog_is_deterministic(scenario: Scenario) -> None:
    state = STATE_FOR_SCENARIO[scenario]
    assert get_scenario_context(scenario, state, "main") == get_scenario_context(
        scenario, state, "main"
    )


def test_main_clean_same_offers_only_empty_commit() -> None:
    assert _kinds(_context(Scenario.MAIN_CLEAN_SAME)) == [ActionKind.EMPTY_COMMIT]


def test_main_staged_same_offers_commit_staged_first() -> None:
    assert _kinds(_context(Scenario.MAIN_STAGED_SAME)) == [
        ActionKind.COMMIT_STAGED,
        ActionKind.STASH_AND_EMPTY_COMMIT,
    ]


def test_main_unstaged_same_offers_commit_all_first() -> None:
    assert _kinds(_context(Scenario.MAIN_UNSTAGED_SAME)) == [
        ActionKind.COMMIT_ALL,
        ActionKind.STASH_AND_EMPTY_COMMIT,
    ]


def test_main_both_same_offers_staged_and_all() -> None:
    context = _context(Scenario.MAIN_BOTH_SAME)
    assert _kinds(context) == [
        ActionKind.COMMIT_STAGED,
        ActionKind.COMMIT_ALL,
        ActionKind.STASH_AND_EMPTY_COMMIT,
    ]
    first = context.choices[0].action
    assert first is not None
    assert first.stash_unstaged is True


def test_main_clean_ahead_keeps_local_commits() -> None:
    context = _context(Scenario.MAIN_CLEAN_AHEAD)
    assert _kinds(context) == [ActionKind.BRANCH_ONLY, ActionKind.PUSH_THEN_EMPTY_COMMIT]
    assert context.sub_message is not None
    assert "1 local commit" in context.sub_message


def test_main_changes_ahead_with_both_offers_split_commit() -> None:
    assert _kinds(_context(Scenario.MAIN_CHANGES_AHEAD)) == [
        ActionKind.COMMIT_ALL,
        ActionKind.COMMIT_STAGED,
        ActionKind.STASH_AND_BRANCH,
    ]


def test_main_changes_ahead_with_only_unstaged_skips_split_commit() -> None:
    state = make_state(
        relationship=CommitRelationship.AHEAD,
        local_commits=("abc1234 local",),
        unstaged=("b.py",),
    )
    context = get_scenario_context(Scenario.MAIN_CHANGES_AHEAD, state, "main")
    assert context is not None
    assert _kinds(context) == [ActionKind.COMMIT_ALL, ActionKind.STASH_AND_BRANCH]


def test_branch_with_changes_without_commits_offers_empty_commit_stash() -> None:
    assert _kinds(_context(Scenario.BRANCH_WITH_CHANGES)) == [
        ActionKind.COMMIT_ALL,
        ActionKind.COMMIT_STAGED,
        ActionKind.STASH_AND_EMPTY_COMMIT,
    ]


def test_branch_with_changes_and_commits_offers_stash_and_branch() -> None:
    state = make_state(
        branch="feature",
        relationship=CommitRelationship.AHEAD,
        local_commits=("abc1234 work",),
        unstaged=("b.py",),
    )
    context = get_scenario_context(Scenario.BRANCH_WITH_CHANGES, state, "main")
    assert context is not None
    assert _kinds(context) == [ActionKind.COMMIT_ALL, ActionKind.STASH_AND_BRANCH]
    assert context.sub_message is not None


def test_branch_divergent_branches_from_current_tip() -> None:
    context = _context(Scenario.BRANCH_DIVERGENT)
    assert _kinds(context) == [ActionKind.BRANCH_ONLY]
    assert "feature" in context.message


def test_branch_ancestor_and_same_differ_only_in_wording() -> None:
    ancestor = _context(Scenario.BRANCH_ANCESTOR)
    same = _context(Scenario.BRANCH_SAME_AS_MAIN)
    assert _kinds(ancestor) == _kinds(same) == [ActionKind.EMPTY_COMMIT]
    assert ancestor.message != same.message


def test_detached_head_with_changes_offers_commit_all() -> None:
    clean = _context(Scenario.DETACHED_HEAD)
    dirty = get_scenario_context(
        Scenario.DETACHED_HEAD, make_state(branch=None, unstaged=("b.py",)), "main"
    )
    assert dirty is not None
    assert _kinds(clean) == [ActionKind.BRANCH_ONLY, ActionKind.EMPTY_COMMIT]
    assert _kinds(dirty) == [
        ActionKind.BRANCH_ONLY,
        ActionKind.EMPTY_COMMIT,
        ActionKind.COMMIT_ALL,
    ]


def test_pr_worktree_with_changes_offers_commit_and_stash() -> None:
    state = make_state(
        branch="feat/x", unstaged=("b.py",), worktree_type=WorktreeType.PR_WORKTREE
    )
    context = get_scenario_context(Scenario.PR_WORKTREE, state, "main")
    assert context is not None
    assert _kinds(context) == [
        ActionKind.BRANCH_ONLY,
        ActionKind.COMMIT_ALL,
        ActionKind.STASH_AND_BRANCH,
    ]


def test_messages_use_configured_base_branch() -> None:
    context = get_scenario_context(
        Scenario.BRANCH_SAME_AS_MAIN, STATE_FOR_SCENARIO[Scenario.BRANCH_SAME_AS_MAIN], "develop"
    )
    assert context is not None
    assert "develop" in context.message


def test_recommended_choice_is_first_actionable() -> None:
    context = _context(Scenario.MAIN_STAGED_SAME)
    recommended = recommended_choice(context)
    assert recommended is not None
    assert recommended is context.choices[0]


def test_recommended_choice_none_without_actions() -> None:
    context = ScenarioContext(message="nothing", choices=())
    assert recommended_choice(context) is None
