"""Tests for the branch-point resolver."""

from prflow.core.state.branch_point import get_branch_point
from prflow.core.state.types import ActionKind, BranchFrom, StateAction


def test_head_resolves_to_head() -> None:
    action = StateAction(action=ActionKind.COMMIT_STAGED, branch_from=BranchFrom.HEAD)
    assert get_branch_point(action, "main") == "HEAD"


def test_origin_main_resolves_to_remote_base() -> None:
    action = StateAction(action=ActionKind.BRANCH_ONLY, branch_from=BranchFrom.ORIGIN_MAIN)
    assert get_branch_point(action, "main") == "origin/main"
    assert get_branch_point(action, "develop") == "origin/develop"


def test_origin_main_uses_configured_remote() -> None:
    action = StateAction(action=ActionKind.BRANCH_ONLY, branch_from=BranchFrom.ORIGIN_MAIN)
    assert get_branch_point(action, "main", remote="upstream") == "upstream/main"


def test_head_ignores_base_branch() -> None:
    action = StateAction(action=ActionKind.EMPTY_COMMIT)
    assert get_branch_point(action, "main") == get_branch_point(action, "develop") == "HEAD"
