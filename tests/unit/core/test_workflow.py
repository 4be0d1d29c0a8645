"""Tests for create_pr_branch using FakeGit and FakeGitHub."""

from pathlib import Path

import pytest

from prflow.core.config import PrflowConfig
from prflow.core.github.types import PullRequestInfo
from prflow.core.state.types import ActionKind, CommitRelationship, StateAction
from prflow.core.workflow import WorkflowError, create_pr_branch, find_or_create_pr
from tests.fakes.context import create_test_context
from tests.fakes.git import DEFAULT_SHA, FakeGit
from tests.fakes.github import FakeGitHub
from tests.unit.state.helpers import make_state

REPO = Path("/repo")
WORKTREE = Path("/repo.pr100")


def _run(git: FakeGit, action: StateAction, *, state=None, github=None, open_pr=True):
    ctx = create_test_context(git=git, github=github or FakeGitHub(), cwd=REPO)
    return create_pr_branch(
        ctx,
        state or make_state(),
        action,
        description="add login page",
        branch_name="feat/login",
        base_branch="main",
        draft=False,
        open_pr=open_pr,
    )


def test_empty_commit_flow_order() -> None:
    git = FakeGit(repository_root=REPO)

    result = _run(git, StateAction(action=ActionKind.EMPTY_COMMIT))

    assert git.operation_names == [
        "commit",
        "checkout_new_branch",
        "force_branch",
        "push",
        "checkout_branch",
        "add_worktree",
    ]
    assert git.calls("checkout_new_branch") == [(REPO, "feat/login", "HEAD")]
    assert git.calls("force_branch") == [(REPO, "main", DEFAULT_SHA)]
    assert git.calls("push") == [(REPO, "origin", "feat/login", True)]
    assert git.calls("checkout_branch") == [(REPO, "main")]
    assert result.branch_point == "HEAD"
    assert result.pr is not None
    assert result.pr.number == 100
    assert result.worktree_path == WORKTREE


def test_existing_branch_is_refused_before_any_mutation() -> None:
    git = FakeGit(repository_root=REPO, existing_branches={"feat/login"})

    with pytest.raises(WorkflowError, match="already exists"):
        _run(git, StateAction(action=ActionKind.EMPTY_COMMIT))

    assert git.operations == []


def test_branch_only_does_not_rewind_original_branch() -> None:
    git = FakeGit(repository_root=REPO, current_branch="feature")
    state = make_state(
        branch="feature", relationship=CommitRelationship.AHEAD, local_commits=("a1 x",)
    )

    _run(git, StateAction(action=ActionKind.BRANCH_ONLY), state=state)

    assert "force_branch" not in git.operation_names
    assert git.calls("checkout_branch") == [(REPO, "feature")]


def test_detached_head_returns_to_original_commit() -> None:
    git = FakeGit(repository_root=REPO, current_branch=None)

    _run(git, StateAction(action=ActionKind.EMPTY_COMMIT), state=make_state(branch=None))

    assert "force_branch" not in git.operation_names
    assert git.calls("checkout_detached") == [(REPO, DEFAULT_SHA)]


def test_full_stash_is_popped_in_original_checkout() -> None:
    git = FakeGit(repository_root=REPO)

    _run(git, StateAction(action=ActionKind.STASH_AND_EMPTY_COMMIT))

    names = git.operation_names
    assert names.index("stash_pop") > names.index("checkout_branch")
    assert git.calls("stash_pop") == [(REPO, "stash@{0}")]
    assert "stash_apply" not in names


def test_keep_index_stash_moves_to_worktree() -> None:
    git = FakeGit(repository_root=REPO)
    state = make_state(staged=("a.py",), unstaged=("b.py",))

    result = _run(
        git, StateAction(action=ActionKind.COMMIT_STAGED, stash_unstaged=True), state=state
    )

    assert git.operation_names[:2] == ["stash_push", "commit"]
    assert git.calls("stash_apply") == [(WORKTREE, "stash@{0}")]
    assert git.calls("stash_drop") == [(WORKTREE, "stash@{0}")]
    assert "stash_pop" not in git.operation_names
    assert result.warnings == ()


def test_no_pr_skips_github() -> None:
    git = FakeGit(repository_root=REPO)
    github = FakeGitHub()

    result = _run(git, StateAction(action=ActionKind.EMPTY_COMMIT), github=github, open_pr=False)

    assert result.pr is None
    assert github.lookups == []
    assert github.created_prs == []
    assert result.worktree_path == Path("/repo.prfeat-login")


def test_action_failure_raises_without_branching() -> None:
    git = FakeGit(repository_root=REPO, failing_operations={"commit": "nothing to commit"})

    with pytest.raises(WorkflowError, match="nothing to commit"):
        _run(git, StateAction(action=ActionKind.COMMIT_STAGED))

    assert "checkout_new_branch" not in git.operation_names


def test_action_failure_after_stash_restores_stash() -> None:
    git = FakeGit(repository_root=REPO, failing_operations={"commit": "hook rejected"})

    with pytest.raises(WorkflowError, match="restored"):
        _run(git, StateAction(action=ActionKind.STASH_AND_EMPTY_COMMIT))

    assert git.calls("stash_pop") == [(REPO, "stash@{0}")]


def test_push_failure_restores_stash() -> None:
    git = FakeGit(repository_root=REPO, failing_operations={"push": "rejected"})

    with pytest.raises(WorkflowError, match="rejected"):
        _run(git, StateAction(action=ActionKind.STASH_AND_BRANCH))

    names = git.operation_names
    assert git.calls("checkout_branch") == [(REPO, "main")]
    assert git.calls("delete_branch") == [(REPO, "feat/login")]
    assert names.index("checkout_branch") < names.index("stash_pop")
    assert git.calls("stash_pop") == [(REPO, "stash@{0}")]
    assert "reset_soft" not in names


def test_push_failure_after_commit_rolls_back_to_original_commit() -> None:
    git = FakeGit(repository_root=REPO, failing_operations={"push": "rejected"})

    with pytest.raises(WorkflowError, match="rejected") as exc_info:
        _run(git, StateAction(action=ActionKind.EMPTY_COMMIT))

    assert git.operation_names == [
        "commit",
        "checkout_new_branch",
        "force_branch",
        "force_branch",
        "reset_soft",
        "checkout_branch",
        "delete_branch",
    ]
    assert git.calls("reset_soft") == [(REPO, DEFAULT_SHA)]
    assert git.calls("checkout_branch") == [(REPO, "main")]
    assert not git.branch_exists(REPO, "feat/login")
    assert "was pushed" not in str(exc_info.value)


def test_checkout_failure_undoes_action_commit_on_original_branch() -> None:
    git = FakeGit(
        repository_root=REPO, failing_operations={"checkout_new_branch": "invalid ref"}
    )
    state = make_state(unstaged=("a.py",))

    with pytest.raises(WorkflowError, match="staged again"):
        _run(git, StateAction(action=ActionKind.COMMIT_ALL), state=state)

    assert git.operation_names == ["add_paths", "commit", "reset_soft"]
    assert git.calls("reset_soft") == [(REPO, DEFAULT_SHA)]


def test_pr_failure_reports_pushed_branch() -> None:
    git = FakeGit(repository_root=REPO)
    github = FakeGitHub(create_error="gh: not authenticated")

    with pytest.raises(WorkflowError, match="not authenticated") as exc_info:
        _run(git, StateAction(action=ActionKind.STASH_AND_EMPTY_COMMIT), github=github)

    message = str(exc_info.value)
    assert "git push origin --delete feat/login" in message
    assert "Stashed changes were restored" in message
    assert git.calls("delete_branch") == [(REPO, "feat/login")]
    names = git.operation_names
    assert names.index("checkout_branch") < names.index("stash_pop")


def test_detached_head_rollback_returns_to_original_commit() -> None:
    git = FakeGit(repository_root=REPO, current_branch=None, failing_operations={"push": "x"})

    with pytest.raises(WorkflowError):
        _run(git, StateAction(action=ActionKind.EMPTY_COMMIT), state=make_state(branch=None))

    assert "force_branch" not in git.operation_names
    assert git.calls("reset_soft") == [(REPO, DEFAULT_SHA)]
    assert git.calls("checkout_detached") == [(REPO, DEFAULT_SHA)]


def test_failed_rollback_step_names_manual_recovery() -> None:
    git = FakeGit(
        repository_root=REPO,
        failing_operations={"push": "rejected", "reset_soft": "index.lock exists"},
    )

    with pytest.raises(WorkflowError, match="Rolling back stopped at 'git reset --soft") as exc:
        _run(git, StateAction(action=ActionKind.STASH_AND_EMPTY_COMMIT))

    assert "git stash pop" in str(exc.value)
    assert "stash_pop" not in git.operation_names


def test_invalid_branch_name_is_refused_before_any_mutation() -> None:
    git = FakeGit(repository_root=REPO, invalid_branch_names={"feat/login"})

    with pytest.raises(WorkflowError, match="not a valid branch name"):
        _run(git, StateAction(action=ActionKind.COMMIT_ALL))

    assert git.operations == []


def test_stash_pop_failure_after_success_becomes_warning() -> None:
    git = FakeGit(repository_root=REPO, failing_operations={"stash_pop": "conflict"})

    result = _run(git, StateAction(action=ActionKind.STASH_AND_EMPTY_COMMIT))

    assert result.warnings == (
        "Failed to restore stashed changes; run 'git stash pop stash@{0}' to recover",
    )
    assert "delete_branch" not in git.operation_names


def test_configured_remote_is_used_for_every_push() -> None:
    git = FakeGit(repository_root=REPO, current_branch="feature")
    ctx = create_test_context(
        git=git, cwd=REPO, config=PrflowConfig(remote="upstream")
    )
    state = make_state(
        branch="feature",
        relationship=CommitRelationship.AHEAD,
        local_commits=("a1 x",),
    )

    create_pr_branch(
        ctx,
        state,
        StateAction(action=ActionKind.PUSH_THEN_EMPTY_COMMIT),
        description="add login page",
        branch_name="feat/login",
        base_branch="main",
        draft=False,
        open_pr=False,
    )

    assert git.calls("push") == [
        (REPO, "upstream", "HEAD", False),
        (REPO, "upstream", "feat/login", True),
    ]


def test_stash_apply_failure_becomes_warning() -> None:
    git = FakeGit(repository_root=REPO, failing_operations={"stash_apply": "conflict"})

    result = _run(git, StateAction(action=ActionKind.COMMIT_STAGED, stash_unstaged=True))

    assert len(result.warnings) == 1
    assert "git stash pop stash@{0}" in result.warnings[0]


def test_existing_open_pr_is_reused() -> None:
    existing = PullRequestInfo(
        number=5,
        state="OPEN",
        url="https://github.com/owner/repo/pull/5",
        is_draft=False,
        title="old",
        head_branch="feat/login",
    )
    github = FakeGitHub(prs={"feat/login": existing})
    git = FakeGit(repository_root=REPO)

    result = _run(git, StateAction(action=ActionKind.EMPTY_COMMIT), github=github)

    assert result.pr == existing
    assert github.created_prs == []
    assert result.worktree_path == Path("/repo.pr5")


def test_closed_pr_is_not_reused() -> None:
    closed = PullRequestInfo(
        number=5,
        state="CLOSED",
        url="https://github.com/owner/repo/pull/5",
        is_draft=False,
        title="old",
        head_branch="feat/login",
    )
    github = FakeGitHub(prs={"feat/login": closed})

    result = _run(
        FakeGit(repository_root=REPO), StateAction(action=ActionKind.EMPTY_COMMIT), github=github
    )

    assert result.pr is not None
    assert result.pr.number == 100


def test_find_or_create_pr_uses_cache() -> None:
    github = FakeGitHub()
    ctx = create_test_context(github=github)

    first = find_or_create_pr(
        ctx, REPO, branch="feat/a", base_branch="main", title="a", body="", draft=True
    )
    second = find_or_create_pr(
        ctx, REPO, branch="feat/a", base_branch="main", title="a", body="", draft=True
    )

    assert first == second
    assert first.is_draft
    assert github.lookups == ["feat/a"]
    assert len(github.created_prs) == 1
