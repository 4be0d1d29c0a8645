"""Action executor.

Performs the stage/stash/commit sequence of a StateAction on the current
checkout. It never creates the branch itself: the caller checks out the new
branch at get_branch_point(action, base) afterwards.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from prflow.core.config import DEFAULT_REMOTE
from prflow.core.git.abc import Git
from prflow.core.state.types import ActionKind, ActionResult, StateAction

logger = logging.getLogger(__name__)


class UnknownActionError(ValueError):
    """Raised for an action kind the executor has no sequence for."""


class ActionDeps(ABC):
    """The four repository operations the executor may perform."""

    @abstractmethod
    def stage(self, path: str, cwd: Path) -> None:
        """Stage path (relative to cwd)."""
        ...

    @abstractmethod
    def stash(self, message: str, keep_index: bool, cwd: Path) -> str | None:
        """Stash changes and return the stash reference, or None if nothing was stashed."""
        ...

    @abstractmethod
    def commit(self, message: str, allow_empty: bool, cwd: Path) -> None:
        """Commit the index."""
        ...

    @abstractmethod
    def push(self, remote: str, branch: str, set_upstream: bool, cwd: Path) -> None:
        """Push branch to remote."""
        ...


class GitActionDeps(ActionDeps):
    """ActionDeps backed by a Git gateway."""

    def __init__(self, git: Git) -> None:
        self._git = git

    def stage(self, path: str, cwd: Path) -> None:
        self._git.add_paths(cwd, [path])

    def stash(self, message: str, keep_index: bool, cwd: Path) -> str | None:
        return self._git.stash_push(cwd, message=message, keep_index=keep_index)

    def commit(self, message: str, allow_empty: bool, cwd: Path) -> None:
        self._git.commit(cwd, message, allow_empty=allow_empty)

    def push(self, remote: str, branch: str, set_upstream: bool, cwd: Path) -> None:
        self._git.push(cwd, remote, branch, set_upstream=set_upstream)


def empty_commit_message(branch_name: str, description: str) -> str:
    return f"chore: initialize {branch_name}\n\nBranch created for: {description}"


def change_commit_message(description: str) -> str:
    return f"feat: {description}"


def stash_message(branch_name: str) -> str:
    return f"prflow: uncommitted changes before creating {branch_name}"


_KNOWN_KINDS = frozenset(ActionKind)


def execute_state_action(
    action: StateAction,
    description: str,
    branch_name: str,
    deps: ActionDeps,
    cwd: Path,
    *,
    remote: str = DEFAULT_REMOTE,
) -> ActionResult:
    """Run the operations of action on the checkout at cwd.

    Operations run strictly in the order stage, stash, commit (a push comes
    first for PUSH_THEN_EMPTY_COMMIT). Nothing is retried.

    Args:
        action: The chosen action
        description: What the PR is for; embedded in commit messages
        branch_name: Name of the branch the caller will create
        deps: Repository operations
        cwd: Checkout the operations run in
        remote: Remote that PUSH_THEN_EMPTY_COMMIT pushes the current branch to

    Returns:
        ActionResult; on failure success is False, error describes the failed
        operation and stash_ref still reports a stash created before it

    Raises:
        UnknownActionError: If action.action has no operation sequence
    """
    kind = action.action
    if kind not in _KNOWN_KINDS:
        raise UnknownActionError(f"Unknown action kind: {kind!r}")

    logger.debug("Executing %s for branch %s in %s", kind.value, branch_name, cwd)

    stash_ref: str | None = None
    try:
        match kind:
            case ActionKind.EMPTY_COMMIT:
                deps.commit(empty_commit_message(branch_name, description), True, cwd)
                return ActionResult(
                    success=True, message="Created empty initial commit", committed=True
                )

            case ActionKind.COMMIT_STAGED:
                if action.stash_unstaged:
                    stash_ref = deps.stash(stash_message(branch_name), True, cwd)
                deps.commit(change_commit_message(description), False, cwd)
                message = "Committed staged changes"
                if stash_ref is not None:
                    message += f"; unstaged changes saved in {stash_ref}"
                return ActionResult(
                    success=True, message=message, stash_ref=stash_ref, committed=True
                )

            case ActionKind.COMMIT_ALL:
                deps.stage(".", cwd)
                deps.commit(change_commit_message(description), False, cwd)
                return ActionResult(success=True, message="Committed all changes", committed=True)

            case ActionKind.STASH_AND_BRANCH:
                stash_ref = deps.stash(stash_message(branch_name), action.stash_unstaged, cwd)
                return ActionResult(
                    success=True,
                    message=f"Stashed uncommitted changes ({stash_ref or 'nothing to stash'})",
                    stash_ref=stash_ref,
                )

            case ActionKind.STASH_AND_EMPTY_COMMIT:
                stash_ref = deps.stash(stash_message(branch_name), action.stash_unstaged, cwd)
                deps.commit(empty_commit_message(branch_name, description), True, cwd)
                return ActionResult(
                    success=True,
                    message="Stashed uncommitted changes and created empty initial commit",
                    stash_ref=stash_ref,
                    committed=True,
                )

            case ActionKind.BRANCH_ONLY:
                return ActionResult(success=True, message="Branching from current commit")

            case ActionKind.PUSH_THEN_EMPTY_COMMIT:
                deps.push(remote, "HEAD", False, cwd)
                deps.commit(empty_commit_message(branch_name, description), True, cwd)
                return ActionResult(
                    success=True,
                    message="Pushed local commits and created empty initial commit",
                    committed=True,
                )

    except (RuntimeError, subprocess.CalledProcessError, OSError) as e:
        logger.debug("Action %s failed: %s", kind.value, e)
        return ActionResult(success=False, error=str(e), stash_ref=stash_ref)

    raise UnknownActionError(f"Unknown action kind: {kind!r}")
