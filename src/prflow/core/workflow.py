"""End-to-end PR branch creation.

Runs the chosen action, creates the branch at the resolved branch point,
pushes it, opens (or reuses) the PR, restores the original checkout and
puts the new branch in its own worktree.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from prflow.core.config import render_worktree_path
from prflow.core.context import PrflowContext
from prflow.core.github.types import PullRequestInfo
from prflow.core.state.branch_point import get_branch_point
from prflow.core.state.executor import GitActionDeps, execute_state_action
from prflow.core.state.types import ActionResult, GitState, StateAction

logger = logging.getLogger(__name__)


class WorkflowError(RuntimeError):
    """Raised when the PR branch cannot be created."""


@dataclass(frozen=True)
class WorkflowResult:
    """Outcome of create_pr_branch.

    Fields:
        branch: Name of the new branch
        branch_point: Revision the branch was created from
        action_result: What the executor did on the original checkout
        pr: Created or reused PR, None when PR creation was skipped
        worktree_path: Worktree holding the new branch, None if not created
        warnings: Non-fatal problems the user should know about
    """

    branch: str
    branch_point: str
    action_result: ActionResult
    pr: PullRequestInfo | None
    worktree_path: Path | None
    warnings: tuple[str, ...] = ()


def pr_body(description: str) -> str:
    return (
        f"## Summary\n\n{description}\n\n## Changes\n\n-\n\n## Test Plan\n\n-\n\n"
        "---\nPR created with `prflow`"
    )


def find_or_create_pr(
    ctx: PrflowContext,
    repo_root: Path,
    *,
    branch: str,
    base_branch: str,
    title: str,
    body: str,
    draft: bool,
) -> PullRequestInfo:
    """Reuse the open PR for branch, or create one.

    Lookups go through ctx.pr_cache so repeated calls within the TTL do not
    query GitHub again.
    """
    if ctx.pr_cache.has(branch):
        existing = ctx.pr_cache.get(branch)
    else:
        existing = ctx.github.get_pr_for_branch(repo_root, branch)
        ctx.pr_cache.set(branch, existing)

    if existing is not None and existing.state == "OPEN":
        logger.debug("Reusing PR #%d for %s", existing.number, branch)
        return existing

    pr = ctx.github.create_pr(
        repo_root, title=title, body=body, base=base_branch, head=branch, draft=draft
    )
    ctx.pr_cache.set(branch, pr)
    logger.debug("Created PR #%d for %s", pr.number, branch)
    return pr


def _restore_stash(ctx: PrflowContext, stash_ref: str, error: Exception) -> WorkflowError:
    try:
        ctx.git.stash_pop(ctx.cwd, stash_ref)
    except RuntimeError as pop_error:
        return WorkflowError(
            f"{error}\nStashed changes could not be restored automatically; "
            f"run 'git stash pop {stash_ref}': {pop_error}"
        )
    return WorkflowError(f"{error}\nStashed changes were restored.")


@dataclass
class _Progress:
    """Steps completed after the action ran, used to undo them on failure."""

    switched: bool = False
    pushed: bool = False


def _roll_back(
    ctx: PrflowContext,
    error: Exception,
    *,
    progress: _Progress,
    branch_name: str,
    original_branch: str | None,
    original_sha: str,
    committed: bool,
    stash_ref: str | None,
) -> WorkflowError:
    """Return the checkout to where it was before the action ran.

    The action commit is undone with a soft reset, so its changes come back
    staged. The new local branch is deleted; a pushed remote branch is left
    in place and reported.
    """
    git = ctx.git
    cwd = ctx.cwd
    remote = ctx.config.remote
    lines = [str(error)]

    step = ""
    try:
        if progress.switched and committed and original_branch is not None:
            step = f"git branch -f {original_branch} {original_sha[:7]}"
            git.force_branch(cwd, original_branch, original_sha)
        if committed:
            step = f"git reset --soft {original_sha[:7]}"
            git.reset_soft(cwd, original_sha)
        if progress.switched:
            if original_branch is not None:
                step = f"git checkout {original_branch}"
                git.checkout_branch(cwd, original_branch)
            else:
                step = f"git checkout --detach {original_sha[:7]}"
                git.checkout_detached(cwd, original_sha)
            step = f"git branch -D {branch_name}"
            git.delete_branch(cwd, branch_name)
    except RuntimeError as step_error:
        logger.debug("Rollback step '%s' failed: %s", step, step_error)
        lines.append(
            f"Rolling back stopped at '{step}': {step_error}\n"
            f"Before prflow ran the checkout was {original_branch or 'detached'} "
            f"at {original_sha[:7]}."
        )
        if stash_ref is not None:
            lines.append(f"Uncommitted changes are in {stash_ref}; run 'git stash pop'.")
        return WorkflowError("\n".join(lines))

    if committed:
        lines.append("The action commit was undone; its changes are staged again.")
    if progress.switched:
        lines.append(f"Local branch '{branch_name}' was deleted.")
    if progress.pushed:
        lines.append(
            f"Branch '{branch_name}' was pushed to {remote}; remove it with "
            f"'git push {remote} --delete {branch_name}' before retrying."
        )

    if stash_ref is None:
        return WorkflowError("\n".join(lines))
    return _restore_stash(ctx, stash_ref, WorkflowError("\n".join(lines)))


def create_pr_branch(
    ctx: PrflowContext,
    state: GitState,
    action: StateAction,
    *,
    description: str,
    branch_name: str,
    base_branch: str,
    draft: bool,
    open_pr: bool,
) -> WorkflowResult:
    """Create a PR branch from the current checkout.

    Order of operations:
    1. Refuse a branch name that already exists locally or is not valid
    2. Run the action (stage/stash/commit) on the current checkout
    3. `git checkout -b <branch> <branch point>`
    4. Move the original branch back to its pre-action commit, so commits
       made by the action exist only on the new branch
    5. Push with upstream, then create or reuse the PR unless open_pr is False
    6. Return to the original branch (or detached commit); pop a full stash
    7. Add a worktree for the new branch; apply a keep-index stash there

    If any of steps 3-6 fails, the checkout is rolled back: the original
    branch is checked out at its pre-action commit with the action's changes
    staged, the new local branch is deleted and the stash is popped.

    Raises:
        WorkflowError: If the branch name is taken or invalid, the action
            fails, or a git/gh operation fails after the action ran
    """
    git = ctx.git
    cwd = ctx.cwd
    config = ctx.config

    if git.branch_exists(cwd, branch_name):
        raise WorkflowError(f"Branch '{branch_name}' already exists")
    if not git.is_valid_branch_name(cwd, branch_name):
        raise WorkflowError(f"'{branch_name}' is not a valid branch name")

    original_branch = state.current_branch
    original_sha = git.get_head_sha(cwd)
    if original_sha is None:
        raise WorkflowError("Repository has no commits")

    branch_point = get_branch_point(action, base_branch, remote=config.remote)
    logger.debug(
        "Creating %s from %s (original: %s @ %s)",
        branch_name,
        branch_point,
        original_branch,
        original_sha[:7],
    )

    result = execute_state_action(
        action, description, branch_name, GitActionDeps(git), cwd, remote=config.remote
    )
    if not result.success:
        error = WorkflowError(result.error or f"Action '{action.action.value}' failed")
        if result.stash_ref is not None:
            raise _restore_stash(ctx, result.stash_ref, error) from None
        raise error

    stash_ref = result.stash_ref
    warnings: list[str] = []
    pr: PullRequestInfo | None = None
    progress = _Progress()

    try:
        git.checkout_new_branch(cwd, branch_name, branch_point)
        progress.switched = True

        if result.committed and original_branch is not None:
            git.force_branch(cwd, original_branch, original_sha)

        git.push(cwd, config.remote, branch_name, set_upstream=True)
        progress.pushed = True

        if open_pr:
            pr = find_or_create_pr(
                ctx,
                state.repo_root,
                branch=branch_name,
                base_branch=base_branch,
                title=description,
                body=pr_body(description),
                draft=draft,
            )

        if original_branch is not None:
            git.checkout_branch(cwd, original_branch)
        else:
            git.checkout_detached(cwd, original_sha)
    except RuntimeError as e:
        raise _roll_back(
            ctx,
            e,
            progress=progress,
            branch_name=branch_name,
            original_branch=original_branch,
            original_sha=original_sha,
            committed=result.committed,
            stash_ref=stash_ref,
        ) from e

    if stash_ref is not None and not action.stash_unstaged:
        try:
            git.stash_pop(cwd, stash_ref)
        except RuntimeError as e:
            logger.debug("Popping %s failed: %s", stash_ref, e)
            warnings.append(
                f"Failed to restore stashed changes; run 'git stash pop {stash_ref}' to recover"
            )
        stash_ref = None

    worktree_path = render_worktree_path(
        config,
        state.repo_root,
        state.repo_name or state.repo_root.name,
        number=pr.number if pr is not None else None,
        branch=branch_name,
    )
    if worktree_path.exists():
        warnings.append(f"Worktree path already exists, not created: {worktree_path}")
        created_path: Path | None = None
    else:
        git.add_worktree(state.repo_root, worktree_path, branch_name)
        created_path = worktree_path

    if stash_ref is not None:
        if created_path is None:
            warnings.append(f"Unstaged changes remain in {stash_ref}; run 'git stash pop'")
        else:
            try:
                git.stash_apply(created_path, stash_ref)
                git.stash_drop(created_path, stash_ref)
            except RuntimeError as e:
                logger.debug("Applying %s in %s failed: %s", stash_ref, created_path, e)
                warnings.append(
                    f"Failed to apply unstaged changes to the worktree; "
                    f"run 'git stash pop {stash_ref}' to recover"
                )

    return WorkflowResult(
        branch=branch_name,
        branch_point=branch_point,
        action_result=result,
        pr=pr,
        worktree_path=created_path,
        warnings=tuple(warnings),
    )
