"""New command: create a PR branch (and worktree) from the current state."""

import dataclasses
import logging

import click

from prflow.cli.core import ClassifiedState, classify_current_state
from prflow.cli.ensure import Ensure
from prflow.cli.output import user_output
from prflow.core.config import slugify_branch_name
from prflow.core.context import PrflowContext
from prflow.core.git.dry_run import DryRunGit
from prflow.core.github.dry_run import DryRunGitHub
from prflow.core.state.catalog import recommended_choice
from prflow.core.state.types import ActionKind, Choice
from prflow.core.workflow import WorkflowError, create_pr_branch

logger = logging.getLogger(__name__)


def select_choice_by_kind(classified: ClassifiedState, kind: ActionKind) -> Choice:
    """Pick the first choice offering kind, or exit if the scenario has none.

    The scenario decides the variant: for a branch with staged and unstaged
    changes, commit_staged also moves the unstaged changes to the worktree.
    """
    for choice in classified.context.actionable_choices:
        if choice.action is not None and choice.action.action is kind:
            return choice
    available = ", ".join(
        choice.action.action.value
        for choice in classified.context.actionable_choices
        if choice.action is not None
    )
    Ensure.fail(
        f"Action '{kind.value}' is not available in scenario "
        f"'{classified.scenario.value}' (available: {available})"
    )


def prompt_for_choice(classified: ClassifiedState) -> Choice:
    """Show the numbered menu and return the selected choice."""
    context = classified.context
    user_output(context.message)
    if context.sub_message:
        user_output(click.style(context.sub_message, dim=True))
    user_output()

    recommended = recommended_choice(context)
    default_index = 1
    for index, choice in enumerate(context.choices, start=1):
        marker = ""
        if choice is recommended:
            marker = click.style(" (recommended)", fg="green")
            default_index = index
        user_output(f"  {index}. {choice.label}{marker}")
    user_output()

    selected = click.prompt(
        "Choose an option",
        type=click.IntRange(1, len(context.choices)),
        default=default_index,
        err=True,
    )
    return context.choices[selected - 1]


@click.command("new")
@click.argument("description")
@click.option("--branch", "branch_name", help="Name of the new branch (default: from description).")
@click.option("--base", "base_branch", help="Base branch the PR targets (default: config).")
@click.option(
    "--action",
    "action_kind",
    type=click.Choice([kind.value for kind in ActionKind]),
    help="Run this action without prompting (the variant the current state offers).",
)
@click.option("--draft/--no-draft", default=None, help="Create the PR as a draft.")
@click.option("--no-pr", is_flag=True, help="Create and push the branch without opening a PR.")
@click.option("--dry-run", is_flag=True, help="Print what would be done without doing it.")
@click.pass_obj
def new_cmd(
    ctx: PrflowContext,
    description: str,
    branch_name: str | None,
    base_branch: str | None,
    action_kind: str | None,
    draft: bool | None,
    no_pr: bool,
    dry_run: bool,
) -> None:
    """Create a PR branch for DESCRIPTION from the current repository state."""
    if dry_run:
        ctx = dataclasses.replace(
            ctx,
            git=DryRunGit(ctx.git),
            github=DryRunGitHub(ctx.github),
            dry_run=True,
        )

    classified = classify_current_state(ctx, base_branch)
    logger.debug("Scenario: %s", classified.scenario.value)

    if action_kind is not None:
        choice = select_choice_by_kind(classified, ActionKind(action_kind))
        user_output(f"Action: {choice.label}")
    else:
        choice = prompt_for_choice(classified)
    if choice.action is None:
        user_output("Cancelled.")
        raise SystemExit(1)
    action = choice.action

    branch = branch_name or slugify_branch_name(ctx.config.branch_prefix, description)
    use_draft = draft if draft is not None else ctx.config.draft_pr

    try:
        result = create_pr_branch(
            ctx,
            classified.state,
            action,
            description=description,
            branch_name=branch,
            base_branch=classified.base_branch,
            draft=use_draft,
            open_pr=not no_pr,
        )
    except WorkflowError as e:
        Ensure.fail(str(e))
    except RuntimeError as e:
        Ensure.fail(f"Failed to create PR branch '{branch}': {e}")

    if result.action_result.message:
        user_output(result.action_result.message)
    user_output(
        f"Created branch {click.style(result.branch, fg='cyan')} from {result.branch_point}"
    )
    if result.pr is not None:
        user_output(f"PR #{result.pr.number}: {result.pr.url}")
    if result.worktree_path is not None:
        user_output(f"Worktree: {click.style(str(result.worktree_path), fg='green')}")
    for warning in result.warnings:
        user_output(click.style("Warning: ", fg="yellow") + warning)
