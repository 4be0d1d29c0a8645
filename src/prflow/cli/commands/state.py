"""State command: show the classified repository state and its actions."""

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from prflow.cli.core import ClassifiedState, classify_current_state
from prflow.cli.output import machine_output, user_output
from prflow.core.context import PrflowContext
from prflow.core.state.catalog import recommended_choice
from prflow.core.state.classifier import describe_scenario


def state_to_json(classified: ClassifiedState, remote: str, *, verbose: bool) -> dict[str, Any]:
    """Build the machine-readable form of a classified state."""
    state = classified.state
    recommended = recommended_choice(classified.context)
    data: dict[str, Any] = {
        "scenario": classified.scenario.value,
        "scenario_description": describe_scenario(
            classified.scenario, classified.base_branch, remote
        ),
        "current_branch": state.current_branch,
        "base_branch": classified.base_branch,
        "worktree_type": state.worktree_type.value,
        "commit_relationship": state.commit_relationship.value,
        "working_tree_status": state.working_tree_status.value,
        "has_changes": state.has_changes,
        "has_staged": bool(state.staged_files),
        "has_unstaged": bool(state.unstaged_files),
        "local_commits": len(state.local_commits),
        "available_actions": [
            {
                "action": choice.action.action.value,
                "label": choice.label,
                "stash_unstaged": choice.action.stash_unstaged,
            }
            for choice in classified.context.actionable_choices
            if choice.action is not None
        ],
        "recommended_action": (
            recommended.action.action.value
            if recommended is not None and recommended.action is not None
            else None
        ),
    }
    if verbose:
        data["staged_files"] = sorted(state.staged_files)
        data["unstaged_files"] = sorted(state.unstaged_files)
        data["local_commit_summaries"] = list(state.local_commits)
    return data


def _render_text(classified: ClassifiedState, remote: str, *, verbose: bool) -> None:
    state = classified.state
    context = classified.context

    user_output(click.style(classified.scenario.value, fg="cyan", bold=True))
    user_output(describe_scenario(classified.scenario, classified.base_branch, remote))
    user_output()

    facts = Table(show_header=False, box=None)
    facts.add_column("fact", style="dim", no_wrap=True)
    facts.add_column("value", no_wrap=True)
    facts.add_row("branch", state.current_branch or "(detached)")
    facts.add_row("base", f"{remote}/{classified.base_branch}")
    facts.add_row("relationship", state.commit_relationship.value)
    facts.add_row("working tree", state.working_tree_status.value)
    facts.add_row("worktree", state.worktree_type.value)
    facts.add_row("local commits", str(len(state.local_commits)))

    actions = Table(show_header=True, header_style="bold")
    actions.add_column("#", no_wrap=True)
    actions.add_column("action", style="cyan", no_wrap=True)
    actions.add_column("description")
    recommended = recommended_choice(context)
    rows = [
        (choice, choice.action)
        for choice in context.actionable_choices
        if choice.action is not None
    ]
    for index, (choice, action) in enumerate(rows, start=1):
        label = choice.label
        if choice is recommended:
            label += " (recommended)"
        actions.add_row(str(index), action.action.value, label)

    console = Console(stderr=True, width=200)
    console.print(facts)
    if verbose:
        for path in sorted(state.staged_files):
            user_output(f"  staged:   {path}")
        for path in sorted(state.unstaged_files):
            user_output(f"  unstaged: {path}")
        for summary in state.local_commits:
            user_output(f"  commit:   {summary}")
    user_output()
    user_output(context.message)
    if context.sub_message:
        user_output(click.style(context.sub_message, dim=True))
    console.print(actions)


@click.command("state")
@click.option("--base", "base_branch", help="Base branch to compare against (default: config).")
@click.option("--json", "as_json", is_flag=True, help="Emit machine-readable JSON on stdout.")
@click.option("--verbose", "-v", is_flag=True, help="Include file and commit lists.")
@click.pass_obj
def state_cmd(ctx: PrflowContext, base_branch: str | None, as_json: bool, verbose: bool) -> None:
    """Show the repository state and the safe actions for it."""
    classified = classify_current_state(ctx, base_branch)

    if as_json:
        payload = state_to_json(classified, ctx.config.remote, verbose=verbose)
        machine_output(json.dumps(payload, indent=2))
        return

    _render_text(classified, ctx.config.remote, verbose=verbose)
