"""Shared helpers for commands that start from the current repository state."""

from dataclasses import dataclass

from prflow.cli.ensure import Ensure
from prflow.core.context import PrflowContext
from prflow.core.state.catalog import get_scenario_context
from prflow.core.state.classifier import detect_scenario
from prflow.core.state.collector import analyze_git_state
from prflow.core.state.types import GitState, NotARepository, Scenario, ScenarioContext


@dataclass(frozen=True)
class ClassifiedState:
    """A collected GitState with its scenario and menu."""

    state: GitState
    scenario: Scenario
    context: ScenarioContext
    base_branch: str


def classify_current_state(ctx: PrflowContext, base_branch: str | None) -> ClassifiedState:
    """Collect, classify and build the menu for ctx.cwd, exiting on a non-repository."""
    base = base_branch or ctx.config.base_branch
    collected = analyze_git_state(
        ctx.git,
        base,
        ctx.cwd,
        remote=ctx.config.remote,
        worktree_pattern=ctx.config.worktree_pattern,
    )
    if isinstance(collected, NotARepository):
        Ensure.fail(collected.message)

    scenario = detect_scenario(collected)
    context = Ensure.not_none(
        get_scenario_context(scenario, collected, base),
        f"No actions available for scenario '{scenario.value}'",
    )
    return ClassifiedState(state=collected, scenario=scenario, context=context, base_branch=base)
