"""Repository state classification and action execution.

Collector -> classifier -> catalog -> (user picks a choice) -> executor,
with the branch-point resolver telling the caller where to branch from.
"""

from prflow.core.state.branch_point import get_branch_point
from prflow.core.state.catalog import get_scenario_context, recommended_choice
from prflow.core.state.classifier import (
    UnclassifiableStateError,
    describe_scenario,
    detect_scenario,
)
from prflow.core.state.collector import analyze_git_state
from prflow.core.state.executor import (
    ActionDeps,
    GitActionDeps,
    UnknownActionError,
    execute_state_action,
)
from prflow.core.state.types import (
    ActionKind,
    ActionResult,
    BranchFrom,
    BranchType,
    Choice,
    CommitRelationship,
    GitState,
    NotARepository,
    Scenario,
    ScenarioContext,
    StateAction,
    WorkingTreeStatus,
    WorktreeType,
)

__all__ = [
    "ActionDeps",
    "ActionKind",
    "ActionResult",
    "BranchFrom",
    "BranchType",
    "Choice",
    "CommitRelationship",
    "GitActionDeps",
    "GitState",
    "NotARepository",
    "Scenario",
    "ScenarioContext",
    "StateAction",
    "UnclassifiableStateError",
    "UnknownActionError",
    "WorkingTreeStatus",
    "WorktreeType",
    "analyze_git_state",
    "describe_scenario",
    "detect_scenario",
    "execute_state_action",
    "get_branch_point",
    "get_scenario_context",
    "recommended_choice",
]
