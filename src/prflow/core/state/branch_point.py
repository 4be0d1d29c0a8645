"""Branch-point resolver: the single place that maps BranchFrom to a revision."""

from prflow.core.config import DEFAULT_REMOTE
from prflow.core.state.types import BranchFrom, StateAction


def get_branch_point(action: StateAction, base_branch: str, *, remote: str = DEFAULT_REMOTE) -> str:
    """Return the revision the new branch is created from.

    HEAD resolves to "HEAD"; ORIGIN_MAIN resolves to "<remote>/<base_branch>",
    e.g. "origin/main".
    """
    match action.branch_from:
        case BranchFrom.HEAD:
            return "HEAD"
        case BranchFrom.ORIGIN_MAIN:
            return f"{remote}/{base_branch}"
    raise ValueError(f"Unknown branch point: {action.branch_from!r}")
