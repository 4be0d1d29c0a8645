"""Time-limited cache of pull request lookups.

PrCache is an explicit value passed to whoever needs it (it lives on
PrflowContext), so tests construct independent instances with a fake clock.
"""

from dataclasses import dataclass

from prflow.core.github.types import PullRequestInfo
from prflow.core.time.abc import Time

DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class _Entry:
    pr: PullRequestInfo | None
    stored_at: float


class PrCache:
    """Branch name -> PR lookup result, expiring after ttl_seconds.

    A cached None means "looked up, no PR exists"; a miss is reported by
    has() returning False.
    """

    def __init__(self, time: Time, ttl_seconds: float = DEFAULT_TTL_SECONDS) -> None:
        self._time = time
        self._ttl_seconds = ttl_seconds
        self._entries: dict[str, _Entry] = {}

    def has(self, branch: str) -> bool:
        entry = self._entries.get(branch)
        if entry is None:
            return False
        if self._time.now() - entry.stored_at >= self._ttl_seconds:
            del self._entries[branch]
            return False
        return True

    def get(self, branch: str) -> PullRequestInfo | None:
        """Get the cached PR for branch, or None when absent or expired."""
        if not self.has(branch):
            return None
        return self._entries[branch].pr

    def set(self, branch: str, pr: PullRequestInfo | None) -> None:
        self._entries[branch] = _Entry(pr=pr, stored_at=self._time.now())

    def invalidate(self, branch: str | None = None) -> None:
        """Drop one branch, or every entry when branch is None."""
        if branch is None:
            self._entries.clear()
            return
        self._entries.pop(branch, None)
