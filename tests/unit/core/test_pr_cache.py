"""Tests for the time-limited PR cache."""

from prflow.core.github.cache import PrCache
from prflow.core.github.types import PullRequestInfo
from tests.fakes.time import FakeTime


def _pr(number: int = 7, branch: str = "feat/x") -> PullRequestInfo:
    return PullRequestInfo(
        number=number,
        state="OPEN",
        url=f"https://github.com/owner/repo/pull/{number}",
        is_draft=False,
        title="x",
        head_branch=branch,
    )


def test_get_returns_stored_pr() -> None:
    cache = PrCache(FakeTime())
    cache.set("feat/x", _pr())

    assert cache.has("feat/x")
    assert cache.get("feat/x") == _pr()


def test_miss_is_distinct_from_cached_none() -> None:
    cache = PrCache(FakeTime())
    cache.set("feat/none", None)

    assert cache.has("feat/none")
    assert cache.get("feat/none") is None
    assert not cache.has("feat/other")


def test_entries_expire_after_ttl() -> None:
    time = FakeTime()
    cache = PrCache(time, ttl_seconds=60)
    cache.set("feat/x", _pr())

    time.advance(59)
    assert cache.has("feat/x")

    time.advance(1)
    assert not cache.has("feat/x")
    assert cache.get("feat/x") is None


def test_invalidate_single_branch() -> None:
    cache = PrCache(FakeTime())
    cache.set("a", _pr(1, "a"))
    cache.set("b", _pr(2, "b"))

    cache.invalidate("a")

    assert not cache.has("a")
    assert cache.has("b")


def test_invalidate_all() -> None:
    cache = PrCache(FakeTime())
    cache.set("a", _pr(1, "a"))
    cache.set("b", _pr(2, "b"))

    cache.invalidate()

    assert not cache.has("a")
    assert not cache.has("b")


def test_instances_are_independent() -> None:
    time = FakeTime()
    first = PrCache(time)
    second = PrCache(time)

    first.set("a", _pr())

    assert not second.has("a")
