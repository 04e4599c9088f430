"""Test configuration and fixtures.

GitHub is never contacted: integration tests mock the statistics endpoint
with respx, and rate limiting runs on a fake clock.
"""

from collections.abc import Callable, Generator, Iterable

import pytest
import respx

from contrib_leaderboard.core.config import Settings
from contrib_leaderboard.schemas.github import ContributorStats

GITHUB_API = "https://api.github.com"


def pytest_configure(config):
    """Register integration test marker."""
    config.addinivalue_line(
        "markers", "integration: full pipeline tests against a mocked GitHub API"
    )


class FakeClock:
    """Monotonic clock that only moves when something sleeps on it."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def contributor_payload(
    node_id: str,
    weeks: Iterable[tuple[int, int, int, int]] = (),
    login: str | None = None,
) -> dict:
    """Build one stats entry; ``weeks`` holds ``(w, a, d, c)`` tuples."""
    week_list = [{"w": w, "a": a, "d": d, "c": c} for w, a, d, c in weeks]
    return {
        "total": sum(week["c"] for week in week_list),
        "weeks": week_list,
        "author": {
            "login": login or node_id.lower(),
            "id": sum(ord(ch) for ch in node_id),
            "node_id": node_id,
            "avatar_url": f"https://avatars.githubusercontent.com/{node_id}",
        },
    }


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_payload() -> Callable[..., dict]:
    return contributor_payload


@pytest.fixture
def make_contributor() -> Callable[..., ContributorStats]:
    def _make(node_id: str, weeks=(), login: str | None = None) -> ContributorStats:
        return ContributorStats.model_validate(contributor_payload(node_id, weeks, login))

    return _make


@pytest.fixture
def settings() -> Settings:
    return Settings(github_stats_max_attempts=1)


@pytest.fixture
def github_api() -> Generator[respx.MockRouter, None, None]:
    with respx.mock(base_url=GITHUB_API, assert_all_called=False) as router:
        yield router
