from typing import Any

import httpx
import structlog
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from contrib_leaderboard.core.exceptions import (
    FetchError,
    StatsNotReadyError,
    StatsValidationError,
)
from contrib_leaderboard.schemas.github import ContributorStats, contributor_stats_adapter
from contrib_leaderboard.services.rate_limiter import RollingWindowRateLimiter

logger = structlog.get_logger()


def parse_contributor_stats(owner: str, repo: str, payload: Any) -> list[ContributorStats]:
    """Validate a decoded stats payload, raising StatsValidationError on mismatch."""
    try:
        return contributor_stats_adapter.validate_python(payload)
    except ValidationError as e:
        raise StatsValidationError(owner, repo, e.errors(include_url=False)) from e


class GitHubStatsService:
    """Reads per-contributor weekly activity from the GitHub statistics API."""

    def __init__(
        self,
        limiter: RollingWindowRateLimiter,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        max_attempts: int = 3,
        retry_wait: wait_base | None = None,
    ) -> None:
        self.limiter = limiter
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=2, max=10)
        self.headers = {"Accept": "application/vnd.github.v3+json"}

    async def get_contributor_stats(self, owner: str, repo: str) -> Any:
        """Fetch the raw decoded stats body for one repository.

        GitHub answers 202 while it computes statistics for a cold repository;
        those responses are retried. Every attempt passes through the rate
        limiter.
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception_type(StatsNotReadyError),
            reraise=True,
        ):
            with attempt:
                return await self._request_stats(owner, repo)

    async def _request_stats(self, owner: str, repo: str) -> Any:
        url = f"{self.base_url}/repos/{owner}/{repo}/stats/contributors"
        await self.limiter.acquire()
        logger.debug("Fetching contributor stats", repository=f"{owner}/{repo}", url=url)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers=self.headers)
        except (
            httpx.HTTPError,
            httpx.InvalidURL,
            httpx.StreamError,
            httpx.CookieConflict,
        ) as e:
            logger.warning(
                "Contributor stats request failed",
                repository=f"{owner}/{repo}",
                error=str(e),
            )
            raise FetchError(owner, repo) from e

        if response.status_code == 202:
            logger.info("Contributor stats not ready yet", repository=f"{owner}/{repo}")
            raise StatsNotReadyError(owner, repo)
        if not response.is_success:
            raise FetchError(owner, repo, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(owner, repo, response.status_code) from e
