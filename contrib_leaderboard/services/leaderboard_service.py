import asyncio
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog

from contrib_leaderboard.core.config import Settings, get_settings
from contrib_leaderboard.core.exceptions import (
    DegenerateAggregateError,
    FetchError,
    StatsValidationError,
)
from contrib_leaderboard.schemas.leaderboard import (
    DiagnosticReason,
    LeaderboardReport,
    LeaderboardResult,
    RepositoryDiagnostic,
    RepositoryRef,
    Tier,
)
from contrib_leaderboard.services.aggregation_service import (
    AggregationService,
    TierState,
    TierWindow,
)
from contrib_leaderboard.services.github_service import (
    GitHubStatsService,
    parse_contributor_stats,
)
from contrib_leaderboard.services.rate_limiter import RollingWindowRateLimiter
from contrib_leaderboard.services.scoring_service import ScoringService
from contrib_leaderboard.services.window_tracker import WindowTracker

logger = structlog.get_logger()


def repository_refs_from_projects(projects: Iterable[str]) -> list[RepositoryRef]:
    """Turn ``owner/name`` strings or GitHub URLs into repository references.

    Entries without both an owner and a name are skipped.
    """
    refs = []
    for project in projects:
        try:
            refs.append(RepositoryRef.parse(project))
        except ValueError:
            logger.warning("Skipping invalid project reference", project=project)
    return refs


class LeaderboardService:
    """Builds the all-time, monthly and weekly leaderboards for a set of repositories."""

    def __init__(
        self,
        settings: Settings | None = None,
        stats_service: GitHubStatsService | None = None,
        limiter: RollingWindowRateLimiter | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.limiter = limiter or RollingWindowRateLimiter(
            max_requests=self.settings.rate_limit_max_requests,
            period=self.settings.rate_limit_period_seconds,
        )
        self.github = stats_service or GitHubStatsService(
            limiter=self.limiter,
            base_url=self.settings.github_api_base_url,
            timeout=self.settings.github_request_timeout,
            max_attempts=self.settings.github_stats_max_attempts,
        )
        self.scoring = ScoringService(self.settings.score_weights())
        self.aggregator = AggregationService(self.scoring)
        self.window_tracker = WindowTracker()

    def tier_windows(self) -> list[TierWindow]:
        """Tier definitions in output order."""
        return [
            TierWindow(Tier.ALL_TIME),
            TierWindow(Tier.LAST_MONTH, self.settings.monthly_window_weeks),
            TierWindow(Tier.LAST_WEEK, self.settings.weekly_window_weeks),
        ]

    async def run(
        self,
        repositories: Sequence[RepositoryRef | Mapping[str, Any]],
    ) -> list[LeaderboardResult]:
        """Return ``[allTimes, lastMonth, lastWeek]`` leaderboards."""
        report = await self.build_report(repositories)
        return report.results

    async def build_report(
        self,
        repositories: Sequence[RepositoryRef | Mapping[str, Any]],
    ) -> LeaderboardReport:
        """
        Fetch, validate and aggregate every repository, then finalize each tier.

        Steps:
        1. Fetch all repositories concurrently through the shared rate limiter
        2. Validate each successful response
        3. Fold valid responses into every tier
        4. Normalize, rank and derive the window of each tier

        A failing repository is recorded as a diagnostic and skipped.
        """
        refs = [
            r if isinstance(r, RepositoryRef) else RepositoryRef.model_validate(r)
            for r in repositories
        ]
        states = [TierState(window) for window in self.tier_windows()]
        diagnostics: list[RepositoryDiagnostic] = []
        processed = 0

        logger.info("Starting leaderboard run", repositories=len(refs))

        outcomes = await asyncio.gather(
            *(self.github.get_contributor_stats(ref.owner, ref.repo) for ref in refs),
            return_exceptions=True,
        )

        for ref, outcome in zip(refs, outcomes):
            if isinstance(outcome, FetchError):
                logger.error(
                    "Error fetching data",
                    repository=ref.full_name,
                    status_code=outcome.status_code,
                    error=str(outcome),
                )
                diagnostics.append(
                    RepositoryDiagnostic(
                        repository=ref.full_name,
                        reason=DiagnosticReason.FETCH_FAILED,
                        status_code=outcome.status_code,
                        detail=str(outcome),
                    )
                )
                continue
            if isinstance(outcome, BaseException):
                raise outcome

            try:
                contributors = parse_contributor_stats(ref.owner, ref.repo, outcome)
            except StatsValidationError as e:
                logger.warning(
                    "Dropping repository with invalid stats",
                    repository=ref.full_name,
                    errors=len(e.errors),
                )
                diagnostics.append(
                    RepositoryDiagnostic(
                        repository=ref.full_name,
                        reason=DiagnosticReason.INVALID_PAYLOAD,
                        detail=str(e),
                    )
                )
                continue

            for state in states:
                self.aggregator.fold(state, ref.owner, ref.repo, contributors)
                self.window_tracker.observe(state, contributors)
            processed += 1

        results = [self._finalize(state) for state in states]

        logger.info(
            "Leaderboard run completed",
            repositories=len(refs),
            processed=processed,
            failed=len(diagnostics),
            members={result.stat.value: len(result.members) for result in results},
        )

        return LeaderboardReport(
            results=results,
            diagnostics=diagnostics,
            repositories_processed=processed,
        )

    def _finalize(self, state: TierState) -> LeaderboardResult:
        members = self.scoring.normalize_and_rank(list(state.members.values()))

        since: int | None
        until: int | None
        try:
            since, until = self.window_tracker.window(state)
        except DegenerateAggregateError as e:
            logger.warning("Leaderboard tier has no window", tier=e.tier)
            since = until = None

        return LeaderboardResult(members=members, since=since, until=until, stat=state.tier)
