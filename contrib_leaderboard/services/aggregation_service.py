from dataclasses import dataclass, field

import structlog

from contrib_leaderboard.schemas.github import ContributorStats, WeekStats
from contrib_leaderboard.schemas.leaderboard import (
    ContributionStats,
    ContributorRecord,
    ProjectRef,
    Tier,
)
from contrib_leaderboard.services.scoring_service import ScoringService, summarize_weeks

logger = structlog.get_logger()


@dataclass(frozen=True)
class TierWindow:
    """How a tier slices a contributor's weekly history.

    ``weeks`` of None keeps the whole history; otherwise only the trailing
    ``weeks`` entries are kept (fewer if the history is shorter).
    """

    tier: Tier
    weeks: int | None = None

    def select(self, history: list[WeekStats]) -> list[WeekStats]:
        if self.weeks is None:
            return list(history)
        return list(history[-self.weeks :])

    @property
    def min_history(self) -> int:
        """Recorded weeks a repository needs before it shapes the tier's window."""
        return self.weeks or 1


@dataclass
class TierState:
    """Running accumulator for one tier during a single run."""

    window: TierWindow
    members: dict[str, ContributorRecord] = field(default_factory=dict)
    since_candidates: list[int] = field(default_factory=list)
    until_candidates: list[int] = field(default_factory=list)

    @property
    def tier(self) -> Tier:
        return self.window.tier


class AggregationService:
    """Folds validated repository stats into per-tier contributor records."""

    def __init__(self, scoring: ScoringService) -> None:
        self.scoring = scoring

    def fold(
        self,
        state: TierState,
        owner: str,
        repo: str,
        contributors: list[ContributorStats],
    ) -> int:
        """Merge one repository's contributors into ``state``.

        Records are keyed by ``node_id``. An existing record has its stats
        summed with the new slice, its score recomputed and the repository
        appended to its project list. Returns the number of contributors
        folded.
        """
        folded = 0
        for contributor in contributors:
            weeks = state.window.select(contributor.weeks)
            if not weeks and state.window.weeks is not None:
                continue

            author = contributor.author
            stats = summarize_weeks(weeks)
            project = ProjectRef(url=f"{owner}/{repo}", name=repo)

            existing = state.members.get(author.node_id)
            if existing is None:
                state.members[author.node_id] = ContributorRecord(
                    name=author.login,
                    node_id=author.node_id,
                    avatar_url=author.avatar_url,
                    score=self.scoring.calculate_score(stats),
                    stats=stats,
                    projects_names=[project],
                )
            else:
                existing.stats = ContributionStats(
                    additions=existing.stats.additions + stats.additions,
                    deletions=existing.stats.deletions + stats.deletions,
                    commits=existing.stats.commits + stats.commits,
                )
                existing.score = self.scoring.calculate_score(existing.stats)
                existing.projects_names.append(project)
            folded += 1

        logger.debug(
            "Folded repository into tier",
            repository=f"{owner}/{repo}",
            tier=state.tier.value,
            contributors=folded,
        )
        return folded
