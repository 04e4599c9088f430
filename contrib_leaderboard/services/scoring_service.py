import structlog

from contrib_leaderboard.schemas.github import WeekStats
from contrib_leaderboard.schemas.leaderboard import (
    ContributionStats,
    ContributorRecord,
    ScoreWeights,
)

logger = structlog.get_logger()


def summarize_weeks(weeks: list[WeekStats]) -> ContributionStats:
    """Sum additions, deletions and commits over a slice of weeks."""
    return ContributionStats(
        additions=sum(week.a for week in weeks),
        deletions=sum(week.d for week in weeks),
        commits=sum(week.c for week in weeks),
    )


class ScoringService:
    """Scores contributors and rescales a tier's scores to 0-100."""

    def __init__(self, weights: ScoreWeights | None = None) -> None:
        self.weights = weights or ScoreWeights()

    def calculate_score(self, stats: ContributionStats) -> int:
        """Weighted sum: additions count most, then deletions, then commits."""
        return (
            stats.additions * self.weights.additions
            + stats.deletions * self.weights.deletions
            + stats.commits * self.weights.commits
        )

    def normalize(self, members: list[ContributorRecord]) -> list[ContributorRecord]:
        """Rescale scores relative to the tier maximum.

        A tier whose best score is 0 normalizes every member to 0.0.
        """
        if not members:
            return []

        max_score = max(member.score for member in members)
        if max_score <= 0:
            logger.debug("All scores are zero, skipping rescale", members=len(members))
            return [member.model_copy(update={"score": 0.0}) for member in members]

        return [
            member.model_copy(update={"score": (member.score / max_score) * 100})
            for member in members
        ]

    def rank(self, members: list[ContributorRecord]) -> list[ContributorRecord]:
        # Ties are broken by node_id so output is deterministic.
        return sorted(members, key=lambda m: (-m.score, m.node_id))

    def normalize_and_rank(self, members: list[ContributorRecord]) -> list[ContributorRecord]:
        return self.rank(self.normalize(members))
