from contrib_leaderboard.schemas.github import (
    ContributorStats,
    GitHubAuthor,
    WeekStats,
)
from contrib_leaderboard.schemas.leaderboard import (
    ContributionStats,
    ContributorRecord,
    DiagnosticReason,
    LeaderboardReport,
    LeaderboardResult,
    ProjectRef,
    RepositoryDiagnostic,
    RepositoryRef,
    ScoreWeights,
    Tier,
)

__all__ = [
    "ContributorStats",
    "GitHubAuthor",
    "WeekStats",
    "ContributionStats",
    "ContributorRecord",
    "DiagnosticReason",
    "LeaderboardReport",
    "LeaderboardResult",
    "ProjectRef",
    "RepositoryDiagnostic",
    "RepositoryRef",
    "ScoreWeights",
    "Tier",
]
