from contrib_leaderboard.services.aggregation_service import AggregationService
from contrib_leaderboard.services.github_service import GitHubStatsService
from contrib_leaderboard.services.leaderboard_service import LeaderboardService
from contrib_leaderboard.services.rate_limiter import RollingWindowRateLimiter
from contrib_leaderboard.services.scoring_service import ScoringService
from contrib_leaderboard.services.window_tracker import WindowTracker

__all__ = [
    "AggregationService",
    "GitHubStatsService",
    "LeaderboardService",
    "RollingWindowRateLimiter",
    "ScoringService",
    "WindowTracker",
]
