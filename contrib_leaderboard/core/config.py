from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from contrib_leaderboard.schemas.leaderboard import ScoreWeights


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Contributor Leaderboard"
    app_version: str = "1.0.0"

    # GitHub API
    github_api_base_url: str = "https://api.github.com"
    github_request_timeout: float = Field(30.0, gt=0)
    github_stats_max_attempts: int = Field(3, ge=1)  # 202 responses are retried

    # Rate limiting (unauthenticated GitHub quota)
    rate_limit_max_requests: int = Field(60, ge=1)
    rate_limit_period_seconds: float = Field(3600.0, gt=0)

    # Leaderboard windows
    monthly_window_weeks: int = Field(4, ge=1)
    weekly_window_weeks: int = Field(1, ge=1)

    # Scoring
    score_weight_additions: int = Field(3, ge=0)
    score_weight_deletions: int = Field(2, ge=0)
    score_weight_commits: int = Field(1, ge=0)

    def score_weights(self) -> ScoreWeights:
        return ScoreWeights(
            additions=self.score_weight_additions,
            deletions=self.score_weight_deletions,
            commits=self.score_weight_commits,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
