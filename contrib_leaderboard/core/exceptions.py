class LeaderboardError(Exception):
    """Base class for leaderboard pipeline errors."""


class FetchError(LeaderboardError):
    """The statistics endpoint did not return a usable response."""

    def __init__(self, owner: str, repo: str, status_code: int | None = None) -> None:
        self.owner = owner
        self.repo = repo
        self.status_code = status_code
        if status_code is None:
            message = f"Failed to fetch data for {owner}/{repo}"
        else:
            message = f"Failed to fetch data for {owner}/{repo}, {status_code}"
        super().__init__(message)


class StatsNotReadyError(FetchError):
    """GitHub accepted the request but is still computing the statistics."""

    def __init__(self, owner: str, repo: str) -> None:
        super().__init__(owner, repo, status_code=202)


class StatsValidationError(LeaderboardError):
    """Response body does not match the contributor statistics schema."""

    def __init__(self, owner: str, repo: str, errors: list[dict] | None = None) -> None:
        self.owner = owner
        self.repo = repo
        self.errors = errors or []
        super().__init__(
            f"Invalid contributor stats for {owner}/{repo} ({len(self.errors)} errors)"
        )


class DegenerateAggregateError(LeaderboardError):
    """A tier has no qualifying repository to derive its window from."""

    def __init__(self, tier: str) -> None:
        self.tier = tier
        super().__init__(f"No qualifying repositories for tier {tier}")
