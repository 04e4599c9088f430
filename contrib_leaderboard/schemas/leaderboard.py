from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field


class Tier(str, Enum):
    ALL_TIME = "allTimes"
    LAST_MONTH = "lastMonth"
    LAST_WEEK = "lastWeek"


class ScoreWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    additions: int = Field(3, ge=0)
    deletions: int = Field(2, ge=0)
    commits: int = Field(1, ge=0)


class RepositoryRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1)
    repo: str = Field(..., min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def parse(cls, value: str) -> "RepositoryRef":
        """Build a reference from ``owner/name`` or a GitHub repository URL."""
        path = value.strip()
        if "://" in path:
            path = urlparse(path).path
        parts = [p for p in path.strip("/").split("/") if p]
        if len(parts) < 2:
            raise ValueError(f"Not a repository reference: {value!r}")
        owner, repo = parts[0], parts[1]
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]
        return cls(owner=owner, repo=repo)


class ContributionStats(BaseModel):
    additions: int = 0
    deletions: int = 0
    commits: int = 0


class ProjectRef(BaseModel):
    url: str
    name: str


class ContributorRecord(BaseModel):
    name: str
    node_id: str
    avatar_url: str
    score: float
    stats: ContributionStats
    projects_names: list[ProjectRef]


class LeaderboardResult(BaseModel):
    members: list[ContributorRecord]
    since: int | None  # epoch milliseconds, None when no repository qualified
    until: int | None
    stat: Tier


class DiagnosticReason(str, Enum):
    FETCH_FAILED = "fetch_failed"
    INVALID_PAYLOAD = "invalid_payload"


class RepositoryDiagnostic(BaseModel):
    repository: str
    reason: DiagnosticReason
    status_code: int | None = None
    detail: str | None = None


class LeaderboardReport(BaseModel):
    results: list[LeaderboardResult]
    diagnostics: list[RepositoryDiagnostic]
    repositories_processed: int
