"""Schema of the GitHub ``/repos/{owner}/{repo}/stats/contributors`` payload."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, TypeAdapter


class WeekStats(BaseModel):
    """One week of activity: ``w`` is the week start in epoch seconds."""

    model_config = ConfigDict(frozen=True)

    w: StrictInt
    a: StrictInt = Field(ge=0)
    d: StrictInt = Field(ge=0)
    c: StrictInt = Field(ge=0)


class GitHubAuthor(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: StrictStr
    id: StrictInt
    node_id: StrictStr
    avatar_url: StrictStr


class ContributorStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: StrictInt
    weeks: list[WeekStats]
    author: GitHubAuthor


contributor_stats_adapter = TypeAdapter(list[ContributorStats])
