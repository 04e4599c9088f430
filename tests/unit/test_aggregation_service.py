import pytest

from contrib_leaderboard.schemas.leaderboard import ProjectRef, Tier
from contrib_leaderboard.services.aggregation_service import (
    AggregationService,
    TierState,
    TierWindow,
)
from contrib_leaderboard.services.scoring_service import ScoringService

WEEK = 604800


def weeks(count: int, additions: int = 1) -> list[tuple[int, int, int, int]]:
    return [(i * WEEK, additions * (i + 1), 0, 1) for i in range(count)]


@pytest.fixture
def aggregator() -> AggregationService:
    return AggregationService(ScoringService())


class TestTierWindow:
    def test_all_time_keeps_everything(self, make_contributor) -> None:
        contributor = make_contributor("N1", weeks(6))
        assert TierWindow(Tier.ALL_TIME).select(contributor.weeks) == contributor.weeks

    def test_month_keeps_last_four(self, make_contributor) -> None:
        contributor = make_contributor("N1", weeks(6))
        selected = TierWindow(Tier.LAST_MONTH, 4).select(contributor.weeks)
        assert selected == contributor.weeks[-4:]

    def test_month_with_short_history(self, make_contributor) -> None:
        contributor = make_contributor("N1", weeks(2))
        assert TierWindow(Tier.LAST_MONTH, 4).select(contributor.weeks) == contributor.weeks

    def test_week_keeps_last_one(self, make_contributor) -> None:
        contributor = make_contributor("N1", weeks(6))
        assert TierWindow(Tier.LAST_WEEK, 1).select(contributor.weeks) == contributor.weeks[-1:]

    def test_min_history(self) -> None:
        assert TierWindow(Tier.ALL_TIME).min_history == 1
        assert TierWindow(Tier.LAST_MONTH, 4).min_history == 4


class TestFold:
    """Tests for merging repository stats into a tier."""

    def test_new_contributor_inserted(self, aggregator, make_contributor) -> None:
        state = TierState(TierWindow(Tier.ALL_TIME))
        folded = aggregator.fold(state, "a", "x", [make_contributor("N1", [(0, 1, 2, 3)])])

        assert folded == 1
        member = state.members["N1"]
        assert member.name == "n1"
        assert member.score == 10
        assert member.projects_names == [ProjectRef(url="a/x", name="x")]

    def test_cross_repository_merge(self, aggregator, make_contributor) -> None:
        state = TierState(TierWindow(Tier.ALL_TIME))
        aggregator.fold(state, "a", "x", [make_contributor("N1", [(0, 10, 0, 1)])])
        aggregator.fold(state, "a", "y", [make_contributor("N1", [(0, 5, 0, 2)])])

        assert list(state.members) == ["N1"]
        member = state.members["N1"]
        assert member.stats.additions == 15
        assert member.stats.deletions == 0
        assert member.stats.commits == 3
        assert member.score == 15 * 3 + 3
        assert [p.url for p in member.projects_names] == ["a/x", "a/y"]

    def test_merge_is_order_independent(self, aggregator, make_contributor) -> None:
        repo_a = [make_contributor("X", [(0, 3, 1, 2), (WEEK, 4, 0, 1)])]
        repo_b = [make_contributor("X", [(0, 7, 5, 1)]), make_contributor("Y", [(0, 1, 1, 1)])]

        forward = TierState(TierWindow(Tier.ALL_TIME))
        aggregator.fold(forward, "o", "a", repo_a)
        aggregator.fold(forward, "o", "b", repo_b)

        backward = TierState(TierWindow(Tier.ALL_TIME))
        aggregator.fold(backward, "o", "b", repo_b)
        aggregator.fold(backward, "o", "a", repo_a)

        assert forward.members["X"].stats == backward.members["X"].stats
        assert forward.members["X"].score == backward.members["X"].score
        assert {p.url for p in forward.members["X"].projects_names} == {
            p.url for p in backward.members["X"].projects_names
        }

    def test_repeated_repository_is_additive(self, aggregator, make_contributor) -> None:
        state = TierState(TierWindow(Tier.ALL_TIME))
        contributors = [make_contributor("N1", [(0, 1, 0, 0)])]
        aggregator.fold(state, "a", "x", contributors)
        aggregator.fold(state, "a", "x", contributors)

        member = state.members["N1"]
        assert member.stats.additions == 2
        assert [p.url for p in member.projects_names] == ["a/x", "a/x"]

    def test_monthly_slice(self, aggregator, make_contributor) -> None:
        state = TierState(TierWindow(Tier.LAST_MONTH, 4))
        # additions per week are 1..6, last four sum to 3+4+5+6
        aggregator.fold(state, "a", "x", [make_contributor("N1", weeks(6))])
        assert state.members["N1"].stats.additions == 18
        assert state.members["N1"].stats.commits == 4

    def test_monthly_short_history_uses_all_weeks(self, aggregator, make_contributor) -> None:
        state = TierState(TierWindow(Tier.LAST_MONTH, 4))
        aggregator.fold(state, "a", "x", [make_contributor("N1", weeks(2))])
        assert state.members["N1"].stats.additions == 3

    def test_weekly_slice(self, aggregator, make_contributor) -> None:
        state = TierState(TierWindow(Tier.LAST_WEEK, 1))
        aggregator.fold(state, "a", "x", [make_contributor("N1", weeks(6))])
        assert state.members["N1"].stats.additions == 6
        assert state.members["N1"].stats.commits == 1

    def test_empty_weeks_pass_through_all_time(self, aggregator, make_contributor) -> None:
        state = TierState(TierWindow(Tier.ALL_TIME))
        folded = aggregator.fold(state, "a", "x", [make_contributor("N1", [])])

        assert folded == 1
        assert state.members["N1"].score == 0
        assert state.members["N1"].stats.commits == 0

    @pytest.mark.parametrize("window", [TierWindow(Tier.LAST_MONTH, 4), TierWindow(Tier.LAST_WEEK, 1)])
    def test_empty_weeks_excluded_from_bounded_tiers(
        self, aggregator, make_contributor, window
    ) -> None:
        state = TierState(window)
        folded = aggregator.fold(state, "a", "x", [make_contributor("N1", [])])

        assert folded == 0
        assert state.members == {}
