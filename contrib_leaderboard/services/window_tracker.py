from contrib_leaderboard.core.exceptions import DegenerateAggregateError
from contrib_leaderboard.schemas.github import ContributorStats
from contrib_leaderboard.services.aggregation_service import TierState


class WindowTracker:
    """Tracks the earliest and latest observed week per tier."""

    def observe(self, state: TierState, contributors: list[ContributorStats]) -> bool:
        """Record one repository's since/until candidates for a tier.

        A repository qualifies when its longest contributor history reaches
        the tier's minimum and its sliced weeks are non-empty. Candidates are
        taken over the union of all contributors' sliced weeks, so each
        repository adds at most one pair.
        """
        history = max((len(c.weeks) for c in contributors), default=0)
        if history < state.window.min_history:
            return False

        timestamps = [
            week.w for contributor in contributors for week in state.window.select(contributor.weeks)
        ]
        if not timestamps:
            return False

        state.since_candidates.append(min(timestamps))
        state.until_candidates.append(max(timestamps))
        return True

    def window(self, state: TierState) -> tuple[int, int]:
        """Return ``(since, until)`` in epoch milliseconds."""
        if not state.since_candidates or not state.until_candidates:
            raise DegenerateAggregateError(state.tier.value)
        return min(state.since_candidates) * 1000, max(state.until_candidates) * 1000
