"""Cross-repository contributor leaderboard built from GitHub commit statistics."""

__version__ = "1.0.0"
