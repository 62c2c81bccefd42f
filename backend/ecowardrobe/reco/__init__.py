"""Scoring and activity aggregation over closet state."""
from .scoring import utility_score, total_score, round_half_up, is_high_score, rank_items
from .activity import weekly_activity, logs_for_day

__all__ = [
    "utility_score",
    "total_score",
    "round_half_up",
    "is_high_score",
    "rank_items",
    "weekly_activity",
    "logs_for_day",
]
