"""
Analytics package exports.
"""

from srs_core.analytics.service import build_learning_stats, get_yearly_activity
from srs_core.analytics.types import CardCounts, LearningStats

__all__ = [
    "build_learning_stats",
    "get_yearly_activity",
    "CardCounts",
    "LearningStats",
]
