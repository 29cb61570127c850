"""
Hero Tracker - badge XP aggregation and level progression.

The three calculation functions are re-exported here:

    from herotracker import compute_total_xp, compute_level_details

    total = compute_total_xp([(11, 200), (3, 1200)])
    details = compute_level_details(total)
"""

from .core.leveling import (
    compute_total_xp,
    compute_level_details,
    compute_xp_required_for_level,
)
from .core.models import BadgeContribution, LevelDetails, HeroChallenge, Hero, HeroProgress
from .core.progression import ProgressionTable, ProgressionTier, ProgressionTableError

__version__ = "0.1.0"

__all__ = [
    'compute_total_xp',
    'compute_level_details',
    'compute_xp_required_for_level',
    'BadgeContribution',
    'LevelDetails',
    'HeroChallenge',
    'Hero',
    'HeroProgress',
    'ProgressionTable',
    'ProgressionTier',
    'ProgressionTableError',
]
