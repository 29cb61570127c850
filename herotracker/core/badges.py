"""
Badge categories and their fixed values.

Every badge earns a flat amount of XP per level above level 1. The amount
depends on the badge's category; custom badges may carry any positive value.
"""

from enum import Enum
from typing import Optional

XP_PER_HERO_TYPE_BADGE_LEVEL = 200
XP_PER_WIN_TYPE_BADGE_LEVEL = 1200
XP_PER_TIME_TYPE_BADGE_LEVEL = 5600

# One level of a "Time Played" badge stands for this many minutes of play
MINUTES_PER_TIME_BADGE_LEVEL = 20


class BadgeCategory(Enum):
    """Badge category, valued by the XP one badge level is worth."""

    HERO = XP_PER_HERO_TYPE_BADGE_LEVEL
    WIN = XP_PER_WIN_TYPE_BADGE_LEVEL
    TIME = XP_PER_TIME_TYPE_BADGE_LEVEL

    @property
    def xp_per_level(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return {
            BadgeCategory.HERO: 'Hero',
            BadgeCategory.WIN: 'Wins',
            BadgeCategory.TIME: 'Time Played',
        }[self]

    @classmethod
    def for_xp_per_level(cls, xp_per_level) -> Optional['BadgeCategory']:
        """
        Find the category a badge belongs to from its XP-per-level value.

        Args:
            xp_per_level: The badge's XP per level

        Returns:
            Matching BadgeCategory, or None for custom values

        Examples:
            for_xp_per_level(5600) -> BadgeCategory.TIME
            for_xp_per_level(750) -> None
        """
        for category in cls:
            if category.value == xp_per_level:
                return category
        return None


__all__ = [
    'BadgeCategory',
    'XP_PER_HERO_TYPE_BADGE_LEVEL',
    'XP_PER_WIN_TYPE_BADGE_LEVEL',
    'XP_PER_TIME_TYPE_BADGE_LEVEL',
    'MINUTES_PER_TIME_BADGE_LEVEL',
]
