"""
Achievement unlock rules.

An achievement is unlocked when a roster crosses a threshold: a global
level, an amount of global XP, hours of play, or heroes (one, several or all
of them) reaching a level. Rules are plain data; titles, artwork and the
wording shown to players belong to whatever displays them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from .coerce import as_non_negative_int
from .metrics import MAX_LEVEL, MINUTES_PER_HOUR, global_level_details
from .models import HeroProgress
from .progression import ProgressionTable

logger = logging.getLogger(__name__)


class AchievementKind(Enum):
    """What an achievement's threshold is compared against."""

    GLOBAL_LEVEL = "global_level"
    GLOBAL_XP = "global_xp"
    TIME_PLAYED_HOURS = "time_played_hours"
    HERO_LEVEL = "hero_level"
    ALL_HEROES_LEVEL = "all_heroes_level"
    ALL_BADGES_LEVEL = "all_badges_level"


@dataclass(frozen=True)
class AchievementRule:
    """
    A single unlock condition.

    Attributes:
        id: Stable identifier (e.g., 'global_level_10')
        kind: What threshold is compared against
        threshold: Level, XP or hours to reach
        hero_count: For HERO_LEVEL, how many heroes must reach the threshold

    Examples:
        AchievementRule('hero_level_50', AchievementKind.HERO_LEVEL, 50)
        AchievementRule('five_heroes_level_50', AchievementKind.HERO_LEVEL, 50, hero_count=5)
    """
    id: str
    kind: AchievementKind
    threshold: int
    hero_count: int = 1

    def describe(self) -> str:
        if self.kind is AchievementKind.GLOBAL_LEVEL:
            return f"Reach global level {self.threshold}"
        if self.kind is AchievementKind.GLOBAL_XP:
            return f"Earn {self.threshold:,} global XP"
        if self.kind is AchievementKind.TIME_PLAYED_HOURS:
            return f"Play for {self.threshold} hours"
        if self.kind is AchievementKind.HERO_LEVEL:
            if self.hero_count > 1:
                return f"Reach level {self.threshold} with {self.hero_count} heroes"
            return f"Reach level {self.threshold} with any hero"
        if self.kind is AchievementKind.ALL_HEROES_LEVEL:
            return f"Reach level {self.threshold} with every hero"
        return f"Raise every badge of one hero to level {self.threshold}"

    def is_unlocked(self, progress: Sequence[HeroProgress], global_total_xp: int,
                    global_level: int, minutes_played: int) -> bool:
        """
        Check this rule against precomputed roster numbers.

        An empty roster never unlocks the all-heroes or all-badges rules.
        """
        if self.kind is AchievementKind.GLOBAL_LEVEL:
            return global_level >= self.threshold
        if self.kind is AchievementKind.GLOBAL_XP:
            return global_total_xp >= self.threshold
        if self.kind is AchievementKind.TIME_PLAYED_HOURS:
            return minutes_played >= self.threshold * MINUTES_PER_HOUR
        if self.kind is AchievementKind.HERO_LEVEL:
            reached = sum(1 for item in progress if item.level >= self.threshold)
            return reached >= max(1, self.hero_count)
        if self.kind is AchievementKind.ALL_HEROES_LEVEL:
            return bool(progress) and all(item.level >= self.threshold for item in progress)
        # ALL_BADGES_LEVEL: some hero with badges has every badge at the threshold
        return any(
            item.hero.challenges and all(
                as_non_negative_int(challenge.level) >= self.threshold
                for challenge in item.hero.challenges
            )
            for item in progress
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            'id': self.id,
            'kind': self.kind.value,
            'threshold': self.threshold,
            'hero_count': self.hero_count,
            'description': self.describe(),
        }


@dataclass(frozen=True)
class AchievementStatus:
    """An achievement rule and whether the roster has unlocked it."""
    rule: AchievementRule
    unlocked: bool

    def to_dict(self) -> Dict[str, object]:
        data = self.rule.to_dict()
        data['unlocked'] = self.unlocked
        return data


# Thresholds used by the browser tracker
DEFAULT_ACHIEVEMENT_RULES = (
    AchievementRule('global_level_10', AchievementKind.GLOBAL_LEVEL, 10),
    AchievementRule('global_level_50', AchievementKind.GLOBAL_LEVEL, 50),
    AchievementRule('global_level_100', AchievementKind.GLOBAL_LEVEL, 100),
    AchievementRule('global_level_250', AchievementKind.GLOBAL_LEVEL, 250),
    AchievementRule('global_level_500', AchievementKind.GLOBAL_LEVEL, MAX_LEVEL),
    AchievementRule('time_played_10_hours', AchievementKind.TIME_PLAYED_HOURS, 10),
    AchievementRule('time_played_50_hours', AchievementKind.TIME_PLAYED_HOURS, 50),
    AchievementRule('time_played_100_hours', AchievementKind.TIME_PLAYED_HOURS, 100),
    AchievementRule('time_played_500_hours', AchievementKind.TIME_PLAYED_HOURS, 500),
    AchievementRule('hero_level_50', AchievementKind.HERO_LEVEL, 50),
    AchievementRule('hero_level_100', AchievementKind.HERO_LEVEL, 100),
    AchievementRule('hero_level_250', AchievementKind.HERO_LEVEL, 250),
    AchievementRule('hero_max_level', AchievementKind.HERO_LEVEL, MAX_LEVEL),
    AchievementRule('five_heroes_level_50', AchievementKind.HERO_LEVEL, 50, hero_count=5),
    AchievementRule('all_heroes_level_10', AchievementKind.ALL_HEROES_LEVEL, 10),
    AchievementRule('all_heroes_max_level', AchievementKind.ALL_HEROES_LEVEL, MAX_LEVEL),
    AchievementRule('one_million_global_xp', AchievementKind.GLOBAL_XP, 1000000),
    AchievementRule('all_badges_one_hero_max', AchievementKind.ALL_BADGES_LEVEL, 100),
)


def evaluate_achievements(progress: Iterable[HeroProgress], minutes_played: int = 0,
                          rules: Sequence[AchievementRule] = DEFAULT_ACHIEVEMENT_RULES,
                          table: Optional[ProgressionTable] = None) -> List[AchievementStatus]:
    """
    Evaluate achievement rules against a summarized roster.

    Args:
        progress: Hero summaries (see metrics.summarize_roster)
        minutes_played: Total play time from time-played badges
        rules: Rules to evaluate, in display order
        table: Progression table used for the global level

    Returns:
        One AchievementStatus per rule, in rule order

    Example:
        summaries = summarize_roster(heroes)
        minutes = sum(total_time_played_minutes(h.challenges) for h in heroes)
        unlocked = [s.rule.id for s in evaluate_achievements(summaries, minutes) if s.unlocked]
    """
    progress = list(progress)
    global_total, global_details = global_level_details(progress, table)
    minutes = as_non_negative_int(minutes_played)

    statuses = [
        AchievementStatus(
            rule=rule,
            unlocked=rule.is_unlocked(progress, global_total, global_details.level, minutes)
        )
        for rule in rules
    ]
    logger.debug(f"{sum(s.unlocked for s in statuses)} of {len(statuses)} achievements unlocked")
    return statuses


__all__ = [
    'AchievementKind',
    'AchievementRule',
    'AchievementStatus',
    'DEFAULT_ACHIEVEMENT_RULES',
    'evaluate_achievements',
]
