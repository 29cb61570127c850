"""
Derived progress metrics.

Thin projections built on the two resolvers in herotracker.core.leveling:
how much XP is left to a goal, how many badge levels that is, roughly how
long it will take, and where milestones sit on a 0-1 progress scale. Also
the roster-level summaries (per-hero totals, global level, time played).

Everything here is pure arithmetic and guards its own divisions.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .badges import (
    BadgeCategory,
    MINUTES_PER_TIME_BADGE_LEVEL,
    XP_PER_TIME_TYPE_BADGE_LEVEL,
)
from .leveling import (
    as_non_negative_int,
    compute_level_details,
    compute_total_xp,
    compute_xp_required_for_level,
)
from .models import Hero, HeroChallenge, HeroProgress, LevelDetails
from .progression import ProgressionTable

logger = logging.getLogger(__name__)

MAX_LEVEL = 500
DEFAULT_MILESTONES = (1, 5, 10, 25, 50, 75, 100, 150, 200, 250, 300, 400)

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


# ---------------------------------------------------------------------------
# Goal projections
# ---------------------------------------------------------------------------


def xp_to_goal(current_total_xp, target_level, table: Optional[ProgressionTable] = None) -> int:
    """
    XP still needed to reach a target level.

    Args:
        current_total_xp: Current total XP
        target_level: Level to reach
        table: Progression table (defaults to the standard curve)

    Returns:
        Remaining XP, 0 when the target is already reached

    Examples:
        xp_to_goal(0, 2) -> 2000
        xp_to_goal(900000, 26) -> 0
    """
    required = compute_xp_required_for_level(target_level, table)
    return max(0, required - as_non_negative_int(current_total_xp))


def badges_needed_for_goal(current_total_xp, target_level, xp_per_level,
                           table: Optional[ProgressionTable] = None) -> int:
    """
    Badge levels of one kind needed to reach a target level.

    Rounds up, so the answer never under-reports the remaining work.

    Args:
        current_total_xp: Current total XP
        target_level: Level to reach
        xp_per_level: XP one level of the chosen badge is worth
        table: Progression table (defaults to the standard curve)

    Returns:
        Number of badge levels, 0 when at or past the goal or when
        xp_per_level is not a positive number

    Examples:
        badges_needed_for_goal(0, 2, 200) -> 10
        badges_needed_for_goal(0, 2, 1200) -> 2
    """
    remaining = xp_to_goal(current_total_xp, target_level, table)
    per_level = as_non_negative_int(xp_per_level)
    if remaining == 0 or per_level == 0:
        return 0
    return -(-remaining // per_level)


def badges_needed_by_category(current_total_xp, target_level,
                              table: Optional[ProgressionTable] = None) -> Dict[BadgeCategory, int]:
    """Badge levels needed for a goal, for every badge category."""
    return {
        category: badges_needed_for_goal(current_total_xp, target_level, category.xp_per_level, table)
        for category in BadgeCategory
    }


# ---------------------------------------------------------------------------
# Time estimates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeEstimate:
    """
    Estimated playing time, with a day/hour/minute breakdown.

    Attributes:
        total_minutes: Exact estimate in minutes (may be fractional)
        days: Whole days
        hours: Whole hours left after days
        minutes: Whole minutes left after hours
    """
    total_minutes: float
    days: int
    hours: int
    minutes: int

    @staticmethod
    def from_minutes(total_minutes: float) -> 'TimeEstimate':
        if not math.isfinite(total_minutes) or total_minutes < 0:
            total_minutes = 0.0
        whole = math.floor(total_minutes)
        days, remainder = divmod(whole, MINUTES_PER_DAY)
        hours, minutes = divmod(remainder, MINUTES_PER_HOUR)
        return TimeEstimate(total_minutes=total_minutes, days=days, hours=hours, minutes=minutes)

    @property
    def is_done(self) -> bool:
        return self.total_minutes <= 0

    def describe(self) -> str:
        """Human-readable estimate ('Reached' once nothing is left)."""
        if self.is_done:
            return "Reached"
        return format_duration(self.total_minutes)

    def to_dict(self) -> Dict[str, object]:
        return {
            'total_minutes': self.total_minutes,
            'days': self.days,
            'hours': self.hours,
            'minutes': self.minutes,
            'text': self.describe(),
        }


def format_duration(total_minutes: float) -> str:
    """
    Format minutes as a compact day/hour/minute string.

    Each unit is floored and zero units are left out. Any positive amount
    under one minute is shown as '~1 min'.

    Examples:
        format_duration(0) -> '0m'
        format_duration(0.4) -> '~1 min'
        format_duration(61) -> '1h 1m'
        format_duration(1440) -> '1d'
        format_duration(1620.9) -> '1d 3h'
    """
    if not math.isfinite(total_minutes) or total_minutes <= 0:
        return "0m"
    if total_minutes < 1:
        return "~1 min"

    estimate = TimeEstimate.from_minutes(total_minutes)
    parts = []
    if estimate.days:
        parts.append(f"{estimate.days}d")
    if estimate.hours:
        parts.append(f"{estimate.hours}h")
    if estimate.minutes:
        parts.append(f"{estimate.minutes}m")
    return " ".join(parts)


def estimate_time_to_level(current_total_xp, target_level=MAX_LEVEL,
                           table: Optional[ProgressionTable] = None,
                           xp_per_time_level: int = XP_PER_TIME_TYPE_BADGE_LEVEL,
                           minutes_per_time_level: int = MINUTES_PER_TIME_BADGE_LEVEL) -> TimeEstimate:
    """
    Estimate the playing time left before reaching a level.

    The remaining XP is converted into levels of the time-played badge and
    each of those levels into the minutes of play it represents.

    Args:
        current_total_xp: Current total XP
        target_level: Level to reach (defaults to the max level)
        table: Progression table (defaults to the standard curve)
        xp_per_time_level: XP one time-played badge level is worth
        minutes_per_time_level: Minutes of play per time-played badge level

    Returns:
        TimeEstimate (zero when the level is already reached)

    Example:
        estimate_time_to_level(0, 2).total_minutes -> 7.142857...  (2000 / 5600 * 20)
    """
    remaining = xp_to_goal(current_total_xp, target_level, table)
    per_level = as_non_negative_int(xp_per_time_level)
    if remaining == 0 or per_level == 0:
        return TimeEstimate.from_minutes(0.0)
    time_levels = remaining / per_level
    return TimeEstimate.from_minutes(time_levels * as_non_negative_int(minutes_per_time_level))


def total_time_played_minutes(challenges: Iterable[HeroChallenge],
                              minutes_per_time_level: int = MINUTES_PER_TIME_BADGE_LEVEL) -> int:
    """
    Minutes of play recorded by time-played badges.

    Args:
        challenges: Badges to inspect; only time-played badges count

    Returns:
        (level - 1) * minutes_per_time_level summed over time-played badges
    """
    minutes = 0
    for challenge in challenges:
        if challenge.category is not BadgeCategory.TIME:
            continue
        level = as_non_negative_int(challenge.level)
        if level > 1:
            minutes += (level - 1) * minutes_per_time_level
    return minutes


# ---------------------------------------------------------------------------
# Milestones and progress bars
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MilestoneMarker:
    """
    A level of interest placed on a 0-1 progress scale.

    Attributes:
        level: Milestone level
        xp_required: Cumulative XP to reach the level
        position: xp_required / XP required for the max level
        is_completed: Whether the current level has reached it
        is_personal_goal: Whether this is the hero's personal goal
        xp_remaining: XP still needed (0 once reached)
    """
    level: int
    xp_required: int
    position: float
    is_completed: bool
    is_personal_goal: bool
    xp_remaining: int

    def to_dict(self) -> Dict[str, object]:
        return {
            'level': self.level,
            'xp_required': self.xp_required,
            'position': self.position,
            'is_completed': self.is_completed,
            'is_personal_goal': self.is_personal_goal,
            'xp_remaining': self.xp_remaining,
        }


def milestone_position(level, max_level=MAX_LEVEL, table: Optional[ProgressionTable] = None) -> float:
    """
    Position of a level on the 0-1 road to max level.

    Returns 0.0 when the max level needs no XP at all.
    """
    xp_for_max = compute_xp_required_for_level(max_level, table)
    if xp_for_max == 0:
        return 0.0
    return compute_xp_required_for_level(level, table) / xp_for_max


def milestone_markers(current_level, current_total_xp, max_level=MAX_LEVEL,
                      personal_goal_level=0,
                      milestones: Sequence[int] = DEFAULT_MILESTONES,
                      table: Optional[ProgressionTable] = None) -> List[MilestoneMarker]:
    """
    Build the milestone markers for a road-to-max-level view.

    The max level and a positive personal goal are merged into the milestone
    set. Levels above max_level are dropped, duplicates are removed, and
    markers come back sorted by level.

    Args:
        current_level: Hero's current level
        current_total_xp: Hero's total XP
        max_level: Level at the end of the road
        personal_goal_level: Hero's goal level (0 = none)
        milestones: Fixed milestone levels
        table: Progression table (defaults to the standard curve)

    Returns:
        List of MilestoneMarker sorted by level
    """
    current_level = as_non_negative_int(current_level)
    total_xp = as_non_negative_int(current_total_xp)
    goal = as_non_negative_int(personal_goal_level)

    top = as_non_negative_int(max_level)
    levels = {as_non_negative_int(level) for level in milestones}
    levels.add(top)
    if goal > 0:
        levels.add(goal)
    # Nothing past the end of the road
    levels = {level for level in levels if 0 < level <= top}

    xp_for_max = compute_xp_required_for_level(max_level, table)
    markers = []
    for level in sorted(levels):
        xp_required = compute_xp_required_for_level(level, table)
        markers.append(MilestoneMarker(
            level=level,
            xp_required=xp_required,
            position=xp_required / xp_for_max if xp_for_max else 0.0,
            is_completed=current_level >= level,
            is_personal_goal=goal > 0 and level == goal,
            xp_remaining=max(0, xp_required - total_xp)
        ))
    return markers


def progress_ratio(total_xp, max_level=MAX_LEVEL, table: Optional[ProgressionTable] = None) -> float:
    """Where total_xp sits on the 0-1 road to max level (clamped)."""
    xp_for_max = compute_xp_required_for_level(max_level, table)
    if xp_for_max == 0:
        return 0.0
    return min(1.0, as_non_negative_int(total_xp) / xp_for_max)


def level_progress_percent(details: LevelDetails) -> float:
    """Percentage of the current level bar that is filled."""
    if details.xp_needed_for_next_level <= 0:
        return 0.0
    return details.xp_towards_next_level / details.xp_needed_for_next_level * 100


# ---------------------------------------------------------------------------
# Hero and roster summaries
# ---------------------------------------------------------------------------


def summarize_hero(hero: Hero, table: Optional[ProgressionTable] = None) -> HeroProgress:
    """Compute a hero's total XP and level details."""
    total_xp = compute_total_xp(hero.challenges)
    return HeroProgress(hero=hero, total_xp=total_xp, details=compute_level_details(total_xp, table))


def summarize_roster(heroes: Iterable[Hero], table: Optional[ProgressionTable] = None) -> List[HeroProgress]:
    """
    Summaries for every hero, highest total XP first.

    Heroes with equal totals keep their input order.
    """
    summaries = [summarize_hero(hero, table) for hero in heroes]
    summaries.sort(key=lambda progress: progress.total_xp, reverse=True)
    logger.debug(f"Summarized {len(summaries)} heroes")
    return summaries


def global_level_details(progress: Iterable[HeroProgress],
                         table: Optional[ProgressionTable] = None) -> Tuple[int, LevelDetails]:
    """
    Level across all heroes combined.

    Returns:
        (global total XP, LevelDetails for that total)
    """
    global_total = sum(item.total_xp for item in progress)
    return global_total, compute_level_details(global_total, table)


def personal_goal_progress(progress: HeroProgress,
                           table: Optional[ProgressionTable] = None) -> Optional[float]:
    """
    Percentage of the hero's personal goal achieved, capped at 100.

    A goal level takes precedence over an XP goal from older documents.

    Returns:
        Percentage, or None when the hero has no goal
    """
    hero = progress.hero
    goal_level = as_non_negative_int(hero.personal_goal_level)
    goal_xp = as_non_negative_int(hero.personal_goal_xp)
    if goal_level > 0:
        target_xp = compute_xp_required_for_level(goal_level, table)
    elif goal_xp > 0:
        target_xp = goal_xp
    else:
        # Missing, zero and malformed XP goals all mean no goal
        return None

    # A goal that needs no XP is met from the start
    if target_xp == 0:
        return 100.0
    return min(100.0, progress.total_xp / target_xp * 100)


__all__ = [
    'MAX_LEVEL',
    'DEFAULT_MILESTONES',
    'xp_to_goal',
    'badges_needed_for_goal',
    'badges_needed_by_category',
    'TimeEstimate',
    'format_duration',
    'estimate_time_to_level',
    'total_time_played_minutes',
    'MilestoneMarker',
    'milestone_position',
    'milestone_markers',
    'progress_ratio',
    'level_progress_percent',
    'summarize_hero',
    'summarize_roster',
    'global_level_details',
    'personal_goal_progress',
]
