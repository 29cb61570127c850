"""
Experience and level calculations.

Three pure functions make up the public contract:

- compute_total_xp: badge contributions -> total XP
- compute_level_details: total XP -> level and progress inside the level
- compute_xp_required_for_level: level -> cumulative XP needed to start it

The last two are exact inverses over level boundaries:
compute_level_details(compute_xp_required_for_level(L)).level == L for every
L >= 1. All three accept an optional ProgressionTable; without one the
standard curve is used.

Malformed numbers (NaN, negatives, non-numeric values) never raise here. They
are clamped to zero so that one bad badge entry cannot corrupt a total.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Tuple

from .coerce import as_non_negative_int
from .models import LevelDetails
from .progression import ProgressionTable
from ..curves.standard import standard_table

logger = logging.getLogger(__name__)


def _unpack_contribution(entry: Any) -> Tuple[Any, Any]:
    """Pull (level, xp_per_level) out of any supported contribution shape."""
    if isinstance(entry, Mapping):
        xp_per_level = entry.get('xp_per_level', entry.get('xpPerLevel'))
        return entry.get('level'), xp_per_level
    if isinstance(entry, (tuple, list)) and len(entry) == 2:
        return entry[0], entry[1]
    return getattr(entry, 'level', None), getattr(entry, 'xp_per_level', None)


def contribution_xp(level: Any, xp_per_level: Any) -> int:
    """
    XP earned by a single badge.

    Level 1 is the starting level and earns nothing; each level above it
    earns xp_per_level.

    Args:
        level: Badge level
        xp_per_level: XP per level above 1

    Returns:
        (level - 1) * xp_per_level, or 0 for level <= 1 or invalid input

    Examples:
        contribution_xp(1, 200) -> 0
        contribution_xp(11, 200) -> 2000
        contribution_xp(5, -200) -> 0
    """
    clean_level = as_non_negative_int(level)
    clean_xp = as_non_negative_int(xp_per_level)
    if clean_level <= 1 or clean_xp == 0:
        return 0
    return (clean_level - 1) * clean_xp


def compute_total_xp(contributions: Iterable[Any]) -> int:
    """
    Sum the XP earned by a collection of badges.

    Order does not matter and duplicates are counted independently.

    Args:
        contributions: BadgeContribution or HeroChallenge objects,
                       (level, xp_per_level) pairs, or mappings with
                       'level' and 'xp_per_level' (or 'xpPerLevel') keys

    Returns:
        Non-negative total XP

    Examples:
        compute_total_xp([BadgeContribution(1, 200)]) -> 0
        compute_total_xp([BadgeContribution(11, 200)]) -> 2000
        compute_total_xp([(3, 1200), (2, 5600)]) -> 8000
    """
    total = 0
    for entry in contributions:
        level, xp_per_level = _unpack_contribution(entry)
        xp = contribution_xp(level, xp_per_level)
        if xp == 0 and as_non_negative_int(level) > 1:
            logger.debug(f"Ignoring contribution with unusable xp_per_level: {entry!r}")
        total += xp
    return total


def compute_level_details(total_xp: Any, table: Optional[ProgressionTable] = None) -> LevelDetails:
    """
    Resolve a total XP value into a level and the progress within it.

    Tabulated levels are found by scanning the table in order; past the
    table every level costs the table's flat tail cost.

    Args:
        total_xp: Total XP (negative or invalid values are treated as 0)
        table: Progression table (defaults to the standard curve)

    Returns:
        LevelDetails for total_xp

    Examples:
        compute_level_details(0).level -> 1
        compute_level_details(2000) -> LevelDetails(level=2, xp_towards_next_level=0,
            xp_needed_for_next_level=4000, current_level_base_xp=2000, next_level_base_xp=6000)
        compute_level_details(838000).level -> 26
    """
    if table is None:
        table = standard_table()

    xp = as_non_negative_int(total_xp)
    if xp != total_xp:
        logger.debug(f"Clamped total XP {total_xp!r} to {xp}")

    for tier in table.tiers:
        start_of_next_tier = tier.cumulative_xp_at_end
        if xp < start_of_next_tier:
            return LevelDetails(
                level=tier.level,
                xp_towards_next_level=xp - tier.cumulative_xp_at_start,
                xp_needed_for_next_level=tier.xp_to_next_level,
                current_level_base_xp=tier.cumulative_xp_at_start,
                next_level_base_xp=start_of_next_tier
            )

    tail_cost = table.tail_cost_per_level()
    table_end = table.table_end
    levels_past_table = (xp - table_end) // tail_cost
    current_level_base_xp = table_end + levels_past_table * tail_cost

    return LevelDetails(
        level=table.last_level + 1 + levels_past_table,
        xp_towards_next_level=xp - current_level_base_xp,
        xp_needed_for_next_level=tail_cost,
        current_level_base_xp=current_level_base_xp,
        next_level_base_xp=current_level_base_xp + tail_cost
    )


def compute_xp_required_for_level(target_level: Any, table: Optional[ProgressionTable] = None) -> int:
    """
    Cumulative XP needed to reach (start) a level.

    Closed form, exact, and the inverse of compute_level_details at level
    boundaries.

    Args:
        target_level: Level to reach (<= 0 or invalid returns 0)
        table: Progression table (defaults to the standard curve)

    Returns:
        Total XP at which target_level begins

    Examples:
        compute_xp_required_for_level(1) -> 0
        compute_xp_required_for_level(2) -> 2000
        compute_xp_required_for_level(26) -> 838000
        compute_xp_required_for_level(27) -> 898000
    """
    if table is None:
        table = standard_table()

    level = as_non_negative_int(target_level)
    if level <= 0:
        return 0
    if level == 1:
        return table.first_tier.cumulative_xp_at_start

    tier = table.tier_at(level)
    if tier is not None:
        return tier.cumulative_xp_at_start

    first_level_past_table = table.last_level + 1
    if level == first_level_past_table:
        return table.table_end

    return table.table_end + (level - first_level_past_table) * table.tail_cost_per_level()


__all__ = [
    'as_non_negative_int',
    'contribution_xp',
    'compute_total_xp',
    'compute_level_details',
    'compute_xp_required_for_level',
]
