"""
Standard progression curve.

Hand-authored table for levels 1-25: cheap early levels, then costs climbing
by 4000 XP per level until they flatten at 60000. Every level past 25 costs
60000 XP.
"""

from typing import List

from .base import CurveDefinition, cached_table
from ..core.progression import ProgressionTable

STANDARD_TIER_COSTS = [
    2000,   # Level 1 (starts at 0)
    4000,   # Level 2 (starts at 2000)
    8000,   # Level 3 (starts at 6000)
    12000,  # Level 4 (starts at 14000)
    12000,  # Level 5 (starts at 26000)
    12000,  # Level 6 (starts at 38000)
    16000,  # Level 7 (starts at 50000)
    16000,  # Level 8 (starts at 66000)
    16000,  # Level 9 (starts at 82000)
    20000,  # Level 10 (starts at 98000)
    24000,  # Level 11 (starts at 118000)
    28000,  # Level 12 (starts at 142000)
    32000,  # Level 13 (starts at 170000)
    36000,  # Level 14 (starts at 202000)
    40000,  # Level 15 (starts at 238000)
    44000,  # Level 16 (starts at 278000)
    48000,  # Level 17 (starts at 322000)
    52000,  # Level 18 (starts at 370000)
    56000,  # Level 19 (starts at 422000)
    60000,  # Level 20 (starts at 478000)
    60000,  # Level 21 (starts at 538000)
    60000,  # Level 22 (starts at 598000)
    60000,  # Level 23 (starts at 658000)
    60000,  # Level 24 (starts at 718000)
    60000,  # Level 25 (starts at 778000)
]

STANDARD_TAIL_COST = 60000


class StandardCurve(CurveDefinition):
    """The canonical curve used when no other curve is configured."""

    @property
    def name(self) -> str:
        return "standard"

    @property
    def version(self) -> str:
        return "2.0.0"

    @property
    def description(self) -> str:
        return "Hand-tuned levels 1-25, then 60,000 XP per level"

    @property
    def tail_cost_per_level(self) -> int:
        return STANDARD_TAIL_COST

    def tier_costs(self) -> List[int]:
        return list(STANDARD_TIER_COSTS)


def standard_table() -> ProgressionTable:
    """Return the shared canonical progression table."""
    return cached_table(StandardCurve())
