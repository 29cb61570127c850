"""
Legacy progression curve.

The first release of the tracker used flat pricing: levels 1-19 cost 5000 XP
each and level 20 onwards cost 60000 XP each. Kept so that numbers recorded
under the old rules can still be reproduced with --curve legacy.
"""

from typing import List

from .base import CurveDefinition

EARLY_LEVEL_COUNT = 19
XP_FOR_EACH_EARLY_LEVEL = 5000
XP_FOR_EACH_LATE_LEVEL = 60000


class LegacyCurve(CurveDefinition):
    """Flat 5000 XP early levels; level 20 starts at 95000 XP."""

    @property
    def name(self) -> str:
        return "legacy"

    @property
    def version(self) -> str:
        return "1.0.0"

    @property
    def description(self) -> str:
        return "5,000 XP per level up to level 20, then 60,000 XP per level"

    @property
    def tail_cost_per_level(self) -> int:
        return XP_FOR_EACH_LATE_LEVEL

    def tier_costs(self) -> List[int]:
        return [XP_FOR_EACH_EARLY_LEVEL] * EARLY_LEVEL_COUNT
