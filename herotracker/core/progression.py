"""
Progression tables for Hero Tracker.

A progression table lists, for levels 1..N, the cumulative XP at which each
level starts and the XP it costs to clear. Past level N every level costs the
same flat amount (the tail cost). Tables are immutable values: build one once
and pass it to the resolvers in herotracker.core.leveling.

Curves are plain data so designers can hand-tune any single level without
touching the resolver code. See herotracker.curves for the built-in curves.
"""

from dataclasses import dataclass
from typing import Dict, Any, Iterable, Optional, Sequence, Tuple


class ProgressionTableError(ValueError):
    """Raised when a progression table's data is inconsistent."""
    pass


@dataclass(frozen=True)
class ProgressionTier:
    """
    One row of a progression table, covering exactly one level.

    Attributes:
        level: The level this tier describes
        cumulative_xp_at_start: Total XP at which this level begins
        xp_to_next_level: XP needed to advance from this level to the next
    """
    level: int
    cumulative_xp_at_start: int
    xp_to_next_level: int

    @property
    def cumulative_xp_at_end(self) -> int:
        """Total XP at which the following level begins."""
        return self.cumulative_xp_at_start + self.xp_to_next_level

    def to_dict(self) -> Dict[str, int]:
        return {
            'level': self.level,
            'cumulative_xp_at_start': self.cumulative_xp_at_start,
            'xp_to_next_level': self.xp_to_next_level,
        }


class ProgressionTable:
    """
    Immutable XP curve: tabulated tiers followed by a flat tail.

    The constructor checks every invariant and raises ProgressionTableError
    on the first violation, so a broken curve is caught when it is built
    rather than when a player's level is computed.

    Example:
        table = ProgressionTable.from_costs([2000, 4000, 8000], tail_cost_per_level=10000)
        table.tier_at(2)          # ProgressionTier(level=2, cumulative_xp_at_start=2000, ...)
        table.tier_at(4)          # None, past the table
        table.table_end           # 14000
    """

    __slots__ = ('_name', '_tiers', '_tail_cost')

    def __init__(self, tiers: Iterable[ProgressionTier], tail_cost_per_level: int,
                 name: str = 'custom'):
        tiers = tuple(tiers)
        self._validate(tiers, tail_cost_per_level)
        self._name = name
        self._tiers: Tuple[ProgressionTier, ...] = tiers
        self._tail_cost = int(tail_cost_per_level)

    def __setattr__(self, key, value):
        if hasattr(self, '_tail_cost'):
            raise AttributeError("ProgressionTable is immutable")
        object.__setattr__(self, key, value)

    @staticmethod
    def _validate(tiers: Tuple[ProgressionTier, ...], tail_cost_per_level: Any) -> None:
        if not tiers:
            raise ProgressionTableError("Progression table must contain at least one tier")

        if not isinstance(tail_cost_per_level, int) or isinstance(tail_cost_per_level, bool):
            raise ProgressionTableError(
                f"Tail cost must be an integer, got {tail_cost_per_level!r}"
            )
        if tail_cost_per_level <= 0:
            raise ProgressionTableError(
                f"Tail cost must be positive, got {tail_cost_per_level}"
            )

        first = tiers[0]
        if first.level != 1:
            raise ProgressionTableError(f"First tier must be level 1, got level {first.level}")
        if first.cumulative_xp_at_start != 0:
            raise ProgressionTableError(
                f"Level 1 must start at 0 XP, got {first.cumulative_xp_at_start}"
            )

        previous: Optional[ProgressionTier] = None
        for tier in tiers:
            for attr in ('level', 'cumulative_xp_at_start', 'xp_to_next_level'):
                value = getattr(tier, attr)
                if not isinstance(value, int) or isinstance(value, bool):
                    raise ProgressionTableError(
                        f"Tier {tier.level!r}: {attr} must be an integer, got {value!r}"
                    )
            if tier.xp_to_next_level <= 0:
                raise ProgressionTableError(
                    f"Tier {tier.level}: xp_to_next_level must be positive, "
                    f"got {tier.xp_to_next_level}"
                )
            if previous is not None:
                if tier.level != previous.level + 1:
                    raise ProgressionTableError(
                        f"Tier levels must increase by 1: level {tier.level} "
                        f"follows level {previous.level}"
                    )
                if tier.cumulative_xp_at_start != previous.cumulative_xp_at_end:
                    raise ProgressionTableError(
                        f"Tier {tier.level} starts at {tier.cumulative_xp_at_start} XP, "
                        f"expected {previous.cumulative_xp_at_end}"
                    )
            previous = tier

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_costs(cls, costs: Sequence[int], tail_cost_per_level: int,
                   name: str = 'custom') -> 'ProgressionTable':
        """
        Build a table from per-level costs, deriving the cumulative starts.

        Args:
            costs: XP to clear level 1, level 2, ... in order
            tail_cost_per_level: Flat cost of every level past the table
            name: Curve name for display

        Returns:
            New ProgressionTable

        Raises:
            ProgressionTableError: If costs is empty or contains a non-positive cost
        """
        tiers = []
        cumulative = 0
        for index, cost in enumerate(costs):
            tiers.append(ProgressionTier(
                level=index + 1,
                cumulative_xp_at_start=cumulative,
                xp_to_next_level=cost
            ))
            cumulative += cost if isinstance(cost, int) else 0
        return cls(tiers, tail_cost_per_level, name=name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProgressionTable':
        """
        Build a table from a curve document.

        Expected shape:
            {
                "name": "standard",
                "tail_cost_per_level": 60000,
                "tiers": [
                    {"level": 1, "cumulative_xp_at_start": 0, "xp_to_next_level": 2000},
                    ...
                ]
            }

        Raises:
            ProgressionTableError: If the document describes an invalid curve
        """
        try:
            tiers = [
                ProgressionTier(
                    level=row['level'],
                    cumulative_xp_at_start=row['cumulative_xp_at_start'],
                    xp_to_next_level=row['xp_to_next_level']
                )
                for row in data['tiers']
            ]
            tail_cost = data['tail_cost_per_level']
        except (KeyError, TypeError) as e:
            raise ProgressionTableError(f"Malformed curve document: missing {e}") from e
        return cls(tiers, tail_cost, name=data.get('name', 'custom'))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a curve document."""
        return {
            'name': self._name,
            'tail_cost_per_level': self._tail_cost,
            'tiers': [tier.to_dict() for tier in self._tiers],
        }

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def tiers(self) -> Tuple[ProgressionTier, ...]:
        return self._tiers

    @property
    def first_tier(self) -> ProgressionTier:
        return self._tiers[0]

    @property
    def last_tier(self) -> ProgressionTier:
        return self._tiers[-1]

    @property
    def last_level(self) -> int:
        """Highest tabulated level."""
        return self._tiers[-1].level

    @property
    def table_end(self) -> int:
        """Cumulative XP needed to complete the whole table."""
        return self._tiers[-1].cumulative_xp_at_end

    def tier_at(self, level: int) -> Optional[ProgressionTier]:
        """
        Get the tier for a tabulated level.

        Args:
            level: Level to look up

        Returns:
            The tier, or None if level is below 1 or past the table
        """
        # Levels are consecutive from 1, so the index is level - 1
        if not isinstance(level, int) or level < 1 or level > len(self._tiers):
            return None
        return self._tiers[level - 1]

    def tail_cost_per_level(self) -> int:
        """XP cost of every level past the table."""
        return self._tail_cost

    def __len__(self) -> int:
        return len(self._tiers)

    def __iter__(self):
        return iter(self._tiers)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProgressionTable):
            return NotImplemented
        return self._tiers == other._tiers and self._tail_cost == other._tail_cost

    def __hash__(self) -> int:
        return hash((self._tiers, self._tail_cost))

    def __repr__(self) -> str:
        return (
            f"ProgressionTable(name={self._name!r}, levels=1..{self.last_level}, "
            f"tail_cost_per_level={self._tail_cost})"
        )


__all__ = ['ProgressionTier', 'ProgressionTable', 'ProgressionTableError']
