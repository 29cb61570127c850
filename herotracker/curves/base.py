"""
Curve definition base class for Hero Tracker.

A curve definition packages one progression table as a discoverable unit.
Subclasses live in herotracker/curves/ and are found by
herotracker.core.curve_loader, the same way a plugin would be.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.progression import ProgressionTable


class CurveDefinition(ABC):
    """
    Base class for all built-in progression curves.

    To add a curve:
    1. Subclass CurveDefinition in a module under herotracker/curves/
    2. Implement name, version and tier_costs()
    3. Optional: override tail_cost_per_level and description
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Curve name used on the command line (e.g., 'standard')"""
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        """Curve version (semver, e.g., '1.0.0')"""
        pass

    @property
    def display_name(self) -> str:
        """Human-readable name. Defaults to the curve name."""
        return self.name.replace('_', ' ').title()

    @property
    def description(self) -> str:
        return f"{self.display_name} progression curve"

    @property
    def tail_cost_per_level(self) -> int:
        """Flat XP cost of every level past the table."""
        return 60000

    @abstractmethod
    def tier_costs(self) -> List[int]:
        """
        Return the XP cost of each tabulated level, starting at level 1.

        Example:
            return [2000, 4000, 8000, 12000]
        """
        pass

    def build_table(self) -> ProgressionTable:
        """
        Build the progression table for this curve.

        Raises:
            ProgressionTableError: If the curve's data is inconsistent
        """
        return ProgressionTable.from_costs(
            self.tier_costs(),
            self.tail_cost_per_level,
            name=self.name
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} v{self.version}>"


_table_cache: dict = {}


def cached_table(curve: CurveDefinition) -> ProgressionTable:
    """
    Build a curve's table once per process and reuse it.

    Tables are immutable, so sharing one instance between callers is safe.
    """
    key = (type(curve), curve.version)
    table: Optional[ProgressionTable] = _table_cache.get(key)
    if table is None:
        table = curve.build_table()
        _table_cache[key] = table
    return table
