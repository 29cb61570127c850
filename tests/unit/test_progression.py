"""
Unit tests for progression tables and the built-in curves.
"""

import pytest
from herotracker.core.progression import ProgressionTable, ProgressionTier, ProgressionTableError
from herotracker.curves.standard import STANDARD_TIER_COSTS, StandardCurve, standard_table
from herotracker.curves.legacy import LegacyCurve


class TestStandardTable:
    """Test the canonical progression table."""

    def test_has_25_tiers(self):
        """Test that levels 1-25 are tabulated."""
        table = standard_table()
        assert len(table) == 25
        assert table.first_tier.level == 1
        assert table.last_level == 25

    def test_known_starts(self):
        """Test cumulative starts of hand-checked levels."""
        table = standard_table()
        assert table.tier_at(1).cumulative_xp_at_start == 0
        assert table.tier_at(2).cumulative_xp_at_start == 2000
        assert table.tier_at(3).cumulative_xp_at_start == 6000
        assert table.tier_at(10).cumulative_xp_at_start == 98000
        assert table.tier_at(20).cumulative_xp_at_start == 478000
        assert table.tier_at(25).cumulative_xp_at_start == 778000

    def test_table_end_and_tail(self):
        """Test that the table ends at 838000 with a 60000 tail."""
        table = standard_table()
        assert table.table_end == 838000
        assert table.tail_cost_per_level() == 60000

    def test_costs_match_tiers(self):
        """Test that each tier's cost is the listed cost."""
        costs = [tier.xp_to_next_level for tier in standard_table()]
        assert costs == STANDARD_TIER_COSTS

    def test_tiers_are_contiguous(self):
        """Test that each tier starts where the previous one ends."""
        tiers = standard_table().tiers
        for previous, tier in zip(tiers, tiers[1:]):
            assert tier.level == previous.level + 1
            assert tier.cumulative_xp_at_start == previous.cumulative_xp_at_end

    def test_shared_instance(self):
        """Test that the canonical table is built once."""
        assert standard_table() is standard_table()

    def test_matches_curve_definition(self):
        """Test that the curve definition builds the same table."""
        assert StandardCurve().build_table() == standard_table()


class TestLegacyCurve:
    """Test the flat legacy curve."""

    def test_legacy_numbers(self):
        """Test that level 20 starts at 95000 under the legacy curve."""
        table = LegacyCurve().build_table()
        assert len(table) == 19
        assert all(tier.xp_to_next_level == 5000 for tier in table)
        assert table.table_end == 95000
        assert table.tail_cost_per_level() == 60000
        assert table.name == 'legacy'


class TestTableLookups:
    """Test tier lookups."""

    @pytest.fixture
    def table(self):
        return ProgressionTable.from_costs([2000, 4000, 8000], tail_cost_per_level=10000)

    def test_from_costs_derives_starts(self, table):
        """Test that cumulative starts are derived from costs."""
        assert [t.cumulative_xp_at_start for t in table] == [0, 2000, 6000]
        assert table.table_end == 14000

    @pytest.mark.parametrize("level", [0, -1, 4, 100])
    def test_tier_at_outside_table(self, table, level):
        """Test that levels outside the table have no tier."""
        assert table.tier_at(level) is None

    def test_tier_at_non_int(self, table):
        """Test that non-integer levels have no tier."""
        assert table.tier_at('2') is None

    def test_round_trip_dict(self, table):
        """Test converting a table to a curve document and back."""
        data = table.to_dict()
        assert data['tail_cost_per_level'] == 10000
        assert data['tiers'][1] == {'level': 2, 'cumulative_xp_at_start': 2000, 'xp_to_next_level': 4000}
        assert ProgressionTable.from_dict(data) == table

    def test_immutable(self, table):
        """Test that a table cannot be modified after construction."""
        with pytest.raises(AttributeError):
            table._tail_cost = 1

    def test_hashable(self, table):
        """Test that equal tables hash equally."""
        other = ProgressionTable.from_costs([2000, 4000, 8000], tail_cost_per_level=10000, name='copy')
        assert hash(table) == hash(other)
        assert table == other

    def test_repr(self, table):
        """Test the table representation."""
        assert 'levels=1..3' in repr(table)


class TestTableValidation:
    """Test that broken tables are rejected at construction."""

    def test_empty_table(self):
        """Test that a table needs at least one tier."""
        with pytest.raises(ProgressionTableError):
            ProgressionTable([], 60000)

    @pytest.mark.parametrize("tail", [0, -60000, 1.5, True, None])
    def test_bad_tail_cost(self, tail):
        """Test that the tail cost must be a positive integer."""
        with pytest.raises(ProgressionTableError):
            ProgressionTable.from_costs([2000], tail)

    def test_first_tier_must_be_level_1(self):
        """Test that tables start at level 1."""
        with pytest.raises(ProgressionTableError, match="level 1"):
            ProgressionTable([ProgressionTier(2, 0, 2000)], 60000)

    def test_first_tier_must_start_at_zero(self):
        """Test that level 1 starts at 0 XP."""
        with pytest.raises(ProgressionTableError, match="0 XP"):
            ProgressionTable([ProgressionTier(1, 100, 2000)], 60000)

    def test_levels_must_be_consecutive(self):
        """Test that a gap in levels is rejected."""
        tiers = [ProgressionTier(1, 0, 2000), ProgressionTier(3, 2000, 4000)]
        with pytest.raises(ProgressionTableError, match="increase by 1"):
            ProgressionTable(tiers, 60000)

    def test_cumulative_must_match(self):
        """Test that a tier must start where the previous one ends."""
        tiers = [ProgressionTier(1, 0, 2000), ProgressionTier(2, 2500, 4000)]
        with pytest.raises(ProgressionTableError, match="expected 2000"):
            ProgressionTable(tiers, 60000)

    @pytest.mark.parametrize("cost", [0, -2000])
    def test_costs_must_be_positive(self, cost):
        """Test that every level must cost something."""
        with pytest.raises(ProgressionTableError, match="positive"):
            ProgressionTable.from_costs([2000, cost], 60000)

    def test_costs_must_be_integers(self):
        """Test that fractional costs are rejected."""
        with pytest.raises(ProgressionTableError, match="integer"):
            ProgressionTable.from_costs([2000, 4000.5], 60000)

    def test_from_dict_missing_key(self):
        """Test that a curve document without tiers is rejected."""
        with pytest.raises(ProgressionTableError, match="Malformed"):
            ProgressionTable.from_dict({'tail_cost_per_level': 60000})

    def test_error_is_value_error(self):
        """Test that table errors can be caught as ValueError."""
        assert issubclass(ProgressionTableError, ValueError)
