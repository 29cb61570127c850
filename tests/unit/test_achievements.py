"""
Unit tests for achievement unlock rules.
"""

import pytest
from herotracker.core.achievements import (
    DEFAULT_ACHIEVEMENT_RULES,
    AchievementKind,
    AchievementRule,
    AchievementStatus,
    evaluate_achievements,
)
from herotracker.core.leveling import compute_xp_required_for_level
from herotracker.core.models import Hero, HeroChallenge, HeroProgress, LevelDetails


def make_progress(hero_id, level, total_xp=0, badge_levels=()):
    """Build a summarized hero at a fixed level."""
    challenges = [
        HeroChallenge(id=f"{hero_id}_{i}", title=f"Badge {i}", level=badge_level, xp_per_level=200)
        for i, badge_level in enumerate(badge_levels)
    ]
    details = LevelDetails(level=level, xp_towards_next_level=0, xp_needed_for_next_level=1000,
                           current_level_base_xp=total_xp, next_level_base_xp=total_xp + 1000)
    return HeroProgress(hero=Hero(id=hero_id, name=hero_id.title(), challenges=challenges),
                        total_xp=total_xp, details=details)


def unlocked(rule, progress, minutes_played=0):
    return evaluate_achievements(progress, minutes_played, rules=[rule])[0].unlocked


class TestGlobalRules:
    """Test rules measured across the whole roster."""

    def test_global_level(self):
        """Test that combined XP across heroes counts toward the global level."""
        rule = AchievementRule('global_level_10', AchievementKind.GLOBAL_LEVEL, 10)
        half = compute_xp_required_for_level(10) // 2 + 1
        assert not unlocked(rule, [make_progress('ana', 5, half)])
        assert unlocked(rule, [make_progress('ana', 5, half), make_progress('mei', 5, half)])

    def test_global_xp(self):
        """Test the global XP threshold is inclusive."""
        rule = AchievementRule('one_million_global_xp', AchievementKind.GLOBAL_XP, 1000000)
        assert not unlocked(rule, [make_progress('ana', 100, 999999)])
        assert unlocked(rule, [make_progress('ana', 100, 600000), make_progress('mei', 100, 400000)])

    def test_time_played(self):
        """Test hours played against minutes."""
        rule = AchievementRule('time_played_10_hours', AchievementKind.TIME_PLAYED_HOURS, 10)
        assert not unlocked(rule, [], minutes_played=599)
        assert unlocked(rule, [], minutes_played=600)

    def test_unusable_minutes(self):
        """Test that negative or NaN play time counts as none."""
        rule = AchievementRule('time_played_any', AchievementKind.TIME_PLAYED_HOURS, 0)
        assert unlocked(rule, [], minutes_played=float('nan'))
        rule = AchievementRule('time_played_1_hour', AchievementKind.TIME_PLAYED_HOURS, 1)
        assert not unlocked(rule, [], minutes_played=-600)


class TestHeroRules:
    """Test rules measured on individual heroes."""

    def test_any_hero_level(self):
        """Test that one hero at the threshold is enough."""
        rule = AchievementRule('hero_level_50', AchievementKind.HERO_LEVEL, 50)
        assert not unlocked(rule, [make_progress('ana', 49)])
        assert unlocked(rule, [make_progress('ana', 12), make_progress('mei', 50)])

    def test_several_heroes_level(self):
        """Test that hero_count heroes must reach the threshold."""
        rule = AchievementRule('five_heroes_level_50', AchievementKind.HERO_LEVEL, 50, hero_count=5)
        four = [make_progress(f"hero{i}", 60) for i in range(4)]
        assert not unlocked(rule, four + [make_progress('ana', 49)])
        assert unlocked(rule, four + [make_progress('ana', 50)])

    def test_all_heroes_level(self):
        """Test that every hero must reach the threshold."""
        rule = AchievementRule('all_heroes_level_10', AchievementKind.ALL_HEROES_LEVEL, 10)
        assert not unlocked(rule, [make_progress('ana', 10), make_progress('mei', 9)])
        assert unlocked(rule, [make_progress('ana', 10), make_progress('mei', 11)])

    def test_all_heroes_empty_roster(self):
        """Test that an empty roster never unlocks all-heroes rules."""
        rule = AchievementRule('all_heroes_level_10', AchievementKind.ALL_HEROES_LEVEL, 10)
        assert not unlocked(rule, [])

    def test_all_badges_one_hero(self):
        """Test that one hero with every badge at the threshold is enough."""
        rule = AchievementRule('all_badges_one_hero_max', AchievementKind.ALL_BADGES_LEVEL, 100)
        assert not unlocked(rule, [make_progress('ana', 50, badge_levels=(100, 99))])
        assert unlocked(rule, [
            make_progress('ana', 50, badge_levels=(100, 99)),
            make_progress('mei', 50, badge_levels=(100, 120)),
        ])

    def test_all_badges_needs_badges(self):
        """Test that a hero without badges does not count."""
        rule = AchievementRule('all_badges_one_hero_max', AchievementKind.ALL_BADGES_LEVEL, 100)
        assert not unlocked(rule, [make_progress('ana', 50)])


class TestDefaultRules:
    """Test the built-in rule set and its serialization."""

    def test_order_and_ids(self):
        """Test that statuses come back in rule order."""
        statuses = evaluate_achievements([])
        assert [s.rule for s in statuses] == list(DEFAULT_ACHIEVEMENT_RULES)
        assert len(statuses) == 18
        assert len({rule.id for rule in DEFAULT_ACHIEVEMENT_RULES}) == 18

    def test_empty_roster_unlocks_nothing(self):
        """Test that a new player has no achievements."""
        assert not any(s.unlocked for s in evaluate_achievements([]))

    @pytest.mark.parametrize("rule_id,description", [
        ('global_level_10', 'Reach global level 10'),
        ('one_million_global_xp', 'Earn 1,000,000 global XP'),
        ('time_played_50_hours', 'Play for 50 hours'),
        ('hero_level_100', 'Reach level 100 with any hero'),
        ('five_heroes_level_50', 'Reach level 50 with 5 heroes'),
        ('all_heroes_max_level', 'Reach level 500 with every hero'),
        ('all_badges_one_hero_max', 'Raise every badge of one hero to level 100'),
    ])
    def test_describe(self, rule_id, description):
        """Test rule descriptions."""
        rule = next(r for r in DEFAULT_ACHIEVEMENT_RULES if r.id == rule_id)
        assert rule.describe() == description

    def test_status_to_dict(self):
        """Test converting a status to a dictionary."""
        rule = AchievementRule('hero_level_50', AchievementKind.HERO_LEVEL, 50)
        assert AchievementStatus(rule, True).to_dict() == {
            'id': 'hero_level_50',
            'kind': 'hero_level',
            'threshold': 50,
            'hero_count': 1,
            'description': 'Reach level 50 with any hero',
            'unlocked': True,
        }
