"""
Core data models for Hero Tracker.

These models carry badge data in and computed progress out:
- BadgeContribution: one (level, xp_per_level) counter fed to the aggregator
- LevelDetails: level and in-level progress derived from a total XP value
- HeroChallenge: a tracked badge on a hero
- Hero: a hero with its badges and optional personal goal
- HeroProgress: a hero together with its computed totals
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from .badges import BadgeCategory
from .coerce import as_non_negative_int


@dataclass(frozen=True)
class BadgeContribution:
    """
    A single trackable counter.

    Level 1 means the badge has not started earning yet, so only the levels
    above 1 are worth XP.

    Attributes:
        level: Current badge level
        xp_per_level: XP earned for each level above 1
    """
    level: int
    xp_per_level: int


@dataclass(frozen=True)
class LevelDetails:
    """
    Level and progress derived from a total XP value.

    Never stored on its own; recompute it whenever the total changes.

    Attributes:
        level: Current level (1-based)
        xp_towards_next_level: XP earned inside the current level
        xp_needed_for_next_level: Full XP cost of the current level
        current_level_base_xp: Cumulative XP at which the current level starts
        next_level_base_xp: Cumulative XP at which the next level starts
    """
    level: int
    xp_towards_next_level: int
    xp_needed_for_next_level: int
    current_level_base_xp: int
    next_level_base_xp: int

    @property
    def xp_remaining_for_next_level(self) -> int:
        return self.xp_needed_for_next_level - self.xp_towards_next_level

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'level': self.level,
            'xp_towards_next_level': self.xp_towards_next_level,
            'xp_needed_for_next_level': self.xp_needed_for_next_level,
            'current_level_base_xp': self.current_level_base_xp,
            'next_level_base_xp': self.next_level_base_xp,
        }


@dataclass
class HeroChallenge:
    """
    A badge tracked on a hero.

    Attributes:
        id: Identifier of this badge on the hero
        title: Display title (e.g., 'Damage Dealt')
        level: Current badge level
        xp_per_level: XP earned per level above 1
        badge_id: Optional id of the shared badge definition
        icon_name: Opaque icon identifier, resolved by whatever displays it
    """
    id: str
    title: str
    level: int
    xp_per_level: int
    badge_id: Optional[str] = None
    icon_name: Optional[str] = None

    @property
    def category(self) -> Optional[BadgeCategory]:
        """Badge category, or None for custom XP values."""
        return BadgeCategory.for_xp_per_level(self.xp_per_level)

    def contribution(self) -> BadgeContribution:
        """Return this badge as an aggregator input."""
        return BadgeContribution(level=self.level, xp_per_level=self.xp_per_level)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'HeroChallenge':
        """
        Build a challenge from a roster entry.

        Accepts snake_case keys as well as the camelCase keys written by the
        browser tracker (xpPerLevel, badgeId, iconName).
        """
        return HeroChallenge(
            id=data['id'],
            title=data.get('title', data['id']),
            level=data.get('level', 1),
            xp_per_level=data.get('xp_per_level', data.get('xpPerLevel', 0)),
            badge_id=data.get('badge_id', data.get('badgeId')),
            icon_name=data.get('icon_name', data.get('iconName')),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'title': self.title,
            'level': self.level,
            'xp_per_level': self.xp_per_level,
            'badge_id': self.badge_id,
            'icon_name': self.icon_name,
        }


@dataclass
class Hero:
    """
    A hero and its tracked badges.

    Attributes:
        id: Unique hero identifier (e.g., 'soldier76')
        name: Display name
        challenges: Badges tracked for this hero
        personal_goal_level: Target level chosen by the player (0 = no goal)
        personal_goal_xp: Target total XP, used by older documents
    """
    id: str
    name: str
    challenges: List[HeroChallenge] = field(default_factory=list)
    personal_goal_level: int = 0
    personal_goal_xp: Optional[int] = None

    def contributions(self) -> List[BadgeContribution]:
        return [challenge.contribution() for challenge in self.challenges]

    def get_challenge(self, challenge_id: str) -> Optional[HeroChallenge]:
        for challenge in self.challenges:
            if challenge.id == challenge_id:
                return challenge
        return None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Hero':
        """
        Build a hero from a roster entry (snake_case or camelCase keys).

        Goals are normalized: an unusable goal level becomes 0 and an
        unusable or zero goal XP becomes None, both meaning "no goal".
        """
        goal_level = data.get('personal_goal_level', data.get('personalGoalLevel'))
        goal_xp = as_non_negative_int(data.get('personal_goal_xp', data.get('personalGoalXP')))
        return Hero(
            id=data['id'],
            name=data.get('name', data['id']),
            challenges=[HeroChallenge.from_dict(c) for c in data.get('challenges', [])],
            personal_goal_level=as_non_negative_int(goal_level),
            personal_goal_xp=goal_xp or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'name': self.name,
            'personal_goal_level': self.personal_goal_level,
            'personal_goal_xp': self.personal_goal_xp,
            'challenges': [c.to_dict() for c in self.challenges],
        }


@dataclass(frozen=True)
class HeroProgress:
    """
    A hero with its computed total XP and level details.

    Attributes:
        hero: The hero the numbers were computed for
        total_xp: Sum of all badge contributions
        details: Level details for total_xp
    """
    hero: Hero
    total_xp: int
    details: LevelDetails

    @property
    def level(self) -> int:
        return self.details.level

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            'id': self.hero.id,
            'name': self.hero.name,
            'total_xp': self.total_xp,
            'personal_goal_level': self.hero.personal_goal_level,
        }
        data.update(self.details.to_dict())
        return data
