"""
Roster documents.

A roster is the JSON export of a player's heroes and badges. Two shapes are
accepted:

    {"version": 3, "heroes": [...]}     versioned export
    [...]                               bare hero list from older exports

Hero and badge keys may be snake_case or the camelCase written by the browser
tracker. Rosters are only ever read here; writing them back is up to the
application that owns the data.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import jsonschema

from .models import Hero
from .result import Result, ErrorCode

logger = logging.getLogger(__name__)

CURRENT_ROSTER_VERSION = 3

_NUMBER_OR_NULL = {"type": ["number", "null"]}

CHALLENGE_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "title": {"type": "string"},
        "level": {"type": "number"},
        "xp_per_level": {"type": "number"},
        "xpPerLevel": {"type": "number"},
        "badge_id": {"type": ["string", "null"]},
        "badgeId": {"type": ["string", "null"]},
        "icon_name": {"type": ["string", "null"]},
        "iconName": {"type": ["string", "null"]}
    },
    "required": ["id", "level"],
    "anyOf": [
        {"required": ["xp_per_level"]},
        {"required": ["xpPerLevel"]}
    ]
}

HERO_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "name": {"type": "string"},
        "personal_goal_level": _NUMBER_OR_NULL,
        "personalGoalLevel": _NUMBER_OR_NULL,
        "personal_goal_xp": _NUMBER_OR_NULL,
        "personalGoalXP": _NUMBER_OR_NULL,
        "challenges": {"type": "array", "items": CHALLENGE_SCHEMA}
    },
    "required": ["id"]
}

ROSTER_SCHEMA = {
    "oneOf": [
        {
            "type": "object",
            "properties": {
                "version": {"type": "integer", "minimum": 1},
                "heroes": {"type": "array", "items": HERO_SCHEMA}
            },
            "required": ["heroes"]
        },
        {"type": "array", "items": HERO_SCHEMA}
    ]
}


def parse_roster(document: Any) -> Result:
    """
    Validate a roster document and build its heroes.

    Args:
        document: Decoded JSON roster (versioned object or bare list)

    Returns:
        Result with List[Hero] as data

    Example:
        result = parse_roster({"version": 3, "heroes": [{"id": "ana", "challenges": []}]})
        result.data[0].id  # 'ana'
    """
    try:
        jsonschema.validate(document, ROSTER_SCHEMA)
    except jsonschema.ValidationError as e:
        location = '/'.join(str(part) for part in e.absolute_path) or '<root>'
        return Result.fail(
            f"Roster document is invalid at {location}: {e.message}",
            ErrorCode.SCHEMA_VALIDATION_FAILED
        )

    if isinstance(document, dict):
        version = document.get('version')
        if version is not None and version > CURRENT_ROSTER_VERSION:
            logger.warning(
                f"Roster version {version} is newer than supported version "
                f"{CURRENT_ROSTER_VERSION}; unknown fields are ignored"
            )
        entries = document['heroes']
    else:
        entries = document

    heroes = [Hero.from_dict(entry) for entry in entries]

    seen = set()
    for hero in heroes:
        if hero.id in seen:
            return Result.fail(f"Duplicate hero id '{hero.id}' in roster", ErrorCode.INVALID_INPUT)
        seen.add(hero.id)

    logger.debug(f"Parsed roster with {len(heroes)} heroes")
    return Result.ok(heroes)


def read_roster(path: Union[str, Path]) -> Result:
    """
    Read a roster document from disk.

    Args:
        path: Path to a JSON roster file

    Returns:
        Result with List[Hero] as data
    """
    path = Path(path)
    if not path.is_file():
        return Result.fail(f"Roster file not found: {path}", ErrorCode.FILE_NOT_FOUND)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Result.fail(f"Invalid JSON in {path}: {e}", ErrorCode.INVALID_JSON)
    except OSError as e:
        return Result.fail(f"Could not read roster file {path}: {e}", ErrorCode.FILE_READ_ERROR)

    return parse_roster(document)


def find_hero(heroes: List[Hero], hero_id: str) -> Result:
    """Look a hero up by id."""
    hero: Optional[Hero] = next((h for h in heroes if h.id == hero_id), None)
    if hero is None:
        known = ', '.join(h.id for h in heroes) or 'none'
        return Result.fail(f"Hero '{hero_id}' not found. Known heroes: {known}", ErrorCode.HERO_NOT_FOUND)
    return Result.ok(hero)


__all__ = ['ROSTER_SCHEMA', 'CURRENT_ROSTER_VERSION', 'parse_roster', 'read_roster', 'find_hero']
