#!/usr/bin/env python3
"""
Command-line interface for Hero Tracker.

Provides read-only commands for resolving levels, inspecting progression
curves, and summarizing roster documents from the terminal.
"""

import argparse
import json
import logging
import sys
from typing import Any, List

from ..core.achievements import evaluate_achievements
from ..core.badges import BadgeCategory
from ..core.coerce import as_non_negative_int
from ..core.config import get_config
from ..core.curve_loader import load_curve, get_curve_names
from ..core.leveling import (
    compute_level_details,
    compute_total_xp,
    compute_xp_required_for_level,
)
from ..core.logging_config import setup_logging
from ..core.metrics import (
    badges_needed_by_category,
    estimate_time_to_level,
    format_duration,
    global_level_details,
    level_progress_percent,
    milestone_markers,
    personal_goal_progress,
    summarize_hero,
    summarize_roster,
    total_time_played_minutes,
    xp_to_goal,
)
from ..core.models import BadgeContribution
from ..core.progression import ProgressionTable
from ..core.roster import read_roster, find_hero

logger = logging.getLogger(__name__)


def _error(message: str) -> None:
    print(f"✗ Error: {message}", file=sys.stderr)
    sys.exit(1)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def _load_table(args) -> ProgressionTable:
    """Resolve --curve (or the configured curve) into a table."""
    name = args.curve or get_config().curve
    result = load_curve(name)
    if not result:
        _error(result.error)
    logger.debug(f"Using curve '{result.data.name}'")
    return result.data


def _load_heroes(args) -> list:
    path = args.roster_file or get_config().roster_path
    if not path:
        _error("No roster file given and HEROTRACKER_ROSTER is not set")
    result = read_roster(path)
    if not result:
        _error(result.error)
    return result.data


def parse_contribution(text: str) -> BadgeContribution:
    """
    Parse a LEVEL:XP_PER_LEVEL argument.

    Raises:
        argparse.ArgumentTypeError: If the text is not two integers
    """
    level, sep, xp_per_level = text.partition(':')
    if not sep:
        raise argparse.ArgumentTypeError(f"'{text}' is not in LEVEL:XP_PER_LEVEL form")
    try:
        return BadgeContribution(level=int(level), xp_per_level=int(xp_per_level))
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{text}' must contain two integers")


def _print_details(details) -> None:
    print(f"  Level: {details.level}")
    print(f"  Progress: {details.xp_towards_next_level:,} / {details.xp_needed_for_next_level:,} XP "
          f"({level_progress_percent(details):.1f}%)")
    print(f"  Level starts at: {details.current_level_base_xp:,} XP")
    print(f"  Next level at: {details.next_level_base_xp:,} XP")


def cmd_level(args):
    """Show the level reached with a total XP value."""
    table = _load_table(args)
    details = compute_level_details(args.total_xp, table)

    if args.json:
        _print_json(details.to_dict())
        return

    print(f"✓ {args.total_xp:,} XP resolves to level {details.level}")
    _print_details(details)


def cmd_xp_for_level(args):
    """Show the cumulative XP needed to reach a level."""
    table = _load_table(args)
    required = compute_xp_required_for_level(args.level, table)

    if args.json:
        _print_json({'level': args.level, 'xp_required': required})
        return

    print(f"✓ Level {args.level} starts at {required:,} XP")


def cmd_total(args):
    """Sum badge contributions and resolve the level."""
    table = _load_table(args)
    total_xp = compute_total_xp(args.contributions)
    details = compute_level_details(total_xp, table)

    if args.json:
        data = {'total_xp': total_xp}
        data.update(details.to_dict())
        _print_json(data)
        return

    print(f"✓ Total: {total_xp:,} XP from {len(args.contributions)} badges")
    _print_details(details)


def cmd_curve(args):
    """Print the progression table."""
    table = _load_table(args)

    if args.json:
        _print_json(table.to_dict())
        return

    print(f"Curve: {table.name} ({len(table)} tiers)\n")
    print(f"  {'Level':>5}  {'Starts at':>12}  {'Cost':>10}")
    for tier in table:
        print(f"  {tier.level:>5}  {tier.cumulative_xp_at_start:>12,}  {tier.xp_to_next_level:>10,}")
    print(f"\n  Level {table.last_level + 1}+ costs {table.tail_cost_per_level():,} XP each "
          f"(starting at {table.table_end:,} XP)")
    print(f"\nBuilt-in curves: {', '.join(get_curve_names())}")


def cmd_roster(args):
    """Summarize every hero in a roster document."""
    table = _load_table(args)
    heroes = _load_heroes(args)
    config = get_config()

    summaries = summarize_roster(heroes, table)
    global_total, global_details = global_level_details(summaries, table)
    minutes_played = sum(
        total_time_played_minutes(hero.challenges, config.minutes_per_time_level) for hero in heroes
    )

    if args.json:
        heroes_data = []
        for progress in summaries:
            data = progress.to_dict()
            data['personal_goal_percent'] = personal_goal_progress(progress, table)
            heroes_data.append(data)
        _print_json({
            'heroes': heroes_data,
            'global': dict(total_xp=global_total, **global_details.to_dict()),
            'time_played_minutes': minutes_played,
        })
        return

    if not summaries:
        print("No heroes found")
        return

    print(f"Found {len(summaries)} heroes:\n")
    for progress in summaries:
        goal = personal_goal_progress(progress, table)
        goal_text = f"  goal {goal:.0f}%" if goal is not None else ""
        print(f"  {progress.hero.name:20} Lv {progress.level:>4}  {progress.total_xp:>12,} XP  "
              f"({level_progress_percent(progress.details):.0f}%){goal_text}")

    print(f"\n  Global level: {global_details.level} ({global_total:,} XP)")
    print(f"  Time played: {format_duration(minutes_played)}")


def cmd_goal(args):
    """Show what a hero still needs for a target level."""
    table = _load_table(args)
    heroes = _load_heroes(args)
    config = get_config()

    result = find_hero(heroes, args.hero_id)
    if not result:
        _error(result.error)
    progress = summarize_hero(result.data, table)

    # Unusable targets (negative, NaN, zero) fall through to the next choice
    target = (as_non_negative_int(args.target_level)
              or as_non_negative_int(progress.hero.personal_goal_level)
              or config.max_level)
    remaining = xp_to_goal(progress.total_xp, target, table)
    badges = badges_needed_by_category(progress.total_xp, target, table)
    estimate = estimate_time_to_level(
        progress.total_xp, target, table,
        minutes_per_time_level=config.minutes_per_time_level
    )

    if args.json:
        _print_json({
            'hero': progress.to_dict(),
            'target_level': target,
            'xp_remaining': remaining,
            'badges_needed': {category.name.lower(): count for category, count in badges.items()},
            'time_estimate': estimate.to_dict(),
        })
        return

    print(f"{progress.hero.name}: level {progress.level} ({progress.total_xp:,} XP)")
    if remaining == 0:
        print(f"✓ Level {target} already reached")
        return

    print(f"  Target: level {target} ({remaining:,} XP to go)")
    print(f"  Badge levels needed:")
    for category in BadgeCategory:
        print(f"    {category.label:12} {badges[category]:>8,}")
    print(f"  Estimated time: {estimate.describe()}")


def cmd_milestones(args):
    """Show milestone levels on the road to max level."""
    table = _load_table(args)
    max_level = args.max_level or get_config().max_level
    details = compute_level_details(args.total_xp, table)
    markers = milestone_markers(
        details.level, args.total_xp,
        max_level=max_level,
        personal_goal_level=args.goal or 0,
        table=table
    )

    if args.json:
        _print_json([marker.to_dict() for marker in markers])
        return

    print(f"Level {details.level} of {max_level}:\n")
    for marker in markers:
        status = "✓" if marker.is_completed else " "
        goal = " [GOAL]" if marker.is_personal_goal else ""
        remaining = "" if marker.is_completed else f"  {marker.xp_remaining:,} XP to go"
        print(f"  {status} Lv {marker.level:>4}  {marker.position * 100:5.1f}%{remaining}{goal}")


def cmd_achievements(args):
    """Show which achievements a roster has unlocked."""
    table = _load_table(args)
    heroes = _load_heroes(args)
    config = get_config()

    summaries = summarize_roster(heroes, table)
    minutes_played = sum(
        total_time_played_minutes(hero.challenges, config.minutes_per_time_level) for hero in heroes
    )
    statuses = evaluate_achievements(summaries, minutes_played, table=table)

    if args.json:
        _print_json([status.to_dict() for status in statuses])
        return

    unlocked = sum(1 for status in statuses if status.unlocked)
    print(f"Unlocked {unlocked} of {len(statuses)} achievements:\n")
    for status in statuses:
        mark = "✓" if status.unlocked else " "
        print(f"  {mark} {status.rule.id:26} {status.rule.describe()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='herotracker',
        description='Hero Tracker - badge XP and level calculator'
    )
    parser.add_argument('--curve', help='Curve name or path to a JSON curve document')
    parser.add_argument('--log-level', help='Logging level (defaults to LOG_LEVEL or INFO)')
    parser.add_argument('--json', action='store_true', help='Print machine-readable JSON')
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # ========== calculation commands ==========
    parser_level = subparsers.add_parser('level', help='Resolve total XP into a level')
    parser_level.add_argument('total_xp', type=int, help='Total XP')
    parser_level.set_defaults(func=cmd_level)

    parser_xp = subparsers.add_parser('xp-for-level', help='XP needed to reach a level')
    parser_xp.add_argument('level', type=int, help='Target level')
    parser_xp.set_defaults(func=cmd_xp_for_level)

    parser_total = subparsers.add_parser('total', help='Sum badge contributions')
    parser_total.add_argument('contributions', nargs='+', type=parse_contribution,
                              metavar='LEVEL:XP_PER_LEVEL', help='Badge level and XP per level')
    parser_total.set_defaults(func=cmd_total)

    parser_curve = subparsers.add_parser('curve', help='Show the progression table')
    parser_curve.set_defaults(func=cmd_curve)

    parser_milestones = subparsers.add_parser('milestones', help='Show milestone levels')
    parser_milestones.add_argument('total_xp', type=int, help='Total XP')
    parser_milestones.add_argument('--goal', type=int, help='Personal goal level')
    parser_milestones.add_argument('--max-level', type=int, help='Level at the end of the road')
    parser_milestones.set_defaults(func=cmd_milestones)

    # ========== roster commands ==========
    parser_roster = subparsers.add_parser('roster', help='Summarize a roster document')
    parser_roster.add_argument('roster_file', nargs='?', help='Roster JSON (defaults to HEROTRACKER_ROSTER)')
    parser_roster.set_defaults(func=cmd_roster)

    parser_goal = subparsers.add_parser('goal', help='Show what a hero needs for a target level')
    parser_goal.add_argument('roster_file', help='Roster JSON')
    parser_goal.add_argument('hero_id', help='Hero ID')
    parser_goal.add_argument('--target-level', type=int,
                             help='Target level (defaults to the personal goal, then max level)')
    parser_goal.set_defaults(func=cmd_goal)

    parser_achievements = subparsers.add_parser('achievements', help='Show unlocked achievements')
    parser_achievements.add_argument('roster_file', nargs='?',
                                     help='Roster JSON (defaults to HEROTRACKER_ROSTER)')
    parser_achievements.set_defaults(func=cmd_achievements)

    return parser


def main(argv: List[str] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    setup_logging(
        level=args.log_level or config.log_level,
        log_file=config.log_file,
        use_colors=config.log_colors
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == '__main__':
    main()
