"""
Achievement System

Decides which locked achievements a completion unlocks.

Every catalog entry is bound once, at import, to an unlock predicate over
an EvaluationContext. Predicates are chosen by id for the one-off special
achievements, by id prefix for the level/XP/anniversary families and by
achievement type for everything else:

- completions: total completions so far (first_habit always unlocks)
- streak: best current streak across habits
- habits: number of habits tracked
- combo: completions in a row today
- level_N / xp_N: level and XP *before* the completion being recorded
- anniversary_*: account age in days
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional
import logging

from habitflow.models.achievement import Achievement, AchievementType
from habitflow.gamification.achievement_catalog import ACHIEVEMENTS

logger = logging.getLogger(__name__)

EARLY_BIRD_BEFORE_HOUR = 8
NIGHT_OWL_FROM_HOUR = 22
SATURDAY, SUNDAY = 5, 6  # date.weekday()


@dataclass(frozen=True)
class EvaluationContext:
    """Inputs an unlock predicate may look at"""
    max_streak: int
    completed_today: int
    total_habits: int
    combo: int
    level: int
    xp: int
    hour: int
    weekday: int  # Monday=0 .. Sunday=6
    total_completions: Optional[int] = None
    account_age_days: Optional[int] = None


Predicate = Callable[[EvaluationContext], bool]


def _never(ctx: EvaluationContext) -> bool:
    return False


def _special_predicates() -> Dict[str, Predicate]:
    return {
        "first_habit": lambda ctx: True,
        "perfect_day": lambda ctx: ctx.completed_today >= ctx.total_habits and ctx.total_habits > 0,
        "perfect_week": lambda ctx: ctx.completed_today >= ctx.total_habits * 7 and ctx.total_habits > 0,
        "early_bird": lambda ctx: ctx.hour < EARLY_BIRD_BEFORE_HOUR,
        "night_owl": lambda ctx: ctx.hour >= NIGHT_OWL_FROM_HOUR,
        "weekend_warrior": lambda ctx: ctx.weekday in (SATURDAY, SUNDAY) and ctx.completed_today > 0,
    }


def _threshold_predicate(achievement: Achievement) -> Predicate:
    """Predicate for achievements that differ only by requirement"""
    required = achievement.requirement

    if achievement.id.startswith("level_"):
        return lambda ctx: ctx.level >= required
    if achievement.id.startswith("xp_"):
        return lambda ctx: ctx.xp >= required
    if achievement.id.startswith("anniversary_"):
        return lambda ctx: ctx.account_age_days is not None and ctx.account_age_days >= required

    if achievement.type == AchievementType.STREAK:
        return lambda ctx: ctx.max_streak >= required
    if achievement.type == AchievementType.COMBO:
        return lambda ctx: ctx.combo >= required
    if achievement.type == AchievementType.HABITS:
        return lambda ctx: ctx.total_habits >= required
    if achievement.type == AchievementType.COMPLETIONS:
        return lambda ctx: ctx.total_completions is not None and ctx.total_completions >= required

    logger.warning(f"No unlock rule for achievement {achievement.id}; it can only be granted manually")
    return _never


def build_predicate_table(achievements: Iterable[Achievement]) -> Dict[str, Predicate]:
    """Map each achievement id to its unlock predicate"""
    special = _special_predicates()
    table = {}
    for achievement in achievements:
        table[achievement.id] = special.get(achievement.id) or _threshold_predicate(achievement)
    return table


UNLOCK_PREDICATES: Dict[str, Predicate] = build_predicate_table(ACHIEVEMENTS)


def find_new_unlocks(
    unlocked_ids: Iterable[str],
    context: EvaluationContext,
    catalog: Iterable[Achievement] = ACHIEVEMENTS,
    predicates: Optional[Dict[str, Predicate]] = None,
) -> List[Achievement]:
    """
    Locked achievements whose predicate holds, in catalog order

    Args:
        unlocked_ids: Ids the user already has
        context: Evaluation inputs for this completion
        catalog: Achievement definitions to consider
        predicates: Override of the predicate table (tests)

    Returns:
        Catalog entries (not yet stamped with an unlock time)
    """
    table = predicates if predicates is not None else UNLOCK_PREDICATES
    already = set(unlocked_ids)

    newly_unlocked = []
    for achievement in catalog:
        if achievement.id in already:
            continue
        predicate = table.get(achievement.id, _never)
        if predicate(context):
            newly_unlocked.append(achievement)

    return newly_unlocked


def split_by_status(
    unlocked: Dict[str, datetime],
    catalog: Iterable[Achievement] = ACHIEVEMENTS,
) -> tuple[List[Achievement], List[Achievement]]:
    """
    Partition the catalog into (unlocked, locked), both in catalog order

    Unlocked entries carry their unlock time.
    """
    unlocked_list = []
    locked_list = []
    for achievement in catalog:
        at = unlocked.get(achievement.id)
        if at is not None:
            unlocked_list.append(achievement.unlocked(at))
        else:
            locked_list.append(achievement)
    return unlocked_list, locked_list
