"""Unit tests for Achievement System (habitflow/gamification/achievement_system.py)"""
import pytest
from dataclasses import replace
from datetime import datetime

from habitflow.gamification.achievement_catalog import ACHIEVEMENTS, ACHIEVEMENTS_BY_ID, get_achievement
from habitflow.gamification.achievement_system import (
    UNLOCK_PREDICATES,
    EvaluationContext,
    find_new_unlocks,
    split_by_status,
)
from habitflow.models.achievement import AchievementType



def _context(**overrides) -> EvaluationContext:
    """First completion of a single habit, Monday at noon"""
    base = EvaluationContext(
        max_streak=1,
        completed_today=1,
        total_habits=1,
        combo=1,
        level=1,
        xp=0,
        hour=12,
        weekday=0,
    )
    return replace(base, **overrides)


def _ids(achievements):
    return [a.id for a in achievements]


# ============================================================================
# Catalog Tests
# ============================================================================

def test_catalog_ids_unique():
    assert len(ACHIEVEMENTS) == 109
    assert len(ACHIEVEMENTS_BY_ID) == len(ACHIEVEMENTS)


def test_every_achievement_has_a_predicate():
    assert set(UNLOCK_PREDICATES) == set(ACHIEVEMENTS_BY_ID)


def test_get_achievement():
    first = get_achievement("first_habit")

    assert first.name == "First Step"
    assert first.xp_reward == 50
    assert first.type == AchievementType.COMPLETIONS

    with pytest.raises(KeyError):
        get_achievement("does_not_exist")


# ============================================================================
# Unlock Rule Tests
# ============================================================================

def test_first_completion_unlocks_first_habit_and_perfect_day():
    assert _ids(find_new_unlocks([], _context())) == ["first_habit", "perfect_day"]


def test_already_unlocked_not_returned_again():
    unlocked = find_new_unlocks(["first_habit", "perfect_day"], _context())

    assert unlocked == []


def test_results_in_catalog_order():
    ctx = _context(max_streak=7, combo=3, completed_today=3, total_habits=3, hour=23, weekday=6)
    ids = _ids(find_new_unlocks([], ctx))

    catalog_order = [a.id for a in ACHIEVEMENTS]
    assert ids == sorted(ids, key=catalog_order.index)
    assert {"first_habit", "streak_3", "streak_7", "combo_3", "night_owl",
            "perfect_day", "weekend_warrior", "habits_3"} == set(ids)


def test_perfect_day_requires_all_habits():
    assert "perfect_day" not in _ids(find_new_unlocks([], _context(completed_today=1, total_habits=2)))


def test_perfect_day_and_week_never_with_zero_habits():
    ids = _ids(find_new_unlocks([], _context(completed_today=0, total_habits=0)))

    assert "perfect_day" not in ids
    assert "perfect_week" not in ids


def test_perfect_week():
    ids = _ids(find_new_unlocks([], _context(completed_today=7, total_habits=1)))
    assert "perfect_week" in ids


def test_early_bird_before_eight():
    assert "early_bird" in _ids(find_new_unlocks([], _context(hour=7)))
    assert "early_bird" not in _ids(find_new_unlocks([], _context(hour=8)))


def test_night_owl_from_ten_pm():
    assert "night_owl" in _ids(find_new_unlocks([], _context(hour=22)))
    assert "night_owl" not in _ids(find_new_unlocks([], _context(hour=21)))


def test_weekend_warrior_saturday_and_sunday():
    assert "weekend_warrior" in _ids(find_new_unlocks([], _context(weekday=5)))
    assert "weekend_warrior" in _ids(find_new_unlocks([], _context(weekday=6)))
    assert "weekend_warrior" not in _ids(find_new_unlocks([], _context(weekday=4)))


def test_streak_family_thresholds():
    ids = _ids(find_new_unlocks([], _context(max_streak=7)))

    assert "streak_3" in ids
    assert "streak_7" in ids
    assert "streak_14" not in ids


def test_streak_beyond_a_year():
    ids = _ids(find_new_unlocks([], _context(max_streak=400)))

    assert "streak_365" in ids
    assert "streak_500" not in ids


def test_combo_family():
    ids = _ids(find_new_unlocks([], _context(combo=5)))

    assert "combo_3" in ids
    assert "combo_5" in ids
    assert "combo_10" not in ids


def test_habit_count_family():
    ids = _ids(find_new_unlocks([], _context(total_habits=5, completed_today=1)))

    assert "habits_3" in ids
    assert "habits_5" in ids
    assert "habits_7" not in ids


def test_level_and_xp_families_use_given_values():
    ids = _ids(find_new_unlocks([], _context(level=5, xp=1000)))

    assert "level_5" in ids
    assert "level_10" not in ids
    assert "xp_1000" in ids
    assert "xp_5000" not in ids


def test_completion_family_needs_total_completions():
    assert "getting_started" not in _ids(find_new_unlocks([], _context()))
    assert "getting_started" in _ids(find_new_unlocks([], _context(total_completions=10)))


def test_anniversaries_need_account_age():
    assert "anniversary_1month" not in _ids(find_new_unlocks([], _context()))

    ids = _ids(find_new_unlocks([], _context(account_age_days=30)))
    assert "anniversary_1month" in ids
    assert "anniversary_3month" not in ids


def test_custom_predicates_override_table():
    predicates = {"first_habit": lambda ctx: False}

    assert find_new_unlocks([], _context(), predicates=predicates) == []


# ============================================================================
# Status Split Tests
# ============================================================================

def test_split_by_status():
    at = datetime(2024, 1, 15, 12, 0)

    unlocked, locked = split_by_status({"perfect_day": at, "first_habit": at})

    assert _ids(unlocked) == ["first_habit", "perfect_day"]
    assert all(a.unlocked_at == at for a in unlocked)
    assert len(locked) == len(ACHIEVEMENTS) - 2
    assert not any(a.is_unlocked for a in locked)
