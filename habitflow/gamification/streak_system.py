"""
Habit Streak Calculator

A habit's streak is the number of consecutive calendar days, walking
backward from today, on which the habit was completed.

Rules:
- Today not completed yet does not break the streak: the walk starts at
  yesterday instead
- Any other missing day ends the walk
- Best streak is max(previous best, current) and never decreases

Dates are ISO YYYY-MM-DD strings and are compared as strings.
"""

from typing import Iterable, Optional
from datetime import date, timedelta
import logging

from habitflow.models.habit import Habit

logger = logging.getLogger(__name__)


def calculate_streak(completed_dates: Iterable[str], today: Optional[date] = None) -> int:
    """
    Count consecutive completed days ending today (or yesterday)

    Args:
        completed_dates: ISO dates the habit was completed on
        today: Caller's local calendar day (defaults to date.today())

    Returns:
        Current streak length, 0 if the habit has no run reaching yesterday
    """
    if today is None:
        today = date.today()

    completed = set(completed_dates)
    if not completed:
        return 0

    streak = 0
    cursor = today
    if cursor.isoformat() not in completed:
        cursor -= timedelta(days=1)

    # Bounded by the number of completed dates
    while cursor.isoformat() in completed:
        streak += 1
        cursor -= timedelta(days=1)

    return streak


def update_best_streak(previous_best: int, current: int) -> int:
    return max(previous_best, current)


def refresh_habit_streak(habit: Habit, today: Optional[date] = None) -> Habit:
    """Recompute a habit's streak and best streak in place"""
    old_streak = habit.streak
    habit.streak = calculate_streak(habit.completed_dates, today)
    habit.best_streak = update_best_streak(habit.best_streak, habit.streak)

    if habit.streak != old_streak:
        logger.debug(f"Habit {habit.id} streak {old_streak} → {habit.streak} (best {habit.best_streak})")

    return habit


def max_current_streak(habits: Iterable[Habit]) -> int:
    """Highest current streak across habits, 0 when there are none"""
    return max((h.streak for h in habits), default=0)
