"""
HabitService - Habit completion workflow

Ties habit completion toggles to the gamification engine and the daily
reward ledger, and provides the completion statistics shown next to each
habit.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel

from habitflow.gamification.engine import GamificationEngine
from habitflow.gamification.reward_ledger import RewardLedger
from habitflow.gamification.streak_system import max_current_streak, refresh_habit_streak
from habitflow.models.game_state import CompletionResult, OperationResult, PersistStatus
from habitflow.models.habit import Habit

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]  # date.weekday() order


class ToggleResult(BaseModel):
    """Outcome of toggling a habit on a date"""
    habit_id: str
    date: str
    completed: bool  # state after the toggle
    streak: int
    best_streak: int
    reward: Optional[CompletionResult] = None
    revert: Optional[OperationResult] = None
    ledger_status: PersistStatus = PersistStatus.APPLIED  # reward ledger write

    @property
    def xp_gained(self) -> int:
        return self.reward.xp_gained if self.reward else 0


class HabitService:
    """
    Service for habit completion toggles.

    Responsibilities:
    - Add/remove a completion date and recompute streaks
    - Reward only the first completion of a habit per day
    - Revoke exactly what was granted when a completion is undone
    - Completion statistics
    """

    def __init__(
        self,
        engine: GamificationEngine,
        ledger: RewardLedger,
        clock: Callable[[], datetime] = datetime.now,
        account_created_at: Optional[datetime] = None,
    ):
        self.engine = engine
        self.ledger = ledger
        self.clock = clock
        self.account_created_at = account_created_at

    def _today(self) -> date:
        return self.clock().date()

    async def toggle_completion(
        self,
        habit: Habit,
        habits: List[Habit],
        date_str: Optional[str] = None,
    ) -> ToggleResult:
        """
        Toggle `habit` complete/incomplete on a date (default today)

        Rewards and reverts only apply to today's completions; toggling a past
        date just edits history and recomputes the streak.

        Args:
            habit: Habit being toggled, updated in place
            habits: All of the user's habits (habit included)
            date_str: ISO date to toggle

        Returns:
            ToggleResult with the new completion state and any reward/revert

        Raises:
            StorageError: the reward ledger could not be read; nothing was changed
        """
        today = self._today()
        today_str = today.isoformat()
        date_str = date_str or today_str
        is_today = date_str == today_str

        if not habit.is_completed_on(date_str):
            reward = None
            ledger_status = PersistStatus.APPLIED
            if is_today and not await self.ledger.was_already_rewarded_today(habit.id):
                reward, ledger_status = await self._reward_completion(habit, habits, today_str)

            habit.completed_dates.append(date_str)
            refresh_habit_streak(habit, today)
            return ToggleResult(
                habit_id=habit.id,
                date=date_str,
                completed=True,
                streak=habit.streak,
                best_streak=habit.best_streak,
                reward=reward,
                ledger_status=ledger_status,
            )

        revert = None
        ledger_status = PersistStatus.APPLIED
        if is_today:
            xp_to_remove = await self.ledger.rewarded_xp(habit.id)
            achievements_to_revoke = await self.ledger.rewarded_achievements(habit.id)
            if xp_to_remove > 0 or achievements_to_revoke:
                revert = await self.engine.revert_completion(xp_to_remove, achievements_to_revoke)
            ledger_status = await self.ledger.unmark_rewarded(habit.id)

        habit.completed_dates.remove(date_str)
        refresh_habit_streak(habit, today)
        return ToggleResult(
            habit_id=habit.id,
            date=date_str,
            completed=False,
            streak=habit.streak,
            best_streak=habit.best_streak,
            revert=revert,
            ledger_status=ledger_status,
        )

    async def _reward_completion(
        self, habit: Habit, habits: List[Habit], today_str: str
    ) -> Tuple[CompletionResult, PersistStatus]:
        completed_after = self.completions_today(habits) + 1
        max_streak = max(max_current_streak(habits), habit.streak + 1)
        total_completions = sum(len(h.completed_dates) for h in habits) + 1

        account_age_days = None
        if self.account_created_at is not None:
            account_age_days = (self._today() - self.account_created_at.date()).days

        result = await self.engine.record_completion(
            completed_after,
            len(habits),
            max_streak,
            total_completions=total_completions,
            account_age_days=account_age_days,
        )
        ledger_status = await self.ledger.mark_rewarded(habit.id, result.xp_gained, result.achievement_ids)

        logger.info(
            f"Habit {habit.id} completed on {today_str}: +{result.xp_gained} XP, "
            f"{completed_after}/{len(habits)} done today"
        )
        return result, ledger_status

    def refresh_streaks(self, habits: List[Habit]) -> List[Habit]:
        """Recompute streak and best streak for every habit"""
        today = self._today()
        for habit in habits:
            refresh_habit_streak(habit, today)
        return habits

    # ==========================================
    # Statistics
    # ==========================================

    def completion_rate(self, habit: Habit, days: int) -> int:
        """Percentage of the last `days` days (today included) the habit was completed"""
        if days <= 0:
            return 0
        today = self._today()
        completed = sum(
            1 for i in range(days) if habit.is_completed_on((today - timedelta(days=i)).isoformat())
        )
        return round(completed / days * 100)

    def completions_today(self, habits: List[Habit]) -> int:
        today_str = self._today().isoformat()
        return sum(1 for h in habits if h.is_completed_on(today_str))

    def weekly_data(self, habits: List[Habit]) -> List[Dict[str, Any]]:
        """Completions per day for the last 7 days, oldest first"""
        today = self._today()
        data = []
        for i in range(6, -1, -1):
            day = today - timedelta(days=i)
            day_str = day.isoformat()
            data.append({
                "day": WEEKDAY_LABELS[day.weekday()],
                "date": day_str,
                "completed": sum(1 for h in habits if h.is_completed_on(day_str)),
                "total": len(habits),
            })
        return data

    def monthly_data(self, habits: List[Habit]) -> List[Dict[str, Any]]:
        """Completions per week for the last 4 weeks, oldest first"""
        today = self._today()
        data = []
        for week in range(3, -1, -1):
            completed = 0
            total = 0
            for day in range(7):
                day_str = (today - timedelta(days=week * 7 + day)).isoformat()
                completed += sum(1 for h in habits if h.is_completed_on(day_str))
                total += len(habits)
            data.append({
                "week": f"Week {4 - week}",
                "completed": completed,
                "total": total,
            })
        return data
