"""
Gamification Engine

Owns one user's XP, combo, streak shields, sound preference and achievement
unlocks.

Every mutating operation computes the new state in memory, applies it, and
then writes the whole record to the record store. A failed write is logged
and the in-memory state stays authoritative for the session; the result's
`status` tells the caller whether the change reached the store.

When started, the engine subscribes to change events for its user and
reloads the whole record on each one (last writer wins, no merge). A
reload that lands while a local write is in flight can overwrite it.
"""

from datetime import datetime
from typing import Callable, List, Optional, Sequence
import logging

from habitflow.config import DEFAULT_STREAK_SHIELDS
from habitflow.db.store import RecordStore, Unsubscribe
from habitflow.exceptions import StorageError
from habitflow.gamification.achievement_catalog import ACHIEVEMENTS
from habitflow.gamification.achievement_system import (
    EvaluationContext,
    find_new_unlocks,
    split_by_status,
)
from habitflow.gamification.quotes import Quote, get_daily_quote
from habitflow.gamification.xp_system import (
    calculate_completion_xp,
    level_from_xp,
    level_title,
    xp_progress,
)
from habitflow.models.achievement import Achievement
from habitflow.models.game_state import (
    CompletionResult,
    GameState,
    OperationResult,
    PersistStatus,
    ShieldResult,
    XPProgress,
)
from habitflow.observability import metrics

logger = logging.getLogger(__name__)


class GamificationEngine:
    """
    Gamification state machine bound to a single user.

    Args:
        user_id: Owner of the game state record
        store: Record store holding the persisted game state
        clock: Source of the current local time
        catalog: Achievement definitions, in display/unlock order
        default_shields: Streak shields granted to a new user
    """

    def __init__(
        self,
        user_id: str,
        store: RecordStore,
        clock: Callable[[], datetime] = datetime.now,
        catalog: Sequence[Achievement] = ACHIEVEMENTS,
        default_shields: int = DEFAULT_STREAK_SHIELDS,
    ):
        self.user_id = user_id
        self.store = store
        self.clock = clock
        self.catalog = catalog
        self.default_shields = default_shields
        self.state = self._default_state()
        self._unsubscribe: Optional[Unsubscribe] = None

    def _default_state(self) -> GameState:
        return GameState(streak_shields=self.default_shields)

    # ==========================================
    # Lifecycle
    # ==========================================

    async def load(self, reason: str = "initial") -> GameState:
        """
        Replace in-memory state with the stored record

        A missing or malformed record is treated as a new user: state is
        reset to defaults and a default record is written. If the store
        cannot be read, the current in-memory state is kept.
        """
        try:
            record = await self.store.get(self.user_id)
        except StorageError as e:
            logger.warning(f"Could not load game state for user {self.user_id}, keeping local state: {e}")
            return self.state

        if record is None:
            logger.info(f"No game state for user {self.user_id}, creating default record")
            self.state = self._default_state()
            metrics.state_reloads_total.labels(reason="new_user").inc()
            await self._persist("create_game_state")
            return self.state

        try:
            self.state = GameState.from_record(record, self.clock(), self.default_shields)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Malformed game state for user {self.user_id}, resetting to defaults: {e}")
            self.state = self._default_state()
            metrics.state_reloads_total.labels(reason="malformed").inc()
            await self._persist("create_game_state")
            return self.state

        metrics.state_reloads_total.labels(reason=reason).inc()
        logger.debug(f"Loaded game state for user {self.user_id}: xp={self.state.xp}")
        return self.state

    async def start(self) -> None:
        """Load state and follow remote changes to the record"""
        await self.load()
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self.user_id, self._on_remote_change)

    async def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_remote_change(self, user_id: str) -> None:
        logger.debug(f"Game state changed remotely for user {user_id}, reloading")
        await self.load(reason="remote_change")

    async def _persist(self, operation: str) -> PersistStatus:
        try:
            await self.store.upsert(self.user_id, self.state.to_record())
        except StorageError as e:
            metrics.persist_failures_total.labels(operation=operation).inc()
            logger.error(
                f"Failed to persist game state for user {self.user_id} during {operation}; "
                f"keeping in-memory state: {e}",
                exc_info=True,
            )
            return PersistStatus.APPLIED_BUT_PERSIST_FAILED
        return PersistStatus.APPLIED

    # ==========================================
    # Operations
    # ==========================================

    async def record_completion(
        self,
        completed_habits_today: int,
        total_habits: int,
        max_streak_across_habits: int,
        total_completions: Optional[int] = None,
        account_age_days: Optional[int] = None,
    ) -> CompletionResult:
        """
        Reward one habit completion

        Args:
            completed_habits_today: Habits completed today, this one included
            total_habits: Habits the user tracks
            max_streak_across_habits: Highest current streak over all habits
            total_completions: Lifetime completions, if the caller tracks them
            account_age_days: Days since sign-up, if known

        Returns:
            CompletionResult with XP gained and achievements unlocked (catalog order)
        """
        now = self.clock()
        today = now.date().isoformat()
        state = self.state

        is_new_day = state.last_completion_date != today
        combo = 1 if is_new_day else state.current_combo + 1
        old_level = level_from_xp(state.xp)

        context = EvaluationContext(
            max_streak=max_streak_across_habits,
            completed_today=completed_habits_today,
            total_habits=total_habits,
            combo=combo,
            level=old_level,
            xp=state.xp,
            hour=now.hour,
            weekday=now.weekday(),
            total_completions=total_completions,
            account_age_days=account_age_days,
        )
        new_achievements = [a.unlocked(now) for a in find_new_unlocks(state.unlocked, context, self.catalog)]

        base_xp, combo_bonus = calculate_completion_xp(combo)
        achievement_xp = sum(a.xp_reward for a in new_achievements)
        xp_gained = base_xp + combo_bonus + achievement_xp

        state.xp += xp_gained
        state.current_combo = combo
        state.max_combo = max(state.max_combo, combo)
        state.last_completion_date = today
        for achievement in new_achievements:
            state.unlocked[achievement.id] = now

        new_level = level_from_xp(state.xp)
        status = await self._persist("record_completion")

        metrics.completions_recorded_total.inc()
        metrics.xp_awarded_total.inc(xp_gained)
        for achievement in new_achievements:
            metrics.achievements_unlocked_total.labels(achievement_id=achievement.id).inc()
            logger.info(
                f"User {self.user_id} unlocked achievement: {achievement.id} "
                f"({achievement.name}) +{achievement.xp_reward} XP"
            )

        logger.info(
            f"Recorded completion for user {self.user_id}: +{xp_gained} XP "
            f"(base {base_xp}, combo x{combo} +{combo_bonus}, achievements +{achievement_xp}). "
            f"Total: {state.xp} XP, Level: {new_level}"
        )
        if new_level > old_level:
            logger.info(f"User {self.user_id} leveled up from {old_level} to {new_level}!")

        return CompletionResult(
            xp_gained=xp_gained,
            achievements_unlocked=new_achievements,
            combo=combo,
            leveled_up=new_level > old_level,
            new_level=new_level,
            status=status,
        )

    async def revert_completion(self, xp_to_remove: int, achievement_ids: Sequence[str]) -> OperationResult:
        """
        Undo one completion's rewards

        XP and combo are floored at 0. Listed achievements that are unlocked
        are locked again. max_combo, last_completion_date and streak shields
        are left as they are.
        """
        state = self.state
        state.xp = max(0, state.xp - xp_to_remove)
        state.current_combo = max(0, state.current_combo - 1)

        revoked = [a for a in achievement_ids if a in state.unlocked]
        for achievement_id in revoked:
            del state.unlocked[achievement_id]

        status = await self._persist("revert_completion")
        metrics.completions_reverted_total.inc()

        logger.info(
            f"Reverted completion for user {self.user_id}: -{xp_to_remove} XP, "
            f"revoked {revoked or 'no achievements'}. Total: {state.xp} XP"
        )
        return OperationResult(status=status)

    async def use_streak_shield(self) -> ShieldResult:
        """
        Consume one streak shield if any remain

        Only the counter changes; protecting a streak is up to the caller.
        """
        state = self.state
        if state.streak_shields <= 0:
            return ShieldResult(consumed=False, shields_remaining=0)

        state.streak_shields -= 1
        status = await self._persist("use_streak_shield")
        metrics.streak_shields_used_total.inc()
        logger.info(f"User {self.user_id} used a streak shield, {state.streak_shields} remaining")

        return ShieldResult(consumed=True, shields_remaining=state.streak_shields, status=status)

    async def toggle_sound(self) -> OperationResult:
        self.state.sound_enabled = not self.state.sound_enabled
        status = await self._persist("toggle_sound")
        return OperationResult(status=status)

    # ==========================================
    # Derived values
    # ==========================================

    def get_level(self) -> int:
        return level_from_xp(self.state.xp)

    def get_level_title(self) -> str:
        return level_title(self.get_level())

    def get_xp_progress(self) -> XPProgress:
        return xp_progress(self.state.xp)

    def get_unlocked_achievements(self) -> List[Achievement]:
        unlocked, _ = split_by_status(self.state.unlocked, self.catalog)
        return unlocked

    def get_locked_achievements(self) -> List[Achievement]:
        _, locked = split_by_status(self.state.unlocked, self.catalog)
        return locked

    def get_daily_quote(self) -> Quote:
        return get_daily_quote(self.clock().date())
