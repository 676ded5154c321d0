"""
Daily Reward Ledger

Remembers, per user and per calendar day, what each habit's completion
was rewarded with. A habit toggled complete/incomplete several times in a
day is only rewarded on the first completion, and un-completing it revokes
exactly what was granted.

The stored document carries the date it belongs to. A document from any
other day reads as empty, so the ledger resets on first access after
midnight without a timer.

A failed write is logged and the intended document is kept in memory;
until a later write succeeds, this ledger reads from that copy so the
session never grants or revokes the same reward twice. Read failures
propagate.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import copy
import logging

from habitflow.cache.ledger_store import LedgerBackend
from habitflow.config import LEDGER_KEY_PREFIX
from habitflow.exceptions import StorageError
from habitflow.models.game_state import PersistStatus
from habitflow.observability import metrics

logger = logging.getLogger(__name__)


class RewardLedger:
    """Reward bookkeeping for one user"""

    def __init__(
        self,
        user_id: str,
        backend: LedgerBackend,
        clock: Callable[[], datetime] = datetime.now,
        key_prefix: str = LEDGER_KEY_PREFIX,
    ):
        self.user_id = user_id
        self.backend = backend
        self.clock = clock
        self.key = f"{key_prefix}:{user_id}"
        self._unsynced: Optional[Dict[str, Any]] = None

    def _today(self) -> str:
        return self.clock().date().isoformat()

    @property
    def has_unsynced_changes(self) -> bool:
        return self._unsynced is not None and self._unsynced["date"] == self._today()

    async def _rewards_today(self) -> Dict[str, Dict[str, Any]]:
        if self.has_unsynced_changes:
            return copy.deepcopy(self._unsynced["rewards"])

        document = await self.backend.load(self.key)
        if not document or document.get("date") != self._today():
            return {}
        return document.get("rewards") or {}

    async def _save(self, rewards: Dict[str, Dict[str, Any]], operation: str) -> PersistStatus:
        document = {"date": self._today(), "rewards": rewards}
        try:
            await self.backend.save(self.key, document)
        except StorageError as e:
            self._unsynced = document
            metrics.persist_failures_total.labels(operation=operation).inc()
            logger.error(
                f"Failed to save reward ledger for user {self.user_id} during {operation}; "
                f"keeping it in memory: {e}",
                exc_info=True,
            )
            return PersistStatus.APPLIED_BUT_PERSIST_FAILED

        self._unsynced = None
        return PersistStatus.APPLIED

    async def was_already_rewarded_today(self, habit_id: str) -> bool:
        return habit_id in await self._rewards_today()

    async def mark_rewarded(
        self,
        habit_id: str,
        xp: int,
        achievement_ids: Optional[List[str]] = None,
    ) -> PersistStatus:
        """Record a habit's reward for today; the first write of the day wins"""
        rewards = await self._rewards_today()
        if habit_id in rewards:
            logger.debug(f"Habit {habit_id} already rewarded today for user {self.user_id}")
            return PersistStatus.APPLIED

        rewards[habit_id] = {"xp": xp, "achievements": list(achievement_ids or [])}
        status = await self._save(rewards, "mark_rewarded")
        logger.debug(f"Marked habit {habit_id} rewarded for user {self.user_id}: {xp} XP")
        return status

    async def unmark_rewarded(self, habit_id: str) -> PersistStatus:
        rewards = await self._rewards_today()
        rewards.pop(habit_id, None)
        return await self._save(rewards, "unmark_rewarded")

    async def rewarded_xp(self, habit_id: str) -> int:
        entry = (await self._rewards_today()).get(habit_id)
        return entry.get("xp", 0) if entry else 0

    async def rewarded_achievements(self, habit_id: str) -> List[str]:
        entry = (await self._rewards_today()).get(habit_id)
        return list(entry.get("achievements", [])) if entry else []
