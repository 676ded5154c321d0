"""
Service Container - per-user wiring

Holds the shared infrastructure (record store, ledger backend, clock) and
builds one HabitSession per signed-in user. There is no process-wide
"current user": every engine, ledger and service is bound to the user it
was created for.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Optional
import logging

from habitflow.cache.ledger_store import LedgerBackend
from habitflow.db.store import RecordStore
from habitflow.gamification.engine import GamificationEngine
from habitflow.gamification.reward_ledger import RewardLedger
from habitflow.services.habit_service import HabitService

logger = logging.getLogger(__name__)


@dataclass
class HabitSession:
    """Everything one signed-in user needs"""
    user_id: str
    engine: GamificationEngine
    ledger: RewardLedger
    habits: HabitService


@dataclass
class ServiceContainer:
    """
    Builds and caches user sessions over shared infrastructure.

    Sessions are started (state loaded, change feed subscribed) on first
    access and stopped by close_session()/close().
    """

    record_store: RecordStore
    ledger_backend: LedgerBackend
    clock: Callable[[], datetime] = datetime.now

    _sessions: Dict[str, HabitSession] = field(default_factory=dict, init=False, repr=False)

    async def session(self, user_id: str, account_created_at: Optional[datetime] = None) -> HabitSession:
        """Get the user's session, starting it on first use"""
        existing = self._sessions.get(user_id)
        if existing is not None:
            return existing

        engine = GamificationEngine(user_id, self.record_store, clock=self.clock)
        ledger = RewardLedger(user_id, self.ledger_backend, clock=self.clock)
        habits = HabitService(engine, ledger, clock=self.clock, account_created_at=account_created_at)

        await engine.start()
        session = HabitSession(user_id=user_id, engine=engine, ledger=ledger, habits=habits)
        self._sessions[user_id] = session
        logger.debug(f"Started session for user {user_id}")
        return session

    async def close_session(self, user_id: str) -> None:
        session = self._sessions.pop(user_id, None)
        if session is not None:
            await session.engine.stop()
            logger.debug(f"Closed session for user {user_id}")

    async def close(self) -> None:
        for user_id in list(self._sessions):
            await self.close_session(user_id)
