"""Global test fixtures for habitflow tests"""
import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from habitflow.cache.ledger_store import InMemoryLedgerBackend
from habitflow.db.store import InMemoryRecordStore
from habitflow.exceptions import StoreWriteError
from habitflow.gamification.engine import GamificationEngine
from habitflow.gamification.reward_ledger import RewardLedger
from habitflow.models.habit import Habit
from habitflow.services.habit_service import HabitService


# ============================================================================
# Clock Fixtures
# ============================================================================

class FakeClock:
    """Settable stand-in for datetime.now"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    """Monday 2024-01-15 at noon"""
    return FakeClock(datetime(2024, 1, 15, 12, 0))


# ============================================================================
# User Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "user-123"


# ============================================================================
# Storage Fixtures
# ============================================================================

@pytest.fixture
def record_store():
    return InMemoryRecordStore()


@pytest.fixture
def ledger_backend():
    return InMemoryLedgerBackend()


@pytest.fixture
def failing_store():
    """Record store whose writes always fail"""
    store = MagicMock()
    store.get = AsyncMock(return_value=None)
    store.upsert = AsyncMock(side_effect=StoreWriteError("disk full"))
    store.subscribe = MagicMock(return_value=lambda: None)
    return store


# ============================================================================
# Engine & Service Fixtures
# ============================================================================

@pytest.fixture
def engine(test_user_id, record_store, clock):
    return GamificationEngine(test_user_id, record_store, clock=clock)


@pytest.fixture
def ledger(test_user_id, ledger_backend, clock):
    return RewardLedger(test_user_id, ledger_backend, clock=clock)


@pytest.fixture
def habit_service(engine, ledger, clock):
    return HabitService(engine, ledger, clock=clock)


@pytest.fixture
def make_habit():
    """Factory for habits with a given completion history"""
    def _make(name: str = "Drink water", completed_dates=None, **kwargs) -> Habit:
        return Habit(name=name, completed_dates=list(completed_dates or []), **kwargs)
    return _make
