"""
Service Layer Package

- HabitService: completion toggles, reward/revert bookkeeping, statistics
- ServiceContainer: per-user session wiring
"""

from habitflow.services.habit_service import HabitService, ToggleResult
from habitflow.services.container import HabitSession, ServiceContainer

__all__ = [
    "HabitService",
    "ToggleResult",
    "HabitSession",
    "ServiceContainer",
]
