"""Pydantic models for habits, achievements and game state"""
from habitflow.models.achievement import Achievement, AchievementType
from habitflow.models.habit import Habit, HabitColor, HabitFrequency
from habitflow.models.game_state import (
    GameState,
    PersistStatus,
    OperationResult,
    CompletionResult,
    ShieldResult,
    XPProgress,
)

__all__ = [
    "Achievement",
    "AchievementType",
    "Habit",
    "HabitColor",
    "HabitFrequency",
    "GameState",
    "PersistStatus",
    "OperationResult",
    "CompletionResult",
    "ShieldResult",
    "XPProgress",
]
