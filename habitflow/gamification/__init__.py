"""
Gamification system for habitflow

- XP and leveling curve
- Per-habit streaks
- Achievement catalog and unlock rules
- Daily reward ledger
- GamificationEngine: one user's game state
"""

from habitflow.gamification.xp_system import level_from_xp, xp_progress, level_title
from habitflow.gamification.streak_system import calculate_streak, refresh_habit_streak
from habitflow.gamification.achievement_catalog import ACHIEVEMENTS, get_achievement
from habitflow.gamification.achievement_system import EvaluationContext, find_new_unlocks
from habitflow.gamification.reward_ledger import RewardLedger
from habitflow.gamification.engine import GamificationEngine

__all__ = [
    "level_from_xp",
    "xp_progress",
    "level_title",
    "calculate_streak",
    "refresh_habit_streak",
    "ACHIEVEMENTS",
    "get_achievement",
    "EvaluationContext",
    "find_new_unlocks",
    "RewardLedger",
    "GamificationEngine",
]
