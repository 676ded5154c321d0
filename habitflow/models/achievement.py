"""Achievement models for gamification"""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class AchievementType(str, Enum):
    """What an achievement's requirement is measured against"""
    COMPLETIONS = "completions"  # total habits completed
    STREAK = "streak"  # consecutive days on a single habit
    HABITS = "habits"  # number of habits tracked
    COMBO = "combo"  # completions in a row within a day
    SPECIAL = "special"  # anything else (time of day, levels, XP, anniversaries)


class Achievement(BaseModel):
    """Achievement definition, or a user's view of one when unlocked_at is set"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    requirement: int
    type: AchievementType
    xp_reward: int
    unlocked_at: Optional[datetime] = None

    @property
    def is_unlocked(self) -> bool:
        return self.unlocked_at is not None

    def unlocked(self, at: datetime) -> "Achievement":
        """Copy of this achievement stamped with an unlock time"""
        return self.model_copy(update={"unlocked_at": at})
