"""Habit models"""
from enum import Enum
from datetime import datetime
from uuid import uuid4
from pydantic import BaseModel, Field, field_validator


class HabitColor(str, Enum):
    """Fixed palette a habit card can use"""
    PURPLE = "purple"
    PINK = "pink"
    BLUE = "blue"
    GREEN = "green"
    ORANGE = "orange"
    TEAL = "teal"


class HabitFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"  # accepted, not used by streak logic


class Habit(BaseModel):
    """A user's habit with its completion history"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    description: str = ""
    icon: str = "✨"
    color: HabitColor = HabitColor.PURPLE
    frequency: HabitFrequency = HabitFrequency.DAILY
    target_days: list[int] = Field(default_factory=lambda: list(range(7)))  # 0=Sunday
    completed_dates: list[str] = Field(default_factory=list)  # ISO YYYY-MM-DD, unique
    streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator('target_days')
    @classmethod
    def validate_target_days(cls, v: list[int]) -> list[int]:
        """Weekday indices must be 0-6"""
        for day in v:
            if day < 0 or day > 6:
                raise ValueError(f"Invalid weekday index: {day}")
        return sorted(set(v))

    @field_validator('completed_dates')
    @classmethod
    def dedupe_completed_dates(cls, v: list[str]) -> list[str]:
        seen = set()
        unique = []
        for d in v:
            if d not in seen:
                seen.add(d)
                unique.append(d)
        return unique

    def is_completed_on(self, date_str: str) -> bool:
        return date_str in self.completed_dates
