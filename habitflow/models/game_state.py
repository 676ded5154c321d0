"""Game state models: the per-user gamification record and operation results"""
from enum import Enum
from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from habitflow.config import DEFAULT_STREAK_SHIELDS
from habitflow.models.achievement import Achievement


class GameState(BaseModel):
    """
    In-memory gamification state for one user.

    `unlocked` maps achievement id -> unlock time; a locked achievement is
    simply absent.
    """
    xp: int = Field(default=0, ge=0)
    unlocked: dict[str, datetime] = Field(default_factory=dict)
    current_combo: int = Field(default=0, ge=0)
    max_combo: int = Field(default=0, ge=0)
    last_completion_date: Optional[str] = None  # ISO YYYY-MM-DD
    streak_shields: int = Field(default=DEFAULT_STREAK_SHIELDS, ge=0)
    sound_enabled: bool = True

    def to_record(self) -> dict[str, Any]:
        """Whole-record shape written to the record store"""
        return {
            "xp": self.xp,
            "unlocked_achievements": list(self.unlocked),
            "achievement_unlock_times": {
                achievement_id: at.isoformat() for achievement_id, at in self.unlocked.items()
            },
            "current_combo": self.current_combo,
            "max_combo": self.max_combo,
            "last_completion_date": self.last_completion_date,
            "streak_shields": self.streak_shields,
            "sound_enabled": self.sound_enabled,
        }

    @classmethod
    def from_record(
        cls,
        record: dict[str, Any],
        loaded_at: datetime,
        default_shields: int = DEFAULT_STREAK_SHIELDS,
    ) -> "GameState":
        """
        Build state from a stored record.

        Missing fields fall back to defaults. Unlocked achievements without a
        stored unlock time are stamped with `loaded_at`. max_combo is raised to
        current_combo if the record has it lower.

        Raises:
            pydantic.ValidationError / TypeError: record is malformed
        """
        unlock_times = record.get("achievement_unlock_times") or {}
        unlocked = {}
        for achievement_id in record.get("unlocked_achievements") or []:
            stamp = unlock_times.get(achievement_id)
            unlocked[achievement_id] = datetime.fromisoformat(stamp) if stamp else loaded_at

        current_combo = record.get("current_combo") or 0
        max_combo = max(record.get("max_combo") or 0, current_combo)
        shields = record.get("streak_shields")
        sound = record.get("sound_enabled")

        return cls(
            xp=record.get("xp") or 0,
            unlocked=unlocked,
            current_combo=current_combo,
            max_combo=max_combo,
            last_completion_date=record.get("last_completion_date"),
            streak_shields=default_shields if shields is None else shields,
            sound_enabled=True if sound is None else sound,
        )


class PersistStatus(str, Enum):
    """Whether an applied change also reached the record store"""
    APPLIED = "applied"
    APPLIED_BUT_PERSIST_FAILED = "applied_but_persist_failed"


class OperationResult(BaseModel):
    status: PersistStatus = PersistStatus.APPLIED

    @property
    def persisted(self) -> bool:
        return self.status == PersistStatus.APPLIED


class CompletionResult(OperationResult):
    """Rewards granted by one recorded completion"""
    xp_gained: int
    achievements_unlocked: list[Achievement] = Field(default_factory=list)
    combo: int = 0
    leveled_up: bool = False
    new_level: int = 1

    @property
    def achievement_ids(self) -> list[str]:
        return [a.id for a in self.achievements_unlocked]


class ShieldResult(OperationResult):
    """Truthy when a streak shield was consumed"""
    consumed: bool
    shields_remaining: int

    def __bool__(self) -> bool:
        return self.consumed


class XPProgress(BaseModel):
    """Progress through the current level"""
    current: int
    required: int
    percentage: int
