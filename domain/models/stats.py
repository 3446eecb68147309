"""
Cumulative user stats.

Part of RQ-104: Leveling and stat persistence

One ``UserStats`` document exists per user. It only ever grows through
additive deltas; ``version`` is bumped on every write so concurrent
finishes can be detected with compare-and-swap.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field

from domain.models.muscle_group import MUSCLE_GROUPS, MuscleGroup


class StatField(str, Enum):
    """Stat columns an achievement rule may reference."""

    LEVEL = "level"
    XP = "xp"
    GOLD = "gold"
    CHEST_XP = "chest_xp"
    BACK_XP = "back_xp"
    LEGS_XP = "legs_xp"
    SHOULDERS_XP = "shoulders_xp"
    ARMS_XP = "arms_xp"
    CORE_XP = "core_xp"
    CARDIO_XP = "cardio_xp"
    TOTAL_WORKOUTS = "total_workouts"
    TOTAL_SETS = "total_sets"
    TOTAL_REPS = "total_reps"
    TOTAL_VOLUME = "total_volume"
    TOTAL_DURATION = "total_duration"


class UserStats(BaseModel):
    """
    Snapshot of a user's cumulative progression stats.

    A freshly created user starts at level 1 with every counter at 0.
    """

    user_id: str
    xp: int = Field(default=0, ge=0)
    gold: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)

    chest_xp: int = 0
    back_xp: int = 0
    legs_xp: int = 0
    shoulders_xp: int = 0
    arms_xp: int = 0
    core_xp: int = 0
    cardio_xp: int = 0

    total_workouts: int = 0
    total_sets: int = 0
    total_reps: int = 0
    total_volume: int = 0
    total_duration: int = Field(default=0, description="Seconds across all sessions")

    version: int = Field(default=0, ge=0, description="Optimistic concurrency token")

    model_config = {"extra": "ignore"}

    @classmethod
    def new(cls, user_id: str) -> "UserStats":
        return cls(user_id=user_id)

    def muscle_group_xp(self, group: MuscleGroup) -> int:
        return getattr(self, group.stat_field)

    @property
    def xp_by_muscle_group(self) -> Dict[MuscleGroup, int]:
        return {group: self.muscle_group_xp(group) for group in MUSCLE_GROUPS}

    def value_of(self, stat: StatField) -> float:
        """Current value of a stat column."""
        return getattr(self, stat.value)

    def apply(self, delta: "StatsDelta") -> "UserStats":
        """
        Return a new snapshot with ``delta`` added.

        The level is replaced by ``delta.new_level`` (levels never decrease)
        and the version is bumped by one.
        """
        updates = {
            "xp": self.xp + delta.xp,
            "gold": self.gold + delta.gold,
            "level": max(self.level, delta.new_level or self.level),
            "total_workouts": self.total_workouts + delta.workouts,
            "total_sets": self.total_sets + delta.sets,
            "total_reps": self.total_reps + delta.reps,
            "total_volume": self.total_volume + delta.volume,
            "total_duration": self.total_duration + delta.duration,
            "version": self.version + 1,
        }
        for group in MUSCLE_GROUPS:
            updates[group.stat_field] = (
                self.muscle_group_xp(group) + delta.xp_by_muscle_group.get(group, 0)
            )
        return self.model_copy(update=updates)

    def to_record(self) -> Dict[str, int]:
        """Column values for persistence (without the user id)."""
        return self.model_dump(exclude={"user_id"})


@dataclass
class StatsDelta:
    """Additive change produced by one finished workout."""

    xp: int = 0
    gold: int = 0
    new_level: Optional[int] = None
    xp_by_muscle_group: Dict[MuscleGroup, int] = field(default_factory=dict)
    workouts: int = 0
    sets: int = 0
    reps: int = 0
    volume: int = 0
    duration: int = 0
