"""
Exercise catalog entries, recorded sets and session exercises.

Part of RQ-101: Canonical workout session model

A set's shape depends on the owning exercise's ``SetKind``:
- standard: reps + weight
- bodyweight: reps only
- timed: duration ("MM:SS") and an optional distance

Sets arrive from form input, so numeric fields accept strings and treat
blank values as absent.
"""

import re
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.models.muscle_group import MuscleGroup

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class SetKind(str, Enum):
    """Shape of the sets recorded for an exercise."""

    STANDARD = "standard"
    BODYWEIGHT = "bodyweight"
    TIMED = "timed"


class ExerciseCatalogEntry(BaseModel):
    """
    Static catalog entry for a known exercise.

    Examples:
        >>> entry = ExerciseCatalogEntry(
        ...     name="Bench Press",
        ...     muscle_group="chest",
        ...     set_kind="standard",
        ... )
        >>> entry.muscle_group.stat_field
        'chest_xp'
    """

    name: str = Field(..., min_length=1, description="Exercise name, exact catalog casing")
    muscle_group: MuscleGroup = Field(..., description="Primary muscle group (catalog category)")
    set_kind: SetKind = Field(default=SetKind.STANDARD, description="Set shape")
    muscle: Optional[str] = Field(
        default=None, description="Free-text muscles worked (display only)"
    )
    equipment: Optional[str] = Field(default=None, description="Equipment used")

    model_config = {"frozen": True}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class SetEntry(BaseModel):
    """
    One recorded set. Mutable until it is completed.

    Examples:
        >>> SetEntry(id="s1", completed=True, reps="8", weight="100").volume_for(SetKind.STANDARD)
        800.0
    """

    id: str
    completed: bool = False
    reps: Optional[int] = None
    weight: Optional[float] = None
    duration: Optional[str] = Field(default=None, description="Elapsed time, 'MM:SS'")
    distance: Optional[float] = None

    @field_validator("reps", "weight", "distance", "duration", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        """Empty form inputs mean the field was not filled in."""
        return _blank_to_none(v)

    @property
    def duration_value(self) -> int:
        """
        Numeric value of the duration string.

        Only the leading integer is used ("12:30" -> 12); the duration is a
        proxy volume unit, not a number of seconds.
        """
        if not self.duration:
            return 0
        match = _LEADING_INT.match(self.duration)
        return int(match.group(1)) if match else 0

    def volume_for(self, set_kind: SetKind) -> float:
        """Volume contributed by this set for the given exercise shape."""
        if set_kind == SetKind.STANDARD:
            if self.reps is None or self.weight is None:
                return 0.0
            return self.reps * self.weight
        if set_kind == SetKind.BODYWEIGHT:
            return float(self.reps or 0)
        return float(self.duration_value)


class ExerciseEntry(BaseModel):
    """An exercise performed within one workout session."""

    id: str
    name: str
    set_kind: SetKind = SetKind.STANDARD
    sets: List[SetEntry] = Field(default_factory=list)

    @property
    def completed_sets(self) -> List[SetEntry]:
        """Sets marked as completed; only these are scored and persisted."""
        return [s for s in self.sets if s.completed]

    def get_set(self, set_id: str) -> Optional[SetEntry]:
        return next((s for s in self.sets if s.id == set_id), None)
