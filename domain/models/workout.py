"""
Workout session aggregate.

Part of RQ-101: Canonical workout session model

A session exists only while a workout is active. Finishing or cancelling
clears it; cancelling never reaches the reward or leveling code.
"""

import uuid
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from domain.models.exercise import ExerciseCatalogEntry, ExerciseEntry, SetEntry, SetKind


class SessionStatus(str, Enum):
    """Lifecycle of a workout session."""

    ACTIVE = "active"
    FINISHED = "finished"
    CANCELLED = "cancelled"


def _new_id() -> str:
    return uuid.uuid4().hex


def _empty_set(set_kind: SetKind) -> SetEntry:
    if set_kind == SetKind.TIMED:
        return SetEntry(id=_new_id(), duration="", distance="")
    return SetEntry(id=_new_id(), reps="")


def _initial_sets(set_kind: SetKind) -> List[SetEntry]:
    if set_kind == SetKind.TIMED:
        return []
    return [_empty_set(set_kind)]


class WorkoutSession(BaseModel):
    """
    The in-progress workout: exercises, notes and elapsed time.

    Examples:
        >>> session = WorkoutSession()
        >>> bench = session.add_exercise(catalog.resolve("Bench Press"))
        >>> session.update_set(bench.id, bench.sets[0].id, reps=8, weight=100)
        >>> session.complete_set(bench.id, bench.sets[0].id)
        >>> session.total_completed_sets
        1
    """

    exercises: List[ExerciseEntry] = Field(default_factory=list)
    notes: str = ""
    elapsed_seconds: int = Field(default=0, ge=0)
    status: SessionStatus = SessionStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def total_completed_sets(self) -> int:
        return sum(len(ex.completed_sets) for ex in self.exercises)

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def add_exercise(self, entry: ExerciseCatalogEntry) -> ExerciseEntry:
        """
        Add a catalog exercise to the session.

        Standard and bodyweight exercises start with one empty set; timed
        exercises start with none and the user adds entries.
        """
        exercise = ExerciseEntry(
            id=_new_id(),
            name=entry.name,
            set_kind=entry.set_kind,
            sets=_initial_sets(entry.set_kind),
        )
        self.exercises.append(exercise)
        return exercise

    def add_custom_exercise(
        self, name: str, set_kind: SetKind = SetKind.STANDARD
    ) -> ExerciseEntry:
        """
        Add an exercise that is not in the catalog (logged, but unrewarded).

        Starts with the same sets as a catalog exercise of the same kind.
        """
        exercise = ExerciseEntry(
            id=_new_id(), name=name, set_kind=set_kind, sets=_initial_sets(set_kind)
        )
        self.exercises.append(exercise)
        return exercise

    def get_exercise(self, exercise_id: str) -> Optional[ExerciseEntry]:
        return next((ex for ex in self.exercises if ex.id == exercise_id), None)

    def _require_exercise(self, exercise_id: str) -> ExerciseEntry:
        exercise = self.get_exercise(exercise_id)
        if exercise is None:
            raise KeyError(f"Exercise {exercise_id} is not part of this session")
        return exercise

    def _require_set(self, exercise_id: str, set_id: str) -> SetEntry:
        set_entry = self._require_exercise(exercise_id).get_set(set_id)
        if set_entry is None:
            raise KeyError(f"Set {set_id} is not part of exercise {exercise_id}")
        return set_entry

    def add_set(self, exercise_id: str) -> SetEntry:
        """Append an empty set shaped for the exercise's set kind."""
        exercise = self._require_exercise(exercise_id)
        new_set = _empty_set(exercise.set_kind)
        exercise.sets.append(new_set)
        return new_set

    def update_set(self, exercise_id: str, set_id: str, **fields: Any) -> SetEntry:
        """
        Update fields of a set in place.

        Raises:
            KeyError: If the exercise or set does not exist
            ValueError: If the set is already completed or a field is unknown
        """
        set_entry = self._require_set(exercise_id, set_id)
        if set_entry.completed:
            raise ValueError("Completed sets cannot be edited")
        unknown = set(fields) - {"reps", "weight", "duration", "distance"}
        if unknown:
            raise ValueError(f"Unknown set fields: {sorted(unknown)}")
        updated = SetEntry.model_validate({**set_entry.model_dump(), **fields})
        for name in fields:
            setattr(set_entry, name, getattr(updated, name))
        return set_entry

    def complete_set(self, exercise_id: str, set_id: str, completed: bool = True) -> SetEntry:
        set_entry = self._require_set(exercise_id, set_id)
        set_entry.completed = completed
        return set_entry

    def remove_set(self, exercise_id: str, set_id: str) -> None:
        exercise = self._require_exercise(exercise_id)
        exercise.sets = [s for s in exercise.sets if s.id != set_id]

    def remove_exercise(self, exercise_id: str) -> None:
        self.exercises = [ex for ex in self.exercises if ex.id != exercise_id]

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _clear(self) -> None:
        self.exercises = []
        self.notes = ""
        self.elapsed_seconds = 0

    def cancel(self) -> None:
        """Abandon the workout. Nothing is scored or persisted."""
        self._clear()
        self.status = SessionStatus.CANCELLED

    def mark_finished(self) -> None:
        """Clear the session after its results were persisted."""
        self._clear()
        self.status = SessionStatus.FINISHED
