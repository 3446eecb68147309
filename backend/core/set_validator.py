"""
Set validator for finished workout sessions.

Part of RQ-103: Validate completed sets before saving

Only completed sets are checked; incomplete sets are work in progress and
are discarded when the workout is finished. The whole session is checked
in one pass so the user sees every problem at once.

Rules by set kind:
- standard: reps and weight required, reps <= 100, reps x weight <= 20,000
- bodyweight: reps required, reps <= 100
- timed: duration required
"""

import logging
from dataclasses import dataclass, field
from typing import List

from domain.models import ExerciseEntry, SetEntry, SetKind, WorkoutSession

logger = logging.getLogger(__name__)

MAX_REPS = 100
MAX_VOLUME = 20000

REPS_REQUIRED = "reps required"
WEIGHT_REQUIRED = "weight required"
DURATION_REQUIRED = "duration required"
REPS_LIMIT = f"reps cannot exceed {MAX_REPS}"
VOLUME_LIMIT = f"volume (reps × weight) cannot exceed {MAX_VOLUME:,}"


@dataclass
class SetViolation:
    """One failed rule on one completed set."""

    exercise_id: str
    exercise_name: str
    exercise_index: int
    set_id: str
    set_index: int
    reason: str

    def describe(self) -> str:
        """Human-readable line, e.g. 'Bench Press set 2: reps required'."""
        return f"{self.exercise_name} set {self.set_index + 1}: {self.reason}"


@dataclass
class SessionValidationResult:
    """Result of validating a whole session."""

    violations: List[SetViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def messages(self) -> List[str]:
        return [v.describe() for v in self.violations]


def validate_set(set_kind: SetKind, set_entry: SetEntry) -> List[str]:
    """
    Check one set against the rules of its exercise's set kind.

    Returns:
        Reasons the set is invalid (empty if valid or not completed)
    """
    if not set_entry.completed:
        return []

    reasons: List[str] = []
    if set_kind == SetKind.TIMED:
        if not set_entry.duration:
            reasons.append(DURATION_REQUIRED)
        return reasons

    if set_entry.reps is None:
        reasons.append(REPS_REQUIRED)
    elif set_entry.reps > MAX_REPS:
        reasons.append(REPS_LIMIT)

    if set_kind == SetKind.STANDARD:
        if set_entry.weight is None:
            reasons.append(WEIGHT_REQUIRED)
        elif set_entry.reps is not None and set_entry.reps * set_entry.weight > MAX_VOLUME:
            reasons.append(VOLUME_LIMIT)

    return reasons


def validate_exercise(
    exercise: ExerciseEntry, exercise_index: int = 0
) -> List[SetViolation]:
    """Validate every completed set of one exercise."""
    violations = []
    for set_index, set_entry in enumerate(exercise.sets):
        for reason in validate_set(exercise.set_kind, set_entry):
            violations.append(
                SetViolation(
                    exercise_id=exercise.id,
                    exercise_name=exercise.name,
                    exercise_index=exercise_index,
                    set_id=set_entry.id,
                    set_index=set_index,
                    reason=reason,
                )
            )
    return violations


def validate_session(session: WorkoutSession) -> SessionValidationResult:
    """
    Validate every completed set in the session.

    A session with any violation must not be scored or persisted.
    """
    result = SessionValidationResult()
    for exercise_index, exercise in enumerate(session.exercises):
        result.violations.extend(validate_exercise(exercise, exercise_index))

    if result.violations:
        logger.warning(
            "Session validation failed with %d violation(s)", len(result.violations)
        )
    return result
