"""
Session metrics aggregation.

Part of RQ-105: Workout completion summary

Totals are computed over completed sets only. Volume per set is
reps x weight (standard), reps (bodyweight) or the numeric duration value
(timed). Volume is rounded once, for the whole session.
"""

import math
from dataclasses import dataclass

from domain.models import SetKind, WorkoutSession


@dataclass(frozen=True)
class SessionMetrics:
    """Totals for one session."""

    total_sets: int = 0
    total_reps: int = 0
    total_volume: int = 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def aggregate(session: WorkoutSession) -> SessionMetrics:
    """
    Reduce a session's completed sets into totals.

    Unknown (non-catalog) exercises count here even though they earn no
    rewards.
    """
    total_sets = 0
    total_reps = 0
    total_volume = 0.0

    for exercise in session.exercises:
        for set_entry in exercise.completed_sets:
            total_sets += 1
            if exercise.set_kind != SetKind.TIMED:
                total_reps += set_entry.reps or 0
            total_volume += set_entry.volume_for(exercise.set_kind)

    return SessionMetrics(
        total_sets=total_sets,
        total_reps=total_reps,
        total_volume=round_half_up(total_volume),
    )
