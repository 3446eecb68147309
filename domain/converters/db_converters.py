"""
Converters: Database rows <-> progression domain models.

Part of RQ-109: Persist finished workouts

Provides conversion between Supabase rows and the domain models used by
the progression engine.

Database tables:
- user_stats: one row per user (xp, gold, level, <group>_xp, totals, version)
- user_inventory: user_id, item_id, quantity, is_equipped (joined with items)
- user_achievements: user_id, achievement_id, unlocked_at
- workouts / exercises / sets: finished workout records
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from domain.models import (
    AchievementUnlock,
    EquippedItem,
    SetKind,
    UserStats,
    WorkoutSession,
)


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def db_row_to_stats(row: Dict[str, Any]) -> UserStats:
    """
    Convert a user_stats row to UserStats.

    NULL counters (columns added after the row was created) read as 0.
    """
    values = {key: value for key, value in row.items() if value is not None}
    return UserStats.model_validate(values)


def db_rows_to_equipped_items(rows: Iterable[Dict[str, Any]]) -> List[EquippedItem]:
    """
    Convert inventory rows joined with their item into EquippedItem models.

    Rows whose item no longer exists (``item`` is NULL) are skipped.
    """
    result: List[EquippedItem] = []
    for row in rows:
        if not row.get("item"):
            continue
        result.append(
            EquippedItem(
                user_id=row["user_id"],
                item=row["item"],
                is_equipped=bool(row.get("is_equipped")),
                quantity=row.get("quantity") or 1,
            )
        )
    return result


def db_row_to_unlock(row: Dict[str, Any]) -> AchievementUnlock:
    """Convert a user_achievements row to AchievementUnlock."""
    data = {
        "user_id": row["user_id"],
        "achievement_id": row["achievement_id"],
    }
    unlocked_at = _parse_datetime(row.get("unlocked_at"))
    if unlocked_at is not None:
        data["unlocked_at"] = unlocked_at
    return AchievementUnlock(**data)


def session_to_workout_record(
    session: WorkoutSession,
    *,
    total_sets: int,
    total_reps: int,
    total_volume: int,
) -> Dict[str, Any]:
    """
    Convert a finished session to the record stored with the stats update.

    Only completed sets are stored; exercises without a completed set are
    left out.

    Returns:
        Dict with notes, duration (seconds), totals and nested exercises/sets
    """
    exercises = []
    for exercise in session.exercises:
        completed = exercise.completed_sets
        if not completed:
            continue
        sets = []
        for set_entry in completed:
            record: Dict[str, Any] = {"completed": True}
            if exercise.set_kind == SetKind.TIMED:
                record["duration"] = set_entry.duration
                record["distance"] = set_entry.distance
            else:
                record["reps"] = set_entry.reps
                record["weight"] = set_entry.weight
            sets.append(record)
        exercises.append(
            {
                "name": exercise.name,
                "type": exercise.set_kind.value,
                "sets": sets,
            }
        )

    return {
        "notes": session.notes,
        "duration": session.elapsed_seconds,
        "total_sets": total_sets,
        "total_reps": total_reps,
        "total_volume": total_volume,
        "exercises": exercises,
    }
