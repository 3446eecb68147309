"""
Domain converters between Supabase rows and progression domain models.

Part of RQ-109: Persist finished workouts

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import db_row_to_stats, session_to_workout_record

    >>> stats = db_row_to_stats({"user_id": "user-123", "xp": 40, "level": 1})
    >>> record = session_to_workout_record(
    ...     session, total_sets=3, total_reps=24, total_volume=2400
    ... )
"""

from domain.converters.db_converters import (
    db_row_to_stats,
    db_row_to_unlock,
    db_rows_to_equipped_items,
    session_to_workout_record,
)

__all__ = [
    "db_row_to_stats",
    "db_row_to_unlock",
    "db_rows_to_equipped_items",
    "session_to_workout_record",
]
