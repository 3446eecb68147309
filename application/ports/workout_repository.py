"""
Workout Repository Interface (Port).

Part of RQ-109: Persist finished workouts

This module defines the abstract interface for finished-workout persistence.
A finished workout and the stats update it produces are written together so
the two can never diverge.
"""
from typing import Protocol, Optional, List, Dict, Any


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout persistence operations.

    This protocol defines the contract for storing finished workouts and
    reading a user's workout history.
    """

    def save_finished(
        self,
        user_id: str,
        *,
        workout: Dict[str, Any],
        stats: Dict[str, Any],
        expected_version: int,
    ) -> Dict[str, Any]:
        """
        Atomically store a finished workout and the updated user stats.

        The stats write is compare-and-swap: it only succeeds while the stored
        stats still carry ``expected_version``. If any part fails, nothing
        is written.

        Args:
            user_id: Owner of the workout and stats
            workout: Workout record (notes, duration, exercises with sets)
            stats: Full updated stats columns, including the bumped version
            expected_version: Version read before the workout was scored

        Returns:
            The stored workout record with its generated ``id``

        Raises:
            StatsVersionConflictError: If the stats version has moved
            PersistenceError: On any other store failure
        """
        ...

    def get(
        self,
        user_id: str,
        workout_id: str,
    ) -> Optional[Dict[str, Any]]:
        """
        Get a finished workout with its exercises and sets.

        Args:
            user_id: User ID for authorization
            workout_id: Workout ID

        Returns:
            Workout record or None if not found
        """
        ...

    def get_list(
        self,
        user_id: str,
        *,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Get a user's finished workouts, newest first.

        Args:
            user_id: User ID
            limit: Maximum records to return
            offset: Records to skip for pagination

        Returns:
            List of workout records (without nested sets)
        """
        ...
