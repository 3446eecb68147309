"""
Get Workout Use Case.

Part of RQ-109: Persist finished workouts

This use case handles reading a user's finished workouts (history list and
detail view).
"""
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from application.ports import WorkoutRepository


@dataclass
class GetWorkoutResult:
    """Result of getting a single workout."""
    success: bool
    workout: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


@dataclass
class ListWorkoutsResult:
    """Result of listing workouts."""
    success: bool
    workouts: List[Dict[str, Any]] = field(default_factory=list)
    count: int = 0
    error: Optional[str] = None


class GetWorkoutUseCase:
    """
    Use case for retrieving finished workouts.

    Encapsulates the history list (newest first, paginated) and the detail
    view with exercises and completed sets.
    """

    def __init__(self, workout_repo: WorkoutRepository):
        """
        Initialize with required dependencies.

        Args:
            workout_repo: Repository for workout persistence
        """
        self._workout_repo = workout_repo

    def get_workout(
        self,
        workout_id: str,
        user_id: str,
    ) -> GetWorkoutResult:
        """
        Get a single workout by ID.

        Args:
            workout_id: ID of the workout to retrieve
            user_id: Current user ID (for authorization)

        Returns:
            GetWorkoutResult with workout data or error
        """
        workout = self._workout_repo.get(user_id, workout_id)

        if workout:
            return GetWorkoutResult(
                success=True,
                workout=workout,
            )
        else:
            return GetWorkoutResult(
                success=False,
                error="Workout not found or not owned by user",
            )

    def list_workouts(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0,
    ) -> ListWorkoutsResult:
        """
        List a user's finished workouts, newest first.

        Args:
            user_id: Current user ID
            limit: Maximum number of workouts to return
            offset: Number of workouts to skip

        Returns:
            ListWorkoutsResult with workout list
        """
        if limit < 1:
            return ListWorkoutsResult(success=False, error="limit must be positive")

        workouts = self._workout_repo.get_list(user_id, limit=limit, offset=offset)

        return ListWorkoutsResult(
            success=True,
            workouts=workouts,
            count=len(workouts),
        )
