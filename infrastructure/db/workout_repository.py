"""
Supabase implementation of WorkoutRepository.

Part of RQ-109: Persist finished workouts

Finished workouts are written by the ``finish_workout_session`` stored
procedure, which in one transaction:

1. updates user_stats where user_id and version match (compare-and-swap)
2. inserts the workouts row and its exercises and sets

and raises SQLSTATE 40001 when no stats row matched the expected version.
"""
import logging
from typing import Optional, List, Dict, Any

from supabase import Client

from application.exceptions import PersistenceError, StatsVersionConflictError
from infrastructure.db.errors import SERIALIZATION_FAILURE, error_code

logger = logging.getLogger(__name__)

FINISH_WORKOUT_RPC = "finish_workout_session"

WORKOUT_LIST_COLUMNS = (
    "id, user_id, notes, duration, total_sets, total_reps, total_volume, created_at"
)


class SupabaseWorkoutRepository:
    """
    Supabase implementation of WorkoutRepository protocol.

    All Supabase query logic for workouts is encapsulated here.
    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def save_finished(
        self,
        user_id: str,
        *,
        workout: Dict[str, Any],
        stats: Dict[str, Any],
        expected_version: int,
    ) -> Dict[str, Any]:
        """
        Atomically store a finished workout and the updated stats.

        Raises:
            StatsVersionConflictError: If the stats version has moved
            PersistenceError: If the RPC call fails
        """
        try:
            response = self._client.rpc(
                FINISH_WORKOUT_RPC,
                {
                    "p_user_id": user_id,
                    "p_workout": workout,
                    "p_stats": stats,
                    "p_expected_version": expected_version,
                },
            ).execute()
        except Exception as e:
            code = error_code(e)
            if code == SERIALIZATION_FAILURE:
                logger.warning(
                    f"Stats version conflict for user {user_id} "
                    f"(expected version {expected_version})"
                )
                raise StatsVersionConflictError(user_id, expected_version) from e
            logger.error(f"Failed to save finished workout for user {user_id}: {e}")
            raise PersistenceError(
                f"Failed to save finished workout: {e}", code=code
            ) from e

        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            raise PersistenceError(f"{FINISH_WORKOUT_RPC} returned no data")
        return data

    def get(
        self,
        user_id: str,
        workout_id: str,
    ) -> Optional[Dict[str, Any]]:
        """Get a finished workout with its exercises and sets."""
        try:
            result = self._client.table("workouts") \
                .select("*, exercises(*, sets(*))") \
                .eq("id", workout_id) \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()
            if result.data and len(result.data) > 0:
                return result.data[0]
            return None
        except Exception as e:
            logger.error(f"Failed to get workout {workout_id}: {e}")
            return None

    def get_list(
        self,
        user_id: str,
        *,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Get a user's finished workouts, newest first."""
        try:
            result = self._client.table("workouts") \
                .select(WORKOUT_LIST_COLUMNS) \
                .eq("user_id", user_id) \
                .order("created_at", desc=True) \
                .range(offset, offset + limit - 1) \
                .execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Failed to list workouts for user {user_id}: {e}")
            return []
