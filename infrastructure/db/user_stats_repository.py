"""
Supabase implementation of UserStatsRepository.

Part of RQ-104: Leveling and stat persistence

Reads and creates rows in the user_stats table. Stats updates are written
by SupabaseWorkoutRepository.save_finished together with the workout.
"""
import logging
from typing import Optional, Dict, Any

from supabase import Client

from application.exceptions import PersistenceError
from domain.models import UserStats
from infrastructure.db.errors import UNIQUE_VIOLATION, error_code

logger = logging.getLogger(__name__)


class SupabaseUserStatsRepository:
    """
    Supabase implementation of UserStatsRepository protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get the stats row for a user, or None if it does not exist."""
        try:
            result = self._client.table("user_stats") \
                .select("*") \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to read stats for user {user_id}: {e}")
            raise PersistenceError(
                f"Failed to read stats for user {user_id}", code=error_code(e)
            ) from e

        if result.data and len(result.data) > 0:
            return result.data[0]
        return None

    def create(self, user_id: str) -> Dict[str, Any]:
        """
        Create the initial stats row.

        If another session created the row first, that row is returned.
        """
        data = {"user_id": user_id, **UserStats.new(user_id).to_record()}
        try:
            result = self._client.table("user_stats").insert(data).execute()
        except Exception as e:
            if error_code(e) == UNIQUE_VIOLATION:
                logger.info(f"Stats for user {user_id} already exist")
                existing = self.get(user_id)
                if existing:
                    return existing
            logger.error(f"Failed to create stats for user {user_id}: {e}")
            raise PersistenceError(
                f"Failed to create stats for user {user_id}", code=error_code(e)
            ) from e

        if not result.data:
            raise PersistenceError(f"Stats insert for user {user_id} returned no row")
        logger.info(f"Created stats for user {user_id}")
        return result.data[0]
