"""
Supabase implementation of AchievementRepository.

Part of RQ-108: Achievement unlocks

Queries the achievements catalog and the user_achievements table. The
unique (user_id, achievement_id) constraint on user_achievements surfaces
as DuplicateUnlockError.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from supabase import Client

from application.exceptions import DuplicateUnlockError, PersistenceError
from infrastructure.db.errors import UNIQUE_VIOLATION, error_code

logger = logging.getLogger(__name__)


class SupabaseAchievementRepository:
    """
    Supabase implementation of AchievementRepository protocol.

    Queries against:
    - achievements: id, title, description, requirement, item_id
    - user_achievements: user_id, achievement_id, unlocked_at
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def list_achievements(self) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("achievements") \
                .select("*") \
                .order("created_at") \
                .execute()
        except Exception as e:
            logger.error(f"Failed to list achievements: {e}")
            raise PersistenceError("Failed to list achievements", code=error_code(e)) from e
        return result.data or []

    def list_unlocks(self, user_id: str) -> List[Dict[str, Any]]:
        try:
            result = self._client.table("user_achievements") \
                .select("*") \
                .eq("user_id", user_id) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to list unlocks for user {user_id}: {e}")
            raise PersistenceError(
                f"Failed to list unlocks for user {user_id}", code=error_code(e)
            ) from e
        return result.data or []

    def get_unlock(
        self,
        user_id: str,
        achievement_id: str,
    ) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("user_achievements") \
                .select("*") \
                .eq("user_id", user_id) \
                .eq("achievement_id", achievement_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.error(f"Failed to check unlock {achievement_id} for user {user_id}: {e}")
            raise PersistenceError(
                f"Failed to check unlock {achievement_id}", code=error_code(e)
            ) from e

        if result.data and len(result.data) > 0:
            return result.data[0]
        return None

    def insert_unlock(
        self,
        user_id: str,
        achievement_id: str,
    ) -> Dict[str, Any]:
        """
        Record an unlock.

        Raises:
            DuplicateUnlockError: On a unique constraint violation (23505)
            PersistenceError: On any other failure
        """
        data = {
            "user_id": user_id,
            "achievement_id": achievement_id,
            "unlocked_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            result = self._client.table("user_achievements").insert(data).execute()
        except Exception as e:
            if error_code(e) == UNIQUE_VIOLATION:
                raise DuplicateUnlockError(user_id, achievement_id) from e
            logger.error(f"Failed to insert unlock {achievement_id} for user {user_id}: {e}")
            raise PersistenceError(
                f"Failed to record achievement {achievement_id}", code=error_code(e)
            ) from e

        if result.data and len(result.data) > 0:
            return result.data[0]
        return data
