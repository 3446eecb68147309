"""
Achievement Repository Interface (Port).

Part of RQ-108: Achievement unlocks

Achievements are catalog rows; unlocks are unique per (user, achievement).
"""
from typing import Protocol, Optional, List, Dict, Any


class AchievementRepository(Protocol):
    """
    Abstract interface for the achievement catalog and user unlocks.
    """

    def list_achievements(self) -> List[Dict[str, Any]]:
        """
        Get every achievement definition, oldest first.

        Returns:
            Rows with id, title, description, requirement (rule text), item_id
        """
        ...

    def list_unlocks(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Get every unlock recorded for a user.

        Returns:
            Rows with user_id, achievement_id, unlocked_at
        """
        ...

    def get_unlock(
        self,
        user_id: str,
        achievement_id: str,
    ) -> Optional[Dict[str, Any]]:
        """
        Get the unlock row for one (user, achievement) pair.

        Returns:
            The unlock row, or None if not unlocked
        """
        ...

    def insert_unlock(
        self,
        user_id: str,
        achievement_id: str,
    ) -> Dict[str, Any]:
        """
        Record an unlock.

        Returns:
            The inserted unlock row

        Raises:
            DuplicateUnlockError: If the pair is already unlocked
            PersistenceError: On any other store failure
        """
        ...
