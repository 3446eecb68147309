"""
User Stats Repository Interface (Port).

Part of RQ-104: Leveling and stat persistence

One stats document per user. Writes go through
WorkoutRepository.save_finished, which compare-and-swaps on ``version``.
"""
from typing import Protocol, Optional, Dict, Any


class UserStatsRepository(Protocol):
    """
    Abstract interface for the per-user stats document.
    """

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the stats row for a user.

        Args:
            user_id: User ID

        Returns:
            Stats row, or None if the user has no stats yet

        Raises:
            PersistenceError: If the store cannot be read
        """
        ...

    def create(self, user_id: str) -> Dict[str, Any]:
        """
        Create the initial stats row (level 1, every counter 0, version 0).

        Args:
            user_id: User ID

        Returns:
            The created stats row

        Raises:
            PersistenceError: If the row cannot be written
        """
        ...

