"""
Fake User Stats Repository for testing.

Part of RQ-104: Leveling and stat persistence

In-memory implementation of UserStatsRepository. Also exposes the
compare-and-swap write used by FakeWorkoutRepository.save_finished.
"""
from typing import Optional, List, Dict, Any
import copy

from application.exceptions import StatsVersionConflictError
from domain.models import UserStats


class FakeUserStatsRepository:
    """
    In-memory fake implementation of UserStatsRepository for testing.

    Stores one stats row per user, keyed by user ID.

    Usage:
        repo = FakeUserStatsRepository()
        repo.seed([{"user_id": "user1", "xp": 90, "level": 1}])
        row = repo.get("user1")
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._stats: Dict[str, Dict[str, Any]] = {}
        self.fail_with: Optional[Exception] = None
        self.create_calls = 0

    def reset(self) -> None:
        """Clear all stored stats and failure injection."""
        self._stats.clear()
        self.fail_with = None
        self.create_calls = 0

    def seed(self, rows: List[Dict[str, Any]]) -> None:
        """
        Seed the repository with test data.

        Missing columns get their initial values (level 1, counters 0).

        Args:
            rows: List of stats dicts. Must include 'user_id'.
        """
        for row in rows:
            stats = UserStats.model_validate(row)
            self._stats[stats.user_id] = stats.model_dump()

    def get_all(self) -> List[Dict[str, Any]]:
        """Get all stored stats rows (test helper)."""
        return [copy.deepcopy(row) for row in self._stats.values()]

    def compare_and_swap(
        self,
        user_id: str,
        values: Dict[str, Any],
        expected_version: int,
    ) -> Dict[str, Any]:
        """Write ``values`` only if the stored version matches (test helper)."""
        current = self._stats.get(user_id)
        if current is None or current["version"] != expected_version:
            raise StatsVersionConflictError(user_id, expected_version)
        self._stats[user_id] = {**current, **copy.deepcopy(values), "user_id": user_id}
        return copy.deepcopy(self._stats[user_id])

    # =========================================================================
    # UserStatsRepository Protocol Methods
    # =========================================================================

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        if self.fail_with is not None:
            raise self.fail_with
        row = self._stats.get(user_id)
        return copy.deepcopy(row) if row else None

    def create(self, user_id: str) -> Dict[str, Any]:
        if self.fail_with is not None:
            raise self.fail_with
        self.create_calls += 1
        if user_id in self._stats:
            return copy.deepcopy(self._stats[user_id])
        self._stats[user_id] = UserStats.new(user_id).model_dump()
        return copy.deepcopy(self._stats[user_id])
