"""
EvaluateAchievements Use Case.

Part of RQ-108: Achievement unlocks

Tests every achievement rule against a user's current stats and records
new unlocks. Safe to run after every stat change:

- achievements already unlocked are never inserted twice
- a uniqueness violation on insert means "already unlocked", not an error
- a failed item grant is logged but never undoes the unlock
- a store failure on one achievement is recorded and the rest are still tried
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from application.exceptions import DuplicateUnlockError, PersistenceError
from application.ports import (
    AchievementRepository,
    InventoryRepository,
    UserStatsRepository,
)
from backend.core.achievements import load_achievements, pending_unlocks
from domain.converters import db_row_to_stats
from domain.models import Achievement, UserStats

logger = logging.getLogger(__name__)


@dataclass
class UnlockEvent:
    """A newly recorded unlock, with the outcome of its item grant."""

    achievement_id: str
    title: str = ""
    item_id: Optional[str] = None
    item_granted: bool = False


@dataclass
class EvaluateAchievementsResult:
    """Result of the EvaluateAchievements use case execution."""

    success: bool
    unlocked: List[UnlockEvent] = field(default_factory=list)
    already_unlocked: List[str] = field(default_factory=list)
    unlocked_ids: Set[str] = field(default_factory=set)
    grant_failures: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def partial(self) -> bool:
        """True when some achievements could not be checked or recorded."""
        return bool(self.failed)


class EvaluateAchievementsUseCase:
    """
    Use case for unlocking achievements whose rules are met.

    Orchestrates the following workflow:
    1. Load the user's stats (unless a fresh snapshot is passed in)
    2. Decode the achievement catalog, skipping malformed rules
    3. Find achievements that are met and not yet unlocked
    4. For each: re-check the unlock row, insert it, grant its item
       (a store failure skips that achievement and is listed in ``failed``)

    Usage:
        >>> use_case = EvaluateAchievementsUseCase(
        ...     stats_repo=stats_repo,
        ...     achievement_repo=achievement_repo,
        ...     inventory_repo=inventory_repo,
        ... )
        >>> result = use_case.execute(user_id="user-123")
        >>> [event.achievement_id for event in result.unlocked]
        ['leg-day']
    """

    def __init__(
        self,
        stats_repo: UserStatsRepository,
        achievement_repo: AchievementRepository,
        inventory_repo: InventoryRepository,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            stats_repo: Repository for the per-user stats document
            achievement_repo: Repository for achievements and unlocks
            inventory_repo: Repository used to grant reward items
        """
        self._stats_repo = stats_repo
        self._achievement_repo = achievement_repo
        self._inventory_repo = inventory_repo

    def execute(
        self,
        user_id: str,
        *,
        stats: Optional[UserStats] = None,
    ) -> EvaluateAchievementsResult:
        """
        Execute the evaluation workflow.

        Args:
            user_id: User to evaluate
            stats: Stats snapshot to test against; read from the store if omitted

        Returns:
            EvaluateAchievementsResult with new unlocks and grant outcomes.
            ``success`` is False only when the catalog or stats could not be
            read; per-achievement failures are listed in ``failed``.
        """
        try:
            if stats is None:
                row = self._stats_repo.get(user_id)
                stats = db_row_to_stats(row) if row else UserStats.new(user_id)

            achievements = load_achievements(self._achievement_repo.list_achievements())
            unlocked_ids = {
                row["achievement_id"] for row in self._achievement_repo.list_unlocks(user_id)
            }
            result = EvaluateAchievementsResult(success=True, unlocked_ids=unlocked_ids)

            for achievement in pending_unlocks(stats, achievements, unlocked_ids):
                try:
                    self._unlock(user_id, achievement, result)
                except PersistenceError as e:
                    logger.error(
                        f"Failed to unlock {achievement.id} for user {user_id}: {e}"
                    )
                    result.failed.append(achievement.id)

            if result.unlocked:
                logger.info(
                    "User %s unlocked %d achievement(s): %s",
                    user_id,
                    len(result.unlocked),
                    ", ".join(event.achievement_id for event in result.unlocked),
                )
            return result

        except PersistenceError as e:
            logger.error(f"Achievement evaluation failed for user {user_id}: {e}")
            return EvaluateAchievementsResult(success=False, error=str(e))

        except Exception as e:
            logger.exception(f"EvaluateAchievements use case failed: {e}")
            return EvaluateAchievementsResult(success=False, error=str(e))

    def _unlock(
        self,
        user_id: str,
        achievement: Achievement,
        result: EvaluateAchievementsResult,
    ) -> None:
        """Record one unlock unless it already exists, then grant its item."""
        if self._achievement_repo.get_unlock(user_id, achievement.id):
            logger.info(
                "Achievement %s already unlocked for user %s", achievement.id, user_id
            )
            result.unlocked_ids.add(achievement.id)
            result.already_unlocked.append(achievement.id)
            return

        try:
            self._achievement_repo.insert_unlock(user_id, achievement.id)
        except DuplicateUnlockError:
            logger.warning(
                "Duplicate unlock of %s for user %s ignored", achievement.id, user_id
            )
            result.unlocked_ids.add(achievement.id)
            result.already_unlocked.append(achievement.id)
            return

        result.unlocked_ids.add(achievement.id)
        event = UnlockEvent(
            achievement_id=achievement.id,
            title=achievement.title,
            item_id=achievement.item_id,
        )
        if achievement.item_id:
            event.item_granted = self._grant_item(user_id, achievement.item_id)
            if not event.item_granted:
                result.grant_failures.append(achievement.item_id)
        result.unlocked.append(event)

    def _grant_item(self, user_id: str, item_id: str) -> bool:
        """
        Add one unit of an item to the user's inventory.

        Returns:
            True if the item was granted, False if the grant failed
        """
        try:
            entry = self._inventory_repo.get_entry(user_id, item_id)
            if entry:
                self._inventory_repo.update_quantity(
                    user_id, item_id, (entry.get("quantity") or 0) + 1
                )
            else:
                self._inventory_repo.insert_entry(user_id, item_id, quantity=1)
            return True
        except PersistenceError as e:
            logger.warning(f"Failed to grant item {item_id} to user {user_id}: {e}")
            return False
