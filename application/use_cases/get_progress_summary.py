"""
GetProgressSummary Use Case.

Part of RQ-106: Rank and power level

Read-only view of a user's progress. Ranks and power level are derived
data and are recomputed on every call.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from application.exceptions import PersistenceError
from application.ports import InventoryRepository, UserStatsRepository
from backend.core.leveling import required_xp
from backend.core.ranks import PowerLevel, RankCalculator
from domain.converters import db_row_to_stats, db_rows_to_equipped_items
from domain.models import EquippedItem, MuscleGroup, RankTier, UserStats

logger = logging.getLogger(__name__)


@dataclass
class ProgressSummary:
    """Level progress, ranks and power level for one user."""

    stats: UserStats
    required_xp: int
    muscle_group_ranks: Dict[MuscleGroup, RankTier]
    average_rank: RankTier
    power: PowerLevel
    equipped: List[EquippedItem] = field(default_factory=list)

    @property
    def level(self) -> int:
        return self.stats.level

    @property
    def xp(self) -> int:
        return self.stats.xp

    @property
    def xp_to_next_level(self) -> int:
        return max(0, self.required_xp - self.stats.xp)


@dataclass
class GetProgressSummaryResult:
    """Result of the GetProgressSummary use case execution."""

    success: bool
    summary: Optional[ProgressSummary] = None
    error: Optional[str] = None


class GetProgressSummaryUseCase:
    """
    Use case for reading a user's progress summary.

    A user without a stats document gets the initial state (level 1, no XP)
    without anything being written.

    Usage:
        >>> use_case = GetProgressSummaryUseCase(
        ...     stats_repo=stats_repo,
        ...     inventory_repo=inventory_repo,
        ... )
        >>> result = use_case.execute(user_id="user-123")
        >>> result.summary.average_rank.name
        'Bronze'
    """

    def __init__(
        self,
        stats_repo: UserStatsRepository,
        inventory_repo: InventoryRepository,
        ranks: Optional[RankCalculator] = None,
    ) -> None:
        self._stats_repo = stats_repo
        self._inventory_repo = inventory_repo
        self._ranks = ranks or RankCalculator()

    def execute(self, user_id: str) -> GetProgressSummaryResult:
        try:
            row = self._stats_repo.get(user_id)
            stats = db_row_to_stats(row) if row else UserStats.new(user_id)
            equipped = db_rows_to_equipped_items(
                self._inventory_repo.get_equipped_items(user_id)
            )

            summary = ProgressSummary(
                stats=stats,
                required_xp=required_xp(stats.level),
                muscle_group_ranks=self._ranks.muscle_group_ranks(stats),
                average_rank=self._ranks.average_rank(stats),
                power=self._ranks.power_level(stats, equipped),
                equipped=equipped,
            )
            return GetProgressSummaryResult(success=True, summary=summary)

        except PersistenceError as e:
            logger.error(f"Failed to load progress for user {user_id}: {e}")
            return GetProgressSummaryResult(success=False, error=str(e))

        except Exception as e:
            logger.exception(f"GetProgressSummary use case failed: {e}")
            return GetProgressSummaryResult(success=False, error=str(e))
