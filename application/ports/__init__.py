"""
Repository Interfaces (Ports) for the progression engine.

This package defines abstract interfaces that decouple the engine from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import UserStatsRepository, WorkoutRepository

    class StatsService:
        def __init__(self, stats_repo: UserStatsRepository):
            self.stats_repo = stats_repo
"""

# Per-user stats document
from application.ports.user_stats_repository import UserStatsRepository

# Finished workouts (written together with the stats update)
from application.ports.workout_repository import WorkoutRepository

# Achievement catalog and unlocks
from application.ports.achievement_repository import AchievementRepository

# Item catalog and inventories
from application.ports.inventory_repository import InventoryRepository

__all__ = [
    "UserStatsRepository",
    "WorkoutRepository",
    "AchievementRepository",
    "InventoryRepository",
]
