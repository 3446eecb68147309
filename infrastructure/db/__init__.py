"""
Infrastructure Database Layer.

Part of RQ-109: Persist finished workouts

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into use
cases for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseUserStatsRepository,
        SupabaseWorkoutRepository,
        SupabaseAchievementRepository,
        SupabaseInventoryRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    stats_repo = SupabaseUserStatsRepository(client)
    workout_repo = SupabaseWorkoutRepository(client)
    achievement_repo = SupabaseAchievementRepository(client)
    inventory_repo = SupabaseInventoryRepository(client)
"""

from infrastructure.db.user_stats_repository import SupabaseUserStatsRepository
from infrastructure.db.workout_repository import SupabaseWorkoutRepository
from infrastructure.db.achievement_repository import SupabaseAchievementRepository
from infrastructure.db.inventory_repository import SupabaseInventoryRepository

__all__ = [
    # Stats document
    "SupabaseUserStatsRepository",

    # Finished workouts (atomic with the stats update)
    "SupabaseWorkoutRepository",

    # Achievements and unlocks
    "SupabaseAchievementRepository",

    # Items and inventories
    "SupabaseInventoryRepository",
]
