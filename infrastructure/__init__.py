"""
Infrastructure Layer for the progression engine.

Part of RQ-109: Persist finished workouts

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseUserStatsRepository,
    SupabaseWorkoutRepository,
    SupabaseAchievementRepository,
    SupabaseInventoryRepository,
)

__all__ = [
    "SupabaseUserStatsRepository",
    "SupabaseWorkoutRepository",
    "SupabaseAchievementRepository",
    "SupabaseInventoryRepository",
]
