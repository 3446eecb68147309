"""
Domain layer for the progression engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, external services).
"""

from domain.models import (
    Achievement,
    ExerciseCatalogEntry,
    Item,
    MuscleGroup,
    RankTier,
    UserStats,
    WorkoutSession,
)

__all__ = [
    "Achievement",
    "ExerciseCatalogEntry",
    "Item",
    "MuscleGroup",
    "RankTier",
    "UserStats",
    "WorkoutSession",
]
