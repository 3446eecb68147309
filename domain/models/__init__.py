"""
Domain models for the progression engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, external services).

These models represent the core business concepts:
- WorkoutSession: The in-progress workout with its exercises and sets
- ExerciseCatalogEntry: Static catalog entry (muscle group + set kind)
- UserStats: Cumulative XP, gold, level and totals for a user
- Item / EquippedItem: Equipment with optional XP/gold bonuses
- Achievement / Requirement: Threshold rules over user stats
- RankTier: Named XP bands used for rank and power level

Usage:
    >>> from domain.models import WorkoutSession, ExerciseCatalogEntry

    >>> session = WorkoutSession()
    >>> bench = session.add_exercise(
    ...     ExerciseCatalogEntry(name="Bench Press", muscle_group="chest")
    ... )
    >>> session.update_set(bench.id, bench.sets[0].id, reps=8, weight=100)
"""

from domain.models.achievement import (
    Achievement,
    AchievementUnlock,
    Comparator,
    InvalidRequirementError,
    Requirement,
)
from domain.models.exercise import ExerciseCatalogEntry, ExerciseEntry, SetEntry, SetKind
from domain.models.item import EquippedItem, Item, ItemBonus, Rarity
from domain.models.muscle_group import ALL_MUSCLE_GROUPS, MUSCLE_GROUPS, MuscleGroup
from domain.models.rank import RankTier
from domain.models.stats import StatField, StatsDelta, UserStats
from domain.models.workout import SessionStatus, WorkoutSession

__all__ = [
    # Session
    "WorkoutSession",
    "SessionStatus",
    "ExerciseEntry",
    "SetEntry",
    "SetKind",
    "ExerciseCatalogEntry",
    # Taxonomy
    "MuscleGroup",
    "MUSCLE_GROUPS",
    "ALL_MUSCLE_GROUPS",
    # Stats
    "UserStats",
    "StatsDelta",
    "StatField",
    # Items
    "Item",
    "ItemBonus",
    "EquippedItem",
    "Rarity",
    # Achievements
    "Achievement",
    "AchievementUnlock",
    "Requirement",
    "Comparator",
    "InvalidRequirementError",
    # Ranks
    "RankTier",
]
