"""
Application Use Cases for the progression engine.

Part of RQ-105: Workout completion summary
Part of RQ-106: Rank and power level
Part of RQ-107: Equipped item bonuses
Part of RQ-108: Achievement unlocks

This package contains application-level use cases that orchestrate the
engine components in backend.core and coordinate the repository ports.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result objects, never raise for expected failures

Usage:
    from application.use_cases import (
        FinishWorkoutUseCase,
        EvaluateAchievementsUseCase,
        EquipItemUseCase,
        GetProgressSummaryUseCase,
    )

    # Finish a workout
    achievements = EvaluateAchievementsUseCase(
        stats_repo=stats_repo,
        achievement_repo=achievement_repo,
        inventory_repo=inventory_repo,
    )
    finish = FinishWorkoutUseCase(
        stats_repo=stats_repo,
        workout_repo=workout_repo,
        inventory_repo=inventory_repo,
        catalog=catalog,
        rate_limiter=SlidingWindowRateLimiter(),
        achievements=achievements,
    )
    result = finish.execute(session, user_id="user-123")

    # Equip an item
    result = EquipItemUseCase(inventory_repo=inventory_repo).execute(
        user_id="user-123",
        item_id="iron-helm",
    )

    # Read progress
    result = GetProgressSummaryUseCase(
        stats_repo=stats_repo,
        inventory_repo=inventory_repo,
    ).execute(user_id="user-123")
"""

from application.use_cases.equip_item import EquipItemResult, EquipItemUseCase
from application.use_cases.evaluate_achievements import (
    EvaluateAchievementsResult,
    EvaluateAchievementsUseCase,
    UnlockEvent,
)
from application.use_cases.finish_workout import (
    FinishWorkoutResult,
    FinishWorkoutUseCase,
)
from application.use_cases.get_progress_summary import (
    GetProgressSummaryResult,
    GetProgressSummaryUseCase,
    ProgressSummary,
)
from application.use_cases.get_workout import (
    GetWorkoutUseCase,
    GetWorkoutResult,
    ListWorkoutsResult,
)

__all__ = [
    # FinishWorkout
    "FinishWorkoutUseCase",
    "FinishWorkoutResult",
    # EvaluateAchievements
    "EvaluateAchievementsUseCase",
    "EvaluateAchievementsResult",
    "UnlockEvent",
    # EquipItem
    "EquipItemUseCase",
    "EquipItemResult",
    # GetProgressSummary
    "GetProgressSummaryUseCase",
    "GetProgressSummaryResult",
    "ProgressSummary",
    # GetWorkout
    "GetWorkoutUseCase",
    "GetWorkoutResult",
    "ListWorkoutsResult",
]
