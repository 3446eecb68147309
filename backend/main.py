"""
Engine factory: the composition root of the progression engine.

Part of RQ-112: Engine configuration

Wires Supabase repositories, the static exercise catalog, the rate limiter
and the use cases together. The host application builds one engine per
process and calls its use cases.

Usage:
    from backend.main import create_engine
    from backend.settings import Settings

    # Default engine (uses get_settings())
    engine = create_engine()
    result = engine.finish_workout.execute(session, user_id="user-123")

    # Test engine with an injected client
    test_settings = Settings(environment="test", _env_file=None)
    engine = create_engine(settings=test_settings, client=mock_client)
"""

import logging
from dataclasses import dataclass
from typing import Optional

import sentry_sdk
from supabase import Client, create_client

from application.use_cases import (
    EquipItemUseCase,
    EvaluateAchievementsUseCase,
    FinishWorkoutUseCase,
    GetProgressSummaryUseCase,
    GetWorkoutUseCase,
)
from backend.core.rate_limiter import SlidingWindowRateLimiter
from backend.core.ranks import RankCalculator
from backend.core.taxonomy import ExerciseCatalog, load_default_catalog
from backend.settings import Settings, get_settings
from infrastructure.db import (
    SupabaseAchievementRepository,
    SupabaseInventoryRepository,
    SupabaseUserStatsRepository,
    SupabaseWorkoutRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Engine:
    """The wired use cases and shared services."""

    catalog: ExerciseCatalog
    rate_limiter: SlidingWindowRateLimiter
    finish_workout: FinishWorkoutUseCase
    evaluate_achievements: EvaluateAchievementsUseCase
    equip_item: EquipItemUseCase
    progress_summary: GetProgressSummaryUseCase
    workouts: GetWorkoutUseCase


def create_engine(
    settings: Optional[Settings] = None,
    client: Optional[Client] = None,
) -> Engine:
    """
    Create and wire a progression engine.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.
        client: Optional Supabase client. If not provided, one is created from
                the Supabase settings.

    Returns:
        Engine with every use case wired to Supabase.

    Raises:
        RuntimeError: If no client is given and Supabase is not configured
    """
    if settings is None:
        settings = get_settings()

    _init_sentry(settings)

    if client is None:
        client = _create_supabase_client(settings)

    catalog = _load_catalog(settings)
    rate_limiter = SlidingWindowRateLimiter(
        window_seconds=settings.rate_limit_window_seconds,
        max_actions=settings.rate_limit_max_actions,
    )

    stats_repo = SupabaseUserStatsRepository(client)
    workout_repo = SupabaseWorkoutRepository(client)
    achievement_repo = SupabaseAchievementRepository(client)
    inventory_repo = SupabaseInventoryRepository(client)

    evaluate_achievements = EvaluateAchievementsUseCase(
        stats_repo=stats_repo,
        achievement_repo=achievement_repo,
        inventory_repo=inventory_repo,
    )
    finish_workout = FinishWorkoutUseCase(
        stats_repo=stats_repo,
        workout_repo=workout_repo,
        inventory_repo=inventory_repo,
        catalog=catalog,
        rate_limiter=rate_limiter,
        achievements=evaluate_achievements,
    )

    logger.info(
        "Progression engine ready (%s, %d catalog exercises)",
        settings.environment,
        len(catalog),
    )
    return Engine(
        catalog=catalog,
        rate_limiter=rate_limiter,
        finish_workout=finish_workout,
        evaluate_achievements=evaluate_achievements,
        equip_item=EquipItemUseCase(inventory_repo=inventory_repo),
        progress_summary=GetProgressSummaryUseCase(
            stats_repo=stats_repo,
            inventory_repo=inventory_repo,
            ranks=RankCalculator(),
        ),
        workouts=GetWorkoutUseCase(workout_repo=workout_repo),
    )


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized for progression engine")


def _create_supabase_client(settings: Settings) -> Client:
    if not settings.supabase_url or not settings.supabase_key:
        raise RuntimeError(
            "Supabase is not configured: set SUPABASE_URL and "
            "SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_ANON_KEY)"
        )
    return create_client(settings.supabase_url, settings.supabase_key)


def _load_catalog(settings: Settings) -> ExerciseCatalog:
    if settings.exercise_catalog_path:
        return ExerciseCatalog.from_yaml(settings.exercise_catalog_path)
    return load_default_catalog()
