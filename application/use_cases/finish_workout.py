"""
FinishWorkout Use Case.

Part of RQ-105: Workout completion summary
Part of RQ-110: Finish workout error taxonomy

Turns a finished workout session into validated metrics, rewards, a level
change and (optionally) achievement unlocks.

Ordering: validate -> compute deltas -> persist deltas -> report success.
Nothing is applied in memory before the store accepts the write, so a
failed or conflicting write can be retried from a fresh read without ever
double-applying rewards.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.exceptions import (
    PersistenceError,
    RateLimitExceededError,
    SessionStateError,
    SessionValidationError,
)
from application.ports import (
    InventoryRepository,
    UserStatsRepository,
    WorkoutRepository,
)
from application.use_cases.evaluate_achievements import (
    EvaluateAchievementsUseCase,
    UnlockEvent,
)
from backend.core.leveling import LevelResult, apply_xp
from backend.core.metrics import SessionMetrics, aggregate
from backend.core.rate_limiter import SlidingWindowRateLimiter
from backend.core.rewards import RewardBreakdown, distribute
from backend.core.set_validator import SetViolation, validate_session
from backend.core.taxonomy import ExerciseCatalog
from domain.converters import (
    db_row_to_stats,
    db_rows_to_equipped_items,
    session_to_workout_record,
)
from domain.models import StatsDelta, UserStats, WorkoutSession

logger = logging.getLogger(__name__)


@dataclass
class FinishWorkoutResult:
    """Result of the FinishWorkout use case execution.

    On success this carries everything the completion screen shows.
    """

    success: bool
    workout_id: Optional[str] = None
    metrics: Optional[SessionMetrics] = None
    rewards: Optional[RewardBreakdown] = None
    level: Optional[LevelResult] = None
    stats: Optional[UserStats] = None
    unlocked: List[UnlockEvent] = field(default_factory=list)
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)
    violations: List[SetViolation] = field(default_factory=list)
    retryable: bool = False

    @property
    def leveled_up(self) -> bool:
        return bool(self.level and self.level.leveled_up)


class FinishWorkoutUseCase:
    """
    Use case for finishing an active workout session.

    Orchestrates the following workflow:
    1. Reject sessions that are not active
    2. Validate every completed set (all violations at once)
    3. Throttle repeated finishes (optional rate limiter); rejected and
       invalid sessions never use up a slot
    4. Read stats and equipped items
    5. Aggregate metrics, distribute rewards, apply XP to the level
    6. Atomically persist the workout record and the stats (compare-and-swap)
    7. Clear the session
    8. Evaluate achievements against the new stats (never fails the finish)

    Usage:
        >>> use_case = FinishWorkoutUseCase(
        ...     stats_repo=stats_repo,
        ...     workout_repo=workout_repo,
        ...     inventory_repo=inventory_repo,
        ...     catalog=load_default_catalog(),
        ... )
        >>> result = use_case.execute(session, user_id="user-123")
        >>> if result.success:
        ...     print(f"+{result.rewards.total_xp} XP, level {result.level.new_level}")
    """

    def __init__(
        self,
        stats_repo: UserStatsRepository,
        workout_repo: WorkoutRepository,
        inventory_repo: InventoryRepository,
        catalog: ExerciseCatalog,
        *,
        rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        achievements: Optional[EvaluateAchievementsUseCase] = None,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            stats_repo: Repository for the per-user stats document
            workout_repo: Repository that stores the workout with the stats update
            inventory_repo: Repository for equipped items (reward bonuses)
            catalog: Exercise catalog for muscle group attribution
            rate_limiter: Per-user throttle for repeated finishes
            achievements: Evaluator run after a successful finish
        """
        self._stats_repo = stats_repo
        self._workout_repo = workout_repo
        self._inventory_repo = inventory_repo
        self._catalog = catalog
        self._rate_limiter = rate_limiter
        self._achievements = achievements

    def execute(
        self,
        session: WorkoutSession,
        user_id: str,
    ) -> FinishWorkoutResult:
        """
        Execute the finish workout workflow.

        The session is cleared only when the workout was persisted; on any
        failure it is left untouched so the user can correct and retry.

        Args:
            session: The active workout session
            user_id: Owner of the session

        Returns:
            FinishWorkoutResult with the completion report or the failure
        """
        try:
            # Step 1: Only active sessions can be finished
            if not session.is_active:
                raise SessionStateError(
                    f"Cannot finish a workout that is {session.status.value}"
                )

            # Step 2: Validate every completed set
            validation = validate_session(session)
            if not validation.is_valid:
                raise SessionValidationError(validation.violations)

            # Step 3: Throttle attempts that would reach the store
            self._throttle(user_id)

            # Step 4: Read current state
            stats = self._load_stats(user_id)
            equipped = db_rows_to_equipped_items(
                self._inventory_repo.get_equipped_items(user_id)
            )

            # Step 5: Compute deltas
            metrics = aggregate(session)
            rewards = distribute(session, self._catalog, equipped)
            level = apply_xp(stats.level, stats.xp, rewards.total_xp)
            updated = stats.apply(
                StatsDelta(
                    xp=rewards.total_xp,
                    gold=rewards.total_gold,
                    new_level=level.new_level,
                    xp_by_muscle_group=rewards.xp_by_muscle_group,
                    workouts=1,
                    sets=metrics.total_sets,
                    reps=metrics.total_reps,
                    volume=metrics.total_volume,
                    duration=session.elapsed_seconds,
                )
            )

            # Step 6: Persist workout and stats together
            workout_record = session_to_workout_record(
                session,
                total_sets=metrics.total_sets,
                total_reps=metrics.total_reps,
                total_volume=metrics.total_volume,
            )
            saved = self._workout_repo.save_finished(
                user_id,
                workout=workout_record,
                stats=updated.to_record(),
                expected_version=stats.version,
            )

            # Step 7: Clear the session
            session.mark_finished()
            workout_id = saved.get("id") if saved else None
            logger.info(
                "Workout %s finished for user %s: %d sets, +%d XP, +%d gold",
                workout_id,
                user_id,
                metrics.total_sets,
                rewards.total_xp,
                rewards.total_gold,
            )
            if level.leveled_up:
                logger.info(
                    "User %s leveled up: %d -> %d",
                    user_id,
                    level.previous_level,
                    level.new_level,
                )

            # Step 8: Achievements (best effort)
            unlocked = self._evaluate_achievements(user_id, updated)

            return FinishWorkoutResult(
                success=True,
                workout_id=workout_id,
                metrics=metrics,
                rewards=rewards,
                level=level,
                stats=updated,
                unlocked=unlocked,
            )

        except SessionValidationError as e:
            return FinishWorkoutResult(
                success=False,
                error="Workout validation failed",
                validation_errors=[v.describe() for v in e.violations],
                violations=e.violations,
            )

        except RateLimitExceededError as e:
            logger.warning(
                f"Finish throttled for user {user_id} (retry in {e.retry_after:.2f}s)"
            )
            return FinishWorkoutResult(success=False, error=str(e), retryable=True)

        except SessionStateError as e:
            logger.warning(f"Finish rejected for user {user_id}: {e}")
            return FinishWorkoutResult(success=False, error=str(e))

        except PersistenceError as e:
            logger.error(f"Failed to persist finished workout for user {user_id}: {e}")
            return FinishWorkoutResult(
                success=False,
                error=str(e),
                retryable=e.retryable,
            )

        except Exception as e:
            logger.exception(f"FinishWorkout use case failed: {e}")
            return FinishWorkoutResult(success=False, error=str(e))

    def _throttle(self, user_id: str) -> None:
        if self._rate_limiter is None:
            return
        if not self._rate_limiter.check(user_id):
            raise RateLimitExceededError(user_id, self._rate_limiter.retry_after(user_id))

    def _load_stats(self, user_id: str) -> UserStats:
        """Read the user's stats, creating the initial document on first use."""
        row = self._stats_repo.get(user_id)
        if row is None:
            logger.info(f"Creating initial stats for user {user_id}")
            row = self._stats_repo.create(user_id)
        return db_row_to_stats(row)

    def _evaluate_achievements(self, user_id: str, stats: UserStats) -> List[UnlockEvent]:
        if self._achievements is None:
            return []
        evaluation = self._achievements.execute(user_id, stats=stats)
        if not evaluation.success:
            logger.warning(
                f"Achievement evaluation after finish failed for user {user_id}: "
                f"{evaluation.error}"
            )
        elif evaluation.partial:
            logger.warning(
                f"Achievements {', '.join(evaluation.failed)} could not be recorded "
                f"for user {user_id}; they will be retried on the next evaluation"
            )
        return evaluation.unlocked
