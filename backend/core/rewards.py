"""
Reward distribution for finished workouts.

Part of RQ-102: Muscle group reward buckets
Part of RQ-107: Equipped item bonuses

Each completed set earns a flat base reward for the primary muscle group of
its exercise. Equipped items add a percentage bonus to a group (or to every
group); bonuses from several items stack additively.

XP is rounded half-up, gold is floored, so gold is never overpaid.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from backend.core.metrics import round_half_up
from backend.core.taxonomy import ExerciseCatalog
from domain.models import EquippedItem, MuscleGroup, MUSCLE_GROUPS, WorkoutSession

logger = logging.getLogger(__name__)

BASE_XP_PER_SET = 10
BASE_GOLD_PER_SET = 2


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class MuscleGroupReward:
    """XP and gold earned by one muscle group."""
    xp: int = 0
    gold: int = 0


@dataclass
class RewardBreakdown:
    """Per-group and total rewards for one session."""
    per_muscle_group: Dict[MuscleGroup, MuscleGroupReward] = field(
        default_factory=lambda: {group: MuscleGroupReward() for group in MUSCLE_GROUPS}
    )
    total_xp: int = 0
    total_gold: int = 0
    unrewarded_exercises: List[str] = field(default_factory=list)

    @property
    def xp_by_muscle_group(self) -> Dict[MuscleGroup, int]:
        return {group: reward.xp for group, reward in self.per_muscle_group.items()}


# =============================================================================
# Bonuses
# =============================================================================


def xp_bonus_percent(equipped: Iterable[EquippedItem], group: MuscleGroup) -> float:
    """Summed XP bonus percentage of equipped items targeting ``group`` or 'all'."""
    return sum(
        entry.item.xp_bonus.bonus_percent
        for entry in equipped
        if entry.is_equipped
        and entry.item.xp_bonus is not None
        and entry.item.xp_bonus.applies_to(group)
    )


def gold_bonus_percent(equipped: Iterable[EquippedItem], group: MuscleGroup) -> float:
    """Summed gold bonus percentage of equipped items targeting ``group`` or 'all'."""
    return sum(
        entry.item.gold_bonus.bonus_percent
        for entry in equipped
        if entry.is_equipped
        and entry.item.gold_bonus is not None
        and entry.item.gold_bonus.applies_to(group)
    )


def apply_bonus(amount: float, bonus_percent: float) -> float:
    """
    Scale ``amount`` by a percentage bonus.

    Computed as ``amount * (100 + pct) / 100`` so that e.g. 10 XP with a 10%
    bonus is exactly 11.0 rather than 11.000000000000002.
    """
    return amount * (100 + bonus_percent) / 100


# =============================================================================
# Distribution
# =============================================================================


def distribute(
    session: WorkoutSession,
    catalog: ExerciseCatalog,
    equipped: Iterable[EquippedItem] = (),
) -> RewardBreakdown:
    """
    Compute XP and gold gains for every muscle group.

    Exercises that are not in the catalog earn nothing but are reported in
    ``unrewarded_exercises``. Pure: nothing is persisted.

    Args:
        session: Session whose completed sets are rewarded
        catalog: Exercise catalog used to resolve primary muscle groups
        equipped: The user's inventory entries joined with their items

    Returns:
        RewardBreakdown with all seven groups present
    """
    equipped = [entry for entry in equipped if entry.is_equipped]
    completed_by_group: Dict[MuscleGroup, int] = {}
    breakdown = RewardBreakdown()

    for exercise in session.exercises:
        completed = len(exercise.completed_sets)
        if completed == 0:
            continue
        entry = catalog.resolve(exercise.name)
        if entry is None:
            logger.debug("No catalog entry for '%s'; no rewards", exercise.name)
            breakdown.unrewarded_exercises.append(exercise.name)
            continue
        group = entry.muscle_group
        completed_by_group[group] = completed_by_group.get(group, 0) + completed

    for group, sets in completed_by_group.items():
        xp = apply_bonus(sets * BASE_XP_PER_SET, xp_bonus_percent(equipped, group))
        gold = apply_bonus(sets * BASE_GOLD_PER_SET, gold_bonus_percent(equipped, group))
        breakdown.per_muscle_group[group] = MuscleGroupReward(
            xp=round_half_up(xp),
            gold=math.floor(gold),
        )

    breakdown.total_xp = sum(r.xp for r in breakdown.per_muscle_group.values())
    breakdown.total_gold = sum(r.gold for r in breakdown.per_muscle_group.values())
    return breakdown
