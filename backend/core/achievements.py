"""
Achievement rule evaluation.

Part of RQ-108: Achievement unlocks

Pure half of the achievement evaluator: decoding stored achievement rows and
deciding which achievements a user's current stats satisfy. Writing unlocks
and granting items is done by EvaluateAchievementsUseCase.
"""
import logging
from typing import Any, Collection, Dict, Iterable, List

from pydantic import ValidationError

from domain.models import Achievement, InvalidRequirementError, Requirement, UserStats

logger = logging.getLogger(__name__)


def load_achievements(
    rows: Iterable[Dict[str, Any]],
    *,
    strict: bool = False,
) -> List[Achievement]:
    """
    Decode stored achievement rows, parsing each rule once.

    Args:
        rows: Achievement rows with id, requirement text and optional item_id
        strict: Raise on the first malformed row instead of skipping it

    Returns:
        Decoded achievements in row order

    Raises:
        InvalidRequirementError: In strict mode, for a malformed rule
        ValidationError: In strict mode, for a row missing required fields
    """
    achievements: List[Achievement] = []
    for row in rows:
        try:
            data = dict(row)
            if isinstance(data.get("requirement"), str):
                data["requirement"] = Requirement.parse(data["requirement"])
            achievements.append(Achievement.model_validate(data))
        except (ValidationError, InvalidRequirementError) as e:
            if strict:
                raise
            logger.warning(
                "Skipping achievement %s with invalid definition: %s",
                row.get("id"),
                e,
            )
    return achievements


def pending_unlocks(
    stats: UserStats,
    achievements: Iterable[Achievement],
    unlocked_ids: Collection[str],
) -> List[Achievement]:
    """
    Achievements whose rule is met and that are not yet unlocked.

    Args:
        stats: Current cumulative stats
        achievements: Decoded achievement catalog
        unlocked_ids: IDs the user has already unlocked

    Returns:
        Achievements to unlock, in catalog order
    """
    return [
        achievement
        for achievement in achievements
        if achievement.id not in unlocked_ids and achievement.requirement.is_met(stats)
    ]
