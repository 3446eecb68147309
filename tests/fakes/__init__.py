"""
Fake Repository Implementations for Testing.

Part of RQ-109: Persist finished workouts

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Supports failure injection (fail_with, fail_grants, stale_reads)
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeUserStatsRepository, make_item

    repo = FakeUserStatsRepository()
    repo.seed([{"user_id": "user1", "xp": 90}])
"""
from typing import Optional, Dict, Any, List, Tuple

from domain.models import ExerciseEntry, SetEntry, WorkoutSession

from tests.fakes.user_stats_repository import FakeUserStatsRepository
from tests.fakes.workout_repository import FakeWorkoutRepository
from tests.fakes.achievement_repository import FakeAchievementRepository
from tests.fakes.inventory_repository import FakeInventoryRepository


# =============================================================================
# Factory Functions
# =============================================================================


def build_session(
    exercises: List[Tuple[str, str, List[Dict[str, Any]]]],
    *,
    elapsed_seconds: int = 0,
    notes: str = "",
) -> WorkoutSession:
    """
    Build an active session from (name, set_kind, sets) tuples.

    Example:
        build_session([("Bench Press", "standard", completed(3, reps=8, weight=100))])
    """
    entries = []
    for i, (name, set_kind, sets) in enumerate(exercises):
        entries.append(
            ExerciseEntry(
                id=f"ex-{i}",
                name=name,
                set_kind=set_kind,
                sets=[SetEntry(id=f"ex-{i}-set-{j}", **fields) for j, fields in enumerate(sets)],
            )
        )
    return WorkoutSession(exercises=entries, elapsed_seconds=elapsed_seconds, notes=notes)


def completed(count: int, **fields: Any) -> List[Dict[str, Any]]:
    """``count`` identical completed set dicts."""
    return [{"completed": True, **fields} for _ in range(count)]


def make_item(
    item_id: str,
    *,
    slot_type: str = "head",
    rarity: str = "common",
    xp_bonus: Optional[Dict[str, Any]] = None,
    gold_bonus: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build an item row as stored in the items table.

    Example:
        make_item("lucky-charm", xp_bonus={"muscle_group": "all", "bonus_percent": 10})
    """
    return {
        "id": item_id,
        "name": item_id.replace("-", " ").title(),
        "slot_type": slot_type,
        "rarity": rarity,
        "price": 100,
        "xp_bonus": xp_bonus,
        "gold_bonus": gold_bonus,
    }


def equip(
    repo: FakeInventoryRepository,
    user_id: str,
    item: Dict[str, Any],
) -> None:
    """Seed ``item`` into the catalog and equip it for ``user_id``."""
    repo.seed_items([item])
    repo.seed_entries([{"user_id": user_id, "item_id": item["id"], "is_equipped": True}])


__all__ = [
    # Fakes
    "FakeUserStatsRepository",
    "FakeWorkoutRepository",
    "FakeAchievementRepository",
    "FakeInventoryRepository",
    # Factories
    "build_session",
    "completed",
    "make_item",
    "equip",
]
