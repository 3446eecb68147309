"""
Unit tests for fake repository implementations.

Part of RQ-109: Persist finished workouts

These tests verify that fake repositories:
- Support seeding and reset for test isolation
- Behave like the store constraints they stand in for
- Support failure injection
"""
import pytest

from application.exceptions import (
    DuplicateUnlockError,
    ItemGrantError,
    PersistenceError,
    StatsVersionConflictError,
)
from tests.fakes import (
    FakeAchievementRepository,
    FakeInventoryRepository,
    FakeUserStatsRepository,
    FakeWorkoutRepository,
    build_session,
    completed,
    equip,
    make_item,
)

# All tests in this module are pure logic tests - mark as unit
pytestmark = pytest.mark.unit


# =============================================================================
# FakeUserStatsRepository Tests
# =============================================================================


class TestFakeUserStatsRepository:
    def test_seed_fills_initial_values(self):
        repo = FakeUserStatsRepository()
        repo.seed([{"user_id": "u1", "xp": 90}])

        row = repo.get("u1")
        assert row["xp"] == 90
        assert row["level"] == 1
        assert row["version"] == 0

    def test_create_is_idempotent(self):
        repo = FakeUserStatsRepository()
        repo.create("u1")
        repo.create("u1")

        assert len(repo.get_all()) == 1
        assert repo.create_calls == 2

    def test_get_returns_copy(self):
        repo = FakeUserStatsRepository()
        repo.create("u1")
        repo.get("u1")["xp"] = 999

        assert repo.get("u1")["xp"] == 0

    def test_compare_and_swap(self):
        repo = FakeUserStatsRepository()
        repo.create("u1")

        repo.compare_and_swap("u1", {"xp": 10, "version": 1}, expected_version=0)
        assert repo.get("u1")["xp"] == 10

        with pytest.raises(StatsVersionConflictError):
            repo.compare_and_swap("u1", {"xp": 20, "version": 1}, expected_version=0)
        assert repo.get("u1")["xp"] == 10

    def test_compare_and_swap_missing_row(self):
        with pytest.raises(StatsVersionConflictError):
            FakeUserStatsRepository().compare_and_swap("u1", {}, expected_version=0)

    def test_fail_with_and_reset(self):
        repo = FakeUserStatsRepository()
        repo.create("u1")
        repo.fail_with = PersistenceError("down")

        with pytest.raises(PersistenceError):
            repo.get("u1")

        repo.reset()
        assert repo.get("u1") is None


# =============================================================================
# FakeWorkoutRepository Tests
# =============================================================================


class TestFakeWorkoutRepository:
    def test_save_finished_writes_both(self):
        repo = FakeWorkoutRepository()
        repo.stats_repo.create("u1")

        saved = repo.save_finished(
            "u1", workout={"notes": "ok"}, stats={"xp": 30, "version": 1}, expected_version=0
        )

        assert saved["id"]
        assert repo.get("u1", saved["id"])["notes"] == "ok"
        assert repo.stats_repo.get("u1")["xp"] == 30

    def test_conflict_writes_nothing(self):
        repo = FakeWorkoutRepository()
        repo.stats_repo.seed([{"user_id": "u1", "version": 2}])

        with pytest.raises(StatsVersionConflictError):
            repo.save_finished("u1", workout={}, stats={"version": 2}, expected_version=1)

        assert repo.get_all() == []
        assert repo.save_calls == 1

    def test_get_checks_owner(self):
        repo = FakeWorkoutRepository()
        repo.seed([{"id": "w1", "user_id": "u1"}])

        assert repo.get("u2", "w1") is None

    def test_reset(self):
        repo = FakeWorkoutRepository()
        repo.seed([{"id": "w1", "user_id": "u1"}])
        repo.reset()
        assert repo.get_all() == []


# =============================================================================
# FakeAchievementRepository Tests
# =============================================================================


class TestFakeAchievementRepository:
    def test_unlock_is_unique(self):
        repo = FakeAchievementRepository()
        repo.insert_unlock("u1", "a1")

        with pytest.raises(DuplicateUnlockError):
            repo.insert_unlock("u1", "a1")

        assert repo.insert_attempts == 2
        assert len(repo.get_all_unlocks()) == 1

    def test_unlocks_are_per_user(self):
        repo = FakeAchievementRepository()
        repo.insert_unlock("u1", "a1")
        repo.insert_unlock("u2", "a1")

        assert [u["achievement_id"] for u in repo.list_unlocks("u1")] == ["a1"]

    def test_stale_reads_hide_unlocks(self):
        repo = FakeAchievementRepository()
        repo.seed_unlocks([{"user_id": "u1", "achievement_id": "a1"}])
        repo.stale_reads = True

        assert repo.list_unlocks("u1") == []
        assert repo.get_unlock("u1", "a1") is None


# =============================================================================
# FakeInventoryRepository Tests
# =============================================================================


class TestFakeInventoryRepository:
    def test_equip_helper(self):
        repo = FakeInventoryRepository()
        equip(repo, "u1", make_item("helm"))

        [row] = repo.get_equipped_items("u1")
        assert row["item"]["id"] == "helm"
        assert row["quantity"] == 1

    def test_fail_grants(self):
        repo = FakeInventoryRepository()
        repo.fail_grants = True

        with pytest.raises(ItemGrantError):
            repo.insert_entry("u1", "helm")

    def test_duplicate_entry(self):
        repo = FakeInventoryRepository()
        repo.insert_entry("u1", "helm")

        with pytest.raises(ItemGrantError):
            repo.insert_entry("u1", "helm")

    def test_set_equipped_requires_entry(self):
        with pytest.raises(PersistenceError):
            FakeInventoryRepository().set_equipped("u1", "helm", True)


# =============================================================================
# Factory Tests
# =============================================================================


class TestFactories:
    def test_build_session(self):
        session = build_session(
            [("Bench Press", "standard", completed(2, reps=8, weight=100))],
            elapsed_seconds=60,
        )

        assert session.is_active
        assert session.exercises[0].id == "ex-0"
        assert [s.id for s in session.exercises[0].sets] == ["ex-0-set-0", "ex-0-set-1"]
        assert session.total_completed_sets == 2

    def test_make_item(self):
        item = make_item("iron-helm", rarity="rare")
        assert item["name"] == "Iron Helm"
        assert item["rarity"] == "rare"
