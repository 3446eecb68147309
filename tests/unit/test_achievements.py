"""
Unit tests for achievement rule loading and evaluation.

Part of RQ-108: Achievement unlocks
"""

import logging

import pytest
from pydantic import ValidationError

from backend.core.achievements import load_achievements, pending_unlocks
from domain.models import InvalidRequirementError, UserStats

pytestmark = pytest.mark.unit


ROWS = [
    {"id": "first-workout", "title": "First Steps", "requirement": "total_workouts >= 1"},
    {"id": "leg-day", "title": "Leg Day", "requirement": "legs_xp >= 500", "item_id": "quad-guards"},
    {"id": "level-5", "title": "Getting Serious", "requirement": "level >= 5"},
]


class TestLoadAchievements:
    def test_decodes_rows_in_order(self):
        achievements = load_achievements(ROWS)
        assert [a.id for a in achievements] == ["first-workout", "leg-day", "level-5"]
        assert achievements[1].item_id == "quad-guards"
        assert str(achievements[1].requirement) == "legs_xp >= 500"

    def test_malformed_rule_skipped_with_warning(self, caplog):
        rows = ROWS + [{"id": "broken", "requirement": "legs_xp >>= 500"}]
        with caplog.at_level(logging.WARNING):
            achievements = load_achievements(rows)
        assert len(achievements) == 3
        assert "broken" in caplog.text

    def test_row_missing_requirement_skipped(self):
        assert load_achievements([{"id": "no-rule"}]) == []

    def test_strict_raises_on_malformed_rule(self):
        with pytest.raises(InvalidRequirementError):
            load_achievements([{"id": "broken", "requirement": "strength > 1"}], strict=True)

    def test_strict_raises_on_missing_fields(self):
        with pytest.raises(ValidationError):
            load_achievements([{"requirement": "level >= 2"}], strict=True)

    def test_rows_are_not_mutated(self):
        row = {"id": "a1", "requirement": "xp >= 10"}
        load_achievements([row])
        assert row["requirement"] == "xp >= 10"


class TestPendingUnlocks:
    def test_met_and_not_yet_unlocked(self):
        achievements = load_achievements(ROWS)
        stats = UserStats(user_id="user-1", total_workouts=1, legs_xp=500)
        pending = pending_unlocks(stats, achievements, unlocked_ids=set())
        assert [a.id for a in pending] == ["first-workout", "leg-day"]

    def test_already_unlocked_excluded(self):
        achievements = load_achievements(ROWS)
        stats = UserStats(user_id="user-1", total_workouts=1, legs_xp=500)
        pending = pending_unlocks(stats, achievements, unlocked_ids={"first-workout"})
        assert [a.id for a in pending] == ["leg-day"]

    def test_nothing_met(self):
        assert pending_unlocks(UserStats.new("user-1"), load_achievements(ROWS), []) == []
