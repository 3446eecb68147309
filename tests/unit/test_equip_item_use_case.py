"""
Unit tests for EquipItemUseCase.

Part of RQ-107: Equipped item bonuses
"""

from unittest.mock import Mock

import pytest

from application.exceptions import PersistenceError
from application.use_cases import EquipItemUseCase
from tests.fakes import FakeInventoryRepository, make_item

USER = "user-123"


@pytest.fixture
def inventory_repo() -> FakeInventoryRepository:
    repo = FakeInventoryRepository()
    repo.seed_items(
        [
            make_item("iron-helm", slot_type="head"),
            make_item("gold-crown", slot_type="head", rarity="epic"),
            make_item("leather-gloves", slot_type="hands"),
        ]
    )
    repo.seed_entries(
        [
            {"user_id": USER, "item_id": "iron-helm", "is_equipped": True},
            {"user_id": USER, "item_id": "gold-crown"},
            {"user_id": USER, "item_id": "leather-gloves", "is_equipped": True},
        ]
    )
    return repo


@pytest.fixture
def use_case(inventory_repo) -> EquipItemUseCase:
    return EquipItemUseCase(inventory_repo=inventory_repo)


def _equipped_ids(repo: FakeInventoryRepository):
    return {row["item_id"] for row in repo.get_equipped_items(USER)}


class TestEquip:
    @pytest.mark.unit
    def test_replaces_item_in_same_slot(self, use_case, inventory_repo):
        result = use_case.execute(USER, "gold-crown")

        assert result.success is True
        assert result.item.id == "gold-crown"
        assert result.unequipped == 1
        assert _equipped_ids(inventory_repo) == {"gold-crown", "leather-gloves"}

    @pytest.mark.unit
    def test_other_slots_untouched(self, use_case, inventory_repo):
        use_case.execute(USER, "gold-crown")

        assert inventory_repo.get_entry(USER, "leather-gloves")["is_equipped"] is True

    @pytest.mark.unit
    def test_reequip_same_item(self, use_case, inventory_repo):
        result = use_case.execute(USER, "iron-helm")

        assert result.success is True
        assert _equipped_ids(inventory_repo) == {"iron-helm", "leather-gloves"}

    @pytest.mark.unit
    def test_item_not_owned(self, use_case, inventory_repo):
        inventory_repo.seed_items([make_item("dragon-plate", slot_type="chest")])

        result = use_case.execute(USER, "dragon-plate")

        assert result.success is False
        assert result.error == "Item is not in your inventory"

    @pytest.mark.unit
    def test_zero_quantity_is_not_owned(self, use_case, inventory_repo):
        inventory_repo.seed_entries([{"user_id": USER, "item_id": "gold-crown", "quantity": 0}])

        result = use_case.execute(USER, "gold-crown")

        assert result.success is False
        assert _equipped_ids(inventory_repo) == {"iron-helm", "leather-gloves"}

    @pytest.mark.unit
    def test_store_failure(self):
        repo = Mock()
        repo.get_entry.side_effect = PersistenceError("timeout")

        result = EquipItemUseCase(inventory_repo=repo).execute(USER, "iron-helm")

        assert result.success is False
        assert result.error == "timeout"


class TestUnequip:
    @pytest.mark.unit
    def test_unequip(self, use_case, inventory_repo):
        result = use_case.execute_unequip(USER, "iron-helm")

        assert result.success is True
        assert result.unequipped == 1
        assert _equipped_ids(inventory_repo) == {"leather-gloves"}

    @pytest.mark.unit
    def test_unequip_not_owned(self, use_case):
        result = use_case.execute_unequip(USER, "dragon-plate")

        assert result.success is False
