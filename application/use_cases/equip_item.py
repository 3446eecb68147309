"""
EquipItem Use Case.

Part of RQ-107: Equipped item bonuses

At most one item per slot type is equipped. The invariant is kept by the
unequip-then-equip sequence here, not by the data model.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from application.exceptions import PersistenceError
from application.ports import InventoryRepository
from domain.models import Item

logger = logging.getLogger(__name__)


@dataclass
class EquipItemResult:
    """Result of the EquipItem use case execution."""

    success: bool
    item: Optional[Item] = None
    unequipped: int = 0
    error: Optional[str] = None


class EquipItemUseCase:
    """
    Use case for equipping and unequipping owned items.

    Usage:
        >>> use_case = EquipItemUseCase(inventory_repo=inventory_repo)
        >>> result = use_case.execute(user_id="user-123", item_id="iron-helm")
        >>> result.success
        True
    """

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def execute(self, user_id: str, item_id: str) -> EquipItemResult:
        """
        Equip an owned item, unequipping whatever occupies its slot.

        Args:
            user_id: Owner of the inventory
            item_id: Item to equip

        Returns:
            EquipItemResult with the equipped item and the number of items
            taken off the slot
        """
        try:
            item = self._owned_item(user_id, item_id)
            if item is None:
                return EquipItemResult(
                    success=False, error="Item is not in your inventory"
                )

            unequipped = self._inventory_repo.unequip_slot(user_id, item.slot_type)
            self._inventory_repo.set_equipped(user_id, item_id, True)
            logger.info(
                "User %s equipped %s in slot %s", user_id, item_id, item.slot_type
            )
            return EquipItemResult(success=True, item=item, unequipped=unequipped)

        except PersistenceError as e:
            logger.error(f"Failed to equip item {item_id} for user {user_id}: {e}")
            return EquipItemResult(success=False, error=str(e))

        except Exception as e:
            logger.exception(f"EquipItem use case failed: {e}")
            return EquipItemResult(success=False, error=str(e))

    def execute_unequip(self, user_id: str, item_id: str) -> EquipItemResult:
        """
        Convenience method for taking an item off.

        Args:
            user_id: Owner of the inventory
            item_id: Item to unequip

        Returns:
            EquipItemResult with ``unequipped`` set to 1
        """
        try:
            item = self._owned_item(user_id, item_id)
            if item is None:
                return EquipItemResult(
                    success=False, error="Item is not in your inventory"
                )
            self._inventory_repo.set_equipped(user_id, item_id, False)
            logger.info("User %s unequipped %s", user_id, item_id)
            return EquipItemResult(success=True, item=item, unequipped=1)

        except PersistenceError as e:
            logger.error(f"Failed to unequip item {item_id} for user {user_id}: {e}")
            return EquipItemResult(success=False, error=str(e))

    def _owned_item(self, user_id: str, item_id: str) -> Optional[Item]:
        entry = self._inventory_repo.get_entry(user_id, item_id)
        if not entry or (entry.get("quantity") or 0) < 1:
            return None
        row = self._inventory_repo.get_item(item_id)
        if row is None:
            logger.warning(f"Inventory entry for unknown item {item_id}")
            return None
        return Item.model_validate(row)
