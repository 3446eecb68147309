"""
Fake Inventory Repository for testing.

Part of RQ-107: Equipped item bonuses

In-memory implementation of InventoryRepository covering the item catalog
and user inventories.
"""
from typing import Optional, List, Dict, Any, Tuple
import copy

from application.exceptions import ItemGrantError, PersistenceError


class FakeInventoryRepository:
    """
    In-memory fake implementation of InventoryRepository for testing.

    Set ``fail_grants`` to make inventory writes used by item grants fail.

    Usage:
        repo = FakeInventoryRepository()
        repo.seed_items([{"id": "helm", "name": "Helm", "slot_type": "head"}])
        repo.seed_entries([{"user_id": "user1", "item_id": "helm", "is_equipped": True}])
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._items: Dict[str, Dict[str, Any]] = {}
        self._entries: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.fail_grants = False

    def reset(self) -> None:
        """Clear items, inventories and failure injection."""
        self._items.clear()
        self._entries.clear()
        self.fail_grants = False

    def seed_items(self, items: List[Dict[str, Any]]) -> None:
        """Seed the item catalog. Must include 'id', 'name' and 'slot_type'."""
        for item in items:
            self._items[item["id"]] = copy.deepcopy(item)

    def seed_entries(self, entries: List[Dict[str, Any]]) -> None:
        """Seed inventory rows. Must include 'user_id' and 'item_id'."""
        for entry in entries:
            key = (entry["user_id"], entry["item_id"])
            self._entries[key] = {"quantity": 1, "is_equipped": False, **entry}

    def get_all_entries(self) -> List[Dict[str, Any]]:
        """Get all inventory rows (test helper)."""
        return [copy.deepcopy(e) for e in self._entries.values()]

    # =========================================================================
    # InventoryRepository Protocol Methods
    # =========================================================================

    def get_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        item = self._items.get(item_id)
        return copy.deepcopy(item) if item else None

    def get_entry(
        self,
        user_id: str,
        item_id: str,
    ) -> Optional[Dict[str, Any]]:
        entry = self._entries.get((user_id, item_id))
        return copy.deepcopy(entry) if entry else None

    def insert_entry(
        self,
        user_id: str,
        item_id: str,
        *,
        quantity: int = 1,
        is_equipped: bool = False,
    ) -> Dict[str, Any]:
        if self.fail_grants:
            raise ItemGrantError(f"Failed to add item {item_id}")
        key = (user_id, item_id)
        if key in self._entries:
            raise ItemGrantError(f"Item {item_id} already owned", code="23505")
        self._entries[key] = {
            "user_id": user_id,
            "item_id": item_id,
            "quantity": quantity,
            "is_equipped": is_equipped,
        }
        return copy.deepcopy(self._entries[key])

    def update_quantity(
        self,
        user_id: str,
        item_id: str,
        quantity: int,
    ) -> Dict[str, Any]:
        if self.fail_grants:
            raise ItemGrantError(f"Failed to update item {item_id}")
        entry = self._entries.get((user_id, item_id))
        if entry is None:
            raise ItemGrantError(f"No inventory entry {item_id}")
        entry["quantity"] = quantity
        return copy.deepcopy(entry)

    def get_equipped_items(self, user_id: str) -> List[Dict[str, Any]]:
        rows = []
        for (uid, item_id), entry in self._entries.items():
            if uid != user_id or not entry.get("is_equipped"):
                continue
            rows.append({**copy.deepcopy(entry), "item": self.get_item(item_id)})
        return rows

    def unequip_slot(self, user_id: str, slot_type: str) -> int:
        changed = 0
        for (uid, item_id), entry in self._entries.items():
            item = self._items.get(item_id)
            if (
                uid == user_id
                and entry.get("is_equipped")
                and item is not None
                and item["slot_type"] == slot_type
            ):
                entry["is_equipped"] = False
                changed += 1
        return changed

    def set_equipped(
        self,
        user_id: str,
        item_id: str,
        is_equipped: bool,
    ) -> Dict[str, Any]:
        entry = self._entries.get((user_id, item_id))
        if entry is None:
            raise PersistenceError(f"No inventory entry {item_id}")
        entry["is_equipped"] = is_equipped
        return copy.deepcopy(entry)
