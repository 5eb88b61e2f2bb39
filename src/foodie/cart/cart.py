"""Client cart state: the menu items a customer picked before checkout.

The cart never talks to the server. Its value is a JSON list of
``{"menuItem": {...}, "quantity": n}`` entries kept in a ``CartStorage``;
every read goes back to storage, so views sharing a backend always see the
latest write.
"""

import json
from dataclasses import dataclass
from decimal import Decimal

from foodie.cart.storage import MemoryCartStorage
from foodie.shared.money import line_total, to_money


@dataclass(frozen=True)
class CartItem:
    menu_item: dict
    quantity: int

    @property
    def menu_item_id(self) -> str:
        return self.menu_item["id"]

    @property
    def subtotal(self) -> Decimal:
        return line_total(self.menu_item.get("price", 0), self.quantity)


def _valid_entry(entry) -> bool:
    if not isinstance(entry, dict):
        return False
    menu_item = entry.get("menuItem")
    quantity = entry.get("quantity")
    return (
        isinstance(menu_item, dict)
        and isinstance(menu_item.get("id"), str)
        and isinstance(quantity, int)
        and not isinstance(quantity, bool)
        and quantity > 0
    )


class CartState:
    def __init__(self, storage=None):
        self.storage = storage or MemoryCartStorage()

    # -------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------
    def _entries(self) -> list[dict]:
        raw = self.storage.read()
        if not raw:
            return []
        try:
            entries = json.loads(raw)
        except ValueError:
            return []
        if not isinstance(entries, list):
            return []
        return [entry for entry in entries if _valid_entry(entry)]

    @property
    def items(self) -> list[CartItem]:
        return [CartItem(menu_item=entry["menuItem"], quantity=entry["quantity"]) for entry in self._entries()]

    @property
    def total_amount(self) -> Decimal:
        return to_money(sum((item.subtotal for item in self.items), Decimal("0")))

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    def is_empty(self) -> bool:
        return not self._entries()

    def to_order_lines(self) -> list[dict]:
        return [{"menuItemId": item.menu_item_id, "quantity": item.quantity} for item in self.items]

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def _save(self, entries: list[dict]) -> None:
        self.storage.write(json.dumps(entries))

    def add_item(self, menu_item: dict, quantity: int = 1) -> None:
        """Add ``quantity`` of ``menu_item``, increasing the line if it is already in the cart."""
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")

        entries = self._entries()
        for entry in entries:
            if entry["menuItem"]["id"] == menu_item["id"]:
                entry["quantity"] += quantity
                break
        else:
            entries.append({"menuItem": menu_item, "quantity": quantity})
        self._save(entries)

    def remove_item(self, menu_item_id: str) -> None:
        self._save([entry for entry in self._entries() if entry["menuItem"]["id"] != menu_item_id])

    def update_quantity(self, menu_item_id: str, quantity: int) -> None:
        """Set the quantity of a line; zero or less removes it."""
        if quantity <= 0:
            self.remove_item(menu_item_id)
            return

        entries = self._entries()
        for entry in entries:
            if entry["menuItem"]["id"] == menu_item_id:
                entry["quantity"] = quantity
        self._save(entries)

    def clear(self) -> None:
        self._save([])

    def subscribe(self, callback):
        """Call ``callback(cart)`` whenever the shared storage is written."""
        return self.storage.subscribe(lambda _value: callback(self))
