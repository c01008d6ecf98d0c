"""Configurable in-memory inventory for development and testing.

Variants without configured stock are treated as unlimited, so tests only
need to configure the variants whose shortage they exercise.
"""

from order_editing.inventory.port import InventoryConfirmation, InventoryService


class FakeInventoryService(InventoryService):
    def __init__(self) -> None:
        self.stock: dict[str, int] = {}
        self.calls: list[dict] = []

    def set_stock(self, variant_id: str, available: int) -> None:
        self.stock[str(variant_id)] = available

    def confirm_inventory(self, variant_id: str, quantity: int) -> InventoryConfirmation:
        self.calls.append({"method": "confirm_inventory", "variant_id": str(variant_id), "quantity": quantity})

        available = self.stock.get(str(variant_id))
        if available is None or available >= quantity:
            return InventoryConfirmation(
                confirmed=True,
                variant_id=str(variant_id),
                quantity=quantity,
                available=available,
            )
        return InventoryConfirmation(
            confirmed=False,
            variant_id=str(variant_id),
            quantity=quantity,
            available=available,
            failure_reason=f"Only {available} units of variant {variant_id} are available",
        )
