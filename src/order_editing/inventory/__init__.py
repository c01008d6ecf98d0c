"""Inventory service factory.

get_inventory_service() / set_inventory_service() swap implementations;
FakeInventoryService is the default.
"""

from order_editing.inventory.fake_adapter import FakeInventoryService
from order_editing.inventory.port import InventoryService

_current_service: InventoryService | None = None


def get_inventory_service() -> InventoryService:
    """Return the current inventory service. Defaults to FakeInventoryService."""
    global _current_service
    if _current_service is None:
        _current_service = FakeInventoryService()
    return _current_service


def set_inventory_service(service: InventoryService) -> None:
    """Override the active inventory service (useful for tests)."""
    global _current_service
    _current_service = service


def reset_inventory_service() -> None:
    global _current_service
    _current_service = None
