"""Inventory service port (abstract interface).

Order edits that add or grow line items must confirm that the extra units
are in stock before anything is written. Adapters talk to the inventory
context (or a warehouse system); FakeInventoryService serves dev/test.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class InventoryConfirmation:
    """Result of a stock confirmation."""

    confirmed: bool
    variant_id: str
    quantity: int
    available: int | None = None
    failure_reason: str | None = None


class InventoryService(ABC):
    """Abstract inventory interface."""

    @abstractmethod
    def confirm_inventory(self, variant_id: str, quantity: int) -> InventoryConfirmation:
        """Confirm that `quantity` more units of the variant can be sold."""
        ...
