"""Variant catalog port (abstract interface).

Adding a line item to an order edit only knows the variant id; the catalog
supplies the title, price and product the new line item is generated from.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Variant:
    variant_id: str
    product_id: str
    sku: str
    title: str
    unit_price: float
    allow_discounts: bool = True
    is_giftcard: bool = False


class VariantCatalog(ABC):
    """Abstract variant lookup."""

    @abstractmethod
    def get_variant(self, variant_id: str) -> Variant | None:
        """Return the variant, or None when the catalog has no such variant."""
        ...
