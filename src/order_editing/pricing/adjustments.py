"""Adjustment provider port and the default discount-based provider."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from order_editing.order.order import DiscountRuleType


@dataclass(frozen=True)
class AdjustmentData:
    discount_code: str | None
    description: str | None
    amount: float


class AdjustmentProvider(ABC):
    @abstractmethod
    def get_adjustments(self, order, line_item) -> list[AdjustmentData]:
        """Return the price adjustments the order's discounts grant the line item."""
        ...


class DiscountAdjustmentProvider(AdjustmentProvider):
    """Percentage and fixed discounts, applied per line.

    Lines that disallow discounts and gift card lines get no adjustments.
    A line never receives more discount than its own subtotal.
    """

    def get_adjustments(self, order, line_item):
        if not line_item.allow_discounts or line_item.is_giftcard:
            return []

        line_subtotal = line_item.unit_price * line_item.quantity
        remaining = line_subtotal
        adjustments = []

        for discount in order.discounts:
            if discount.rule_type == DiscountRuleType.PERCENTAGE.value:
                amount = line_subtotal * (discount.value or 0.0) / 100
                description = f"{discount.code}: {discount.value:g}% off"
            elif discount.rule_type == DiscountRuleType.FIXED.value:
                amount = (discount.value or 0.0) * line_item.quantity
                description = f"{discount.code}: {discount.value:g} off per unit"
            else:
                continue

            amount = round(min(amount, remaining), 2)
            if amount <= 0:
                continue
            remaining -= amount
            adjustments.append(AdjustmentData(discount_code=discount.code, description=description, amount=amount))

        return adjustments
