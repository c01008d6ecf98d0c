"""Order aggregate (CQRS) — the pricing context of a placed order.

The ordering subsystem owns the order; this context keeps the part of it
that order edits need to reprice line items: the region and its tax rates,
the discounts and gift cards applied at checkout, and the shipping methods.
Line items are their own aggregate (see lineitem/line_item.py) so that edits
can clone and reprice them without touching the order record.
"""

from enum import Enum

from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    String,
    ValueObject,
)

from order_editing.domain import order_editing


class DiscountRuleType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    FREE_SHIPPING = "free_shipping"


@order_editing.value_object(part_of="Order")
class Region:
    """Region the order was placed in; carries the default tax rate."""

    region_id = Identifier()
    name = String(max_length=100)
    tax_rate = Float(default=0.0)
    tax_code = String(max_length=50)
    gift_cards_taxable = Boolean(default=True)


@order_editing.entity(part_of="Order")
class Discount:
    """A discount applied to the order's cart at checkout.

    Percentage discounts take `value` percent off each eligible line; fixed
    discounts take `value` off per unit; free shipping zeroes the shipping total.
    """

    code = String(required=True, max_length=100)
    rule_type = String(choices=DiscountRuleType, required=True)
    value = Float(default=0.0, min_value=0.0)


@order_editing.entity(part_of="Order")
class GiftCard:
    code = String(required=True, max_length=100)
    balance = Float(default=0.0, min_value=0.0)


@order_editing.entity(part_of="Order")
class ShippingMethod:
    name = String(required=True, max_length=255)
    price = Float(default=0.0, min_value=0.0)
    tax_rate = Float(default=0.0)


@order_editing.entity(part_of="Order")
class TaxRate:
    """Product-specific tax rate overriding the region default."""

    product_id = Identifier(required=True)
    code = String(max_length=50)
    name = String(max_length=100)
    rate = Float(required=True)


@order_editing.aggregate
class Order:
    customer_id = Identifier()
    cart_id = Identifier()
    currency_code = String(max_length=3, default="USD")
    region = ValueObject(Region)
    discounts = HasMany(Discount)
    gift_cards = HasMany(GiftCard)
    shipping_methods = HasMany(ShippingMethod)
    tax_rates = HasMany(TaxRate)
    registered_at = DateTime()

    def has_free_shipping(self):
        return any(d.rule_type == DiscountRuleType.FREE_SHIPPING.value for d in self.discounts)

    def tax_rate_for(self, product_id):
        """Return the (code, name, rate) that applies to a product."""
        override = next((r for r in self.tax_rates if str(r.product_id) == str(product_id)), None)
        if override is not None:
            return override.code, override.name, override.rate
        if self.region is None:
            return None, None, 0.0
        return self.region.tax_code, self.region.name, self.region.tax_rate or 0.0
