"""RegisterOrder — seed an order's pricing context and original line items.

The ordering subsystem registers every placed order here so that edits can
reprice against it. Original line items get their initial adjustments and
tax lines from the same providers that reprice edited items, so an untouched
edit totals exactly like the order it was opened on.
"""

import json
from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from order_editing.domain import order_editing
from order_editing.lineitem.line_item import LineItem
from order_editing.order.order import Discount, GiftCard, Order, Region, ShippingMethod, TaxRate
from order_editing.pricing import get_adjustment_provider, get_tax_provider
from order_editing.pricing.tax import CalculationContext

logger = structlog.get_logger(__name__)


@order_editing.command(part_of="Order")
class RegisterOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier()
    cart_id = Identifier()
    currency_code = String(max_length=3, default="USD")
    region = Text()  # JSON: region dict
    items = Text(required=True)  # JSON: list of line item dicts
    discounts = Text()  # JSON: list of {code, rule_type, value}
    gift_cards = Text()  # JSON: list of {code, balance}
    shipping_methods = Text()  # JSON: list of {name, price, tax_rate}
    tax_rates = Text()  # JSON: list of {product_id, code, name, rate}


def _load(value, default):
    if value is None:
        return default
    return json.loads(value) if isinstance(value, str) else value


@order_editing.command_handler(part_of=Order)
class RegisterOrderHandler:
    @handle(RegisterOrder)
    def register_order(self, command):
        order_repo = current_domain.repository_for(Order)
        try:
            order_repo.get(command.order_id)
        except ObjectNotFoundError:
            pass
        else:
            raise ValidationError({"order_id": [f"Order {command.order_id} is already registered"]})

        region_data = _load(command.region, None)
        order = Order(
            id=command.order_id,
            customer_id=command.customer_id,
            cart_id=command.cart_id,
            currency_code=command.currency_code or "USD",
            region=Region(**region_data) if region_data else None,
            discounts=[Discount(**d) for d in _load(command.discounts, [])],
            gift_cards=[GiftCard(**g) for g in _load(command.gift_cards, [])],
            shipping_methods=[ShippingMethod(**s) for s in _load(command.shipping_methods, [])],
            tax_rates=[TaxRate(**t) for t in _load(command.tax_rates, [])],
            registered_at=datetime.now(UTC),
        )

        now = datetime.now(UTC)
        line_items = []
        for position, data in enumerate(_load(command.items, [])):
            fields = {
                "order_id": order.id,
                "cart_id": order.cart_id,
                "variant_id": data["variant_id"],
                "product_id": data.get("product_id"),
                "sku": data.get("sku"),
                "title": data["title"],
                "unit_price": data["unit_price"],
                "quantity": data["quantity"],
                "fulfilled_quantity": data.get("fulfilled_quantity", 0),
                "allow_discounts": data.get("allow_discounts", True),
                "is_giftcard": data.get("is_giftcard", False),
                "position": position,
                "created_at": now,
                "updated_at": now,
            }
            if data.get("line_item_id"):
                fields["id"] = data["line_item_id"]
            line_items.append(LineItem(**fields))

        adjustment_provider = get_adjustment_provider()
        for line_item in line_items:
            line_item.replace_adjustments(adjustment_provider.get_adjustments(order, line_item))

        context = CalculationContext(order=order, items=line_items, exclude_shipping=True)
        tax_lines = get_tax_provider().get_tax_lines(line_items, context)
        for line_item in line_items:
            line_item.replace_tax_lines(tax_lines.get(str(line_item.id), []))

        order_repo.add(order)
        line_item_repo = current_domain.repository_for(LineItem)
        for line_item in line_items:
            line_item_repo.add(line_item)

        logger.info("Order registered for editing", order_id=str(order.id), line_items=len(line_items))
        return str(order.id)
