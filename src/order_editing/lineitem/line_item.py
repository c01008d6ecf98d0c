"""LineItem aggregate (CQRS) — a priced line of an order, or of an order edit.

Original line items carry `order_id`. Items created by an order edit (clones
of an original with a new quantity, or items generated from a variant) carry
no order/cart/claim/swap linkage until the ordering subsystem applies a
confirmed edit. Tax lines and price adjustments are child entities so they are
replaced atomically with the item they price.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String

from order_editing.domain import order_editing


@order_editing.entity(part_of="LineItem")
class LineItemTaxLine:
    code = String(max_length=50)
    name = String(max_length=100)
    rate = Float(required=True)


@order_editing.entity(part_of="LineItem")
class LineItemAdjustment:
    discount_code = String(max_length=100)
    description = String(max_length=255)
    amount = Float(required=True, min_value=0.0)


@order_editing.aggregate
class LineItem:
    order_id = Identifier()
    cart_id = Identifier()
    claim_order_id = Identifier()
    swap_id = Identifier()
    variant_id = Identifier(required=True)
    product_id = Identifier()
    sku = String(max_length=50)
    title = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    fulfilled_quantity = Integer(default=0, min_value=0)
    allow_discounts = Boolean(default=True)
    is_giftcard = Boolean(default=False)
    position = Integer(default=0)
    tax_lines = HasMany(LineItemTaxLine)
    adjustments = HasMany(LineItemAdjustment)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def generate(cls, variant, quantity):
        """Build a new, unlinked line item for a catalogue variant."""
        now = datetime.now(UTC)
        return cls(
            variant_id=variant.variant_id,
            product_id=variant.product_id,
            sku=variant.sku,
            title=variant.title,
            unit_price=variant.unit_price,
            quantity=quantity,
            allow_discounts=variant.allow_discounts,
            is_giftcard=variant.is_giftcard,
            created_at=now,
            updated_at=now,
        )

    def clone(self, quantity):
        """Copy this item with a new quantity and without order/cart/claim/swap linkage.

        Tax lines and adjustments are not copied; they are regenerated for the
        clone against its own quantity.
        """
        now = datetime.now(UTC)
        return LineItem(
            variant_id=self.variant_id,
            product_id=self.product_id,
            sku=self.sku,
            title=self.title,
            unit_price=self.unit_price,
            quantity=quantity,
            fulfilled_quantity=self.fulfilled_quantity,
            allow_discounts=self.allow_discounts,
            is_giftcard=self.is_giftcard,
            position=self.position,
            created_at=now,
            updated_at=now,
        )

    def belongs_to(self, order_id):
        return self.order_id is not None and str(self.order_id) == str(order_id)

    def change_quantity(self, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self.quantity = quantity
        self.updated_at = datetime.now(UTC)

    def quantity_to_confirm(self, quantity):
        """Units beyond what is already fulfilled that need stock confirmation."""
        return quantity - (self.fulfilled_quantity or 0)

    def replace_adjustments(self, adjustments):
        for adjustment in list(self.adjustments):
            self.remove_adjustments(adjustment)
        for data in adjustments:
            self.add_adjustments(
                LineItemAdjustment(
                    discount_code=data.discount_code,
                    description=data.description,
                    amount=data.amount,
                )
            )

    def replace_tax_lines(self, tax_lines):
        for tax_line in list(self.tax_lines):
            self.remove_tax_lines(tax_line)
        for data in tax_lines:
            self.add_tax_lines(LineItemTaxLine(code=data.code, name=data.name, rate=data.rate))

    def to_dict_with_id(self, item_id):
        """Serialize the item, presenting it under `item_id`."""
        return {
            "id": str(item_id),
            "line_item_id": str(self.id),
            "order_id": str(self.order_id) if self.order_id else None,
            "variant_id": str(self.variant_id),
            "product_id": str(self.product_id) if self.product_id else None,
            "sku": self.sku,
            "title": self.title,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "fulfilled_quantity": self.fulfilled_quantity,
            "tax_lines": [{"code": t.code, "name": t.name, "rate": t.rate} for t in self.tax_lines],
            "adjustments": [
                {"discount_code": a.discount_code, "description": a.description, "amount": a.amount}
                for a in self.adjustments
            ],
        }


@order_editing.repository(part_of=LineItem)
class LineItemRepository:
    def list_for_order(self, order_id) -> list[LineItem]:
        """The order's own line items, in their natural order."""
        items = self._dao.query.filter(order_id=str(order_id)).all().items
        return sorted(items, key=lambda item: item.position or 0)

    def remove(self, line_item: LineItem) -> None:
        """Delete the item together with its tax lines and adjustments."""
        line_item.replace_tax_lines([])
        line_item.replace_adjustments([])
        self.add(line_item)
        self._dao.delete(line_item)
