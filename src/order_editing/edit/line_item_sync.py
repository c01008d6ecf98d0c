"""Line item side effects of an order edit.

Edits never touch the order's original line items. Changing a quantity
clones the original (or updates the clone made earlier); adding a variant
generates a fresh line item. Either way stock for the extra units is
confirmed before anything is written, and the item's adjustments and tax
lines are recomputed against the order's pricing context for that item alone.
"""

import structlog
from protean.exceptions import InvalidOperationError, ObjectNotFoundError

from order_editing.lineitem.line_item import LineItem
from order_editing.pricing.tax import CalculationContext

logger = structlog.get_logger(__name__)


def confirm_inventory(ctx, variant_id, quantity):
    """Confirm stock for `quantity` extra units; nothing to confirm when not positive."""
    if quantity <= 0:
        return
    result = ctx.inventory.confirm_inventory(str(variant_id), quantity)
    if not result.confirmed:
        logger.warning(
            "Inventory confirmation failed",
            variant_id=str(variant_id),
            quantity=quantity,
            available=result.available,
        )
        raise InvalidOperationError(
            result.failure_reason or f"Variant {variant_id} does not have the required inventory"
        )


def refresh_adjustments_and_tax_lines(ctx, line_item, order):
    """Regenerate the item's adjustments and tax lines, then persist it."""
    line_item.replace_adjustments(ctx.adjustment_provider.get_adjustments(order, line_item))

    calculation_context = CalculationContext.for_item(order, line_item)
    tax_lines = ctx.tax_provider.get_tax_lines([line_item], calculation_context)
    line_item.replace_tax_lines(tax_lines.get(str(line_item.id), []))

    ctx.line_items.add(line_item)
    return line_item


def clone_line_item(ctx, original, quantity, order):
    confirm_inventory(ctx, original.variant_id, original.quantity_to_confirm(quantity))

    clone = original.clone(quantity)
    refresh_adjustments_and_tax_lines(ctx, clone, order)
    logger.info(
        "Line item cloned for order edit",
        original_line_item_id=str(original.id),
        line_item_id=str(clone.id),
        quantity=quantity,
    )
    return clone


def update_clone(ctx, clone, quantity, order):
    confirm_inventory(ctx, clone.variant_id, clone.quantity_to_confirm(quantity))

    clone.change_quantity(quantity)
    refresh_adjustments_and_tax_lines(ctx, clone, order)
    logger.info("Cloned line item quantity updated", line_item_id=str(clone.id), quantity=quantity)
    return clone


def generate_line_item(ctx, variant_id, quantity, order):
    variant = ctx.catalog.get_variant(str(variant_id))
    if variant is None:
        raise ObjectNotFoundError(f"Variant with id {variant_id} was not found")

    confirm_inventory(ctx, variant_id, quantity)

    line_item = LineItem.generate(variant, quantity)
    refresh_adjustments_and_tax_lines(ctx, line_item, order)
    logger.info(
        "Line item generated for order edit",
        variant_id=str(variant_id),
        line_item_id=str(line_item.id),
        quantity=quantity,
    )
    return line_item


def discard_line_item(ctx, line_item_id):
    """Delete a clone or generated line item that an edit no longer references."""
    try:
        line_item = ctx.line_items.get(str(line_item_id))
    except ObjectNotFoundError:
        logger.warning("Line item already gone", line_item_id=str(line_item_id))
        return
    ctx.line_items.remove(line_item)
