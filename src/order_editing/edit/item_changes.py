"""Line item changes of an order edit — add, update, remove, and undo a change."""

import structlog
from protean import handle
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import Identifier, Integer

from order_editing.domain import order_editing
from order_editing.edit.context import EditContext
from order_editing.edit.line_item_sync import (
    clone_line_item,
    discard_line_item,
    generate_line_item,
    update_clone,
)
from order_editing.edit.order_edit import ItemChangeType, OrderEdit, OrderEditStatus

logger = structlog.get_logger(__name__)


@order_editing.command(part_of="OrderEdit")
class AddLineItem:
    order_edit_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@order_editing.command(part_of="OrderEdit")
class UpdateLineItem:
    order_edit_id = Identifier(required=True)
    line_item_id = Identifier(required=True)  # original line item of the order
    quantity = Integer(required=True, min_value=1)


@order_editing.command(part_of="OrderEdit")
class RemoveLineItem:
    order_edit_id = Identifier(required=True)
    line_item_id = Identifier(required=True)  # original line item of the order


@order_editing.command(part_of="OrderEdit")
class DeleteItemChange:
    order_edit_id = Identifier(required=True)
    change_id = Identifier(required=True)


def _original_line_item(ctx, order_edit, line_item_id):
    original = ctx.line_items.get(str(line_item_id))
    if not original.belongs_to(order_edit.order_id):
        raise ValidationError(
            {"line_item_id": [f"Line item {line_item_id} does not belong to order {order_edit.order_id}"]}
        )
    return original


@order_editing.command_handler(part_of=OrderEdit)
class ItemChangeHandler:
    @handle(AddLineItem)
    def add_line_item(self, command):
        ctx = EditContext.current()
        order_edit = ctx.order_edits.get(str(command.order_edit_id))
        order_edit.ensure_active("add a line item")

        order = ctx.orders.get(str(order_edit.order_id))
        line_item = generate_line_item(ctx, command.variant_id, command.quantity, order)
        order_edit.record_change(ItemChangeType.ITEM_ADD, line_item_id=line_item.id)
        ctx.order_edits.add(order_edit)

        logger.info("Line item added to order edit", order_edit_id=str(order_edit.id), line_item_id=str(line_item.id))
        return str(line_item.id)

    @handle(UpdateLineItem)
    def update_line_item(self, command):
        ctx = EditContext.current()
        order_edit = ctx.order_edits.get(str(command.order_edit_id))
        order_edit.ensure_active("update a line item")

        original = _original_line_item(ctx, order_edit, command.line_item_id)
        existing = order_edit.change_for(original.id)
        if existing is not None and existing.type == ItemChangeType.ITEM_REMOVE.value:
            raise ValidationError({"line_item_id": [f"Line item {original.id} is removed in this order edit"]})

        order = ctx.orders.get(str(order_edit.order_id))
        if existing is None:
            clone = clone_line_item(ctx, original, command.quantity, order)
            order_edit.record_change(
                ItemChangeType.ITEM_UPDATE,
                original_line_item_id=original.id,
                line_item_id=clone.id,
            )
            ctx.order_edits.add(order_edit)
        else:
            clone = ctx.line_items.get(str(existing.line_item_id))
            update_clone(ctx, clone, command.quantity, order)

        logger.info(
            "Line item quantity changed in order edit",
            order_edit_id=str(order_edit.id),
            original_line_item_id=str(original.id),
            quantity=command.quantity,
        )
        return str(clone.id)

    @handle(RemoveLineItem)
    def remove_line_item(self, command):
        ctx = EditContext.current()
        order_edit = ctx.order_edits.get(str(command.order_edit_id))
        order_edit.ensure_active("remove a line item")

        original = _original_line_item(ctx, order_edit, command.line_item_id)
        existing = order_edit.change_for(original.id)
        if existing is not None and existing.type == ItemChangeType.ITEM_REMOVE.value:
            raise ValidationError({"line_item_id": [f"Line item {original.id} is already removed in this order edit"]})

        if existing is not None:
            order_edit.drop_change(existing)
            discard_line_item(ctx, existing.line_item_id)
        order_edit.record_change(ItemChangeType.ITEM_REMOVE, original_line_item_id=original.id)
        ctx.order_edits.add(order_edit)

        logger.info(
            "Line item removed in order edit",
            order_edit_id=str(order_edit.id),
            original_line_item_id=str(original.id),
        )

    @handle(DeleteItemChange)
    def delete_item_change(self, command):
        ctx = EditContext.current()
        order_edit = ctx.order_edits.get(str(command.order_edit_id))

        change = order_edit.find_change(command.change_id)
        if change is None:
            raise ValidationError(
                {"change_id": [f"The item change {command.change_id} does not belong to order edit {order_edit.id}"]}
            )
        if OrderEditStatus(order_edit.status) in (OrderEditStatus.CONFIRMED, OrderEditStatus.CANCELED):
            raise InvalidOperationError(
                f"Cannot delete an item change of an order edit with status {order_edit.status}."
            )

        order_edit.drop_change(change)
        if change.line_item_id:
            discard_line_item(ctx, change.line_item_id)
        ctx.order_edits.add(order_edit)

        logger.info("Item change deleted", order_edit_id=str(order_edit.id), change_id=str(change.id))
