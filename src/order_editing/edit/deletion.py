"""Order edit deletion — only drafts that were never requested can be deleted."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier

from order_editing.domain import order_editing
from order_editing.edit.context import EditContext
from order_editing.edit.line_item_sync import discard_line_item
from order_editing.edit.order_edit import OrderEdit

logger = structlog.get_logger(__name__)


@order_editing.command(part_of="OrderEdit")
class DeleteOrderEdit:
    order_edit_id = Identifier(required=True)


@order_editing.command_handler(part_of=OrderEdit)
class DeleteOrderEditHandler:
    @handle(DeleteOrderEdit)
    def delete_order_edit(self, command):
        ctx = EditContext.current()
        try:
            order_edit = ctx.order_edits.get(str(command.order_edit_id))
        except ObjectNotFoundError:
            logger.info("Order edit already deleted", order_edit_id=str(command.order_edit_id))
            return

        order_edit.ensure_deletable()

        for change in order_edit.changes:
            if change.line_item_id:
                discard_line_item(ctx, change.line_item_id)
        ctx.active_edits.release(order_edit.order_id, order_edit.id)
        ctx.order_edits.remove(order_edit)

        logger.info("Order edit deleted", order_edit_id=str(order_edit.id), order_id=str(order_edit.order_id))
