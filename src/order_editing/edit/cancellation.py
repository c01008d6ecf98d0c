"""Order edit cancellation — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String

from order_editing.domain import order_editing
from order_editing.edit.context import EditContext
from order_editing.edit.order_edit import OrderEdit

logger = structlog.get_logger(__name__)


@order_editing.command(part_of="OrderEdit")
class CancelOrderEdit:
    order_edit_id = Identifier(required=True)
    canceled_by = String(max_length=100)


@order_editing.command_handler(part_of=OrderEdit)
class CancelOrderEditHandler:
    @handle(CancelOrderEdit)
    def cancel(self, command):
        ctx = EditContext.current()
        order_edit = ctx.order_edits.get(str(command.order_edit_id))
        if not order_edit.cancel(canceled_by=command.canceled_by):
            logger.info("Order edit already canceled", order_edit_id=str(order_edit.id))
            return
        ctx.active_edits.release(order_edit.order_id, order_edit.id)
        ctx.order_edits.add(order_edit)
        logger.info("Order edit canceled", order_edit_id=str(order_edit.id))
