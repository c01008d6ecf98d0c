"""Order edit decline — the customer turns down a requested edit."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text

from order_editing.domain import order_editing
from order_editing.edit.context import EditContext
from order_editing.edit.order_edit import OrderEdit

logger = structlog.get_logger(__name__)


@order_editing.command(part_of="OrderEdit")
class DeclineOrderEdit:
    order_edit_id = Identifier(required=True)
    declined_by = String(max_length=100)
    declined_reason = Text()


@order_editing.command_handler(part_of=OrderEdit)
class DeclineOrderEditHandler:
    @handle(DeclineOrderEdit)
    def decline(self, command):
        ctx = EditContext.current()
        order_edit = ctx.order_edits.get(str(command.order_edit_id))
        if not order_edit.decline(declined_by=command.declined_by, declined_reason=command.declined_reason):
            logger.info("Order edit already declined", order_edit_id=str(order_edit.id))
            return
        ctx.active_edits.release(order_edit.order_id, order_edit.id)
        ctx.order_edits.add(order_edit)
        logger.info(
            "Order edit declined",
            order_edit_id=str(order_edit.id),
            reason=command.declined_reason,
        )
