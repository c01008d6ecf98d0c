"""Order edit confirmation — request the customer's confirmation, and confirm."""

import structlog
from protean import handle
from protean.fields import Identifier, String

from order_editing.domain import order_editing
from order_editing.edit.context import EditContext
from order_editing.edit.order_edit import OrderEdit

logger = structlog.get_logger(__name__)


@order_editing.command(part_of="OrderEdit")
class RequestOrderEditConfirmation:
    order_edit_id = Identifier(required=True)
    requested_by = String(max_length=100)


@order_editing.command(part_of="OrderEdit")
class ConfirmOrderEdit:
    order_edit_id = Identifier(required=True)
    confirmed_by = String(max_length=100)


@order_editing.command_handler(part_of=OrderEdit)
class OrderEditConfirmationHandler:
    @handle(RequestOrderEditConfirmation)
    def request_confirmation(self, command):
        ctx = EditContext.current()
        order_edit = ctx.order_edits.get(str(command.order_edit_id))
        if not order_edit.request_confirmation(requested_by=command.requested_by):
            logger.info("Order edit confirmation already requested", order_edit_id=str(order_edit.id))
            return
        ctx.order_edits.add(order_edit)
        logger.info("Order edit confirmation requested", order_edit_id=str(order_edit.id))

    @handle(ConfirmOrderEdit)
    def confirm(self, command):
        ctx = EditContext.current()
        order_edit = ctx.order_edits.get(str(command.order_edit_id))
        if not order_edit.confirm(confirmed_by=command.confirmed_by):
            logger.info("Order edit already confirmed", order_edit_id=str(order_edit.id))
            return
        ctx.active_edits.release(order_edit.order_id, order_edit.id)
        ctx.order_edits.add(order_edit)
        logger.info("Order edit confirmed", order_edit_id=str(order_edit.id), order_id=str(order_edit.order_id))
