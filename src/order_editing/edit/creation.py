"""Order edit creation — command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text

from order_editing.domain import order_editing
from order_editing.edit.context import EditContext
from order_editing.edit.order_edit import OrderEdit

logger = structlog.get_logger(__name__)


@order_editing.command(part_of="OrderEdit")
class CreateOrderEdit:
    order_id = Identifier(required=True)
    internal_note = Text()
    created_by = String(max_length=100)


@order_editing.command_handler(part_of=OrderEdit)
class CreateOrderEditHandler:
    @handle(CreateOrderEdit)
    def create_order_edit(self, command):
        ctx = EditContext.current()
        order = ctx.orders.get(str(command.order_id))

        # Friendly error; the slot's primary key rejects a concurrent create at commit
        if ctx.active_edits.holder(order.id) is not None:
            raise ValidationError(
                {"order_id": [f"An active order edit already exists for the order {command.order_id}"]}
            )

        order_edit = OrderEdit.create(
            order_id=order.id,
            internal_note=command.internal_note,
            created_by=command.created_by,
        )
        ctx.order_edits.add(order_edit)
        ctx.active_edits.claim(order.id, order_edit.id)

        logger.info("Order edit created", order_edit_id=str(order_edit.id), order_id=str(order.id))
        return str(order_edit.id)
