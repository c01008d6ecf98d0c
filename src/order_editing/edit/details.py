"""Order edit details — update the edit's own fields."""

from protean import handle
from protean.fields import Identifier, Text

from order_editing.domain import order_editing
from order_editing.edit.context import EditContext
from order_editing.edit.order_edit import OrderEdit


@order_editing.command(part_of="OrderEdit")
class UpdateOrderEdit:
    order_edit_id = Identifier(required=True)
    internal_note = Text()


@order_editing.command_handler(part_of=OrderEdit)
class UpdateOrderEditHandler:
    @handle(UpdateOrderEdit)
    def update_order_edit(self, command):
        ctx = EditContext.current()
        order_edit = ctx.order_edits.get(str(command.order_edit_id))
        order_edit.update_details(internal_note=command.internal_note)
        ctx.order_edits.add(order_edit)
