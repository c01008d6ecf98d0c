"""Domain events for the OrderEdit aggregate.

Events are raised by the aggregate and committed with it in the same unit of
work, so a consumer that sees one can rely on the edit being persisted. The
ordering subsystem applies a confirmed edit's change set on OrderEditConfirmed.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from order_editing.domain import order_editing


@order_editing.event(part_of="OrderEdit")
class OrderEditCreated:
    """A draft edit was opened on an order."""

    __version__ = 1

    order_edit_id = Identifier(required=True)
    order_id = Identifier(required=True)
    created_by = String()
    internal_note = Text()
    created_at = DateTime(required=True)


@order_editing.event(part_of="OrderEdit")
class OrderEditUpdated:
    """The edit's own details (not its item changes) were updated."""

    __version__ = 1

    order_edit_id = Identifier(required=True)
    order_id = Identifier(required=True)
    internal_note = Text()
    updated_at = DateTime(required=True)


@order_editing.event(part_of="OrderEdit")
class OrderEditRequested:
    """The customer was asked to confirm the edit."""

    __version__ = 1

    order_edit_id = Identifier(required=True)
    order_id = Identifier(required=True)
    requested_by = String()
    requested_at = DateTime(required=True)


@order_editing.event(part_of="OrderEdit")
class OrderEditDeclined:
    """The customer declined a requested edit."""

    __version__ = 1

    order_edit_id = Identifier(required=True)
    order_id = Identifier(required=True)
    declined_by = String()
    declined_reason = Text()
    declined_at = DateTime(required=True)


@order_editing.event(part_of="OrderEdit")
class OrderEditCanceled:
    """The edit was abandoned before it was confirmed."""

    __version__ = 1

    order_edit_id = Identifier(required=True)
    order_id = Identifier(required=True)
    canceled_by = String()
    canceled_at = DateTime(required=True)


@order_editing.event(part_of="OrderEdit")
class OrderEditConfirmed:
    """The customer confirmed a requested edit."""

    __version__ = 1

    order_edit_id = Identifier(required=True)
    order_id = Identifier(required=True)
    confirmed_by = String()
    confirmed_at = DateTime(required=True)
    change_count = Integer(default=0)
