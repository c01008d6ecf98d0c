"""ActiveOrderEdit — the slot reserving an order for its single active edit.

The slot's identity is the order id, so relational stores enforce "one active
edit per order" with the primary key: two concurrent creates for the same
order cannot both commit. Handlers claim the slot in the same unit of work as
the edit insert and release it when the edit is confirmed, declined, canceled
or deleted.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier

from order_editing.domain import order_editing


@order_editing.aggregate
class ActiveOrderEdit:
    order_id = Identifier(identifier=True)
    order_edit_id = Identifier(required=True)
    claimed_at = DateTime()


@order_editing.repository(part_of=ActiveOrderEdit)
class ActiveOrderEditRepository:
    def holder(self, order_id) -> ActiveOrderEdit | None:
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError:
            return None

    def claim(self, order_id, order_edit_id) -> ActiveOrderEdit:
        slot = ActiveOrderEdit(
            order_id=str(order_id),
            order_edit_id=str(order_edit_id),
            claimed_at=datetime.now(UTC),
        )
        self.add(slot)
        return slot

    def release(self, order_id, order_edit_id) -> None:
        """Free the order's slot if `order_edit_id` holds it."""
        slot = self.holder(order_id)
        if slot is not None and str(slot.order_edit_id) == str(order_edit_id):
            self._dao.delete(slot)
