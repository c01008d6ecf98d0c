"""OrderEdit aggregate (CQRS) — a draft set of line item changes on a placed order.

An edit records what should change (add a variant, remove an original line
item, change an original line item's quantity) as an ordered change log.
The edited item set and its totals are never stored; they are materialized
from the order's original line items and the change log on every read.

Lifecycle:
    CREATED → REQUESTED → CONFIRMED | DECLINED
    CREATED | REQUESTED → CANCELED

Status is derived from the lifecycle timestamps, with the terminal stamps
taking priority: confirmed > canceled > declined > requested > created.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from order_editing.domain import order_editing
from order_editing.edit.events import (
    OrderEditCanceled,
    OrderEditConfirmed,
    OrderEditCreated,
    OrderEditDeclined,
    OrderEditRequested,
    OrderEditUpdated,
)


class OrderEditStatus(Enum):
    CREATED = "created"
    REQUESTED = "requested"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    CANCELED = "canceled"


class ItemChangeType(Enum):
    ITEM_ADD = "item_add"
    ITEM_REMOVE = "item_remove"
    ITEM_UPDATE = "item_update"


TERMINAL_STATUSES = frozenset({OrderEditStatus.CONFIRMED, OrderEditStatus.DECLINED, OrderEditStatus.CANCELED})


def derive_status(confirmed_at=None, canceled_at=None, declined_at=None, requested_at=None) -> OrderEditStatus:
    if confirmed_at:
        return OrderEditStatus.CONFIRMED
    if canceled_at:
        return OrderEditStatus.CANCELED
    if declined_at:
        return OrderEditStatus.DECLINED
    if requested_at:
        return OrderEditStatus.REQUESTED
    return OrderEditStatus.CREATED


@order_editing.entity(part_of="OrderEdit")
class ItemChange:
    """One entry of the change log.

    ITEM_ADD references the generated line item, ITEM_REMOVE the original
    line item, ITEM_UPDATE both the original and its clone.
    """

    type = String(choices=ItemChangeType, required=True)
    original_line_item_id = Identifier()
    line_item_id = Identifier()
    sequence = Integer(default=0)
    created_at = DateTime()


@order_editing.aggregate
class OrderEdit:
    order_id = Identifier(required=True)
    internal_note = Text()
    created_by = String(max_length=100)
    requested_at = DateTime()
    requested_by = String(max_length=100)
    confirmed_at = DateTime()
    confirmed_by = String(max_length=100)
    declined_at = DateTime()
    declined_by = String(max_length=100)
    declined_reason = Text()
    canceled_at = DateTime()
    canceled_by = String(max_length=100)
    changes = HasMany(ItemChange)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_change_per_original_line_item(self):
        seen = set()
        for change in self.changes:
            if change.original_line_item_id is None:
                continue
            key = str(change.original_line_item_id)
            if key in seen:
                raise ValidationError(
                    {"changes": [f"Line item {key} already has a change in this order edit"]}
                )
            seen.add(key)

    @invariant.post
    def changes_must_reference_their_line_items(self):
        for change in self.changes:
            if change.type in (ItemChangeType.ITEM_ADD.value, ItemChangeType.ITEM_UPDATE.value):
                if not change.line_item_id:
                    raise ValidationError({"changes": [f"A {change.type} change must reference a line item"]})
            if change.type in (ItemChangeType.ITEM_REMOVE.value, ItemChangeType.ITEM_UPDATE.value):
                if not change.original_line_item_id:
                    raise ValidationError(
                        {"changes": [f"A {change.type} change must reference an original line item"]}
                    )

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order_id, internal_note=None, created_by=None):
        now = datetime.now(UTC)
        edit = cls(
            order_id=order_id,
            internal_note=internal_note,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        edit.raise_(
            OrderEditCreated(
                order_edit_id=str(edit.id),
                order_id=str(order_id),
                created_by=created_by,
                internal_note=internal_note,
                created_at=now,
            )
        )
        return edit

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    @property
    def status(self) -> str:
        return derive_status(
            confirmed_at=self.confirmed_at,
            canceled_at=self.canceled_at,
            declined_at=self.declined_at,
            requested_at=self.requested_at,
        ).value

    @property
    def is_active(self) -> bool:
        return OrderEditStatus(self.status) not in TERMINAL_STATUSES

    def ensure_active(self, action):
        if not self.is_active:
            raise InvalidOperationError(f"Cannot {action} on an order edit with status {self.status}.")

    # -------------------------------------------------------------------
    # Change log
    # -------------------------------------------------------------------
    def ordered_changes(self):
        return sorted(self.changes, key=lambda change: change.sequence or 0)

    def find_change(self, change_id):
        return next((c for c in self.changes if str(c.id) == str(change_id)), None)

    def change_for(self, original_line_item_id, change_type=None):
        """The change recorded against an original line item, if any."""
        for change in self.changes:
            if change.original_line_item_id is None:
                continue
            if str(change.original_line_item_id) != str(original_line_item_id):
                continue
            if change_type is None or change.type == change_type.value:
                return change
        return None

    def record_change(self, change_type, original_line_item_id=None, line_item_id=None):
        if original_line_item_id is not None and self.change_for(original_line_item_id) is not None:
            raise ValidationError(
                {"changes": [f"Line item {original_line_item_id} already has a change in this order edit"]}
            )

        now = datetime.now(UTC)
        sequence = max((c.sequence or 0 for c in self.changes), default=0) + 1
        change = ItemChange(
            type=change_type.value,
            original_line_item_id=original_line_item_id,
            line_item_id=line_item_id,
            sequence=sequence,
            created_at=now,
        )
        self.add_changes(change)
        self.updated_at = now
        return change

    def drop_change(self, change):
        self.remove_changes(change)
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_details(self, **fields):
        """Merge the explicitly provided fields; None means "not provided"."""
        provided = {name: value for name, value in fields.items() if value is not None}
        for name, value in provided.items():
            setattr(self, name, value)

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            OrderEditUpdated(
                order_edit_id=str(self.id),
                order_id=str(self.order_id),
                internal_note=self.internal_note,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def ensure_deletable(self):
        if OrderEditStatus(self.status) != OrderEditStatus.CREATED:
            raise InvalidOperationError(f"Cannot delete order edit with status {self.status}.")

    def request_confirmation(self, requested_by=None):
        """Ask the customer to confirm. Returns False when already requested."""
        if not self.changes:
            raise ValidationError({"changes": ["Cannot request a confirmation on an edit with no changes"]})
        if self.requested_at:
            return False
        if not self.is_active:
            raise InvalidOperationError(f"Cannot request confirmation of an order edit with status {self.status}.")

        now = datetime.now(UTC)
        self.requested_at = now
        self.requested_by = requested_by
        self.updated_at = now
        self.raise_(
            OrderEditRequested(
                order_edit_id=str(self.id),
                order_id=str(self.order_id),
                requested_by=requested_by,
                requested_at=now,
            )
        )
        return True

    def decline(self, declined_by=None, declined_reason=None):
        """Decline a requested edit. Returns False when already declined."""
        status = OrderEditStatus(self.status)
        if status == OrderEditStatus.DECLINED:
            return False
        if status != OrderEditStatus.REQUESTED:
            raise InvalidOperationError(f"Cannot decline an order edit with status {self.status}.")

        now = datetime.now(UTC)
        self.declined_at = now
        self.declined_by = declined_by
        self.declined_reason = declined_reason
        self.updated_at = now
        self.raise_(
            OrderEditDeclined(
                order_edit_id=str(self.id),
                order_id=str(self.order_id),
                declined_by=declined_by,
                declined_reason=declined_reason,
                declined_at=now,
            )
        )
        return True

    def cancel(self, canceled_by=None):
        """Cancel a created or requested edit. Returns False when already canceled."""
        status = OrderEditStatus(self.status)
        if status == OrderEditStatus.CANCELED:
            return False
        if status in (OrderEditStatus.CONFIRMED, OrderEditStatus.DECLINED):
            raise InvalidOperationError(f"Cannot cancel order edit with status {self.status}.")

        now = datetime.now(UTC)
        self.canceled_at = now
        self.canceled_by = canceled_by
        self.updated_at = now
        self.raise_(
            OrderEditCanceled(
                order_edit_id=str(self.id),
                order_id=str(self.order_id),
                canceled_by=canceled_by,
                canceled_at=now,
            )
        )
        return True

    def confirm(self, confirmed_by=None):
        """Confirm a requested edit. Returns False when already confirmed."""
        status = OrderEditStatus(self.status)
        if status == OrderEditStatus.CONFIRMED:
            return False
        if status != OrderEditStatus.REQUESTED:
            raise InvalidOperationError(f"Cannot confirm an order edit with status {self.status}.")

        now = datetime.now(UTC)
        self.confirmed_at = now
        self.confirmed_by = confirmed_by
        self.updated_at = now
        self.raise_(
            OrderEditConfirmed(
                order_edit_id=str(self.id),
                order_id=str(self.order_id),
                confirmed_by=confirmed_by,
                confirmed_at=now,
                change_count=len(self.changes),
            )
        )
        return True


@order_editing.repository(part_of=OrderEdit)
class OrderEditRepository:
    def remove(self, order_edit: OrderEdit) -> None:
        """Delete the edit together with its change log."""
        for change in list(order_edit.changes):
            order_edit.remove_changes(change)
        self.add(order_edit)
        self._dao.delete(order_edit)
