"""Read side of an order edit: the edit with its items and totals.

Reads open no transaction of their own; repositories fetched inside a
command handler read through that handler's unit of work.
"""

from dataclasses import asdict, dataclass

from order_editing.edit.materialization import MaterializedItem, compute_line_items
from order_editing.edit.order_edit import OrderEdit
from order_editing.edit.totals import get_totals
from order_editing.pricing.totals import Totals


@dataclass
class OrderEditView:
    order_edit: OrderEdit
    items: list[MaterializedItem]
    removed_items: list[MaterializedItem]
    totals: Totals

    def to_dict(self):
        edit = self.order_edit
        return {
            "id": str(edit.id),
            "order_id": str(edit.order_id),
            "status": edit.status,
            "internal_note": edit.internal_note,
            "created_by": edit.created_by,
            "requested_at": edit.requested_at,
            "requested_by": edit.requested_by,
            "confirmed_at": edit.confirmed_at,
            "confirmed_by": edit.confirmed_by,
            "declined_at": edit.declined_at,
            "declined_by": edit.declined_by,
            "declined_reason": edit.declined_reason,
            "canceled_at": edit.canceled_at,
            "canceled_by": edit.canceled_by,
            "created_at": edit.created_at,
            "updated_at": edit.updated_at,
            "changes": [
                {
                    "id": str(change.id),
                    "type": change.type,
                    "original_line_item_id": (
                        str(change.original_line_item_id) if change.original_line_item_id else None
                    ),
                    "line_item_id": str(change.line_item_id) if change.line_item_id else None,
                    "sequence": change.sequence,
                }
                for change in edit.ordered_changes()
            ],
            "items": [item.to_dict() for item in self.items],
            "removed_items": [item.to_dict() for item in self.removed_items],
            **asdict(self.totals),
        }


def retrieve(ctx, order_edit_id) -> OrderEdit:
    return ctx.order_edits.get(str(order_edit_id))


def decorate_line_items_and_totals(ctx, order_edit) -> OrderEditView:
    materialized = compute_line_items(ctx, order_edit)
    return OrderEditView(
        order_edit=order_edit,
        items=materialized.items,
        removed_items=materialized.removed_items,
        totals=get_totals(ctx, order_edit, materialized),
    )
