"""Totals of an order edit, recomputed from its materialized items."""

from order_editing.edit.materialization import compute_line_items
from order_editing.pricing.totals import OrderView, Totals, compute_totals


def get_totals(ctx, order_edit, materialized=None) -> Totals:
    order = ctx.orders.get(str(order_edit.order_id))
    if materialized is None:
        materialized = compute_line_items(ctx, order_edit)

    # Priced by physical row: an updated item is priced as its clone.
    rows = {}
    for item in materialized.items:
        rows.setdefault(item.physical_line_item_id, item.line_item)

    return compute_totals(OrderView.from_order(order, rows.values()))
