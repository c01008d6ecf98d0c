"""Fold an order's original line items with an edit's change log.

The result is the item set the order would have if the edit were applied:
originals first in their natural order (removed ones left out, updated ones
replaced by their clone), followed by added items in change-log order.
"""

from dataclasses import dataclass, field

from order_editing.edit.order_edit import ItemChangeType
from order_editing.lineitem.line_item import LineItem


@dataclass(frozen=True)
class MaterializedItem:
    """An item of the edited order.

    `logical_id` is what the item is presented as: the original line item's
    id for an updated item, the item's own id otherwise. Money always comes
    from `line_item`, the persisted row `physical_line_item_id` names.
    """

    logical_id: str
    physical_line_item_id: str
    line_item: LineItem
    change_type: str | None = None

    def to_dict(self):
        data = self.line_item.to_dict_with_id(self.logical_id)
        data["change_type"] = self.change_type
        return data


@dataclass
class MaterializedItems:
    items: list[MaterializedItem] = field(default_factory=list)
    removed_items: list[MaterializedItem] = field(default_factory=list)


def compute_line_items(ctx, order_edit) -> MaterializedItems:
    originals = ctx.line_items.list_for_order(order_edit.order_id)
    originals_by_id = {str(item.id): item for item in originals}

    def load(line_item_id):
        key = str(line_item_id)
        return originals_by_id.get(key) or ctx.line_items.get(key)

    removed: dict[str, MaterializedItem] = {}
    updated: dict[str, MaterializedItem] = {}
    added: list[MaterializedItem] = []

    for change in order_edit.ordered_changes():
        if change.type == ItemChangeType.ITEM_REMOVE.value:
            original_id = str(change.original_line_item_id)
            removed[original_id] = MaterializedItem(
                logical_id=original_id,
                physical_line_item_id=original_id,
                line_item=load(original_id),
                change_type=change.type,
            )
        elif change.type == ItemChangeType.ITEM_ADD.value:
            line_item_id = str(change.line_item_id)
            added.append(
                MaterializedItem(
                    logical_id=line_item_id,
                    physical_line_item_id=line_item_id,
                    line_item=load(line_item_id),
                    change_type=change.type,
                )
            )
        else:
            original_id = str(change.original_line_item_id)
            updated[original_id] = MaterializedItem(
                logical_id=original_id,
                physical_line_item_id=str(change.line_item_id),
                line_item=load(change.line_item_id),
                change_type=change.type,
            )

    items = []
    for original in originals:
        key = str(original.id)
        if key in removed:
            continue
        items.append(
            updated.get(key) or MaterializedItem(logical_id=key, physical_line_item_id=key, line_item=original)
        )
    items.extend(added)

    return MaterializedItems(items=items, removed_items=list(removed.values()))
