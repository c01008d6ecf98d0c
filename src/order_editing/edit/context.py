"""EditContext — the explicit handles an order edit operation works with.

Every operation on an edit receives one context instead of reaching for
globals: the repositories it reads and writes plus the collaborator ports.
Repositories obtained inside a command handler are bound to the handler's
unit of work, so everything written through a context commits or rolls back
together.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from order_editing.catalog import get_variant_catalog
from order_editing.catalog.port import VariantCatalog
from order_editing.edit.active_edit import ActiveOrderEdit
from order_editing.edit.order_edit import OrderEdit
from order_editing.inventory import get_inventory_service
from order_editing.inventory.port import InventoryService
from order_editing.lineitem.line_item import LineItem
from order_editing.order.order import Order
from order_editing.pricing import get_adjustment_provider, get_tax_provider
from order_editing.pricing.adjustments import AdjustmentProvider
from order_editing.pricing.tax import TaxProvider


@dataclass
class EditContext:
    order_edits: object
    line_items: object
    orders: object
    active_edits: object
    inventory: InventoryService
    catalog: VariantCatalog
    tax_provider: TaxProvider
    adjustment_provider: AdjustmentProvider

    @classmethod
    def current(cls) -> "EditContext":
        """Build a context from the active domain and the configured ports."""
        return cls(
            order_edits=current_domain.repository_for(OrderEdit),
            line_items=current_domain.repository_for(LineItem),
            orders=current_domain.repository_for(Order),
            active_edits=current_domain.repository_for(ActiveOrderEdit),
            inventory=get_inventory_service(),
            catalog=get_variant_catalog(),
            tax_provider=get_tax_provider(),
            adjustment_provider=get_adjustment_provider(),
        )
