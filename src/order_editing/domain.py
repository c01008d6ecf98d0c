"""Order Editing bounded context — post-checkout modification of placed orders.

Handles order edits (CQRS): a draft change set of line-item additions,
removals and quantity updates recorded against an already-placed order,
totals recomputation over the materialized items, and the
request/decline/confirm/cancel lifecycle.
"""

from protean.domain import Domain

from order_editing.utils.logging import configure_logging

configure_logging()

order_editing = Domain(name="order_editing")
