"""Order Editing API package."""

from order_editing.api.routes import order_edit_router, order_router

__all__ = ["order_edit_router", "order_router"]
