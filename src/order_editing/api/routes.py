"""FastAPI routes for the Order Editing domain — order edits and order registration."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from order_editing.api.schemas import (
    AddLineItemRequest,
    CancelOrderEditRequest,
    ConfirmOrderEditRequest,
    CreateOrderEditRequest,
    DeclineOrderEditRequest,
    DeletedResponse,
    OrderEditResponse,
    OrderIdResponse,
    RegisterOrderRequest,
    RequestConfirmationRequest,
    UpdateLineItemRequest,
    UpdateOrderEditRequest,
)
from order_editing.edit.cancellation import CancelOrderEdit
from order_editing.edit.confirmation import ConfirmOrderEdit, RequestOrderEditConfirmation
from order_editing.edit.context import EditContext
from order_editing.edit.creation import CreateOrderEdit
from order_editing.edit.decline import DeclineOrderEdit
from order_editing.edit.decoration import decorate_line_items_and_totals, retrieve
from order_editing.edit.deletion import DeleteOrderEdit
from order_editing.edit.details import UpdateOrderEdit
from order_editing.edit.item_changes import AddLineItem, DeleteItemChange, RemoveLineItem, UpdateLineItem
from order_editing.order.registration import RegisterOrder
from order_editing.utils.logging import bind_edit_context


def _decorated(order_edit_id: str) -> OrderEditResponse:
    ctx = EditContext.current()
    view = decorate_line_items_and_totals(ctx, retrieve(ctx, order_edit_id))
    return OrderEditResponse(**view.to_dict())


def _process(order_edit_id: str, command) -> OrderEditResponse:
    bind_edit_context(order_edit_id, command=command.__class__.__name__)
    current_domain.process(command, asynchronous=False)
    return _decorated(order_edit_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def register_order(body: RegisterOrderRequest) -> OrderIdResponse:
    command = RegisterOrder(
        order_id=body.order_id,
        customer_id=body.customer_id,
        cart_id=body.cart_id,
        currency_code=body.currency_code,
        region=json.dumps(body.region.model_dump()) if body.region else None,
        items=json.dumps([item.model_dump() for item in body.items]),
        discounts=json.dumps([d.model_dump() for d in body.discounts]),
        gift_cards=json.dumps([g.model_dump() for g in body.gift_cards]),
        shipping_methods=json.dumps([s.model_dump() for s in body.shipping_methods]),
        tax_rates=json.dumps([t.model_dump() for t in body.tax_rates]),
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


# ---------------------------------------------------------------------------
# Order Edit Router
# ---------------------------------------------------------------------------
order_edit_router = APIRouter(prefix="/order-edits", tags=["order-edits"])


@order_edit_router.get("/{order_edit_id}", response_model=OrderEditResponse)
async def get_order_edit(order_edit_id: str) -> OrderEditResponse:
    return _decorated(order_edit_id)


@order_edit_router.post("", status_code=201, response_model=OrderEditResponse)
async def create_order_edit(body: CreateOrderEditRequest) -> OrderEditResponse:
    command = CreateOrderEdit(
        order_id=body.order_id,
        internal_note=body.internal_note,
        created_by=body.created_by,
    )
    order_edit_id = current_domain.process(command, asynchronous=False)
    bind_edit_context(order_edit_id, order_id=body.order_id)
    return _decorated(order_edit_id)


@order_edit_router.post("/{order_edit_id}", response_model=OrderEditResponse)
async def update_order_edit(order_edit_id: str, body: UpdateOrderEditRequest) -> OrderEditResponse:
    command = UpdateOrderEdit(order_edit_id=order_edit_id, internal_note=body.internal_note)
    return _process(order_edit_id, command)


@order_edit_router.delete("/{order_edit_id}", response_model=DeletedResponse)
async def delete_order_edit(order_edit_id: str) -> DeletedResponse:
    bind_edit_context(order_edit_id, command=DeleteOrderEdit.__name__)
    current_domain.process(DeleteOrderEdit(order_edit_id=order_edit_id), asynchronous=False)
    return DeletedResponse(id=order_edit_id, object="order_edit")


@order_edit_router.post("/{order_edit_id}/request", response_model=OrderEditResponse)
async def request_confirmation(order_edit_id: str, body: RequestConfirmationRequest) -> OrderEditResponse:
    command = RequestOrderEditConfirmation(order_edit_id=order_edit_id, requested_by=body.requested_by)
    return _process(order_edit_id, command)


@order_edit_router.post("/{order_edit_id}/confirm", response_model=OrderEditResponse)
async def confirm_order_edit(order_edit_id: str, body: ConfirmOrderEditRequest) -> OrderEditResponse:
    command = ConfirmOrderEdit(order_edit_id=order_edit_id, confirmed_by=body.confirmed_by)
    return _process(order_edit_id, command)


@order_edit_router.post("/{order_edit_id}/decline", response_model=OrderEditResponse)
async def decline_order_edit(order_edit_id: str, body: DeclineOrderEditRequest) -> OrderEditResponse:
    command = DeclineOrderEdit(
        order_edit_id=order_edit_id,
        declined_by=body.declined_by,
        declined_reason=body.declined_reason,
    )
    return _process(order_edit_id, command)


@order_edit_router.post("/{order_edit_id}/cancel", response_model=OrderEditResponse)
async def cancel_order_edit(order_edit_id: str, body: CancelOrderEditRequest) -> OrderEditResponse:
    command = CancelOrderEdit(order_edit_id=order_edit_id, canceled_by=body.canceled_by)
    return _process(order_edit_id, command)


@order_edit_router.post("/{order_edit_id}/items", response_model=OrderEditResponse)
async def add_line_item(order_edit_id: str, body: AddLineItemRequest) -> OrderEditResponse:
    command = AddLineItem(order_edit_id=order_edit_id, variant_id=body.variant_id, quantity=body.quantity)
    return _process(order_edit_id, command)


@order_edit_router.post("/{order_edit_id}/items/{line_item_id}", response_model=OrderEditResponse)
async def update_line_item(order_edit_id: str, line_item_id: str, body: UpdateLineItemRequest) -> OrderEditResponse:
    command = UpdateLineItem(order_edit_id=order_edit_id, line_item_id=line_item_id, quantity=body.quantity)
    return _process(order_edit_id, command)


@order_edit_router.delete("/{order_edit_id}/items/{line_item_id}", response_model=OrderEditResponse)
async def remove_line_item(order_edit_id: str, line_item_id: str) -> OrderEditResponse:
    command = RemoveLineItem(order_edit_id=order_edit_id, line_item_id=line_item_id)
    return _process(order_edit_id, command)


@order_edit_router.delete("/{order_edit_id}/changes/{change_id}", response_model=OrderEditResponse)
async def delete_item_change(order_edit_id: str, change_id: str) -> OrderEditResponse:
    command = DeleteItemChange(order_edit_id=order_edit_id, change_id=change_id)
    return _process(order_edit_id, command)
