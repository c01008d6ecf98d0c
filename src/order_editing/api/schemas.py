"""Pydantic request/response schemas for the Order Editing API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Order registration
# ---------------------------------------------------------------------------
class RegionSchema(BaseModel):
    region_id: str | None = None
    name: str | None = None
    tax_rate: float = 0.0
    tax_code: str | None = None
    gift_cards_taxable: bool = True


class OriginalLineItemSchema(BaseModel):
    line_item_id: str | None = None
    variant_id: str
    product_id: str | None = None
    sku: str | None = None
    title: str
    unit_price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    fulfilled_quantity: int = Field(default=0, ge=0)
    allow_discounts: bool = True
    is_giftcard: bool = False


class DiscountSchema(BaseModel):
    code: str
    rule_type: str = Field(pattern="^(percentage|fixed|free_shipping)$")
    value: float = Field(default=0.0, ge=0)


class GiftCardSchema(BaseModel):
    code: str
    balance: float = Field(default=0.0, ge=0)


class ShippingMethodSchema(BaseModel):
    name: str
    price: float = Field(default=0.0, ge=0)
    tax_rate: float = 0.0


class TaxRateSchema(BaseModel):
    product_id: str
    code: str | None = None
    name: str | None = None
    rate: float


class RegisterOrderRequest(BaseModel):
    order_id: str
    customer_id: str | None = None
    cart_id: str | None = None
    currency_code: str = "USD"
    region: RegionSchema | None = None
    items: list[OriginalLineItemSchema] = Field(min_length=1)
    discounts: list[DiscountSchema] = []
    gift_cards: list[GiftCardSchema] = []
    shipping_methods: list[ShippingMethodSchema] = []
    tax_rates: list[TaxRateSchema] = []

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "order_id": "order-001",
                    "customer_id": "cust-001",
                    "region": {"name": "US", "tax_rate": 10.0, "tax_code": "US-DEFAULT"},
                    "items": [
                        {
                            "line_item_id": "item-001",
                            "variant_id": "var-001",
                            "product_id": "prod-001",
                            "title": "Widget",
                            "unit_price": 25.0,
                            "quantity": 2,
                        }
                    ],
                    "shipping_methods": [{"name": "Standard", "price": 5.0}],
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Order edit requests
# ---------------------------------------------------------------------------
class CreateOrderEditRequest(BaseModel):
    order_id: str
    internal_note: str | None = None
    created_by: str | None = None


class UpdateOrderEditRequest(BaseModel):
    internal_note: str | None = None


class RequestConfirmationRequest(BaseModel):
    requested_by: str | None = None


class ConfirmOrderEditRequest(BaseModel):
    confirmed_by: str | None = None


class DeclineOrderEditRequest(BaseModel):
    declined_by: str | None = None
    declined_reason: str | None = None


class CancelOrderEditRequest(BaseModel):
    canceled_by: str | None = None


class AddLineItemRequest(BaseModel):
    variant_id: str
    quantity: int = Field(ge=1)


class UpdateLineItemRequest(BaseModel):
    quantity: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class DeletedResponse(BaseModel):
    id: str
    object: str
    deleted: bool = True


class TaxLineResponse(BaseModel):
    code: str | None = None
    name: str | None = None
    rate: float


class AdjustmentResponse(BaseModel):
    discount_code: str | None = None
    description: str | None = None
    amount: float


class LineItemResponse(BaseModel):
    id: str
    line_item_id: str
    order_id: str | None = None
    variant_id: str
    product_id: str | None = None
    sku: str | None = None
    title: str
    unit_price: float
    quantity: int
    fulfilled_quantity: int | None = 0
    change_type: str | None = None
    tax_lines: list[TaxLineResponse] = []
    adjustments: list[AdjustmentResponse] = []


class ItemChangeResponse(BaseModel):
    id: str
    type: str
    original_line_item_id: str | None = None
    line_item_id: str | None = None
    sequence: int


class OrderEditResponse(BaseModel):
    id: str
    order_id: str
    status: str
    internal_note: str | None = None
    created_by: str | None = None
    requested_at: datetime | None = None
    requested_by: str | None = None
    confirmed_at: datetime | None = None
    confirmed_by: str | None = None
    declined_at: datetime | None = None
    declined_by: str | None = None
    declined_reason: str | None = None
    canceled_at: datetime | None = None
    canceled_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    changes: list[ItemChangeResponse]
    items: list[LineItemResponse]
    removed_items: list[LineItemResponse]
    subtotal: float
    shipping_total: float
    discount_total: float
    gift_card_total: float
    gift_card_tax_total: float
    tax_total: float
    total: float
