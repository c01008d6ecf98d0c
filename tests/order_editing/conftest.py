import json
import os
from types import SimpleNamespace
from uuid import uuid4

import pytest
from order_editing.catalog import reset_variant_catalog, set_variant_catalog
from order_editing.catalog.fake_adapter import FakeVariantCatalog
from order_editing.catalog.port import Variant
from order_editing.edit.creation import CreateOrderEdit
from order_editing.inventory import reset_inventory_service, set_inventory_service
from order_editing.inventory.fake_adapter import FakeInventoryService
from order_editing.order.registration import RegisterOrder
from order_editing.pricing import reset_pricing_providers
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def order_editing_bed(request):
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from order_editing.domain import order_editing

    bed = DomainFixture(order_editing)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(order_editing_bed):
    with order_editing_bed.domain_context():
        yield

    reset_inventory_service()
    reset_variant_catalog()
    reset_pricing_providers()


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
@pytest.fixture()
def inventory():
    service = FakeInventoryService()
    set_inventory_service(service)
    return service


@pytest.fixture()
def catalog():
    fake = FakeVariantCatalog()
    fake.register(
        Variant(
            variant_id="var-cap",
            product_id="prod-cap",
            sku="CAP-001",
            title="Cap",
            unit_price=15.0,
        )
    )
    set_variant_catalog(fake)
    return fake


# ---------------------------------------------------------------------------
# Order registration
# ---------------------------------------------------------------------------
def _order_payload(order_id=None, **overrides):
    """RegisterOrder fields for a two-line order.

    Shirt: 2 x 20.00, nothing fulfilled. Mug: 1 x 10.00, fulfilled.
    Region tax 10%, standard shipping 5.00 untaxed.
    """
    order_id = order_id or f"ord-{uuid4().hex[:8]}"
    payload = {
        "order_id": order_id,
        "customer_id": "cust-001",
        "cart_id": f"cart-{order_id}",
        "region": json.dumps(
            {"region_id": "reg-us", "name": "US", "tax_rate": 10.0, "tax_code": "US-STD", "gift_cards_taxable": True}
        ),
        "items": json.dumps(
            [
                {
                    "line_item_id": f"{order_id}-shirt",
                    "variant_id": "var-shirt",
                    "product_id": "prod-shirt",
                    "sku": "SHIRT-001",
                    "title": "Shirt",
                    "unit_price": 20.0,
                    "quantity": 2,
                },
                {
                    "line_item_id": f"{order_id}-mug",
                    "variant_id": "var-mug",
                    "product_id": "prod-mug",
                    "sku": "MUG-001",
                    "title": "Mug",
                    "unit_price": 10.0,
                    "quantity": 1,
                    "fulfilled_quantity": 1,
                },
            ]
        ),
        "shipping_methods": json.dumps([{"name": "Standard", "price": 5.0, "tax_rate": 0.0}]),
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def order_payload():
    return _order_payload


@pytest.fixture()
def registered_order():
    payload = _order_payload()
    order_id = current_domain.process(RegisterOrder(**payload), asynchronous=False)
    return SimpleNamespace(
        order_id=order_id,
        shirt_id=f"{order_id}-shirt",
        mug_id=f"{order_id}-mug",
    )


@pytest.fixture()
def order_edit_id(registered_order):
    return current_domain.process(
        CreateOrderEdit(order_id=registered_order.order_id, internal_note="Customer called", created_by="agent-1"),
        asynchronous=False,
    )
