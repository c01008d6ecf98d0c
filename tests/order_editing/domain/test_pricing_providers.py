"""Tests for the default tax and adjustment providers."""

from order_editing.lineitem.line_item import LineItem
from order_editing.order.order import Discount, Order, Region, ShippingMethod, TaxRate
from order_editing.pricing.adjustments import DiscountAdjustmentProvider
from order_editing.pricing.tax import CalculationContext, SystemTaxProvider


def _item(**overrides):
    fields = {"variant_id": "var-1", "product_id": "prod-1", "title": "Item", "unit_price": 20.0, "quantity": 2}
    fields.update(overrides)
    return LineItem(**fields)


def _order(discounts=(), tax_rates=(), gift_cards_taxable=True):
    return Order(
        region=Region(name="US", tax_rate=10.0, tax_code="US-STD", gift_cards_taxable=gift_cards_taxable),
        discounts=list(discounts),
        tax_rates=list(tax_rates),
        shipping_methods=[ShippingMethod(name="Express", price=12.0, tax_rate=20.0)],
    )


class TestDiscountAdjustmentProvider:
    def test_percentage_discount(self):
        order = _order(discounts=[Discount(code="TEN", rule_type="percentage", value=10.0)])
        adjustments = DiscountAdjustmentProvider().get_adjustments(order, _item())
        assert len(adjustments) == 1
        assert adjustments[0].discount_code == "TEN"
        assert adjustments[0].amount == 4.0

    def test_fixed_discount_is_per_unit(self):
        order = _order(discounts=[Discount(code="THREE", rule_type="fixed", value=3.0)])
        adjustments = DiscountAdjustmentProvider().get_adjustments(order, _item())
        assert adjustments[0].amount == 6.0

    def test_discounts_never_exceed_line_subtotal(self):
        order = _order(
            discounts=[
                Discount(code="HALF", rule_type="percentage", value=50.0),
                Discount(code="BIG", rule_type="fixed", value=100.0),
            ]
        )
        adjustments = DiscountAdjustmentProvider().get_adjustments(order, _item())
        assert sum(a.amount for a in adjustments) == 40.0

    def test_free_shipping_gives_no_line_adjustment(self):
        order = _order(discounts=[Discount(code="SHIP", rule_type="free_shipping")])
        assert DiscountAdjustmentProvider().get_adjustments(order, _item()) == []

    def test_items_that_disallow_discounts(self):
        order = _order(discounts=[Discount(code="TEN", rule_type="percentage", value=10.0)])
        provider = DiscountAdjustmentProvider()
        assert provider.get_adjustments(order, _item(allow_discounts=False)) == []
        assert provider.get_adjustments(order, _item(is_giftcard=True)) == []


class TestSystemTaxProvider:
    def test_region_rate(self):
        order = _order()
        item = _item()
        lines = SystemTaxProvider().get_tax_lines([item], CalculationContext.for_item(order, item))
        assert [(line.code, line.rate) for line in lines[str(item.id)]] == [("US-STD", 10.0)]

    def test_product_override(self):
        order = _order(tax_rates=[TaxRate(product_id="prod-1", code="REDUCED", name="Reduced", rate=5.0)])
        item = _item()
        lines = SystemTaxProvider().get_tax_lines([item], CalculationContext.for_item(order, item))
        assert [(line.code, line.rate) for line in lines[str(item.id)]] == [("REDUCED", 5.0)]

    def test_gift_cards_untaxed_when_region_says_so(self):
        order = _order(gift_cards_taxable=False)
        item = _item(is_giftcard=True)
        lines = SystemTaxProvider().get_tax_lines([item], CalculationContext.for_item(order, item))
        assert lines[str(item.id)] == []

    def test_single_item_context_excludes_shipping(self):
        order = _order()
        item = _item()
        lines = SystemTaxProvider().get_tax_lines([item], CalculationContext.for_item(order, item))
        assert list(lines.keys()) == [str(item.id)]

    def test_full_context_includes_shipping(self):
        order = _order()
        item = _item()
        lines = SystemTaxProvider().get_tax_lines([item], CalculationContext(order=order, items=[item]))
        method_id = str(order.shipping_methods[0].id)
        assert lines[method_id][0].rate == 20.0
