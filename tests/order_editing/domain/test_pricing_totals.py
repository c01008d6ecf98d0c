"""Tests for the pure order totals functions."""

from order_editing.lineitem.line_item import LineItem
from order_editing.order.order import Discount, GiftCard, Order, Region, ShippingMethod
from order_editing.pricing.adjustments import AdjustmentData
from order_editing.pricing.tax import TaxLineData
from order_editing.pricing.totals import (
    OrderView,
    compute_totals,
    get_discount_total,
    get_gift_card_tax_total,
    get_gift_card_total,
    get_shipping_total,
    get_subtotal,
    get_tax_total,
    get_total,
    line_tax,
    round_money,
)


def _item(unit_price, quantity, discount=0.0, tax_rate=10.0):
    item = LineItem(variant_id="var-1", title="Item", unit_price=unit_price, quantity=quantity)
    if discount:
        item.replace_adjustments([AdjustmentData(discount_code="D", description="d", amount=discount)])
    if tax_rate:
        item.replace_tax_lines([TaxLineData(code="STD", name="Standard", rate=tax_rate)])
    return item


def _order(gift_card_balance=0.0, free_shipping=False, gift_cards_taxable=True):
    return Order(
        region=Region(name="US", tax_rate=10.0, tax_code="STD", gift_cards_taxable=gift_cards_taxable),
        shipping_methods=[ShippingMethod(name="Standard", price=5.0, tax_rate=0.0)],
        gift_cards=[GiftCard(code="GC", balance=gift_card_balance)] if gift_card_balance else [],
        discounts=[Discount(code="SHIPFREE", rule_type="free_shipping")] if free_shipping else [],
    )


def _view(items, **order_options):
    return OrderView.from_order(_order(**order_options), items)


class TestLineTax:
    def test_tax_is_charged_after_discount(self):
        assert round_money(line_tax(_item(20.0, 2, discount=4.0))) == 3.6

    def test_untaxed_item(self):
        assert line_tax(_item(20.0, 2, tax_rate=0.0)) == 0.0


class TestTotals:
    def test_plain_order(self):
        view = _view([_item(20.0, 2), _item(10.0, 1)])
        assert get_subtotal(view) == 50.0
        assert get_discount_total(view) == 0.0
        assert get_shipping_total(view) == 5.0
        assert get_tax_total(view) == 5.0
        assert get_total(view) == 60.0

    def test_discounts_gift_cards_and_gift_card_tax(self):
        view = _view([_item(20.0, 2, discount=4.0), _item(10.0, 1)], gift_card_balance=20.0)
        totals = compute_totals(view)
        assert totals.subtotal == 50.0
        assert totals.discount_total == 4.0
        assert totals.gift_card_total == 20.0
        assert totals.gift_card_tax_total == 2.0
        assert totals.tax_total == 2.6
        assert totals.total == 33.6

    def test_gift_card_capped_at_amount_payable(self):
        view = _view([_item(10.0, 1)], gift_card_balance=100.0)
        assert get_gift_card_total(view) == 15.0
        assert get_total(view) >= 0.0

    def test_gift_cards_not_taxable_in_region(self):
        view = _view([_item(10.0, 1)], gift_card_balance=5.0, gift_cards_taxable=False)
        assert get_gift_card_tax_total(view) == 0.0

    def test_free_shipping_discount(self):
        view = _view([_item(10.0, 1)], free_shipping=True)
        assert get_shipping_total(view) == 0.0

    def test_discount_capped_at_subtotal(self):
        item = _item(10.0, 1, tax_rate=0.0)
        item.replace_adjustments(
            [
                AdjustmentData(discount_code="A", description="a", amount=8.0),
                AdjustmentData(discount_code="B", description="b", amount=8.0),
            ]
        )
        assert get_discount_total(_view([item])) == 10.0

    def test_discount_capped_at_each_line_subtotal(self):
        view = _view([_item(20.0, 2), _item(10.0, 1, discount=40.0)])
        totals = compute_totals(view)
        assert totals.discount_total == 10.0
        assert totals.tax_total == 4.0
        assert totals.total == 49.0

    def test_empty_view(self):
        totals = compute_totals(_view([]))
        assert totals.subtotal == 0.0
        assert totals.total == 5.0
