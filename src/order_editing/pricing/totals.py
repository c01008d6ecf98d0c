"""Order totals — pure functions over an order view.

An OrderView pairs a set of priced line items (with their tax lines and
adjustments) with the order's pricing context. Every function here is a pure
computation over that view; nothing is cached or persisted, so an order edit
gets fresh totals every time its items change.

Money is rounded to 2 decimals on output; tax rates are percentages.
"""

from dataclasses import dataclass, field

from order_editing.order.order import DiscountRuleType


def round_money(amount: float) -> float:
    return round(amount, 2)


@dataclass
class OrderView:
    """A synthetic order: some line items priced against an order's context."""

    items: list = field(default_factory=list)
    region: object = None
    discounts: list = field(default_factory=list)
    gift_cards: list = field(default_factory=list)
    shipping_methods: list = field(default_factory=list)
    tax_rates: list = field(default_factory=list)

    @classmethod
    def from_order(cls, order, items):
        return cls(
            items=list(items),
            region=order.region,
            discounts=list(order.discounts),
            gift_cards=list(order.gift_cards),
            shipping_methods=list(order.shipping_methods),
            tax_rates=list(order.tax_rates),
        )

    def has_free_shipping(self) -> bool:
        return any(d.rule_type == DiscountRuleType.FREE_SHIPPING.value for d in self.discounts)


@dataclass(frozen=True)
class Totals:
    subtotal: float
    shipping_total: float
    discount_total: float
    gift_card_total: float
    gift_card_tax_total: float
    tax_total: float
    total: float


def line_subtotal(item) -> float:
    return item.unit_price * item.quantity


def line_discount(item) -> float:
    return min(sum(a.amount for a in item.adjustments), line_subtotal(item))


def line_tax(item) -> float:
    taxable = line_subtotal(item) - line_discount(item)
    return sum(taxable * tax_line.rate / 100 for tax_line in item.tax_lines)


def get_subtotal(view: OrderView) -> float:
    return round_money(sum(line_subtotal(item) for item in view.items))


def get_discount_total(view: OrderView) -> float:
    discount = sum(line_discount(item) for item in view.items)
    return round_money(min(discount, get_subtotal(view)))


def get_shipping_total(view: OrderView) -> float:
    if view.has_free_shipping():
        return 0.0
    return round_money(sum(method.price or 0.0 for method in view.shipping_methods))


def get_shipping_tax_total(view: OrderView) -> float:
    if view.has_free_shipping():
        return 0.0
    return round_money(sum((m.price or 0.0) * (m.tax_rate or 0.0) / 100 for m in view.shipping_methods))


def get_item_tax_total(view: OrderView) -> float:
    return round_money(sum(line_tax(item) for item in view.items))


def get_gift_card_total(view: OrderView) -> float:
    balance = sum(card.balance or 0.0 for card in view.gift_cards)
    payable = get_subtotal(view) - get_discount_total(view) + get_shipping_total(view)
    return round_money(max(min(balance, payable), 0.0))


def get_gift_card_tax_total(view: OrderView) -> float:
    region = view.region
    if region is None or not region.gift_cards_taxable:
        return 0.0
    return round_money(get_gift_card_total(view) * (region.tax_rate or 0.0) / 100)


def get_tax_total(view: OrderView) -> float:
    tax = get_item_tax_total(view) + get_shipping_tax_total(view) - get_gift_card_tax_total(view)
    return round_money(max(tax, 0.0))


def get_total(view: OrderView) -> float:
    total = (
        get_subtotal(view)
        + get_shipping_total(view)
        + get_tax_total(view)
        - get_discount_total(view)
        - get_gift_card_total(view)
    )
    return round_money(max(total, 0.0))


def compute_totals(view: OrderView) -> Totals:
    return Totals(
        subtotal=get_subtotal(view),
        shipping_total=get_shipping_total(view),
        discount_total=get_discount_total(view),
        gift_card_total=get_gift_card_total(view),
        gift_card_tax_total=get_gift_card_tax_total(view),
        tax_total=get_tax_total(view),
        total=get_total(view),
    )
