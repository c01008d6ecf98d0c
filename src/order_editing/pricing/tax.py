"""Tax provider port and the default system provider.

A provider turns line items plus a calculation context into tax lines. The
system provider applies the order's per-product rate overrides first and the
region rate otherwise, the same lookup the order uses at checkout.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TaxLineData:
    code: str | None
    name: str | None
    rate: float


@dataclass
class CalculationContext:
    """What tax is computed against: the order's pricing context and the items in scope.

    Line item refreshes build a context holding only the refreshed item with
    shipping excluded, so other lines and shipping methods are never re-taxed.
    """

    order: object
    items: list = field(default_factory=list)
    exclude_shipping: bool = False

    @classmethod
    def for_item(cls, order, line_item):
        return cls(order=order, items=[line_item], exclude_shipping=True)


class TaxProvider(ABC):
    @abstractmethod
    def get_tax_lines(self, items, calculation_context: CalculationContext) -> dict[str, list[TaxLineData]]:
        """Return tax lines keyed by line item id (and shipping method id unless excluded)."""
        ...


class SystemTaxProvider(TaxProvider):
    def get_tax_lines(self, items, calculation_context):
        order = calculation_context.order
        region = order.region
        tax_lines = {}

        for item in items:
            lines = []
            taxable = not item.is_giftcard or region is None or region.gift_cards_taxable
            code, name, rate = order.tax_rate_for(item.product_id)
            if taxable and rate:
                lines.append(TaxLineData(code=code, name=name, rate=rate))
            tax_lines[str(item.id)] = lines

        if not calculation_context.exclude_shipping:
            for method in order.shipping_methods:
                tax_lines[str(method.id)] = (
                    [TaxLineData(code=None, name=method.name, rate=method.tax_rate)] if method.tax_rate else []
                )

        return tax_lines
