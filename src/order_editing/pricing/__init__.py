"""Pricing provider factory.

get_tax_provider() / get_adjustment_provider() return the active providers;
set_* swaps them (a real tax service in production, stubs in tests).
"""

from order_editing.pricing.adjustments import AdjustmentProvider, DiscountAdjustmentProvider
from order_editing.pricing.tax import SystemTaxProvider, TaxProvider

_current_tax_provider: TaxProvider | None = None
_current_adjustment_provider: AdjustmentProvider | None = None


def get_tax_provider() -> TaxProvider:
    """Return the current tax provider. Defaults to SystemTaxProvider."""
    global _current_tax_provider
    if _current_tax_provider is None:
        _current_tax_provider = SystemTaxProvider()
    return _current_tax_provider


def set_tax_provider(provider: TaxProvider) -> None:
    global _current_tax_provider
    _current_tax_provider = provider


def get_adjustment_provider() -> AdjustmentProvider:
    """Return the current adjustment provider. Defaults to DiscountAdjustmentProvider."""
    global _current_adjustment_provider
    if _current_adjustment_provider is None:
        _current_adjustment_provider = DiscountAdjustmentProvider()
    return _current_adjustment_provider


def set_adjustment_provider(provider: AdjustmentProvider) -> None:
    global _current_adjustment_provider
    _current_adjustment_provider = provider


def reset_pricing_providers() -> None:
    """Reset both providers to their defaults."""
    global _current_tax_provider, _current_adjustment_provider
    _current_tax_provider = None
    _current_adjustment_provider = None
