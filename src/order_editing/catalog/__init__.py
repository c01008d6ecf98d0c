"""Variant catalog factory.

get_variant_catalog() / set_variant_catalog() swap implementations;
FakeVariantCatalog is the default.
"""

from order_editing.catalog.fake_adapter import FakeVariantCatalog
from order_editing.catalog.port import VariantCatalog

_current_catalog: VariantCatalog | None = None


def get_variant_catalog() -> VariantCatalog:
    """Return the current variant catalog. Defaults to FakeVariantCatalog."""
    global _current_catalog
    if _current_catalog is None:
        _current_catalog = FakeVariantCatalog()
    return _current_catalog


def set_variant_catalog(catalog: VariantCatalog) -> None:
    """Override the active variant catalog (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_variant_catalog() -> None:
    global _current_catalog
    _current_catalog = None
