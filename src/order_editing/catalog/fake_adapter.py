"""In-memory variant catalog for development and testing."""

from order_editing.catalog.port import Variant, VariantCatalog


class FakeVariantCatalog(VariantCatalog):
    def __init__(self) -> None:
        self.variants: dict[str, Variant] = {}
        self.calls: list[dict] = []

    def register(self, variant: Variant) -> Variant:
        self.variants[str(variant.variant_id)] = variant
        return variant

    def get_variant(self, variant_id: str) -> Variant | None:
        self.calls.append({"method": "get_variant", "variant_id": str(variant_id)})
        return self.variants.get(str(variant_id))
