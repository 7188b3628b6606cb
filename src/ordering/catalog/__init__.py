"""Product catalog factory.

Provides get_catalog() / set_catalog() to swap implementations:
- FakeProductCatalog for development and testing
- HttpProductCatalog against the Products API
"""

from ordering.catalog.fake_adapter import FakeProductCatalog
from ordering.catalog.port import ProductCatalog

_current_catalog: ProductCatalog | None = None


def get_catalog() -> ProductCatalog:
    """Return the current product catalog. Defaults to FakeProductCatalog."""
    global _current_catalog
    if _current_catalog is None:
        _current_catalog = FakeProductCatalog()
    return _current_catalog


def set_catalog(catalog: ProductCatalog) -> None:
    """Override the active product catalog (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to default catalog."""
    global _current_catalog
    _current_catalog = None
