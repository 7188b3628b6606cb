"""Product catalog port (abstract interface).

Orders never own product data; at creation time each requested product is
resolved through this port to get its current name, price and availability.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProductInfo:
    """What the Ordering domain needs to know about a product."""

    id: str
    name: str
    price: Decimal
    is_available: bool


class ProductCatalog(ABC):
    """Abstract product lookup interface."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> ProductInfo | None:
        """Return the product, or None when it does not exist."""
        ...
