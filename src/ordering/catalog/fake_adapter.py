"""In-memory product catalog for development and testing."""

from decimal import Decimal

from ordering.catalog.port import ProductCatalog, ProductInfo


class FakeProductCatalog(ProductCatalog):
    """Configurable product catalog that never leaves the process."""

    def __init__(self, products: list[ProductInfo] | None = None) -> None:
        self._products: dict[str, ProductInfo] = {}
        self.calls: list[str] = []
        for product in products or []:
            self._products[product.id] = product

    def add(self, product_id: str, name: str, price, is_available: bool = True) -> ProductInfo:
        product = ProductInfo(
            id=str(product_id),
            name=name,
            price=Decimal(str(price)),
            is_available=is_available,
        )
        self._products[product.id] = product
        return product

    def remove(self, product_id: str) -> None:
        self._products.pop(str(product_id), None)

    def get_by_id(self, product_id: str) -> ProductInfo | None:
        self.calls.append(str(product_id))
        return self._products.get(str(product_id))
