"""Product catalog adapter backed by the Products service HTTP API."""

from decimal import Decimal

import httpx
import structlog

from ordering.catalog.port import ProductCatalog, ProductInfo
from ordering.shared.payload import LenientPayload

logger = structlog.get_logger(__name__)


class _ProductResponse(LenientPayload):
    id: str
    name: str
    price: Decimal
    is_available: bool = False


class HttpProductCatalog(ProductCatalog):
    """Looks products up via ``GET {base_url}/api/products/{id}``.

    Any non-success response is treated as "product does not exist".
    Transport errors (connection refused, timeouts) propagate to the caller.
    """

    def __init__(self, base_url: str, timeout: float = 5.0, client: httpx.Client | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def get_by_id(self, product_id: str) -> ProductInfo | None:
        response = self._client.get(f"/api/products/{product_id}")
        if not response.is_success:
            logger.info(
                "Product lookup returned no product",
                product_id=str(product_id),
                status_code=response.status_code,
            )
            return None

        product = _ProductResponse.model_validate(response.json())
        return ProductInfo(
            id=product.id,
            name=product.name,
            price=product.price,
            is_available=product.is_available,
        )

    def close(self) -> None:
        self._client.close()
