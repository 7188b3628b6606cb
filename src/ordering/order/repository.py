"""Order repository: domain-named queries over the configured provider.

Loading and saving single orders goes through the standard repository
methods (``get`` raises ``ObjectNotFoundError``, ``add`` persists the order
with its items under the aggregate's version check).
"""

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus


@ordering.repository(part_of=Order)
class OrderRepository:
    def get_all(self) -> list[Order]:
        """All orders, oldest first."""
        return self.query.order_by("created_at").limit(None).all().items

    def get_by_status(self, status: OrderStatus) -> list[Order]:
        return self.query.filter(status=status.value).order_by("created_at").limit(None).all().items

    def get_by_customer_id(self, customer_id: str) -> list[Order]:
        return self.query.filter(customer_id=str(customer_id)).order_by("created_at").limit(None).all().items

    def exists_by_id(self, order_id: str) -> bool:
        return self.get_or_none(order_id) is not None
