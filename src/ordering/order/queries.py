"""Read-side use cases for orders."""

from protean.utils.globals import current_domain

from ordering.order.dto import OrderDTO
from ordering.order.order import Order, OrderStatus


def get_order(order_id: str) -> OrderDTO:
    """Return the order, or raise ``ObjectNotFoundError``."""
    return OrderDTO.from_order(current_domain.repository_for(Order).get(order_id))


def list_orders(status: OrderStatus | None = None) -> list[OrderDTO]:
    repo = current_domain.repository_for(Order)
    orders = repo.get_all() if status is None else repo.get_by_status(status)
    return [OrderDTO.from_order(order) for order in orders]
