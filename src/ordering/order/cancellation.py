"""Order cancellation — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import OrderCancelled
from ordering.order.order import Order
from ordering.publisher import get_publisher

logger = structlog.get_logger(__name__)

DEFAULT_CANCELLATION_REASON = "Cancelled by user"


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    reason = String(max_length=500, default=DEFAULT_CANCELLATION_REASON)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command: CancelOrder) -> None:
        """Cancel the order and publish OrderCancelled.

        Cancelling an already-cancelled order succeeds and publishes again;
        a completed order cannot be cancelled.
        """
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel()
        repo.add(order)

        reason = command.reason or DEFAULT_CANCELLATION_REASON
        get_publisher().publish(OrderCancelled.topic, OrderCancelled(order_id=order.id, reason=reason))
        logger.info("Order cancelled", order_id=order.id, reason=reason)
