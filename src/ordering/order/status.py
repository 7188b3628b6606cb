"""Order status updates driven by payment and production events.

Each command loads the order, applies one transition and persists it.
Approving payment and completing the order also publish an event for the
downstream contexts (Production and Payments/Notifications respectively).

Approving payment is idempotent: a duplicate approval for an order that is
already PAYMENT_APPROVED skips the write but re-publishes PaymentApproved, so
downstream consumers that missed the first event still hear about it.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import OrderCompleted, PaymentApproved
from ordering.order.order import Order, OrderStatus
from ordering.publisher import get_publisher

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class ApprovePayment:
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class RejectPayment:
    order_id = Identifier(required=True)
    reason = String(max_length=500)


@ordering.command(part_of="Order")
class StartProduction:
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class MarkOrderReady:
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class CompleteOrder:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    @handle(ApprovePayment)
    def approve_payment(self, command: ApprovePayment) -> None:
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if order.current_status == OrderStatus.PAYMENT_APPROVED:
            logger.info("Payment already approved, re-publishing event", order_id=order.id)
        else:
            order.approve_payment()
            repo.add(order)
            logger.info("Payment approved", order_id=order.id)

        get_publisher().publish(PaymentApproved.topic, PaymentApproved.from_order(order))

    @handle(RejectPayment)
    def reject_payment(self, command: RejectPayment) -> None:
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel()
        repo.add(order)
        logger.info("Payment rejected, order cancelled", order_id=order.id, reason=command.reason)

    # -------------------------------------------------------------------
    # Production
    # -------------------------------------------------------------------
    @handle(StartProduction)
    def start_production(self, command: StartProduction) -> None:
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.start_production()
        repo.add(order)
        logger.info("Production started", order_id=order.id)

    @handle(MarkOrderReady)
    def mark_ready(self, command: MarkOrderReady) -> None:
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_ready()
        repo.add(order)
        logger.info("Order ready for pickup", order_id=order.id)

    @handle(CompleteOrder)
    def complete_order(self, command: CompleteOrder) -> None:
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.complete()
        repo.add(order)

        get_publisher().publish(OrderCompleted.topic, OrderCompleted.from_order(order))
        logger.info("Order completed", order_id=order.id)
