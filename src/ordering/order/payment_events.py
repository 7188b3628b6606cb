"""Inbound cross-domain event handler: Ordering reacts to Payments events.

Listens on the payment events queue:
- approved / PaymentApproved                      -> approve payment
- rejected / cancelled / PaymentRejected / PaymentCancelled -> cancel the order
"""

import structlog
from protean.utils.globals import current_domain
from shared.events.payments import PaymentEventMessage

from ordering.domain import ordering
from ordering.messaging.consumer import EventRouter, QueueConsumer
from ordering.messaging.transport.port import QueueTransport
from ordering.order.status import ApprovePayment, RejectPayment

logger = structlog.get_logger(__name__)

DEFAULT_REJECTION_REASON = "Payment rejected"


class PaymentOrderEventHandler:
    """Maps payment events onto order status commands."""

    def on_payment_approved(self, event: PaymentEventMessage) -> None:
        logger.info("Approving payment on order", order_id=event.order_id, payment_id=event.payment_id)
        current_domain.process(ApprovePayment(order_id=event.order_id), asynchronous=False)

    def on_payment_rejected(self, event: PaymentEventMessage) -> None:
        reason = (event.reason or DEFAULT_REJECTION_REASON)[:500]
        logger.info("Rejecting payment on order", order_id=event.order_id, reason=reason)
        current_domain.process(RejectPayment(order_id=event.order_id, reason=reason), asynchronous=False)

    def router(self) -> EventRouter[PaymentEventMessage]:
        return EventRouter(
            PaymentEventMessage,
            routes={
                "paymentapproved": self.on_payment_approved,
                "approved": self.on_payment_approved,
                "paymentrejected": self.on_payment_rejected,
                "paymentcancelled": self.on_payment_rejected,
                "rejected": self.on_payment_rejected,
                "cancelled": self.on_payment_rejected,
            },
        )


def payment_events_consumer(transport: QueueTransport, **options) -> QueueConsumer:
    """Build the consumer for the payment events queue."""
    handler = PaymentOrderEventHandler()
    return QueueConsumer("PaymentEventsConsumer", transport, handler.router(), domain=ordering, **options)
