"""Inbound cross-domain event handler: Ordering reacts to Production events.

Listens on the production events queue:
- ProductionStarted   -> order goes IN_PRODUCTION
- ProductionReady     -> order is READY for pickup
- ProductionDelivered -> order is COMPLETED
"""

import structlog
from protean.utils.globals import current_domain
from shared.events.production import ProductionEventMessage

from ordering.domain import ordering
from ordering.messaging.consumer import EventRouter, QueueConsumer
from ordering.messaging.transport.port import QueueTransport
from ordering.order.status import CompleteOrder, MarkOrderReady, StartProduction

logger = structlog.get_logger(__name__)


class ProductionOrderEventHandler:
    """Maps kitchen events onto order status commands."""

    def on_production_started(self, event: ProductionEventMessage) -> None:
        current_domain.process(StartProduction(order_id=event.order_id), asynchronous=False)

    def on_production_ready(self, event: ProductionEventMessage) -> None:
        current_domain.process(MarkOrderReady(order_id=event.order_id), asynchronous=False)

    def on_production_delivered(self, event: ProductionEventMessage) -> None:
        logger.info("Order delivered to customer", order_id=event.order_id, order_number=event.order_number)
        current_domain.process(CompleteOrder(order_id=event.order_id), asynchronous=False)

    def router(self) -> EventRouter[ProductionEventMessage]:
        return EventRouter(
            ProductionEventMessage,
            routes={
                "productionstarted": self.on_production_started,
                "productionready": self.on_production_ready,
                "productiondelivered": self.on_production_delivered,
            },
        )


def production_events_consumer(transport: QueueTransport, **options) -> QueueConsumer:
    """Build the consumer for the production events queue."""
    handler = ProductionOrderEventHandler()
    return QueueConsumer("ProductionEventsConsumer", transport, handler.router(), domain=ordering, **options)
