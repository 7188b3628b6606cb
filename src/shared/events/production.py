"""Cross-domain event contracts for Production (kitchen) events."""

from datetime import datetime

from ordering.shared.payload import LenientPayload


class ProductionEventMessage(LenientPayload):
    """The kitchen started, finished or delivered an order."""

    event_type: str | None = None
    status: str | None = None
    order_id: str
    order_number: str | None = None
    timestamp: datetime | None = None
