"""Cross-domain event contracts for Payments events.

These classes define the shape of payment events as the Ordering domain
consumes them from its payment events queue. The Payments service has used
both ``eventType`` and ``status`` to say what happened, so both are kept;
the consumer picks whichever is present.
"""

from datetime import datetime
from decimal import Decimal

from ordering.shared.payload import LenientPayload


class PaymentEventMessage(LenientPayload):
    """A payment was approved, rejected or cancelled for an order."""

    event_type: str | None = None
    status: str | None = None
    payment_id: str | None = None
    order_id: str
    order_number: str | None = None
    reason: str | None = None
    amount: Decimal | None = None
    timestamp: datetime | None = None
    approved_at: datetime | None = None
