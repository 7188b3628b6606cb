"""Integration events published by the Ordering domain.

Each event is an immutable, fixed-schema message published to the topic named
by its ``topic``. All events serialize the same way: camelCase keys, amounts
as JSON numbers, timestamps as ISO-8601 strings. Downstream contexts consume:
- OrderCreated: Payments (to start charging the customer)
- PaymentApproved: Production (to start cooking)
- OrderCancelled / OrderCompleted: Payments, Notifications
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from ordering.order.order import Order

Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class IntegrationEvent(BaseModel):
    """Base class for events that leave the Ordering domain."""

    topic: ClassVar[str]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready payload, exactly as it goes on the wire."""
        return self.model_dump(mode="json", by_alias=True)


class OrderLine(BaseModel):
    """Snapshot of an order item at the time an event was raised."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    product_id: str
    product_name: str
    quantity: int
    unit_price: Amount
    total_price: Amount


def _lines(order: Order) -> list[OrderLine]:
    return [
        OrderLine(
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            unit_price=item.unit_price.amount,
            total_price=item.total_price.amount,
        )
        for item in order.items
    ]


class OrderCreated(IntegrationEvent):
    """A new order was placed and is waiting for payment."""

    topic: ClassVar[str] = "OrderCreated"

    order_id: str
    customer_id: str | None = None
    customer_name: str | None = None
    total_amount: Amount
    items: list[OrderLine]
    created_at: datetime

    @classmethod
    def from_order(cls, order: Order) -> "OrderCreated":
        return cls(
            order_id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            total_amount=order.total_amount.amount,
            items=_lines(order),
            created_at=order.created_at,
        )


class OrderCancelled(IntegrationEvent):
    """The order was cancelled by the customer or by the system."""

    topic: ClassVar[str] = "OrderCancelled"

    order_id: str
    reason: str
    cancelled_at: datetime = Field(default_factory=_utcnow)


class OrderCompleted(IntegrationEvent):
    """The order was handed to the customer."""

    topic: ClassVar[str] = "OrderCompleted"

    order_id: str
    customer_id: str | None = None
    customer_name: str | None = None
    total_amount: Amount
    completed_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_order(cls, order: Order) -> "OrderCompleted":
        return cls(
            order_id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            total_amount=order.total_amount.amount,
        )


class PaymentApproved(IntegrationEvent):
    """Payment was approved; the order can go to production.

    Re-published with a fresh ``approved_at`` when a duplicate approval
    arrives for an order that is already approved.
    """

    topic: ClassVar[str] = "PaymentApproved"

    order_id: str
    customer_id: str | None = None
    customer_name: str | None = None
    items: list[OrderLine]
    total_amount: Amount
    approved_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_order(cls, order: Order) -> "PaymentApproved":
        return cls(
            order_id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            items=_lines(order),
            total_amount=order.total_amount.amount,
        )


ORDER_TOPICS = frozenset(
    event.topic for event in (OrderCreated, OrderCancelled, OrderCompleted, PaymentApproved)
)
