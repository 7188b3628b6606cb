"""External representation of an Order returned by the use cases."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ordering.order.events import Amount
from ordering.order.order import Order


class OrderItemDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: Amount
    total_price: Amount


class OrderDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    customer_id: str | None = None
    customer_name: str | None = None
    status: str
    total_amount: Amount
    items: list[OrderItemDTO]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_order(cls, order: Order) -> "OrderDTO":
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            status=order.status,
            total_amount=order.total_amount.amount,
            items=[
                OrderItemDTO(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price.amount,
                    total_price=item.total_price.amount,
                )
                for item in order.items
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
