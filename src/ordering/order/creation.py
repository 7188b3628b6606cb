"""Order creation — command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.catalog import get_catalog
from ordering.domain import ordering
from ordering.exceptions import InvalidArgument, NotFound, Unavailable
from ordering.order.dto import OrderDTO
from ordering.order.events import OrderCreated
from ordering.order.order import Order
from ordering.publisher import get_publisher
from ordering.shared.money import Money

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CreateOrder:
    customer_id = Identifier()
    customer_name = String(max_length=200, sanitize=False)
    items = Text(sanitize=False)  # JSON: [{"product_id": "...", "quantity": 2}, ...]


def _requested_items(command: CreateOrder) -> list[tuple[str, int]]:
    try:
        raw_items = json.loads(command.items) if command.items else []
    except json.JSONDecodeError as exc:
        raise InvalidArgument({"items": ["Items must be a JSON list"]}) from exc
    if not isinstance(raw_items, list):
        raise InvalidArgument({"items": ["Items must be a JSON list"]})

    requested = []
    for raw in raw_items:
        if not isinstance(raw, dict) or not raw.get("product_id"):
            raise InvalidArgument({"items": ["Each item needs a product_id and a quantity"]})
        requested.append((str(raw["product_id"]), raw.get("quantity")))
    return requested


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    """Resolves products, builds a PENDING order, persists it and announces it."""

    @handle(CreateOrder)
    def create_order(self, command: CreateOrder) -> OrderDTO:
        catalog = get_catalog()
        order = Order.create(customer_id=command.customer_id, customer_name=command.customer_name)

        for product_id, quantity in _requested_items(command):
            product = catalog.get_by_id(product_id)
            if product is None:
                raise NotFound("Product", product_id)
            if not product.is_available:
                raise Unavailable(product.id, product.name)

            order.add_item(product.id, product.name, quantity, Money.of(product.price))

        order.validate()
        current_domain.repository_for(Order).add(order)

        get_publisher().publish(OrderCreated.topic, OrderCreated.from_order(order))

        logger.info(
            "Order created",
            order_id=order.id,
            customer_id=order.customer_id,
            item_count=len(order.items),
            total_amount=str(order.total_amount),
        )
        return OrderDTO.from_order(order)
