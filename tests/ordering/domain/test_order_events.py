"""Tests for outbound integration events and their wire format."""

from datetime import datetime

from ordering.order.events import (
    ORDER_TOPICS,
    OrderCancelled,
    OrderCompleted,
    OrderCreated,
    PaymentApproved,
)
from ordering.order.order import Order
from ordering.shared.money import Money


def _order():
    order = Order.create(customer_id="cust-001", customer_name="Maria")
    order.add_item("prod-burger", "Burger", 2, Money.of("10.50"))
    return order


class TestOrderCreated:
    def test_payload_uses_camel_case_and_numbers(self):
        order = _order()
        payload = OrderCreated.from_order(order).to_payload()

        assert payload["orderId"] == order.id
        assert payload["customerId"] == "cust-001"
        assert payload["customerName"] == "Maria"
        assert payload["totalAmount"] == 21.0
        assert payload["items"] == [
            {
                "productId": "prod-burger",
                "productName": "Burger",
                "quantity": 2,
                "unitPrice": 10.5,
                "totalPrice": 21.0,
            }
        ]

    def test_created_at_is_the_order_creation_time(self):
        order = _order()
        payload = OrderCreated.from_order(order).to_payload()
        assert datetime.fromisoformat(payload["createdAt"]) == order.created_at

    def test_topic(self):
        assert OrderCreated.topic == "OrderCreated"


class TestOrderCancelled:
    def test_payload(self):
        payload = OrderCancelled(order_id="ord-1", reason="Customer changed their mind").to_payload()
        assert payload["orderId"] == "ord-1"
        assert payload["reason"] == "Customer changed their mind"
        assert datetime.fromisoformat(payload["cancelledAt"]).tzinfo is not None


class TestOrderCompleted:
    def test_payload(self):
        order = _order()
        payload = OrderCompleted.from_order(order).to_payload()
        assert set(payload) == {"orderId", "customerId", "customerName", "totalAmount", "completedAt"}
        assert payload["totalAmount"] == 21.0


class TestPaymentApproved:
    def test_payload_carries_items_for_production(self):
        order = _order()
        payload = PaymentApproved.from_order(order).to_payload()
        assert payload["orderId"] == order.id
        assert payload["items"][0]["productName"] == "Burger"
        assert payload["totalAmount"] == 21.0
        assert "approvedAt" in payload

    def test_each_instance_gets_a_fresh_approval_time(self):
        order = _order()
        first = PaymentApproved.from_order(order)
        second = PaymentApproved.from_order(order)
        assert second.approved_at >= first.approved_at


def test_all_outbound_topics():
    assert ORDER_TOPICS == {"OrderCreated", "OrderCancelled", "OrderCompleted", "PaymentApproved"}
