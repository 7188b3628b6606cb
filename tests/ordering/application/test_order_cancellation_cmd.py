"""Application tests for order cancellation."""

import json

import pytest
from ordering.exceptions import InvalidTransition
from ordering.order.cancellation import DEFAULT_CANCELLATION_REASON, CancelOrder
from ordering.order.creation import CreateOrder
from ordering.order.order import Order, OrderStatus
from ordering.order.status import ApprovePayment, CompleteOrder, MarkOrderReady, StartProduction
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _get(order_id):
    return current_domain.repository_for(Order).get(order_id)


@pytest.fixture()
def order_id(publisher):
    dto = _process(
        CreateOrder(customer_id="cust-001", items=json.dumps([{"product_id": "prod-burger", "quantity": 1}]))
    )
    publisher.clear()
    return dto.id


class TestCancelOrder:
    def test_cancels_pending_order(self, publisher, order_id):
        _process(CancelOrder(order_id=order_id, reason="Changed my mind"))

        assert _get(order_id).current_status == OrderStatus.CANCELLED
        events = publisher.for_topic("OrderCancelled")
        assert len(events) == 1
        assert events[0].payload["orderId"] == order_id
        assert events[0].payload["reason"] == "Changed my mind"

    def test_default_reason(self, publisher, order_id):
        _process(CancelOrder(order_id=order_id))
        assert publisher.published[0].payload["reason"] == DEFAULT_CANCELLATION_REASON

    def test_cancelling_twice_succeeds_and_publishes_again(self, publisher, order_id):
        _process(CancelOrder(order_id=order_id))
        _process(CancelOrder(order_id=order_id))

        assert _get(order_id).current_status == OrderStatus.CANCELLED
        assert len(publisher.for_topic("OrderCancelled")) == 2

    def test_cannot_cancel_completed_order(self, publisher, order_id):
        for command in (ApprovePayment, StartProduction, MarkOrderReady, CompleteOrder):
            _process(command(order_id=order_id))
        publisher.clear()
        version = _get(order_id)._version

        with pytest.raises(InvalidTransition):
            _process(CancelOrder(order_id=order_id))

        order = _get(order_id)
        assert order.current_status == OrderStatus.COMPLETED
        assert order._version == version
        assert publisher.published == []

    def test_unknown_order(self, publisher):
        with pytest.raises(ObjectNotFoundError):
            _process(CancelOrder(order_id="missing"))
        assert publisher.published == []
