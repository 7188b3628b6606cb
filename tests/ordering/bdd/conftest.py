"""Shared BDD fixtures and step definitions for the Ordering domain."""

import json

import pytest
from ordering.exceptions import InvalidTransition
from ordering.order.cancellation import CancelOrder
from ordering.order.creation import CreateOrder
from ordering.order.order import Order
from ordering.order.status import ApprovePayment, CompleteOrder, MarkOrderReady, StartProduction
from protean import current_domain
from protean.exceptions import ProteanException
from pytest_bdd import given, parsers, then

# Commands that take a fresh order to each status
_PATH_TO_STATUS = {
    "Pending": [],
    "PaymentApproved": [ApprovePayment],
    "InProduction": [ApprovePayment, StartProduction],
    "Ready": [ApprovePayment, StartProduction, MarkOrderReady],
    "Completed": [ApprovePayment, StartProduction, MarkOrderReady, CompleteOrder],
    "Cancelled": [CancelOrder],
}


def reload(order):
    return current_domain.repository_for(Order).get(order.id)


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def customer_id():
    return "cust-001"


@pytest.fixture()
def error():
    """Container for the error raised by the last When step."""
    return {"exc": None}


@pytest.fixture()
def attempt(error):
    """Process a command and return the reloaded order, capturing domain errors."""

    def _attempt(command, order):
        try:
            current_domain.process(command, asynchronous=False)
        except ProteanException as exc:
            error["exc"] = exc
        return reload(order)

    return _attempt


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
def _create_pending_order(customer_id):
    dto = current_domain.process(
        CreateOrder(
            customer_id=customer_id,
            customer_name="Maria",
            items=json.dumps([{"product_id": "prod-burger", "quantity": 2}]),
        ),
        asynchronous=False,
    )
    return current_domain.repository_for(Order).get(dto.id)


@given("a pending order", target_fixture="order")
def pending_order(customer_id, publisher):
    order = _create_pending_order(customer_id)
    publisher.clear()
    return order


@given(parsers.cfparse('an order in "{status}" status'), target_fixture="order")
def order_in_status(customer_id, publisher, status):
    order = _create_pending_order(customer_id)
    for command in _PATH_TO_STATUS[status]:
        current_domain.process(command(order_id=order.id), asynchronous=False)
    publisher.clear()
    return reload(order)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order, status):
    assert order.status == status


@then("the order action fails with an invalid transition")
def _(error):
    assert error["exc"] is not None, "Expected an invalid transition but none was raised"
    assert isinstance(error["exc"], InvalidTransition)


@then(parsers.cfparse("{count:d} {topic} event was published"))
def _(publisher, count, topic):
    assert len(publisher.for_topic(topic)) == count


@then(parsers.cfparse("{count:d} {topic} events were published"))
def _(publisher, count, topic):
    assert len(publisher.for_topic(topic)) == count


@then("no events were published")
def _(publisher):
    assert publisher.published == []
