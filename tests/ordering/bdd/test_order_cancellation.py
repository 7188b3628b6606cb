"""BDD tests for order cancellation."""

from ordering.order.cancellation import CancelOrder
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/order_cancellation.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the order is cancelled", target_fixture="order")
def _(order, attempt):
    return attempt(CancelOrder(order_id=order.id), order)


@when(parsers.cfparse('the order is cancelled with reason "{reason}"'), target_fixture="order")
def _(order, attempt, reason):
    return attempt(CancelOrder(order_id=order.id, reason=reason), order)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cancellation reason is "{reason}"'))
def _(publisher, reason):
    assert publisher.for_topic("OrderCancelled")[-1].payload["reason"] == reason
