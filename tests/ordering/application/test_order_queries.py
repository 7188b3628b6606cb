"""Application tests for order read-side queries."""

import json

import pytest
from ordering.order import queries
from ordering.order.creation import CreateOrder
from ordering.order.order import Order, OrderStatus
from ordering.order.status import ApprovePayment
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _create(customer_id):
    return current_domain.process(
        CreateOrder(customer_id=customer_id, items=json.dumps([{"product_id": "prod-soda", "quantity": 1}])),
        asynchronous=False,
    )


class TestOrderQueries:
    def test_get_order(self):
        created = _create("cust-001")
        fetched = queries.get_order(created.id)
        assert fetched.id == created.id
        assert fetched.status == "Pending"
        assert fetched.items[0].product_name == "Soda"
        assert fetched.total_amount == created.total_amount

    def test_get_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            queries.get_order("missing")

    def test_list_orders(self):
        first = _create("cust-001")
        second = _create("cust-002")
        assert [o.id for o in queries.list_orders()] == [first.id, second.id]

    def test_list_orders_by_status(self):
        first = _create("cust-001")
        _create("cust-002")
        current_domain.process(ApprovePayment(order_id=first.id), asynchronous=False)

        approved = queries.list_orders(OrderStatus.PAYMENT_APPROVED)
        pending = queries.list_orders(OrderStatus.PENDING)

        assert [o.id for o in approved] == [first.id]
        assert len(pending) == 1
        assert queries.list_orders(OrderStatus.COMPLETED) == []


class TestOrderRepository:
    def test_lookup_by_customer(self):
        _create("cust-001")
        _create("cust-001")
        _create("cust-002")
        repo = current_domain.repository_for(Order)
        assert len(repo.get_by_customer_id("cust-001")) == 2

    def test_exists_by_id(self):
        created = _create("cust-001")
        repo = current_domain.repository_for(Order)
        assert repo.exists_by_id(created.id) is True
        assert repo.exists_by_id("missing") is False

    def test_reloaded_order_keeps_items_and_money(self):
        created = _create("cust-001")
        order = current_domain.repository_for(Order).get(created.id)
        assert len(order.items) == 1
        assert str(order.items[0].unit_price) == "4.50"
        assert str(order.total_amount) == "4.50"
