"""Tests for the OrderItem entity."""

import inspect
from decimal import Decimal

import pytest
from ordering.exceptions import InvalidArgument
from ordering.order.order import MAX_ITEM_QUANTITY, OrderItem
from ordering.shared.money import Money
from protean.exceptions import ValidationError


class TestOrderItemCreation:
    def test_total_price_is_unit_price_times_quantity(self):
        item = OrderItem.create("prod-001", "Burger", 2, Money.of("10.50"))
        assert item.total_price == Money.of("21.00")

    def test_identity_is_generated(self):
        item = OrderItem.create("prod-001", "Burger", 1, Money.of("10.50"))
        assert item.id
        assert item.id != OrderItem.create("prod-001", "Burger", 1, Money.of("10.50")).id

    def test_create_takes_no_identity_argument(self):
        assert "id" not in inspect.signature(OrderItem.create).parameters

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, name):
        with pytest.raises(InvalidArgument) as exc:
            OrderItem.create("prod-001", name, 1, Money.of("1.00"))
        assert exc.value.messages == {"product_name": ["Product name cannot be empty"]}

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", True])
    def test_non_positive_or_non_integer_quantity_rejected(self, quantity):
        with pytest.raises(InvalidArgument):
            OrderItem.create("prod-001", "Burger", quantity, Money.of("1.00"))

    def test_quantity_above_maximum_rejected(self):
        with pytest.raises(InvalidArgument) as exc:
            OrderItem.create("prod-001", "Burger", 10**27, Money.of("10.50"))
        assert exc.value.messages == {"quantity": [f"Quantity cannot exceed {MAX_ITEM_QUANTITY}"]}

    def test_maximum_quantity_accepted(self):
        item = OrderItem.create("prod-001", "Burger", MAX_ITEM_QUANTITY, Money.of("1.00"))
        assert item.total_price == Money.of(MAX_ITEM_QUANTITY)

    def test_unit_price_must_be_money(self):
        with pytest.raises(InvalidArgument):
            OrderItem.create("prod-001", "Burger", 1, Decimal("1.00"))


class TestOrderItemQuantity:
    def test_update_quantity_recomputes_total(self):
        item = OrderItem.create("prod-001", "Burger", 2, Money.of("10.50"))
        item.update_quantity(3)
        assert item.quantity == 3
        assert item.total_price == Money.of("31.50")

    def test_update_quantity_rejects_zero(self):
        item = OrderItem.create("prod-001", "Burger", 2, Money.of("10.50"))
        with pytest.raises(InvalidArgument):
            item.update_quantity(0)
        assert item.quantity == 2
        assert item.total_price == Money.of("21.00")

    def test_total_price_must_match_quantity(self):
        item = OrderItem.create("prod-001", "Burger", 2, Money.of("10.50"))
        with pytest.raises(ValidationError) as exc:
            item.total_price = Money.of("1.00")
        assert "total_price" in exc.value.messages
