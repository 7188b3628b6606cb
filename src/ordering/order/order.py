"""Order aggregate — the core of the ordering domain.

An Order owns its OrderItems and moves through a small state machine driven
by payment and production events:

State Machine (6 states):
    PENDING → PAYMENT_APPROVED → IN_PRODUCTION → READY → COMPLETED
    CANCELLED (from every state except COMPLETED)

All guards live in a single transition table (``_TRANSITIONS``); every
mutating method on the aggregate goes through ``transition()``.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.exceptions import InvalidArgument, InvalidOrder, InvalidTransition
from ordering.shared.money import Money

MAX_ITEM_QUANTITY = 2_147_483_647


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PAYMENT_APPROVED = "PaymentApproved"
    IN_PRODUCTION = "InProduction"
    READY = "Ready"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class OrderAction(Enum):
    ADD_ITEM = "add_item"
    REMOVE_ITEM = "remove_item"
    UPDATE_ITEM_QUANTITY = "update_item_quantity"
    APPROVE_PAYMENT = "approve_payment"
    START_PRODUCTION = "start_production"
    MARK_READY = "mark_ready"
    COMPLETE = "complete"
    CANCEL = "cancel"


# State machine transition table: action -> (allowed from, resulting status).
# A resulting status of None leaves the status unchanged.
_TRANSITIONS: dict[OrderAction, tuple[frozenset[OrderStatus], OrderStatus | None]] = {
    OrderAction.ADD_ITEM: (frozenset({OrderStatus.PENDING}), None),
    OrderAction.REMOVE_ITEM: (frozenset({OrderStatus.PENDING}), None),
    OrderAction.UPDATE_ITEM_QUANTITY: (frozenset({OrderStatus.PENDING}), None),
    OrderAction.APPROVE_PAYMENT: (frozenset({OrderStatus.PENDING}), OrderStatus.PAYMENT_APPROVED),
    OrderAction.START_PRODUCTION: (frozenset({OrderStatus.PAYMENT_APPROVED}), OrderStatus.IN_PRODUCTION),
    OrderAction.MARK_READY: (frozenset({OrderStatus.IN_PRODUCTION}), OrderStatus.READY),
    OrderAction.COMPLETE: (frozenset({OrderStatus.READY}), OrderStatus.COMPLETED),
    # Re-entering CANCELLED is allowed; only COMPLETED is final for cancellation
    OrderAction.CANCEL: (frozenset(OrderStatus) - {OrderStatus.COMPLETED}, OrderStatus.CANCELLED),
}

TERMINAL_STATES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})


def transition(status: OrderStatus, action: OrderAction) -> OrderStatus:
    """Return the status that results from applying ``action`` in ``status``.

    Raises:
        InvalidTransition: if ``action`` is not allowed from ``status``.
    """
    allowed_from, target = _TRANSITIONS[action]
    if status not in allowed_from:
        raise InvalidTransition(status, action)
    return status if target is None else target


def allowed_actions(status: OrderStatus) -> frozenset[OrderAction]:
    """All actions that may be applied to an order in ``status``."""
    return frozenset(action for action, (allowed_from, _) in _TRANSITIONS.items() if status in allowed_from)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    # SQL providers hand back naive timestamps
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
def _validate_quantity(quantity) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidArgument({"quantity": ["Quantity must be greater than zero"]})
    if quantity > MAX_ITEM_QUANTITY:
        raise InvalidArgument({"quantity": [f"Quantity cannot exceed {MAX_ITEM_QUANTITY}"]})


@ordering.entity(part_of="Order")
class OrderItem:
    """A line item in an order: a product, how many, and at what price.

    ``total_price`` is always ``unit_price × quantity``; it is recomputed
    whenever the quantity changes. Items have no identity lifecycle outside
    the order that owns them.
    """

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255, sanitize=False)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)
    unit_price = ValueObject(Money, required=True)
    total_price = ValueObject(Money, required=True)

    @invariant.post
    def total_price_matches_quantity(self):
        if self.total_price != self.unit_price.scale(self.quantity):
            raise ValidationError({"total_price": ["Total price must equal unit price times quantity"]})

    @classmethod
    def create(cls, product_id, product_name, quantity, unit_price) -> "OrderItem":
        if product_name is None or not str(product_name).strip():
            raise InvalidArgument({"product_name": ["Product name cannot be empty"]})
        if not isinstance(unit_price, Money):
            raise InvalidArgument({"unit_price": ["Unit price is required"]})
        _validate_quantity(quantity)

        return cls(
            product_id=str(product_id),
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
            total_price=unit_price.scale(quantity),
        )

    def update_quantity(self, new_quantity) -> None:
        _validate_quantity(new_quantity)
        total_price = self.unit_price.scale(new_quantity)
        with atomic_change(self):
            self.quantity = new_quantity
            self.total_price = total_price


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    """A customer's food order and its fulfillment status.

    The status only changes through the transition methods below; the
    repository keeps the optimistic-concurrency version.
    """

    customer_id = Identifier()
    customer_name = String(max_length=200, sanitize=False)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    items = HasMany(OrderItem)
    total_amount = ValueObject(Money, required=True)
    created_at = DateTime(required=True)
    updated_at = DateTime(required=True)

    @classmethod
    def create(cls, customer_id=None, customer_name=None) -> "Order":
        now = _utcnow()
        return cls(
            customer_id=str(customer_id) if customer_id is not None else None,
            customer_name=customer_name,
            total_amount=Money.zero(),
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------
    @property
    def current_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    @property
    def is_terminal(self) -> bool:
        return self.current_status in TERMINAL_STATES

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _apply(self, action: OrderAction) -> None:
        target = transition(self.current_status, action)
        with atomic_change(self):
            self.status = target.value
            self._touch()

    def _touch(self) -> None:
        previous = _as_utc(self.updated_at)
        now = _utcnow()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        self.updated_at = now

    def _recalculate_total(self) -> None:
        total = Money.zero()
        for item in self.items:
            total = total.add(item.total_price)
        self.total_amount = total

    def _find_item(self, item_id) -> OrderItem | None:
        return next((i for i in self.items if i.id == str(item_id)), None)

    # -------------------------------------------------------------------
    # Order modification (only in PENDING state)
    # -------------------------------------------------------------------
    def add_item(self, product_id, product_name, quantity, unit_price) -> OrderItem:
        """Add a line item. Only allowed in PENDING state."""
        transition(self.current_status, OrderAction.ADD_ITEM)

        item = OrderItem.create(product_id, product_name, quantity, unit_price)
        with atomic_change(self):
            self.add_items(item)
            self._recalculate_total()
            self._touch()
        return item

    def remove_item(self, item_id) -> None:
        """Remove a line item. Unknown item ids are ignored."""
        transition(self.current_status, OrderAction.REMOVE_ITEM)

        item = self._find_item(item_id)
        if item is None:
            return
        with atomic_change(self):
            self.remove_items(item)
            self._recalculate_total()
            self._touch()

    def update_item_quantity(self, item_id, new_quantity) -> None:
        """Change the quantity of a line item. Only allowed in PENDING state."""
        transition(self.current_status, OrderAction.UPDATE_ITEM_QUANTITY)

        item = self._find_item(item_id)
        if item is None:
            raise InvalidArgument({"item_id": [f"Item {item_id} not found"]})
        item.update_quantity(new_quantity)
        with atomic_change(self):
            self.add_items(item)
            self._recalculate_total()
            self._touch()

    def validate(self) -> None:
        """Gate run before an order enters the fulfillment pipeline."""
        if not self.items:
            raise InvalidOrder({"items": ["Order must have at least one item"]})

    # -------------------------------------------------------------------
    # Order lifecycle transitions
    # -------------------------------------------------------------------
    def approve_payment(self) -> None:
        self._apply(OrderAction.APPROVE_PAYMENT)

    def start_production(self) -> None:
        self._apply(OrderAction.START_PRODUCTION)

    def mark_ready(self) -> None:
        self._apply(OrderAction.MARK_READY)

    def complete(self) -> None:
        self._apply(OrderAction.COMPLETE)

    def cancel(self) -> None:
        self._apply(OrderAction.CANCEL)
