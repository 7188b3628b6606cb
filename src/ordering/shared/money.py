"""Money value object for non-negative monetary amounts."""

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Decimal as DecimalField

from ordering.domain import ordering
from ordering.exceptions import InvalidAmount

_CENTS = Decimal("0.01")


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidAmount({"amount": [f"Invalid amount: {value!r}"]})
    try:
        # str() keeps floats like 10.5 from picking up binary noise
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmount({"amount": [f"Invalid amount: {value!r}"]}) from exc


@ordering.value_object
class Money:
    """An immutable, non-negative amount rounded to two decimal places.

    Build instances with ``Money.of``: it normalizes the input and raises
    ``InvalidAmount`` for anything that is not a representable, non-negative
    amount. ``add`` and ``scale`` go through it too, so scaling by a negative
    factor fails exactly like constructing a negative amount.
    """

    amount = DecimalField(required=True)

    @invariant.post
    def amount_cannot_be_negative(self):
        if self.amount < 0:
            raise ValidationError({"amount": ["Amount cannot be negative"]})

    @invariant.post
    def amount_has_at_most_two_decimal_places(self):
        if self.amount.as_tuple().exponent < -2:
            raise ValidationError({"amount": ["Amount cannot have more than two decimal places"]})

    @classmethod
    def of(cls, value) -> "Money":
        amount = _to_decimal(value)
        if not amount.is_finite():
            raise InvalidAmount({"amount": [f"Invalid amount: {value!r}"]})
        if amount < 0:
            raise InvalidAmount({"amount": ["Amount cannot be negative"]})
        try:
            amount = amount.quantize(_CENTS, rounding=ROUND_HALF_EVEN)
        except InvalidOperation as exc:
            raise InvalidAmount({"amount": ["Amount is too large"]}) from exc
        return cls(amount=amount)

    @classmethod
    def zero(cls) -> "Money":
        return cls.of(0)

    def add(self, other: "Money") -> "Money":
        return Money.of(self.amount + other.amount)

    def scale(self, factor) -> "Money":
        return Money.of(self.amount * _to_decimal(factor))

    def __add__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __mul__(self, factor):
        if isinstance(factor, Money):
            return NotImplemented
        return self.scale(factor)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"{self.amount:.2f}"
