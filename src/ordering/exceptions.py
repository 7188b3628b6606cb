"""Error taxonomy for the Ordering domain.

Every error is a Protean exception, so the HTTP layer renders them with
``protean.integrations.fastapi.register_exception_handlers``:
- ValidationError subclasses  -> 400
- ObjectNotFoundError         -> 404
- InvalidStateError           -> 409

Each one also carries a ``messages`` dict (field -> list of messages).
"""

from protean.exceptions import (
    InvalidStateError,
    ObjectNotFoundError,
    ProteanExceptionWithMessage,
    ValidationError,
)


class InvalidAmount(ValidationError):
    """A monetary amount was negative, malformed or out of range."""


class InvalidArgument(ValidationError):
    """An order item was constructed or updated with malformed fields."""


class InvalidOrder(ValidationError):
    """An order failed its validation gate (e.g. it has no items)."""


class Unavailable(ValidationError):
    """A product exists but cannot be sold right now."""

    def __init__(self, product_id: str, product_name: str):
        self.product_id = str(product_id)
        self.product_name = product_name
        super().__init__({"product_id": [f"Product {product_name} is not available"]})


class NotFound(ObjectNotFoundError):
    """A product referenced by an order does not exist."""

    def __init__(self, entity: str, identifier: str):
        self.entity = entity
        self.identifier = str(identifier)
        message = f"{entity} {identifier} not found"
        self.messages = {"id": [message]}
        super().__init__(message)


class InvalidTransition(InvalidStateError):
    """The order's current status does not allow the attempted action."""

    def __init__(self, from_state, action):
        self.from_state = from_state
        self.action = action
        message = f"Action '{action.value}' is not allowed for an order in {from_state.value} status"
        self.messages = {"status": [message]}
        super().__init__(message)


class PublishError(ProteanExceptionWithMessage):
    """An outbound event could not be handed to the message bus."""
