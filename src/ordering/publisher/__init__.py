"""Event publisher factory.

Provides get_publisher() / set_publisher() to swap implementations:
- InMemoryEventPublisher for development and testing
- SnsEventPublisher for production
"""

from ordering.publisher.memory_adapter import InMemoryEventPublisher
from ordering.publisher.port import EventPublisher

_current_publisher: EventPublisher | None = None


def get_publisher() -> EventPublisher:
    """Return the current event publisher. Defaults to InMemoryEventPublisher."""
    global _current_publisher
    if _current_publisher is None:
        _current_publisher = InMemoryEventPublisher()
    return _current_publisher


def set_publisher(publisher: EventPublisher) -> None:
    """Override the active event publisher (useful for tests)."""
    global _current_publisher
    _current_publisher = publisher


def reset_publisher() -> None:
    """Reset to default publisher."""
    global _current_publisher
    _current_publisher = None
