"""Event publisher port (abstract interface).

Use cases hand integration events to this port after the order has been
persisted. Publishing is fire-and-forget from the use case's point of view,
but delivery failures must surface as exceptions: adapters never swallow them.
"""

from abc import ABC, abstractmethod

from ordering.order.events import IntegrationEvent


class EventPublisher(ABC):
    """Abstract event publisher interface."""

    @abstractmethod
    def publish(self, topic: str, event: IntegrationEvent) -> None:
        """Publish ``event`` to ``topic``."""
        ...
