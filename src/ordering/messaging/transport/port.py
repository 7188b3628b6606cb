"""Queue transport port (abstract interface).

The consumer loop only needs two operations from a queue: receive a batch of
messages (long-polling) and delete a message once it has been handled.
Delivery is at-least-once: a message that is not deleted comes back later.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class QueueMessage:
    """A message as received from the queue."""

    message_id: str
    receipt_handle: str
    body: str


class QueueTransport(ABC):
    """Abstract queue transport interface."""

    @abstractmethod
    def receive(self, max_messages: int, wait_seconds: int) -> list[QueueMessage]:
        """Wait up to ``wait_seconds`` for at most ``max_messages`` messages."""
        ...

    @abstractmethod
    def delete(self, receipt_handle: str) -> None:
        """Acknowledge a message so it is not delivered again."""
        ...
