"""In-memory queue for development and testing.

Mimics the parts of SQS semantics the consumer relies on: received messages
become invisible until they are deleted, unacknowledged messages can be made
visible again to simulate redelivery, and an empty queue long-polls for up to
``wait_seconds`` before returning.
"""

import threading
from collections import deque
from uuid import uuid4

from ordering.messaging.transport.port import QueueMessage, QueueTransport


class InMemoryQueue(QueueTransport):
    """Configurable fake queue."""

    def __init__(self) -> None:
        self._visible: deque[tuple[str, str]] = deque()
        self._in_flight: dict[str, tuple[str, str]] = {}
        self._available = threading.Condition()
        self.deleted: list[str] = []
        self.receive_calls: int = 0
        self.receive_error: Exception | None = None

    def fail_next_receive(self, error: Exception) -> None:
        """Make the next ``receive`` call raise ``error``."""
        self.receive_error = error

    def send(self, body: str) -> str:
        message_id = str(uuid4())
        with self._available:
            self._visible.append((message_id, body))
            self._available.notify_all()
        return message_id

    def receive(self, max_messages: int, wait_seconds: int) -> list[QueueMessage]:
        with self._available:
            self.receive_calls += 1
            if self.receive_error is not None:
                error, self.receive_error = self.receive_error, None
                raise error

            if not self._visible and wait_seconds > 0:
                self._available.wait_for(lambda: self._visible, timeout=wait_seconds)

            messages = []
            while self._visible and len(messages) < max_messages:
                message_id, body = self._visible.popleft()
                receipt_handle = f"{message_id}:{uuid4().hex[:8]}"
                self._in_flight[receipt_handle] = (message_id, body)
                messages.append(QueueMessage(message_id=message_id, receipt_handle=receipt_handle, body=body))
            return messages

    def delete(self, receipt_handle: str) -> None:
        with self._available:
            message = self._in_flight.pop(receipt_handle, None)
            if message is not None:
                self.deleted.append(message[0])

    def redeliver_unacknowledged(self) -> int:
        """Make every received-but-not-deleted message visible again."""
        with self._available:
            count = len(self._in_flight)
            self._visible.extend(self._in_flight.values())
            self._in_flight.clear()
            self._available.notify_all()
            return count

    @property
    def visible_count(self) -> int:
        return len(self._visible)

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)
