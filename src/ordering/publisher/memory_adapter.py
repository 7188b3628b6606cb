"""In-memory event publisher for development and testing.

Records every publish call instead of sending it anywhere, and can be told
to fail so callers' error paths can be exercised.
"""

from dataclasses import dataclass
from typing import Any

from ordering.exceptions import PublishError
from ordering.order.events import IntegrationEvent
from ordering.publisher.port import EventPublisher


@dataclass(frozen=True)
class PublishedEvent:
    topic: str
    event: IntegrationEvent
    payload: dict[str, Any]


class InMemoryEventPublisher(EventPublisher):
    """Configurable fake event publisher."""

    def __init__(self) -> None:
        self.published: list[PublishedEvent] = []
        self.should_fail: bool = False

    def configure(self, should_fail: bool) -> None:
        self.should_fail = should_fail

    def publish(self, topic: str, event: IntegrationEvent) -> None:
        if self.should_fail:
            raise PublishError({"topic": [f"Failed to publish to {topic}"]})
        self.published.append(PublishedEvent(topic=topic, event=event, payload=event.to_payload()))

    def for_topic(self, topic: str) -> list[PublishedEvent]:
        return [p for p in self.published if p.topic == topic]

    def clear(self) -> None:
        self.published.clear()
