"""AWS SNS event publisher.

Each logical topic name (``OrderCreated``, ``PaymentApproved``, ...) maps to
an SNS topic ARN. The event's JSON payload is the SNS message body; SNS wraps
it in its notification envelope for SQS subscribers downstream.
"""

import json

import structlog

from ordering.exceptions import PublishError
from ordering.order.events import IntegrationEvent
from ordering.publisher.port import EventPublisher

logger = structlog.get_logger(__name__)


class SnsEventPublisher(EventPublisher):
    """Publishes integration events to SNS topics via boto3."""

    def __init__(self, sns_client, topic_arns: dict[str, str]) -> None:
        self._client = sns_client
        self.topic_arns = dict(topic_arns)

    def publish(self, topic: str, event: IntegrationEvent) -> None:
        topic_arn = self.topic_arns.get(topic)
        if not topic_arn:
            raise PublishError({"topic": [f"Topic {topic} not configured"]})

        response = self._client.publish(
            TopicArn=topic_arn,
            Message=json.dumps(event.to_payload()),
        )
        logger.info(
            "Event published",
            topic=topic,
            topic_arn=topic_arn,
            message_id=response.get("MessageId"),
        )
