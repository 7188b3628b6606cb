"""Adapter and consumer wiring for a running service.

The API process and the standalone consumer runner both wire the domain
through here, so they talk to the same catalog, publisher and queues.
"""

import boto3

from ordering.catalog import set_catalog
from ordering.catalog.http_adapter import HttpProductCatalog
from ordering.config import Settings
from ordering.messaging.consumer import QueueConsumer
from ordering.messaging.transport.port import QueueTransport
from ordering.messaging.transport.sqs_adapter import SqsQueueTransport
from ordering.order.payment_events import payment_events_consumer
from ordering.order.production_events import production_events_consumer
from ordering.publisher import set_publisher
from ordering.publisher.sns_adapter import SnsEventPublisher

CONSUMERS = ("payments", "production")


def _aws_client(service: str, settings: Settings):
    return boto3.client(service, region_name=settings.aws_region, endpoint_url=settings.aws_endpoint_url)


def configure_adapters(settings: Settings) -> None:
    """Install the Products API catalog and the SNS publisher."""
    set_catalog(HttpProductCatalog(settings.products_api_url))
    set_publisher(SnsEventPublisher(_aws_client("sns", settings), settings.topic_arns))


def sqs_transport(settings: Settings, queue_url: str) -> SqsQueueTransport:
    return SqsQueueTransport(_aws_client("sqs", settings), queue_url)


def build_consumer(name: str, settings: Settings, transport: QueueTransport | None = None) -> QueueConsumer:
    """Build a consumer by name, bound to its SQS queue unless a transport is given."""
    options = settings.consumer_options()
    if name == "payments":
        transport = transport or sqs_transport(settings, settings.payment_events_queue_url)
        return payment_events_consumer(transport, **options)
    elif name == "production":
        transport = transport or sqs_transport(settings, settings.production_events_queue_url)
        return production_events_consumer(transport, **options)
    else:
        raise ValueError(f"Unknown consumer: {name}")


def build_consumers(
    settings: Settings,
    names=CONSUMERS,
    transports: dict[str, QueueTransport] | None = None,
) -> list[QueueConsumer]:
    transports = transports or {}
    return [build_consumer(name, settings, transports.get(name)) for name in names]
