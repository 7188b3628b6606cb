"""Runtime configuration for the Ordering service.

Values come from the process environment, optionally seeded from a ``.env``
file. Defaults point at a LocalStack instance on localhost.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from ordering.order.events import OrderCancelled, OrderCompleted, OrderCreated, PaymentApproved

_LOCALSTACK_QUEUE_PREFIX = "http://localhost:4566/000000000000"
_LOCALSTACK_TOPIC_PREFIX = "arn:aws:sns:us-east-1:000000000000"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    return raw.strip().lower() in ("1", "true", "yes", "on") if raw else default


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    aws_region: str = "us-east-1"
    aws_endpoint_url: str | None = None
    payment_events_queue_url: str = f"{_LOCALSTACK_QUEUE_PREFIX}/sqs-orders-payment-events"
    production_events_queue_url: str = f"{_LOCALSTACK_QUEUE_PREFIX}/sqs-orders-production-events"
    topic_arns: dict[str, str] = field(
        default_factory=lambda: {
            OrderCreated.topic: f"{_LOCALSTACK_TOPIC_PREFIX}:{OrderCreated.topic}",
            OrderCancelled.topic: f"{_LOCALSTACK_TOPIC_PREFIX}:{OrderCancelled.topic}",
            OrderCompleted.topic: f"{_LOCALSTACK_TOPIC_PREFIX}:{OrderCompleted.topic}",
            PaymentApproved.topic: f"{_LOCALSTACK_TOPIC_PREFIX}:{PaymentApproved.topic}",
        }
    )
    products_api_url: str = "http://localhost:8080"
    consumer_max_messages: int = 10
    consumer_wait_seconds: int = 20
    consumer_error_backoff_seconds: float = 5.0
    run_consumers: bool = True

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        defaults = cls()
        topic_arns = {
            OrderCreated.topic: os.getenv("ORDER_CREATED_TOPIC_ARN", defaults.topic_arns[OrderCreated.topic]),
            OrderCancelled.topic: os.getenv("ORDER_CANCELLED_TOPIC_ARN", defaults.topic_arns[OrderCancelled.topic]),
            OrderCompleted.topic: os.getenv("ORDER_COMPLETED_TOPIC_ARN", defaults.topic_arns[OrderCompleted.topic]),
            PaymentApproved.topic: os.getenv(
                "PAYMENT_APPROVED_TOPIC_ARN", defaults.topic_arns[PaymentApproved.topic]
            ),
        }

        return cls(
            environment=os.getenv("ENVIRONMENT", defaults.environment),
            aws_region=os.getenv("AWS_REGION", defaults.aws_region),
            aws_endpoint_url=os.getenv("AWS_ENDPOINT_URL") or None,
            payment_events_queue_url=os.getenv("PAYMENT_EVENTS_QUEUE_URL", defaults.payment_events_queue_url),
            production_events_queue_url=os.getenv(
                "PRODUCTION_EVENTS_QUEUE_URL", defaults.production_events_queue_url
            ),
            topic_arns=topic_arns,
            products_api_url=os.getenv("PRODUCTS_API_URL", defaults.products_api_url),
            consumer_max_messages=_int_env("CONSUMER_MAX_MESSAGES", defaults.consumer_max_messages),
            consumer_wait_seconds=_int_env("CONSUMER_WAIT_SECONDS", defaults.consumer_wait_seconds),
            consumer_error_backoff_seconds=_float_env(
                "CONSUMER_ERROR_BACKOFF_SECONDS", defaults.consumer_error_backoff_seconds
            ),
            run_consumers=_bool_env("RUN_CONSUMERS", defaults.run_consumers),
        )

    def consumer_options(self) -> dict:
        return {
            "max_messages": self.consumer_max_messages,
            "wait_seconds": self.consumer_wait_seconds,
            "error_backoff_seconds": self.consumer_error_backoff_seconds,
        }
