"""Generic queue consumer.

One ``QueueConsumer`` is bound to one queue and one ``EventRouter``. The
router knows the shape of the messages on that queue and which use case each
event type maps to; the consumer owns the receive/acknowledge loop, which is
identical for every queue.

Acknowledgment rules:
- the mapped use case succeeded            -> delete
- the event type is unknown                -> delete (ignored, avoids poison loops)
- the payload could not be decoded         -> delete (dropped)
- the use case raised                      -> keep (redelivered by the transport)
"""

import asyncio
from collections.abc import Callable, Iterable, Mapping
from contextlib import nullcontext
from enum import Enum
from typing import Generic, TypeVar

import structlog
from protean.domain import Domain
from pydantic import BaseModel, ValidationError

from ordering.messaging.envelope import DecodeError, unwrap
from ordering.messaging.transport.port import QueueMessage, QueueTransport

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class ConsumeOutcome(Enum):
    PROCESSED = "processed"
    IGNORED = "ignored"
    MALFORMED = "malformed"
    FAILED = "failed"

    @property
    def acknowledge(self) -> bool:
        return self is not ConsumeOutcome.FAILED


class EventRouter(Generic[M]):
    """Maps decoded messages of one shape to use case calls.

    Args:
        message_model: pydantic model the payload is validated into.
        routes: discriminator value (matched case-insensitively) -> callable
            receiving the decoded message.
        discriminator_fields: model attributes checked, in order, for the
            discriminator; the first non-empty one wins.
    """

    def __init__(
        self,
        message_model: type[M],
        routes: Mapping[str, Callable[[M], None]],
        discriminator_fields: Iterable[str] = ("event_type", "status"),
    ) -> None:
        self.message_model = message_model
        self.routes = {key.lower(): handler for key, handler in routes.items()}
        self.discriminator_fields = tuple(discriminator_fields)

    def decode(self, body: str) -> M:
        payload = unwrap(body, self.discriminator_fields)
        try:
            return self.message_model.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(f"Payload does not match {self.message_model.__name__}: {exc}") from exc

    def discriminator(self, message: M) -> str | None:
        for field in self.discriminator_fields:
            value = getattr(message, field, None)
            if value and str(value).strip():
                return str(value).strip().lower()
        return None

    def route_for(self, discriminator: str | None) -> Callable[[M], None] | None:
        if discriminator is None:
            return None
        return self.routes.get(discriminator)


class QueueConsumer:
    """Long-running receive loop for a single queue.

    When a ``domain`` is given, every message is handled inside its domain
    context, so routes can process commands and reach repositories from the
    worker thread.
    """

    def __init__(
        self,
        name: str,
        transport: QueueTransport,
        router: EventRouter,
        max_messages: int = 10,
        wait_seconds: int = 20,
        error_backoff_seconds: float = 5.0,
        domain: Domain | None = None,
    ) -> None:
        self.name = name
        self.transport = transport
        self.router = router
        self.max_messages = max_messages
        self.wait_seconds = wait_seconds
        self.error_backoff_seconds = error_backoff_seconds
        self.domain = domain

    # -------------------------------------------------------------------
    # Single message
    # -------------------------------------------------------------------
    def handle(self, message: QueueMessage) -> ConsumeOutcome:
        """Process one message and acknowledge it if the outcome allows."""
        outcome = self._process(message)
        if outcome.acknowledge:
            try:
                self.transport.delete(message.receipt_handle)
            except Exception:
                logger.exception(
                    "Failed to delete message, it will be redelivered",
                    consumer=self.name,
                    message_id=message.message_id,
                )
        return outcome

    def _process(self, message: QueueMessage) -> ConsumeOutcome:
        log = logger.bind(consumer=self.name, message_id=message.message_id)

        try:
            event = self.router.decode(message.body)
        except DecodeError as exc:
            log.warning("Dropping malformed message", error=str(exc), body=message.body[:500])
            return ConsumeOutcome.MALFORMED

        event_type = self.router.discriminator(event)
        order_id = getattr(event, "order_id", None)
        route = self.router.route_for(event_type)
        if route is None:
            log.warning("Ignoring unknown event type", event_type=event_type, order_id=order_id)
            return ConsumeOutcome.IGNORED

        context = self.domain.domain_context() if self.domain is not None else nullcontext()
        try:
            with context:
                route(event)
        except Exception:
            log.exception("Error processing event", event_type=event_type, order_id=order_id)
            return ConsumeOutcome.FAILED

        log.info("Event processed", event_type=event_type, order_id=order_id)
        return ConsumeOutcome.PROCESSED

    # -------------------------------------------------------------------
    # Loop
    # -------------------------------------------------------------------
    async def _receive(self) -> list[QueueMessage]:
        return await asyncio.to_thread(self.transport.receive, self.max_messages, self.wait_seconds)

    async def _handle_batch(self, messages: list[QueueMessage]) -> list[ConsumeOutcome]:
        outcomes = []
        for message in messages:
            outcomes.append(await asyncio.to_thread(self.handle, message))
        return outcomes

    async def poll_once(self) -> list[ConsumeOutcome]:
        """Receive one batch and handle every message in it.

        Receive errors propagate; ``run`` is what turns them into a backoff.
        """
        return await self._handle_batch(await self._receive())

    async def run(self, stop: asyncio.Event | None = None) -> None:
        """Consume until ``stop`` is set.

        The stop signal is checked between receive cycles, so a batch that is
        being handled always finishes first.
        """
        stop = stop or asyncio.Event()
        logger.info("Consumer started", consumer=self.name)

        while not stop.is_set():
            try:
                messages = await self._receive()
            except Exception:
                logger.exception("Error receiving messages", consumer=self.name)
                await self._pause(stop)
                continue

            await self._handle_batch(messages)

        logger.info("Consumer stopped", consumer=self.name)

    async def _pause(self, stop: asyncio.Event) -> None:
        try:
            await asyncio.wait_for(stop.wait(), timeout=self.error_backoff_seconds)
        except TimeoutError:
            pass
