"""Standalone queue consumer runner for the Ordering domain.

The API process already hosts both consumers. Use this runner to scale them
separately (with ``RUN_CONSUMERS=false`` on the API). The two processes must
share a database, so run both with ``PROTEAN_ENV=production`` and the same
``DATABASE_URL``; the default in-memory provider is per process.

- payments:   payment events queue    -> approve payment / cancel order
- production: production events queue -> in production / ready / completed

Usage:
    python src/server.py                          # Run both consumers
    python src/server.py --consumer payments      # Run only the payment consumer
    python src/server.py --consumer production    # Run only the production consumer
"""

import argparse
import asyncio
import signal

import structlog
from ordering.config import Settings
from ordering.domain import ordering
from ordering.utils.logging import configure_logging
from ordering.wiring import CONSUMERS, build_consumers, configure_adapters

logger = structlog.get_logger(__name__)


def _install_signal_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops have no signal handler support
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(stop.set))


async def run(consumer_names, settings: Settings) -> None:
    consumers = build_consumers(settings, consumer_names)

    stop = asyncio.Event()
    _install_signal_handlers(stop)

    await asyncio.gather(*(consumer.run(stop) for consumer in consumers))
    logger.info("All consumers stopped")


def main():
    parser = argparse.ArgumentParser(description="Ordering queue consumer runner")
    parser.add_argument(
        "--consumer",
        choices=CONSUMERS,
        help="Run a single consumer (default: run all)",
    )
    args = parser.parse_args()

    settings = Settings.from_env()
    configure_logging()

    ordering.init()
    with ordering.domain_context():
        ordering.setup_database()
    configure_adapters(settings)

    consumer_names = [args.consumer] if args.consumer else list(CONSUMERS)

    asyncio.run(run(consumer_names, settings))


if __name__ == "__main__":
    main()
