"""Ordering FastAPI application.

Serves the order endpoints synchronously over HTTP and hosts the payment and
production queue consumers as background tasks, so the API and the consumers
share one domain and one repository.

On startup the adapters are wired from the environment (SNS publisher,
Products API catalog) and the database tables are created. Set
``RUN_CONSUMERS=false`` when the consumers run in their own process
(see ``server.py``).

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import asyncio
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering
from ordering.messaging.transport.port import QueueTransport

# PROTEAN_ENV selects the config overlay:
#   - unset        → in-memory repository
#   - "production" → PostgreSQL at DATABASE_URL
ordering.init()

from ordering.api.routes import order_router, register_exception_handlers  # noqa: E402
from ordering.config import Settings  # noqa: E402
from ordering.utils.logging import configure_logging  # noqa: E402
from ordering.wiring import build_consumers, configure_adapters  # noqa: E402

logger = structlog.get_logger(__name__)

_ROUTE_PREFIX = "/api/orders"


def create_app(settings: Settings | None = None, transports: dict[str, QueueTransport] | None = None) -> FastAPI:
    """Build the application.

    Passing ``settings`` skips adapter wiring from the environment, so the
    caller can install its own catalog and publisher. ``transports`` replaces
    the SQS queue of a consumer by name (``"payments"``, ``"production"``).
    """
    wire_adapters = settings is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config = settings or Settings.from_env()
        configure_logging()
        if wire_adapters:
            configure_adapters(config)

        with ordering.domain_context():
            ordering.setup_database()

        stop = asyncio.Event()
        tasks = []
        if config.run_consumers:
            consumers = build_consumers(config, transports=transports)
            app.state.consumers = consumers
            tasks = [asyncio.create_task(consumer.run(stop)) for consumer in consumers]

        logger.info("Ordering API started", environment=config.environment, consumers=len(tasks))
        yield

        stop.set()
        await asyncio.gather(*tasks)
        logger.info("Ordering API stopped")

    application = FastAPI(
        title="Ordering API",
        description="Restaurant order lifecycle: creation, cancellation and status",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the ordering domain context for order requests."""
        if request.url.path.startswith(_ROUTE_PREFIX):
            with ordering.domain_context():
                response = await call_next(request)
            return response
        # Health check, docs
        return await call_next(request)

    application.include_router(order_router)
    register_exception_handlers(application)

    @application.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domains": {"ordering": {"name": ordering.name}}})

    return application


app = create_app()
