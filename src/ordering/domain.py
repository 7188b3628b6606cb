"""Ordering bounded context: order lifecycle for the restaurant.

Owns the Order aggregate, reacts to Payment and Production events from the
queues and announces order milestones on outbound topics. Persistence goes
through the providers configured in ``domain.toml``: the memory provider by
default, PostgreSQL when ``PROTEAN_ENV=production``.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
