"""Ordering bounded context: orders and their payment reconciliation.

Handles order placement, remote payment intents, client-side payment
verification, gateway webhook reconciliation and administrative status
updates.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
