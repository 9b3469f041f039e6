"""Notifications bounded context: in-app notifications for storefront users.

Notifications are created as a side effect of order status changes or by an
administrator, and are read, marked read and deleted by their recipient.
"""

import structlog
from protean.domain import Domain

notifications = Domain(name="notifications")

logger = structlog.get_logger(__name__)
