"""Ordering bounded context: the per-user shopping cart.

Holds the Cart aggregate, the cart store contract, and the CartService that
authorises, mutates and prices carts.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
