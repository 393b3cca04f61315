"""Storefront domain: catalogue, reviews, baskets, categories and checkout.

A single bounded context: Product, Category and User are the only persisted
aggregates, and every mutation is a command handled against one of them.
"""

import structlog
from protean.domain import Domain

from storefront.utils.logging import configure_logging

configure_logging()

logger = structlog.get_logger(__name__)

storefront = Domain(name="storefront")
