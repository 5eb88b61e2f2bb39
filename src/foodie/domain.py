"""Domain composition root for FoodieExpress: the Menu and Order aggregates.

Configuration (databases, logging, version retries) is read from the
``domain.toml`` next to this file, with the ``PROTEAN_ENV`` overlay applied.
"""

import structlog
from protean.domain import Domain

foodie = Domain(name="foodie")

logger = structlog.get_logger(__name__)
