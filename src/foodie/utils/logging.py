"""Logging for the FoodieExpress processes.

Handlers, renderers and the structlog pipeline come from Protean and are
driven by the ``[logging]`` table of ``domain.toml``. ``FOODIE_LOG_LEVEL``
feeds that table; ``PROTEAN_LOG_LEVEL`` overrides it outright.
"""

import logging

from protean.domain import Domain
from protean.utils.logging import get_logger

__all__ = ["configure_logging", "get_logger"]

# The storefront polls the API every few seconds; one line per request is noise.
_CHATTY_CLIENT_LOGGERS = ("httpx", "httpcore")


def configure_logging(domain: Domain, **overrides) -> None:
    """Configure root and structlog logging from ``domain``'s config.

    Keyword arguments (``level``, ``format``, ``log_dir``...) win over the
    configured values.
    """
    domain.configure_logging(**overrides)

    for name in _CHATTY_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
