"""
Observability module: log formatting and batch context.

Usage:
    import logging
    from tenant_truth.observability import BatchContext, configure_logging

    configure_logging("INFO")
    logger = logging.getLogger(__name__)

    with BatchContext(as_of=date(2024, 2, 15)):
        logger.warning("Fallback used", extra={"tenant_id": "t-42"})
        # -> carries batch_id, as_of and tenant_id
"""

from .context import BatchContext, generate_batch_id, get_as_of, get_batch_id
from .logging import HumanFormatter, JSONFormatter, configure_logging

__all__ = [
    # Logging
    "configure_logging",
    "JSONFormatter",
    "HumanFormatter",
    # Context
    "BatchContext",
    "generate_batch_id",
    "get_as_of",
    "get_batch_id",
]
