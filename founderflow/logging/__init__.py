"""Structured logging helpers shared by every FounderFlow component."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges its component field with per-call extras."""

    def process(self, msg, kwargs):
        extra = kwargs.get("extra", {})
        # Per-call extras win over the adapter defaults
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Get a logger that tags every record with a component name.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier (normalization, directory, cli, ...)

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="normalization")
        >>> logger.info("Batch normalized", extra={"event": "normalization.batch.completed"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
