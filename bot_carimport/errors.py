from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised for malformed or contradictory calculation input."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        logger.debug("validation failed: %s", message)


class UpstreamUnavailable(RuntimeError):
    """Raised when the catalog or the exchange rate provider cannot answer."""


__all__ = ["ValidationError", "UpstreamUnavailable"]
