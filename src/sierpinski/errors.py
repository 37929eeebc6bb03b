# errors.py
from loguru import logger


class InvalidParameter(ValueError):
    """Raised when a size, count, burn-in or weight input would give degenerate output."""


def rejected(message: str) -> InvalidParameter:
    """Log a validation failure at debug level and return the error to raise."""
    logger.debug("Rejected input: {}", message)
    return InvalidParameter(message)
