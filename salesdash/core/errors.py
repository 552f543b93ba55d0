import logging

from fastapi import HTTPException

logger = logging.getLogger(__name__)


class SalesDashError(Exception):
    """Base class for errors raised by the transactions service."""

    status_code = 500


class InvalidQueryError(SalesDashError):
    """A query parameter could not be interpreted."""

    status_code = 400


class FeedError(SalesDashError):
    """The remote transaction feed was unreachable or returned bad data."""


class AggregationTimeoutError(SalesDashError):
    pass


def to_http_error(exc, operation):
    if isinstance(exc, SalesDashError):
        status_code = exc.status_code
    else:
        status_code = 500
    if status_code >= 500:
        logger.error("%s failed", operation, exc_info=exc)
    return HTTPException(status_code=status_code, detail=str(exc) or exc.__class__.__name__)


__all__ = [
    "AggregationTimeoutError",
    "FeedError",
    "InvalidQueryError",
    "SalesDashError",
    "to_http_error",
]
