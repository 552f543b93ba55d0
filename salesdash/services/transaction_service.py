import asyncio
import logging

from salesdash.config import get_settings
from salesdash.core.constants import DEFAULT_PAGE, MAX_ROW_OFFSET
from salesdash.core.dates import normalize_month
from salesdash.core.errors import AggregationTimeoutError, InvalidQueryError
from salesdash.services.aggregation_service import (
    compute_category_counts,
    compute_price_histogram,
    compute_statistics,
)
from salesdash.services.filters import page_offset
from salesdash.services.record_store import RecordQuery

logger = logging.getLogger(__name__)


def _positive_int(value, name):
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidQueryError("{} must be an integer.".format(name))
    if number < 1:
        raise InvalidQueryError("{} must be at least 1.".format(name))
    return number


def list_transactions(store, page=DEFAULT_PAGE, per_page=None, search="", month=None):
    settings = get_settings()
    page = _positive_int(page, "page")
    if per_page is None:
        per_page = settings.DEFAULT_PER_PAGE
    per_page = min(_positive_int(per_page, "per_page"), settings.MAX_PER_PAGE)
    month_number = normalize_month(month)
    offset = page_offset(page, per_page)
    if offset > MAX_ROW_OFFSET:
        raise InvalidQueryError("page is too large.")

    matching = RecordQuery(month=month_number, search=search or "")
    window = RecordQuery(
        month=month_number,
        search=search or "",
        offset=offset,
        limit=per_page,
    )
    return {
        "transactions": store.find(window),
        "total": store.count(matching),
        "page": page,
        "per_page": per_page,
    }


def _records_for_month(store, month):
    return store.find(RecordQuery(month=normalize_month(month)))


def sales_statistics(store, month=None):
    return compute_statistics(_records_for_month(store, month))


def price_range_chart(store, month=None):
    return compute_price_histogram(_records_for_month(store, month))


def category_chart(store, month=None):
    return compute_category_counts(_records_for_month(store, month))


async def combined_data(store_factory, month=None, timeout=None):
    """Statistics, bar chart and pie chart for one month, fetched concurrently.

    ``store_factory`` is called once per view and must return a context manager
    yielding a fresh store, so each view runs on its own session. The first
    failure (or timeout) fails the whole result.
    """
    month_number = normalize_month(month)
    if timeout is None:
        timeout = get_settings().AGGREGATE_TIMEOUT_SECONDS

    def _run(view):
        with store_factory() as store:
            return view(store, month_number)

    async def _run_bounded(view):
        try:
            return await asyncio.wait_for(asyncio.to_thread(_run, view), timeout)
        except asyncio.TimeoutError:
            raise AggregationTimeoutError(
                "{} timed out after {}s".format(view.__name__, timeout)
            ) from None

    tasks = [
        asyncio.ensure_future(_run_bounded(view))
        for view in (sales_statistics, price_range_chart, category_chart)
    ]
    try:
        statistics, bar_chart, pie_chart = await asyncio.gather(*tasks)
    finally:
        # Views still running after a failure are abandoned.
        for task in tasks:
            if not task.done():
                task.cancel()
    logger.debug("Combined data computed for month=%s", month_number)
    return {
        "statistics": statistics,
        "barChart": bar_chart,
        "pieChart": pie_chart,
    }


__all__ = [
    "category_chart",
    "combined_data",
    "list_transactions",
    "price_range_chart",
    "sales_statistics",
]
