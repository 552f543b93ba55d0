from fastapi import APIRouter, Depends, Query

from salesdash.core.errors import to_http_error
from salesdash.dependencies import get_store, get_store_factory
from salesdash.schemas.transaction import CombinedData, Statistics
from salesdash.services.record_store import RecordStore
from salesdash.services.transaction_service import (
    category_chart,
    combined_data,
    price_range_chart,
    sales_statistics,
)

router = APIRouter(tags=["Analytics"])


@router.get("/statistics", response_model=Statistics)
def statistics(
    month=Query(None, description="Month name or number (1-12); omit for all months"),
    store: RecordStore = Depends(get_store),
):
    try:
        return sales_statistics(store, month)
    except Exception as exc:
        raise to_http_error(exc, "statistics") from exc


@router.get("/bar_chart")
def bar_chart(
    month=Query(None, description="Month name or number (1-12); omit for all months"),
    store: RecordStore = Depends(get_store),
):
    try:
        return price_range_chart(store, month)
    except Exception as exc:
        raise to_http_error(exc, "bar_chart") from exc


@router.get("/pie_chart")
def pie_chart(
    month=Query(None, description="Month name or number (1-12); omit for all months"),
    store: RecordStore = Depends(get_store),
):
    try:
        return category_chart(store, month)
    except Exception as exc:
        raise to_http_error(exc, "pie_chart") from exc


@router.get("/combined_data", response_model=CombinedData)
async def combined(
    month=Query(None, description="Month name or number (1-12); omit for all months"),
    store_factory=Depends(get_store_factory),
):
    try:
        return await combined_data(store_factory, month)
    except Exception as exc:
        raise to_http_error(exc, "combined_data") from exc


__all__ = ["router"]
