from fastapi import APIRouter, Depends, Query

from salesdash.core.errors import to_http_error
from salesdash.dependencies import get_store
from salesdash.schemas.transaction import TransactionPage
from salesdash.services.record_store import RecordStore
from salesdash.services.transaction_service import list_transactions

router = APIRouter(tags=["Transactions"])


@router.get("/transactions", response_model=TransactionPage)
def search_transactions(
    page=Query(1, description="Page number, starting at 1"),
    per_page=Query(None, description="Page size"),
    search: str = Query("", description="Matches title, description or price"),
    month=Query(None, description="Month name or number (1-12)"),
    store: RecordStore = Depends(get_store),
):
    try:
        return list_transactions(
            store,
            page=page,
            per_page=per_page,
            search=search,
            month=month,
        )
    except Exception as exc:
        raise to_http_error(exc, "transactions") from exc


__all__ = ["router"]
