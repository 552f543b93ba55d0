from fastapi import APIRouter, Depends

from salesdash.core.errors import to_http_error
from salesdash.dependencies import get_store
from salesdash.schemas.transaction import SeedResult
from salesdash.services.record_store import RecordStore
from salesdash.services.seed_service import reseed

router = APIRouter(tags=["Seed"])


@router.get("/init_db", response_model=SeedResult)
def init_db(store: RecordStore = Depends(get_store)):
    try:
        inserted = reseed(store)
    except Exception as exc:
        raise to_http_error(exc, "init_db") from exc
    return SeedResult(message="Database initialized successfully!", inserted=inserted)


__all__ = ["router"]
