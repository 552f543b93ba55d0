from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from salesdash.config import get_settings
from salesdash.dependencies import get_store
from salesdash.services.record_store import RecordQuery, RecordStore

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(store: RecordStore = Depends(get_store)):
    settings = get_settings()
    body = {
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "time": datetime.now(timezone.utc).isoformat(),
    }
    try:
        body["transactions"] = store.count(RecordQuery())
    except Exception as exc:
        body.update(status="unavailable", error=str(exc) or exc.__class__.__name__)
        return JSONResponse(status_code=503, content=body)
    body["status"] = "ok"
    return body
