import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from salesdash.config import Settings, get_settings
from salesdash.core.logging import REQUEST_ID_HEADER, bind_request_id, setup_logging
from salesdash.database import init_schema
from salesdash.routers import (
    analytics_router,
    health_router,
    seed_router,
    transactions_router,
)
from salesdash.services.record_store import RecordQuery, open_sql_store
from salesdash.services.seed_service import reseed

logger = logging.getLogger(__name__)

setup_logging()
settings: Settings = get_settings()


def seed_if_empty():
    with open_sql_store() as store:
        if store.count(RecordQuery()):
            logger.info("Startup seed skipped: transactions already loaded.")
            return 0
        return reseed(store)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_schema()
    if settings.SEED_ON_STARTUP:
        seed_if_empty()
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = bind_request_id(request.headers.get(REQUEST_ID_HEADER))
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "query")
        messages.append("{}: {}".format(location, err.get("msg")) if location else err.get("msg"))
    return JSONResponse(status_code=400, content={"error": "; ".join(messages)})


app.include_router(health_router)
app.include_router(seed_router)
app.include_router(transactions_router)
app.include_router(analytics_router)


__all__ = ["app", "seed_if_empty"]
