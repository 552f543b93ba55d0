from salesdash.routers.analytics import router as analytics_router
from salesdash.routers.health import router as health_router
from salesdash.routers.seed import router as seed_router
from salesdash.routers.transactions import router as transactions_router

__all__ = [
    "analytics_router",
    "health_router",
    "seed_router",
    "transactions_router",
]
