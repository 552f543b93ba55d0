from salesdash.services.record_store import (
    InMemoryRecordStore,
    RecordQuery,
    RecordStore,
    SqlRecordStore,
    open_sql_store,
)
from salesdash.services.seed_service import reseed
from salesdash.services.transaction_service import (
    category_chart,
    combined_data,
    list_transactions,
    price_range_chart,
    sales_statistics,
)

__all__ = [
    "InMemoryRecordStore",
    "RecordQuery",
    "RecordStore",
    "SqlRecordStore",
    "category_chart",
    "combined_data",
    "list_transactions",
    "open_sql_store",
    "price_range_chart",
    "reseed",
    "sales_statistics",
]
