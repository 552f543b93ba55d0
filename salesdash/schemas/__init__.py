from salesdash.schemas.transaction import (
    CombinedData,
    SeedResult,
    Statistics,
    TransactionPage,
    TransactionRecord,
)

__all__ = [
    "CombinedData",
    "SeedResult",
    "Statistics",
    "TransactionPage",
    "TransactionRecord",
]
