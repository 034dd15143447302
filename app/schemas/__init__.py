from app.schemas.transaction import (
    ChartBucket,
    CombinedData,
    ErrorResponse,
    MessageResponse,
    SaleStatistics,
    TransactionCreate,
    TransactionPage,
    TransactionRecord,
)

__all__ = [
    "ChartBucket",
    "CombinedData",
    "ErrorResponse",
    "MessageResponse",
    "SaleStatistics",
    "TransactionCreate",
    "TransactionPage",
    "TransactionRecord",
]
