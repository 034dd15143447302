"""
Month-scoped read operations over the transaction store.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from app.months import resolve_month
from app.schemas import ChartBucket, CombinedData, SaleStatistics, TransactionPage
from app.store import TransactionStore

logger = logging.getLogger(__name__)


class QueryService:
    def __init__(self, store: TransactionStore, default_month: str = "march"):
        self.store = store
        self.default_month = default_month

    def month_code(self, month: Optional[str]) -> Optional[str]:
        """Resolve ``month`` (default month when empty); ``None`` if unrecognised."""
        code = resolve_month(month or self.default_month)
        if code is None:
            logger.info("Unrecognised month %r, nothing will match", month)
        return code

    def list_transactions(
        self,
        page: int = 1,
        per_page: int = 10,
        search: str = "",
        month: Optional[str] = None,
    ) -> TransactionPage:
        # NOTE: the search pattern is also matched against the price's text form
        # ("50" matches 50.0 and 150.0), not compared numerically.
        transactions = self.store.find(
            self.month_code(month),
            search=(search or "").lower(),
            skip=(page - 1) * per_page,
            limit=per_page,
        )
        return TransactionPage(page=page, per_page=per_page, transactions=transactions)

    def statistics(self, month: Optional[str] = None) -> SaleStatistics:
        return self.store.sale_statistics(self.month_code(month))

    def bar_chart(self, month: Optional[str] = None) -> list[ChartBucket]:
        return self.store.price_buckets(self.month_code(month))

    def pie_chart(self, month: Optional[str] = None) -> list[ChartBucket]:
        return self.store.category_counts(self.month_code(month))

    async def combined(self, month: Optional[str] = None) -> CombinedData:
        """Run statistics, bar chart and pie chart concurrently and merge them."""
        month = month or self.default_month
        statistics, bar_chart_data, pie_chart_data = await asyncio.gather(
            run_in_threadpool(self.statistics, month),
            run_in_threadpool(self.bar_chart, month),
            run_in_threadpool(self.pie_chart, month),
        )
        return CombinedData(
            statistics=statistics,
            bar_chart_data=bar_chart_data,
            pie_chart_data=pie_chart_data,
        )
