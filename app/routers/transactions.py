"""
Transaction API endpoints.

GET /initialize     — reload the store from the remote product feed
GET /transactions   — month-scoped search with offset pagination
GET /statistics     — sale totals for a month
GET /bar-chart      — item counts per price range
GET /pie-chart      — item counts per category
GET /combined-data  — statistics + bar chart + pie chart in one call
"""
from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import get_store
from app.ingestion import initialize_store
from app.schemas import (
    ChartBucket,
    CombinedData,
    ErrorResponse,
    MessageResponse,
    SaleStatistics,
    TransactionPage,
)
from app.service import QueryService
from app.store import TransactionStore

logger = logging.getLogger(__name__)
router = APIRouter()

_ERRORS = {500: {"model": ErrorResponse}}
MAX_OFFSET = 2**63 - 1
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def get_query_service(store: TransactionStore = Depends(get_store)) -> QueryService:
    return QueryService(store, default_month=settings.DEFAULT_MONTH)


def get_feed_client() -> Iterator[httpx.Client]:
    """HTTP client for the remote product feed."""
    with httpx.Client(timeout=settings.FETCH_TIMEOUT) as client:
        yield client


def _server_error(message: str = "Internal Server Error") -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


def _positive_int(value: Optional[str], default: int, maximum: int = MAX_OFFSET) -> int:
    """Parse the leading integer of a pagination parameter (``"10abc"`` -> 10).

    Missing, non-numeric, non-positive or above-``maximum`` values give ``default``.
    """
    m = _LEADING_INT.match(value or "")
    if not m:
        return default
    parsed = int(m.group(0))
    return parsed if 0 < parsed <= maximum else default


def _pagination(page: Optional[str], per_page: Optional[str]) -> tuple[int, int]:
    page_n = _positive_int(page, settings.DEFAULT_PAGE)
    per_page_n = _positive_int(per_page, settings.DEFAULT_PER_PAGE, settings.MAX_PER_PAGE)
    # the store offset is a signed 64-bit integer
    if (page_n - 1) * per_page_n > MAX_OFFSET:
        page_n = settings.DEFAULT_PAGE
    return page_n, per_page_n


# ── GET /initialize ──────────────────────────────────────────────────────
@router.get("/initialize", status_code=201, response_model=MessageResponse, responses=_ERRORS)
def initialize(
    store: TransactionStore = Depends(get_store),
    client: httpx.Client = Depends(get_feed_client),
):
    try:
        initialize_store(store, client, settings.SOURCE_URL)
    except Exception as e:
        logger.error("Failed to initialize the database: %s", e, exc_info=True)
        return _server_error("Failed to initialize the database.")
    return MessageResponse(message="Database initialized successfully.")


# ── GET /transactions ────────────────────────────────────────────────────
@router.get("/transactions", response_model=TransactionPage, responses=_ERRORS)
def list_transactions(
    page: Optional[str] = None,
    per_page: Optional[str] = Query(None, alias="perPage"),
    search: str = "",
    month: Optional[str] = None,
    service: QueryService = Depends(get_query_service),
):
    page_n, per_page_n = _pagination(page, per_page)
    try:
        return service.list_transactions(
            page=page_n,
            per_page=per_page_n,
            search=search,
            month=month,
        )
    except Exception as e:
        logger.error("Error in list_transactions: %s", e, exc_info=True)
        return _server_error()


# ── GET /statistics ──────────────────────────────────────────────────────
@router.get("/statistics", response_model=SaleStatistics, responses=_ERRORS)
def statistics(
    month: Optional[str] = None,
    service: QueryService = Depends(get_query_service),
):
    try:
        return service.statistics(month)
    except Exception as e:
        logger.error("Error in statistics: %s", e, exc_info=True)
        return _server_error()


# ── GET /bar-chart ───────────────────────────────────────────────────────
@router.get("/bar-chart", response_model=List[ChartBucket], responses=_ERRORS)
def bar_chart(
    month: Optional[str] = None,
    service: QueryService = Depends(get_query_service),
):
    try:
        return service.bar_chart(month)
    except Exception as e:
        logger.error("Error in bar_chart: %s", e, exc_info=True)
        return _server_error()


# ── GET /pie-chart ───────────────────────────────────────────────────────
@router.get("/pie-chart", response_model=List[ChartBucket], responses=_ERRORS)
def pie_chart(
    month: Optional[str] = None,
    service: QueryService = Depends(get_query_service),
):
    try:
        return service.pie_chart(month)
    except Exception as e:
        logger.error("Error in pie_chart: %s", e, exc_info=True)
        return _server_error()


# ── GET /combined-data ───────────────────────────────────────────────────
@router.get("/combined-data", response_model=CombinedData, responses=_ERRORS)
async def combined_data(
    month: Optional[str] = None,
    service: QueryService = Depends(get_query_service),
):
    try:
        return await service.combined(month)
    except Exception as e:
        logger.error("Error in combined_data: %s", e, exc_info=True)
        return _server_error()
