"""
Pydantic v2 models for transaction records and the analytics responses.

Field names are snake_case in Python; the JSON wire format keeps the
camelCase keys (``dateOfSale``, ``perPage``, ``itemCount`` ...) and the
``_id`` key used by chart entries and stored records.
"""
from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class TransactionCreate(BaseModel):
    """A normalised feed item, ready to be stored."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(0.0, ge=0)
    category: str = Field(..., min_length=1)
    date_of_sale: str = Field(..., alias="dateOfSale", min_length=1)
    sold: bool


class TransactionRecord(BaseModel):
    """A stored record as returned by ``/transactions``."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int = Field(..., alias="_id")
    title: str
    description: str
    price: float
    category: str
    date_of_sale: str = Field(..., alias="dateOfSale")
    sold: bool


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------

class SaleStatistics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_sale_amount: float = Field(0, alias="totalSaleAmount")
    total_sold_items: int = Field(0, alias="totalSoldItems")
    total_not_sold_items: int = Field(0, alias="totalNotSoldItems")


class ChartBucket(BaseModel):
    """One bar or pie slice: ``_id`` is a price boundary, the overflow label or a category."""
    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str] = Field(..., alias="_id")
    item_count: int = Field(..., alias="itemCount")


class CombinedData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    statistics: SaleStatistics = Field(default_factory=SaleStatistics)
    bar_chart_data: list[ChartBucket] = Field(
        default_factory=list, alias="barChartData"
    )
    pie_chart_data: list[ChartBucket] = Field(
        default_factory=list, alias="pieChartData"
    )


# ---------------------------------------------------------------------------
# API response envelopes
# ---------------------------------------------------------------------------

class TransactionPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    per_page: int = Field(..., alias="perPage")
    transactions: list[TransactionRecord] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
