"""
Transaction record store.

Wraps the SQLAlchemy engine and session factory for the lifetime of the
process. Every operation opens its own session, so independent queries can
run on separate threads.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from sqlalchemy import String, case, cast, false, func, or_, text, true
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app.database import Base, build_engine, build_session_factory
from app.models import TransactionModel
from app.months import month_pattern
from app.schemas import (
    ChartBucket,
    SaleStatistics,
    TransactionCreate,
    TransactionRecord,
)

logger = logging.getLogger(__name__)

# Lower bounds of the bar-chart price ranges; the last one opens the overflow bucket.
PRICE_BOUNDARIES = (0, 100, 200, 300, 400, 500, 600, 700, 800, 900)
OVERFLOW_BUCKET = "901-above"


def month_clause(code: Optional[str]):
    """Filter restricting ``dateOfSale`` to month ``code``; matches nothing for ``None``."""
    if code is None:
        return false()
    return TransactionModel.date_of_sale.regexp_match(month_pattern(code))


def search_clause(search: str):
    """Title/description case-insensitive match, or a match on the price's text form."""
    return or_(
        TransactionModel.title.regexp_match("(?i)" + search),
        TransactionModel.description.regexp_match("(?i)" + search),
        cast(TransactionModel.price, String).regexp_match(search),
    )


class TransactionStore:
    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)

    @classmethod
    def from_url(cls, url: str, echo: bool = False) -> "TransactionStore":
        return cls(build_engine(url, echo=echo))

    # ── lifecycle ────────────────────────────────────────────────────────
    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> None:
        """Raise if the database cannot be reached."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    # ── writes ───────────────────────────────────────────────────────────
    def replace_all(self, records: Sequence[TransactionCreate]) -> int:
        """Delete every stored record, then insert ``records``."""
        with self.session() as db:
            deleted = db.query(TransactionModel).delete()
            db.add_all(TransactionModel(**r.model_dump()) for r in records)
            db.commit()
        logger.info("Replaced %d stored transactions with %d new ones", deleted, len(records))
        return len(records)

    # ── reads ────────────────────────────────────────────────────────────
    def count(self, code: Optional[str]) -> int:
        """Number of records in month ``code``. Test helper; no endpoint reports a count."""
        with self.session() as db:
            return db.query(TransactionModel).filter(month_clause(code)).count()

    def find(
        self,
        code: Optional[str],
        search: str = "",
        skip: int = 0,
        limit: int = 10,
    ) -> list[TransactionRecord]:
        with self.session() as db:
            query = db.query(TransactionModel).filter(month_clause(code))
            if search:
                query = query.filter(search_clause(search))
            rows = query.order_by(TransactionModel.id).offset(skip).limit(limit).all()
            return [TransactionRecord.model_validate(row) for row in rows]

    def sale_statistics(self, code: Optional[str]) -> SaleStatistics:
        sold = TransactionModel.sold == true()
        not_sold = TransactionModel.sold == false()
        with self.session() as db:
            matched, amount, sold_items, not_sold_items = (
                db.query(
                    func.count(TransactionModel.id),
                    func.coalesce(func.sum(case((sold, TransactionModel.price), else_=0.0)), 0.0),
                    func.coalesce(func.sum(case((sold, 1), else_=0)), 0),
                    func.coalesce(func.sum(case((not_sold, 1), else_=0)), 0),
                )
                .filter(month_clause(code))
                .one()
            )
        if not matched:
            return SaleStatistics()
        return SaleStatistics(
            total_sale_amount=float(amount),
            total_sold_items=int(sold_items),
            total_not_sold_items=int(not_sold_items),
        )

    def price_buckets(self, code: Optional[str]) -> list[ChartBucket]:
        bounds = zip(PRICE_BOUNDARIES, PRICE_BOUNDARIES[1:])
        bucket = case(
            *[(TransactionModel.price < upper, lower) for lower, upper in bounds],
            else_=PRICE_BOUNDARIES[-1],
        )
        with self.session() as db:
            priced = db.query(bucket.label("bucket")).filter(month_clause(code)).subquery()
            rows = (
                db.query(priced.c.bucket, func.count())
                .group_by(priced.c.bucket)
                .order_by(priced.c.bucket)
                .all()
            )
        return [
            ChartBucket(
                id=OVERFLOW_BUCKET if lower == PRICE_BOUNDARIES[-1] else int(lower),
                item_count=n,
            )
            for lower, n in rows
        ]

    def category_counts(self, code: Optional[str]) -> list[ChartBucket]:
        with self.session() as db:
            rows = (
                db.query(TransactionModel.category, func.count(TransactionModel.id))
                .filter(month_clause(code))
                .group_by(TransactionModel.category)
                .order_by(TransactionModel.category)
                .all()
            )
        return [ChartBucket(id=category, item_count=n) for category, n in rows]
