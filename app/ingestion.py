"""
Product feed ingestion.

Fetch the remote JSON array → normalise each product → replace the store contents.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any

import httpx

from app.schemas import TransactionCreate
from app.store import TransactionStore

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def coerce_price(value: Any) -> float:
    """Read a price the lenient way: leading number of a string, else ``0``.

    Booleans, ``None``, non-finite and negative values all become ``0``.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        m = _LEADING_NUMBER.match(value)
        if not m:
            return 0.0
        price = float(m.group(0))
    else:
        return 0.0
    if not math.isfinite(price) or price < 0:
        return 0.0
    return price


def normalize_product(raw: dict) -> dict:
    """Keep the six record fields of a raw product, with ``price`` coerced."""
    return {
        "title": raw.get("title"),
        "description": raw.get("description"),
        "price": coerce_price(raw.get("price")),
        "category": raw.get("category"),
        "dateOfSale": raw.get("dateOfSale"),
        "sold": raw.get("sold"),
    }


def fetch_products(client: httpx.Client, url: str) -> list[dict]:
    resp = client.get(url)
    resp.raise_for_status()
    payload = resp.json()
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array from {url}, got {type(payload).__name__}")
    logger.info("Fetched %d products from %s", len(payload), url)
    return payload


def initialize_store(store: TransactionStore, client: httpx.Client, url: str) -> int:
    """Reload the store from the feed at ``url``. Returns the number of stored records."""
    products = fetch_products(client, url)

    records = []
    for raw in products:
        normalized = normalize_product(raw)
        # never true while coerce_price maps NaN to 0
        if math.isnan(normalized["price"]):
            logger.warning("Skipping product with invalid price: %r", raw.get("title"))
            continue
        records.append(TransactionCreate.model_validate(normalized))

    stored = store.replace_all(records)
    logger.info("Initialized store with %d transactions", stored)
    return stored
