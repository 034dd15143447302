"""
Shared pytest fixtures — temporary SQLite store, mocked product feed, FastAPI TestClient.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import get_store  # noqa: E402
from app.ingestion import normalize_product  # noqa: E402
from app.main import app  # noqa: E402
from app.routers.transactions import get_feed_client  # noqa: E402
from app.schemas import TransactionCreate  # noqa: E402
from app.store import TransactionStore  # noqa: E402

SAMPLE_PRODUCTS = [
    {
        "id": 1,
        "title": "Fjallraven Foldsack Backpack",
        "price": 329.85,
        "description": "Your perfect pack for everyday use and walks in the forest.",
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
        "sold": True,
        "dateOfSale": "2021-03-27T20:29:54+05:30",
    },
    {
        "id": 2,
        "title": "Mens Casual Premium Slim Fit T-Shirts",
        "price": "22.3",
        "description": "Slim-fitting style, contrast raglan long sleeve.",
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
        "sold": False,
        "dateOfSale": "2022-03-05T20:29:54+05:30",
    },
    {
        "id": 3,
        "title": "John Hardy Women's Legends Naga Dragon Station Chain Bracelet",
        "price": 695,
        "description": "Inspired by the mythical water dragon that protects the ocean's pearl.",
        "category": "jewelery",
        "image": "https://fakestoreapi.com/img/71pWzhdJNwL._AC_UL640_QL65_ML3_.jpg",
        "sold": True,
        "dateOfSale": "2022-03-12T20:29:54+05:30",
    },
    {
        "id": 4,
        "title": "WD Elements Portable External Hard Drive",
        "price": 64,
        "description": "USB compatibility, fast data transfers, improve PC performance.",
        "category": "electronics",
        "image": "https://fakestoreapi.com/img/61IBBVJvSDL._AC_SY879_.jpg",
        "sold": True,
        "dateOfSale": "2022-04-27T20:29:54+05:30",
    },
    {
        "id": 5,
        "title": "Samsung Curved Gaming Monitor",
        "price": 999.99,
        "description": "Super ultrawide screen with quantum dot technology.",
        "category": "electronics",
        "image": "https://fakestoreapi.com/img/81Zt42ioCgL._AC_SX679_.jpg",
        "sold": False,
        "dateOfSale": "2021-03-16T20:29:54+05:30",
    },
    {
        "id": 6,
        "title": "Rain Jacket Women Windbreaker",
        "price": "not-a-price",
        "description": "Lightweight jacket with a detachable hood.",
        "category": "women's clothing",
        "image": "https://fakestoreapi.com/img/71HblAHs5xL._AC_UY879_-2.jpg",
        "sold": False,
        "dateOfSale": "2021-11-27T20:29:54+05:30",
    },
]


def seed_store(store, products=SAMPLE_PRODUCTS):
    records = [TransactionCreate.model_validate(normalize_product(p)) for p in products]
    return store.replace_all(records)


@pytest.fixture()
def store(tmp_path):
    s = TransactionStore.from_url(f"sqlite:///{tmp_path / 'transactions.db'}")
    s.create_tables()
    yield s
    s.dispose()


@pytest.fixture()
def seeded_store(store):
    seed_store(store)
    return store


@pytest.fixture()
def feed():
    """What the mocked remote feed answers; tests may change it."""
    return {"status_code": 200, "json": list(SAMPLE_PRODUCTS)}


@pytest.fixture()
def feed_client(feed):
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(feed["status_code"], json=feed["json"])

    with httpx.Client(transport=httpx.MockTransport(_handler)) as c:
        yield c


@pytest.fixture()
def client(store, feed_client):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_feed_client] = lambda: feed_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
