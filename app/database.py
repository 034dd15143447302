"""
Database engine and session factory
"""
import os

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for ``url``.

    SQLite needs ``check_same_thread=False`` because the combined query runs
    its aggregations on worker threads. An in-memory SQLite database is pinned
    to a single connection so every session sees the same data.
    """
    connect_args = {}
    kwargs = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, connect_args=connect_args, echo=echo, **kwargs)


def ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite" or parsed.database in (None, "", ":memory:"):
        return
    parent = os.path.dirname(os.path.abspath(parsed.database))
    os.makedirs(parent, exist_ok=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_store(request: Request):
    """Record store dependency, created once per process in the lifespan."""
    return request.app.state.store
