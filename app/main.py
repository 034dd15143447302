"""
Product transactions backend — FastAPI application entry‑point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app.config import settings
from app.database import ensure_sqlite_dir, get_store
from app.store import TransactionStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: database dir + tables; an unreachable store is fatal
    ensure_sqlite_dir(settings.DATABASE_URL)
    store = TransactionStore.from_url(settings.DATABASE_URL, echo=settings.DEBUG)
    try:
        store.ping()
        store.create_tables()
    except Exception:
        logger.critical("Database connection failed: %s", settings.DATABASE_URL, exc_info=True)
        store.dispose()
        raise
    logger.info("Database ready: %s", settings.DATABASE_URL)
    app.state.store = store

    yield
    logger.info("Shutting down")
    store.dispose()


app = FastAPI(
    title="Product Transactions",
    description="Product transaction feed → month-scoped search, statistics and charts",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Welcome to the product transactions backend."


@app.get("/health")
def health_check(store: TransactionStore = Depends(get_store)):
    try:
        store.ping()
    except Exception as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {"status": "healthy"}


# ── Register API router ──────────────────────────────────────────────────
from app.routers.transactions import router as transactions_router  # noqa: E402

app.include_router(transactions_router, tags=["Transactions"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
