"""
Application settings
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Record store
    DATABASE_URL: str = "sqlite:///./data/transactions.db"

    # Remote product feed consumed by /initialize
    SOURCE_URL: str = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    FETCH_TIMEOUT: float = 30.0

    # Query defaults
    DEFAULT_MONTH: str = "march"
    DEFAULT_PAGE: int = 1
    DEFAULT_PER_PAGE: int = 10
    MAX_PER_PAGE: int = 1000

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    DEBUG: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
