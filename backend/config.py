# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./database_storefront.db"

    FRONTEND_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Checkout hardening switches (off = totals and stock trusted as submitted)
    VALIDATE_STOCK_ON_ORDER: bool = False
    RECOMPUTE_ORDER_TOTALS: bool = False

    # Used only when RECOMPUTE_ORDER_TOTALS is on
    SHIPPING_COST: float = 350.0
    FREE_SHIPPING_THRESHOLD: float = 10000.0

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
