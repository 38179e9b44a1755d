from decimal import Decimal
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./webshop.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 3000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5500"]
    SESSION_COOKIE_NAME: str = "sessionId"
    SESSION_COOKIE_MAX_AGE: int = 7 * 24 * 60 * 60
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"
    SHIPPING_FLAT_RATE: Decimal = Decimal("5.99")
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
