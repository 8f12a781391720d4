from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field("sqlite+aiosqlite:///./payments.db", alias="DATABASE_URL")

    payment_currency: str = Field("PHP", alias="PAYMENT_CURRENCY")
    payment_gateway_url: str = Field("https://gateway.payment.com/checkout", alias="PAYMENT_GATEWAY_URL")
    transaction_id_max_attempts: int = Field(3, ge=1, alias="TRANSACTION_ID_MAX_ATTEMPTS")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_allow_origins: List[str] = Field(["*"], alias="CORS_ALLOW_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True


settings = Settings()
