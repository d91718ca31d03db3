"""Runtime configuration.

Settings are read from ``CANDLESHOP_*`` environment variables (or a
``.env`` file) when ``get_settings()`` is called, never at import time.
The resulting object is passed explicitly to whatever needs it.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CANDLESHOP_",
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    data_dir: Path = Path("data")
    log_level: str = "INFO"
    cart_retention_days: int = Field(default=7, ge=1)
    guest_cookie_name: str = "guestId"
    guest_cookie_max_age_days: int = Field(default=30, ge=1)
    notification_sender: str = "orders@candleshop.local"
    admin_email: str = "admin@candleshop.local"
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cart_retention(self) -> timedelta:
        return timedelta(days=self.cart_retention_days)

    @property
    def guest_cookie_max_age(self) -> int:
        """Cookie lifetime in seconds."""
        return self.guest_cookie_max_age_days * 24 * 60 * 60


def get_settings(**overrides: object) -> Settings:
    return Settings(**overrides)  # type: ignore[arg-type]
