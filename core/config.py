from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _env(name: str, default: str | None = None):
    return Field(default_factory=lambda: os.getenv(name) or default)


def _csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings(BaseModel):
    app_name: str = _env("APP_NAME", "Landscaping Quote Engine")
    environment: str = _env("ENVIRONMENT", "dev")
    log_level: str = _env("LOG_LEVEL", "INFO")
    admin_phone: str | None = _env("ADMIN_PHONE")
    service_catalog_path: str | None = _env("SERVICE_CATALOG_PATH")
    cors_origins: list[str] = Field(default_factory=lambda: _csv(os.getenv("CORS_ORIGINS", "*")))
    host: str = _env("HOST", "127.0.0.1")
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "8000")))


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
