from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv


load_dotenv()


DEV_ENVIRONMENTS = {"dev", "development", "local"}


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. An empty
    ``google_api_key`` is a valid state: the generator answers with
    placeholder suggestions instead of calling Gemini.
    """

    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    google_api_key: str = field(
        default_factory=lambda: os.getenv("GOOGLE_API_KEY", ""), repr=False
    )
    gemini_model: str = field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    )
    gemini_api_base: str = field(
        default_factory=lambda: os.getenv(
            "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("GEMINI_TIMEOUT_SECONDS") or "15")
    )
    port: int = field(default_factory=lambda: int(os.getenv("PORT") or "3000"))

    @property
    def has_api_key(self) -> bool:
        return bool(self.google_api_key)

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() in DEV_ENVIRONMENTS


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
