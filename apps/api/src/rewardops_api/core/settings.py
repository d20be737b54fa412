from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")

    environment: Literal["development", "staging", "production"] = "development"
    database_url: str = "sqlite+aiosqlite:///./rewardops.db"
    database_echo: bool = False

    # Admin API security
    admin_api_key: str = ""

    # Catalog curation
    sponsorship_expiring_window_days: int = 7
    bulk_action_max_selection: int = 500

    @field_validator("sponsorship_expiring_window_days", "bulk_action_max_selection", mode="before")
    @classmethod
    def _parse_positive_int(cls, value: object) -> int:
        if value is None or value == "":
            raise ValueError("value is required")
        parsed = int(value)  # type: ignore[arg-type]
        if parsed < 1:
            raise ValueError("value must be positive")
        return parsed

    # Tracing
    tracing_enabled: bool = False
    otel_exporter_otlp_endpoint: str | None = None
    otel_exporter_otlp_headers: str | None = None


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()
