from functools import lru_cache
import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:4173",
    "http://localhost:3000",
    "http://localhost:3333",
]

# 31 days, in seconds
_SESSION_COOKIE_MAX_AGE = 60 * 60 * 24 * 31


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="APP_")

    app_name: str = "Daily Diet"
    api_prefix: str = ""
    environment: str = "development"
    database_url: str = "sqlite:///./daily_diet.db"
    allowed_origins: list[str] | str = Field(default_factory=lambda: _DEFAULT_ORIGINS.copy())
    session_cookie_name: str = "session_id"
    session_cookie_max_age: int = _SESSION_COOKIE_MAX_AGE
    session_cookie_secure: bool = True
    allow_reset: bool = False
    create_tables: bool = True
    host: str = "0.0.0.0"
    port: int = 3333
    log_level: str = "info"

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return _DEFAULT_ORIGINS.copy()
            return [origin.strip() for origin in stripped.split(",") if origin.strip()]
        return value

    @field_validator("environment")
    @classmethod
    def _check_environment(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"development", "production", "test"}:
            raise ValueError(f"Unknown environment: {value}")
        return normalized

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    logging.getLogger("uvicorn").info(
        "Settings resolved: environment=%s database=%s", settings.environment, settings.database_url.split("://")[0]
    )
    return settings
