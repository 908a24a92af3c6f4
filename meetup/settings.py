"""Application settings loaded from the environment (and `.env` when present)."""

from __future__ import annotations

from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = Field(
        default="sqlite:///./meetup.db",
        validation_alias=AliasChoices("DATABASE_URL", "POSTGRES_URL"),
    )
    secret_key: str = Field(default="dev-secret-key-change-me", validation_alias="SECRET_KEY")
    # Token lifetime in seconds (one week)
    jwt_expires_in: int = Field(default=604800, validation_alias="JWT_EXPIRES_IN")
    environment: str = Field(default="development", validation_alias=AliasChoices("ENVIRONMENT", "APP_ENV"))
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in {"prod", "production"}

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
