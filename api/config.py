"""
Settings for the FuelEU Ledger API.

Values come from environment variables (or a local ``.env``), matched
case-insensitively against the field names below.
"""
from functools import lru_cache
from typing import List

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    database_url: str = "sqlite:///./fueleu.db"
    db_echo: bool = False

    # HTTP server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Runtime
    environment: str = "development"
    log_level: str = "info"
    debug: bool = False

    # Used by GET /compliance/cb when the caller omits measured values
    default_actual_intensity: float = 90.0  # gCO2eq/MJ
    default_fuel_consumption: float = 5000.0  # t

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @model_validator(mode="after")
    def _production_guards(self) -> "Settings":
        if not self.is_production:
            return self
        if self.database_url.startswith("sqlite"):
            raise ValueError("DATABASE_URL must point to a server database in production")
        if any("localhost" in origin for origin in self.cors_origins_list):
            raise ValueError("CORS_ORIGINS must not include localhost in production")
        return self

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """Settings instance shared by the whole process."""
    return Settings()


settings = get_settings()
