from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import Environment


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "billing-service"
    api_version: str = "v1"
    debug: bool = False

    # Database
    # postgresql:// URLs are rewritten to postgresql+asyncpg:// by common.db.session
    database_url: str = "sqlite+aiosqlite:///./billing.db"
    db_use_nullpool: bool = (
        False  # True for one-shot scripts, False for API (concurrent)
    )
    db_pool_size: int = 10
    db_pool_overflow: int = 5
    db_create_all: bool = True  # Create missing tables on startup

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    # OpenTelemetry
    otel_service_name: str = "billing-service"
    otel_service_version: str = "0.1.0"
    otel_exporter_otlp_endpoint: Optional[str] = None  # e.g. http://collector:4318/v1/traces
    otel_exporter_otlp_headers: dict[str, str] = {}

    # Rate limiting (slowapi)
    rate_limit_storage_uri: str = "memory://"
    rate_limit_default: List[str] = ["10/second", "300/minute"]

    # Auth tokens
    auth_token_secret: str = "change-me"
    auth_token_algorithm: str = "HS256"
    auth_token_ttl_minutes: int = 60

    # Billing
    billing_proration_cycle_days: int = 30

    @property
    def cors_allowed_origins(self) -> List[str]:
        """Auto-select CORS origins based on environment."""
        if self.environment == Environment.LOCAL:
            return [
                "http://localhost:3000",
                "http://localhost:3001",
            ]
        return []


settings = Settings()
