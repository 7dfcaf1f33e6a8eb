from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# services/api/app/core/config.py -> BASE_DIR == services/api
BASE_DIR = Path(__file__).resolve().parents[2]
APP_DIR = BASE_DIR / "app"
DEFAULT_FIXTURE_CATALOG_PATH = APP_DIR / "fixtures" / "openlibrary_fixture.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        extra="ignore",
        env_prefix="",
        case_sensitive=False,
    )

    # Environment
    env: str = Field(default="dev", validation_alias="ENV")

    # Application
    api_name: str = Field(default="personal-library-api", validation_alias="API_NAME")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    user_agent: str = Field(default="PersonalLibrary/0.1", validation_alias="USER_AGENT")

    # Database
    database_url: str = Field(
        default="sqlite+pysqlite:///./library.db",
        validation_alias="DATABASE_URL",
    )
    seed_demo_data: bool = Field(default=True, validation_alias="SEED_DEMO_DATA")

    # Cache (rate limiting only)
    redis_url: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )

    # External catalog
    catalog_provider: Literal["openlibrary", "fixture"] = Field(
        default="openlibrary", validation_alias="CATALOG_PROVIDER"
    )
    fixture_catalog_path: str = Field(
        default=str(DEFAULT_FIXTURE_CATALOG_PATH),
        validation_alias="FIXTURE_CATALOG_PATH",
    )
    openlibrary_base_url: str = Field(
        default="https://openlibrary.org", validation_alias="OPENLIBRARY_BASE_URL"
    )
    openlibrary_covers_url: str = Field(
        default="https://covers.openlibrary.org",
        validation_alias="OPENLIBRARY_COVERS_URL",
    )
    provider_timeout_secs: float = Field(
        default=10.0, validation_alias="PROVIDER_TIMEOUT_SECS"
    )

    @field_validator("catalog_provider", mode="before")
    @classmethod
    def normalize_catalog_provider(cls, v: Any) -> str:
        if v is None:
            return "openlibrary"
        if not isinstance(v, str):
            raise TypeError("CATALOG_PROVIDER must be a string")
        return v.strip().lower()

    # CORS
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"],
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        """
        Supported env formats:
          - JSON list: '["http://localhost:3000"]'
          - Bracket list (no quotes): '[http://localhost:3000, http://localhost:5173]'
          - Comma-separated: 'http://localhost:3000, http://localhost:5173'
          - '*' wildcard
        """
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if not isinstance(v, str):
            raise TypeError("cors_origins must be a string or list of strings")

        s = v.strip()
        if not s:
            return []
        if s == "*":
            return ["*"]

        if s.startswith("[") and s.endswith("]"):
            try:
                parsed = json.loads(s)
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed if str(x).strip()]
            except json.JSONDecodeError:
                inner = s[1:-1].strip()
                if not inner:
                    return []
                parts = [p.strip().strip('"').strip("'") for p in inner.split(",")]
                return [p for p in parts if p]

        parts = [p.strip() for p in s.split(",")]
        return [p for p in parts if p]

    # Rate limiting (external catalog endpoints)
    rate_limit_window_seconds: int = Field(
        default=60, validation_alias="RATE_LIMIT_WINDOW_SECONDS"
    )
    rate_limit_external_per_window: int = Field(
        default=30, validation_alias="RATE_LIMIT_EXTERNAL_PER_WINDOW"
    )

    # OpenTelemetry
    otel_enabled: bool = Field(default=False, validation_alias="OTEL_ENABLED")
    otel_otlp_endpoint: str = Field(
        default="http://localhost:4318/v1/traces",
        validation_alias="OTEL_OTLP_ENDPOINT",
    )


settings = Settings()
