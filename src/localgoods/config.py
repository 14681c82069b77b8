"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="LGM_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Local Goods Discovery API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")
    merchants_file: Path = Field(
        default=Path("data/merchants.csv"),
        description="Merchant records with optional latitude/longitude coordinates.",
    )
    products_file: Path = Field(
        default=Path("data/products.csv"),
        description="Product listings keyed to merchants.",
    )
    zip_lookup_base_url: str = Field(
        default="https://api.zippopotam.us",
        description="Base URL of the postal code lookup provider.",
    )
    zip_lookup_country: str = Field(default="us", description="Country segment used in lookup URLs.")
    zip_lookup_timeout_seconds: float = Field(default=5.0, gt=0.0)
    zip_lookup_max_parallel: int = Field(default=5, ge=1)
    default_radius_miles: float = Field(default=25.0, ge=0.0)
    fallback_merchant_count: int = Field(
        default=3,
        ge=1,
        description="Closest merchants shown when nothing lies within the search radius.",
    )
    recommendation_total_count: int = Field(default=12, ge=1)
    recommendation_featured_fraction: float = Field(default=0.25, ge=0.0, le=1.0)
    recommendation_popular_fraction: float = Field(default=0.35, ge=0.0, le=1.0)
    recommendation_recent_fraction: float = Field(default=0.25, ge=0.0, le=1.0)
    popular_min_rating: float = Field(default=4.0, ge=0.0)
    popular_min_views: int = Field(default=10, ge=0)
    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("merchants_file", "products_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("zip_lookup_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
