"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="EDDM_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "EDDM Campaign Planner API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level for the service.")

    usps_routes_url: str = Field(
        default="https://gis.usps.com/arcgis/rest/services/EDDM/selectZIP/GPServer/routes/execute",
        description="USPS EDDM carrier route lookup (GP service execute endpoint).",
    )
    usps_user_agent: str = Field(default="Mozilla/5.0 (compatible; EDDMPlanner/1.0)")
    geocoding_base_url: str = Field(
        default="https://maps.googleapis.com/maps/api/geocode/json",
        description="Google Geocoding API endpoint used for address and ZIP lookup.",
    )
    google_maps_api_key: str | None = Field(
        default=None,
        description="API key for the geocoding service.",
    )
    fetch_timeout_seconds: float = Field(default=30.0, gt=0.0)
    fetch_max_retries: int = Field(default=2, ge=0)
    fetch_backoff_seconds: float = Field(default=0.5, ge=0.0)
    max_parallel_fetches: int = Field(default=8, ge=1)

    radius_slack_factor: float = Field(
        default=1.2,
        ge=1.0,
        description="Multiplier on the radius within which a route centroid counts as intersecting a circle.",
    )
    zip_probe_bearings: tuple[float, ...] = Field(
        default=(0.0, 90.0, 180.0, 270.0),
        description="Bearings (degrees) probed at the circle edge when discovering nearby ZIP codes.",
    )
    default_product: str = Field(default="print", description="Pricing table used when none is requested.")
    default_industry: str = Field(default="restaurant", description="Industry profile used when none is requested.")

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

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

    @field_validator("zip_probe_bearings", mode="before")
    @classmethod
    def _parse_float_tuple_from_env(cls, value: Any) -> tuple[float, ...]:
        """Parse float tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(float(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(float(item) for item in parsed)
            except (json.JSONDecodeError, TypeError, ValueError):
                pass
            if "," in value:
                return tuple(float(item.strip()) for item in value.split(",") if item.strip())
            if value.strip():
                try:
                    return (float(value.strip()),)
                except ValueError:
                    return tuple()
        return tuple()


settings = Settings()
