"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GeocodingProviderName = Literal["geocode-earth", "mapbox", "google-maps", "geoapify"]
RosterMode = Literal["officials", "endorsements"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data
    data_dir: str = Field(
        default="./data",
        description="Directory holding district map packs and roster YAML files",
    )
    jurisdiction_config_path: str | None = Field(
        default=None,
        description="Optional YAML file overriding the built-in jurisdiction configuration",
    )
    officials_file: str = Field(
        default="officials.yaml",
        description="Officials roster file, relative to data_dir",
    )
    endorsements_file: str = Field(
        default="endorsements.yaml",
        description="Endorsements roster file, relative to data_dir",
    )

    # Matching
    roster_mode: RosterMode = Field(
        default="officials",
        description="Which roster the lookup endpoint matches against",
    )
    show_district_shapes: bool = Field(
        default=False,
        description="Include simplified district geometries in lookup responses",
    )
    district_shape_tolerance: float = Field(
        default=0.002,
        description="Simplification tolerance (degrees) for returned district shapes",
        gt=0,
    )

    # Geocoding
    geocoding_provider: GeocodingProviderName = Field(
        default="geocode-earth",
        description="Active geocoding backend",
    )
    geocoding_autocomplete_limit: int = Field(
        default=8,
        description="Maximum number of autocomplete suggestions returned",
        gt=0,
        le=50,
    )
    geocoding_timeout: float = Field(
        default=10.0,
        description="Geocoding request timeout in seconds",
        gt=0,
    )

    # Geocoding credentials
    geocode_earth_api_key: str | None = Field(
        default=None,
        description="Geocode Earth API key",
    )
    mapbox_access_token: str | None = Field(
        default=None,
        description="Mapbox access token",
    )
    geoapify_api_key: str | None = Field(
        default=None,
        description="Geoapify API key",
    )
    google_maps_api_key: str | None = Field(
        default=None,
        description="Google Maps Platform API key (Geocoding + Places)",
    )

    @field_validator("geocode_earth_api_key", "mapbox_access_token", "geoapify_api_key", "google_maps_api_key")
    @classmethod
    def strip_api_key(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log records on stderr instead of text",
    )

    # API
    api_prefix: str = Field(
        default="/api",
        description="API route prefix",
    )
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def provider_api_key(self, provider: str) -> str | None:
        """Return the configured credential for a geocoding provider."""
        keys = {
            "geocode-earth": self.geocode_earth_api_key,
            "mapbox": self.mapbox_access_token,
            "geoapify": self.geoapify_api_key,
            "google-maps": self.google_maps_api_key,
        }
        return keys.get(provider)


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
