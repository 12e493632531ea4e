"""
Local Greece - Configuration Loader

Pydantic-based configuration management with:
- Environment-based configuration (dev/prod)
- YAML file loading with inheritance
- Environment variable overrides for secrets
- Type validation via Pydantic

Usage:
    from local_greece.shared.config import get_config

    config = get_config()  # Uses LG_ENVIRONMENT env var
    config = get_config("dev")  # Explicit environment

    # Access config values
    radius = config.map.cluster_radius
    bounds = config.bounding_box()
"""

from __future__ import annotations

import math
import os
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

import yaml
from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from local_greece.geo.bounds import BoundingBox

# =============================================================================
# Configuration Models
# =============================================================================


class ProjectConfig(BaseModel):
    """Project metadata configuration."""

    name: str = "local-greece"
    version: str = "0.1.0"
    description: str = "Bilingual local business directory for Greece"


class GeoBoundsConfig(BaseModel):
    """Geographic bounds of the rendered map (Greece)."""

    min_lat: float = 34.8
    max_lat: float = 41.8
    min_lon: float = 19.5
    max_lon: float = 29.7

    @model_validator(mode="after")
    def check_not_degenerate(self) -> GeoBoundsConfig:
        """Reject bounds that would normalize to NaN or inverted positions."""
        for name, low, high in (
            ("lat", self.min_lat, self.max_lat),
            ("lon", self.min_lon, self.max_lon),
        ):
            if not (math.isfinite(low) and math.isfinite(high)):
                raise ValueError(f"Bounds for {name} must be finite, got {low}..{high}")
            if low >= high:
                raise ValueError(f"Degenerate {name} bounds: min {low} must be below max {high}")
        return self


class MapConfig(BaseModel):
    """Map rendering configuration."""

    cluster_radius: float = Field(default=6.0, gt=0)


class ProximityConfig(BaseModel):
    """"Near me" filter configuration."""

    max_distance_km: float = Field(default=50.0, gt=0)
    earth_radius_km: float = Field(default=6371.0, gt=0)


class ListingsConfig(BaseModel):
    """Listing presentation configuration."""

    per_page: int = Field(default=9, ge=1)
    placeholder_image: str = "https://picsum.photos/seed/{id}/400/300"


class BackendConfig(BaseModel):
    """Hosted backend (Supabase) configuration."""

    listings_table: str = "listings"
    timeout_seconds: int = 30


class AssistantConfig(BaseModel):
    """AI travel assistant configuration."""

    model: str = "gemini-2.5-flash"
    system_instruction: str = (
        "You are a knowledgeable and enthusiastic local guide for Greece. "
        "Provide helpful, concise recommendations for places, restaurants, and activities. "
        "When you suggest specific places, the system will automatically show map cards. "
        "Do not generate markdown links for addresses, rely on the grounding tool."
    )
    greeting: str = (
        "Γειά σου! I'm your local guide to Greece. "
        "Ask me about places to eat, things to do, or hidden gems nearby."
    )
    fallback_text: str = "Here is what I found:"
    error_text: str = (
        "I apologize, but I'm having trouble connecting to the service right now. "
        "Please try again in a moment."
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"
    include_timestamp: bool = True


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Main configuration class for Local Greece.

    Loads configuration from:
    1. YAML files in configs/environments/
    2. Environment variables (for secrets)

    Environment variables take precedence over YAML values.
    """

    model_config = SettingsConfigDict(
        env_prefix="LG_",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    environment: Literal["dev", "prod"] = "dev"

    # Configuration sections
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    geo_bounds: GeoBoundsConfig = Field(default_factory=GeoBoundsConfig)
    map: MapConfig = Field(default_factory=MapConfig)
    proximity: ProximityConfig = Field(default_factory=ProximityConfig)
    listings: ListingsConfig = Field(default_factory=ListingsConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Secrets (from environment variables only)
    supabase_url: str | None = Field(default=None, alias="SUPABASE_URL")
    supabase_anon_key: str | None = Field(default=None, alias="SUPABASE_ANON_KEY")
    gemini_api_key: str | None = Field(
        default=None, validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY")
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"dev", "prod"}
        if v not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v

    def bounding_box(self) -> BoundingBox:
        """Build the map bounding box from the geo bounds section."""
        from local_greece.geo.bounds import BoundingBox

        b = self.geo_bounds
        return BoundingBox(
            min_lat=b.min_lat, max_lat=b.max_lat, min_lon=b.min_lon, max_lon=b.max_lon
        )

    @property
    def backend_configured(self) -> bool:
        """True when both Supabase URL and anon key are set."""
        return bool(self.supabase_url and self.supabase_anon_key)


# =============================================================================
# Configuration Loading Functions
# =============================================================================


def _get_config_dir() -> Path:
    """Get the configuration directory path."""
    # Try relative path from project root
    config_dir = Path(__file__).parent.parent.parent / "configs"
    if config_dir.exists():
        return config_dir

    # Try from current working directory
    config_dir = Path.cwd() / "configs"
    if config_dir.exists():
        return config_dir

    raise FileNotFoundError(
        "Could not find configs directory. Ensure you're running from the project root."
    )


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_config_for_environment(environment: str) -> dict[str, Any]:
    """Load and merge configuration for a specific environment."""
    env_dir = _get_config_dir() / "environments"

    base_config = _load_yaml_file(env_dir / "base.yaml")
    env_config = _load_yaml_file(env_dir / f"{environment}.yaml")

    # Remove inheritance marker if present
    env_config.pop("_inherit", None)

    merged = _deep_merge(base_config, env_config)
    merged["environment"] = environment

    return merged


@lru_cache(maxsize=4)
def get_config(environment: str | None = None) -> Settings:
    """
    Get configuration for the specified environment.

    Args:
        environment: Environment name (dev, prod).
                    If None, uses LG_ENVIRONMENT env var, defaulting to "dev".

    Returns:
        Settings: Validated configuration object.

    Raises:
        pydantic.ValidationError: If a section is invalid, e.g. degenerate geo bounds.
    """
    if environment is None:
        environment = os.getenv("LG_ENVIRONMENT", "dev")

    yaml_config = _load_config_for_environment(environment)

    # Create Settings object (also loads env vars)
    return Settings(**yaml_config)


def reload_config(environment: str | None = None) -> Settings:
    """
    Reload configuration, clearing the cache.

    Useful for testing or when config files have changed.
    """
    get_config.cache_clear()
    return get_config(environment)


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == "prod"
