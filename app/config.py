"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the SoarCast forecaster."""
    model_config = SettingsConfigDict(env_prefix="SOARCAST_", extra="ignore")

    forecast_source: str = "open_meteo"  # options: open_meteo, snapshot
    snapshot_dir: str | None = None
    timezone: str = "America/Los_Angeles"
    forecast_days: int = 7
    high_res_days: int = 2
    cache_ttl_seconds: int = 3600
    min_request_interval_seconds: float = 0.15
    request_timeout_seconds: float = 10.0
    open_meteo_forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    open_meteo_ecmwf_url: str = "https://api.open-meteo.com/v1/ecmwf"
    api_key: str | None = None
    output_path: str = "public/data/forecast.json"
    log_level: str = "INFO"

    @field_validator("open_meteo_forecast_url", "open_meteo_ecmwf_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize endpoint URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("forecast_source", mode="after")
    @classmethod
    def lower_source(cls, v: str) -> str:
        return v.strip().lower()


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
