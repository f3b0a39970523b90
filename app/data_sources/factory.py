"""Factory helpers for choosing a forecast data source at startup."""

from __future__ import annotations

from app import config
from app.data_sources.base import ForecastDataSource
from app.data_sources.cache import RequestThrottle, ResponseCache
from app.data_sources.fetcher import OpenMeteoForecastSource
from app.data_sources.snapshot_source import SnapshotForecastDataSource
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "open_meteo"


def build_data_source(settings: config.Settings | None = None) -> ForecastDataSource:
    """Instantiate the configured forecast data source."""
    settings = settings or config.settings
    source = (settings.forecast_source or DEFAULT_SOURCE_NAME).lower()

    if source == "open_meteo":
        logger.info(
            "Using Open-Meteo data source",
            extra={"cache_ttl_seconds": settings.cache_ttl_seconds, "timezone": settings.timezone},
        )
        return OpenMeteoForecastSource(
            cache=ResponseCache(ttl_seconds=settings.cache_ttl_seconds),
            throttle=RequestThrottle(min_interval=settings.min_request_interval_seconds),
            timezone=settings.timezone,
            forecast_url=settings.open_meteo_forecast_url,
            ecmwf_url=settings.open_meteo_ecmwf_url,
            timeout=settings.request_timeout_seconds,
        )

    if source == "snapshot":
        snapshot_dir = settings.snapshot_dir
        if not snapshot_dir:
            raise ValueError("snapshot_dir must be set for snapshot data source")
        logger.info("Using snapshot data source", extra={"snapshot_dir": snapshot_dir})
        return SnapshotForecastDataSource.from_dir(snapshot_dir, timezone=settings.timezone)

    raise ValueError(f"Unknown forecast source '{source}'")
