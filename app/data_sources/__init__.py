"""Data source factories for plugging different forecast backends."""

from .base import CallableForecastDataSource, ForecastDataSource, ModelRun
from .cache import RequestThrottle, ResponseCache, cache_key
from .factory import build_data_source
from .fetcher import OpenMeteoForecastSource
from .open_meteo_client import HourlySample, parse_hourly_payload
from .snapshot_source import SnapshotForecastDataSource

__all__ = [
    "build_data_source",
    "ForecastDataSource",
    "CallableForecastDataSource",
    "ModelRun",
    "OpenMeteoForecastSource",
    "SnapshotForecastDataSource",
    "ResponseCache",
    "RequestThrottle",
    "cache_key",
    "HourlySample",
    "parse_hourly_payload",
]
