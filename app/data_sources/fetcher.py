"""Open-Meteo backed data source: cache, throttle, fetch, stale fallback."""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from app.data_sources import open_meteo_client
from app.data_sources.base import ModelRun
from app.data_sources.cache import RequestThrottle, ResponseCache, cache_key
from app.domain import ForecastModel, LaunchSite
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/fetcher")


class OpenMeteoForecastSource:
    """
    Fetch model runs from Open-Meteo for one process.

    A fresh cache entry short-circuits the network. Otherwise the call waits on
    the throttle and hits the API; on any upstream or decode failure the last
    cached payload for the same key is used, and with no cached payload the
    run is reported as missing (None) rather than raised.
    """

    def __init__(
        self,
        cache: ResponseCache,
        throttle: RequestThrottle,
        *,
        timezone: str = open_meteo_client.DEFAULT_TIMEZONE,
        forecast_url: str = open_meteo_client.OPEN_METEO_FORECAST_URL,
        ecmwf_url: str = open_meteo_client.OPEN_METEO_ECMWF_URL,
        timeout: float = 10,
    ) -> None:
        self.cache = cache
        self.throttle = throttle
        self.timezone = timezone
        self.forecast_url = forecast_url
        self.ecmwf_url = ecmwf_url
        self.timeout = timeout

    def _profile(self, model: ForecastModel) -> open_meteo_client.RequestProfile:
        return open_meteo_client.request_profile(
            model, forecast_url=self.forecast_url, ecmwf_url=self.ecmwf_url
        )

    def _parse(self, payload: Dict[str, Any], model: ForecastModel) -> ModelRun:
        samples = open_meteo_client.parse_hourly_payload(payload, model, timezone=self.timezone)
        return ModelRun(model=model, samples=samples)

    def _fallback(self, key: str, site: LaunchSite, model: ForecastModel) -> Optional[ModelRun]:
        stale = self.cache.get_any(key)
        if stale is None:
            logger.error("No cached data to fall back on", extra={"site": site.id, "model": model.value})
            return None
        logger.warning("Using stale cached response", extra={"site": site.id, "model": model.value})
        try:
            return self._parse(stale, model)
        except ValueError as exc:
            logger.error(
                "Cached response is malformed",
                extra={"site": site.id, "model": model.value, "error": str(exc)},
            )
            return None

    def fetch_model_run(self, site: LaunchSite, model: ForecastModel) -> Optional[ModelRun]:
        key = cache_key(site, model)
        cached = self.cache.get_fresh(key)
        if cached is not None:
            logger.debug("Cache hit", extra={"site": site.id, "model": model.value})
            try:
                return self._parse(cached, model)
            except ValueError:
                logger.warning("Discarding malformed cache entry", extra={"site": site.id, "model": model.value})

        self.throttle.wait()
        try:
            payload = open_meteo_client.fetch_model_payload(
                site, self._profile(model), timezone=self.timezone, timeout=self.timeout
            )
            run = self._parse(payload, model)
        except (requests.RequestException, ValueError) as exc:
            logger.warning(
                "Open-Meteo fetch failed",
                extra={"site": site.id, "model": model.value, "error": str(exc)},
            )
            return self._fallback(key, site, model)

        self.cache.set(key, payload)
        return run
