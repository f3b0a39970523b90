"""Helpers for fetching and parsing hourly model runs from the Open-Meteo APIs."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from app.domain import ForecastModel, LaunchSite
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag='open_meteo_client')

OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_ECMWF_URL = "https://api.open-meteo.com/v1/ecmwf"
DEFAULT_TIMEZONE = "America/Los_Angeles"


def _build_session(max_retries: int = 3, backoff_factor: float = 0.2) -> requests.Session:
    """Session that retries transient upstream failures on GET."""
    s = requests.Session()
    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    return s


session = _build_session()

BASE_HOURLY_VARS = [
    "temperature_2m",
    "dew_point_2m",
    "relative_humidity_2m",
    "cloud_cover",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
]
INSTABILITY_HOURLY_VARS = ["cape", "lifted_index", "boundary_layer_height"]
PRECIP_HOURLY_VARS = ["precipitation", "precipitation_probability"]

EXPECTED_HOURLY_UNITS = {
    "temperature_2m": "°F",
    "dew_point_2m": "°F",
    "relative_humidity_2m": "%",
    "cloud_cover": "%",
    "wind_speed_10m": "mph",
    "wind_gusts_10m": "mph",
    "wind_direction_10m": "°",
    "precipitation": "mm",
    "precipitation_probability": "%",
    "cape": "J/kg",
    "boundary_layer_height": "m",
}

# Alternative spellings that should not trigger warnings.
ALLOWED_UNIT_SYNONYMS = {
    "relative_humidity_2m": {"%", "percent"},
    "cloud_cover": {"%", "percent"},
    "wind_direction_10m": {"°", "deg", "degrees"},
    "precipitation": {"mm", "inch"},
    "precipitation_probability": {"%", "percent"},
    "cape": {"J/kg", "J kg-1"},
    "boundary_layer_height": {"m", "meters"},
}


@dataclass(frozen=True)
class RequestProfile:
    """What to ask Open-Meteo for, per model run."""
    model: ForecastModel
    url: str
    forecast_days: int
    hourly_vars: Tuple[str, ...]


def request_profile(
    model: ForecastModel,
    *,
    forecast_url: str = OPEN_METEO_FORECAST_URL,
    ecmwf_url: str = OPEN_METEO_ECMWF_URL,
) -> RequestProfile:
    """The high-res run adds instability fields over a 2-day horizon; ECMWF covers 7 days without them."""
    if model.provides_instability:
        return RequestProfile(
            model=model,
            url=forecast_url,
            forecast_days=2,
            hourly_vars=tuple(BASE_HOURLY_VARS + INSTABILITY_HOURLY_VARS + PRECIP_HOURLY_VARS),
        )
    return RequestProfile(
        model=model,
        url=ecmwf_url,
        forecast_days=7,
        hourly_vars=tuple(BASE_HOURLY_VARS + PRECIP_HOURLY_VARS),
    )


@dataclass
class HourlySample:
    """One normalized hourly row from a model run; Open-Meteo pads gaps with null."""
    time: dt.datetime  # timezone-aware, site local time
    temperature: Optional[float]
    dew_point: Optional[float]
    rel_humidity: Optional[float]
    cloud_cover: Optional[float]
    wind_speed: Optional[float]
    wind_gusts: Optional[float]
    wind_direction: Optional[float]
    precipitation: Optional[float] = None
    precipitation_prob: Optional[float] = None
    cape: Optional[float] = None
    lifted_index: Optional[float] = None
    boundary_layer_height: Optional[float] = None


def _iso_to_dt_with_tz(s: str, tz_name: str) -> dt.datetime:
    """Interpret Open-Meteo local time string as being in tz_name."""
    naive = dt.datetime.fromisoformat(s)
    return naive.replace(tzinfo=ZoneInfo(tz_name))


def _warn_on_unexpected_units(units: dict, *, context: str):
    """Log a warning if Open-Meteo returns units we did not request/expect."""
    if not units:
        return
    for field, expected in EXPECTED_HOURLY_UNITS.items():
        if field not in units:
            continue
        actual = units.get(field)
        if actual and actual != expected:
            allowed = ALLOWED_UNIT_SYNONYMS.get(field, set())
            if actual not in allowed:
                logger.warning(
                    "Unexpected Open-Meteo unit",
                    extra={"context": context, "field": field, "unit": actual, "expected": expected},
                )


def build_request_params(site: LaunchSite, profile: RequestProfile, *, timezone: str = DEFAULT_TIMEZONE) -> Dict[str, Any]:
    """Query parameters for one site and profile; coordinates go out at 4 decimals."""
    return {
        "latitude": f"{site.latitude:.4f}",
        "longitude": f"{site.longitude:.4f}",
        "hourly": ",".join(profile.hourly_vars),
        "temperature_unit": "fahrenheit",
        "wind_speed_unit": "mph",
        "timezone": timezone,
        "forecast_days": profile.forecast_days,
    }


def parse_hourly_payload(data: Dict[str, Any], model: ForecastModel, *, timezone: str = DEFAULT_TIMEZONE) -> List[HourlySample]:
    """
    Turn Open-Meteo's parallel hourly arrays into HourlySample rows.

    Instability fields are only read for models that provide them; for the
    others they stay None no matter what the payload carries.

    Raises ValueError when the payload has no hourly block, a time axis with
    non-string entries, or units that are not an object.
    """
    if not isinstance(data, dict):
        raise ValueError("Open-Meteo payload is not a JSON object")
    hourly = data.get("hourly")
    if not isinstance(hourly, dict) or not isinstance(hourly.get("time"), list):
        raise ValueError("Open-Meteo payload has no hourly time axis")
    times = hourly["time"]
    if not all(isinstance(t, str) for t in times):
        raise ValueError("Open-Meteo time axis has non-string entries")

    units = data.get("hourly_units") or {}
    if not isinstance(units, dict):
        raise ValueError("Open-Meteo hourly_units is not a JSON object")
    _warn_on_unexpected_units(units, context=f"hourly_{model.value}")

    n = len(times)

    def column(name: str) -> List[Optional[float]]:
        values = hourly.get(name)
        if values is None:
            return [None] * n
        if not isinstance(values, list) or len(values) != n:
            raise ValueError(f"Open-Meteo column '{name}' does not match the time axis")
        return values

    temp = column("temperature_2m")
    dew_point = column("dew_point_2m")
    rel_humidity = column("relative_humidity_2m")
    cloud = column("cloud_cover")
    wind_speed = column("wind_speed_10m")
    wind_dir = column("wind_direction_10m")
    wind_gusts = column("wind_gusts_10m")
    precip = column("precipitation")
    precip_prob = column("precipitation_probability")
    if model.provides_instability:
        cape = column("cape")
        lifted_index = column("lifted_index")
        bl_height = column("boundary_layer_height")
    else:
        cape = lifted_index = bl_height = [None] * n

    out: List[HourlySample] = []
    for i, t in enumerate(times):
        out.append(
            HourlySample(
                time=_iso_to_dt_with_tz(t, timezone),
                temperature=temp[i],
                dew_point=dew_point[i],
                rel_humidity=rel_humidity[i],
                cloud_cover=cloud[i],
                wind_speed=wind_speed[i],
                wind_gusts=wind_gusts[i],
                wind_direction=wind_dir[i],
                precipitation=precip[i],
                precipitation_prob=precip_prob[i],
                cape=cape[i],
                lifted_index=lifted_index[i],
                boundary_layer_height=bl_height[i],
            )
        )
    return out


def fetch_model_payload(
    site: LaunchSite,
    profile: RequestProfile,
    *,
    timezone: str = DEFAULT_TIMEZONE,
    timeout: float = 10,
) -> Dict[str, Any]:
    """GET the raw JSON for one site and profile; HTTP errors propagate as requests exceptions."""
    params = build_request_params(site, profile, timezone=timezone)
    logger.debug(
        "Requesting Open-Meteo model run",
        extra={"site": site.id, "model": profile.model.value, "url": profile.url},
    )
    resp = session.get(profile.url, params=params, timeout=timeout)
    resp.raise_for_status()
    return resp.json()
