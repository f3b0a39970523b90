"""Domain vocabulary and strict schemas for launch-site flyability forecasts.

This module defines the stable contract between the scoring pipeline and its
consumers (API, batch JSON, presentation accessors): enums for the three-state
classifiers, the static launch-site descriptor, and the per-day forecast
record. No scoring logic lives here.

Models serialize with camelCase aliases (``topOfLift``, ``launchTime``) so the
JSON document matches what the web front end already indexes.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling and camelCase JSON aliases."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class Flyability(str, Enum):
    """Three-state result shared by the soaring, thermal and overall classifiers."""
    GOOD = "good"
    MARGINAL = "marginal"
    POOR = "poor"


class SiteType(str, Enum):
    """Which scoring heuristic dominates at a launch."""
    THERMAL = "thermal"
    SOARING = "soaring"
    MIXED = "mixed"


class XCPotential(str, Enum):
    """Qualitative cross-country potential."""
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


class ForecastModel(str, Enum):
    """Upstream model runs; only the high-resolution run carries instability fields."""
    HRRR = "hrrr"
    ECMWF = "ecmwf"

    @property
    def provides_instability(self) -> bool:
        """True when CAPE, lifted index and boundary-layer height are available."""
        return self is ForecastModel.HRRR


class LaunchSite(_StrictBaseModel):
    """Static launch descriptor; created once from the site table."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    elevation: float  # feet MSL
    latitude: float
    longitude: float
    orientation: str  # key into units.ORIENTATION_RANGES, e.g. "SW-W"
    max_wind: float  # mph
    site_type: SiteType = SiteType.MIXED


class HourlyDataPoint(_StrictBaseModel):
    """One local hour (06-18) used for the best-hour search and charting."""
    hour: int = Field(ge=0, le=23)
    temperature: float
    tcon: float
    wind_speed: float
    wind_direction: float
    wind_gust: float
    cloud_cover: float


class DayForecast(_StrictBaseModel):
    """Derived metrics for one site on one local date."""
    date: dt.date
    wind_speed: float
    wind_direction: float
    wind_gust: float
    temperature: float
    dew_point: float
    tcon: float
    cloud_base: float  # LCL, feet MSL
    thermal_strength: float = Field(ge=0.0, le=10.0)
    top_of_lift: float  # feet MSL
    flyability: Flyability
    conditions: str
    soaring_flyability: Flyability
    thermal_flyability: Flyability
    launch_time: str
    xc_potential: XCPotential
    xc_reason: str
    hourly_data: List[HourlyDataPoint] = Field(default_factory=list)
    bl_depth: float | None = None  # meters AGL
    cape: float = 0.0
    lifted_index: float = 0.0
    relative_humidity: float = 0.0
    cloud_cover: float = 0.0
    wind_direction_match: bool = False
    rain_info: str | None = None
    source: ForecastModel | None = None


class SiteForecast(_StrictBaseModel):
    """A launch site plus its ordered daily forecasts (index 0 is today)."""
    site: LaunchSite
    forecast: List[DayForecast] = Field(default_factory=list)


class ForecastDocument(_StrictBaseModel):
    """Top-level document written by the batch job."""
    generated: str
    forecasts: List[SiteForecast] = Field(default_factory=list)
