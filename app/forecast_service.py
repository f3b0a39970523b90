"""Turn raw model runs into seven ordered daily flyability records per launch site."""
from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo

from app import config
from app.data_sources import ForecastDataSource, HourlySample, ModelRun
from app.domain import DayForecast, Flyability, ForecastModel, HourlyDataPoint, LaunchSite, SiteForecast, XCPotential
from app.flyability import (
    FlyabilityInputs,
    calculate_xc_potential,
    determine_flyability,
    determine_soaring_flyability,
    determine_thermal_flyability,
)
from app.launch_window import DEFAULT_LAUNCH_TIME, calculate_launch_time, select_best_launch_hour
from app.rain import analyze_rain
from app.thermal_scoring import calculate_thermal_strength
from app.thermodynamics import calculate_lcl, calculate_top_of_usable_lift
from app.units import check_wind_direction_match, round_half_up, round_to_tenth
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/forecast_service")

NOON_WINDOW = (10, 14)
HOURLY_WINDOW = (6, 18)
NO_DATA_CONDITIONS = "Forecast not available"
NO_DATA_XC_REASON = "No data"


def forecast_target_dates(now: dt.datetime, timezone: str, days: int = 7) -> List[dt.date]:
    """Local calendar dates starting with today in ``timezone``; naive ``now`` is taken as local."""
    tz = ZoneInfo(timezone)
    local_now = now.astimezone(tz) if now.tzinfo else now.replace(tzinfo=tz)
    today = local_now.date()
    return [today + dt.timedelta(days=offset) for offset in range(days)]


def _is_usable(sample: HourlySample) -> bool:
    """Rows missing any of the core surface fields cannot be scored."""
    return None not in (sample.temperature, sample.dew_point, sample.wind_speed, sample.wind_direction)


def _gust(sample: HourlySample) -> float:
    return sample.wind_gusts if sample.wind_gusts is not None else sample.wind_speed


def _samples_for_date(samples: Iterable[HourlySample], target_date: dt.date) -> List[HourlySample]:
    return [s for s in samples if s.time.date() == target_date and _is_usable(s)]


def _noon_sample(day_samples: Sequence[HourlySample]) -> Optional[HourlySample]:
    """Sample closest to 12:00 within 10:00-14:00; ties keep the first one seen."""
    lo, hi = NOON_WINDOW
    candidates = [s for s in day_samples if lo <= s.time.hour <= hi]
    if not candidates:
        return None
    return min(candidates, key=lambda s: abs(s.time.hour - 12))


def extract_hourly_data(site: LaunchSite, day_samples: Iterable[HourlySample]) -> List[HourlyDataPoint]:
    """Rounded 06:00-18:00 series with a per-hour trigger temperature."""
    lo, hi = HOURLY_WINDOW
    out: List[HourlyDataPoint] = []
    for s in day_samples:
        if not (lo <= s.time.hour <= hi):
            continue
        lcl = calculate_lcl(s.temperature, s.dew_point, site.elevation)
        out.append(
            HourlyDataPoint(
                hour=s.time.hour,
                temperature=round_half_up(s.temperature),
                tcon=lcl.tcon,
                wind_speed=round_half_up(s.wind_speed),
                wind_direction=s.wind_direction,
                wind_gust=round_half_up(_gust(s)),
                cloud_cover=round_half_up(s.cloud_cover or 0),
            )
        )
    return out


def no_data_forecast(site: LaunchSite, target_date: dt.date) -> DayForecast:
    """Placeholder day with the same shape as a real one: zeros, poor, lift at launch height."""
    return DayForecast(
        date=target_date,
        wind_speed=0,
        wind_direction=0,
        wind_gust=0,
        temperature=0,
        dew_point=0,
        tcon=0,
        cloud_base=0,
        thermal_strength=0,
        top_of_lift=site.elevation,
        flyability=Flyability.POOR,
        conditions=NO_DATA_CONDITIONS,
        soaring_flyability=Flyability.POOR,
        thermal_flyability=Flyability.POOR,
        launch_time=DEFAULT_LAUNCH_TIME,
        xc_potential=XCPotential.LOW,
        xc_reason=NO_DATA_XC_REASON,
        hourly_data=[],
        bl_depth=None,
        cape=0,
        lifted_index=0,
        relative_humidity=0,
        cloud_cover=0,
        wind_direction_match=False,
        rain_info=None,
        source=None,
    )


def _derive_day(site: LaunchSite, run: ModelRun, target_date: dt.date) -> Optional[DayForecast]:
    day_samples = _samples_for_date(run.samples, target_date)
    noon = _noon_sample(day_samples)
    if noon is None:
        return None

    temperature = noon.temperature
    dew_point = noon.dew_point
    wind_speed = round_half_up(noon.wind_speed)
    wind_direction = noon.wind_direction
    wind_gust = round_half_up(_gust(noon))
    relative_humidity = noon.rel_humidity or 0
    cloud_cover = noon.cloud_cover or 0

    if run.provides_instability:
        cape = noon.cape or 0
        lifted_index = noon.lifted_index or 0
        bl_depth = noon.boundary_layer_height or None
    else:
        cape, lifted_index, bl_depth = 0, 0, None

    hourly_data = extract_hourly_data(site, day_samples)

    # Dew point keeps its noon value even when the best hour overrides the rest.
    choice = select_best_launch_hour(hourly_data, site)
    use_best_hour = choice is not None and choice.score > 0
    if use_best_hour:
        best = choice.hour
        wind_speed = best.wind_speed
        wind_gust = best.wind_gust
        wind_direction = best.wind_direction
        temperature = best.temperature
        cloud_cover = best.cloud_cover

    lcl = calculate_lcl(temperature, dew_point, site.elevation)
    thermal_strength = calculate_thermal_strength(
        temperature, dew_point, wind_speed, site.elevation, cape, lifted_index, bl_depth
    )
    top_of_lift = calculate_top_of_usable_lift(
        lcl.lcl_msl,
        thermal_strength,
        wind_speed,
        site.elevation,
        cape,
        lifted_index,
        bl_depth,
        temperature,
        dew_point,
    )

    direction_match = check_wind_direction_match(wind_direction, site.orientation)
    soaring = determine_soaring_flyability(site, wind_speed, wind_gust, direction_match)
    thermal = determine_thermal_flyability(
        site, temperature, lcl.tcon, thermal_strength, wind_speed, direction_match, cloud_cover
    )
    flyability, conditions = determine_flyability(
        FlyabilityInputs(
            site=site,
            temperature=temperature,
            tcon=lcl.tcon,
            wind_speed=wind_speed,
            wind_gust=wind_gust,
            thermal_strength=thermal_strength,
            top_of_lift=top_of_lift,
            wind_direction_match=direction_match,
            cloud_cover=cloud_cover,
            cape=cape,
            lifted_index=lifted_index,
        )
    )

    if use_best_hour:
        launch_time = choice.launch_time
    else:
        launch_time = calculate_launch_time(
            thermal, soaring, thermal_strength, wind_speed, temperature, lcl.tcon
        )

    xc_potential, xc_reason = calculate_xc_potential(top_of_lift, thermal_strength, wind_speed, site)

    return DayForecast(
        date=target_date,
        wind_speed=wind_speed,
        wind_direction=wind_direction,
        wind_gust=wind_gust,
        temperature=round_half_up(temperature),
        dew_point=round_half_up(dew_point),
        tcon=lcl.tcon,
        cloud_base=round_half_up(lcl.lcl_msl),
        thermal_strength=thermal_strength,
        top_of_lift=round_half_up(top_of_lift),
        flyability=flyability,
        conditions=conditions,
        soaring_flyability=soaring,
        thermal_flyability=thermal,
        launch_time=launch_time,
        xc_potential=xc_potential,
        xc_reason=xc_reason,
        hourly_data=hourly_data,
        bl_depth=bl_depth,
        cape=round_half_up(cape),
        lifted_index=round_to_tenth(lifted_index),
        relative_humidity=round_half_up(relative_humidity),
        cloud_cover=round_half_up(cloud_cover),
        wind_direction_match=direction_match,
        rain_info=analyze_rain(run.samples, target_date),
        source=run.model,
    )


def build_day_forecast(site: LaunchSite, run: ModelRun, target_date: dt.date) -> Optional[DayForecast]:
    """
    Derive one day's metrics from a model run.

    Returns None when the run has no usable 10:00-14:00 row for the date, or
    when the rows are malformed; the caller substitutes the next source or the
    no-data placeholder.
    """
    try:
        return _derive_day(site, run, target_date)
    except (TypeError, ValueError) as exc:
        logger.error(
            "Failed to process day",
            extra={"site": site.id, "date": target_date.isoformat(), "model": run.model.value, "error": str(exc)},
        )
        return None


def build_site_forecast(
    site: LaunchSite,
    high_res: Optional[ModelRun],
    low_res: Optional[ModelRun],
    target_dates: Sequence[dt.date],
    *,
    high_res_days: int = 2,
) -> SiteForecast:
    """
    Assemble a site's ordered days.

    The first ``high_res_days`` offsets try the high-resolution run first; any
    offset it cannot cover falls back to the low-resolution run, and then to
    the no-data placeholder, so the list always has one entry per date.
    """
    days: List[DayForecast] = []
    for offset, target_date in enumerate(target_dates):
        day: Optional[DayForecast] = None
        if offset < high_res_days and high_res is not None:
            day = build_day_forecast(site, high_res, target_date)
        if day is None and low_res is not None:
            day = build_day_forecast(site, low_res, target_date)
        if day is None:
            logger.info(
                "No forecast data for day",
                extra={"site": site.id, "date": target_date.isoformat()},
            )
            day = no_data_forecast(site, target_date)
        days.append(day)
    return SiteForecast(site=site, forecast=days)


def get_site_forecast(
    site: LaunchSite,
    data_source: ForecastDataSource,
    *,
    now: dt.datetime | None = None,
    settings: config.Settings | None = None,
) -> SiteForecast:
    """Fetch both model runs for one site and build its forecast."""
    settings = settings or config.settings
    now = now or dt.datetime.now(tz=ZoneInfo(settings.timezone))
    target_dates = forecast_target_dates(now, settings.timezone, settings.forecast_days)

    high_res = data_source.fetch_model_run(site, ForecastModel.HRRR)
    low_res = data_source.fetch_model_run(site, ForecastModel.ECMWF)
    if high_res is None and low_res is None:
        logger.warning("No model data for site", extra={"site": site.id})

    return build_site_forecast(
        site, high_res, low_res, target_dates, high_res_days=settings.high_res_days
    )


def get_site_forecasts(
    sites: Iterable[LaunchSite],
    data_source: ForecastDataSource,
    *,
    now: dt.datetime | None = None,
    settings: config.Settings | None = None,
) -> List[SiteForecast]:
    """Forecasts for every site, in input order, all sharing the same target dates."""
    settings = settings or config.settings
    now = now or dt.datetime.now(tz=ZoneInfo(settings.timezone))
    out: List[SiteForecast] = []
    for site in sites:
        logger.info("Computing forecast", extra={"site": site.id})
        out.append(get_site_forecast(site, data_source, now=now, settings=settings))
    logger.info("Computed site forecasts", extra={"site_count": len(out)})
    return out
