"""Heuristic thermal-strength scale and per-hour thermal/soaring scores.

Every category below is an ordered ``if/elif`` chain: the ranges overlap on
purpose and the first matching tier wins, so the order is part of the rule.
"""

from __future__ import annotations

from typing import Optional

from app.domain import HourlyDataPoint, LaunchSite, SiteType
from app.units import check_wind_direction_match, round_to_tenth


def _clamp_score(score: float) -> float:
    """Clamp a score to the 0-10 range."""
    return max(0.0, min(10.0, score))


def calculate_thermal_strength(
    temp_f: float,
    dew_point_f: float,
    wind_speed: float,
    elevation_ft: float,
    cape: float,
    lifted_index: float,
    bl_depth: Optional[float] = None,
) -> float:
    """Sum independent point contributions into a 0-10 thermal strength (one decimal)."""
    spread = temp_f - dew_point_f
    strength = 0.0

    # temperature / dew point spread: dry air makes strong, high thermals
    if spread > 45:
        strength += 5
    elif spread > 35:
        strength += 4.5
    elif spread > 25:
        strength += 4
    elif spread > 18:
        strength += 3
    elif spread > 15:
        strength += 2.5
    elif spread > 12:
        strength += 2
    elif spread > 8:
        strength += 1.5
    elif spread > 6:
        strength += 1

    # surface heating
    if temp_f > 90:
        strength += 2
    elif temp_f > 80:
        strength += 1.5
    elif temp_f > 70:
        strength += 1
    elif temp_f > 65:
        strength += 0.5
    elif temp_f > 60:
        strength += 0.3
    elif temp_f < 60:
        strength -= 1

    if cape > 1500:
        strength += 1.5
    elif cape > 800:
        strength += 1
    elif cape > 400:
        strength += 0.5
    elif cape < 50:
        strength -= 0.5

    if lifted_index < -4:
        strength += 1
    elif lifted_index < -2:
        strength += 0.5
    elif lifted_index > 4:
        strength -= 1.5
    elif lifted_index > 2:
        strength -= 1

    if bl_depth and bl_depth > 8000:
        strength += 0.5
    elif bl_depth and bl_depth < 3000:
        strength -= 0.5

    if elevation_ft > 5000:
        strength += 1
    elif elevation_ft > 3000:
        strength += 0.5
    elif elevation_ft < 2000:
        strength += 0.3

    if wind_speed > 25:
        strength -= 2
    elif wind_speed > 18:
        strength -= 1
    elif 8 <= wind_speed <= 15:
        strength += 0.5
    elif 5 <= wind_speed <= 10:
        strength += 0.3
    elif wind_speed < 3:
        strength -= 0.5

    return _clamp_score(round_to_tenth(strength))


def score_thermal_hour(hour: HourlyDataPoint, site: LaunchSite) -> float:
    """Score one hour for thermal flying: trigger reached, moderate wind, some cumulus."""
    score = 0.0
    deficit = hour.tcon - hour.temperature

    if deficit <= 0:
        score += 40
    elif deficit <= 3:
        score += 30
    elif deficit <= 5:
        score += 20
    elif deficit <= 8:
        score += 10

    if 5 <= hour.wind_speed <= 12:
        score += 25
    elif 3 <= hour.wind_speed <= 15:
        score += 15
    elif hour.wind_speed > site.max_wind:
        score -= 20

    if hour.wind_gust > site.max_wind:
        score -= 15
    elif hour.wind_gust > hour.wind_speed * 1.5:
        score -= 10

    if 20 <= hour.cloud_cover <= 50:
        score += 15
    elif hour.cloud_cover < 20:
        score += 10
    elif hour.cloud_cover > 70:
        score -= 10

    return score


def score_soaring_hour(hour: HourlyDataPoint, site: LaunchSite) -> float:
    """Score one hour for ridge soaring; cross or back wind dominates everything."""
    if not check_wind_direction_match(hour.wind_direction, site.orientation):
        return -50.0

    score = 0.0
    speed = hour.wind_speed

    if 10 <= speed <= 16:
        score += 40
    elif 8 <= speed <= 20:
        score += 25
    elif 6 <= speed <= 22:
        score += 10
    elif speed < 6:
        score -= 10
    elif speed > site.max_wind:
        score -= 30

    if hour.wind_gust > site.max_wind:
        score -= 20
    elif hour.wind_gust > 25:
        score -= 10

    return score


def score_hour(hour: HourlyDataPoint, site: LaunchSite) -> float:
    """Dispatch on site type; mixed sites take the better of the two scores."""
    if site.site_type == SiteType.THERMAL:
        return score_thermal_hour(hour, site)
    if site.site_type == SiteType.SOARING:
        return score_soaring_hour(hour, site)
    return max(score_thermal_hour(hour, site), score_soaring_hour(hour, site))
