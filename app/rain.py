"""Free-text rain annotation for a forecast day."""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional

from app.data_sources.open_meteo_client import HourlySample

RAIN_PRECIP_THRESHOLD = 0.01
RAIN_PROBABILITY_THRESHOLD = 40
ALL_DAY_HOURS = 10


def _format_hour(hour: int) -> str:
    if hour == 12:
        return "12pm"
    if hour > 12:
        return f"{hour - 12}pm"
    return f"{hour}am"


def _rain_hours(samples: Iterable[HourlySample], target_date: dt.date) -> List[int]:
    """Local hours on target_date with measurable rain or a >40% chance of it."""
    hours: List[int] = []
    for s in samples:
        if s.time.date() != target_date:
            continue
        precip = s.precipitation or 0
        prob = s.precipitation_prob or 0
        if precip > RAIN_PRECIP_THRESHOLD or prob > RAIN_PROBABILITY_THRESHOLD:
            hours.append(s.time.hour)
    return hours


def analyze_rain(samples: Iterable[HourlySample], target_date: dt.date) -> Optional[str]:
    """Summarize when rain is expected on target_date, or None for a dry day."""
    hours = _rain_hours(samples, target_date)
    if not hours:
        return None

    if len(hours) >= ALL_DAY_HOURS:
        return "Rain expected all day"

    morning = [h for h in hours if 6 <= h < 12]
    afternoon = [h for h in hours if 12 <= h < 18]
    evening = [h for h in hours if h >= 18]

    periods = []
    if len(morning) >= 3:
        periods.append("morning")
    if len(afternoon) >= 3:
        periods.append("afternoon")
    if len(evening) >= 2:
        periods.append("evening")

    if periods:
        return f"Rain expected in {' and '.join(periods)}"

    first, last = min(hours), max(hours)
    if first == last:
        return f"Rain expected around {_format_hour(first)}"
    return f"Rain expected {_format_hour(first)}-{_format_hour(last)}"
