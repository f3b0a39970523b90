"""Display-side accessors over computed forecasts (labels, roll-ups, ranking).

Nothing here renders markup; these helpers return plain strings and values for
the API summary endpoint and any front end consuming it.
"""
from __future__ import annotations

import datetime as dt
from typing import Dict, List, Sequence

from app.domain import DayForecast, Flyability, SiteForecast
from app.units import round_to_tenth, wind_direction_label

FLYABILITY_SCORE: Dict[Flyability, int] = {
    Flyability.GOOD: 3,
    Flyability.MARGINAL: 2,
    Flyability.POOR: 1,
}


def best_condition(day: DayForecast) -> Flyability:
    """The better of the soaring and thermal classes for a day."""
    return max(
        (day.soaring_flyability, day.thermal_flyability),
        key=lambda f: FLYABILITY_SCORE[f],
    )


def day_score(site_forecast: SiteForecast, day_index: int) -> int:
    """Ranking score for one day; 0 when the site has no record for that index."""
    if day_index >= len(site_forecast.forecast):
        return 0
    return FLYABILITY_SCORE[best_condition(site_forecast.forecast[day_index])]


def rank_sites(forecasts: Sequence[SiteForecast], day_index: int = 0) -> List[SiteForecast]:
    """Sites ordered best-first by the given day; equal scores keep their input order."""
    return sorted(forecasts, key=lambda f: day_score(f, day_index), reverse=True)


def day_label(index: int) -> str:
    if index == 0:
        return "Today"
    if index == 1:
        return "Tomorrow"
    return f"Day {index + 1}"


def format_date(value: dt.date) -> str:
    """Short weekday/month form, e.g. ``Mon, Jan 6``."""
    return f"{value:%a}, {value:%b} {value.day}"


def _num(value: float) -> str:
    return f"{value:g}"


def compact_launch_time(launch_time: str) -> str:
    """``11:00 AM`` -> ``11AM``; half hours keep their minutes (``11:30AM``)."""
    return launch_time.replace(" ", "").replace(":00", "")


def day_display_strings(day: DayForecast, index: int) -> Dict[str, str]:
    """Card-ready strings for one day; safe for the no-data placeholder."""
    return {
        "label": day_label(index),
        "date": format_date(day.date),
        "wind": f"{_num(day.wind_speed)} mph",
        "wind_detail": f"{wind_direction_label(day.wind_direction)} G{_num(day.wind_gust)}",
        "thermal_strength": f"{_num(day.thermal_strength)}/10",
        "top_of_lift": f"{round_to_tenth(day.top_of_lift / 1000):.1f}k",
        "launch_time": compact_launch_time(day.launch_time),
        "conditions": day.conditions,
        "rain": day.rain_info or "",
        "soaring": day.soaring_flyability.value,
        "thermal": day.thermal_flyability.value,
        "best": best_condition(day).value,
        "wind_direction": "Wind OK" if day.wind_direction_match else "Cross",
        "xc": f"{day.xc_potential.value}: {day.xc_reason}",
    }


def site_summary(site_forecast: SiteForecast) -> List[Dict[str, str]]:
    """Display strings for every day of a site, in forecast order."""
    return [day_display_strings(day, i) for i, day in enumerate(site_forecast.forecast)]
