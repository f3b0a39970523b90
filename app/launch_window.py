"""Best launch hour selection.

The primary path scores every local hour between 10:00 and 18:00 with the
site-type-aware hour score and keeps the best one. The legacy rule table is
kept for callers that only have the noon snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from app.domain import Flyability, HourlyDataPoint, LaunchSite
from app.thermal_scoring import score_hour

DEFAULT_LAUNCH_TIME = "12:00 PM"
LAUNCH_WINDOW_START_HOUR = 10
LAUNCH_WINDOW_END_HOUR = 18


@dataclass(frozen=True)
class LaunchHourChoice:
    """The winning hour, its score, and the display string."""
    hour: HourlyDataPoint
    score: float

    @property
    def launch_time(self) -> str:
        return format_launch_time(self.hour.hour)


def format_launch_time(hour: int) -> str:
    """Render a 24h hour as "11:00 AM" / "1:00 PM"."""
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display}:00 {suffix}"


def select_best_launch_hour(
    hours: Iterable[HourlyDataPoint],
    site: LaunchSite,
) -> Optional[LaunchHourChoice]:
    """
    Return the highest-scoring hour in the 10:00-18:00 window, or None.

    Ties keep the earliest hour (strict greater-than while scanning in order).
    """
    best: Optional[LaunchHourChoice] = None
    for hour in hours:
        if not (LAUNCH_WINDOW_START_HOUR <= hour.hour <= LAUNCH_WINDOW_END_HOUR):
            continue
        score = score_hour(hour, site)
        if best is None or score > best.score:
            best = LaunchHourChoice(hour=hour, score=score)
    return best


def best_launch_time(hours: Iterable[HourlyDataPoint], site: LaunchSite) -> str:
    """Launch time string for the best hour, defaulting to noon."""
    choice = select_best_launch_hour(hours, site)
    return choice.launch_time if choice else DEFAULT_LAUNCH_TIME


def calculate_launch_time(
    thermal_flyability: Flyability,
    soaring_flyability: Flyability,
    thermal_strength: float,
    wind_speed: float,
    temperature: float,
    tcon: float,
) -> str:
    """Legacy rule table keyed on the two flyability classes."""
    temp_deficit = tcon - temperature
    good, marginal, poor = Flyability.GOOD, Flyability.MARGINAL, Flyability.POOR

    if thermal_flyability == good and soaring_flyability == poor:
        if thermal_strength >= 7:
            return "11:00 AM"
        if thermal_strength >= 5:
            return "11:30 AM"
        return "12:00 PM"

    if soaring_flyability == good and thermal_flyability == poor:
        if wind_speed >= 15:
            return "9:00 AM"
        if wind_speed >= 12:
            return "10:00 AM"
        return "10:30 AM"

    if soaring_flyability == good and thermal_flyability == good:
        if thermal_strength >= 6 and temp_deficit <= 3:
            return "11:00 AM"
        return "10:30 AM"

    if soaring_flyability == marginal and thermal_flyability == good:
        return "11:30 AM" if thermal_strength >= 7 else "12:00 PM"

    if soaring_flyability == good and thermal_flyability == marginal:
        return "10:00 AM"

    if thermal_flyability == marginal:
        return "12:00 PM" if temp_deficit <= 5 else "1:00 PM"

    if soaring_flyability == marginal:
        return "11:00 AM"

    return DEFAULT_LAUNCH_TIME
