"""Unit conversions and wind-direction geometry shared by the scoring modules."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

FEET_PER_METER = 3.28084

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

# Inclusive degree intervals (meteorological "from" direction) per launch orientation.
ORIENTATION_RANGES: Dict[str, List[Tuple[float, float]]] = {
    "N": [(345, 360), (0, 15)],
    "NE": [(15, 75)],
    "E": [(75, 105)],
    "SE": [(105, 165)],
    "S": [(165, 195)],
    "SSW": [(180, 225)],
    "SW": [(195, 255)],
    "W": [(255, 285)],
    "NW": [(285, 345)],
    "SW-W": [(195, 285)],
    "W-NW": [(245, 345)],
    "SW-NW": [(195, 345)],
    "S-NW": [(165, 345)],
    "SSE-WNW": [(150, 300)],
    "W-SW": [(225, 285)],
    "E-SE": [(75, 165)],
    "NE-SE": [(30, 165)],
    "NW-N": [(315, 360), (0, 15)],
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def round_to_tenth(value: float) -> float:
    """Round to one decimal place, halves going up."""
    return math.floor(value * 10 + 0.5) / 10


def fahrenheit_to_celsius(temp_f: float) -> float:
    return (temp_f - 32) * 5 / 9


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


def meters_to_feet(meters: float) -> float:
    return meters * FEET_PER_METER


def wind_direction_label(degrees: Optional[float]) -> str:
    """Bucket a direction in degrees into a 16-point compass label."""
    if degrees is None:
        return "-"
    return COMPASS_POINTS[round_half_up(degrees / 22.5) % 16]


def check_wind_direction_match(wind_direction: Optional[float], orientation: str) -> bool:
    """
    Return True when the wind blows into the launch's flyable sector.

    Unknown orientation keys and missing directions count as a mismatch.
    """
    ranges = ORIENTATION_RANGES.get(orientation)
    if not ranges or wind_direction is None:
        return False
    return any(low <= wind_direction <= high for low, high in ranges)
