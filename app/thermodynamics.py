"""Parcel-theory approximations: cloud base, trigger temperature and top of usable lift.

These are deliberately coarse rules of thumb used by free-flight pilots, not an
atmospheric model. Every altitude is in feet MSL unless the name says AGL.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.units import fahrenheit_to_celsius, meters_to_feet, round_half_up

LCL_METERS_PER_DEG_C = 125.0
DRY_ADIABATIC_LAPSE_F = 5.4  # °F per 1000 ft
MIN_CEILING_AGL_FT = 500.0
GLIDER_SINK_ADJ_FT = 500.0
BL_USABLE_FRACTION = 0.85
BL_MIN_HEIGHT_M = 100.0


@dataclass(frozen=True)
class LclResult:
    """Cloud base (feet MSL and AGL) and the surface trigger temperature (°F)."""
    lcl_msl: float
    tcon: int
    lcl_agl: float = 0.0


def calculate_lcl(temp_f: float, dew_point_f: float, elevation_ft: float) -> LclResult:
    """
    Estimate the lifting condensation level and thermal trigger temperature.

    The LCL is floored at 500 ft AGL; TCON is the dew point lifted back down the
    dry adiabat from the unfloored LCL.
    """
    spread_c = fahrenheit_to_celsius(temp_f) - fahrenheit_to_celsius(dew_point_f)
    lcl_agl_ft = meters_to_feet(LCL_METERS_PER_DEG_C * spread_c)
    lcl_msl = max(elevation_ft + MIN_CEILING_AGL_FT, elevation_ft + lcl_agl_ft)
    tcon = dew_point_f + (lcl_agl_ft / 1000) * DRY_ADIABATIC_LAPSE_F
    return LclResult(lcl_msl=lcl_msl, tcon=round_half_up(tcon), lcl_agl=lcl_agl_ft)


def estimate_env_lapse_rate(cape: float, lifted_index: float) -> float:
    """Assume an environmental lapse rate (°F/1000 ft) from instability proxies."""
    if lifted_index < -4 and cape > 1000:
        return 5.0
    if lifted_index < -2 and cape > 500:
        return 4.5
    if lifted_index < 0 and cape > 200:
        return 4.0
    if lifted_index < 2:
        return 3.5
    if lifted_index < 4:
        return 3.0
    return 2.5


def apply_wind_reduction(top_of_lift: float, wind_speed: float, elevation_ft: float) -> int:
    """Shear lowers the usable ceiling; never below 500 ft AGL."""
    reduced = top_of_lift
    if wind_speed > 20:
        reduced -= 1000
    elif wind_speed > 15:
        reduced -= 600
    elif wind_speed > 10:
        reduced -= 300
    return max(round_half_up(elevation_ft + MIN_CEILING_AGL_FT), round_half_up(reduced))


def calculate_top_of_usable_lift(
    lcl_msl: float,
    thermal_strength: float,
    wind_speed: float,
    elevation_ft: float,
    cape: float,
    lifted_index: float,
    boundary_layer_height: Optional[float] = None,
    temperature: Optional[float] = None,
    dew_point: Optional[float] = None,
) -> int:
    """
    Altitude (feet MSL) a glider can realistically climb to.

    With a model boundary-layer height (meters) the mixed layer is used
    directly. Without one, the thermal depth is inferred from how far the
    assumed environmental lapse rate falls short of dry adiabatic. Both paths
    are capped at cloud base, lose a fixed sink margin, and finish with the
    wind-shear reduction.
    """
    if boundary_layer_height and boundary_layer_height > BL_MIN_HEIGHT_M:
        bl_height_ft = meters_to_feet(boundary_layer_height)
        top_of_lift = elevation_ft + bl_height_ft * BL_USABLE_FRACTION
        top_of_lift = min(top_of_lift, lcl_msl)
        top_of_lift -= GLIDER_SINK_ADJ_FT
        return apply_wind_reduction(top_of_lift, wind_speed, elevation_ft)

    lapse_rate_diff = DRY_ADIABATIC_LAPSE_F - estimate_env_lapse_rate(cape, lifted_index)

    if lapse_rate_diff <= 0.3:
        # near dry adiabatic: the surface spread is the best depth proxy
        if temperature is not None and dew_point is not None:
            spread = temperature - dew_point
        else:
            spread = 20.0
        thermal_agl = min(spread * 180, 6000.0)
    else:
        inversion_strength = max(5.0, lifted_index * 2.5 + 10)
        thermal_agl = min((inversion_strength / lapse_rate_diff) * 1000, 7000.0)

    top_of_lift = elevation_ft + thermal_agl
    top_of_lift = min(top_of_lift, lcl_msl)
    top_of_lift -= GLIDER_SINK_ADJ_FT

    if thermal_strength < 5:
        factor = 0.6 + thermal_strength / 12.5
        top_of_lift = elevation_ft + (top_of_lift - elevation_ft) * factor

    return apply_wind_reduction(top_of_lift, wind_speed, elevation_ft)
