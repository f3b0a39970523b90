"""Deterministic flyability classifiers and cross-country potential.

Three independent classifiers share the same inputs:

* soaring flyability: is there enough laminar wind, from the right direction,
  to stay up on the ridge?
* thermal flyability: will the day reach its trigger temperature with
  manageable wind?
* overall flyability: a single class plus a one-line narrative, produced by an
  ordered rule table where the first matching rule wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

from app.domain import Flyability, LaunchSite, SiteType, XCPotential
from app.units import round_half_up, round_to_tenth


def _num(value: float) -> str:
    """Render a number the way it reads in a narrative: 8 not 8.0, 7.5 stays 7.5."""
    return f"{value:g}"


def determine_soaring_flyability(
    site: LaunchSite,
    wind_speed: float,
    wind_gust: float,
    wind_direction_match: bool,
) -> Flyability:
    """Binary in practice: the rule set never yields MARGINAL."""
    if not wind_direction_match:
        return Flyability.POOR
    if wind_speed < 8:
        return Flyability.POOR
    if wind_speed > site.max_wind:
        return Flyability.POOR
    if wind_gust > site.max_wind * 1.25:
        return Flyability.POOR
    if 10 <= wind_speed <= 16 and wind_gust <= site.max_wind:
        return Flyability.GOOD
    if 8 <= wind_speed <= site.max_wind and wind_gust <= site.max_wind:
        return Flyability.GOOD
    return Flyability.POOR


def determine_thermal_flyability(
    site: LaunchSite,
    temperature: float,
    tcon: float,
    thermal_strength: float,
    wind_speed: float,
    wind_direction_match: bool,
    cloud_cover: float,
) -> Flyability:
    """Classify thermal flying from trigger-temperature deficit, strength and wind."""
    if not wind_direction_match:
        return Flyability.POOR

    temp_deficit = tcon - temperature
    if temp_deficit > 15:
        return Flyability.POOR
    if wind_speed > site.max_wind:
        return Flyability.POOR
    if wind_speed < 3:
        return Flyability.MARGINAL if thermal_strength > 6 else Flyability.POOR

    if thermal_strength >= 7 and temp_deficit <= 3 and wind_speed <= site.max_wind * 0.7:
        return Flyability.GOOD
    if thermal_strength >= 5 and temp_deficit <= 5:
        return Flyability.GOOD
    if thermal_strength >= 3 and temp_deficit <= 8:
        return Flyability.MARGINAL
    if cloud_cover > 75 and thermal_strength < 5:
        return Flyability.POOR
    return Flyability.POOR


@dataclass(frozen=True)
class FlyabilityInputs:
    """Everything the overall classifier looks at for one site-day."""
    site: LaunchSite
    temperature: float
    tcon: float
    wind_speed: float
    wind_gust: float
    thermal_strength: float
    top_of_lift: float
    wind_direction_match: bool
    cloud_cover: float
    cape: float
    lifted_index: float

    @property
    def temp_deficit(self) -> float:
        return self.tcon - self.temperature

    @property
    def top_k(self) -> str:
        return _num(round_to_tenth(self.top_of_lift / 1000))


@dataclass(frozen=True)
class FlyabilityRule:
    """One row of the overall rule table."""
    name: str
    applies: Callable[[FlyabilityInputs], bool]
    flyability: Callable[[FlyabilityInputs], Flyability]
    message: Callable[[FlyabilityInputs], str]


def _fixed(value: Flyability) -> Callable[[FlyabilityInputs], Flyability]:
    return lambda _inputs: value


# Order is load-bearing: broad rules further down are only reached because the
# narrower ones above have already been ruled out.
FLYABILITY_RULES: Tuple[FlyabilityRule, ...] = (
    FlyabilityRule(
        name="direction_mismatch",
        applies=lambda i: not i.wind_direction_match,
        flyability=_fixed(Flyability.POOR),
        message=lambda i: f"Wind direction unfavorable for {i.site.orientation} site",
    ),
    FlyabilityRule(
        name="too_cool",
        applies=lambda i: i.temp_deficit > 15,
        flyability=_fixed(Flyability.POOR),
        message=lambda i: (
            f"Too cool: needs {_num(i.tcon)}°F for thermals, "
            f"only {round_half_up(i.temperature)}°F forecast"
        ),
    ),
    FlyabilityRule(
        name="cool",
        applies=lambda i: i.temp_deficit > 8,
        flyability=lambda i: Flyability.POOR if i.temp_deficit > 12 else Flyability.MARGINAL,
        message=lambda i: (
            f"Cool: needs {_num(i.tcon)}°F for good thermals, "
            f"{round_half_up(i.temperature)}°F forecast"
        ),
    ),
    FlyabilityRule(
        name="too_strong",
        applies=lambda i: i.wind_speed > i.site.max_wind,
        flyability=_fixed(Flyability.POOR),
        message=lambda i: f"Too strong: {_num(i.wind_speed)}mph exceeds {_num(i.site.max_wind)}mph limit",
    ),
    FlyabilityRule(
        name="strong_gusts",
        applies=lambda i: i.wind_gust > i.site.max_wind * 1.5,
        flyability=_fixed(Flyability.MARGINAL),
        message=lambda i: f"Strong gusts: G{_num(i.wind_gust)}mph, be cautious",
    ),
    FlyabilityRule(
        name="too_light",
        applies=lambda i: i.wind_speed < 2,
        flyability=lambda i: Flyability.MARGINAL if i.thermal_strength > 6 else Flyability.POOR,
        message=lambda i: (
            "Light winds, strong thermals" if i.thermal_strength > 6 else "Too light, weak thermals"
        ),
    ),
    FlyabilityRule(
        name="overcast",
        applies=lambda i: i.cloud_cover > 75 and i.lifted_index > 2,
        flyability=_fixed(Flyability.MARGINAL),
        message=lambda i: f"Overcast may limit thermals: {round_half_up(i.cloud_cover)}% cloud cover",
    ),
    FlyabilityRule(
        name="excellent_post_frontal",
        applies=lambda i: (
            i.thermal_strength >= 8
            and i.wind_speed <= i.site.max_wind * 0.6
            and i.temp_deficit <= 2
            and i.cape > 400
        ),
        flyability=_fixed(Flyability.GOOD),
        message=lambda i: (
            f"Excellent post-frontal: {_num(i.thermal_strength)}/10 thermals, CAPE {round_half_up(i.cape)}"
        ),
    ),
    FlyabilityRule(
        name="excellent",
        applies=lambda i: (
            i.thermal_strength >= 7 and i.wind_speed <= i.site.max_wind * 0.7 and i.temp_deficit <= 3
        ),
        flyability=_fixed(Flyability.GOOD),
        message=lambda i: f"Excellent: {_num(i.thermal_strength)}/10 thermals, top {i.top_k}k",
    ),
    FlyabilityRule(
        name="good",
        applies=lambda i: (
            i.thermal_strength >= 5 and i.wind_speed <= i.site.max_wind * 0.8 and i.temp_deficit <= 5
        ),
        flyability=_fixed(Flyability.GOOD),
        message=lambda i: f"Good: {_num(i.thermal_strength)}/10 thermals, top {i.top_k}k",
    ),
    FlyabilityRule(
        name="moderate",
        applies=lambda i: (
            i.thermal_strength >= 3 and i.wind_speed <= i.site.max_wind * 0.9 and i.temp_deficit <= 8
        ),
        flyability=_fixed(Flyability.MARGINAL),
        message=lambda i: f"Moderate: {_num(i.thermal_strength)}/10 thermals, top {i.top_k}k",
    ),
    FlyabilityRule(
        name="stable",
        applies=lambda i: True,
        flyability=_fixed(Flyability.POOR),
        message=lambda i: f"Stable conditions: {_num(i.thermal_strength)}/10 thermals",
    ),
)


def match_flyability_rule(inputs: FlyabilityInputs) -> FlyabilityRule:
    """Return the first rule in FLYABILITY_RULES that applies."""
    return next(rule for rule in FLYABILITY_RULES if rule.applies(inputs))


def determine_flyability(inputs: FlyabilityInputs) -> tuple[Flyability, str]:
    """Overall class and narrative for a site-day."""
    rule = match_flyability_rule(inputs)
    return rule.flyability(inputs), rule.message(inputs)


def calculate_xc_potential(
    top_of_lift: float,
    thermal_strength: float,
    wind_speed: float,
    site: LaunchSite,
) -> tuple[XCPotential, str]:
    """Rough cross-country potential from ceiling AGL, strength and wind."""
    if site.site_type == SiteType.SOARING:
        return XCPotential.LOW, "Ridge site - local soaring"

    ceiling_agl = top_of_lift - site.elevation
    if thermal_strength >= 7 and ceiling_agl >= 4000 and wind_speed <= 15:
        return XCPotential.HIGH, f"{round_half_up(ceiling_agl / 1000)}k+ AGL, {_num(thermal_strength)}/10"
    if (thermal_strength >= 5 and ceiling_agl >= 3000) or (thermal_strength >= 6 and wind_speed <= 12):
        return XCPotential.MODERATE, "Good for local XC"
    return XCPotential.LOW, "Low ceiling" if ceiling_agl < 2000 else "Weak thermals"
