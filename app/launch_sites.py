"""Static launch-site table for the reference deployment (Northern/Central California and the Owens Valley)."""

from __future__ import annotations

from typing import Dict, List

from app.domain import LaunchSite, SiteType


LAUNCH_SITES: List[LaunchSite] = [
    LaunchSite(id="tollhouse", name="Tollhouse", elevation=4200, latitude=37.0331, longitude=-119.3372,
               orientation="SSE-WNW", max_wind=17, site_type=SiteType.THERMAL),
    LaunchSite(id="ed-levin", name="Ed Levin", elevation=1750, latitude=37.4656, longitude=-121.8531,
               orientation="S-NW", max_wind=20, site_type=SiteType.MIXED),
    LaunchSite(id="mt-vaca", name="Mt Vaca", elevation=2800, latitude=38.3700, longitude=-122.0200,
               orientation="SW-W", max_wind=22, site_type=SiteType.MIXED),
    LaunchSite(id="slide", name="Slide Mountain", elevation=9600, latitude=39.2900, longitude=-119.9400,
               orientation="W-NW", max_wind=25, site_type=SiteType.THERMAL),
    LaunchSite(id="whaleback", name="Whaleback", elevation=2400, latitude=36.7500, longitude=-121.8000,
               orientation="W-NW", max_wind=20, site_type=SiteType.MIXED),
    LaunchSite(id="blue-rock", name="Blue Rock", elevation=3200, latitude=37.2500, longitude=-122.1800,
               orientation="W-NW", max_wind=18, site_type=SiteType.MIXED),
    LaunchSite(id="mt-diablo", name="Mt Diablo", elevation=3849, latitude=37.8814, longitude=-121.9142,
               orientation="W-SW", max_wind=20, site_type=SiteType.THERMAL),
    LaunchSite(id="mission-peak", name="Mission Peak", elevation=2517, latitude=37.5133, longitude=-121.8808,
               orientation="W-NW", max_wind=22, site_type=SiteType.MIXED),
    LaunchSite(id="potato-hill", name="Potato Hill", elevation=2200, latitude=37.3500, longitude=-121.7500,
               orientation="W-NW", max_wind=18, site_type=SiteType.MIXED),
    LaunchSite(id="mt-tamalpais", name="Mt Tamalpais", elevation=2574, latitude=37.9236, longitude=-122.5969,
               orientation="W-SW", max_wind=25, site_type=SiteType.SOARING),
    LaunchSite(id="dunlap", name="Dunlap", elevation=3200, latitude=36.7400, longitude=-119.1000,
               orientation="SW-W", max_wind=20, site_type=SiteType.THERMAL),
    LaunchSite(id="mcgee", name="McGee", elevation=8500, latitude=37.5800, longitude=-118.8300,
               orientation="E-SE", max_wind=22, site_type=SiteType.THERMAL),
    LaunchSite(id="mussel-rock", name="Mussel Rock", elevation=160, latitude=37.6600, longitude=-122.4900,
               orientation="W-NW", max_wind=25, site_type=SiteType.SOARING),
    LaunchSite(id="ej-bowl", name="EJ Bowl", elevation=250, latitude=34.4042, longitude=-119.7465,
               orientation="W-NW", max_wind=22, site_type=SiteType.SOARING),
    LaunchSite(id="big-sur", name="Big Sur", elevation=3240, latitude=35.9703, longitude=-121.4511,
               orientation="W-NW", max_wind=15, site_type=SiteType.SOARING),
    LaunchSite(id="sand-city", name="Sand City", elevation=50, latitude=36.6252, longitude=-121.8439,
               orientation="W-NW", max_wind=18, site_type=SiteType.SOARING),
    LaunchSite(id="goat-rock", name="Goat Rock", elevation=160, latitude=38.4467, longitude=-123.1264,
               orientation="W-NW", max_wind=18, site_type=SiteType.SOARING),
    LaunchSite(id="channing-east", name="Channing East", elevation=200, latitude=38.0686, longitude=-122.1472,
               orientation="NE-SE", max_wind=12, site_type=SiteType.MIXED),
    LaunchSite(id="paiute", name="Paiute", elevation=8000, latitude=37.4100, longitude=-118.2700,
               orientation="SW-NW", max_wind=15, site_type=SiteType.THERMAL),
    LaunchSite(id="flynns", name="Flynns", elevation=5600, latitude=37.3884, longitude=-118.2950,
               orientation="W-NW", max_wind=15, site_type=SiteType.THERMAL),
    LaunchSite(id="vollmer-peak", name="Vollmer Peak", elevation=1905, latitude=37.8838, longitude=-122.2204,
               orientation="NE-SE", max_wind=18, site_type=SiteType.MIXED),
]

SITES_BY_ID: Dict[str, LaunchSite] = {site.id: site for site in LAUNCH_SITES}


def get_site(site_id: str) -> LaunchSite | None:
    """Look up a launch site by id."""
    return SITES_BY_ID.get(site_id)
