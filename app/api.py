"""HTTP API for the launch-site flyability forecaster."""

import hmac
from datetime import datetime
from typing import Dict, List
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from pydantic import BaseModel

from app.domain import ForecastDocument, LaunchSite, SiteForecast
from .config import settings
from .data_sources import build_data_source
from .forecast_service import get_site_forecast, get_site_forecasts
from .launch_sites import LAUNCH_SITES, get_site
from .presentation import rank_sites, site_summary
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """
    Validate the X-API-Key header against the static api_key setting.
    """
    # If no key is configured, allow requests (dev/default mode).
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])
DATA_SOURCE = build_data_source(settings)


class SiteSummaryResponse(BaseModel):
    """Display strings per forecast day for one site."""
    site: LaunchSite
    days: List[Dict[str, str]]


def _now() -> datetime:
    return datetime.now(tz=ZoneInfo(settings.timezone))


def _require_site(site_id: str) -> LaunchSite:
    site = get_site(site_id)
    if site is None:
        logger.info("Unknown site requested", extra={"site": site_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown site '{site_id}'")
    return site


@router.get("/sites", response_model=List[LaunchSite])
def list_sites():
    """Static launch-site table."""
    return LAUNCH_SITES


@router.get("/forecasts", response_model=ForecastDocument)
def list_forecasts(day: int = Query(default=0)):
    """All sites, best first for the requested day offset (0 = today)."""
    if not 0 <= day < settings.forecast_days:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"day must be between 0 and {settings.forecast_days - 1}",
        )
    now = _now()
    forecasts = get_site_forecasts(LAUNCH_SITES, DATA_SOURCE, now=now, settings=settings)
    return ForecastDocument(generated=now.isoformat(), forecasts=rank_sites(forecasts, day))


@router.get("/forecasts/{site_id}", response_model=SiteForecast)
def site_forecast(site_id: str):
    """Seven-day forecast for one site."""
    site = _require_site(site_id)
    return get_site_forecast(site, DATA_SOURCE, now=_now(), settings=settings)


@router.get("/forecasts/{site_id}/summary", response_model=SiteSummaryResponse)
def site_forecast_summary(site_id: str):
    """Card-ready display strings for one site."""
    site = _require_site(site_id)
    forecast = get_site_forecast(site, DATA_SOURCE, now=_now(), settings=settings)
    return SiteSummaryResponse(site=site, days=site_summary(forecast))
