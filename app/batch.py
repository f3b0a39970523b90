"""Batch job: compute forecasts for the launch-site table and write the JSON document.

    python -m app.batch --output public/data/forecast.json
    python -m app.batch --site tollhouse --site mt-vaca --log-level DEBUG
"""
from __future__ import annotations

import argparse
import datetime as dt
from pathlib import Path
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

from app import config
from app.data_sources import ForecastDataSource, build_data_source
from app.domain import ForecastDocument, LaunchSite
from app.forecast_service import get_site_forecasts
from app.launch_sites import LAUNCH_SITES, get_site
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="batch")


def build_parser(settings: config.Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute launch-site flyability forecasts and write them as JSON.")
    parser.add_argument("--output", default=settings.output_path,
                        help=f"Output JSON path (default: {settings.output_path})")
    parser.add_argument("--site", action="append", dest="sites", default=None, metavar="ID",
                        help="Only this site id; repeat for several (default: all sites)")
    parser.add_argument("--log-level", default=settings.log_level,
                        help=f"Logging level (default: {settings.log_level})")
    return parser


def select_sites(site_ids: Optional[Sequence[str]]) -> List[LaunchSite]:
    """Resolve site ids in the order given; raises ValueError naming any unknown id."""
    if not site_ids:
        return list(LAUNCH_SITES)
    unknown = [sid for sid in site_ids if get_site(sid) is None]
    if unknown:
        raise ValueError(f"Unknown site id(s): {', '.join(unknown)}")
    return [get_site(sid) for sid in site_ids]


def build_document(
    sites: Sequence[LaunchSite],
    data_source: ForecastDataSource,
    *,
    now: dt.datetime | None = None,
    settings: config.Settings | None = None,
) -> ForecastDocument:
    """Forecast every site and stamp the document with the generation time."""
    settings = settings or config.settings
    now = now or dt.datetime.now(tz=ZoneInfo(settings.timezone))
    forecasts = get_site_forecasts(sites, data_source, now=now, settings=settings)
    return ForecastDocument(generated=now.isoformat(), forecasts=forecasts)


def write_document(document: ForecastDocument, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document.model_dump_json(by_alias=True, indent=2), encoding="utf-8")


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    data_source: ForecastDataSource | None = None,
    settings: config.Settings | None = None,
) -> int:
    settings = settings or config.settings
    args = build_parser(settings).parse_args(argv)
    setup_logging(level=args.log_level.upper(), job_name="forecast_batch")

    try:
        sites = select_sites(args.sites)
    except ValueError as exc:
        logger.error("Invalid site selection", extra={"error": str(exc)})
        return 2

    source = data_source or build_data_source(settings)
    document = build_document(sites, source, settings=settings)

    output = Path(args.output)
    write_document(document, output)
    logger.info(
        "Wrote forecast document",
        extra={"path": str(output), "site_count": len(document.forecasts)},
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
