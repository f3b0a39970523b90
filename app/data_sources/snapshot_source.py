"""Offline data source replaying saved Open-Meteo responses from disk.

Files are named ``<site_id>-<model>.json`` (``tollhouse-hrrr.json``) and hold
the raw JSON body Open-Meteo returned.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from app.data_sources.base import ModelRun
from app.data_sources.open_meteo_client import DEFAULT_TIMEZONE, parse_hourly_payload
from app.domain import ForecastModel, LaunchSite
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/snapshot")


class SnapshotForecastDataSource:
    """Read model runs from a directory of saved responses."""

    def __init__(self, directory: Path, *, timezone: str = DEFAULT_TIMEZONE) -> None:
        self.directory = Path(directory)
        self.timezone = timezone

    @classmethod
    def from_dir(cls, directory: str | Path, *, timezone: str = DEFAULT_TIMEZONE) -> "SnapshotForecastDataSource":
        """Validate the directory exists before building the source."""
        path = Path(directory)
        if not path.is_dir():
            raise ValueError(f"Snapshot directory '{path}' does not exist")
        return cls(path, timezone=timezone)

    def snapshot_path(self, site: LaunchSite, model: ForecastModel) -> Path:
        return self.directory / f"{site.id}-{model.value}.json"

    def fetch_model_run(self, site: LaunchSite, model: ForecastModel) -> Optional[ModelRun]:
        path = self.snapshot_path(site, model)
        if not path.is_file():
            logger.info("No snapshot for site/model", extra={"site": site.id, "model": model.value})
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            samples = parse_hourly_payload(payload, model, timezone=self.timezone)
        except (OSError, ValueError) as exc:
            logger.error(
                "Unreadable snapshot",
                extra={"site": site.id, "model": model.value, "path": str(path), "error": str(exc)},
            )
            return None
        return ModelRun(model=model, samples=samples)
