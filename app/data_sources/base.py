"""Interfaces and helpers for forecast data sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from app.data_sources.open_meteo_client import HourlySample
from app.domain import ForecastModel, LaunchSite


@dataclass
class ModelRun:
    """Hourly samples from one model run, tagged with the model that produced them."""
    model: ForecastModel
    samples: List[HourlySample] = field(default_factory=list)

    @property
    def provides_instability(self) -> bool:
        return self.model.provides_instability


class ForecastDataSource(Protocol):
    """Interface for anything that can provide model runs for a launch site."""

    def fetch_model_run(self, site: LaunchSite, model: ForecastModel) -> Optional[ModelRun]:
        """Return the model run for ``site``, or None when no data is available."""
        ...


@dataclass
class CallableForecastDataSource(ForecastDataSource):
    """Wrap a callable so tests and alternative backends can stand in for Open-Meteo."""

    model_run: Callable[[LaunchSite, ForecastModel], Optional[ModelRun]]

    def fetch_model_run(self, site: LaunchSite, model: ForecastModel) -> Optional[ModelRun]:
        """Delegate to the configured callable."""
        return self.model_run(site, model)
