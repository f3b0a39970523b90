"""Time-boxed response cache and upstream call spacing."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional

from app.app_types import CachedResponse
from app.domain import ForecastModel, LaunchSite
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/cache")

Clock = Callable[[], float]


def cache_key(site: LaunchSite, model: ForecastModel) -> str:
    """Rounded coordinates plus the model tag, e.g. ``36.9920,-119.3950-hrrr``."""
    return f"{site.latitude:.4f},{site.longitude:.4f}-{model.value}"


class ResponseCache:
    """
    TTL-aware map of raw responses; expired entries stay as a stale fallback.

    Access goes through a lock because the API's sync handlers run on FastAPI's
    worker threads and share one data source.
    """

    def __init__(self, ttl_seconds: float = 3600, clock: Clock = time.monotonic) -> None:
        self.ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CachedResponse] = {}
        self._lock = threading.Lock()

    def _is_fresh(self, entry: CachedResponse) -> bool:
        return self._clock() - entry.fetched_at < self.ttl

    def get_fresh(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the payload if it was stored less than ``ttl`` seconds ago."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not self._is_fresh(entry):
                return None
            return entry.data

    def get_any(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the payload regardless of age (used when the upstream call fails)."""
        with self._lock:
            entry = self._entries.get(key)
            return entry.data if entry else None

    def set(self, key: str, data: Dict[str, Any]) -> None:
        """Store a payload stamped with the current clock reading."""
        with self._lock:
            self._entries[key] = CachedResponse(data=data, fetched_at=self._clock())

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RequestThrottle:
    """
    Delay-before-call discipline: consecutive calls are at least ``min_interval`` apart.

    Shared across API worker threads, so the spacing check and the timestamp
    update happen under one lock.
    """

    def __init__(
        self,
        min_interval: float = 0.15,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None
        self._lock = threading.Lock()

    def wait(self) -> float:
        """Sleep if the previous call was too recent; return the time slept."""
        with self._lock:
            slept = 0.0
            if self._last_call is not None:
                elapsed = self._clock() - self._last_call
                if elapsed < self.min_interval:
                    slept = self.min_interval - elapsed
                    logger.debug("Throttling upstream call", extra={"sleep_seconds": round(slept, 3)})
                    self._sleep(slept)
            self._last_call = self._clock()
            return slept
