"""Shared dataclasses and lightweight types used across modules."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class CachedResponse:
    """Raw Open-Meteo payload with the clock reading at which it was fetched."""
    data: Dict[str, Any]
    fetched_at: float
