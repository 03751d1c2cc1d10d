"""
In-process memoization of subdivision scenarios.

Keys are the parcel dimensions rounded to 3 decimals ("50.000_30.000"), which
is the generator's only input, so entries never go stale on their own.  The
owning application calls ``clear`` (or ``invalidate``) if that ever changes.
No eviction: entries are small and the key space is tiny in practice.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from microvillas.models.schemas import LandParcel, SubdivisionScenario

logger = logging.getLogger(__name__)

ScenarioList = list[SubdivisionScenario]


def make_key(width: float, height: float) -> str:
    """Build a cache key from parcel dimensions."""
    return f"{width:.3f}_{height:.3f}"


class ScenarioCache:
    """Dimension-keyed scenario store.

    ``get_or_compute`` serializes on a per-key lock: concurrent requests for
    the same parcel compute it once, while different parcels compute in
    parallel.
    """

    def __init__(self):
        self._entries: dict[str, ScenarioList] = {}
        self._lock = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, land: LandParcel) -> bool:
        return make_key(land.width, land.height) in self._entries

    def get(self, land: LandParcel) -> Optional[ScenarioList]:
        """Cached scenarios for this parcel, or None on miss."""
        return self._entries.get(make_key(land.width, land.height))

    def set(self, land: LandParcel, scenarios: ScenarioList) -> None:
        with self._lock:
            self._entries[make_key(land.width, land.height)] = scenarios

    def get_or_compute(
        self,
        land: LandParcel,
        compute: Callable[[LandParcel], ScenarioList],
    ) -> ScenarioList:
        key = make_key(land.width, land.height)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                logger.debug("Scenario cache hit for %s", key)
                return cached
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            # Another request may have filled the entry while we waited.
            with self._lock:
                cached = self._entries.get(key)
            if cached is not None:
                logger.debug("Scenario cache hit for %s", key)
                return cached

            logger.debug("Scenario cache miss for %s", key)
            scenarios = compute(land)
            with self._lock:
                self._entries[key] = scenarios
            return scenarios

    def invalidate(self, land: LandParcel) -> bool:
        """Drop one parcel's entry. Returns True if it was present."""
        with self._lock:
            return self._entries.pop(make_key(land.width, land.height), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._key_locks.clear()


# ──────────────────────────────────────────────────────────────────
# PROCESS DEFAULT
# ──────────────────────────────────────────────────────────────────

scenario_cache = ScenarioCache()


def get_cached_scenarios(land: LandParcel) -> Optional[ScenarioList]:
    return scenario_cache.get(land)


def set_cached_scenarios(land: LandParcel, scenarios: ScenarioList) -> None:
    scenario_cache.set(land, scenarios)


def clear_subdivision_cache() -> None:
    """Clear the process-wide scenario cache."""
    scenario_cache.clear()
