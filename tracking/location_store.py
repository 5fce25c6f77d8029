#!/usr/bin/env python3
"""
tracking/location_store.py
==========================
In-memory mapping from agent id to its latest :class:`LocationSample`.

Every update replaces the previous record wholesale.  Records that have not
been refreshed within ``STALE_AFTER_MS`` are removed by
:meth:`LocationStore.evict_stale`, which the
:class:`~tracking.sweeper.StalenessSweeper` thread calls periodically.
All operations run under one lock so a sweep never interleaves with a
request half-way through a map operation.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from config import DEFAULT_AGENT_ID, STALE_AFTER_MS


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def normalize_timestamp(value: Any) -> Optional[str]:
    """Convert a client timestamp to an ISO-8601 UTC string.

    Numbers are epoch milliseconds; strings are ISO-8601 (a trailing ``Z``
    is accepted, naive values are taken as UTC).  Anything else, or a value
    that does not parse, yields ``None``.
    """
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            moment = _EPOCH + timedelta(milliseconds=value)
        elif isinstance(value, str):
            text = value.strip()
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            moment = datetime.fromisoformat(text)
            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=timezone.utc)
        else:
            return None
    except (ValueError, OverflowError, OSError):
        return None
    iso = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z")


@dataclass
class LocationSample:
    """Latest position report of one agent.

    Coordinate and speed fields hold whatever the client sent; they are
    not validated here.

    Parameters
    ----------
    id : str
        Agent identifier.
    latitude, longitude : Any
        Degrees, normally ``float``.
    speed : Any
        Metres per second, normally ``float``.
    timestamp : str or None
        Client-reported event time as ISO-8601 UTC, ``None`` if missing or
        unparseable.
    last_updated : int
        Ingestion time in epoch milliseconds (drives eviction).
    """

    id: str
    latitude: Any
    longitude: Any
    speed: Any = None
    timestamp: Optional[str] = None
    last_updated: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "speed": self.speed,
            "timestamp": self.timestamp,
            "lastUpdated": self.last_updated,
        }


class LocationStore:
    """Thread-safe store holding at most one sample per agent id.

    Parameters
    ----------
    clock : callable
        Returns the current time in epoch milliseconds.  Injected by tests.
    """

    def __init__(self, clock: Callable[[], int] = now_ms) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._samples: Dict[str, LocationSample] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)

    def upsert(self, sample: LocationSample) -> None:
        """Insert or wholesale-replace the record for ``sample.id``."""
        with self._lock:
            self._samples[sample.id] = sample

    def report(
        self,
        agent_id: Optional[str],
        latitude: Any,
        longitude: Any,
        speed: Any = None,
        timestamp: Any = None,
    ) -> LocationSample:
        """Build a sample stamped with the ingestion time and upsert it.

        A missing *agent_id* falls back to :data:`config.DEFAULT_AGENT_ID`,
        so every anonymous agent shares one record.
        """
        sample = LocationSample(
            id=agent_id if agent_id is not None else DEFAULT_AGENT_ID,
            latitude=latitude,
            longitude=longitude,
            speed=speed,
            timestamp=normalize_timestamp(timestamp),
            last_updated=self._clock(),
        )
        self.upsert(sample)
        return sample

    def get(self, agent_id: str) -> Optional[LocationSample]:
        with self._lock:
            return self._samples.get(agent_id)

    def delete(self, agent_id: str) -> bool:
        """Remove the record for *agent_id*; ``False`` if it was absent."""
        with self._lock:
            return self._samples.pop(agent_id, None) is not None

    def list_all(self) -> Dict[str, LocationSample]:
        """Point-in-time copy of every record.  Order is not significant."""
        with self._lock:
            return dict(self._samples)

    snapshot = list_all

    def evict_stale(
        self,
        now: Optional[int] = None,
        max_age_ms: int = STALE_AFTER_MS,
    ) -> List[str]:
        """Drop every record last updated more than *max_age_ms* before *now*.

        Returns
        -------
        list[str]
            Ids of the evicted agents.
        """
        if now is None:
            now = self._clock()
        with self._lock:
            expired = [
                agent_id
                for agent_id, sample in self._samples.items()
                if now - sample.last_updated > max_age_ms
            ]
            for agent_id in expired:
                del self._samples[agent_id]
        return expired
