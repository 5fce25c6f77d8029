#!/usr/bin/env python3
"""
tracking/sweeper.py
===================
Background thread that periodically evicts stale agents from a
:class:`~tracking.location_store.LocationStore`.

The sweep runs independently of request handling.  The store's lock is
the only coordination between the two; a request and a concurrent sweep
may be observed in either order.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from config import STALE_AFTER_MS, SWEEP_INTERVAL_S

from .location_store import LocationStore

log = logging.getLogger("sweeper")


class StalenessSweeper:
    """Evicts agents not updated within ``max_age_ms`` every ``interval_s``.

    Parameters
    ----------
    store : LocationStore
        Store to sweep.
    interval_s : float
        Seconds between sweeps.
    max_age_ms : int
        Records older than this (relative to the store clock) are removed.
    """

    def __init__(
        self,
        store: LocationStore,
        interval_s: float = SWEEP_INTERVAL_S,
        max_age_ms: int = STALE_AFTER_MS,
    ) -> None:
        self._store = store
        self._interval_s = interval_s
        self._max_age_ms = max_age_ms
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the background sweep thread."""
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, daemon=True, name="StalenessSweeper"
        )
        self._thread.start()
        log.info(
            "Sweeper started (every %.1f s, max age %d ms)",
            self._interval_s, self._max_age_ms,
        )

    def stop(self) -> None:
        """Signal the thread to stop and wait for it to join."""
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None
            log.info("Sweeper stopped")

    # ── Sweep ─────────────────────────────────────────────────────────────────

    def sweep_once(self, now: Optional[int] = None) -> List[str]:
        """Run one eviction pass and return the evicted agent ids."""
        evicted = self._store.evict_stale(now=now, max_age_ms=self._max_age_ms)
        for agent_id in evicted:
            log.info("Evicted stale agent %s", agent_id)
        return evicted

    def _loop(self) -> None:
        while not self._stop.wait(self._interval_s):
            try:
                self.sweep_once()
            except Exception:
                log.exception("Sweeper pass error")
