#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (read once, at import
time).  This module is a thin, import-safe leaf: it never imports from
other project packages.
"""

import os


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


# ── Geodesy ──────────────────────────────────────────────────────────────────
EARTH_RADIUS_M: float = 6_371_000.0
PROXIMITY_RADIUS_M: float = _env_float("SIGNAL_PROXIMITY_RADIUS_M", 50.0)

# ── Location store ───────────────────────────────────────────────────────────
DEFAULT_AGENT_ID: str = "unnamed"
STALE_AFTER_MS: int = _env_int("SIGNAL_STALE_AFTER_MS", 60_000)
SWEEP_INTERVAL_S: float = _env_float("SIGNAL_SWEEP_INTERVAL_S", 30.0)

# ── HTTP server ──────────────────────────────────────────────────────────────
HOST: str = os.environ.get("HOST", "0.0.0.0")
PORT: int = _env_int("PORT", 3000)

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FILE: str = os.environ.get("SIGNAL_LOG_FILE", "signal_server.log")
