#!/usr/bin/env python3
"""
tracking/geodesy.py
===================
Spherical-earth helpers used by :mod:`tracking.signal_engine`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.  Every function is pure; NaN inputs propagate as
NaN instead of raising.
"""

from __future__ import annotations

import math
from typing import Any, Sequence, Tuple

from config import EARTH_RADIUS_M, PROXIMITY_RADIUS_M

# Bearing differences inside these open intervals count as crossing paths.
CROSSING_WINDOWS_DEG: Tuple[Tuple[float, float], ...] = (
    (45.0, 135.0),
    (225.0, 315.0),
)


def as_coordinate(value: Any) -> float:
    """Coerce a stored raw value to float, mapping garbage to NaN.

    Location samples are stored exactly as received, so latitude and
    longitude may be ``None``, a numeric string or something else entirely.
    Numeric strings are parsed; booleans, infinities and anything
    unparseable become NaN.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return math.nan
    try:
        result = float(value)
    except (ValueError, OverflowError):
        return math.nan
    return result if math.isfinite(result) else math.nan


def distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres (haversine formula).

    Parameters
    ----------
    lat1, lon1 : float
        First point in degrees.
    lat2, lon2 : float
        Second point in degrees.

    Returns
    -------
    float
        Distance on a sphere of radius :data:`config.EARTH_RADIUS_M`.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    )
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial compass bearing from point 1 towards point 2, in ``[0, 360)``."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_lambda = math.radians(lon2 - lon1)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = (
        math.cos(phi1) * math.sin(phi2)
        - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)
    )
    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # a tiny negative angle rounds up to exactly 360.0
    if bearing >= 360.0:
        return 0.0
    return bearing


def is_near(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    radius_m: float = PROXIMITY_RADIUS_M,
) -> bool:
    """True when the two points are at most *radius_m* apart."""
    return distance_m(lat1, lon1, lat2, lon2) <= radius_m


def trajectories_cross(
    bearing_a: float,
    bearing_b: float,
    windows: Sequence[Tuple[float, float]] = CROSSING_WINDOWS_DEG,
) -> bool:
    """Classify two approach bearings as crossing (roughly perpendicular).

    Near-parallel (difference close to 0 or 360) and near-opposite
    (difference close to 180) approaches are not crossing.
    """
    diff = abs(bearing_a - bearing_b)
    return any(low < diff < high for low, high in windows)
