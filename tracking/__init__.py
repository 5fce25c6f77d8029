"""
tracking — Agent tracking and conflict signalling core
======================================================

Modules
-------
geodesy
    Haversine distance, initial bearing and the crossing heuristic.
location_store
    :class:`LocationStore` latest sample per agent, with staleness eviction.
intersections
    :class:`IntersectionRegistry` insertion-ordered fixed points.
signal_engine
    :class:`SignalEngine` green / red / none decision per agent.
sweeper
    :class:`StalenessSweeper` background eviction thread.
errors
    :class:`InvalidArgument` and :class:`NotFound` conditions.
"""

from .errors import TrackingError, InvalidArgument, NotFound
from .location_store import LocationSample, LocationStore
from .intersections import Intersection, IntersectionRegistry
from .signal_engine import SignalColor, SignalPolicy, SignalEngine
from .sweeper import StalenessSweeper

__all__ = [
    "TrackingError",
    "InvalidArgument",
    "NotFound",
    "LocationSample",
    "LocationStore",
    "Intersection",
    "IntersectionRegistry",
    "SignalColor",
    "SignalPolicy",
    "SignalEngine",
    "StalenessSweeper",
]
