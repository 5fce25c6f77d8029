#!/usr/bin/env python3
"""
tracking/signal_engine.py
=========================
Derives a per-agent signal colour from one snapshot of the
:class:`~tracking.location_store.LocationStore` and the
:class:`~tracking.intersections.IntersectionRegistry`.

Decision procedure for one agent:

1. Find intersections within the proximity radius of the agent.  None
   → ``none``.
2. Take the *first* of them in registry order (not the closest).
3. Collect the other agents within the radius of that intersection.
   None → ``green``.
4. Compare the agent's bearing towards the intersection with each other
   agent's bearing towards it.  The first crossing pair → ``red``;
   otherwise ``green``.

The engine is read-only and never logs; the only failure is
:class:`~tracking.errors.NotFound` for an unknown agent.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from config import PROXIMITY_RADIUS_M

from .errors import NotFound
from .geodesy import (
    CROSSING_WINDOWS_DEG,
    as_coordinate,
    bearing_deg,
    is_near,
    trajectories_cross,
)
from .intersections import Intersection, IntersectionRegistry
from .location_store import LocationSample, LocationStore


class SignalColor(str, Enum):
    """Signal shown to an agent."""
    GREEN = "green"
    RED = "red"
    NONE = "none"


@dataclass(frozen=True)
class SignalPolicy:
    """Tunable thresholds of the conflict heuristic."""

    proximity_radius_m: float = PROXIMITY_RADIUS_M
    """An agent is *at* an intersection within this distance."""

    crossing_windows_deg: Tuple[Tuple[float, float], ...] = CROSSING_WINDOWS_DEG
    """Open bearing-difference intervals classified as crossing paths."""


def _position(sample: LocationSample) -> Tuple[float, float]:
    return as_coordinate(sample.latitude), as_coordinate(sample.longitude)


def evaluate(
    agent_id: str,
    locations: Mapping[str, LocationSample],
    intersections: Sequence[Intersection],
    policy: Optional[SignalPolicy] = None,
) -> SignalColor:
    """Signal colour for *agent_id* against explicit snapshots.

    Parameters
    ----------
    agent_id : str
        Agent to evaluate.
    locations : mapping
        Agent id → latest sample.
    intersections : sequence
        Intersections in registry order.
    policy : SignalPolicy or None
        Thresholds; defaults to :class:`SignalPolicy()`.

    Raises
    ------
    NotFound
        If *agent_id* has no sample in *locations*.
    """
    policy = policy or SignalPolicy()
    radius = policy.proximity_radius_m

    sample = locations.get(agent_id)
    if sample is None:
        raise NotFound(f"no location for agent {agent_id!r}")
    lat, lon = _position(sample)

    target = next(
        (
            node for node in intersections
            if is_near(lat, lon, node.latitude, node.longitude, radius)
        ),
        None,
    )
    if target is None:
        return SignalColor.NONE

    others = []
    for other_id, other in locations.items():
        if other_id == agent_id:
            continue
        o_lat, o_lon = _position(other)
        if is_near(o_lat, o_lon, target.latitude, target.longitude, radius):
            others.append((o_lat, o_lon))
    if not others:
        return SignalColor.GREEN

    own_bearing = bearing_deg(lat, lon, target.latitude, target.longitude)
    for o_lat, o_lon in others:
        other_bearing = bearing_deg(o_lat, o_lon, target.latitude, target.longitude)
        if trajectories_cross(own_bearing, other_bearing, policy.crossing_windows_deg):
            return SignalColor.RED
    return SignalColor.GREEN


class SignalEngine:
    """Read-side facade over the two stores.

    Each call takes one snapshot of both stores and evaluates against it,
    so a concurrent sweep or update cannot change the inputs half-way.

    Parameters
    ----------
    locations : LocationStore
    intersections : IntersectionRegistry
    policy : SignalPolicy or None
    """

    def __init__(
        self,
        locations: LocationStore,
        intersections: IntersectionRegistry,
        policy: Optional[SignalPolicy] = None,
    ) -> None:
        self._locations = locations
        self._intersections = intersections
        self.policy = policy or SignalPolicy()

    def _snapshot(self) -> Tuple[Dict[str, LocationSample], List[Intersection]]:
        return self._locations.snapshot(), self._intersections.snapshot()

    def color_for(self, agent_id: str) -> SignalColor:
        """Signal colour for one agent; raises :class:`NotFound` if unknown."""
        locations, intersections = self._snapshot()
        return evaluate(agent_id, locations, intersections, self.policy)

    def color_for_all(self) -> Dict[str, SignalColor]:
        """Signal colour for every tracked agent, keyed by agent id."""
        locations, intersections = self._snapshot()
        return {
            agent_id: evaluate(agent_id, locations, intersections, self.policy)
            for agent_id in locations
        }
