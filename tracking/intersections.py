#!/usr/bin/env python3
"""
tracking/intersections.py
=========================
Insertion-ordered registry of fixed signalled points.

Order matters: when an agent is within range of several intersections the
signal engine picks the first-created one still present.  Ids come from a
monotonic counter and are never reused, even after a deletion.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .errors import InvalidArgument
from .location_store import now_ms


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Intersection:
    """A signalled point.

    Parameters
    ----------
    id : int
        Unique, strictly increasing identifier.
    latitude, longitude : float
        Position in degrees.
    created_at : int
        Creation time in epoch milliseconds.
    """

    id: int
    latitude: float
    longitude: float
    created_at: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "createdAt": self.created_at,
        }


class IntersectionRegistry:
    """Thread-safe, creation-ordered collection of :class:`Intersection`."""

    def __init__(self, clock: Callable[[], int] = now_ms) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._items: List[Intersection] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def create(self, latitude: Any, longitude: Any) -> Intersection:
        """Append a new intersection.

        Raises
        ------
        InvalidArgument
            If either coordinate is missing or not a number.
        """
        if not (_is_number(latitude) and _is_number(longitude)):
            raise InvalidArgument("latitude and longitude must both be numbers")
        with self._lock:
            item = Intersection(
                id=next(self._ids),
                latitude=float(latitude),
                longitude=float(longitude),
                created_at=self._clock(),
            )
            self._items.append(item)
        return item

    def delete(self, intersection_id: int) -> bool:
        """Remove the intersection with *intersection_id*; ``False`` if absent."""
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == intersection_id:
                    del self._items[index]
                    return True
        return False

    def list_all(self) -> List[Intersection]:
        """Copy of every intersection in creation order."""
        with self._lock:
            return list(self._items)

    snapshot = list_all
