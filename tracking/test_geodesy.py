#!/usr/bin/env python3
"""
Tests for the haversine / bearing helpers and the crossing heuristic.
"""

from __future__ import annotations

import math
import unittest

from tracking.geodesy import (
    as_coordinate,
    bearing_deg,
    distance_m,
    is_near,
    trajectories_cross,
)


class DistanceTests(unittest.TestCase):
    def test_distance_is_symmetric(self) -> None:
        pairs = [
            ((12.5, -3.2), (12.51, -3.19)),
            ((-33.86, 151.2), (51.5, -0.12)),
            ((0.0, 179.9), (0.0, -179.9)),
        ]
        for a, b in pairs:
            self.assertAlmostEqual(distance_m(*a, *b), distance_m(*b, *a), places=6)

    def test_distance_to_self_is_zero(self) -> None:
        self.assertEqual(distance_m(40.4168, -3.7038, 40.4168, -3.7038), 0.0)

    def test_fifty_metres_of_latitude_at_equator(self) -> None:
        self.assertAlmostEqual(distance_m(0.0, 0.0, 0.00045, 0.0), 50.0, delta=1.0)

    def test_nan_propagates(self) -> None:
        self.assertTrue(math.isnan(distance_m(math.nan, 0.0, 0.0, 0.0)))

    def test_is_near_uses_inclusive_radius(self) -> None:
        d = distance_m(0.0, 0.0, 0.0004, 0.0)
        self.assertTrue(is_near(0.0, 0.0, 0.0004, 0.0, radius_m=d))
        self.assertFalse(is_near(0.0, 0.0, 0.0005, 0.0))
        self.assertFalse(is_near(math.nan, 0.0, 0.0, 0.0))


class BearingTests(unittest.TestCase):
    def test_cardinal_bearings(self) -> None:
        self.assertAlmostEqual(bearing_deg(0.0, 0.0, 1.0, 0.0), 0.0)
        self.assertAlmostEqual(bearing_deg(0.0, 0.0, 0.0, 1.0), 90.0)
        self.assertAlmostEqual(bearing_deg(0.0, 0.0, -1.0, 0.0), 180.0)
        self.assertAlmostEqual(bearing_deg(0.0, 0.0, 0.0, -1.0), 270.0)

    def test_bearing_always_in_range(self) -> None:
        steps = [-1.0, -1e-9, 0.0, 1e-9, 0.5, 1.0]
        for dlat in steps:
            for dlon in steps:
                b = bearing_deg(10.0, 20.0, 10.0 + dlat, 20.0 + dlon)
                self.assertGreaterEqual(b, 0.0)
                self.assertLess(b, 360.0)


class CrossingTests(unittest.TestCase):
    def test_perpendicular_paths_cross(self) -> None:
        self.assertTrue(trajectories_cross(0.0, 90.0))
        self.assertTrue(trajectories_cross(0.0, 270.0))
        self.assertTrue(trajectories_cross(10.0, 300.0))

    def test_parallel_and_opposite_paths_do_not_cross(self) -> None:
        self.assertFalse(trajectories_cross(90.0, 90.0))
        self.assertFalse(trajectories_cross(90.0, 270.0))
        self.assertFalse(trajectories_cross(10.0, 350.0))

    def test_window_bounds_are_exclusive(self) -> None:
        for diff in (45.0, 135.0, 225.0, 315.0):
            self.assertFalse(trajectories_cross(0.0, diff), msg=f"diff={diff}")

    def test_predicate_is_symmetric(self) -> None:
        angles = [0.0, 30.0, 46.0, 90.0, 134.0, 180.0, 226.0, 270.0, 314.0, 359.0]
        for a in angles:
            for b in angles:
                self.assertEqual(trajectories_cross(a, b), trajectories_cross(b, a))


class CoordinateCoercionTests(unittest.TestCase):
    def test_numbers_and_numeric_strings(self) -> None:
        self.assertEqual(as_coordinate(12), 12.0)
        self.assertEqual(as_coordinate(-3.5), -3.5)
        self.assertEqual(as_coordinate("40.25"), 40.25)

    def test_garbage_becomes_nan(self) -> None:
        for value in (None, "abc", True, [1.0], {"lat": 1}, float("inf"), "inf"):
            self.assertTrue(math.isnan(as_coordinate(value)), msg=repr(value))


if __name__ == "__main__":
    unittest.main()
