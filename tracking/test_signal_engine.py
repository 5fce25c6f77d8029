#!/usr/bin/env python3
"""
Scenario tests for the signal engine (green / red / none decisions).
"""

from __future__ import annotations

import unittest

from tracking.errors import NotFound
from tracking.intersections import IntersectionRegistry
from tracking.location_store import LocationStore
from tracking.signal_engine import SignalColor, SignalEngine, SignalPolicy, evaluate


class SignalEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.locations = LocationStore()
        self.intersections = IntersectionRegistry()
        self.engine = SignalEngine(self.locations, self.intersections)

    def _place(self, agent_id: str, lat: float, lon: float) -> None:
        self.locations.report(agent_id, lat, lon, speed=5.0)

    def test_unknown_agent_raises_not_found(self) -> None:
        with self.assertRaises(NotFound):
            self.engine.color_for("ghost")

    def test_reported_then_deleted_agent_is_not_found(self) -> None:
        self._place("X", 0.0, 0.0)
        self.assertTrue(self.locations.delete("X"))
        with self.assertRaises(NotFound):
            self.engine.color_for("X")

    def test_agent_far_from_every_intersection_gets_none(self) -> None:
        self.intersections.create(0.0, 0.0)
        self.intersections.create(0.0, 0.001)
        self._place("far", 0.0005, 0.0005)
        self._place("farther", 1.0, 1.0)
        self.assertEqual(self.engine.color_for("far"), SignalColor.NONE)
        self.assertEqual(self.engine.color_for("farther"), SignalColor.NONE)

    def test_no_intersections_means_none(self) -> None:
        self._place("solo", 0.0, 0.0)
        self.assertEqual(self.engine.color_for("solo"), SignalColor.NONE)

    def test_alone_at_intersection_gets_green(self) -> None:
        self.intersections.create(0.0, 0.0)
        self._place("solo", 0.0001, 0.0)
        self._place("elsewhere", 0.01, 0.01)
        self.assertEqual(self.engine.color_for("solo"), SignalColor.GREEN)

    def test_opposite_approaches_both_green(self) -> None:
        # Alice heads east (90°) and Bob heads west (270°) into the same point.
        self.intersections.create(0.0, 0.0001)
        self._place("Alice", 0.0, 0.0)
        self._place("Bob", 0.0, 0.0002)

        self.assertEqual(self.engine.color_for("Alice"), SignalColor.GREEN)
        self.assertEqual(self.engine.color_for("Bob"), SignalColor.GREEN)

    def test_parallel_approaches_both_green(self) -> None:
        self.intersections.create(0.0, 0.0)
        self._place("lead", -0.0001, 0.0)
        self._place("follower", -0.0003, 0.0)
        self.assertEqual(self.engine.color_for("lead"), SignalColor.GREEN)
        self.assertEqual(self.engine.color_for("follower"), SignalColor.GREEN)

    def test_perpendicular_approaches_both_red(self) -> None:
        # bearings 0° (from the south) and 90° (from the west)
        self.intersections.create(0.0, 0.0)
        self._place("north_bound", -0.0002, 0.0)
        self._place("east_bound", 0.0, -0.0002)

        self.assertEqual(self.engine.color_for("north_bound"), SignalColor.RED)
        self.assertEqual(self.engine.color_for("east_bound"), SignalColor.RED)

    def test_diagonal_approach_against_straight_one_is_red(self) -> None:
        # Bob approaches from the north-east (~206.6°), Alice from the west (90°).
        self.intersections.create(0.0, 0.0001)
        self._place("Alice", 0.0, 0.0)
        self._place("Bob", 0.0002, 0.0002)

        self.assertEqual(self.engine.color_for("Alice"), SignalColor.RED)
        self.assertEqual(self.engine.color_for("Bob"), SignalColor.RED)

    def test_any_crossing_agent_turns_signal_red(self) -> None:
        self.intersections.create(0.0, 0.0)
        self._place("me", -0.0002, 0.0)
        self._place("opposite", 0.0002, 0.0)
        self._place("crossing", 0.0, 0.0002)
        self.assertEqual(self.engine.color_for("me"), SignalColor.RED)

    def test_first_created_nearby_intersection_wins_over_closest(self) -> None:
        first = self.intersections.create(0.0, 0.0004)   # ~44 m from A
        self.intersections.create(0.0, 0.00001)          # ~1 m from A
        self._place("A", 0.0, 0.0)
        self._place("B", 0.0003, 0.00001)                # only near the second

        # A is judged at the first intersection, where nobody else is.
        self.assertEqual(self.engine.color_for("A"), SignalColor.GREEN)
        # B only sees the second one, where A crosses its path.
        self.assertEqual(self.engine.color_for("B"), SignalColor.RED)

        self.intersections.delete(first.id)
        self.assertEqual(self.engine.color_for("A"), SignalColor.RED)

    def test_malformed_sample_never_counts_as_near(self) -> None:
        self.intersections.create(0.0, 0.0)
        self.locations.report("broken", "north", None, speed="fast")
        self._place("ok", -0.0001, 0.0)

        self.assertEqual(self.engine.color_for("broken"), SignalColor.NONE)
        self.assertEqual(self.engine.color_for("ok"), SignalColor.GREEN)

    def test_custom_radius_policy(self) -> None:
        self.intersections.create(0.0, 0.0)
        self._place("near_ish", 0.0008, 0.0)   # ~89 m
        wide = SignalEngine(
            self.locations, self.intersections, SignalPolicy(proximity_radius_m=100.0)
        )
        self.assertEqual(self.engine.color_for("near_ish"), SignalColor.NONE)
        self.assertEqual(wide.color_for("near_ish"), SignalColor.GREEN)

    def test_color_for_all_matches_single_queries(self) -> None:
        self.intersections.create(0.0, 0.0)
        self.intersections.create(0.01, 0.01)
        self._place("n", -0.0002, 0.0)
        self._place("e", 0.0, -0.0002)
        self._place("lonely", 0.01, 0.0101)
        self._place("lost", 5.0, 5.0)

        everything = self.engine.color_for_all()

        self.assertEqual(
            everything,
            {agent_id: self.engine.color_for(agent_id) for agent_id in everything},
        )
        self.assertEqual(
            everything,
            {
                "n": SignalColor.RED,
                "e": SignalColor.RED,
                "lonely": SignalColor.GREEN,
                "lost": SignalColor.NONE,
            },
        )
        self.assertEqual(self.engine.color_for_all(), everything)

    def test_evaluate_does_not_mutate_snapshots(self) -> None:
        self.intersections.create(0.0, 0.0)
        self._place("a", -0.0002, 0.0)
        self._place("b", 0.0, -0.0002)
        locations = self.locations.list_all()
        intersections = self.intersections.list_all()

        evaluate("a", locations, intersections)

        self.assertEqual(locations, self.locations.list_all())
        self.assertEqual(intersections, self.intersections.list_all())


if __name__ == "__main__":
    unittest.main()
