"""
Tests for the geometry kernel predicates.
"""

import unittest

from geogrid.config import EPSILON
from geogrid.kernel import (
    DegenerateLineError,
    Line,
    LineType,
    Point,
    check_constraint,
    clip_to_grid,
    line_intersect,
    lines_equal,
    points_equal,
)


def seg(x1, y1, x2, y2, kind=LineType.SEGMENT):
    return Line(Point(x1, y1), Point(x2, y2), type=kind)


class TestPointsEqual(unittest.TestCase):
    """Epsilon point equality."""

    def test_reflexive(self):
        p = Point(2.5, 3.25)
        self.assertTrue(points_equal(p, p))

    def test_symmetric(self):
        a = Point(1.0, 1.0)
        b = Point(1.0 + EPSILON / 2, 1.0 - EPSILON / 2)
        self.assertTrue(points_equal(a, b))
        self.assertTrue(points_equal(b, a))

    def test_two_epsilon_apart_is_different(self):
        a = Point(1.0, 1.0)
        b = Point(1.0 + 2 * EPSILON, 1.0)
        self.assertFalse(points_equal(a, b))
        self.assertFalse(points_equal(b, a))

    def test_ids_are_ignored(self):
        self.assertTrue(points_equal(Point(3, 4, id="a"), Point(3, 4, id="b")))

    def test_accepts_tuples(self):
        self.assertTrue(points_equal(Point(3, 4), (3.0, 4.0)))


class TestCheckConstraint(unittest.TestCase):
    """Parameter ranges per line type."""

    def test_segment_range(self):
        self.assertTrue(check_constraint(0.0, LineType.SEGMENT))
        self.assertTrue(check_constraint(1.0, LineType.SEGMENT))
        self.assertTrue(check_constraint(-EPSILON / 2, LineType.SEGMENT))
        self.assertTrue(check_constraint(1 + EPSILON / 2, LineType.SEGMENT))
        self.assertFalse(check_constraint(-2 * EPSILON, LineType.SEGMENT))
        self.assertFalse(check_constraint(1.5, LineType.SEGMENT))

    def test_ray_range(self):
        self.assertTrue(check_constraint(100.0, LineType.RAY))
        self.assertFalse(check_constraint(-0.01, LineType.RAY))

    def test_line_unconstrained(self):
        self.assertTrue(check_constraint(-100.0, LineType.LINE))
        self.assertTrue(check_constraint(100.0, LineType.LINE))

    def test_missing_type_is_segment(self):
        self.assertFalse(check_constraint(2.0, None))
        self.assertTrue(check_constraint(0.5, None))


class TestLineIntersect(unittest.TestCase):
    """Type-aware intersection."""

    def test_crossing_segments(self):
        p = line_intersect(seg(0, 0, 2, 2), seg(0, 2, 2, 0))
        self.assertIsNotNone(p)
        self.assertTrue(points_equal(p, (1, 1)))
        self.assertTrue(p.is_intersection)

    def test_ray_toward_segment(self):
        ray = seg(0, 0, 1, 1, LineType.RAY)
        p = line_intersect(ray, seg(0, 2, 2, 0))
        self.assertIsNotNone(p)
        self.assertTrue(points_equal(p, (1, 1)))

    def test_ray_pointing_away(self):
        ray = seg(1.5, 1.5, 2.5, 2.5, LineType.RAY)
        self.assertIsNone(line_intersect(ray, seg(0, 2, 2, 0)))

    def test_short_segment_misses(self):
        self.assertIsNone(line_intersect(seg(0, 0, 0.5, 0.5), seg(0, 2, 2, 0)))

    def test_segment_endpoint_touch(self):
        p = line_intersect(seg(0, 0, 1, 1), seg(0, 2, 2, 0))
        self.assertIsNotNone(p)
        self.assertTrue(points_equal(p, (1, 1)))

    def test_parallel_segments(self):
        self.assertIsNone(line_intersect(seg(0, 0, 2, 0), seg(0, 1, 2, 1)))

    def test_collinear_segments(self):
        """Overlapping collinear segments never report a point."""
        self.assertIsNone(line_intersect(seg(0, 0, 2, 0), seg(1, 0, 3, 0)))

    def test_lines_meeting_outside_grid(self):
        a = seg(0, 5, 1, 6, LineType.LINE)
        b = seg(5, 6, 6, 5, LineType.LINE)
        self.assertIsNone(line_intersect(a, b))
        p = line_intersect(a, b, grid_size=10)
        self.assertIsNotNone(p)
        self.assertTrue(points_equal(p, (3, 8)))

    def test_line_extends_past_defining_points(self):
        a = seg(0, 0, 1, 0, LineType.LINE)
        b = seg(4, 1, 4, 2, LineType.LINE)
        p = line_intersect(a, b)
        self.assertTrue(points_equal(p, (4, 0)))


class TestLinesEqual(unittest.TestCase):
    """Goal-matching line equality."""

    def test_segment_order_invariant(self):
        self.assertTrue(lines_equal(seg(0, 0, 3, 3), seg(3, 3, 0, 0)))

    def test_segment_different_endpoints(self):
        self.assertFalse(lines_equal(seg(0, 0, 3, 3), seg(0, 0, 6, 6)))

    def test_reversed_ray_differs(self):
        self.assertFalse(lines_equal(
            seg(0, 0, 3, 3, LineType.RAY), seg(3, 3, 0, 0, LineType.RAY)
        ))

    def test_ray_same_direction_other_through_point(self):
        self.assertTrue(lines_equal(
            seg(0, 0, 1, 1, LineType.RAY), seg(0, 0, 3, 3, LineType.RAY)
        ))

    def test_ray_opposite_direction_same_origin(self):
        self.assertFalse(lines_equal(
            seg(2, 2, 3, 3, LineType.RAY), seg(2, 2, 1, 1, LineType.RAY)
        ))

    def test_line_any_two_points(self):
        self.assertTrue(lines_equal(
            seg(0, 0, 1, 1, LineType.LINE), seg(5, 5, 2, 2, LineType.LINE)
        ))

    def test_parallel_lines_differ(self):
        self.assertFalse(lines_equal(
            seg(0, 0, 1, 1, LineType.LINE), seg(0, 1, 1, 2, LineType.LINE)
        ))

    def test_type_must_match(self):
        self.assertFalse(lines_equal(seg(0, 0, 6, 6), seg(0, 0, 6, 6, LineType.LINE)))


class TestClipToGrid(unittest.TestCase):
    """Slab clipping of extensions."""

    def test_line_spans_grid(self):
        start, end = clip_to_grid(Point(1, 1), Point(2, 2), LineType.LINE)
        self.assertTrue(points_equal(start, (0, 0)))
        self.assertTrue(points_equal(end, (6, 6)))

    def test_ray_starts_at_origin(self):
        start, end = clip_to_grid(Point(1, 1), Point(2, 2), LineType.RAY)
        self.assertTrue(points_equal(start, (1, 1)))
        self.assertTrue(points_equal(end, (6, 6)))

    def test_segment_keeps_endpoints(self):
        start, end = clip_to_grid(Point(1, 1), Point(2, 2), LineType.SEGMENT)
        self.assertTrue(points_equal(start, (1, 1)))
        self.assertTrue(points_equal(end, (2, 2)))

    def test_horizontal_line(self):
        start, end = clip_to_grid(Point(1, 3), Point(2, 3), LineType.LINE)
        self.assertTrue(points_equal(start, (0, 3)))
        self.assertTrue(points_equal(end, (6, 3)))

    def test_parallel_outside_collapses(self):
        p1 = Point(1, -1)
        start, end = clip_to_grid(p1, Point(2, -1), LineType.LINE)
        self.assertIs(start, p1)
        self.assertIs(end, p1)


class TestPrimitives(unittest.TestCase):
    """Value types."""

    def test_zero_length_line_rejected(self):
        with self.assertRaises(DegenerateLineError):
            Line(Point(2, 2), Point(2, 2))
        with self.assertRaises(ValueError):
            Line(Point(2, 2), Point(2 + EPSILON / 2, 2))

    def test_line_type_coercion(self):
        self.assertEqual(LineType.coerce(None), LineType.SEGMENT)
        self.assertEqual(LineType.coerce("ray"), LineType.RAY)
        self.assertEqual(Line(Point(0, 0), Point(1, 0), type="LINE").type, LineType.LINE)
        with self.assertRaises(ValueError):
            LineType.coerce("circle")

    def test_line_round_trip_shape(self):
        d = {"p1": {"x": 0, "y": 1}, "p2": {"x": 2, "y": 3}, "type": "RAY"}
        line = Line.from_dict(d)
        self.assertEqual(line.type, LineType.RAY)
        self.assertEqual(line.to_dict(), d)


if __name__ == "__main__":
    unittest.main()
