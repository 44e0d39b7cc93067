"""
Goal evaluation — has the player reproduced the level's target figure?
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .geometry import lines_equal, points_equal
from .primitives import Line, Point


@dataclass(frozen=True)
class GoalSpec:
    """The points and lines a level asks the player to construct."""
    points: Tuple[Point, ...] = ()
    lines: Tuple[Line, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.points and not self.lines

    def to_dict(self) -> dict:
        return {
            "points": [{"x": p.x, "y": p.y} for p in self.points],
            "segments": [s.to_dict() for s in self.lines],
        }

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> "GoalSpec":
        """
        Build from the level ``goals`` block.

        Lines are read from ``segments`` (level files) or ``lines``.
        """
        if not d:
            return cls()
        raw_lines = d.get("segments") or d.get("lines") or []
        return cls(
            points=tuple(
                Point.from_dict(p, id=f"goal-p-{i}")
                for i, p in enumerate(d.get("points") or [])
            ),
            lines=tuple(
                Line.from_dict(s, id=f"goal-s-{i}")
                for i, s in enumerate(raw_lines)
            ),
        )


def is_goal_point(point: Point, goal: GoalSpec) -> bool:
    return any(points_equal(point, gp) for gp in goal.points)


def is_goal_line(line: Line, goal: GoalSpec) -> bool:
    return any(lines_equal(line, gl) for gl in goal.lines)


def is_cleared(snapshot, goal: Optional[GoalSpec]) -> bool:
    """
    True when every goal point and goal line is present in *snapshot*.

    *snapshot* is anything with ``points`` and ``lines`` sequences.  A goal
    with nothing in it never clears.
    """
    if goal is None or goal.is_empty:
        return False
    points_done = all(
        any(points_equal(p, gp) for p in snapshot.points) for gp in goal.points
    )
    if not points_done:
        return False
    return all(
        any(lines_equal(s, gl) for s in snapshot.lines) for gl in goal.lines
    )
