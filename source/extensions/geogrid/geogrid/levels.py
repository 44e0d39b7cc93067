"""
Level data — in-memory level and group objects built from level dicts.

A level dict looks like::

    {
        "id": 3,
        "title": "Midpoint",
        "description": "Find the midpoint of AB.",
        "lineType": "SEGMENT",
        "initial": {
            "points": [{"x": 0, "y": 0, "label": "A"}, {"x": 6, "y": 6}],
            "segments": [{"p1": {"x": 0, "y": 0}, "p2": {"x": 6, "y": 0}}]
        },
        "goals": {
            "points": [{"x": 3, "y": 3}],
            "segments": []
        }
    }

Coordinates carry no ids; stable ids are synthesised here so the host can
key its display lists.  Reading the JSON file itself is the host's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .kernel.goals import GoalSpec
from .kernel.primitives import Line, LineType, Point
from .timeline.history import ConstructionSnapshot


@dataclass
class LevelConfig:
    id: int
    title: str = ""
    description: str = ""
    line_type: LineType = LineType.SEGMENT
    initial_points: Tuple[Point, ...] = ()
    initial_lines: Tuple[Line, ...] = ()
    goal: GoalSpec = field(default_factory=GoalSpec)

    def initial_snapshot(self) -> ConstructionSnapshot:
        """Snapshot 0 of the level's history."""
        return ConstructionSnapshot.of(self.initial_points, self.initial_lines)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "lineType": self.line_type.value,
            "initial": {
                "points": [p.to_dict() for p in self.initial_points],
                "segments": [s.to_dict() for s in self.initial_lines],
            },
            "goals": self.goal.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "LevelConfig":
        initial = d.get("initial") or {}
        points = tuple(
            Point.from_dict(p, id=f"init-p-{i}", is_initial=True)
            for i, p in enumerate(initial.get("points") or [])
        )
        lines = tuple(
            Line(
                p1=Point.from_dict(s["p1"], id=f"init-s-p1-{i}"),
                p2=Point.from_dict(s["p2"], id=f"init-s-p2-{i}"),
                type=LineType.coerce(s.get("type")),
                id=f"init-s-{i}",
                is_initial=True,
            )
            for i, s in enumerate(initial.get("segments") or initial.get("lines") or [])
        )
        level = cls(
            id=d["id"],
            title=d.get("title", ""),
            description=d.get("description", ""),
            line_type=LineType.coerce(d.get("lineType")),
            initial_points=points,
            initial_lines=lines,
            goal=GoalSpec.from_dict(d.get("goals")),
        )
        if level.goal.is_empty:
            print(f"[GeoGrid] Level {level.id} has no goals and can never be cleared")
        return level


@dataclass
class LevelGroup:
    """A chapter of levels."""
    id: int
    name: str
    levels: List[LevelConfig] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "levels": [lv.to_dict() for lv in self.levels],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "LevelGroup":
        return cls(
            id=d["id"],
            name=d.get("name", ""),
            levels=[LevelConfig.from_dict(lv) for lv in d.get("levels", [])],
        )


def flatten_levels(groups: List[LevelGroup]) -> List[LevelConfig]:
    """All levels of all groups, in play order."""
    return [level for group in groups for level in group.levels]
