"""
Construction primitives — the value types drawn on the board.

A construction is made of *points* and *lines*.  A line is always stored as
two defining points; its :class:`LineType` decides which part of the
supporting infinite line is real:

- **SEGMENT**: between ``p1`` and ``p2``.
- **RAY**: starts at ``p1`` and runs through ``p2`` forever.
- **LINE**: unbounded in both directions.

Both types are immutable.  The ``id`` / flag / label fields are display
identity only; they take no part in comparisons.  Geometric equality goes
through :func:`geogrid.kernel.geometry.points_equal` and
:func:`geogrid.kernel.geometry.lines_equal`, which apply the shared epsilon.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple, Union

from ..config import EPSILON


class LineType(Enum):
    SEGMENT = "SEGMENT"
    RAY = "RAY"
    LINE = "LINE"

    @classmethod
    def coerce(cls, value: Union["LineType", str, None]) -> "LineType":
        """Map ``None`` to SEGMENT and accept the level-file string names."""
        if value is None:
            return cls.SEGMENT
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise ValueError(f"Unknown line type: {value}") from None


class DegenerateLineError(ValueError):
    """Raised when a line is built from two coincident points."""


@dataclass(frozen=True, eq=False)
class Point:
    """A point in grid units."""
    x: float
    y: float
    id: str = ""
    is_intersection: bool = False
    is_initial: bool = False
    label: Optional[str] = None

    @property
    def xy(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def tagged(self, **changes) -> "Point":
        """Copy with new display fields (id, flags, label)."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        d = {"x": self.x, "y": self.y}
        if self.label:
            d["label"] = self.label
        return d

    @classmethod
    def from_dict(cls, d: dict, id: str = "", **flags) -> "Point":
        return cls(
            x=float(d["x"]),
            y=float(d["y"]),
            id=id,
            label=d.get("label"),
            **flags,
        )

    def __repr__(self) -> str:
        return f"Point({self.x:g}, {self.y:g})"


@dataclass(frozen=True, eq=False)
class Line:
    """
    A segment, ray or line through ``p1`` and ``p2``.

    ``p1`` is the origin for rays and the ``t = 0`` end of the parameter
    range; ``p2`` sits at ``t = 1``.
    """
    p1: Point
    p2: Point
    type: LineType = LineType.SEGMENT
    id: str = field(default="")
    is_initial: bool = False

    def __post_init__(self):
        object.__setattr__(self, "type", LineType.coerce(self.type))
        if abs(self.p1.x - self.p2.x) < EPSILON and abs(self.p1.y - self.p2.y) < EPSILON:
            raise DegenerateLineError(
                f"Line endpoints coincide at ({self.p1.x:g}, {self.p1.y:g})"
            )

    @property
    def direction(self) -> Tuple[float, float]:
        return (self.p2.x - self.p1.x, self.p2.y - self.p1.y)

    def point_at(self, t: float) -> Tuple[float, float]:
        dx, dy = self.direction
        return (self.p1.x + t * dx, self.p1.y + t * dy)

    def to_dict(self) -> dict:
        return {
            "p1": {"x": self.p1.x, "y": self.p1.y},
            "p2": {"x": self.p2.x, "y": self.p2.y},
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, d: dict, id: str = "", is_initial: bool = False) -> "Line":
        prefix = id or "line"
        return cls(
            p1=Point.from_dict(d["p1"], id=f"{prefix}-p1"),
            p2=Point.from_dict(d["p2"], id=f"{prefix}-p2"),
            type=LineType.coerce(d.get("type")),
            id=id,
            is_initial=is_initial,
        )

    def __repr__(self) -> str:
        return f"Line({self.type.name}, {self.p1!r} -> {self.p2!r})"
