"""
Construction history — linear undo/redo over immutable board snapshots.

The history is a list of :class:`ConstructionSnapshot` objects plus a cursor.
Index 0 always holds the level's initial board.  Every user action produces
a brand-new snapshot and :meth:`ConstructionHistory.commit` appends it,
discarding anything that was redoable.  Undo and redo only move the cursor;
snapshots are never edited.

The history knows nothing about geometry; it stores whatever boards it is
given.  Callers guarantee that a committed board is a superset of the
previous one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..kernel.geometry import lines_equal, points_equal
from ..kernel.primitives import Line, Point


@dataclass(frozen=True)
class ConstructionSnapshot:
    """The full visible board at one instant."""
    points: Tuple[Point, ...] = ()
    lines: Tuple[Line, ...] = ()

    @classmethod
    def of(cls, points: Sequence[Point] = (), lines: Sequence[Line] = ()) -> "ConstructionSnapshot":
        return cls(points=tuple(points), lines=tuple(lines))

    def with_points(self, *points: Point) -> "ConstructionSnapshot":
        return ConstructionSnapshot(self.points + tuple(points), self.lines)

    def with_line(self, line: Line, *points: Point) -> "ConstructionSnapshot":
        """New snapshot with *line* added, plus any newly revealed *points*."""
        return ConstructionSnapshot(self.points + tuple(points), self.lines + (line,))

    def has_point(self, p) -> bool:
        return any(points_equal(q, p) for q in self.points)

    def has_line(self, line: Line) -> bool:
        return any(lines_equal(existing, line) for existing in self.lines)

    def same_as(self, other: "ConstructionSnapshot") -> bool:
        """Value comparison by geometry, ignoring ids and order."""
        if len(self.points) != len(other.points) or len(self.lines) != len(other.lines):
            return False
        return (
            all(other.has_point(p) for p in self.points)
            and all(other.has_line(s) for s in self.lines)
            and all(self.has_point(p) for p in other.points)
            and all(self.has_line(s) for s in other.lines)
        )

    @property
    def is_empty(self) -> bool:
        return not self.points and not self.lines

    def to_dict(self) -> dict:
        return {
            "points": [p.to_dict() for p in self.points],
            "lines": [s.to_dict() for s in self.lines],
        }


class ConstructionHistory:
    """
    Append-only, truncate-on-write stack of snapshots with a cursor.

    Callbacks:
        on_changed: Called with the current snapshot after every commit,
            undo, redo, or reset that moves the cursor.
    """

    def __init__(self, initial: Optional[ConstructionSnapshot] = None):
        self._snapshots: List[ConstructionSnapshot] = [initial or ConstructionSnapshot()]
        self._index: int = 0

        self.on_changed: Optional[Callable[[ConstructionSnapshot], None]] = None

    # -- Properties ----------------------------------------------------------

    @property
    def current(self) -> ConstructionSnapshot:
        return self._snapshots[self._index]

    @property
    def index(self) -> int:
        """Cursor position; always a valid index."""
        return self._index

    @property
    def count(self) -> int:
        return len(self._snapshots)

    @property
    def snapshots(self) -> List[ConstructionSnapshot]:
        return list(self._snapshots)

    @property
    def initial(self) -> ConstructionSnapshot:
        return self._snapshots[0]

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    # -- Mutations -----------------------------------------------------------

    def commit(self, snapshot: ConstructionSnapshot) -> ConstructionSnapshot:
        """Drop the redoable future, append *snapshot*, and move onto it."""
        del self._snapshots[self._index + 1:]
        self._snapshots.append(snapshot)
        self._index = len(self._snapshots) - 1
        self._notify_changed()
        return snapshot

    def undo(self) -> Optional[ConstructionSnapshot]:
        """Step back one snapshot.  Returns ``None`` at the start."""
        if not self.can_undo:
            return None
        self._index -= 1
        self._notify_changed()
        return self.current

    def redo(self) -> Optional[ConstructionSnapshot]:
        """Step forward one snapshot.  Returns ``None`` at the end."""
        if not self.can_redo:
            return None
        self._index += 1
        self._notify_changed()
        return self.current

    def reset(self, initial: ConstructionSnapshot) -> ConstructionSnapshot:
        """Replace the whole stack with *initial* (level load)."""
        self._snapshots = [initial]
        self._index = 0
        self._notify_changed()
        return initial

    # -- Notifications -------------------------------------------------------

    def _notify_changed(self):
        if self.on_changed:
            self.on_changed(self.current)
