"""
GeoGrid Programmatic API — headless facade for one puzzle session.

This module provides a ``GeoGridAPI`` class that wraps the construction
history, point discovery, snapping and goal evaluation in a single, UI-free
interface.  A host (game screen, test, script) feeds it grid-space
coordinates and reads back the board to render.

Example::

    from geogrid.api import GeoGridAPI

    api = GeoGridAPI()
    api.load_level({
        "id": 1,
        "initial": {"points": [{"x": 0, "y": 0}, {"x": 6, "y": 6}]},
        "goals": {"segments": [{"p1": {"x": 0, "y": 0}, "p2": {"x": 6, "y": 6}}]},
    })
    api.draw_line((0, 0), (6, 6))
    assert api.is_cleared
    api.undo()
    assert not api.is_cleared
"""

from __future__ import annotations

from typing import List, Optional, Set, Tuple, Union

from .config import GRID_SIZE, SNAP_THRESHOLD
from .kernel.discovery import enumerate_discoverable_points
from .kernel.geometry import clip_to_grid, points_equal
from .kernel.goals import GoalSpec, is_cleared, is_goal_line, is_goal_point
from .kernel.primitives import Line, LineType, Point
from .kernel.snapping import find_nearest_point
from .levels import LevelConfig
from .timeline.history import ConstructionHistory, ConstructionSnapshot

PointLike = Union[Point, Tuple[float, float]]


class GeoGridAPI:
    """
    Headless API for a single puzzle session.

    Owns one :class:`ConstructionHistory`.  Every successful action commits
    a new snapshot and re-checks the level goal.  Once a level is cleared
    the board is locked and stays cleared until undo, reset, or loading
    another level.

    Parameters:
        grid_size: Vertices per board side.
        snap_threshold: Pick radius in grid units.
    """

    def __init__(self, grid_size: int = GRID_SIZE, snap_threshold: float = SNAP_THRESHOLD):
        self.grid_size = grid_size
        self.snap_threshold = snap_threshold

        self._history = ConstructionHistory()
        self._history.on_changed = self._on_history_changed
        self._level: Optional[LevelConfig] = None

        self._is_cleared: bool = False
        self._cleared_level_ids: Set[int] = set()

        # Discoverable points are recomputed lazily, only when lines change
        self._discoverable: Optional[List[Point]] = None
        self._discoverable_lines: Optional[Tuple[Line, ...]] = None

        self._reveal_counter: int = 0
        self._line_counter: int = 0

    # =====================================================================
    # Internal helpers
    # =====================================================================

    def _on_history_changed(self, snapshot: ConstructionSnapshot):
        if snapshot.lines is not self._discoverable_lines:
            self._discoverable = None
            self._discoverable_lines = None

    def _next_point_id(self) -> str:
        self._reveal_counter += 1
        return f"revealed-{self._reveal_counter}"

    def _next_line_id(self) -> str:
        self._line_counter += 1
        return f"seg-{self._line_counter}"

    def _resolve(self, p: Optional[PointLike]) -> Optional[Point]:
        """Points pass through; raw coordinates are picked."""
        if p is None or isinstance(p, Point):
            return p
        return self.pick(p[0], p[1])

    def _reveal(self, p: Point) -> Point:
        return p.tagged(id=self._next_point_id(), is_intersection=True, is_initial=False)

    def _evaluate_goal(self):
        """Latch the cleared flag if the current board satisfies the goal."""
        if self._level is None or self._is_cleared:
            return
        if is_cleared(self.snapshot, self._level.goal):
            self._is_cleared = True
            if self._level.id not in self._cleared_level_ids:
                self._cleared_level_ids.add(self._level.id)
                print(f"[GeoGrid] Level {self._level.id} cleared")

    def _commit(self, snapshot: ConstructionSnapshot):
        self._history.commit(snapshot)
        self._evaluate_goal()

    # =====================================================================
    # Level lifecycle
    # =====================================================================

    def load_level(self, level: Union[LevelConfig, dict]) -> LevelConfig:
        """
        Start *level* from its initial board.

        Args:
            level: A :class:`LevelConfig` or a level dict.

        Returns:
            The loaded :class:`LevelConfig`.
        """
        if isinstance(level, dict):
            level = LevelConfig.from_dict(level)
        self._level = level
        self._is_cleared = False
        self._history.reset(level.initial_snapshot())
        self._evaluate_goal()
        return level

    def reset(self):
        """Restart the current level; the whole history is discarded."""
        if self._level is not None:
            self.load_level(self._level)

    # =====================================================================
    # Actions
    # =====================================================================

    def pick(self, x: float, y: float) -> Optional[Point]:
        """
        Nearest visible or discoverable point within the snap radius.

        Visible points win ties, so an already-revealed point keeps its id
        and label.
        """
        candidates = list(self.snapshot.points) + self.discoverable_points
        return find_nearest_point(x, y, candidates, self.snap_threshold)

    def place_point(self, x: float, y: float) -> Optional[Point]:
        """
        Reveal the point under a tap at ``(x, y)``.

        Returns:
            The revealed point, or ``None`` when nothing was picked, the
            point is already visible, or the level is cleared.
        """
        if self._is_cleared:
            return None
        picked = self.pick(x, y)
        if picked is None or self.snapshot.has_point(picked):
            return None
        point = self._reveal(picked)
        self._commit(self.snapshot.with_points(point))
        return point

    def draw_line(
        self,
        start: Optional[PointLike],
        end: Optional[PointLike],
        line_type: Union[LineType, str, None] = None,
    ) -> Optional[Line]:
        """
        Draw a line from *start* to *end*.

        Either end may be a :class:`Point` (already picked by the host) or
        raw ``(x, y)`` coordinates, which are picked here.  Endpoints not
        yet on the board are revealed along with the line.

        Args:
            line_type: Defaults to the level's tool (SEGMENT if unset).

        Returns:
            The new :class:`Line`, or ``None`` if an end did not snap, both
            ends are the same point, an equal line already exists, or the
            level is cleared.
        """
        if self._is_cleared:
            return None
        p1 = self._resolve(start)
        p2 = self._resolve(end)
        if p1 is None or p2 is None:
            return None
        if points_equal(p1, p2):
            print(f"[GeoGrid] Ignoring zero-length drag at ({p1.x:g}, {p1.y:g})")
            return None

        if line_type is None:
            line_type = self._level.line_type if self._level else LineType.SEGMENT

        line = Line(p1=p1, p2=p2, type=LineType.coerce(line_type), id=self._next_line_id())
        board = self.snapshot
        if board.has_line(line):
            return None

        revealed = [self._reveal(p) for p in (p1, p2) if not board.has_point(p)]
        self._commit(board.with_line(line, *revealed))
        return line

    def undo(self) -> Optional[ConstructionSnapshot]:
        """
        Step back one action.  Clears the cleared flag, then re-checks the
        goal against the restored board.
        """
        snapshot = self._history.undo()
        if snapshot is None:
            return None
        self._is_cleared = False
        self._evaluate_goal()
        return snapshot

    def redo(self) -> Optional[ConstructionSnapshot]:
        """Step forward one action."""
        snapshot = self._history.redo()
        if snapshot is None:
            return None
        self._evaluate_goal()
        return snapshot

    # =====================================================================
    # Queries
    # =====================================================================

    @property
    def level(self) -> Optional[LevelConfig]:
        return self._level

    @property
    def goal(self) -> GoalSpec:
        return self._level.goal if self._level else GoalSpec()

    @property
    def history(self) -> ConstructionHistory:
        """Direct access to the underlying history (for advanced use)."""
        return self._history

    @property
    def snapshot(self) -> ConstructionSnapshot:
        return self._history.current

    @property
    def points(self) -> List[Point]:
        return list(self.snapshot.points)

    @property
    def lines(self) -> List[Line]:
        return list(self.snapshot.lines)

    @property
    def discoverable_points(self) -> List[Point]:
        """Every point the current lines make revealable."""
        lines = self.snapshot.lines
        if self._discoverable is None or self._discoverable_lines is not lines:
            self._discoverable = enumerate_discoverable_points(lines, self.grid_size)
            self._discoverable_lines = lines
        return list(self._discoverable)

    @property
    def is_cleared(self) -> bool:
        return self._is_cleared

    @property
    def cleared_level_ids(self) -> Set[int]:
        """Ids of every level cleared during this session."""
        return set(self._cleared_level_ids)

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def is_goal_point(self, point: Point) -> bool:
        return is_goal_point(point, self.goal)

    def is_goal_line(self, line: Line) -> bool:
        return is_goal_line(line, self.goal)

    def clip(self, line: Line) -> Tuple[Point, Point]:
        """Grid-clipped extent of *line* for drawing its extension."""
        return clip_to_grid(line.p1, line.p2, line.type, self.grid_size)

    def to_dict(self) -> dict:
        """Current board and flags for a rendering host."""
        d = self.snapshot.to_dict()
        d.update({
            "cleared": self._is_cleared,
            "can_undo": self.can_undo,
            "can_redo": self.can_redo,
        })
        return d
