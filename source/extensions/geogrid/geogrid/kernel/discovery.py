"""
Point discovery — every point the current construction makes revealable.

A point is *discoverable* when it is a grid vertex, a crossing of two drawn
lines, or a crossing of a drawn line with one of the grid's own gridlines.
The host uses the list for hover targets and for snapping taps and drags.

Order is deterministic: grid vertices (column by column), then for each line
in construction order its crossings with every later line, its vertical
gridline crossings and its horizontal gridline crossings.  Duplicates (by
``points_equal``) keep the first occurrence.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from ..config import EPSILON, GRID_SIZE
from .geometry import in_grid, line_intersect
from .primitives import Line, LineType, Point


def _constraint_mask(t: np.ndarray, line_type: LineType) -> np.ndarray:
    """Vectorised :func:`~geogrid.kernel.geometry.check_constraint`."""
    if line_type == LineType.RAY:
        return t >= -EPSILON
    if line_type == LineType.LINE:
        return np.ones_like(t, dtype=bool)
    return (t >= -EPSILON) & (t <= 1 + EPSILON)


class _PointCollector:
    """Accumulates in-grid points, dropping ε-duplicates."""

    def __init__(self, grid_size: int):
        self.grid_size = grid_size
        self.points: List[Point] = []

    def add(self, x: float, y: float, source: str):
        if not in_grid(x, y, self.grid_size):
            return
        for existing in self.points:
            if abs(existing.x - x) < EPSILON and abs(existing.y - y) < EPSILON:
                return
        self.points.append(Point(
            float(x), float(y),
            id=f"potential-{source}-{len(self.points)}",
            is_intersection=True,
        ))

    def add_many(self, xs: Iterable[float], ys: Iterable[float], source: str):
        for x, y in zip(xs, ys):
            self.add(x, y, source)


def grid_vertices(grid_size: int = GRID_SIZE) -> np.ndarray:
    """``(N*N, 2)`` array of integer vertices, x-major."""
    axis = np.arange(grid_size, dtype=float)
    gx, gy = np.meshgrid(axis, axis, indexing="ij")
    return np.column_stack([gx.ravel(), gy.ravel()])


def gridline_crossings(line: Line, grid_size: int = GRID_SIZE):
    """
    Where *line* crosses the vertical gridlines ``x = k`` and the horizontal
    gridlines ``y = k``.

    Returns:
        ``(vertical, horizontal)``, two ``(M, 2)`` arrays of crossing
        coordinates on the real part of the line.  Bounds are not checked.
    """
    ks = np.arange(grid_size, dtype=float)
    dx, dy = line.direction
    empty = np.empty((0, 2))

    vertical = empty
    if abs(dx) > EPSILON:
        t = (ks - line.p1.x) / dx
        keep = _constraint_mask(t, line.type)
        vertical = np.column_stack([ks[keep], line.p1.y + t[keep] * dy])

    horizontal = empty
    if abs(dy) > EPSILON:
        t = (ks - line.p1.y) / dy
        keep = _constraint_mask(t, line.type)
        horizontal = np.column_stack([line.p1.x + t[keep] * dx, ks[keep]])

    return vertical, horizontal


def enumerate_discoverable_points(
    lines: Sequence[Line],
    grid_size: int = GRID_SIZE,
) -> List[Point]:
    """
    All points revealable from *lines* on an ``N×N`` board.

    O(L²) line pairs plus O(L·N) gridline crossings.  Point ids encode the
    source and are not stable across calls.
    """
    lines = list(lines)
    collector = _PointCollector(grid_size)

    vertices = grid_vertices(grid_size)
    collector.add_many(vertices[:, 0], vertices[:, 1], "grid")

    for idx, line in enumerate(lines):
        for other in lines[idx + 1:]:
            crossing = line_intersect(line, other, grid_size)
            if crossing is not None:
                collector.add(crossing.x, crossing.y, "seg-seg")

        vertical, horizontal = gridline_crossings(line, grid_size)
        collector.add_many(vertical[:, 0], vertical[:, 1], "seg-grid-v")
        collector.add_many(horizontal[:, 0], horizontal[:, 1], "seg-grid-h")

    return collector.points
