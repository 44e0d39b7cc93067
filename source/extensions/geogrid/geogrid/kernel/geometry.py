"""
Geometry kernel — exact, type-aware predicates on board primitives.

All functions here are pure.  Real-valued comparisons always go through
``EPSILON`` from :mod:`geogrid.config`; nothing compares floats with ``==``.

Parametric convention
---------------------
A line through ``p1`` and ``p2`` is ``P(t) = p1 + t * (p2 - p1)``.  The
:class:`LineType` restricts ``t``:

=========  =====================
SEGMENT    ``-ε <= t <= 1 + ε``
RAY        ``-ε <= t``
LINE       any ``t``
=========  =====================
"""

from __future__ import annotations

import itertools
import math
from typing import Optional, Tuple, Union

from ..config import EPSILON, GRID_MIN, GRID_SIZE
from .primitives import Line, LineType, Point

XY = Union[Point, Tuple[float, float]]

_intersection_ids = itertools.count()


def _xy(p: XY) -> Tuple[float, float]:
    if isinstance(p, Point):
        return p.x, p.y
    return float(p[0]), float(p[1])


# =========================================================================
# Points
# =========================================================================

def points_equal(a: XY, b: XY) -> bool:
    """True when both coordinates differ by less than ``EPSILON``."""
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return abs(ax - bx) < EPSILON and abs(ay - by) < EPSILON


def dist_sq(a: XY, b: XY) -> float:
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return (ax - bx) ** 2 + (ay - by) ** 2


def in_grid(x: float, y: float, grid_size: int = GRID_SIZE) -> bool:
    """Bounds test against ``[0, N-1]²`` with an ``EPSILON`` margin."""
    hi = grid_size - 1
    return (
        GRID_MIN - EPSILON <= x <= hi + EPSILON
        and GRID_MIN - EPSILON <= y <= hi + EPSILON
    )


# =========================================================================
# Lines
# =========================================================================

def check_constraint(t: float, line_type: Optional[LineType] = None) -> bool:
    """Is parameter *t* on the real part of a line of *line_type*?"""
    line_type = LineType.coerce(line_type)
    if line_type == LineType.RAY:
        return t >= -EPSILON
    if line_type == LineType.LINE:
        return True
    return -EPSILON <= t <= 1 + EPSILON


def line_intersect(a: Line, b: Line, grid_size: int = GRID_SIZE) -> Optional[Point]:
    """
    Intersection point of two typed lines, or ``None``.

    Parallel and coincident lines never intersect.  The crossing must lie on
    the real part of both lines and inside the grid.
    """
    x1, y1 = a.p1.x, a.p1.y
    x2, y2 = a.p2.x, a.p2.y
    x3, y3 = b.p1.x, b.p1.y
    x4, y4 = b.p2.x, b.p2.y

    denom = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)
    if abs(denom) < EPSILON:
        return None

    t = ((x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3)) / denom
    u = ((x2 - x1) * (y1 - y3) - (y2 - y1) * (x1 - x3)) / denom

    if not (check_constraint(t, a.type) and check_constraint(u, b.type)):
        return None

    ix = x1 + t * (x2 - x1)
    iy = y1 + t * (y2 - y1)
    if not in_grid(ix, iy, grid_size):
        return None

    return Point(ix, iy, id=f"int-{next(_intersection_ids)}", is_intersection=True)


def lines_equal(a: Line, b: Line) -> bool:
    """
    Goal-matching equality between two lines.

    - Types must match.
    - **SEGMENT**: same endpoints in either order.
    - **RAY**: same origin and same direction (positive scalar only; a ray
      pointing the other way from the same origin is a different ray).
    - **LINE**: same supporting line; the defining points may differ.
    """
    if a.type != b.type:
        return False

    if a.type == LineType.SEGMENT:
        return (
            (points_equal(a.p1, b.p1) and points_equal(a.p2, b.p2))
            or (points_equal(a.p1, b.p2) and points_equal(a.p2, b.p1))
        )

    ax, ay = a.direction
    bx, by = b.direction

    if a.type == LineType.RAY:
        if not points_equal(a.p1, b.p1):
            return False
        dot = (ax * bx + ay * by) / (math.hypot(ax, ay) * math.hypot(bx, by))
        return abs(dot - 1) < EPSILON

    cross = ax * by - ay * bx
    if abs(cross) > EPSILON:
        return False
    # Signed area of (a.p1, a.p2, b.p1)
    area = ax * (b.p1.y - a.p1.y) - ay * (b.p1.x - a.p1.x)
    return abs(area) < EPSILON


def clip_to_grid(
    p1: Point,
    p2: Point,
    line_type: Optional[LineType] = None,
    grid_size: int = GRID_SIZE,
) -> Tuple[Point, Point]:
    """
    Visible extent of a typed line inside ``[0, N-1]²``.

    Liang–Barsky slab clipping: each boundary half-plane narrows
    ``[t_min, t_max]``, then the range is intersected with the type's own
    parameter range.  A line parallel to a boundary and outside it collapses
    to ``(p1, p1)``.

    Returns:
        ``(start, end)`` points for drawing extension dashes.
    """
    line_type = LineType.coerce(line_type)
    hi = grid_size - 1
    dx = p2.x - p1.x
    dy = p2.y - p1.y

    t_min = -1e9
    t_max = 1e9

    p = (-dx, dx, -dy, dy)
    q = (p1.x - GRID_MIN, hi - p1.x, p1.y - GRID_MIN, hi - p1.y)

    for pi, qi in zip(p, q):
        if abs(pi) < EPSILON:
            if qi < 0:
                return p1, p1
            continue
        t = qi / pi
        if pi < 0:
            t_min = max(t_min, t)
        else:
            t_max = min(t_max, t)

    if line_type == LineType.SEGMENT:
        t_min = max(t_min, 0.0)
        t_max = min(t_max, 1.0)
    elif line_type == LineType.RAY:
        t_min = max(t_min, 0.0)

    start = Point(p1.x + t_min * dx, p1.y + t_min * dy, id="clip-start")
    end = Point(p1.x + t_max * dx, p1.y + t_max * dy, id="clip-end")
    return start, end
