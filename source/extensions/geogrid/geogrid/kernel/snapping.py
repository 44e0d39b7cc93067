"""
Snapping helpers — turn a raw grid-space position into a board point.

Two rules are used by hosts:

* :func:`snap_to_grid` rounds to the nearest integer vertex and accepts it
  only when both axes are within the threshold (level authoring).
* :func:`find_nearest_point` picks the closest existing candidate within a
  Euclidean radius (play, where candidates include intersections).
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from ..config import SNAP_THRESHOLD
from .geometry import dist_sq
from .primitives import Point


def snap_to_grid(x: float, y: float, threshold: float = SNAP_THRESHOLD) -> Optional[Point]:
    rx = round(x)
    ry = round(y)
    if abs(x - rx) < threshold and abs(y - ry) < threshold:
        return Point(float(rx), float(ry))
    return None


def find_nearest_point(
    x: float,
    y: float,
    candidates: Iterable[Point],
    threshold: float = SNAP_THRESHOLD,
) -> Optional[Point]:
    """
    Closest candidate strictly within *threshold* of ``(x, y)``.

    Ties keep the earliest candidate, so callers list visible points before
    discoverable ones.
    """
    closest = None
    best = threshold
    for p in candidates:
        d = math.sqrt(dist_sq(p, (x, y)))
        if d < best:
            best = d
            closest = p
    return closest
