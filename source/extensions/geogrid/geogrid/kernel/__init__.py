from .primitives import DegenerateLineError, Line, LineType, Point
from .geometry import (
    check_constraint,
    clip_to_grid,
    dist_sq,
    in_grid,
    line_intersect,
    lines_equal,
    points_equal,
)
from .discovery import enumerate_discoverable_points
from .snapping import find_nearest_point, snap_to_grid
from .goals import GoalSpec, is_cleared, is_goal_line, is_goal_point
