"""
Board constants shared by the geometry kernel and the puzzle session.

Every tolerance in GeoGrid comes from here so point equality, collinearity
and clipping degeneracy all agree.
"""

# ---------------------------------------------------------------
# GRID
# ---------------------------------------------------------------

# Number of vertices per side.  Coordinates live in [0, GRID_SIZE - 1].
GRID_SIZE = 7

GRID_MIN = 0
GRID_MAX = GRID_SIZE - 1


# ---------------------------------------------------------------
# TOLERANCES
# ---------------------------------------------------------------

EPSILON = 1e-4                     # grid units

# Pick radius around a candidate point, and per-axis vertex snap radius
SNAP_THRESHOLD = 0.4
