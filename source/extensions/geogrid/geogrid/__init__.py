"""
GeoGrid — construction puzzle engine on a fixed grid.

Draw segments, rays and lines between grid points; every line drawn reveals
new intersection points; reproduce the level's goal figure to clear it.
"""

from .api import GeoGridAPI
from .kernel import Line, LineType, Point
from .levels import LevelConfig, LevelGroup
from .timeline import ConstructionHistory, ConstructionSnapshot

__version__ = "0.1.0"
