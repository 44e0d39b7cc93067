from .history import ConstructionHistory, ConstructionSnapshot
