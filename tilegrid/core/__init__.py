"""Grid engine: storage, occupancy matrix, display projection, interaction."""

from tilegrid.core.display import DisplayGrid
from tilegrid.core.grid import Grid
from tilegrid.core.interaction import InteractiveGrid, ResizeMode, ResizeSession, ResizeState
from tilegrid.core.matrix import GridMatrix
from tilegrid.core.store import ItemStore
from tilegrid.core.strategies import StrategyRegistry

__all__ = [
    "DisplayGrid",
    "Grid",
    "GridMatrix",
    "InteractiveGrid",
    "ItemStore",
    "ResizeMode",
    "ResizeSession",
    "ResizeState",
    "StrategyRegistry",
]
