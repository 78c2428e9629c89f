"""Runtime services backing the grid API contracts."""

from tilegrid.runtime.config import load_logging_config, resolve_log_level_name
from tilegrid.runtime.events import NullEventBus, RuntimeEventBus
from tilegrid.runtime.logging import configure_grid_logging, setup_grid_logging
from tilegrid.runtime.scheduler import Scheduler

__all__ = [
    "NullEventBus",
    "RuntimeEventBus",
    "Scheduler",
    "configure_grid_logging",
    "load_logging_config",
    "resolve_log_level_name",
    "setup_grid_logging",
]
