"""Grid diagnostics configuration sourced from environment."""

from __future__ import annotations

import os
from collections.abc import Mapping

from tilegrid.api.logging import GridLoggingConfig

_FORMATS = frozenset({"text", "json"})


def resolve_log_level_name(default: str = "INFO", env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with grid-prefixed override."""
    source = os.environ if env is None else env
    value = source.get("GRID_LOG_LEVEL")
    if value is None:
        value = source.get("LOG_LEVEL", default)
    return value.strip().upper()


def _format(raw: str | None, default: str) -> str:
    if raw is None:
        return default
    normalized = raw.strip().lower()
    return normalized if normalized in _FORMATS else default


def load_logging_config(env: Mapping[str, str] | None = None) -> GridLoggingConfig:
    """Load logging configuration from env vars."""
    source = os.environ if env is None else env
    file_path = (source.get("GRID_LOG_FILE") or "").strip() or None
    return GridLoggingConfig(
        level_name=resolve_log_level_name(env=source),
        console_format=_format(source.get("GRID_LOG_FORMAT"), "text"),
        file_path=file_path,
        file_format=_format(source.get("GRID_LOG_FILE_FORMAT"), "json"),
    )
