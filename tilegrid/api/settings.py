"""Grid configuration records and option merging."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Self

_LOG = logging.getLogger(__name__)
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_option_name(name: str) -> str:
    """Map legacy ``camelCase`` option names onto ``snake_case`` fields."""
    return _CAMEL_BOUNDARY.sub("_", name.strip()).lower()


class _OptionMerge:
    """Defaults-plus-overrides construction shared by settings records."""

    __slots__ = ()

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> Self:
        """Build settings from defaults overridden by known caller options."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for raw_name, value in (options or {}).items():
            name = normalize_option_name(raw_name)
            if name in known:
                values[name] = value
        return cls(**values)

    @classmethod
    def unknown_options(cls, options: Mapping[str, Any] | None) -> tuple[str, ...]:
        known = {f.name for f in fields(cls)}
        return tuple(
            name for name in (options or {}) if normalize_option_name(name) not in known
        )


@dataclass(slots=True)
class GridSettings(_OptionMerge):
    """Logical grid bounds and placement policy. A max of 0 is unbounded."""

    min_rows: int = 1
    max_rows: int = 0
    min_cols: int = 1
    max_cols: int = 0
    fill_max: bool = False
    conflict_resolution: str | None = None

    def __post_init__(self) -> None:
        for name in ("min_rows", "max_rows", "min_cols", "max_cols"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")


@dataclass(slots=True)
class DisplaySettings(_OptionMerge):
    """Pixel geometry of the display container and its cells."""

    display_width: float = 0
    display_height: float = 0
    cell_width: float = 0
    cell_height: float = 0
    resize_max_rows: bool = False
    resize_max_cols: bool = False
    display_element: object | None = None

    def __deepcopy__(self, memo: dict[int, Any]) -> DisplaySettings:
        # The element belongs to the host display and is shared, not copied.
        return DisplaySettings(
            display_width=self.display_width,
            display_height=self.display_height,
            cell_width=self.cell_width,
            cell_height=self.cell_height,
            resize_max_rows=self.resize_max_rows,
            resize_max_cols=self.resize_max_cols,
            display_element=self.display_element,
        )


@dataclass(slots=True)
class InteractionSettings(_OptionMerge):
    """Container auto-sizing and resize-session defaults."""

    resize_display_height: bool = False
    resize_display_width: bool = False
    resize_use_callback: bool = False
    resize_interval_seconds: float = 0.025

    def __post_init__(self) -> None:
        if self.resize_interval_seconds <= 0.0:
            raise ValueError("resize_interval_seconds must be > 0")


def log_unknown_options(options: Mapping[str, Any] | None, *records: type[_OptionMerge]) -> None:
    """Log options that none of the given settings records recognise."""
    if not options:
        return
    unknown = set(options)
    for record in records:
        unknown &= set(record.unknown_options(options))
    if unknown:
        _LOG.debug("ignoring unknown grid options: %s", ", ".join(sorted(unknown)))


__all__ = [
    "DisplaySettings",
    "GridSettings",
    "InteractionSettings",
    "log_unknown_options",
    "normalize_option_name",
]
