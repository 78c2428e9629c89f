"""Named conflict-resolution strategies."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from tilegrid.api.items import GridItem

if TYPE_CHECKING:
    from tilegrid.core.matrix import GridMatrix

ConflictStrategy = Callable[["GridMatrix", GridItem], bool]


def find_empty(matrix: GridMatrix, item: GridItem) -> bool:
    """Relocate the item to the first free position from where it stands."""
    return bool(matrix.find_empty_position(item))


class StrategyRegistry:
    """Per-grid mapping of strategy names to resolvers."""

    def __init__(self, strategies: dict[str, ConflictStrategy] | None = None) -> None:
        self._strategies: dict[str, ConflictStrategy] = dict(strategies or {})

    def register(self, name: str, strategy: ConflictStrategy) -> None:
        """Register or replace a named strategy."""
        normalized = name.strip()
        if not normalized:
            raise ValueError("strategy name must not be empty")
        self._strategies[normalized] = strategy

    def resolve(self, name: str | None) -> ConflictStrategy | None:
        if not name:
            return None
        return self._strategies.get(name.strip())

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._strategies))

    def copy(self) -> StrategyRegistry:
        return StrategyRegistry(self._strategies)


def default_registry() -> StrategyRegistry:
    registry = StrategyRegistry()
    registry.register("findEmpty", find_empty)
    registry.register("find_empty", find_empty)
    return registry
