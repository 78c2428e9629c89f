from __future__ import annotations

import pytest

from tests.tilegrid.conftest import EventRecorder
from tilegrid.api.errors import InvalidDimensions, InvalidPosition, MissingCapability
from tilegrid.api.events import PostAddItem, PreAddItem
from tilegrid.api.items import Dimensions, GridItem, Position
from tilegrid.api.settings import GridSettings
from tilegrid.core.grid import Grid


def test_scenario_a_unpositioned_item_lands_at_origin() -> None:
    grid = Grid(min_cols=4)
    item = GridItem(id=1, w=2, h=1)

    result = grid.add_item(item)

    assert result
    assert (item.x, item.y) == (0, 0)
    assert grid.col_count(current_only=True) == 4


def test_scenario_b_unbounded_columns_extend_the_row() -> None:
    grid = Grid(items=[GridItem(id=1, x=0, y=0, w=4, h=1)])
    item = GridItem(id=2, w=2, h=1)

    grid.add_item(item)

    assert (item.x, item.y) == (4, 0)
    assert grid.col_count() == 6


def test_scenario_b_bounded_columns_wrap_to_next_row() -> None:
    grid = Grid(max_cols=4, items=[GridItem(id=1, x=0, y=0, w=4, h=1)])
    item = GridItem(id=2, w=2, h=1)

    grid.add_item(item)

    assert (item.x, item.y) == (0, 1)


def test_scenario_c_out_of_bounds_placement_fails_and_keeps_item() -> None:
    grid = Grid(max_cols=4)
    before = grid.matrix.snapshot()
    item = GridItem(x=3, y=0, w=2, h=1)

    assert grid.fits(item) is False
    result = grid.add_item(item)

    assert not result
    assert item in grid.items
    assert (grid.matrix.snapshot() == before).all()


def test_settings_accept_legacy_option_names() -> None:
    grid = Grid(minRows=2, maxCols=3, fillMax=True, conflictResolution="findEmpty")
    assert grid.settings == GridSettings(
        min_rows=2, max_cols=3, fill_max=True, conflict_resolution="findEmpty"
    )


def test_explicit_settings_object_wins() -> None:
    settings = GridSettings(max_rows=2)
    grid = Grid(settings)
    assert grid.settings is settings
    assert grid.matrix.settings is settings


def test_bulk_load_places_items_in_store_order() -> None:
    first = GridItem(id="a", w=2)
    second = GridItem(id="b", w=2)
    grid = Grid(max_cols=3, items=[first, second])

    assert (first.x, first.y) == (0, 0)
    assert (second.x, second.y) == (0, 1)
    assert list(grid.items) == [first, second]


def test_lifecycle_events_published_in_order(event_bus) -> None:
    recorder = EventRecorder(event_bus)

    grid = Grid(events=event_bus, items=[GridItem(id=1)])
    item = GridItem(id=2)
    grid.add_item(item)
    grid.remove_item(item)

    assert recorder.names == [
        "PreInitialize",
        "PreAddItem",
        "PostAddItem",
        "PreBuildGrid",
        "PostBuildGrid",
        "PostInitialize",
        "PreAddItem",
        "PostAddItem",
        "PreRemoveItem",
        "PostRemoveItem",
    ]


def test_on_and_off_subscribe_through_injected_bus(event_bus) -> None:
    grid = Grid(events=event_bus)
    seen: list[GridItem | None] = []
    subscription = grid.on(PreAddItem, lambda event: seen.append(event.item))
    item = GridItem()

    grid.add_item(item)
    grid.off(subscription)
    grid.add_item(GridItem())

    assert seen == [item]


def test_post_add_item_reports_placement_outcome(event_bus) -> None:
    grid = Grid(max_cols=1, max_rows=1, events=event_bus)
    outcomes: list[bool] = []
    grid.on(PostAddItem, lambda event: outcomes.append(event.placed))

    grid.add_item(GridItem())
    grid.add_item(GridItem())

    assert outcomes == [True, False]


def test_default_grid_has_no_observable_capability() -> None:
    grid = Grid()
    with pytest.raises(MissingCapability):
        grid.on(PreAddItem, lambda event: None)


def test_add_item_without_placement_leaves_matrix_empty() -> None:
    grid = Grid()
    item = GridItem(w=1, h=1)
    result = grid.add_item(item, place=False)
    assert not result
    assert grid.item_at(0, 0) is None


def test_add_item_with_rebuild_places_everything() -> None:
    grid = Grid()
    first = GridItem(id=1)
    grid.add_item(first, place=False)
    second = GridItem(id=2)

    result = grid.add_item(second, rebuild=True)

    assert result
    assert grid.item_at(0, 0) is first
    assert grid.item_at(1, 0) is second


def test_remove_item_clears_cells_and_store() -> None:
    grid = Grid()
    item = GridItem(w=2, h=2)
    grid.add_item(item)

    grid.remove_item(item)

    assert item not in grid.items
    assert grid.matrix.placed_items() == []


def test_move_item_relocates_footprint() -> None:
    grid = Grid()
    item = GridItem(id=1, w=2, h=1)
    grid.add_item(item)

    assert grid.move_item(item, Position(1, 2))

    assert grid.item_at(0, 0) is None
    assert grid.item_at(1, 2) is item
    assert grid.item_at(2, 2) is item


def test_move_item_accepts_mapping() -> None:
    grid = Grid()
    item = GridItem()
    grid.add_item(item)
    assert grid.move_item(item, {"x": 3, "y": 0})
    assert (item.x, item.y) == (3, 0)


def test_move_item_into_conflict_restores_previous_position() -> None:
    grid = Grid()
    blocker = GridItem(id=1, x=2, y=0)
    item = GridItem(id=2, x=0, y=0)
    grid.add_item(blocker)
    grid.add_item(item)

    result = grid.move_item(item, Position(2, 0))

    assert not result
    assert (item.x, item.y) == (0, 0)
    assert grid.item_at(0, 0) is item
    assert grid.item_at(2, 0) is blocker


def test_move_item_with_missing_coordinates_is_a_logged_noop(caplog) -> None:
    grid = Grid()
    item = GridItem()
    grid.add_item(item)

    result = grid.move_item(item, {"x": 1})

    assert not result
    assert isinstance(result.error, InvalidPosition)
    assert (item.x, item.y) == (0, 0)
    assert "move_invalid_position" in caplog.text


def test_resize_item_grows_footprint() -> None:
    grid = Grid()
    item = GridItem()
    grid.add_item(item)

    assert grid.resize_item(item, Dimensions(w=2, h=3))

    assert grid.matrix.occupied_cells(item) == {(x, y) for x in range(2) for y in range(3)}


def test_resize_item_with_missing_span_fails() -> None:
    grid = Grid()
    item = GridItem()
    grid.add_item(item)

    result = grid.resize_item(item, None)

    assert isinstance(result.error, InvalidDimensions)
    assert (item.w, item.h) == (1, 1)


def test_resize_into_neighbour_is_rejected() -> None:
    grid = Grid()
    item = GridItem(id=1, x=0, y=0)
    neighbour = GridItem(id=2, x=1, y=0)
    grid.add_item(item)
    grid.add_item(neighbour)

    assert not grid.resize_item(item, Dimensions(w=2, h=1))

    assert (item.w, item.h) == (1, 1)
    assert grid.item_at(0, 0) is item
    assert grid.item_at(1, 0) is neighbour


def test_sort_items_orders_by_row_then_column() -> None:
    grid = Grid()
    late = GridItem(id="late", x=0, y=2)
    early = GridItem(id="early", x=3, y=0)
    middle = GridItem(id="middle", x=1, y=0)
    for item in (late, early, middle):
        grid.add_item(item)

    grid.sort_items()

    assert [item.id for item in grid.items] == ["middle", "early", "late"]


def test_register_strategy_is_used_for_conflicts() -> None:
    grid = Grid(conflict_resolution="nudge")
    grid.add_item(GridItem(id=1, x=0, y=0))

    def nudge(matrix, item: GridItem) -> bool:
        item.x += 1
        return matrix.fits(item) is True

    grid.register_strategy("nudge", nudge)
    item = GridItem(id=2, x=0, y=0)

    assert grid.add_item(item)
    assert (item.x, item.y) == (1, 0)


def test_clone_is_independent_deep_copy() -> None:
    grid = Grid(max_cols=4, items=[GridItem(id=1, w=2, data={"title": "a"})])

    clone = grid.clone()
    clone_item = clone.items[0]
    clone_item.data["title"] = "b"
    clone.move_item(clone_item, Position(2, 0))

    original = grid.items[0]
    assert original is not clone_item
    assert original.data == {"title": "a"}
    assert (original.x, original.y) == (0, 0)
    assert clone.settings == grid.settings
    assert clone.settings is not grid.settings
    assert clone.item_at(2, 0) is clone_item
