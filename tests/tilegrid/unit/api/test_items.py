from copy import deepcopy

from tilegrid.api.errors import BoundsExceeded, PlacementResult
from tilegrid.api.items import DisplayItem, GridItem, Position


def test_position_requires_both_coordinates() -> None:
    assert GridItem().position is None
    assert GridItem(x=1).position is None
    assert GridItem(x=1, y=2).position == Position(1, 2)


def test_shares_identity_by_object_or_id() -> None:
    item = GridItem(id="a")
    assert item.shares_identity(item)
    assert item.shares_identity(GridItem(id="a"))
    assert not item.shares_identity(GridItem(id="b"))
    assert not GridItem().shares_identity(GridItem())


def test_items_compare_by_identity() -> None:
    assert GridItem(id=1) != GridItem(id=1)


def test_deepcopy_drops_display_projection() -> None:
    item = GridItem(id=1, x=0, y=0, data={"k": [1]})
    item.display_item = DisplayItem(grid_item=item, x=0, y=0, w=1, h=1)

    clone = deepcopy(item)

    assert clone.display_item is None
    assert clone.data == {"k": [1]}
    assert clone.data is not item.data


def test_placement_result_truthiness() -> None:
    item = GridItem()
    assert PlacementResult.placed(item)
    failed = PlacementResult.failed(item, BoundsExceeded("too wide"))
    assert not failed
    assert str(failed.error) == "too wide"
