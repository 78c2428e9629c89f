from tilegrid.api.items import GridItem
from tilegrid.core.store import ItemStore


def test_store_keeps_insertion_order_and_identity() -> None:
    first = GridItem(id=1)
    twin = GridItem(id=1)
    store = ItemStore([first])
    store.append(twin)

    assert list(store) == [first, twin]
    assert len(store) == 2
    assert store.index(twin) == 1
    assert GridItem(id=1) not in store


def test_store_remove_by_identity() -> None:
    first = GridItem(id=1)
    twin = GridItem(id=1)
    store = ItemStore([first, twin])

    assert store.remove(twin) is True
    assert store.remove(twin) is False
    assert list(store) == [first]


def test_store_find_by_id() -> None:
    store = ItemStore([GridItem(), GridItem(id="b")])
    assert store.find("b") is store[1]
    assert store.find("missing") is None


def test_sort_by_position_is_stable_and_puts_unplaced_last() -> None:
    unplaced = GridItem(id="u")
    a = GridItem(id="a", x=2, y=0)
    b = GridItem(id="b", x=0, y=1)
    c = GridItem(id="c", x=2, y=0)
    store = ItemStore([unplaced, b, a, c])

    store.sort_by_position()

    assert [item.id for item in store] == ["a", "c", "b", "u"]
