"""Interactive display helpers and the pointer-driven resize session."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from enum import StrEnum

from tilegrid.api.display_adapter import DisplayAdapter
from tilegrid.api.errors import MissingCapability
from tilegrid.api.events import (
    EventBus,
    PostAddItemToDisplay,
    PreAddItemToDisplay,
    Subscription,
)
from tilegrid.api.input_events import POINTER_MOVE, POINTER_UP, PointerEvent
from tilegrid.api.items import Dimensions, DisplayFit, DisplayItem, GridItem
from tilegrid.api.settings import DisplaySettings, InteractionSettings
from tilegrid.core.display import DisplayGrid
from tilegrid.runtime.scheduler import Scheduler

_LOG = logging.getLogger("tilegrid.interaction")

CalculateHook = Callable[[object, float, float, DisplaySettings], None]
UpdateHook = Callable[[PointerEvent], None]
FinishHook = Callable[[GridItem, DisplayFit | None], None]


class InteractiveGrid:
    """Places display items through an adapter and starts resize sessions."""

    def __init__(
        self,
        display: DisplayGrid,
        settings: InteractionSettings | None = None,
        *,
        adapter: DisplayAdapter | None = None,
        input_bus: EventBus | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.display = display
        self.settings = settings if settings is not None else InteractionSettings()
        self.adapter = adapter if adapter is not None else display.adapter
        if self.adapter is None:
            raise MissingCapability("interactive grids need a DisplayAdapter")
        if display.adapter is None:
            display.adapter = self.adapter
        self.input_bus = input_bus
        self.scheduler = scheduler

    @property
    def container(self) -> object:
        element = self.display.settings.display_element
        if element is None:
            raise MissingCapability("no display element has been set")
        return element

    def get_display_item(self, ref: int | GridItem | DisplayItem) -> DisplayItem | None:
        """Resolve a display index, grid item or display item to a display item.

        An integer indexes the display list, which skips unplaced items, so it
        can differ from the same index into ``grid.items``.
        """
        if isinstance(ref, int) and not isinstance(ref, bool):
            if 0 <= ref < len(self.display.display):
                return self.display.display[ref]
            ref = None
        elif isinstance(ref, GridItem):
            ref = ref.display_item
        if not isinstance(ref, DisplayItem):
            _LOG.error("display_item_invalid ref=%r", ref)
            return None
        return ref

    def reset_display_size(self) -> None:
        """Shrink the container back to a single cell of height."""
        self.adapter.set_element_size(self.container, height=self.display.settings.cell_height)

    def resize_display_for_item(self, ref: int | GridItem | DisplayItem) -> bool:
        """Grow the container so the item fits with one cell of padding."""
        display_item = self.get_display_item(ref)
        if display_item is None:
            return False
        display_settings = self.display.settings
        container = self.container
        width, height = self.adapter.element_size(container)
        changed = False
        if self.settings.resize_display_height:
            bottom = display_item.y + display_item.h
            if bottom >= height:
                self.adapter.set_element_size(
                    container, height=bottom + display_settings.cell_height
                )
                changed = True
        if self.settings.resize_display_width:
            right = display_item.x + display_item.w
            if right >= width:
                self.adapter.set_element_size(container, width=right + display_settings.cell_width)
                changed = True
        if changed:
            self.display.set_display_element(None, rebuild_display=False)
        return changed

    def add_item_to_display(self, ref: int | GridItem | DisplayItem, element: object) -> bool:
        """Attach, position and size a host element for a display item."""
        display_item = self.get_display_item(ref)
        if display_item is None:
            return False
        if element is None:
            _LOG.error("display_element_invalid element=%r", element)
            return False
        events = self.display.events
        events.publish(PreAddItemToDisplay(self, display_item=display_item, element=element))
        self.resize_display_for_item(display_item)
        container = self.container
        self.adapter.append(container, element)
        self.adapter.position(element, container, display_item.x, display_item.y)
        self.adapter.set_element_size(element, width=display_item.w, height=display_item.h)
        events.publish(PostAddItemToDisplay(self, display_item=display_item, element=element))
        return True

    def element_dimensions(self, element: object) -> Dimensions | None:
        """Convert an element's rendered pixel size to whole cells."""
        cell_w = self.display.settings.cell_width
        cell_h = self.display.settings.cell_height
        if not cell_w or not cell_h:
            _LOG.error("element_dimensions_unknown_cell_size cell_w=%s cell_h=%s", cell_w, cell_h)
            return None
        width, height = self.adapter.element_size(element)
        return Dimensions(w=_round_half_up(width / cell_w), h=_round_half_up(height / cell_h))

    def start_resize(
        self,
        event: PointerEvent,
        element: object,
        item: GridItem,
        *,
        use_events: bool = False,
        use_callback: bool | None = None,
        interval_seconds: float | None = None,
        on_update: UpdateHook | None = None,
        on_calculate: CalculateHook | None = None,
        do_calculate: CalculateHook | None = None,
        on_finish: FinishHook | None = None,
    ) -> ResizeSession:
        """Begin resizing ``item`` from the pointer-down ``event`` on ``element``."""
        if use_callback is None:
            use_callback = self.settings.resize_use_callback
        session = ResizeSession(
            self,
            element,
            item,
            mode=ResizeMode.POLL if use_callback else ResizeMode.EVENT,
            subscribe=use_events,
            interval_seconds=interval_seconds or self.settings.resize_interval_seconds,
            on_update=on_update,
            on_calculate=on_calculate,
            do_calculate=do_calculate,
            on_finish=on_finish,
        )
        session.start(event)
        return session


class ResizeState(StrEnum):
    IDLE = "IDLE"
    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"


class ResizeMode(StrEnum):
    """How the preview size is recomputed while a session is active."""

    EVENT = "EVENT"  # on every pointer sample
    POLL = "POLL"  # on a fixed scheduler interval


class ResizeSession:
    """Single-use resize of one item: live pixel preview, logical commit on finish.

    The logical grid is never touched while previewing. ``finish`` commits the
    previewed size only when it fits at the item's position; otherwise the
    grid is left as it was and the caller is expected to revert the preview
    (``restore_element`` does that).
    """

    def __init__(
        self,
        owner: InteractiveGrid,
        element: object,
        item: GridItem,
        *,
        mode: ResizeMode = ResizeMode.EVENT,
        subscribe: bool = False,
        interval_seconds: float = 0.025,
        on_update: UpdateHook | None = None,
        on_calculate: CalculateHook | None = None,
        do_calculate: CalculateHook | None = None,
        on_finish: FinishHook | None = None,
    ) -> None:
        self.owner = owner
        self.element = element
        self.item = item
        self.mode = mode
        self.subscribe = subscribe
        self.interval_seconds = interval_seconds
        self.on_update = on_update
        self.on_calculate = on_calculate
        self.do_calculate = do_calculate
        self.on_finish = on_finish
        self.state = ResizeState.IDLE
        self.start_x = 0.0
        self.start_y = 0.0
        self.current_x = 0.0
        self.current_y = 0.0
        self.width = 0.0
        self.height = 0.0
        self.preview: tuple[float, float] | None = None
        self._subscription: Subscription | None = None
        self._task_id: int | None = None

    @property
    def active(self) -> bool:
        return self.state is ResizeState.ACTIVE

    def start(self, event: PointerEvent) -> None:
        """Capture the starting pointer and element size and arm the driver."""
        if self.state is not ResizeState.IDLE:
            raise RuntimeError(f"resize session cannot start from state {self.state}")
        owner = self.owner
        if self.subscribe and owner.input_bus is None:
            raise MissingCapability("event-driven resize needs an input event bus")
        if self.mode is ResizeMode.POLL and owner.scheduler is None:
            raise MissingCapability("poll-driven resize needs a scheduler")

        self.start_x = self.current_x = event.x
        self.start_y = self.current_y = event.y
        self.width, self.height = owner.adapter.element_size(self.element)
        if self.subscribe:
            self._subscription = owner.input_bus.subscribe(PointerEvent, self._on_pointer)
        if self.mode is ResizeMode.POLL:
            self._task_id = owner.scheduler.call_every(self.interval_seconds, self.calculate)
        self.state = ResizeState.ACTIVE
        _LOG.debug("resize_started item_id=%s mode=%s", self.item.id, self.mode)

    def update(self, event: PointerEvent) -> None:
        """Record a pointer sample; event mode recomputes the preview at once."""
        if not self.active:
            _LOG.debug("resize_update_ignored state=%s", self.state)
            return
        self.current_x = event.x
        self.current_y = event.y
        if self.mode is ResizeMode.EVENT:
            self.calculate()
        if self.on_update is not None:
            self.on_update(event)

    def calculate(self) -> tuple[float, float]:
        """Apply ``initial size + pointer delta`` to the element as a preview."""
        new_width = self.width + self.current_x - self.start_x
        new_height = self.height + self.current_y - self.start_y
        display_settings = self.owner.display.settings
        if self.do_calculate is not None:
            self.do_calculate(self.element, new_width, new_height, display_settings)
        else:
            adapter = self.owner.adapter
            if new_width >= display_settings.cell_width:
                adapter.set_element_size(self.element, width=new_width)
            if new_height >= display_settings.cell_height:
                adapter.set_element_size(self.element, height=new_height)
            if self.on_calculate is not None:
                self.on_calculate(self.element, new_width, new_height, display_settings)
        self.preview = (new_width, new_height)
        return self.preview

    def finish(self) -> DisplayFit | None:
        """Tear down the driver and commit the previewed size if it fits."""
        if not self.active:
            _LOG.debug("resize_finish_ignored state=%s", self.state)
            return None
        self._teardown()
        self.state = ResizeState.FINISHED

        display = self.owner.display
        dims = self.owner.element_dimensions(self.element)
        fit: DisplayFit | None = None
        if dims is not None:
            fit = display.display_item_fits(self.item, dims, is_grid_pos=True)
            if fit is not None and fit.fits:
                if not display.resize_item(self.item, dims):
                    _LOG.debug(
                        "resize_commit_failed item_id=%s w=%s h=%s", self.item.id, dims.w, dims.h
                    )
                    fit = DisplayFit(pos=fit.pos, fits=False, conflicts=fit.conflicts)
            else:
                _LOG.debug("resize_rejected item_id=%s w=%s h=%s", self.item.id, dims.w, dims.h)
        if self.on_finish is not None:
            self.on_finish(self.item, fit)
        return fit

    def restore_element(self) -> None:
        """Put the element back to the size it had when the session started."""
        self.owner.adapter.set_element_size(self.element, width=self.width, height=self.height)

    def _on_pointer(self, event: PointerEvent) -> None:
        if event.event_type == POINTER_MOVE:
            self.update(event)
        elif event.event_type == POINTER_UP:
            self.finish()

    def _teardown(self) -> None:
        owner = self.owner
        if self._subscription is not None and owner.input_bus is not None:
            owner.input_bus.unsubscribe(self._subscription)
            self._subscription = None
        if self._task_id is not None and owner.scheduler is not None:
            owner.scheduler.cancel(self._task_id)
            self._task_id = None


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


__all__ = ["InteractiveGrid", "ResizeMode", "ResizeSession", "ResizeState"]
