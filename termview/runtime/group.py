"""Container view owning children, focus, z-order and multi-phase dispatch."""

from __future__ import annotations

import logging

from termview.api.events import (
    BroadcastEvent,
    Event,
    NothingEvent,
    PointerEvent,
    is_transformation,
)
from termview.api.geometry import Point, Rect
from termview.api.surface import Cell, Surface
from termview.api.view import OptionFlag, StateFlag, ViewNode
from termview.runtime.config import get_runtime_config
from termview.runtime.view import View

_LOG = logging.getLogger("termview.dispatch")


class Group(View):
    """Owns an ordered child list (tab order) and an independent z-order.

    Keyboard and command events run three phases: pre-process children in
    insertion order, then the focused child, then post-process children.
    Pointer events go to the front-most visible child under the pointer.
    Broadcasts reach every child. When a child transforms an event into a
    different variant, the transformed event is dispatched again at this
    level and that result ends the pass.

    Adds and removes issued while the group is mid-dispatch are queued and
    applied once the outermost dispatch of this group returns.
    """

    def __init__(
        self,
        bounds: Rect,
        *,
        options: OptionFlag = OptionFlag.NONE,
        state: StateFlag = StateFlag.VISIBLE,
        background: Cell | None = None,
        max_redispatch_depth: int | None = None,
    ) -> None:
        super().__init__(bounds, options=options, state=state)
        self._children: list[ViewNode] = []
        self._z_order: list[ViewNode] = []
        self._focus_index: int | None = None
        self._background = background
        self._max_redispatch_depth = max_redispatch_depth
        self._traversal_depth = 0
        self._pending: list[tuple[str, ViewNode]] = []

    @property
    def children(self) -> tuple[ViewNode, ...]:
        """Children in insertion (tab) order."""
        return tuple(self._children)

    @property
    def child_count(self) -> int:
        return len(self._children)

    @property
    def z_order(self) -> tuple[ViewNode, ...]:
        """Children back to front."""
        return tuple(self._z_order)

    @property
    def focused_index(self) -> int | None:
        return self._focus_index

    @property
    def focused_child(self) -> ViewNode | None:
        if self._focus_index is None:
            return None
        return self._children[self._focus_index]

    @property
    def is_traversing(self) -> bool:
        return self._traversal_depth > 0

    @property
    def pending_mutations(self) -> int:
        return len(self._pending)

    def index_of(self, view: ViewNode) -> int | None:
        for index, child in enumerate(self._children):
            if child is view:
                return index
        return None

    def child_at_point(self, point: Point) -> ViewNode | None:
        """Return the front-most visible child containing ``point``."""
        for child in reversed(self._z_order):
            if child.get_state(StateFlag.VISIBLE) and child.bounds().contains(point):
                return child
        return None

    def add(self, view: ViewNode, *, immediate: bool = False) -> None:
        """Insert a child whose bounds are relative to this group's origin."""
        if self._traversal_depth and not immediate:
            self._pending.append(("add", view))
            return
        self._insert(view)

    def remove(self, index: int) -> ViewNode | None:
        """Detach and return the child at ``index``; out of range is a no-op."""
        if not 0 <= index < len(self._children):
            return None
        view = self._children[index]
        if self._traversal_depth:
            self._pending.append(("remove", view))
            return view
        self._detach(view)
        return view

    def remove_view(self, view: ViewNode) -> bool:
        index = self.index_of(view)
        if index is None:
            return False
        self.remove(index)
        return True

    def apply_pending(self) -> None:
        pending, self._pending = self._pending, []
        for operation, view in pending:
            if operation == "add":
                self._insert(view)
            else:
                self._detach(view)

    def set_focus(self, index: int) -> bool:
        """Focus the child at ``index``; invalid or unfocusable targets keep focus."""
        if not 0 <= index < len(self._children):
            return False
        target = self._children[index]
        if not target.can_focus():
            return False
        if self._focus_index == index:
            return True
        previous = self.focused_child
        if previous is not None:
            previous.set_state(StateFlag.FOCUSED, False)
        self._focus_index = index
        target.set_state(StateFlag.FOCUSED, True)
        return True

    def clear_focus(self) -> None:
        previous = self.focused_child
        if previous is not None:
            previous.set_state(StateFlag.FOCUSED, False)
        self._focus_index = None

    def focus_next(self) -> bool:
        count = len(self._children)
        start = -1 if self._focus_index is None else self._focus_index
        for step in range(1, count + 1):
            index = (start + step) % count
            if self._children[index].can_focus():
                return self.set_focus(index)
        return False

    def focus_prev(self) -> bool:
        count = len(self._children)
        start = 0 if self._focus_index is None else self._focus_index
        for step in range(1, count + 1):
            index = (start - step) % count
            if self._children[index].can_focus():
                return self.set_focus(index)
        return False

    def set_initial_focus(self) -> bool:
        for index, child in enumerate(self._children):
            if child.can_focus():
                return self.set_focus(index)
        return False

    def bring_to_front(self, view: ViewNode) -> bool:
        """Move ``view`` to the top of the z-order; tab order is untouched."""
        if not self._drop_from_z_order(view):
            return False
        self._z_order.append(view)
        return True

    def send_to_back(self, view: ViewNode) -> bool:
        if not self._drop_from_z_order(view):
            return False
        self._z_order.insert(0, view)
        return True

    def set_bounds(self, rect: Rect) -> None:
        """Move the group and shift every child by the same offset."""
        dx = rect.origin.x - self._bounds.origin.x
        dy = rect.origin.y - self._bounds.origin.y
        super().set_bounds(rect)
        if dx == 0 and dy == 0:
            return
        for child in self._children:
            child.set_bounds(child.bounds().moved(dx, dy))

    def draw(self, surface: Surface) -> None:
        if self._background is not None:
            self.fill(surface, *self._background)
        for child in tuple(self._z_order):
            if child.get_state(StateFlag.VISIBLE):
                child.draw(surface)

    def handle_event(self, event: Event) -> Event:
        return self.dispatch(event)

    def dispatch(self, event: Event) -> Event:
        self._traversal_depth += 1
        try:
            return self._dispatch(event, 0)
        finally:
            self._traversal_depth -= 1
            if self._traversal_depth == 0 and self._pending:
                self.apply_pending()

    def _dispatch(self, event: Event, depth: int) -> Event:
        if isinstance(event, NothingEvent):
            return event
        if isinstance(event, BroadcastEvent):
            return self._dispatch_broadcast(event, depth)
        if isinstance(event, PointerEvent):
            return self._dispatch_pointer(event, depth)
        return self._dispatch_phases(event, depth)

    def _dispatch_phases(self, event: Event, depth: int) -> Event:
        children = tuple(self._children)
        focused = self.focused_child
        for child in children:
            if not child.get_option(OptionFlag.PRE_PROCESS) or child.get_state(StateFlag.DISABLED):
                continue
            event, settled = self._offer(child, event, depth)
            if settled:
                return event
        if focused is not None and not focused.get_state(StateFlag.DISABLED):
            event, settled = self._offer(focused, event, depth)
            if settled:
                return event
        for child in children:
            if not child.get_option(OptionFlag.POST_PROCESS) or child.get_state(StateFlag.DISABLED):
                continue
            event, settled = self._offer(child, event, depth)
            if settled:
                return event
        return event

    def _dispatch_pointer(self, event: PointerEvent, depth: int) -> Event:
        focused = self.focused_child
        if (
            focused is not None
            and event.action != "mouse_down"
            and focused.get_state(StateFlag.DRAGGING)
        ):
            return self._offer(focused, event, depth)[0]
        target = self.child_at_point(event.position)
        if target is None or target.get_state(StateFlag.DISABLED):
            return event
        if event.action == "mouse_down":
            if target.get_option(OptionFlag.TOP_SELECT):
                self.bring_to_front(target)
            if target.can_focus() and not target.get_state(StateFlag.FOCUSED):
                index = self.index_of(target)
                if index is not None:
                    self.set_focus(index)
        return self._offer(target, event, depth)[0]

    def _dispatch_broadcast(self, event: BroadcastEvent, depth: int) -> Event:
        follow_ups: list[Event] = []
        for child in tuple(self._children):
            result = child.handle_event(event)
            if is_transformation(event, result):
                follow_ups.append(result)
        for follow_up in follow_ups:
            self._redispatch(follow_up, depth)
        return event

    def _offer(self, child: ViewNode, event: Event, depth: int) -> tuple[Event, bool]:
        """Hand ``event`` to ``child``; the flag reports whether this pass is over."""
        result = child.handle_event(event)
        if isinstance(result, NothingEvent):
            return result, True
        if is_transformation(event, result):
            return self._redispatch(result, depth), True
        return result, False

    def _redispatch(self, event: Event, depth: int) -> Event:
        limit = self._redispatch_limit()
        if depth >= limit:
            _LOG.warning(
                "redispatch_depth_exceeded group=%s event=%s limit=%d",
                type(self).__name__,
                event,
                limit,
            )
            return event
        _LOG.debug("redispatch group=%s event=%s depth=%d", type(self).__name__, event, depth + 1)
        return self._dispatch(event, depth + 1)

    def _redispatch_limit(self) -> int:
        if self._max_redispatch_depth is not None:
            return self._max_redispatch_depth
        return get_runtime_config().loop.max_redispatch_depth

    def _insert(self, view: ViewNode) -> None:
        relative = view.bounds()
        if view.get_option(OptionFlag.CENTERED):
            x = (self._bounds.width - relative.width) // 2
            y = (self._bounds.height - relative.height) // 2
            relative = Rect.sized(x, y, relative.width, relative.height)
        view.set_bounds(relative.offset_by(self._bounds.origin))
        self._children.append(view)
        self._z_order.append(view)

    def _detach(self, view: ViewNode) -> None:
        index = self.index_of(view)
        if index is None:
            return
        if self._focus_index == index:
            view.set_state(StateFlag.FOCUSED, False)
            self._focus_index = None
        elif self._focus_index is not None and index < self._focus_index:
            self._focus_index -= 1
        del self._children[index]
        self._drop_from_z_order(view)
        view.set_bounds(view.bounds().relative_to(self._bounds.origin))

    def _drop_from_z_order(self, view: ViewNode) -> bool:
        for index, child in enumerate(self._z_order):
            if child is view:
                del self._z_order[index]
                return True
        return False
