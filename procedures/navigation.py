# procedures/navigation.py
"""
Cross-reference navigation and disclosure state for one presentation
container (emergency view or procedures browser).

State lives here, never on the catalogue records:

  - expanded_id          the card the container asks to be opened
  - highlighted_id       the card currently emphasised (cleared after 2 s)
  - collapsed_categories category groups not rendering their members

``navigate_to`` updates all three synchronously, then defers a scroll to
after the render pass (plus 100 ms when a category group was just opened)
and (re)starts the highlight-clear timer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol

from .catalogue import CATALOGUE, Catalogue, Category
from .scheduling import Handle, Scheduler

logger = logging.getLogger(__name__)


HIGHLIGHT_DURATION_MS = 2000
CATEGORY_SETTLE_MS = 100

SCROLL_BEHAVIOR = "smooth"
SCROLL_BLOCK = "center"

# Emergency view opens on the termination procedure.
EMERGENCY_DEFAULT_ID = "E1"

# Browser: emergency + ERP are reached through the emergency view, so they start collapsed.
BROWSER_DEFAULT_COLLAPSED = frozenset({Category.EMERGENCY, Category.ERP})


class ElementHandle(Protocol):
    def scroll_into_view(self, *, behavior: str, block: str) -> None: ...


Locator = Callable[[str], Optional[ElementHandle]]


@dataclass(frozen=True)
class NavigationState:
    expanded_id: Optional[str]
    highlighted_id: Optional[str]
    collapsed_categories: frozenset


class NavigationController:
    """
    Navigation contract shared by every procedure container.

    ``collapsed_categories=None`` means the container has no category
    model (emergency view); ``toggle_category`` is then a no-op and
    navigation never touches category state.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        catalogue: Catalogue = CATALOGUE,
        expanded_id: Optional[str] = None,
        collapsed_categories: Optional[Iterable] = None,
        locate: Optional[Locator] = None,
    ):
        self.scheduler = scheduler
        self.catalogue = catalogue
        self.expanded_id = expanded_id
        self.highlighted_id: Optional[str] = None
        self.models_categories = collapsed_categories is not None
        self._collapsed: set[Category] = (
            {Category(c) for c in collapsed_categories} if self.models_categories else set()
        )
        self._locate = locate
        self._listeners: list[Callable[[NavigationState], None]] = []
        self._highlight_timer: Optional[Handle] = None
        self._scroll_handles: list[Handle] = []
        self._closed = False

    # -----------------------------
    # Observable state
    # -----------------------------

    @property
    def collapsed_categories(self) -> frozenset:
        return frozenset(self._collapsed)

    @property
    def state(self) -> NavigationState:
        return NavigationState(self.expanded_id, self.highlighted_id, self.collapsed_categories)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def highlight_pending(self) -> bool:
        return self._highlight_timer is not None

    def is_collapsed(self, category) -> bool:
        return Category(category) in self._collapsed

    def subscribe(self, listener: Callable[[NavigationState], None]) -> Callable[[], None]:
        """Register a state listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_locator(self, locate: Optional[Locator]) -> None:
        self._locate = locate

    def _notify(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            listener(state)

    # -----------------------------
    # Operations
    # -----------------------------

    def navigate_to(self, procedure_id) -> None:
        if self._closed:
            return

        target = self.catalogue.get_by_id(procedure_id)
        if target is None:
            logger.debug("Ignoring navigation to unknown procedure %r", procedure_id)
            return

        category_opened = False
        if self.models_categories and target.category in self._collapsed:
            self._collapsed.discard(target.category)
            category_opened = True

        self.expanded_id = target.id
        self.highlighted_id = target.id
        logger.debug(
            "Navigate to %s (category %s%s)",
            target.id, target.category.value, ", expanded" if category_opened else "",
        )
        # timers are armed before listeners run
        self._schedule_scroll(target.id, settle=category_opened)
        self._restart_highlight_timer()
        self._notify()

    def toggle_category(self, category) -> None:
        if self._closed or not self.models_categories:
            return
        category = Category(category)
        if category in self._collapsed:
            self._collapsed.discard(category)
        else:
            self._collapsed.add(category)
        self._notify()

    def close(self) -> None:
        """Cancel pending timers and drop listeners. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._cancel_scroll()
        if self._highlight_timer is not None:
            self._highlight_timer.cancel()
            self._highlight_timer = None
        self._listeners.clear()

    # -----------------------------
    # Deferred work
    # -----------------------------

    def _cancel_scroll(self) -> None:
        for handle in self._scroll_handles:
            handle.cancel()
        self._scroll_handles = []

    def _schedule_scroll(self, procedure_id: str, *, settle: bool) -> None:
        self._cancel_scroll()

        def after_render():
            if settle:
                self._scroll_handles.append(
                    self.scheduler.call_later(CATEGORY_SETTLE_MS, lambda: self._scroll(procedure_id))
                )
            else:
                self._scroll(procedure_id)

        self._scroll_handles.append(self.scheduler.call_soon(after_render))

    def _scroll(self, procedure_id: str) -> None:
        self._scroll_handles = []
        element = self._locate(procedure_id) if self._locate else None
        if element is None:
            logger.debug("No element for procedure %s; scroll skipped", procedure_id)
            return
        element.scroll_into_view(behavior=SCROLL_BEHAVIOR, block=SCROLL_BLOCK)

    def _restart_highlight_timer(self) -> None:
        if self._highlight_timer is not None:
            self._highlight_timer.cancel()
        self._highlight_timer = self.scheduler.call_later(HIGHLIGHT_DURATION_MS, self._clear_highlight)

    def _clear_highlight(self) -> None:
        self._highlight_timer = None
        if self._closed:
            return
        self.highlighted_id = None
        self._notify()


# ---------------------------------------------------------------------
# Initial state per container
# ---------------------------------------------------------------------


def emergency_controller(scheduler: Scheduler, **kwargs) -> NavigationController:
    kwargs.setdefault("expanded_id", EMERGENCY_DEFAULT_ID)
    return NavigationController(scheduler, collapsed_categories=None, **kwargs)


def browser_controller(scheduler: Scheduler, *, collapsed_categories=None, **kwargs) -> NavigationController:
    if collapsed_categories is None:
        collapsed_categories = BROWSER_DEFAULT_COLLAPSED
    return NavigationController(scheduler, collapsed_categories=collapsed_categories, **kwargs)
