# procedures/containers.py
"""
Presentation containers that consume the navigation contract.

A container owns one NavigationController, the local open/closed flag of
every rendered card, and the element handles used as scroll targets. Card
flags are *seeded* from the controller's ``expanded_id``: a navigation opens
the target card, but cards are otherwise toggled independently and several
may be open at once.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .catalogue import CATALOGUE, Catalogue, Category, Procedure
from .constants.catalogue_data import GENERAL_RULES
from .display import CategoryDisplay, category_display
from .navigation import (
    CATEGORY_SETTLE_MS,
    EMERGENCY_DEFAULT_ID,
    ElementHandle,
    NavigationController,
    NavigationState,
    browser_controller,
    emergency_controller,
)
from .scheduling import ManualScheduler, Scheduler


class CardDisclosure:
    """Local open/closed flag of one procedure card."""

    def __init__(self, open: bool = False):
        self.open = open

    def seed(self, expanded: bool) -> None:
        # a seed only ever opens; closing is left to the user
        if expanded:
            self.open = True

    def toggle(self) -> bool:
        self.open = not self.open
        return self.open


@dataclass(frozen=True)
class ScrollRequest:
    procedure_id: str
    behavior: str
    block: str


@dataclass
class AnchorElement:
    """Scroll target for a server-rendered card; records scroll requests."""

    procedure_id: str
    requests: list = field(default_factory=list)

    def scroll_into_view(self, *, behavior: str, block: str) -> None:
        self.requests.append(ScrollRequest(self.procedure_id, behavior, block))


@dataclass(frozen=True)
class CardView:
    procedure: Procedure
    display: CategoryDisplay
    open: bool
    highlighted: bool

    @property
    def anchor(self) -> str:
        return f"procedure-{self.procedure.id}"


@dataclass(frozen=True)
class SectionView:
    category: Category
    display: CategoryDisplay
    count: int
    collapsed: bool
    cards: tuple[CardView, ...]


class ProcedureContainer:
    """Shared behaviour of the emergency view and the procedures browser."""

    #: categories shown, in order
    categories: tuple[Category, ...] = tuple(Category)

    def __init__(
        self,
        controller: NavigationController,
        *,
        open_ids: Iterable[str] = (),
        closed_ids: Iterable[str] = (),
    ):
        self.controller = controller
        self.catalogue: Catalogue = controller.catalogue
        self.cards: dict[str, CardDisclosure] = {}
        self.elements: dict[str, ElementHandle] = {}
        self.scroll_requests: list[ScrollRequest] = []
        self._last_expanded = controller.expanded_id
        self._last_collapsed = controller.collapsed_categories

        controller.set_locator(self.elements.get)
        self._unsubscribe = controller.subscribe(self._on_state)
        self._mount_cards()
        for procedure_id in open_ids:
            card = self.cards.get(procedure_id)
            if card is not None:
                card.open = True
        # closed wins over a seed from the initial expanded_id
        for procedure_id in closed_ids:
            card = self.cards.get(procedure_id)
            if card is not None:
                card.open = False

    # -----------------------------
    # Card lifecycle
    # -----------------------------

    def _seed_open(self, procedure_id: str) -> bool:
        return procedure_id == self.controller.expanded_id

    def _visible_procedures(self) -> Iterable[Procedure]:
        for category in self.categories:
            if self.controller.models_categories and self.controller.is_collapsed(category):
                continue
            yield from self.catalogue.get_by_category(category)

    def _mount_cards(self) -> None:
        visible = {p.id for p in self._visible_procedures()}
        for procedure_id in list(self.cards):
            if procedure_id not in visible:
                # collapsed group unmounts its cards; local state is lost
                del self.cards[procedure_id]
                self.elements.pop(procedure_id, None)
        for procedure_id in visible:
            if procedure_id not in self.cards:
                self.cards[procedure_id] = CardDisclosure(self._seed_open(procedure_id))

    def _on_state(self, state: NavigationState) -> None:
        if state.collapsed_categories != self._last_collapsed:
            self._last_collapsed = state.collapsed_categories
            self._mount_cards()
        if state.expanded_id != self._last_expanded:
            self._last_expanded = state.expanded_id
            self._seed(state.expanded_id)

    def _seed(self, procedure_id: Optional[str]) -> None:
        for card_id, card in self.cards.items():
            card.seed(card_id == procedure_id)

    # -----------------------------
    # User actions
    # -----------------------------

    def navigate_to(self, procedure_id) -> None:
        """Cross-reference activation: navigate, then re-seed the target card."""
        target = self.catalogue.get_by_id(procedure_id)
        self.controller.navigate_to(procedure_id)
        if target is not None and self.controller.expanded_id == target.id:
            self._seed(target.id)

    def toggle_card(self, procedure_id: str) -> Optional[bool]:
        card = self.cards.get(procedure_id)
        return card.toggle() if card is not None else None

    def toggle_category(self, category) -> None:
        self.controller.toggle_category(category)

    # -----------------------------
    # Rendering
    # -----------------------------

    def register_element(self, procedure_id: str, element: ElementHandle) -> None:
        self.elements[procedure_id] = element

    def card_view(self, procedure: Procedure) -> CardView:
        card = self.cards.get(procedure.id)
        return CardView(
            procedure=procedure,
            display=category_display(procedure.category),
            open=bool(card and card.open),
            highlighted=procedure.id == self.controller.highlighted_id,
        )

    def sections(self) -> list[SectionView]:
        sections = []
        for category in self.categories:
            procedures = self.catalogue.get_by_category(category)
            collapsed = self.controller.models_categories and self.controller.is_collapsed(category)
            sections.append(
                SectionView(
                    category=category,
                    display=category_display(category),
                    count=len(procedures),
                    collapsed=collapsed,
                    cards=() if collapsed else tuple(self.card_view(p) for p in procedures),
                )
            )
        return sections

    def render_pass(self, *, settle_ms: int = CATEGORY_SETTLE_MS) -> list[SectionView]:
        """
        Render one frame on a ManualScheduler.

        Builds the view model, registers an anchor per visible card, then
        runs the deferred callbacks (scrolls) that were waiting for the
        render, including the settle delay after a category expansion.
        """
        sections = self.sections()
        for section in sections:
            for card in section.cards:
                self.elements.setdefault(
                    card.procedure.id, AnchorElement(card.procedure.id, self.scroll_requests)
                )
        scheduler = self.controller.scheduler
        if isinstance(scheduler, ManualScheduler):
            scheduler.run_ready()
            if settle_ms:
                scheduler.advance(settle_ms)
        return sections

    @property
    def scroll_target(self) -> Optional[str]:
        return self.scroll_requests[-1].procedure_id if self.scroll_requests else None

    def open_ids(self) -> list[str]:
        return [pid for pid in self.catalogue.ids() if pid in self.cards and self.cards[pid].open]

    def closed_ids(self) -> list[str]:
        """Mounted cards the user closed although a fresh mount would seed them open."""
        return [
            pid for pid in self.catalogue.ids()
            if pid in self.cards and not self.cards[pid].open and self._seed_open(pid)
        ]

    def close(self) -> None:
        self._unsubscribe()
        self.controller.close()


class EmergencyContainer(ProcedureContainer):
    """Full-screen emergency view: flat sections, termination always open."""

    categories = (Category.EMERGENCY, Category.CONTINGENCY, Category.ERP)

    def __init__(self, scheduler: Optional[Scheduler] = None, *, catalogue: Catalogue = CATALOGUE, **kwargs):
        controller = emergency_controller(scheduler or ManualScheduler(), catalogue=catalogue)
        super().__init__(controller, **kwargs)

    def _seed_open(self, procedure_id: str) -> bool:
        return procedure_id == EMERGENCY_DEFAULT_ID or super()._seed_open(procedure_id)

    def quick_index(self) -> list[tuple[Procedure, bool]]:
        """Emergency procedures as index chips, flagged when currently expanded."""
        return [
            (p, p.id == self.controller.expanded_id)
            for p in self.catalogue.get_by_category(Category.EMERGENCY)
        ]


class BrowserContainer(ProcedureContainer):
    """General procedures browser with collapsible category groups."""

    general_rules = tuple(GENERAL_RULES)

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        *,
        catalogue: Catalogue = CATALOGUE,
        collapsed_categories=None,
        **kwargs,
    ):
        controller = browser_controller(
            scheduler or ManualScheduler(),
            catalogue=catalogue,
            collapsed_categories=collapsed_categories,
        )
        super().__init__(controller, **kwargs)
