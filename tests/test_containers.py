from procedures.catalogue import Category
from procedures.containers import BrowserContainer, CardDisclosure, EmergencyContainer
from procedures.navigation import HIGHLIGHT_DURATION_MS
from procedures.scheduling import ManualScheduler


def _card_ids(sections):
    return [card.procedure.id for section in sections for card in section.cards]


# -----------------------------
# Card disclosure
# -----------------------------

def test_seed_only_opens():
    card = CardDisclosure()
    card.seed(False)
    assert not card.open
    card.seed(True)
    assert card.open
    card.seed(False)
    assert card.open
    assert card.toggle() is False


# -----------------------------
# Browser
# -----------------------------

def test_browser_renders_only_expanded_categories():
    container = BrowserContainer()
    sections = container.render_pass()
    assert [s.category for s in sections] == list(Category)
    assert [s.collapsed for s in sections] == [False, False, True, True]
    ids = _card_ids(sections)
    assert "N1" in ids and "C6" in ids
    assert "E1" not in ids and "ERP" not in ids
    # collapsed groups still report their size
    assert sections[2].count == 3
    assert not any(card.open for s in sections for card in s.cards)
    container.close()


def test_cross_reference_from_c1_opens_e1():
    scheduler = ManualScheduler()
    container = BrowserContainer(scheduler)
    container.render_pass()

    reference = container.catalogue.get_by_id("C1").conditionals[0].reference_id
    container.navigate_to(reference)

    assert container.controller.expanded_id == "E1"
    assert container.controller.highlighted_id == "E1"
    assert not container.controller.is_collapsed(Category.EMERGENCY)
    assert container.cards["E1"].open

    sections = container.render_pass()
    e1 = next(c for s in sections for c in s.cards if c.procedure.id == "E1")
    assert e1.open and e1.highlighted
    assert container.scroll_target == "E1"
    assert container.scroll_requests[-1].block == "center"
    container.close()


def test_cards_open_independently():
    container = BrowserContainer()
    container.toggle_card("N1")
    container.navigate_to("N2")
    container.toggle_card("C0")
    assert container.open_ids() == ["N1", "N2", "C0"]
    container.close()


def test_navigation_reopens_manually_closed_target():
    container = BrowserContainer()
    container.navigate_to("N4")
    container.toggle_card("N4")
    assert not container.cards["N4"].open
    container.navigate_to("N4")
    assert container.cards["N4"].open
    container.close()


def test_collapsing_a_category_drops_card_state():
    container = BrowserContainer()
    container.toggle_card("N1")
    container.toggle_category(Category.NORMAL)
    assert "N1" not in container.cards
    container.toggle_category(Category.NORMAL)
    assert container.cards["N1"].open is False
    container.close()


def test_navigation_with_padded_id_reseeds_card():
    container = BrowserContainer()
    container.navigate_to("N4")
    container.toggle_card("N4")
    container.navigate_to(" N4 ")
    assert container.controller.expanded_id == "N4"
    assert container.cards["N4"].open
    container.close()


def test_open_ids_restore_card_state():
    container = BrowserContainer(open_ids=["N3", "E1", "bogus"])
    # E1 sits in a collapsed group and is not mounted
    assert container.open_ids() == ["N3"]
    container.close()


def test_render_pass_highlight_clears_later():
    scheduler = ManualScheduler()
    container = BrowserContainer(scheduler, collapsed_categories=[])
    container.navigate_to("ERP-ABS")
    container.render_pass()
    assert container.controller.highlighted_id == "ERP-ABS"
    scheduler.advance(HIGHLIGHT_DURATION_MS)
    assert container.controller.highlighted_id is None
    container.close()


def test_close_detaches_from_controller():
    scheduler = ManualScheduler()
    container = BrowserContainer(scheduler)
    container.navigate_to("E1")
    container.close()
    assert container.controller.closed
    assert scheduler.pending == 0


# -----------------------------
# Emergency
# -----------------------------

def test_emergency_layout_and_default_open():
    container = EmergencyContainer()
    sections = container.render_pass()
    assert [s.category for s in sections] == [Category.EMERGENCY, Category.CONTINGENCY, Category.ERP]
    assert not any(s.collapsed for s in sections)
    assert "N1" not in _card_ids(sections)
    assert [pid for pid in container.open_ids()] == ["E1"]
    assert [(p.id, active) for p, active in container.quick_index()] == [
        ("E1", True), ("E2", False), ("E3", False),
    ]
    container.close()


def test_emergency_termination_stays_seeded_open():
    container = EmergencyContainer()
    container.navigate_to("E3")
    sections = container.render_pass()
    assert container.open_ids() == ["E1", "E3"]
    assert container.scroll_target == "E3"
    assert [(p.id, active) for p, active in container.quick_index()][2] == ("E3", True)
    e3 = next(c for s in sections for c in s.cards if c.procedure.id == "E3")
    assert e3.highlighted
    container.close()


def test_emergency_ignores_unknown_reference():
    container = EmergencyContainer()
    container.navigate_to("N9")
    container.render_pass()
    assert container.controller.expanded_id == "E1"
    assert container.scroll_target is None
    container.close()


def test_emergency_termination_can_be_closed():
    container = EmergencyContainer()
    container.toggle_card("E1")
    assert container.open_ids() == []
    assert container.closed_ids() == ["E1"]
    container.close()

    remounted = EmergencyContainer(closed_ids=["E1"])
    assert not remounted.cards["E1"].open
    assert remounted.closed_ids() == ["E1"]
    remounted.navigate_to("E1")
    assert remounted.cards["E1"].open
    assert remounted.closed_ids() == []
    remounted.close()


def test_closed_ids_win_over_open_ids():
    container = BrowserContainer(open_ids=["N2"], closed_ids=["N2"])
    assert container.open_ids() == []
    # N2 is not seeded open in the browser, so nothing to carry
    assert container.closed_ids() == []
    container.close()
