import asyncio

import pytest

from procedures import navigation
from procedures.catalogue import Category
from procedures.navigation import (
    BROWSER_DEFAULT_COLLAPSED,
    CATEGORY_SETTLE_MS,
    HIGHLIGHT_DURATION_MS,
    NavigationController,
    browser_controller,
    emergency_controller,
)
from procedures.scheduling import LoopScheduler

from .conftest import ElementRegistry, make_catalogue, record


# -----------------------------
# Initial state
# -----------------------------

def test_browser_initial_state(browser):
    assert browser.expanded_id is None
    assert browser.highlighted_id is None
    assert browser.collapsed_categories == frozenset({Category.EMERGENCY, Category.ERP})
    assert browser.models_categories


def test_emergency_initial_state(emergency):
    assert emergency.expanded_id == "E1"
    assert emergency.highlighted_id is None
    assert emergency.collapsed_categories == frozenset()
    assert not emergency.models_categories


def test_browser_default_collapsed_is_not_shared(scheduler):
    a = browser_controller(scheduler)
    b = browser_controller(scheduler)
    a.toggle_category(Category.EMERGENCY)
    assert b.collapsed_categories == BROWSER_DEFAULT_COLLAPSED


# -----------------------------
# navigate_to
# -----------------------------

def test_navigate_to_unknown_id_is_noop(browser, scheduler):
    before = browser.state
    browser.navigate_to("DOES-NOT-EXIST")
    assert browser.state == before
    assert scheduler.pending == 0


def test_navigate_sets_targets_synchronously(browser, scheduler):
    browser.navigate_to("C4.1")
    assert browser.expanded_id == "C4.1"
    assert browser.highlighted_id == "C4.1"
    assert scheduler.now == 0


def test_navigate_expands_collapsed_category(browser):
    assert Category.EMERGENCY in browser.collapsed_categories
    browser.navigate_to("E1")
    assert Category.EMERGENCY not in browser.collapsed_categories
    assert Category.ERP in browser.collapsed_categories


def test_highlight_expires_after_duration(browser, scheduler):
    browser.navigate_to("N2")
    scheduler.advance(HIGHLIGHT_DURATION_MS - 1)
    assert browser.highlighted_id == "N2"
    scheduler.advance(1)
    assert browser.highlighted_id is None
    # expansion request survives the highlight
    assert browser.expanded_id == "N2"


def test_second_navigation_supersedes_highlight_timer(browser, scheduler):
    browser.navigate_to("N2")
    scheduler.advance(500)
    browser.navigate_to("N3")
    scheduler.advance(1100)
    assert browser.highlighted_id == "N3"

    scheduler.advance(899)
    assert browser.highlighted_id == "N3"
    scheduler.advance(1)
    assert browser.highlighted_id is None


def test_only_one_highlight_timer_pending(browser, scheduler):
    browser.navigate_to("N2")
    browser.navigate_to("N3")
    browser.navigate_to("N4")
    scheduler.run_ready()
    # all scrolls done; a single highlight clear remains
    assert scheduler.pending == 1


def test_conditional_reference_end_to_end(browser):
    c1 = browser.catalogue.get_by_id("C1")
    (reference,) = [c.reference_id for c in c1.conditionals if c.reference_id]
    assert reference == "E1"

    browser.navigate_to(reference)

    assert browser.expanded_id == "E1"
    assert browser.highlighted_id == "E1"
    assert Category.EMERGENCY not in browser.collapsed_categories


def test_navigate_to_same_category_again_keeps_it_open(browser):
    browser.navigate_to("N1")
    browser.navigate_to("N6")
    assert Category.NORMAL not in browser.collapsed_categories


def test_emergency_navigation_never_touches_categories(emergency):
    emergency.navigate_to("ERP-FA")
    assert emergency.expanded_id == "ERP-FA"
    assert emergency.collapsed_categories == frozenset()


# -----------------------------
# Scroll
# -----------------------------

def test_scroll_is_deferred_to_after_render(browser, scheduler, elements):
    browser.navigate_to("N3")
    assert elements["N3"].scrolls == []
    scheduler.run_ready()
    assert elements["N3"].scrolls == [{"behavior": "smooth", "block": "center"}]


def test_scroll_waits_for_category_to_settle(browser, scheduler, elements):
    browser.navigate_to("E2")
    scheduler.run_ready()
    assert elements["E2"].scrolls == []
    scheduler.advance(CATEGORY_SETTLE_MS - 1)
    assert elements["E2"].scrolls == []
    scheduler.advance(1)
    assert len(elements["E2"].scrolls) == 1


def test_scroll_skipped_when_element_missing(scheduler):
    registry = ElementRegistry()
    controller = browser_controller(scheduler, locate=registry.locate)
    controller.navigate_to("N1")
    scheduler.run_ready()
    assert controller.expanded_id == "N1"


def test_newer_navigation_replaces_pending_scroll(browser, scheduler, elements):
    browser.navigate_to("N2")
    browser.navigate_to("N5")
    scheduler.run_ready()
    assert elements["N2"].scrolls == []
    assert len(elements["N5"].scrolls) == 1


# -----------------------------
# toggle_category
# -----------------------------

def test_toggle_category_flips_membership(browser):
    browser.toggle_category(Category.NORMAL)
    assert Category.NORMAL in browser.collapsed_categories
    browser.toggle_category("normal")
    assert Category.NORMAL not in browser.collapsed_categories


def test_toggle_category_leaves_targets_alone(browser, scheduler):
    browser.navigate_to("C2")
    browser.toggle_category(Category.CONTINGENCY)
    assert browser.expanded_id == "C2"
    assert browser.highlighted_id == "C2"


def test_toggle_unknown_category_raises_value_error(browser):
    with pytest.raises(ValueError):
        browser.toggle_category("weather")


def test_toggle_is_noop_without_category_model(emergency):
    emergency.toggle_category(Category.ERP)
    assert emergency.collapsed_categories == frozenset()


# -----------------------------
# Listeners / teardown
# -----------------------------

def test_listeners_see_every_transition(browser, scheduler):
    seen = []
    unsubscribe = browser.subscribe(seen.append)

    browser.navigate_to("E3")
    assert seen[-1].expanded_id == "E3"
    assert seen[-1].highlighted_id == "E3"
    assert Category.EMERGENCY not in seen[-1].collapsed_categories

    scheduler.advance(HIGHLIGHT_DURATION_MS + CATEGORY_SETTLE_MS)
    assert seen[-1].highlighted_id is None

    unsubscribe()
    browser.toggle_category(Category.NORMAL)
    assert len(seen) == 2


def test_close_cancels_pending_highlight(browser, scheduler, elements):
    seen = []
    browser.subscribe(seen.append)
    browser.navigate_to("E1")
    assert browser.highlight_pending

    browser.close()
    assert browser.closed
    assert not browser.highlight_pending
    assert scheduler.pending == 0

    scheduler.advance(HIGHLIGHT_DURATION_MS * 2)
    assert len(seen) == 1
    assert elements["E1"].scrolls == []


def test_navigate_after_close_is_noop(browser):
    browser.close()
    browser.navigate_to("N1")
    assert browser.expanded_id is None
    browser.close()


def test_custom_catalogue_dangling_reference_is_noop(scheduler):
    catalogue = make_catalogue(record("A", references=["MISSING"]))
    controller = NavigationController(scheduler, catalogue=catalogue, collapsed_categories=())
    (cond,) = catalogue.get_by_id("A").conditionals
    controller.navigate_to(cond.reference_id)
    assert controller.expanded_id is None
    assert controller.highlighted_id is None


# -----------------------------
# asyncio event loop
# -----------------------------

def test_runs_on_asyncio_loop(monkeypatch):
    monkeypatch.setattr(navigation, "HIGHLIGHT_DURATION_MS", 20)
    registry = ElementRegistry()
    registry.add("C6")

    async def scenario():
        controller = browser_controller(LoopScheduler(), locate=registry.locate)
        controller.navigate_to("C6")
        assert controller.highlighted_id == "C6"

        await asyncio.sleep(0)
        assert len(registry["C6"].scrolls) == 1

        await asyncio.sleep(0.1)
        assert controller.highlighted_id is None
        controller.close()

    asyncio.run(scenario())


def test_close_on_asyncio_loop_cancels_timer():
    async def scenario():
        controller = emergency_controller(LoopScheduler())
        controller.navigate_to("E2")
        controller.close()
        assert not controller.highlight_pending
        assert controller.highlighted_id == "E2"

    asyncio.run(scenario())


def test_failing_listener_still_arms_highlight_timer(browser, scheduler, elements):
    def broken(state):
        raise RuntimeError("listener failed")

    unsubscribe = browser.subscribe(broken)
    with pytest.raises(RuntimeError):
        browser.navigate_to("N2")
    unsubscribe()

    assert browser.highlighted_id == "N2"
    assert browser.highlight_pending
    scheduler.advance(HIGHLIGHT_DURATION_MS)
    assert browser.highlighted_id is None
    assert len(elements["N2"].scrolls) == 1
