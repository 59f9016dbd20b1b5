from __future__ import annotations

import pytest

from procedures.catalogue import CATALOGUE, Catalogue
from procedures.navigation import NavigationController, browser_controller, emergency_controller
from procedures.scheduling import ManualScheduler


class RecordingElement:
    """Element handle that remembers every scroll request."""

    def __init__(self, procedure_id: str):
        self.procedure_id = procedure_id
        self.scrolls: list[dict] = []

    def scroll_into_view(self, *, behavior: str, block: str) -> None:
        self.scrolls.append({"behavior": behavior, "block": block})


class ElementRegistry(dict):
    def locate(self, procedure_id):
        return self.get(procedure_id)

    def add(self, procedure_id):
        self[procedure_id] = RecordingElement(procedure_id)
        return self[procedure_id]


def make_catalogue(*records: dict) -> Catalogue:
    return Catalogue.from_records(records)


def record(id, category="normal", references=(), **extra):
    data = {
        "id": id,
        "title": f"Procedure {id}",
        "short_title": id,
        "category": category,
        "description": "",
        "actions": [{"role": "RPIC", "steps": ["Do the thing"]}],
        "conditionals": [
            {"condition": f"go {ref}", "action": "see", "reference_id": ref} for ref in references
        ],
    }
    data.update(extra)
    return data


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def elements() -> ElementRegistry:
    registry = ElementRegistry()
    for procedure_id in CATALOGUE.ids():
        registry.add(procedure_id)
    return registry


@pytest.fixture
def browser(scheduler, elements) -> NavigationController:
    controller = browser_controller(scheduler, locate=elements.locate)
    yield controller
    controller.close()


@pytest.fixture
def emergency(scheduler, elements) -> NavigationController:
    controller = emergency_controller(scheduler, locate=elements.locate)
    yield controller
    controller.close()
