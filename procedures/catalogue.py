# procedures/catalogue.py
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Optional

from django.db import models


CALL_OUT_MARKER = "Call Out:"


class Category(models.TextChoices):
    """Severity tier of a procedure. Declaration order is display order."""

    NORMAL = "normal", "Normal procedures"
    CONTINGENCY = "contingency", "Contingency procedures"
    EMERGENCY = "emergency", "Emergency procedures"
    ERP = "erp", "Emergency response plan (ERP)"


class Role(models.TextChoices):
    RPIC = "RPIC", "RPIC"
    RP = "RP", "RP"
    GROUND_CREW = "Ground crew", "Ground crew"
    RPIC_OR_GROUND_CREW = "RPIC or ground crew", "RPIC or ground crew"
    ALL = "All", "All"


class DuplicateProcedureError(ValueError):
    """Raised when a catalogue is built with two procedures sharing an id."""


# ---------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class Step:
    """One instruction line. ``kind`` separates verbal call-outs from plain steps."""

    PLAIN = "plain"
    CALL_OUT = "call_out"

    text: str
    kind: str = PLAIN

    @classmethod
    def parse(cls, raw: str) -> "Step":
        """
        Build a Step from authored text.

        Text starting with ``"Call Out:"`` becomes a call-out; the marker and
        the blank after it are stripped.
        """
        if raw.startswith(CALL_OUT_MARKER):
            return cls(text=raw[len(CALL_OUT_MARKER):].lstrip(" "), kind=cls.CALL_OUT)
        return cls(text=raw)

    @property
    def is_call_out(self) -> bool:
        return self.kind == self.CALL_OUT

    def __str__(self) -> str:
        if self.is_call_out:
            return f"{CALL_OUT_MARKER} {self.text}"
        return self.text


@dataclass(frozen=True)
class ProcedureAction:
    role: Role
    steps: tuple[Step, ...]


@dataclass(frozen=True)
class ProcedureConditional:
    condition: str
    action: str
    reference_id: Optional[str] = None

    @property
    def has_reference(self) -> bool:
        return bool(self.reference_id)


@dataclass(frozen=True)
class Procedure:
    id: str
    title: str
    short_title: str
    category: Category
    description: str
    actions: tuple[ProcedureAction, ...] = ()
    general_notes: tuple[str, ...] = ()
    conditionals: tuple[ProcedureConditional, ...] = ()
    notes: tuple[str, ...] = ()

    @property
    def references(self) -> tuple[str, ...]:
        """Ids this procedure points at, in conditional order."""
        return tuple(c.reference_id for c in self.conditionals if c.has_reference)

    @property
    def call_outs(self) -> tuple[Step, ...]:
        return tuple(s for a in self.actions for s in a.steps if s.is_call_out)


def make_procedure(
    *,
    id: str,
    title: str,
    short_title: str,
    category: str,
    description: str,
    actions: Iterable[dict] = (),
    general_notes: Iterable[str] = (),
    conditionals: Iterable[dict] = (),
    notes: Iterable[str] = (),
) -> Procedure:
    """
    Build an immutable Procedure from plain authoring data.

    ``actions`` items are ``{"role": ..., "steps": [...]}``;
    ``conditionals`` items are ``{"condition", "action", "reference_id"?}``.
    """
    return Procedure(
        id=id,
        title=title,
        short_title=short_title,
        category=Category(category),
        description=description,
        actions=tuple(
            ProcedureAction(
                role=Role(a["role"]),
                steps=tuple(Step.parse(s) for s in a["steps"]),
            )
            for a in actions
        ),
        general_notes=tuple(general_notes),
        conditionals=tuple(
            ProcedureConditional(
                condition=c["condition"],
                action=c["action"],
                reference_id=c.get("reference_id") or None,
            )
            for c in conditionals
        ),
        notes=tuple(notes),
    )


# ---------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class Catalogue:
    """
    Read-only collection of procedures with lookup by id and by category.

    Insertion order is preserved everywhere. Category sequences are computed
    once, so repeated ``get_by_category`` calls return the same tuple.
    """

    procedures: tuple[Procedure, ...]
    _by_id: dict = field(init=False, repr=False, compare=False)
    _by_category: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        by_id: dict[str, Procedure] = {}
        for proc in self.procedures:
            if proc.id in by_id:
                raise DuplicateProcedureError(f"Duplicate procedure id {proc.id!r}")
            by_id[proc.id] = proc

        by_category = {
            cat: tuple(p for p in self.procedures if p.category == cat)
            for cat in Category
        }
        object.__setattr__(self, "_by_id", by_id)
        object.__setattr__(self, "_by_category", by_category)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "Catalogue":
        return cls(procedures=tuple(make_procedure(**r) for r in records))

    def __iter__(self) -> Iterator[Procedure]:
        return iter(self.procedures)

    def __len__(self) -> int:
        return len(self.procedures)

    def __contains__(self, procedure_id) -> bool:
        return self.get_by_id(procedure_id) is not None

    def get_by_id(self, procedure_id) -> Optional[Procedure]:
        """Return the procedure for ``procedure_id`` or None. Never raises."""
        if not isinstance(procedure_id, str):
            return None
        return self._by_id.get(procedure_id.strip())

    def get_by_category(self, category) -> tuple[Procedure, ...]:
        """All procedures of ``category`` in catalogue order; unknown category -> ()."""
        try:
            category = Category(category)
        except ValueError:
            return ()
        return self._by_category[category]

    def ids(self) -> tuple[str, ...]:
        return tuple(p.id for p in self.procedures)

    def categories(self) -> tuple[Category, ...]:
        return tuple(Category)

    def references(self) -> Iterator[tuple[str, ProcedureConditional]]:
        """Yield ``(source_id, conditional)`` for every cross-reference edge."""
        for proc in self.procedures:
            for cond in proc.conditionals:
                if cond.has_reference:
                    yield proc.id, cond

    def referrers(self, procedure_id: str) -> tuple[Procedure, ...]:
        """Procedures holding at least one reference to ``procedure_id``."""
        return tuple(p for p in self.procedures if procedure_id in p.references)


def _load() -> Catalogue:
    from .constants.catalogue_data import PROCEDURE_RECORDS

    return Catalogue.from_records(PROCEDURE_RECORDS)


CATALOGUE = _load()


def get_procedure_by_id(procedure_id) -> Optional[Procedure]:
    return CATALOGUE.get_by_id(procedure_id)


def get_procedures_by_category(category) -> tuple[Procedure, ...]:
    return CATALOGUE.get_by_category(category)


def procedure_as_dict(procedure: Procedure) -> dict:
    """JSON-ready view of a procedure; steps keep their call-out flag."""
    return {
        "id": procedure.id,
        "title": procedure.title,
        "short_title": procedure.short_title,
        "category": procedure.category.value,
        "description": procedure.description,
        "general_notes": list(procedure.general_notes),
        "actions": [
            {
                "role": action.role.value,
                "steps": [{"text": step.text, "kind": step.kind} for step in action.steps],
            }
            for action in procedure.actions
        ],
        "conditionals": [
            {
                "condition": cond.condition,
                "action": cond.action,
                "reference_id": cond.reference_id,
            }
            for cond in procedure.conditionals
        ],
        "notes": list(procedure.notes),
    }
