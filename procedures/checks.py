# procedures/checks.py
"""
Catalogue integrity as Django system checks (``manage.py check``).

Problems here are authoring defects in the catalogue data; navigation
never raises on them.
"""
from __future__ import annotations

from collections import Counter

from django.core import checks

from .catalogue import CATALOGUE, Catalogue
from .display import missing_display_entries


def duplicate_ids(records) -> list[str]:
    counts = Counter(r["id"] if isinstance(r, dict) else r.id for r in records)
    return sorted(pid for pid, n in counts.items() if n > 1)


def dangling_references(catalogue: Catalogue) -> list[tuple[str, str]]:
    """``(source_id, reference_id)`` pairs whose target does not exist."""
    return [
        (source_id, cond.reference_id)
        for source_id, cond in catalogue.references()
        if catalogue.get_by_id(cond.reference_id) is None
    ]


def self_references(catalogue: Catalogue) -> list[str]:
    return [source_id for source_id, cond in catalogue.references() if cond.reference_id == source_id]


def catalogue_messages(catalogue: Catalogue = CATALOGUE, records=None) -> list[checks.CheckMessage]:
    messages = []

    for pid in duplicate_ids(records if records is not None else catalogue.procedures):
        messages.append(
            checks.Error(
                f"Procedure id {pid!r} is used more than once.",
                hint="Procedure ids are the cross-reference key and must be unique.",
                id="procedures.E001",
            )
        )

    for source_id, reference_id in dangling_references(catalogue):
        messages.append(
            checks.Error(
                f"Procedure {source_id} references unknown procedure {reference_id!r}.",
                hint="Fix the reference_id or add the missing procedure.",
                obj=source_id,
                id="procedures.E002",
            )
        )

    for entry in missing_display_entries():
        messages.append(
            checks.Error(
                f"No display configuration for {entry}.",
                id="procedures.E003",
            )
        )

    for source_id in self_references(catalogue):
        messages.append(
            checks.Warning(
                f"Procedure {source_id} references itself.",
                obj=source_id,
                id="procedures.W001",
            )
        )

    return messages


@checks.register("procedures")
def check_catalogue(app_configs=None, **kwargs):
    return catalogue_messages()
