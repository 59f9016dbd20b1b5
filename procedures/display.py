# procedures/display.py
from __future__ import annotations

from dataclasses import dataclass

from django.core.exceptions import ImproperlyConfigured

from .catalogue import Category, Role


@dataclass(frozen=True)
class CategoryDisplay:
    label: str
    description: str
    icon: str          # Font Awesome classes
    header_css: str    # Bootstrap text/border accent for the group header
    badge_css: str     # id badge on each card
    border_css: str


CATEGORY_DISPLAY: dict[Category, CategoryDisplay] = {
    Category.NORMAL: CategoryDisplay(
        label="Normal procedures",
        description="Standard procedures for regular flight operations",
        icon="fa-solid fa-list-check",
        header_css="text-body",
        badge_css="bg-secondary-subtle text-secondary-emphasis",
        border_css="border-secondary-subtle",
    ),
    Category.CONTINGENCY: CategoryDisplay(
        label="Contingency procedures",
        description="Procedures for unexpected situations",
        icon="fa-solid fa-shield-halved",
        header_css="text-warning-emphasis",
        badge_css="bg-warning-subtle text-warning-emphasis",
        border_css="border-warning-subtle",
    ),
    Category.EMERGENCY: CategoryDisplay(
        label="Emergency procedures",
        description="Immediate actions for critical emergencies",
        icon="fa-solid fa-triangle-exclamation",
        header_css="text-danger",
        badge_css="bg-danger-subtle text-danger-emphasis",
        border_css="border-danger",
    ),
    Category.ERP: CategoryDisplay(
        label="Emergency response plan (ERP)",
        description="Detailed response plans after an accident or fly-away",
        icon="fa-solid fa-kit-medical",
        header_css="text-danger-emphasis",
        badge_css="bg-danger text-white",
        border_css="border-danger-subtle",
    ),
}

ROLE_BADGES: dict[Role, str] = {
    Role.RPIC: "bg-primary-subtle text-primary-emphasis",
    Role.RP: "bg-info-subtle text-info-emphasis",
    Role.GROUND_CREW: "bg-warning-subtle text-warning-emphasis",
    Role.RPIC_OR_GROUND_CREW: "bg-success-subtle text-success-emphasis",
    Role.ALL: "bg-light text-dark",
}


def missing_display_entries() -> list[str]:
    """Enum members without a display entry, as ``"<Enum>.<value>"`` strings."""
    missing = [f"Category.{c.value}" for c in Category if c not in CATEGORY_DISPLAY]
    missing += [f"Role.{r.value}" for r in Role if r not in ROLE_BADGES]
    return missing


def category_display(category) -> CategoryDisplay:
    return CATEGORY_DISPLAY[Category(category)]


def role_badge(role) -> str:
    return ROLE_BADGES[Role(role)]


_missing = missing_display_entries()
if _missing:
    raise ImproperlyConfigured(f"No display configuration for: {', '.join(_missing)}")
