from django import template
from django.utils.html import format_html

from procedures.catalogue import CATALOGUE
from procedures.display import category_display, role_badge

register = template.Library()

# -----------------------------
# Steps / Roles
# -----------------------------

@register.filter
def step_html(step):
    """
    Render one action step. Call-outs get a dark CALL OUT badge and bold text,
    plain steps a muted bullet.
    Example:
      {{ step|step_html }}
    """
    if getattr(step, "is_call_out", False):
        return format_html(
            '<span class="badge text-bg-dark text-uppercase me-1">Call Out</span>'
            '<strong>{}</strong>',
            step.text,
        )
    return format_html(
        '<i class="fa-solid fa-circle fa-2xs text-body-tertiary me-2"></i>{}',
        getattr(step, "text", step),
    )


@register.filter
def role_badge_class(role):
    try:
        return role_badge(role)
    except ValueError:
        return "bg-secondary-subtle text-secondary-emphasis"


# -----------------------------
# Categories / References
# -----------------------------

@register.filter
def category_icon(category):
    return category_display(category).icon


@register.filter
def reference_label(procedure_id):
    """'E1' -> 'E1 · Termination'; unknown ids are shown as-is."""
    procedure = CATALOGUE.get_by_id(procedure_id)
    if procedure is None:
        return procedure_id
    return f"{procedure.id} · {procedure.short_title}"
