# procedures/views.py
import logging
from pathlib import Path

from django.conf import settings
from django.contrib import messages
from django.http import Http404, HttpResponse, JsonResponse
from django.shortcuts import render
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.http import urlencode

try:
    from weasyprint import HTML, CSS
    WEASYPRINT_AVAILABLE = True
except Exception:
    WEASYPRINT_AVAILABLE = False

from .catalogue import CATALOGUE, Category, procedure_as_dict
from .constants.catalogue_data import GENERAL_RULES
from .containers import BrowserContainer, CardView, EmergencyContainer
from .display import category_display
from .forms import ProcedureJumpForm
from .navigation import HIGHLIGHT_DURATION_MS

logger = logging.getLogger(__name__)


def split_list(value):
    """'a, b,,c' -> ['a', 'b', 'c']; None -> []."""
    if not value:
        return []
    return [part.strip() for part in str(value).split(",") if part.strip()]


def collapsed_from_query(request):
    """
    Collapsed categories carried in ?collapsed=.

    Returns None when the parameter is absent (container defaults apply);
    an empty value means no category is collapsed. Unknown names are dropped.
    """
    raw = request.GET.get("collapsed")
    if raw is None:
        return None
    categories = []
    for value in split_list(raw):
        try:
            categories.append(Category(value))
        except ValueError:
            continue
    return categories


def collapsed_value(container):
    return ",".join(c.value for c in Category if c in container.controller.collapsed_categories)


def state_query(container, **extra):
    """Query string that re-mounts ``container`` with its current state."""
    params = {}
    if container.controller.models_categories:
        params["collapsed"] = collapsed_value(container)
    params["open"] = ",".join(container.open_ids())
    closed = container.closed_ids()
    if closed:
        params["closed"] = ",".join(closed)
    params.update({k: v for k, v in extra.items() if v is not None})
    return urlencode(params)


def _toggle_card_from_request(request, container):
    card = request.GET.get("card")
    if card and container.toggle_card(card.strip()) is None:
        logger.debug("Ignoring toggle of unmounted card %r", card)


def _navigate_from_request(request, container):
    if not request.GET.get("goto"):
        return
    form = ProcedureJumpForm(request.GET)
    if form.is_valid():
        container.navigate_to(form.cleaned_data["goto"])
    else:
        logger.debug("Ignoring jump to unknown procedure %r", request.GET.get("goto"))
        messages.warning(request, f"Unknown procedure “{request.GET.get('goto')}”.")


def _frame_context(container):
    return {
        "state_query": state_query(container),
        "scroll_target": container.scroll_target,
        "highlighted_id": container.controller.highlighted_id,
        "expanded_id": container.controller.expanded_id,
        "highlight_ms": HIGHLIGHT_DURATION_MS,
    }


def procedures_browser(request):
    container = BrowserContainer(
        collapsed_categories=collapsed_from_query(request),
        open_ids=split_list(request.GET.get("open")),
        closed_ids=split_list(request.GET.get("closed")),
    )
    try:
        toggle = request.GET.get("toggle")
        if toggle:
            try:
                container.toggle_category(toggle)
            except ValueError:
                logger.debug("Ignoring toggle of unknown category %r", toggle)

        _toggle_card_from_request(request, container)
        _navigate_from_request(request, container)
        sections = container.render_pass()

        context = {
            "sections": sections,
            "general_rules": GENERAL_RULES,
            "jump_form": ProcedureJumpForm(
                initial={
                    "collapsed": collapsed_value(container),
                    "open": ",".join(container.open_ids()),
                    "closed": ",".join(container.closed_ids()),
                }
            ),
            "current_page": "procedures",
            **_frame_context(container),
        }
    finally:
        container.close()

    return render(request, "procedures/browser.html", context)


def emergency_procedures(request):
    container = EmergencyContainer(
        open_ids=split_list(request.GET.get("open")),
        closed_ids=split_list(request.GET.get("closed")),
    )
    try:
        _toggle_card_from_request(request, container)
        _navigate_from_request(request, container)
        sections = container.render_pass()
        context = {
            "sections": sections,
            "quick_index": container.quick_index(),
            "current_page": "emergency",
            **_frame_context(container),
        }
    finally:
        container.close()

    return render(request, "procedures/emergency.html", context)


def procedure_detail(request, procedure_id):
    procedure = CATALOGUE.get_by_id(procedure_id)
    if procedure is None:
        raise Http404("Procedure not found")

    return render(
        request,
        "procedures/detail.html",
        {
            "procedure": procedure,
            "card": CardView(procedure, category_display(procedure.category), open=True, highlighted=False),
            "display": category_display(procedure.category),
            "referrers": CATALOGUE.referrers(procedure.id),
            "current_page": "procedures",
        },
    )


def catalogue_json(request):
    return JsonResponse(
        {
            "general_rules": GENERAL_RULES,
            "categories": [
                {"value": c.value, "label": category_display(c).label, "description": category_display(c).description}
                for c in CATALOGUE.categories()
            ],
            "procedures": [procedure_as_dict(p) for p in CATALOGUE],
        },
        json_dumps_params={"ensure_ascii": False},
    )


def procedures_pdf(request):
    if not WEASYPRINT_AVAILABLE:
        return HttpResponse(
            "PDF generation requires WeasyPrint. Install with 'pip install weasyprint'.",
            status=501, content_type="text/plain"
        )

    brand_name = getattr(settings, "BRAND_NAME", "") or "Flight Procedures"
    html = render_to_string(
        "procedures/procedures_pdf.html",
        {
            "sections": [
                (category_display(c), CATALOGUE.get_by_category(c)) for c in CATALOGUE.categories()
            ],
            "general_rules": GENERAL_RULES,
            "generated_at": timezone.now(),
            "brand_name": brand_name,
        },
    )
    if getattr(settings, "STATIC_ROOT", None):
        base_url = Path(settings.STATIC_ROOT).as_uri()
    else:
        base_url = Path(settings.BASE_DIR).as_uri()

    try:
        pdf = HTML(string=html, base_url=base_url).write_pdf(
            stylesheets=[CSS(string="""@page { size: A4; margin: 14mm 12mm; }""")]
        )
    except Exception as e:
        logger.exception(f"Error generating procedures PDF: {e}")
        return HttpResponse("Could not generate PDF.", status=500, content_type="text/plain")

    resp = HttpResponse(pdf, content_type="application/pdf")
    resp["Content-Disposition"] = 'inline; filename="flight-procedures.pdf"'
    return resp
