from django.conf import settings


def brand_context(request):
    """
    Inject per-client branding into all templates.
    """
    return {
        "BRAND_NAME": getattr(settings, "BRAND_NAME", "Flight Procedures"),
        "BRAND_TAGLINE": getattr(settings, "BRAND_TAGLINE", ""),
        "CLIENT": getattr(settings, "CLIENT", None),
        "CLIENT_SLUG": getattr(settings, "CLIENT_SLUG", None),
    }
