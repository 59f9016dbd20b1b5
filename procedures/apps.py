from django.apps import AppConfig


class ProceduresConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "procedures"
    verbose_name = "Flight procedures"

    def ready(self):
        from . import checks  # noqa: F401  registers the catalogue checks
