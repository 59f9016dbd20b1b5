# project/urls.py

from django.urls import include, path
from django.views.generic import RedirectView


urlpatterns = [
    path("", RedirectView.as_view(pattern_name="procedures:browser", permanent=False), name="home"),
    path("", include(("procedures.urls", "procedures"), namespace="procedures")),
]
