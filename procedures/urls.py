# procedures/urls.py
from django.urls import path

from . import views

app_name = "procedures"

urlpatterns = [
    path("procedures/", views.procedures_browser, name="browser"),
    path("procedures/emergency/", views.emergency_procedures, name="emergency"),
    path("procedures/pdf/", views.procedures_pdf, name="pdf"),
    path("procedures/catalogue.json", views.catalogue_json, name="catalogue_json"),
    path("procedures/<str:procedure_id>/", views.procedure_detail, name="detail"),
]
