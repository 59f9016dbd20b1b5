# project/settings/_client.py
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]

CURRENT_CLIENT = os.getenv("CLIENT", "default").lower()

BRANDS = {
    "default": {
        "NAME": "Flight Procedures",
        "SLUG": "flight-procedures",
        "TAGLINE": "Normal, contingency and emergency procedures",
    },
    "demo": {
        "NAME": "Flight Procedures Demo",
        "SLUG": "demo",
        "TAGLINE": "Demo environment – not for operational use",
    },
}

BRAND = BRANDS.get(
    CURRENT_CLIENT,
    {
        "NAME": CURRENT_CLIENT.title(),
        "SLUG": CURRENT_CLIENT,
        "TAGLINE": "",
    },
)

CLIENT_TEMPLATE_DIR = BASE_DIR / "clients" / CURRENT_CLIENT / "templates"
CLIENT_STATIC_DIR   = BASE_DIR / "clients" / CURRENT_CLIENT / "static"
