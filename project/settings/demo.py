# project/settings/demo.py
"""Demo deployment with generic branding."""

import os

os.environ.setdefault("CLIENT", "demo")

from .base import *  # noqa

CLIENT = "demo"

DEBUG = env.bool("DEBUG", default=False)
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=[".herokuapp.com"])
