# project/settings/local.py
"""Local development settings."""

import os

os.environ.setdefault("CLIENT", "default")

from .base import *  # noqa

DEBUG = True
ALLOWED_HOSTS = ["*"]
