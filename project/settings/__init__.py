# project/settings/__init__.py

"""
Default settings entrypoint.

Defaults to the local development configuration so that
`project.settings` works for local/dev usage.
"""

from .local import *  # noqa
