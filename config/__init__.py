# clinic_reporting_root/config/__init__.py
# This file makes the 'config' directory a Python package.
# It exposes the singleton 'settings' instance for easy, clean importing.

from .settings import settings
from .logging_setup import configure_logging

__all__ = ["settings", "configure_logging"]
