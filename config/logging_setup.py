# clinic_reporting_root/config/logging_setup.py
# GLOBAL LOGGING CONFIGURATION

import logging
import sys
from typing import Optional

from .settings import settings


def configure_logging(level: Optional[str] = None) -> None:
    """Applies the project-wide logging format to the root logger."""
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True
    )
