# clinic_reporting_root/analytics/formatting.py
# LOCALE-AWARE DISPLAY FORMATTING

import logging
from typing import Any, Optional

import pandas as pd

from config import settings
from data_processing.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

MISSING_VALUE_LABEL = "N/A"


def format_currency(amount: Any, locale: Optional[str] = None, decimals: Optional[int] = None) -> str:
    """
    Renders an amount as a grouped currency string, e.g. "1.000 MAD" (fr-MA)
    or "MAD 1,000" (en-US).

    The sign always leads the string, so negatives read "-1.000 MAD".
    """
    if amount is None or pd.isna(amount):
        return MISSING_VALUE_LABEL

    locale = locale or settings.DEFAULT_LOCALE
    locale_config = settings.CURRENCY_LOCALES.get(locale)
    if locale_config is None:
        logger.error(f"Rejected unsupported currency locale {locale!r}.")
        raise InvalidArgumentError(f"Unsupported locale: {locale!r}. Expected one of {settings.SUPPORTED_LOCALES}.")
    decimals = settings.ANALYTICS.currency_decimals if decimals is None else decimals

    value = float(amount)
    # Format with Python's ',' / '.' then swap in the locale's separators.
    number = f"{abs(value):,.{decimals}f}"
    number = number.translate(str.maketrans({',': '\x00', '.': locale_config.decimal_separator}))
    number = number.replace('\x00', locale_config.group_separator)

    sign = "-" if value < 0 and round(abs(value), decimals) != 0 else ""
    code = settings.CURRENCY_CODE
    if locale_config.code_first:
        return f"{sign}{code} {number}"
    return f"{sign}{number} {code}"


def format_percentage_change(value: Any, decimals: int = 1) -> str:
    """Renders a growth figure as a signed percentage, e.g. "+10.0%"."""
    if value is None or pd.isna(value):
        return MISSING_VALUE_LABEL
    return f"{float(value):+.{decimals}f}%"
