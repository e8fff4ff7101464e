"""
Display formatting for calculator results.

Two fixed decimals with per-locale grouping and decimal separators.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

from ..core.config import get_settings

# Locale -> (grouping separator, decimal separator)
LOCALE_SEPARATORS: Dict[str, Tuple[str, str]] = {
    "en": (",", "."),
    "ar-DZ": (".", ","),
    "de": (".", ","),
    "fr": (" ", ","),
}

MISSING = "—"


def fmt(value: float, unit: Optional[str] = None, locale: Optional[str] = None) -> str:
    """
    Format a number with two decimals, optionally followed by a unit.

    Example:
        >>> fmt(1234.567, "m3/h", locale="en")
        '1,234.57 m3/h'
        >>> fmt(1234.567, locale="de")
        '1.234,57'
    """
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        text = MISSING
    else:
        locale = locale or get_settings().locale
        group, decimal = LOCALE_SEPARATORS.get(locale, LOCALE_SEPARATORS["en"])
        text = f"{value:,.2f}"
        if (group, decimal) != (",", "."):
            text = text.replace(",", "\0").replace(".", decimal).replace("\0", group)

    return f"{text} {unit}" if unit else text
