"""
Input parsing and guards shared by every formula module.

Parsing is fail-soft (`to_num` substitutes a fallback), guards are
fail-fast (`must_positive` raises `ValidationError`).
"""

from __future__ import annotations

import math
from typing import Any


class ValidationError(ValueError):
    """A required physical quantity is out of its allowed range."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def to_num(value: Any, fallback: float = 0) -> float:
    """
    Parse user input into a finite float.

    Accepts numbers and numeric strings, including a comma decimal
    separator ("12,5"). Anything unparseable or non-finite yields
    `fallback`. Never raises.

    Example:
        >>> to_num("12,5")
        12.5
        >>> to_num("abc", fallback=1)
        1
    """
    if isinstance(value, bool) or value is None:
        return fallback

    raw = value if isinstance(value, (int, float)) else str(value).strip().replace(",", ".", 1)
    if raw == "":
        return fallback
    try:
        n = float(raw)
    except (ValueError, OverflowError):
        return fallback

    return n if math.isfinite(n) else fallback


def must_positive(n: float, name: str = "value") -> float:
    """Return `n` unchanged if it is strictly positive."""
    if not n > 0:
        raise ValidationError(name, f"{name} must be > 0")
    return n


def must_non_negative(n: float, name: str = "value") -> float:
    """Return `n` unchanged if it is zero or positive."""
    if not n >= 0:
        raise ValidationError(name, f"{name} must be >= 0")
    return n


def must_fraction(n: float, name: str = "value") -> float:
    """Return `n` unchanged if 0 < n <= 1 (efficiencies, power factors)."""
    if not 0 < n <= 1:
        raise ValidationError(name, f"{name} must be in (0, 1]")
    return n


def clamp(n: float, lo: float, hi: float) -> float:
    return min(max(n, lo), hi)
