"""Locale-aware parsing and formatting of numbers typed into the estimator.

Input text uses `.` for thousands and `,` for decimals ("1.000.000,5").
Parsing is tolerant: partial or malformed text resolves to 0 instead of
raising, so every keystroke of an edit can be fed straight through.
"""

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal

from src.estimator.config import DECIMAL_SEPARATOR, PLACEHOLDER, THOUSANDS_SEPARATOR

# Plain decimal notation only: no underscores, hex, or "inf"/"nan" words
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")
_WHITESPACE_RE = re.compile(r"\s+")
# Digits before the point in the largest float (~1.8e308)
_MAX_FLOAT_DIGITS = 310
# Swap Python's "1,234.5" into "1.234,5"
_TO_LOCALE = str.maketrans({",": THOUSANDS_SEPARATOR, ".": DECIMAL_SEPARATOR})


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_float(n: float) -> float:
    """Convert a number to float; ints beyond the float range become +/-inf."""
    try:
        return float(n)
    except OverflowError:
        return math.inf if n > 0 else -math.inf


def parse_number(raw: str | float | None) -> float:
    """Convert locale-formatted text into a number.

    Numbers pass through unchanged. Empty input, text with non-numeric
    residue, and text that overflows to infinity all give 0.
    """
    if _is_number(raw):
        return raw
    if not raw:
        return 0

    cleaned = str(raw).replace(THOUSANDS_SEPARATOR, "")
    cleaned = cleaned.replace(DECIMAL_SEPARATOR, ".")
    cleaned = _WHITESPACE_RE.sub("", cleaned)
    if not cleaned:
        return 0
    if not _DECIMAL_RE.fullmatch(cleaned):
        return 0

    value = float(cleaned)
    if not math.isfinite(value):
        return 0
    if _INTEGER_RE.fullmatch(cleaned):
        try:
            return int(cleaned)
        except ValueError:
            # Past the int string conversion digit limit
            return int(value)
    return value


def format_integer(n: float) -> str:
    """Round half up and group thousands, e.g. 1234567.5 -> "1.234.568"."""
    if not _is_number(n) or not math.isfinite(as_float(n)):
        return PLACEHOLDER
    rounded = n if isinstance(n, int) else math.floor(n + 0.5)
    return f"{rounded:,}".translate(_TO_LOCALE)


def format_decimal(n: float, digits: int = 2) -> str:
    """Render with exactly `digits` fraction digits, e.g. 0.2 -> "0,200" for 3.

    Exact halves round away from zero: 0.0625 -> "0,063".
    """
    if not _is_number(n) or not math.isfinite(as_float(n)):
        return PLACEHOLDER
    digits = max(0, int(digits))
    # Round the shortest repr, not the binary expansion: 1.005 -> "1,01"
    exact = Decimal(repr(as_float(n)))
    context = Context(prec=_MAX_FLOAT_DIGITS + digits)
    rounded = exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP, context=context)
    return f"{rounded:,.{digits}f}".translate(_TO_LOCALE)


def format_plain(n: float) -> str:
    """Render without rounding or padding, e.g. 0.25 -> "0,25", 5.0 -> "5"."""
    if not _is_number(n) or not math.isfinite(as_float(n)):
        return PLACEHOLDER
    exact = Decimal(repr(as_float(n)))
    if exact == exact.to_integral_value():
        exact = exact.quantize(Decimal(1), context=Context(prec=_MAX_FLOAT_DIGITS))
    return f"{exact:,f}".translate(_TO_LOCALE)
