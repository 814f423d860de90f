"""Display formatting for results and equations."""

from __future__ import annotations

import math
import re
from typing import Iterable

from .config import (
    MAX_DIGITS,
    ROUND_UP_MANTISSA,
    SCIENTIFIC_DIGITS,
    SCIENTIFIC_THRESHOLD,
)
from .tokens import Token

_TRAILING_ZEROS_RE = re.compile(r"(\.(0*[1-9])*)0+$")
_TRAILING_DOT_RE = re.compile(r"\.$")


def needs_exponent(value: float) -> bool:
    """True when the shortest decimal text of ``value`` is written with an exponent.

    That is the case for magnitudes of 1e21 and above or below 1e-6.
    """
    magnitude = abs(value)
    return value != 0 and (magnitude >= 1e21 or magnitude < 1e-6)


def to_exponential(value: float, digits: int = SCIENTIFIC_DIGITS) -> str:
    """Exponent form with ``digits`` fractional mantissa digits, e.g. ``1.50000e+12``."""
    mantissa, exponent = format(value, f".{digits}e").split("e")
    return f"{mantissa}e{int(exponent):+d}"


def _wide_fraction_head(value: float) -> int | None:
    """First two fractional digits of the shortest decimal text of ``value``.

    Only reported when the decimal point sits at index MAX_DIGITS or later
    (a leading minus counts), otherwise None.
    """
    text = repr(value)
    dot = text.find(".")
    if "e" in text or dot < MAX_DIGITS:
        return None
    return int(text[dot + 1 : dot + 3])


def format_value(value: float) -> str:
    """Format a result for a display that fits MAX_DIGITS numerals.

    Args:
        value: finite result of an evaluation

    Returns:
        Fixed notation when it fits, otherwise scientific notation with an
        upper-case ``E`` and no ``+`` sign on the exponent
        (e.g. "8", "0.33333333", "1.23457E12", "1.00000E-7")

    Raises:
        ValueError: if ``value`` is nan or infinite
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite value: {value}")

    # A value whose integer part already fills the display keeps no decimals;
    # a fraction of .95 or more adds one to the value (also when negative)
    head = _wide_fraction_head(value)
    if head is not None and head >= ROUND_UP_MANTISSA:
        value += 1

    formatted = format(value, f".{MAX_DIGITS}f")
    numerals = sum(1 for char in formatted if char.isdigit())
    formatted = formatted[: MAX_DIGITS + len(formatted) - numerals]
    formatted = _TRAILING_ZEROS_RE.sub(r"\1", formatted)
    formatted = _TRAILING_DOT_RE.sub("", formatted)
    if formatted == "-0":
        formatted = "0"

    if (
        (formatted == "0" and value != 0)
        or needs_exponent(value)
        or abs(value) >= SCIENTIFIC_THRESHOLD
    ):
        formatted = to_exponential(value, SCIENTIFIC_DIGITS)

    return formatted.upper().replace("E+", "E")


_DISPLAY = {
    "*": "×",
    "/": "÷",
    "sqrt(": "√(",
    "^2": "²",
    "^3": "³",
    "^-1": "⁻¹",
    "log(": "ln(",
    "pow(E,": "e^(",
    "pow(2,": "2^(",
    "E": "e",
}


def render_equation(tokens: Iterable[Token | str]) -> str:
    """Readable single-line rendering of an equation.

    Example:
        ["sqrt(", "(-4)", ")", "*", "2"] -> "√( (-4) ) × 2"
    """
    return " ".join(_DISPLAY.get(str(token), str(token)) for token in tokens)
