"""Typed equation tokens.

Every element of an equation is a ``Token`` carrying its display text and a
``TokenKind``. Classification happens once, when the token is built, so the
editing rules can switch on the kind instead of re-matching strings.

Numeric literals come in two shapes:
- plain: ``12``, ``0.5``, ``3.``, ``1.23457E12``, ``1.2E-5``
- negative-wrapped: ``(-12)``, ``(-0.5)``

A plain literal with a leading minus (``-8``, as produced by formatting a
negative result) is accepted by ``Token.of`` and rewritten to the wrapped form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .config import (
    BRACKET_CLOSE,
    BRACKET_OPEN,
    CONSTANTS,
    DECIMAL,
    FUNCTIONS,
    MODIFIERS,
    OPERATORS,
)

_MAGNITUDE = r"\d+(?:\.\d*)?(?:E[-+]?\d*)?"
PLAIN_NUMBER_RE = re.compile(rf"^(-?)({_MAGNITUDE})$")
WRAPPED_NUMBER_RE = re.compile(rf"^\(-({_MAGNITUDE})\)$")
DANGLING_EXPONENT_RE = re.compile(r"E[-+]?$")


class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    MODIFIER = "modifier"
    FUNCTION = "function"
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"


@dataclass(frozen=True)
class NumberParts:
    """Decomposed numeric literal: unsigned magnitude text plus sign."""

    magnitude: str
    negative: bool

    @property
    def digit_count(self) -> int:
        return sum(1 for char in self.magnitude if char.isdigit())

    def text(self) -> str:
        """Canonical token text for these parts."""
        if self.negative:
            return f"(-{self.magnitude})"
        return self.magnitude


def decompose_number(text: str | None) -> NumberParts | None:
    """Split a numeric literal into its magnitude and sign.

    Returns None when ``text`` is not a numeric literal.
    """
    if not text:
        return None
    match = WRAPPED_NUMBER_RE.match(text)
    if match:
        return NumberParts(match.group(1), True)
    match = PLAIN_NUMBER_RE.match(text)
    if match:
        return NumberParts(match.group(2), match.group(1) == "-")
    return None


def is_negative_component(text: str | None) -> bool:
    """Return True if ``text`` is a negative-wrapped literal such as ``(-5)``."""
    return bool(text) and WRAPPED_NUMBER_RE.match(text) is not None


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    @classmethod
    def of(cls, text: str) -> Token:
        """Classify raw token text.

        Raises:
            ValueError: if ``text`` is not part of the editor's vocabulary
        """
        if text in OPERATORS:
            return cls(TokenKind.OPERATOR, text)
        if text in MODIFIERS:
            return cls(TokenKind.MODIFIER, text)
        if text in FUNCTIONS:
            return cls(TokenKind.FUNCTION, text)
        if text == BRACKET_OPEN:
            return cls(TokenKind.OPEN_BRACKET, text)
        if text == BRACKET_CLOSE:
            return cls(TokenKind.CLOSE_BRACKET, text)
        parts = decompose_number(text)
        if parts is not None:
            return cls(TokenKind.NUMBER, parts.text())
        raise ValueError(f"Unrecognised token: {text!r}")

    def __str__(self) -> str:
        return self.text

    @property
    def is_number(self) -> bool:
        return self.kind is TokenKind.NUMBER

    @property
    def is_operator(self) -> bool:
        return self.kind is TokenKind.OPERATOR

    @property
    def is_modifier(self) -> bool:
        return self.kind is TokenKind.MODIFIER

    @property
    def is_function(self) -> bool:
        return self.kind is TokenKind.FUNCTION

    @property
    def is_bracket(self) -> bool:
        return self.kind in (TokenKind.OPEN_BRACKET, TokenKind.CLOSE_BRACKET)

    @property
    def is_constant(self) -> bool:
        """The nullary opener ``E``: a function opener that is also a complete operand."""
        return self.kind is TokenKind.FUNCTION and self.text in CONSTANTS

    @property
    def opens_group(self) -> bool:
        """Open brackets and function openers (``E`` included) count as opened groups."""
        return self.kind in (TokenKind.OPEN_BRACKET, TokenKind.FUNCTION)

    @property
    def parts(self) -> NumberParts | None:
        if not self.is_number:
            return None
        return decompose_number(self.text)

    @property
    def has_dangling_exponent(self) -> bool:
        """True for literals such as ``1.2E`` or ``1.2E-`` still waiting for digits."""
        parts = self.parts
        return parts is not None and DANGLING_EXPONENT_RE.search(parts.magnitude) is not None

    @property
    def ends_with_exponent_marker(self) -> bool:
        parts = self.parts
        return parts is not None and parts.magnitude.endswith("E")

    def healed(self) -> Token:
        """Drop a trailing decimal point with no digits after it (``5.`` -> ``5``)."""
        parts = self.parts
        if parts is None or not parts.magnitude.endswith(DECIMAL):
            return self
        return Token(TokenKind.NUMBER, NumberParts(parts.magnitude[:-1], parts.negative).text())
