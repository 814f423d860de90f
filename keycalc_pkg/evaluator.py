"""Evaluation of a finished token sequence.

Recursive descent over typed tokens, lowest precedence first:

    sum      := term (('+' | '-') term)*
    term     := power (('*' | '/') power | power)*     implicit '*' between operands
    power    := unary ('^' power)?                     right-associative
    unary    := ('-' | '+') unary | postfix
    postfix  := factor modifier*                       ^2 ^3 ^-1 !
    factor   := number | 'E' | '(' sum ')' | function sum ')'

Arithmetic follows IEEE-754 doubles: overflow gives +/-inf, x/0 gives +/-inf
(or nan for 0/0) and arguments outside a function's real domain give nan.
Python raises for several of these, so each operation maps those cases back.
"""

from __future__ import annotations

import math
import re
from typing import Callable, Sequence

from .tokens import Token, TokenKind
from .types import DivisionByZeroError

INF = float("inf")
NAN = float("nan")

_LEADING_NUMBER_RE = re.compile(r"[0-9.]+")


class EvaluationFault(Exception):
    """The token sequence does not form a complete expression."""

    def __init__(self, message: str, position: int | None = None):
        self.message = message
        self.position = position
        super().__init__(message)


def _power(base: float, exponent: float) -> float:
    odd_integer = exponent.is_integer() and int(exponent) % 2 == 1
    if base == 0 and exponent < 0:
        return math.copysign(INF, base) if odd_integer else INF
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return -INF if base < 0 and odd_integer else INF
    except ValueError:
        return NAN


def _divide(dividend: float, divisor: float) -> float:
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return NAN
        return math.copysign(INF, dividend) * math.copysign(1.0, divisor)
    return dividend / divisor


def _factorial(value: float) -> float:
    if math.isnan(value) or value < 0:
        return NAN
    if math.isinf(value):
        return INF
    if value.is_integer():
        if value > 170:
            return INF
        return float(math.factorial(int(value)))
    try:
        return math.gamma(value + 1)
    except OverflowError:
        return INF


def _logarithm(log: Callable[[float], float]) -> Callable[[float], float]:
    def apply(value: float) -> float:
        if value == 0:
            return -INF
        if value < 0 or math.isnan(value):
            return NAN
        return log(value)

    return apply


def _real(func: Callable[[float], float]) -> Callable[[float], float]:
    def apply(value: float) -> float:
        try:
            return func(value)
        except ValueError:
            return NAN
        except OverflowError:
            return INF

    return apply


FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sqrt(": _real(math.sqrt),
    "sin(": _real(math.sin),
    "cos(": _real(math.cos),
    "tan(": _real(math.tan),
    "asin(": _real(math.asin),
    "acos(": _real(math.acos),
    "atan(": _real(math.atan),
    "log(": _logarithm(math.log),
    "log10(": _logarithm(math.log10),
    "pow(E,": lambda value: _power(math.e, value),
    "pow(2,": lambda value: _power(2.0, value),
}

MODIFIERS: dict[str, Callable[[float], float]] = {
    "^2": lambda value: _power(value, 2.0),
    "^3": lambda value: _power(value, 3.0),
    "^-1": lambda value: _divide(1.0, value),
    "!": _factorial,
}

CONSTANTS = {"E": math.e}

_OPERAND_START = (
    TokenKind.NUMBER,
    TokenKind.FUNCTION,
    TokenKind.OPEN_BRACKET,
)


def number_value(token: Token) -> float:
    """Numeric value of a literal token."""
    parts = token.parts
    if parts is None:
        raise EvaluationFault(f"Not a number: {token.text!r}")
    try:
        value = float(parts.magnitude)
    except ValueError:
        raise EvaluationFault(f"Malformed number: {token.text!r}")
    return -value if parts.negative else value


def check_division_by_zero(tokens: Sequence[Token]) -> None:
    """Raise DivisionByZeroError if a '/' is directly followed by a zero literal."""
    for index, token in enumerate(tokens[:-1]):
        if not (token.is_operator and token.text == "/"):
            continue
        operand = tokens[index + 1].parts
        if operand is None:
            continue
        match = _LEADING_NUMBER_RE.match(operand.magnitude)
        try:
            divisor = float(match.group(0)) if match else None
        except ValueError:
            divisor = None
        if divisor == 0:
            raise DivisionByZeroError()


class _Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0

    def peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def take(self) -> Token:
        token = self.peek()
        if token is None:
            raise EvaluationFault("Unexpected end of equation", self.pos)
        self.pos += 1
        return token

    def expect_close(self) -> None:
        token = self.peek()
        if token is None or token.kind is not TokenKind.CLOSE_BRACKET:
            raise EvaluationFault("Missing closing bracket", self.pos)
        self.pos += 1

    def parse(self) -> float:
        value = self.parse_sum()
        if self.peek() is not None:
            raise EvaluationFault(f"Unexpected {self.peek().text!r}", self.pos)
        return value

    def parse_sum(self) -> float:
        value = self.parse_term()
        while self._at_operator("+", "-"):
            operator = self.take().text
            right = self.parse_term()
            value = value + right if operator == "+" else value - right
        return value

    def parse_term(self) -> float:
        value = self.parse_power()
        while True:
            if self._at_operator("*", "/"):
                operator = self.take().text
                right = self.parse_power()
                value = value * right if operator == "*" else _divide(value, right)
            elif self.peek() is not None and self.peek().kind in _OPERAND_START:
                value = value * self.parse_power()
            else:
                return value

    def parse_power(self) -> float:
        base = self.parse_unary()
        if self._at_operator("^"):
            self.take()
            return _power(base, self.parse_power())
        return base

    def parse_unary(self) -> float:
        if self._at_operator("-"):
            self.take()
            return -self.parse_unary()
        if self._at_operator("+"):
            self.take()
            return self.parse_unary()
        return self.parse_postfix()

    def parse_postfix(self) -> float:
        value = self.parse_factor()
        while self.peek() is not None and self.peek().is_modifier:
            value = MODIFIERS[self.take().text](value)
        return value

    def parse_factor(self) -> float:
        token = self.take()
        if token.kind is TokenKind.NUMBER:
            return number_value(token)
        if token.kind is TokenKind.OPEN_BRACKET:
            value = self.parse_sum()
            self.expect_close()
            return value
        if token.kind is TokenKind.FUNCTION:
            if token.is_constant:
                return CONSTANTS[token.text]
            argument = self.parse_sum()
            self.expect_close()
            return FUNCTIONS[token.text](argument)
        raise EvaluationFault(f"Unexpected {token.text!r}", self.pos - 1)

    def _at_operator(self, *operators: str) -> bool:
        token = self.peek()
        return token is not None and token.is_operator and token.text in operators


def evaluate(tokens: Sequence[Token]) -> float:
    """Evaluate a token sequence to a float.

    Raises:
        EvaluationFault: if the tokens are not a well-formed expression
    """
    if not tokens:
        raise EvaluationFault("Empty equation")
    return _Parser(tokens).parse()


def to_expression(tokens: Sequence[Token]) -> str:
    """Join tokens into a single infix string (for logs and diagnostics)."""
    return " ".join(token.text for token in tokens)
