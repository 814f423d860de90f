"""Incremental equation editor.

``EquationEditor`` interprets one logical keypress at a time against the
current token buffer. Every operation leaves the buffer in a state that can
be edited further or evaluated, and records a single undo snapshot.

After a successful ``calculate()`` the editor is in the *calculated* state:
- digit, function, decimal point and bracket keys start a new equation;
- operator, modifier and change-sign keys start a new equation from the
  previous result;
- delete edits the evaluated equation in place;
- pressing equals again repeats the last operation on the previous result.
"""

from __future__ import annotations

import functools
import math
from typing import Callable, TypeVar

from .buffer import TokenBuffer
from .config import (
    BRACKET_CLOSE,
    BRACKET_OPEN,
    FUNCTIONS,
    MAX_DIGITS,
    MODIFIERS,
    OPERATORS,
    ZERO_CLAMP,
)
from .evaluator import EvaluationFault, check_division_by_zero, evaluate, to_expression
from .formatter import format_value
from .logging_config import get_logger
from .tokens import DANGLING_EXPONENT_RE, NumberParts, Token, TokenKind
from .tokens import is_negative_component as _is_negative_component
from .types import CalculationError, InfinityError, InvalidFormatError
from .undo import UndoLog

logger = get_logger("editor")

DIGITS = "0123456789"

F = TypeVar("F", bound=Callable)


def _keypress(method: F) -> F:
    """Run ``method`` as one undoable step."""

    @functools.wraps(method)
    def wrapper(self: EquationEditor, *args, **kwargs):
        with self.buffer.batch():
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _remove_last_char(text: str) -> str:
    """Drop the last character, and with it an exponent marker left dangling."""
    return DANGLING_EXPONENT_RE.sub("", text[:-1])


def _digit_count(text: str) -> int:
    return sum(1 for char in text if char.isdigit())


class EquationEditor:
    """Keypad equation editor owning its buffer, undo log and last result."""

    def __init__(self, undo_log: UndoLog | None = None):
        self.undo_log = undo_log if undo_log is not None else UndoLog()
        self.buffer = TokenBuffer(self.undo_log)
        self.reset_equation()

    # -- state ---------------------------------------------------------------

    @property
    def calculated(self) -> bool:
        return self.buffer.calculated

    @property
    def last_result(self) -> str:
        return self.buffer.last_result

    def get_equation(self) -> list[str]:
        return self.buffer.get()

    def is_empty(self) -> bool:
        return self.buffer.is_empty()

    @staticmethod
    def is_negative_component(token: Token | str | None) -> bool:
        """Return True for negative-wrapped literals such as ``(-5)``."""
        return _is_negative_component(str(token) if token is not None else None)

    def reset_equation(self) -> None:
        self.buffer.clear()

    def undo(self) -> None:
        """Step back to the equation before the last keypress."""
        restored = self.undo_log.undo(self.buffer.tokens())
        if restored is None:
            return
        # install() records the restored state so the log top mirrors the buffer
        self.buffer.install(restored)

    def _start_new(self, from_result: bool) -> None:
        if not self.buffer.calculated:
            return
        self.buffer.clear()
        if from_result:
            self.buffer.append(self.buffer.last_result)

    # -- keys ----------------------------------------------------------------

    @_keypress
    def add_digit(self, digit: str) -> bool:
        """Add a digit, merging it into the last numeric literal if there is one.

        Returns:
            False when the literal already holds MAX_DIGITS digits
        """
        if len(digit) != 1 or digit not in DIGITS:
            raise ValueError(f"Not a digit: {digit!r}")
        self._start_new(from_result=False)
        buffer = self.buffer
        last = buffer.last()
        lone_minus = (
            last is not None
            and last.is_operator
            and last.text == "-"
            and len(buffer) == 1
        )

        if (last is None or not last.is_number) and not lone_minus:
            buffer.append(digit)
            return True

        if lone_minus:
            candidate = f"(-{digit})"
        else:
            parts = last.parts
            if parts.negative:
                magnitude = "" if parts.magnitude == "0" else parts.magnitude
                candidate = f"(-{magnitude}{digit})"
            elif parts.magnitude == "0":
                candidate = digit
            else:
                candidate = parts.magnitude + digit

        if _digit_count(candidate) > MAX_DIGITS:
            logger.debug("Digit %s rejected: %s already has %d digits", digit, last, MAX_DIGITS)
            return False
        buffer.replace_last(candidate)
        return True

    @_keypress
    def add_operator(self, operator: str) -> None:
        """Add a binary operator; a second operator in a row replaces the first."""
        if operator not in OPERATORS:
            raise ValueError(f"Not an operator: {operator!r}")
        self._start_new(from_result=True)
        buffer = self.buffer
        last = buffer.last(correct=True)
        penultimate = buffer.penultimate(correct=True)

        if last is None:
            # only a pending unary minus may start an equation
            if operator == "-":
                buffer.append(operator)
            return
        if last.is_operator and last.text == "-":
            if len(buffer) == 1:
                return
            if penultimate is not None and penultimate.is_function:
                return

        if last.is_operator:
            buffer.replace_last(operator)
        elif last.is_function:
            if operator == "-":
                buffer.append(operator)
        elif last.has_dangling_exponent:
            if operator == "-" and last.ends_with_exponent_marker:
                parts = last.parts
                buffer.replace_last(NumberParts(parts.magnitude + "-", parts.negative).text())
        else:
            buffer.append(operator)

    @_keypress
    def add_modifier(self, modifier: str) -> None:
        """Add a postfix modifier (^2, ^3, ^-1, !) to the preceding value."""
        if modifier not in MODIFIERS:
            raise ValueError(f"Not a modifier: {modifier!r}")
        self._start_new(from_result=True)
        last = self.buffer.last(correct=True)
        if last is None:
            return
        applicable = last.is_number or last.is_modifier or last.kind is TokenKind.CLOSE_BRACKET
        if applicable and not last.has_dangling_exponent:
            self.buffer.append(modifier)
        else:
            logger.debug("Modifier %s ignored after %s", modifier, last)

    @_keypress
    def add_function(self, function: str) -> None:
        """Add a function opener (or E), multiplying by a preceding value."""
        if function not in FUNCTIONS:
            raise ValueError(f"Not a function: {function!r}")
        self._start_new(from_result=False)
        last = self.buffer.last(correct=True)
        if (
            last is None
            or last.is_operator
            or last.kind is TokenKind.OPEN_BRACKET
            or last.is_function
        ):
            self.buffer.append(function)
        else:
            self.add_operator("*")
            self.buffer.append(function)

    @_keypress
    def add_decimal(self) -> None:
        self._start_new(from_result=False)
        buffer = self.buffer
        last = buffer.last()

        if (
            last is None
            or last.is_operator
            or last.is_modifier
            or last.kind is TokenKind.OPEN_BRACKET
        ):
            buffer.append("0.")
        elif last.is_function or last.kind is TokenKind.CLOSE_BRACKET:
            buffer.append("*")
            buffer.append("0.")
        else:
            parts = last.parts
            if "." not in parts.magnitude and "E" not in parts.magnitude:
                buffer.replace_last(NumberParts(parts.magnitude + ".", parts.negative).text())

    @_keypress
    def delete_last(self) -> None:
        """Delete the last character of the equation, or the whole last token."""
        buffer = self.buffer
        last = buffer.last()
        if last is None:
            return

        parts = last.parts
        if parts is not None and parts.negative:
            if len(parts.magnitude) == 1:
                buffer.pop()
            else:
                buffer.replace_last(NumberParts(_remove_last_char(parts.magnitude), True).text())
        elif len(last.text) == 1 or last.is_function or last.is_modifier:
            buffer.pop()
        else:
            buffer.replace_last(_remove_last_char(last.text))

    @_keypress
    def change_sign(self) -> bool:
        """Toggle the last numeric literal between ``n`` and ``(-n)``.

        Returns:
            True if the sign was changed
        """
        self._start_new(from_result=True)
        last = self.buffer.last()
        if last is None or not last.is_number or last.text == "0":
            return False
        parts = last.parts
        self.buffer.replace_last(NumberParts(parts.magnitude, not parts.negative).text())
        return True

    @_keypress
    def add_bracket(self) -> None:
        """Add an opening or closing bracket, whichever fits the equation."""
        self._start_new(from_result=False)
        buffer = self.buffer
        last = buffer.last()
        opened = buffer.count(TokenKind.OPEN_BRACKET) + buffer.count(TokenKind.FUNCTION)
        closed = buffer.count(TokenKind.CLOSE_BRACKET)

        if last is None:
            signs, reason = (BRACKET_OPEN,), "equation is empty"
        elif last.is_bracket:
            if last.kind is TokenKind.CLOSE_BRACKET and opened > closed:
                signs, reason = (BRACKET_CLOSE,), "last was closed"
            else:
                # two or more brackets next to each other must be opened
                signs, reason = (BRACKET_OPEN,), "last was a bracket"
        elif last.is_number and opened == closed:
            signs, reason = ("*", BRACKET_OPEN), "last was a number and brackets are balanced"
        elif last.is_operator:
            signs, reason = (BRACKET_OPEN,), "last was an operator"
        elif opened > closed:
            signs, reason = (BRACKET_CLOSE,), "more opened than closed"
        else:
            signs, reason = (BRACKET_OPEN,), "default"

        logger.debug("Bracket %s: %s", "".join(signs), reason)
        for sign in signs:
            buffer.append(sign)

    # -- evaluation ----------------------------------------------------------

    def is_valid(self) -> bool:
        """True if the equation does not end in an operator or a dangling exponent."""
        last = self.buffer.last(correct=True)
        return last is not None and not last.is_operator and not last.has_dangling_exponent

    def _replace_left_operand(self, value: str) -> None:
        length = len(self.buffer)
        if length == 0:
            return
        self.buffer.splice_left(2 if length >= 3 else 0, value)

    @_keypress
    def calculate(self) -> str:
        """Evaluate the equation and return the formatted result.

        Raises:
            InvalidFormatError: the equation ends in an operator or dangling exponent
            DivisionByZeroError: a '/' is followed by a zero literal
            CalculationError: the result is not a number, or the equation is malformed
            InfinityError: the result is +/- infinity
        """
        buffer = self.buffer
        if buffer.calculated:
            self._replace_left_operand(buffer.last_result)

        if not self.is_valid():
            raise InvalidFormatError()

        buffer.calculated = False
        tokens = buffer.tokens()
        context = {"equation": to_expression(tokens)}
        logger.debug("Calculating", extra=context)

        check_division_by_zero(tokens)
        try:
            result = evaluate(tokens)
        except (EvaluationFault, RecursionError) as exc:
            logger.warning("Cannot evaluate: %s", exc, exc_info=True, extra=context)
            raise CalculationError() from exc

        if abs(result) < ZERO_CLAMP:
            result = 0.0
        if math.isnan(result):
            raise CalculationError()
        if math.isinf(result):
            raise InfinityError(result > 0)

        formatted = format_value(result)
        buffer.calculated = True
        buffer.last_result = formatted
        logger.debug("Result: %s", formatted, extra=context)
        return formatted
