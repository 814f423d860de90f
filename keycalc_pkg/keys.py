"""Logical key names and their dispatch to editor operations."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from .config import FUNCTIONS, MODIFIERS, OPERATORS
from .editor import DIGITS, EquationEditor
from .types import UnknownKeyError

FUNCTION_KEYS = {
    "sqrt": "sqrt(",
    "√": "sqrt(",
    "sin": "sin(",
    "cos": "cos(",
    "tan": "tan(",
    "asin": "asin(",
    "acos": "acos(",
    "atan": "atan(",
    "ln": "log(",
    "log10": "log10(",
    "exp": "pow(E,",
    "e^x": "pow(E,",
    "pow2": "pow(2,",
    "2^x": "pow(2,",
    "e": "E",
}
FUNCTION_KEYS.update({token: token for token in FUNCTIONS})

OPERATOR_KEYS = {"×": "*", "x": "*", "÷": "/"}
OPERATOR_KEYS.update({operator: operator for operator in OPERATORS})

MODIFIER_KEYS = {"x^2": "^2", "x^3": "^3", "1/x": "^-1"}
MODIFIER_KEYS.update({modifier: modifier for modifier in MODIFIERS})

COMMAND_KEYS: dict[str, Callable[[EquationEditor], Any]] = {
    ".": EquationEditor.add_decimal,
    "del": EquationEditor.delete_last,
    "backspace": EquationEditor.delete_last,
    "+/-": EquationEditor.change_sign,
    "sign": EquationEditor.change_sign,
    "()": EquationEditor.add_bracket,
    "bracket": EquationEditor.add_bracket,
    "C": EquationEditor.reset_equation,
    "clear": EquationEditor.reset_equation,
    "undo": EquationEditor.undo,
    "=": EquationEditor.calculate,
}


def press(editor: EquationEditor, key: str) -> Any:
    """Apply one logical key to ``editor``.

    Returns whatever the editor operation returns: a success flag for digits
    and sign changes, the formatted result for "=", otherwise None.

    Raises:
        UnknownKeyError: if ``key`` is not a known key name
        CalculatorError: from "=" (see ``EquationEditor.calculate``)
    """
    if len(key) == 1 and key in DIGITS:
        return editor.add_digit(key)
    if key in MODIFIER_KEYS:
        return editor.add_modifier(MODIFIER_KEYS[key])
    if key in OPERATOR_KEYS:
        return editor.add_operator(OPERATOR_KEYS[key])
    if key in FUNCTION_KEYS:
        return editor.add_function(FUNCTION_KEYS[key])
    if key in COMMAND_KEYS:
        return COMMAND_KEYS[key](editor)
    raise UnknownKeyError(key)


def split_keys(line: str) -> list[str]:
    """Split a line of whitespace-separated key names."""
    return line.split()


def press_all(editor: EquationEditor, keys: Iterable[str]) -> Any:
    """Press every key in order and return the result of the last one."""
    outcome = None
    for key in keys:
        outcome = press(editor, key)
    return outcome
