"""Public API for Keycalc - returns structured objects instead of raising."""

from __future__ import annotations

from typing import Iterable

from .editor import EquationEditor
from .formatter import render_equation
from .keys import press, split_keys
from .logging_config import get_logger
from .types import CalculatorError, KeypadResult, UnknownKeyError

logger = get_logger("api")


def new_editor() -> EquationEditor:
    """Create an editor with an empty equation and its own undo history."""
    return EquationEditor()


def run_keys(
    keys: Iterable[str] | str, editor: EquationEditor | None = None
) -> KeypadResult:
    """Feed logical keys to an editor and report the outcome.

    Args:
        keys: Key names, or one string of whitespace-separated key names
            (e.g. "5 + 3 =")
        editor: Editor to continue from (a new one if omitted)

    Returns:
        KeypadResult with the equation after the last key and, if "=" was the
        last key pressed, its result

    Example:
        >>> from keycalc_pkg.api import run_keys
        >>> run_keys("5 + 3 =").result
        '8'
        >>> run_keys("4 / 0 =").error_code
        'DIVISION_BY_ZERO'
    """
    if isinstance(keys, str):
        keys = split_keys(keys)
    if editor is None:
        editor = new_editor()

    result = None
    for key in keys:
        try:
            outcome = press(editor, key)
        except (CalculatorError, UnknownKeyError) as e:
            logger.debug("Key %r failed: %s", key, e)
            equation = editor.get_equation()
            return KeypadResult(
                ok=False,
                equation=equation,
                display=render_equation(equation),
                error=e.message,
                error_code=e.code,
            )
        result = outcome if key == "=" else None

    equation = editor.get_equation()
    return KeypadResult(
        ok=True, equation=equation, display=render_equation(equation), result=result
    )
