"""Error taxonomy and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class KeypadResult:
    """Result of feeding a sequence of keys to an equation editor."""

    ok: bool
    equation: list[str] = field(default_factory=list)
    display: str = ""
    result: str | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": self.ok,
            "equation": self.equation,
            "display": self.display,
        }
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return (
                f"KeypadResult(ok=False, equation={self.equation!r}, "
                f"error={self.error!r}, error_code={self.error_code!r})"
            )
        parts = [f"ok={self.ok}", f"equation={self.equation!r}"]
        if self.result is not None:
            parts.append(f"result={self.result!r}")
        return f"KeypadResult({', '.join(parts)})"


class CalculatorError(Exception):
    """Base class for errors raised by ``EquationEditor.calculate``."""

    default_message = "Calculator error"
    default_code = "CALCULATOR_ERROR"

    def __init__(self, message: str | None = None, code: str | None = None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidFormatError(CalculatorError):
    """Raised when the equation ends in an operator or an incomplete exponent."""

    default_message = "Equation invalid format"
    default_code = "INVALID_FORMAT"


class DivisionByZeroError(CalculatorError):
    """Raised when a division operand is a literal zero."""

    default_message = "Division by zero error"
    default_code = "DIVISION_BY_ZERO"


class CalculationError(CalculatorError):
    """Raised when the result is not a number or the equation cannot be evaluated."""

    default_message = "Calculation error"
    default_code = "CALCULATION_ERROR"


class InfinityError(CalculatorError):
    """Raised when the result is positive or negative infinity."""

    default_message = "Result equals +/- Infinity"
    default_code = "INFINITY"

    def __init__(self, positive: bool, message: str | None = None):
        self.positive = positive
        super().__init__(message)


class UnknownKeyError(ValueError):
    """Raised when a logical key name has no editor operation."""

    def __init__(self, key: str, code: str = "UNKNOWN_KEY"):
        self.key = key
        self.message = f"Unknown key: {key!r}"
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
