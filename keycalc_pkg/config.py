"""Centralized configuration for Keycalc.

This module defines:
- Input limits for the equation editor (digit budget)
- Undo history bounds
- Numeric thresholds used by the evaluator and display formatter
- The token vocabulary recognised by the editor

Configuration can be overridden via environment variables (prefixed with KEYCALC_).
"""

import os

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("keycalc")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Editor limits
MAX_DIGITS = int(os.getenv("KEYCALC_MAX_DIGITS", "9"))  # digits per numeric literal

# Undo history: once the log grows past UNDO_LOG_LIMIT entries the oldest
# UNDO_LOG_TRIM entries are dropped
UNDO_LOG_LIMIT = int(os.getenv("KEYCALC_UNDO_LOG_LIMIT", "300"))
UNDO_LOG_TRIM = int(os.getenv("KEYCALC_UNDO_LOG_TRIM", "100"))

# Numeric thresholds
ZERO_CLAMP = float(os.getenv("KEYCALC_ZERO_CLAMP", "1e-300"))  # |x| below this is 0
SCIENTIFIC_THRESHOLD = float(
    os.getenv("KEYCALC_SCIENTIFIC_THRESHOLD", "1e10")
)  # |x| at or above this is shown in scientific notation
SCIENTIFIC_DIGITS = int(
    os.getenv("KEYCALC_SCIENTIFIC_DIGITS", "5")
)  # fractional digits of the scientific mantissa
ROUND_UP_MANTISSA = int(
    os.getenv("KEYCALC_ROUND_UP_MANTISSA", "95")
)  # first two fractional digits at or above this round a wide value up

LOG_LEVEL = os.getenv("KEYCALC_LOG_LEVEL", "WARNING")

# Token vocabulary
OPERATORS = ("+", "-", "*", "/", "^")
MODIFIERS = ("^2", "^3", "^-1", "!")
FUNCTIONS = (
    "sqrt(",
    "sin(",
    "cos(",
    "tan(",
    "asin(",
    "acos(",
    "atan(",
    "log(",
    "log10(",
    "pow(E,",
    "pow(2,",
    "E",
)
# Nullary function openers: they take no argument list
CONSTANTS = ("E",)
DECIMAL = "."
BRACKET_OPEN = "("
BRACKET_CLOSE = ")"
