"""Keycalc package: keypad equation editor, evaluator, formatter and CLI."""

__all__ = [
    "config",
    "tokens",
    "buffer",
    "undo",
    "editor",
    "evaluator",
    "formatter",
    "keys",
    "types",
    "api",
    "cli",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "EquationEditor",
    "run_keys",
    "new_editor",
    "format_value",
]
