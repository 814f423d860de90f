from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from .api import run_keys
from .config import LOG_LEVEL, VERSION
from .editor import EquationEditor
from .formatter import render_equation
from .logging_config import get_logger, setup_logging
from .keys import (
    COMMAND_KEYS,
    FUNCTION_KEYS,
    MODIFIER_KEYS,
    OPERATOR_KEYS,
    press,
    split_keys,
)
from .types import (
    CalculationError,
    CalculatorError,
    DivisionByZeroError,
    InfinityError,
    InvalidFormatError,
    KeypadResult,
    UnknownKeyError,
)

logger = get_logger("cli")

ERROR_MESSAGES = {
    InvalidFormatError: "Invalid format used.",
    DivisionByZeroError: "Can't divide by 0.",
    CalculationError: "Calculation error.",
}


def error_message(error: Exception) -> str:
    """User-facing text for an error raised while pressing keys."""
    if isinstance(error, InfinityError):
        return "∞" if error.positive else "-∞"
    for error_type, message in ERROR_MESSAGES.items():
        if isinstance(error, error_type):
            return message
    return str(error)


def run_line(editor: EquationEditor, line: str) -> tuple[KeypadResult, str | None]:
    """Press the keys of one input line; stops at the first failing key.

    Returns:
        Tuple of (result, user-facing error message or None)
    """
    message = None
    result = None
    error: CalculatorError | UnknownKeyError | None = None
    try:
        for key in split_keys(line):
            outcome = press(editor, key)
            result = outcome if key == "=" else None
    except UnknownKeyError as e:
        error, message = e, str(e)
    except CalculatorError as e:
        logger.debug("Calculation failed: %s", e)
        error, message = e, error_message(e)

    equation = editor.get_equation()
    res = KeypadResult(
        ok=error is None,
        equation=equation,
        display=render_equation(equation),
        result=result,
        error=error.message if error is not None else None,
        error_code=error.code if error is not None else None,
    )
    return res, message


def _result_payload(res: KeypadResult, message: str | None = None) -> dict[str, Any]:
    payload = res.to_dict()
    if message is not None:
        payload["message"] = message
    return payload


def print_result_pretty(
    res: KeypadResult, message: str | None = None, output_format: str = "human"
) -> None:
    """Print a keypad result in the specified format.

    Args:
        res: Outcome of a key sequence
        message: User-facing error message, if the sequence failed
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(_result_payload(res, message), indent=2, ensure_ascii=False))
        return
    print(res.display or "0")
    if not res.ok:
        print(message or res.error)
    elif res.result is not None:
        print(f"= {res.result}")


def _health_check() -> int:
    """Run health check to verify basic editor operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running Keycalc health check...")
    print("-" * 50)

    checks = [
        ("Basic arithmetic", "5 + 3 =", lambda r: r.ok and r.result == "8"),
        ("Operator precedence", "2 + 3 * 4 =", lambda r: r.ok and r.result == "14"),
        (
            "Division by zero detection",
            "4 / 0 =",
            lambda r: not r.ok and r.error_code == "DIVISION_BY_ZERO",
        ),
        ("Functions and brackets", "sqrt 1 6 () =", lambda r: r.ok and r.result == "4"),
        ("Undo", "1 2 + undo undo", lambda r: r.ok and r.equation == ["1"]),
    ]
    for name, keys, check in checks:
        try:
            res = run_keys(keys)
            if check(res):
                print(f"[OK] {name} works")
                checks_passed += 1
            else:
                print(f"[FAIL] {name} check failed: {res!r}")
                checks_failed += 1
        except Exception as e:
            print(f"[FAIL] {name} check failed: {e}")
            checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_help_text() -> None:
    print("Type key names separated by spaces, e.g.  5 + 3 =")
    print("  digits     0-9")
    print(f"  operators  {' '.join(OPERATOR_KEYS)}")
    print(f"  modifiers  {' '.join(MODIFIER_KEYS)}")
    print(f"  functions  {' '.join(k for k in FUNCTION_KEYS if not k.endswith(('(', ',')))}")
    print(f"  commands   {' '.join(COMMAND_KEYS)}")
    print("  help, quit")


def repl_loop(output_format: str = "human") -> None:
    """Interactive loop: each line is a sequence of keys for one shared editor."""
    try:
        import readline  # noqa: F401
    except (ImportError, ModuleNotFoundError):
        # readline not available on Windows - that's fine
        pass

    editor = EquationEditor()
    print("Keycalc: type 'help' for keys, 'quit' to exit.")

    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        if raw.lower() in ("quit", "exit"):
            print("Goodbye.")
            break
        if raw.lower() == "help":
            print_help_text()
            continue

        res, message = run_line(editor, raw)
        print_result_pretty(res, message, output_format=output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Keycalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="keycalc")
    parser.add_argument(
        "-k",
        "--keys",
        type=str,
        help='Press a sequence of keys and exit, e.g. "5 + 3 ="',
        dest="keys",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify basic operations",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0

    if args.health_check:
        return _health_check()

    if args.keys:
        res, message = run_line(EquationEditor(), args.keys)
        print_result_pretty(res, message, output_format=args.format)
        return 0 if res.ok else 1

    repl_loop(output_format=args.format)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
