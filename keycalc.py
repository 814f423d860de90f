#!/usr/bin/env python3
"""
Keycalc - keypad calculator

Thin wrapper that delegates all functionality to the keycalc_pkg package.

Usage:
    python keycalc.py                       # Interactive REPL
    python keycalc.py -k "5 + 3 ="          # Press keys and exit
    python keycalc.py --help                # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Keycalc.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from keycalc_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
