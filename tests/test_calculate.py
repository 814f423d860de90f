"""Tests for evaluating equations typed on the keypad."""

import unittest

from keycalc_pkg.editor import EquationEditor
from keycalc_pkg.keys import press_all, split_keys
from keycalc_pkg.types import (
    CalculationError,
    CalculatorError,
    DivisionByZeroError,
    InfinityError,
    InvalidFormatError,
)


def calc(line, editor=None):
    editor = editor or EquationEditor()
    return press_all(editor, split_keys(line))


class TestCalculate(unittest.TestCase):
    def test_basic(self):
        self.assertEqual(calc("5 + 3 ="), "8")
        self.assertEqual(calc("2 + 3 * 4 ="), "14")
        self.assertEqual(calc("1 ÷ 3 ="), "0.33333333")
        self.assertEqual(calc("2 - 1 0 ="), "-8")

    def test_functions_and_constants(self):
        self.assertEqual(calc("sqrt 1 6 () ="), "4")
        self.assertEqual(calc("2 e ="), "5.43656365")
        self.assertEqual(calc("exp 1 () ="), "2.71828182")
        self.assertEqual(calc("pow2 1 0 () ="), "1024")
        self.assertEqual(calc("ln e () ="), "1")
        self.assertEqual(calc("3 ! ="), "6")

    def test_e_as_an_opener(self):
        self.assertEqual(calc("e ="), "2.71828182")
        self.assertEqual(calc("e 2 ="), "5.43656365")
        self.assertEqual(calc("e - 1 ="), "1.71828182")
        self.assertEqual(calc("e sqrt 4 () ="), "5.43656365")

    def test_bracket_after_e_leaves_an_unbalanced_close(self):
        with self.assertRaises(CalculationError):
            calc("e () =")

    def test_decimal_after_function_cannot_evaluate(self):
        with self.assertRaises(CalculationError):
            calc("sqrt . 5 () =")

    def test_power(self):
        self.assertEqual(calc("() - 2 ^ 2 () ="), "4")
        self.assertEqual(calc("2 ^3 ^2 ="), "64")
        self.assertEqual(calc("2 ^ 3 ^ 2 ="), "512")

    def test_tiny_result_is_zero(self):
        self.assertEqual(calc("1 0 ^ () - 3 1 0 () ="), "0")

    def test_dangling_decimal_is_healed(self):
        self.assertEqual(calc("5 . ="), "5")

    def test_unclosed_brackets_are_an_error(self):
        with self.assertRaises(CalculationError):
            calc("sqrt 4 =")

    def test_large_results(self):
        self.assertEqual(calc("1 0 0 0 0 0 × 1 0 0 0 0 0 ="), "1.00000E10")


class TestRepeatedEquals(unittest.TestCase):
    def test_repeats_last_operation(self):
        editor = EquationEditor()
        self.assertEqual(calc("5 + 3 =", editor), "8")
        self.assertEqual(calc("=", editor), "11")
        self.assertEqual(calc("=", editor), "14")
        self.assertEqual(editor.get_equation(), ["11", "+", "3"])

    def test_repeats_last_operator_and_operand(self):
        self.assertEqual(calc("1 + 2 * 3 = ="), "21")

    def test_single_value(self):
        self.assertEqual(calc("7 = ="), "7")


class TestAfterResult(unittest.TestCase):
    def test_operator_continues_from_result(self):
        self.assertEqual(calc("5 + 3 = + 2 ="), "10")

    def test_modifier_continues_from_result(self):
        self.assertEqual(calc("5 + 3 = ^2 ="), "64")

    def test_digit_starts_new_equation(self):
        editor = EquationEditor()
        calc("5 + 3 = 2", editor)
        self.assertEqual(editor.get_equation(), ["2"])
        self.assertFalse(editor.calculated)

    def test_function_and_bracket_start_new_equation(self):
        editor = EquationEditor()
        calc("5 + 3 = sqrt", editor)
        self.assertEqual(editor.get_equation(), ["sqrt("])
        editor = EquationEditor()
        calc("5 + 3 = ()", editor)
        self.assertEqual(editor.get_equation(), ["("])

    def test_negative_result_is_wrapped(self):
        editor = EquationEditor()
        calc("2 - 1 0 = +", editor)
        self.assertEqual(editor.get_equation(), ["(-8)", "+"])

    def test_change_sign_on_result(self):
        editor = EquationEditor()
        calc("2 - 1 0 = +/-", editor)
        self.assertEqual(editor.get_equation(), ["8"])

    def test_delete_edits_in_place(self):
        editor = EquationEditor()
        calc("1 2 + 3 = del", editor)
        self.assertEqual(editor.get_equation(), ["12", "+"])
        self.assertFalse(editor.calculated)

    def test_last_result(self):
        editor = EquationEditor()
        calc("6 × 7 =", editor)
        self.assertEqual(editor.last_result, "42")
        self.assertTrue(editor.calculated)


class TestErrors(unittest.TestCase):
    def test_invalid_format(self):
        for line in ("5 + =", "=", "sqrt - ="):
            with self.subTest(line=line):
                with self.assertRaises(InvalidFormatError) as ctx:
                    calc(line)
                self.assertEqual(ctx.exception.code, "INVALID_FORMAT")

    def test_dangling_exponent_is_invalid(self):
        editor = EquationEditor()
        editor.buffer.append("1.5E")
        with self.assertRaises(InvalidFormatError):
            editor.calculate()
        editor.add_operator("-")
        with self.assertRaises(InvalidFormatError):
            editor.calculate()
        editor.add_digit("3")
        self.assertEqual(editor.get_equation(), ["1.5E-3"])
        self.assertEqual(editor.calculate(), "0.0015")

    def test_division_by_zero_literal(self):
        for line in ("4 / 0 =", "4 / 0 . =", "4 / 0 . 0 0 =", "4 / 0 +/- ="):
            with self.subTest(line=line):
                with self.assertRaises(DivisionByZeroError) as ctx:
                    calc(line)
                self.assertEqual(ctx.exception.code, "DIVISION_BY_ZERO")

    def test_division_by_computed_zero_is_infinity(self):
        with self.assertRaises(InfinityError) as ctx:
            calc("4 / () 0 () =")
        self.assertTrue(ctx.exception.positive)

    def test_infinity_sign(self):
        with self.assertRaises(InfinityError) as ctx:
            calc("1 0 ^ 4 0 0 =")
        self.assertTrue(ctx.exception.positive)
        self.assertEqual(ctx.exception.code, "INFINITY")

        with self.assertRaises(InfinityError) as ctx:
            calc("- 1 0 ^ 4 0 1 =")
        self.assertFalse(ctx.exception.positive)

        with self.assertRaises(InfinityError) as ctx:
            calc("0 ^-1 =")
        self.assertTrue(ctx.exception.positive)

        with self.assertRaises(InfinityError) as ctx:
            calc("ln 0 () =")
        self.assertFalse(ctx.exception.positive)

    def test_not_a_number(self):
        for line in ("sqrt - 4 () =", "asin 2 () =", "- 3 ! ="):
            with self.subTest(line=line):
                with self.assertRaises(CalculationError) as ctx:
                    calc(line)
                self.assertEqual(ctx.exception.code, "CALCULATION_ERROR")

    def test_errors_share_a_base_class(self):
        for error in (
            InvalidFormatError,
            DivisionByZeroError,
            CalculationError,
            InfinityError,
        ):
            self.assertTrue(issubclass(error, CalculatorError))

    def test_failed_calculation_keeps_equation(self):
        editor = EquationEditor()
        with self.assertRaises(DivisionByZeroError):
            calc("4 / 0 =", editor)
        self.assertEqual(editor.get_equation(), ["4", "/", "0"])
        self.assertFalse(editor.calculated)
        editor.delete_last()
        editor.add_digit("2")
        self.assertEqual(editor.calculate(), "2")


if __name__ == "__main__":
    unittest.main()
