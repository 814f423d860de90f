"""Tests for result and equation formatting."""

import math
import random
import unittest

from keycalc_pkg.formatter import (
    format_value,
    needs_exponent,
    render_equation,
    to_exponential,
)
from keycalc_pkg.tokens import Token


class TestFormatValue(unittest.TestCase):
    def test_integers(self):
        self.assertEqual(format_value(8.0), "8")
        self.assertEqual(format_value(-8.0), "-8")
        self.assertEqual(format_value(1024.0), "1024")

    def test_zero(self):
        self.assertEqual(format_value(0.0), "0")
        self.assertEqual(format_value(-0.0), "0")

    def test_fractions_are_truncated_to_nine_numerals(self):
        self.assertEqual(format_value(1 / 3), "0.33333333")
        self.assertEqual(format_value(2 / 3), "0.66666666")
        self.assertEqual(format_value(math.e), "2.71828182")

    def test_trailing_zeros_removed(self):
        self.assertEqual(format_value(0.1 + 0.2), "0.3")
        self.assertEqual(format_value(1234.5678), "1234.5678")
        self.assertEqual(format_value(2.5), "2.5")
        self.assertEqual(format_value(0.00001), "0.00001")

    def test_wide_values_round_up(self):
        self.assertEqual(format_value(123456789.96), "123456790")
        self.assertEqual(format_value(123456789.5), "123456789")
        self.assertEqual(format_value(12345678.97), "12345678.9")

    def test_wide_negative_values_add_one(self):
        # the carry adds one to the value, so negatives move towards zero
        self.assertEqual(format_value(-123456789.97), "-123456788")
        self.assertEqual(format_value(-12345678.97), "-12345677.9")
        self.assertEqual(format_value(-123456789.5), "-123456789")

    def test_scientific_threshold(self):
        self.assertEqual(format_value(9999999999.0), "9999999999")
        self.assertEqual(format_value(1e10), "1.00000E10")
        self.assertEqual(format_value(12345678901.0), "1.23457E10")
        self.assertEqual(format_value(-2.5e12), "-2.50000E12")
        self.assertEqual(format_value(1e25), "1.00000E25")

    def test_small_values_use_scientific(self):
        self.assertEqual(format_value(1e-7), "1.00000E-7")
        self.assertEqual(format_value(1e-10), "1.00000E-10")
        self.assertEqual(format_value(-3e-9), "-3.00000E-9")

    def test_non_finite_rejected(self):
        for value in (math.inf, -math.inf, math.nan):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    format_value(value)

    def test_output_is_a_token(self):
        for value in (8.0, -8.0, 1 / 3, 1e-7, -2.5e12, 123456789.96):
            with self.subTest(value=value):
                self.assertTrue(Token.of(format_value(value)).is_number)

    def test_fixed_output_is_close(self):
        rng = random.Random(7)
        for _ in range(500):
            value = rng.uniform(1e-3, 1e8)
            text = format_value(value)
            self.assertLessEqual(abs(float(text) - value), 1e-8 * max(1.0, value), text)


class TestExponential(unittest.TestCase):
    def test_needs_exponent(self):
        self.assertFalse(needs_exponent(0.0))
        self.assertFalse(needs_exponent(1e20))
        self.assertTrue(needs_exponent(1e21))
        self.assertFalse(needs_exponent(1e-6))
        self.assertTrue(needs_exponent(-9e-7))

    def test_to_exponential(self):
        self.assertEqual(to_exponential(1.5e12), "1.50000e+12")
        self.assertEqual(to_exponential(-1e-7), "-1.00000e-7")
        self.assertEqual(to_exponential(12345.678, 2), "1.23e+4")


class TestRenderEquation(unittest.TestCase):
    def test_render(self):
        self.assertEqual(
            render_equation(["sqrt(", "(-4)", ")", "*", "2"]), "√( (-4) ) × 2"
        )
        self.assertEqual(render_equation(["5", "^2", "/", "E"]), "5 ² ÷ e")
        self.assertEqual(render_equation([Token.of("log("), Token.of("2")]), "ln( 2")

    def test_empty(self):
        self.assertEqual(render_equation([]), "")


if __name__ == "__main__":
    unittest.main()
