"""Tests for arithmetic, bitwise, comparison and logical operators."""

import pytest

from clc import CLCDivisionByZeroError, CLCEvalError, CLCNumberType, CLCTypeError


class TestArithmetic:
    """Test arithmetic operators and precedence."""

    @pytest.mark.parametrize("expression,expected", [
        # Precedence
        ("2 + 3 * 4", "14"),
        ("(2 + 3) * 4", "20"),
        ("10 - 3 + 1", "8"),
        ("2 * 3 + 4 * 5", "26"),

        # Left associativity
        ("100 / 10 / 5", "2"),
        ("2 - 1 - 1", "0"),

        # Unary operators
        ("-5 + 10", "5"),
        ("--5", "5"),
        ("+7", "7"),
        ("-(2 + 3)", "-5"),

        # Integer division truncates toward zero, remainder follows the dividend
        ("7 / 2", "3"),
        ("-7 / 2", "-3"),
        ("i64(7) / -2", "-3"),
        ("7 % 3", "1"),
        ("-7 % 3", "-1"),
        ("i64(7) % -3", "1"),

        # Floats
        ("1.5 + 1", "2.50"),
        ("7.0 / 2", "3.50"),
        ("0.1 + 0.2", "0.30"),
        ("2.5 * 2", "5"),
        ("7.5 % 2", "1.50"),
        ("-7.5 % 2", "-1.50"),
    ])
    def test_arithmetic(self, clc, helpers, expression, expected):
        """Arithmetic follows the usual precedence and left associativity."""
        helpers.assert_evaluates_to(clc, expression, expected)

    def test_hex_plus_one_is_u64(self, clc, helpers):
        """0xFF is a u64 literal, so adding 1 does not wrap."""
        helpers.assert_integer(clc.evaluate("0xFF + 1"), 256, CLCNumberType.U64)

    def test_result_type_follows_left_operand(self, clc, helpers):
        """The right operand is cast to the left operand's type."""
        helpers.assert_integer(clc.evaluate("u8(0xFF) + 1"), 0, CLCNumberType.U8)
        helpers.assert_integer(clc.evaluate("u8(200) + 300"), 244, CLCNumberType.U8)
        helpers.assert_integer(clc.evaluate("i8(127) + 1"), -128, CLCNumberType.I8)
        helpers.assert_integer(clc.evaluate("1 + 2.9"), 3, CLCNumberType.U64)
        helpers.assert_float(clc.evaluate("2.5 + 1"), 3.5)

    def test_unsigned_subtraction_wraps(self, clc, helpers):
        """Subtraction in an unsigned type wraps around."""
        helpers.assert_integer(clc.evaluate("3 - 5"), 18446744073709551614, CLCNumberType.U64)
        helpers.assert_integer(clc.evaluate("u8(3) - 5"), 254, CLCNumberType.U8)

    def test_multiplication_wraps(self, clc, helpers):
        """Integer multiplication wraps to the type's width."""
        helpers.assert_integer(clc.evaluate("u16(300) * 300"), 90000 % 65536, CLCNumberType.U16)
        helpers.assert_integer(clc.evaluate("MAX_U64 * 2"), 18446744073709551614, CLCNumberType.U64)

    def test_unary_minus_reinterprets_as_signed(self, clc, helpers):
        """Negating an unsigned integer produces the signed type of the same width."""
        helpers.assert_integer(clc.evaluate("-5"), -5, CLCNumberType.I64)
        helpers.assert_integer(clc.evaluate("-u8(5)"), -5, CLCNumberType.I8)
        helpers.assert_integer(clc.evaluate("-u8(200)"), 56, CLCNumberType.I8)
        helpers.assert_integer(clc.evaluate("-MIN_I8"), -128, CLCNumberType.I8)
        helpers.assert_float(clc.evaluate("-2.5"), -2.5)

    def test_negative_left_operand_keeps_signed_type(self, clc, helpers):
        """Once negated, later operands are cast to the signed type."""
        helpers.assert_integer(clc.evaluate("-5 + 3"), -2, CLCNumberType.I64)
        helpers.assert_integer(clc.evaluate("-1 * 3"), -3, CLCNumberType.I64)

    def test_signed_minimum_divided_by_minus_one_wraps(self, clc, helpers):
        """MIN / -1 wraps back to MIN."""
        helpers.assert_integer(clc.evaluate("MIN_I8 / -1"), -128, CLCNumberType.I8)

    @pytest.mark.parametrize("expression", ["1 / 0", "1 % 0", "u8(5) / 256", "i32(1) % 0.5"])
    def test_integer_division_by_zero(self, clc, expression):
        """Integer division or modulo by zero (after coercion) is an error."""
        with pytest.raises(CLCDivisionByZeroError):
            clc.evaluate(expression)

    def test_division_by_zero_position(self, clc):
        """The error points at the operator."""
        with pytest.raises(CLCDivisionByZeroError) as exc_info:
            clc.evaluate("1 + 4 / 0")

        assert exc_info.value.position == 6

    @pytest.mark.parametrize("expression,expected", [
        ("1.0 / 0", "inf"),
        ("-1.0 / 0", "-inf"),
        ("0.0 / 0", "NaN"),
        ("1.0 % 0", "NaN"),
        ("INF - INF", "NaN"),
        ("INF % 2", "NaN"),
    ])
    def test_float_division_is_ieee(self, clc, helpers, expression, expected):
        """Float division by zero gives infinities or NaN instead of failing."""
        helpers.assert_evaluates_to(clc, expression, expected)


class TestBitwise:
    """Test bitwise operators and shifts."""

    @pytest.mark.parametrize("expression,expected", [
        ("0xF0 | 0x0F", "255"),
        ("0xFF & 0x0F", "15"),
        ("0xFF ^ 0x0F", "240"),
        ("1 << 4", "16"),
        ("256 >> 4", "16"),
        ("1 | 2 ^ 3 & 4", "3"),
        ("u8(1) << 8", "0"),
        ("u8(1) << 7", "128"),
        ("1 << 64", "0"),
        ("1 << 100", "0"),
        ("MAX_U64 >> 64", "0"),
        ("1 << 2 + 1", "8"),
    ])
    def test_bitwise(self, clc, helpers, expression, expected):
        """Bitwise operators work on the bit pattern and wrap to width."""
        helpers.assert_evaluates_to(clc, expression, expected)

    def test_bitwise_not(self, clc, helpers):
        """~ flips every bit of the type's width."""
        helpers.assert_integer(clc.evaluate("~0"), 18446744073709551615, CLCNumberType.U64)
        helpers.assert_integer(clc.evaluate("~u8(0x0F)"), 0xF0, CLCNumberType.U8)
        helpers.assert_integer(clc.evaluate("~i8(0)"), -1, CLCNumberType.I8)

    def test_arithmetic_shift_right_on_signed(self, clc, helpers):
        """>> fills with the sign bit for signed types."""
        helpers.assert_integer(clc.evaluate("i8(-16) >> 2"), -4, CLCNumberType.I8)
        helpers.assert_integer(clc.evaluate("i8(-16) >> 100"), -1, CLCNumberType.I8)
        helpers.assert_integer(clc.evaluate("u8(0xF0) >> 2"), 0x3C, CLCNumberType.U8)

    def test_negative_shift_count(self, clc):
        """A negative shift count is an evaluation error."""
        with pytest.raises(CLCEvalError, match="Negative shift count"):
            clc.evaluate("i32(1) << -1")

    @pytest.mark.parametrize("expression", [
        "1.5 & 1",
        "1.5 | 1",
        "1.5 ^ 1",
        "1.5 << 1",
        "1.5 >> 1",
        "1.5 && 1",
        "1.5 || 0",
        "~1.5",
        "!1.5",
    ])
    def test_bitwise_and_logical_on_float(self, clc, expression):
        """Bitwise and logical operators reject a float operand."""
        with pytest.raises(CLCTypeError, match="requires an integer operand"):
            clc.evaluate(expression)


class TestComparisonAndLogic:
    """Test comparison and logical operators."""

    @pytest.mark.parametrize("expression,expected", [
        ("1 < 2", "1"),
        ("2 < 1", "0"),
        ("2 <= 2", "1"),
        ("3 >= 4", "0"),
        ("5 == 5", "1"),
        ("5 != 5", "0"),
        ("1.5 > 1", "1"),
        ("1 == 1.9", "1"),
        ("NAN == NAN", "0"),
        ("NAN != NAN", "1"),
        ("-1 < 0", "1"),
        ("1 && 0", "0"),
        ("1 && 2", "1"),
        ("0 || 3", "1"),
        ("0 || 0", "0"),
        ("!0", "1"),
        ("!5", "0"),
        ("1 < 2 && 3 > 2", "1"),
    ])
    def test_comparisons(self, clc, helpers, expression, expected):
        """Comparisons and logical operators produce 0 or 1."""
        helpers.assert_evaluates_to(clc, expression, expected)

    def test_boolean_results_are_u8(self, clc, helpers):
        """Booleans are u8, whatever the operand types."""
        helpers.assert_integer(clc.evaluate("1.5 > 1"), 1, CLCNumberType.U8)
        helpers.assert_integer(clc.evaluate("i64(1) && 1"), 1, CLCNumberType.U8)
        helpers.assert_integer(clc.evaluate("!0"), 1, CLCNumberType.U8)

    def test_comparisons_are_dimensionless(self, clc):
        """Comparing values with units gives a plain number."""
        assert clc.evaluate("1K == 1024B").is_dimensionless()
