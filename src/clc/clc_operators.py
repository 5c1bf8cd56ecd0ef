"""Unary and binary operator implementations for CLC values."""

import math
from typing import Callable, Dict

from clc.clc_error import CLCDivisionByZeroError, CLCEvalError, CLCTypeError
from clc.clc_number_type import CLCNumberType
from clc.clc_value import CLCFloat, CLCInteger, CLCValue, cast_value, convert_value, result_with_unit


BOOLEAN_TYPE = CLCNumberType.U8

ARITHMETIC_OPERATORS = ("+", "-", "*", "/", "%")
BITWISE_OPERATORS = ("&", "|", "^", "<<", ">>")
COMPARISON_OPERATORS = ("==", "!=", "<", ">", "<=", ">=")
LOGICAL_OPERATORS = ("&&", "||")


def make_boolean(flag: bool) -> CLCInteger:
    """Booleans are u8 0 or 1."""
    return CLCInteger(1 if flag else 0, BOOLEAN_TYPE)


def truncating_divide(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def truncating_remainder(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * truncating_divide(a, b)


def float_divide(a: float, b: float) -> float:
    """IEEE 754 division: dividing by zero gives an infinity, or NaN for 0/0."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan

        return math.copysign(math.inf, a) * math.copysign(1.0, b)

    return a / b


def float_remainder(a: float, b: float) -> float:
    """IEEE 754 fmod: NaN when dividing by zero or when the dividend is infinite."""
    if b == 0.0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan

    return math.fmod(a, b)


class CLCOperators:
    """
    Operator semantics for CLC.

    The right operand of every binary operator is first brought into the
    left operand's unit (when both carry one) and then cast to the left
    operand's exact type. Arithmetic and bitwise results keep that type;
    comparisons and logical operators produce a dimensionless u8.
    """

    def __init__(self) -> None:
        self._unary: Dict[str, Callable[[CLCValue], CLCValue]] = {
            '-': self._negate,
            '+': self._identity,
            '~': self._bitwise_not,
            '!': self._logical_not,
        }

        self._integer_ops: Dict[str, Callable[[int, int, CLCNumberType], int]] = {
            '+': lambda a, b, _t: a + b,
            '-': lambda a, b, _t: a - b,
            '*': lambda a, b, _t: a * b,
            '/': self._integer_divide,
            '%': self._integer_remainder,
        }

        self._float_ops: Dict[str, Callable[[float, float], float]] = {
            '+': lambda a, b: a + b,
            '-': lambda a, b: a - b,
            '*': lambda a, b: a * b,
            '/': float_divide,
            '%': float_remainder,
        }

        self._comparisons: Dict[str, Callable[[float | int, float | int], bool]] = {
            '==': lambda a, b: a == b,
            '!=': lambda a, b: a != b,
            '<': lambda a, b: a < b,
            '>': lambda a, b: a > b,
            '<=': lambda a, b: a <= b,
            '>=': lambda a, b: a >= b,
        }

    def apply_unary(self, op: str, operand: CLCValue) -> CLCValue:
        """
        Apply a prefix operator.

        Raises:
            CLCTypeError: For ~ or ! applied to a float
        """
        impl = self._unary.get(op)
        if impl is None:
            raise CLCEvalError(f"Unknown unary operator: {op}")

        return impl(operand)

    def apply_binary(self, op: str, left: CLCValue, right: CLCValue) -> CLCValue:
        """
        Apply an infix operator to two evaluated operands.

        Raises:
            CLCTypeError: For incompatible units or bitwise/logical operators on floats
            CLCDivisionByZeroError: For integer division or remainder by zero
            CLCEvalError: For negative shift counts
        """
        right = self.coerce(left, right, op)
        unit = left.unit if left.unit is not None else right.unit

        if op in COMPARISON_OPERATORS:
            return make_boolean(self._comparisons[op](left.to_python(), right.to_python()))

        if op in LOGICAL_OPERATORS:
            self._require_integer(left, op)
            if op == "&&":
                return make_boolean(left.as_bool() and right.as_bool())

            return make_boolean(left.as_bool() or right.as_bool())

        if op in BITWISE_OPERATORS:
            integer_left = self._require_integer(left, op)
            integer_right = self._require_integer(right, op)
            bits = self._bitwise(op, integer_left, integer_right)
            return result_with_unit(CLCInteger(bits, integer_left.integer_type), unit)

        if op not in ARITHMETIC_OPERATORS:
            raise CLCEvalError(f"Unknown binary operator: {op}")

        result: CLCValue
        if isinstance(left, CLCInteger) and isinstance(right, CLCInteger):
            number = self._integer_ops[op](left.value, right.value, left.integer_type)
            result = CLCInteger(number, left.integer_type)

        else:
            result = CLCFloat(self._float_ops[op](left.as_float(), right.as_float()))

        return result_with_unit(result, unit)

    def coerce(self, left: CLCValue, right: CLCValue, op: str) -> CLCValue:
        """
        Bring the right operand into the left operand's unit and type.

        Raises:
            CLCTypeError: If both operands carry units of different categories
        """
        if left.unit is not None and right.unit is not None:
            if left.unit.category != right.unit.category:
                raise CLCTypeError(
                    message=f"Incompatible units for '{op}': {left.unit.category.value} and {right.unit.category.value}",
                    received=f"Left: {left.describe()}, right: {right.describe()}",
                    expected="Operands with units of the same category, or a dimensionless operand",
                    suggestion="Convert one side first or drop its unit with a cast such as f64(...)",
                    example="4K + 512B, 100°C - 32°F"
                )

            right = convert_value(right, left.unit)

        return cast_value(right, left.number_type)

    def _require_integer(self, value: CLCValue, op: str) -> CLCInteger:
        """Reject floats for operators that only make sense on integers."""
        if not isinstance(value, CLCInteger):
            raise CLCTypeError(
                message=f"Operator '{op}' requires an integer operand, got {value.type_name()}",
                received=f"Operand: {value.describe()} ({value.type_name()})",
                expected="An integer type: u8 u16 u32 u64 i8 i16 i32 i64",
                suggestion="Cast the operand to an integer type first",
                example=f"u64(3.0) {op} 1" if op != "~" and op != "!" else f"{op}u64(3.0)"
            )

        return value

    def _bitwise(self, op: str, left: CLCInteger, right: CLCInteger) -> int:
        """Compute a bitwise result; the caller masks it to the left operand's width."""
        if op == "&":
            return left.bits & right.bits

        if op == "|":
            return left.bits | right.bits

        if op == "^":
            return left.bits ^ right.bits

        count = right.value
        if count < 0:
            raise CLCEvalError(
                message=f"Negative shift count: {count}",
                received=f"Shift count: {count}",
                expected="A non-negative shift count",
                example="1 << 4, 0xF0 >> 4"
            )

        width = left.integer_type.bits
        if op == "<<":
            return 0 if count >= width else left.bits << count

        # Python's >> on the interpreted value is arithmetic for signed types.
        if left.integer_type.signed:
            return left.value >> min(count, width)

        return 0 if count >= width else left.bits >> count

    def _integer_divide(self, a: int, b: int, number_type: CLCNumberType) -> int:
        if b == 0:
            raise self._division_by_zero("/", a, number_type)

        return truncating_divide(a, b)

    def _integer_remainder(self, a: int, b: int, number_type: CLCNumberType) -> int:
        if b == 0:
            raise self._division_by_zero("%", a, number_type)

        return truncating_remainder(a, b)

    def _division_by_zero(self, op: str, dividend: int, number_type: CLCNumberType) -> CLCDivisionByZeroError:
        return CLCDivisionByZeroError(
            message="Division by zero" if op == "/" else "Modulo by zero",
            received=f"{dividend} {op} 0 ({number_type})",
            expected="A non-zero divisor",
            suggestion="Use a float left operand to get inf or NaN instead",
            example="f64(1) / 0 → inf"
        )

    def _negate(self, operand: CLCValue) -> CLCValue:
        """Negate; unsigned integers are reinterpreted as signed of the same width first."""
        if isinstance(operand, CLCInteger):
            signed = CLCInteger(operand.bits, operand.integer_type.to_signed())
            return CLCInteger(-signed.value, signed.integer_type, operand.unit)

        return CLCFloat(-operand.as_float(), operand.unit)

    def _identity(self, operand: CLCValue) -> CLCValue:
        return operand

    def _bitwise_not(self, operand: CLCValue) -> CLCValue:
        integer = self._require_integer(operand, "~")
        return CLCInteger(~integer.bits, integer.integer_type, integer.unit)

    def _logical_not(self, operand: CLCValue) -> CLCValue:
        self._require_integer(operand, "!")
        return make_boolean(not operand.as_bool())
