"""Mathematical built-in functions for CLC."""

import math
from typing import Callable, Dict, List

from clc.clc_error import CLCEvalError
from clc.clc_operators import CLCOperators
from clc.clc_value import CLCFloat, CLCInteger, CLCValue, result_with_unit


def round_half_away_from_zero(x: float) -> float:
    """Round to the nearest integer, with halves rounded away from zero."""
    if not math.isfinite(x):
        return x

    return math.copysign(math.floor(abs(x) + 0.5), x)


def ieee_floor(x: float) -> float:
    """floor() that passes infinities and NaN through."""
    return float(math.floor(x)) if math.isfinite(x) else x


def ieee_ceil(x: float) -> float:
    """ceil() that passes infinities and NaN through."""
    return float(math.ceil(x)) if math.isfinite(x) else x


def ieee_sqrt(x: float) -> float:
    """Square root; NaN for negative input."""
    return math.nan if x < 0 else math.sqrt(x)


def ieee_exp(x: float) -> float:
    """Exponential; inf on overflow."""
    try:
        return math.exp(x)

    except OverflowError:
        return math.inf


def _ieee_log(log: Callable[[float], float]) -> Callable[[float], float]:
    """Wrap a logarithm so that log(0) is -inf and negative input is NaN."""
    def wrapped(x: float) -> float:
        if x == 0.0:
            return -math.inf

        if x < 0:
            return math.nan

        return log(x)

    return wrapped


def _ieee_trig(func: Callable[[float], float]) -> Callable[[float], float]:
    """Wrap a trigonometric function so that out-of-domain input gives NaN."""
    def wrapped(x: float) -> float:
        if math.isnan(x):
            return x

        try:
            return func(x)

        except ValueError:
            return math.nan

    return wrapped


def ieee_pow(base: float, exponent: float) -> float:
    """Float power with IEEE 754 results instead of Python exceptions."""
    try:
        return math.pow(base, exponent)

    except OverflowError:
        odd_integer = exponent.is_integer() and int(exponent) % 2 == 1
        return -math.inf if base < 0 and odd_integer else math.inf

    except ValueError:
        if base == 0.0 and exponent < 0:
            return math.inf

        return math.nan


class CLCMathFunctions:
    """
    Mathematical built-in functions for CLC.

    Every implementation takes the already evaluated (and, where the
    function declares a parameter type, already cast) argument list.
    """

    # Float functions whose result is still measured in the argument's unit.
    UNIT_PRESERVING = ('floor', 'ceil', 'round')

    def __init__(self, operators: CLCOperators | None = None) -> None:
        self._operators = operators or CLCOperators()
        self._float_functions: Dict[str, Callable[[float], float]] = {
            'sin': _ieee_trig(math.sin),
            'cos': _ieee_trig(math.cos),
            'tan': _ieee_trig(math.tan),
            'asin': _ieee_trig(math.asin),
            'acos': _ieee_trig(math.acos),
            'atan': math.atan,
            'sqrt': ieee_sqrt,
            'exp': ieee_exp,
            'ln': _ieee_log(math.log),
            'log2': _ieee_log(math.log2),
            'log10': _ieee_log(math.log10),
            'floor': ieee_floor,
            'ceil': ieee_ceil,
            'round': round_half_away_from_zero,
            'deg': math.degrees,
            'rad': math.radians,
        }

    def float_function(self, name: str) -> Callable[[List[CLCValue]], CLCValue]:
        """Return the implementation of a single-argument f64 function."""
        func = self._float_functions[name]
        keep_unit = name in self.UNIT_PRESERVING

        def impl(args: List[CLCValue]) -> CLCValue:
            arg = args[0]
            return CLCFloat(func(arg.as_float()), arg.unit if keep_unit else None)

        return impl

    def builtin_abs(self, args: List[CLCValue]) -> CLCValue:
        """Absolute value, keeping type and unit; the minimum signed value wraps to itself."""
        arg = args[0]
        if isinstance(arg, CLCInteger):
            return result_with_unit(CLCInteger(abs(arg.value), arg.integer_type), arg.unit)

        return result_with_unit(CLCFloat(math.fabs(arg.as_float())), arg.unit)

    def builtin_pow(self, args: List[CLCValue]) -> CLCValue:
        """
        Raise the first argument to the power of the second.

        The exponent is coerced to the base's type. Integer powers wrap to the
        base's width and require a non-negative exponent.
        """
        base = args[0]
        exponent = self._operators.coerce(base, args[1], "pow")

        if isinstance(base, CLCInteger) and isinstance(exponent, CLCInteger):
            if exponent.value < 0:
                raise CLCEvalError(
                    message=f"Negative exponent for integer power: {exponent.value}",
                    received=f"pow({base.describe()}, {exponent.value}) ({base.type_name()})",
                    expected="A non-negative exponent for integer bases",
                    suggestion="Use a float base for negative exponents",
                    example="pow(2.0, -1) → 0.50"
                )

            modulus = 1 << base.integer_type.bits
            power = CLCInteger(pow(base.value, exponent.value, modulus), base.integer_type)
            return result_with_unit(power, base.unit)

        return result_with_unit(CLCFloat(ieee_pow(base.as_float(), exponent.as_float())), base.unit)

    def builtin_min(self, args: List[CLCValue]) -> CLCValue:
        """The smaller of two values, in the first value's type; the unit of whichever has one."""
        first = args[0]
        second = self._operators.coerce(first, args[1], "min")
        smaller = second if second.to_python() < first.to_python() else first
        return result_with_unit(smaller, first.unit if first.unit is not None else second.unit)

    def builtin_max(self, args: List[CLCValue]) -> CLCValue:
        """The larger of two values, in the first value's type; the unit of whichever has one."""
        first = args[0]
        second = self._operators.coerce(first, args[1], "max")
        larger = second if second.to_python() > first.to_python() else first
        return result_with_unit(larger, first.unit if first.unit is not None else second.unit)
