"""
Registry of CLC built-in names.

The registry holds three namespaces: constants, functions (math functions,
casts and unit conversions) and units. It is built once and never changes;
the evaluator only ever reads from it.
"""

from dataclasses import dataclass, field
from enum import Enum
import math
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping

from clc.clc_math import CLCMathFunctions
from clc.clc_number_type import CLCNumberType
from clc.clc_operators import CLCOperators
from clc.clc_unit import ALL_UNITS, CLCUnit, CLCUnitCategory, unit_from_name, unit_from_suffix, units_in_category
from clc.clc_value import CLCFloat, CLCInteger, CLCValue, cast_value, convert_value


class CLCFunctionKind(Enum):
    """What sort of callable a function name refers to."""
    UNARY = "unary"
    BINARY = "binary"
    CAST = "cast"
    UNIT = "unit"


@dataclass(frozen=True)
class CLCConstant:
    """A named constant value."""
    name: str
    value: CLCValue
    description: str = ""


@dataclass(frozen=True)
class CLCFunction:
    """
    A named built-in function.

    When `param_type` is set every argument is cast to it before `impl` is
    called; `None` passes the arguments through unchanged.
    """
    name: str
    kind: CLCFunctionKind
    arity: int
    param_type: CLCNumberType | None
    impl: Callable[[List[CLCValue]], CLCValue] = field(compare=False, repr=False)
    description: str = ""


FLOAT_FUNCTION_DESCRIPTIONS = {
    'sin': "Sine of an angle in radians",
    'cos': "Cosine of an angle in radians",
    'tan': "Tangent of an angle in radians",
    'asin': "Arcsine, in radians",
    'acos': "Arccosine, in radians",
    'atan': "Arctangent, in radians",
    'sqrt': "Square root",
    'exp': "e raised to the argument",
    'ln': "Natural logarithm",
    'log2': "Base 2 logarithm",
    'log10': "Base 10 logarithm",
    'floor': "Round down to a whole number",
    'ceil': "Round up to a whole number",
    'round': "Round to the nearest whole number, halves away from zero",
    'deg': "Convert radians to degrees",
    'rad': "Convert degrees to radians",
}


class CLCRegistry:
    """Immutable lookup tables for constants, functions and units."""

    def __init__(
        self,
        constants: Mapping[str, CLCConstant],
        functions: Mapping[str, CLCFunction]
    ) -> None:
        self._constants = MappingProxyType(dict(constants))
        self._functions = MappingProxyType(dict(functions))

    @classmethod
    def default(cls) -> 'CLCRegistry':
        """Return the shared registry of built-in names, building it on first use."""
        global _DEFAULT_REGISTRY  # pylint: disable=global-statement
        if _DEFAULT_REGISTRY is None:
            _DEFAULT_REGISTRY = cls(_build_constants(), _build_functions())

        return _DEFAULT_REGISTRY

    @property
    def constants(self) -> Mapping[str, CLCConstant]:
        """Read-only view of the constants namespace."""
        return self._constants

    @property
    def functions(self) -> Mapping[str, CLCFunction]:
        """Read-only view of the functions namespace."""
        return self._functions

    def lookup_constant(self, name: str) -> CLCConstant | None:
        """Find a constant by exact name."""
        return self._constants.get(name)

    def lookup_function(self, name: str) -> CLCFunction | None:
        """Find a function, cast or unit conversion by exact name."""
        return self._functions.get(name)

    def lookup_unit(self, name_or_suffix: str) -> CLCUnit | None:
        """Find a unit by suffix ('K', '°F') or by name ('kilobyte')."""
        return unit_from_suffix(name_or_suffix) or unit_from_name(name_or_suffix)

    def units(self) -> List[CLCUnit]:
        """All units in display order."""
        return list(ALL_UNITS)

    def units_in_category(self, category: CLCUnitCategory) -> List[CLCUnit]:
        """All units of one category in display order."""
        return units_in_category(category)

    def constant_names(self) -> List[str]:
        """Sorted names of all constants."""
        return sorted(self._constants)

    def function_names(self) -> List[str]:
        """Sorted names of all functions."""
        return sorted(self._functions)

    def names(self) -> List[str]:
        """Every name that can appear in an expression, for suggestions."""
        return self.constant_names() + self.function_names()


_DEFAULT_REGISTRY: CLCRegistry | None = None


def _build_constants() -> Dict[str, CLCConstant]:
    """Build the constants namespace, including MIN_/MAX_ for every integer type."""
    constants = [
        CLCConstant("PI", CLCFloat(math.pi), "Ratio of a circle's circumference to its diameter"),
        CLCConstant("E", CLCFloat(math.e), "Euler's number"),
        CLCConstant("NAN", CLCFloat(math.nan), "Not a number"),
        CLCConstant("INF", CLCFloat(math.inf), "Positive infinity"),
        CLCConstant("NEG_INF", CLCFloat(-math.inf), "Negative infinity"),
        CLCConstant("MIN_F64", CLCFloat(-1.7976931348623157e308), "Most negative finite f64"),
        CLCConstant("MAX_F64", CLCFloat(1.7976931348623157e308), "Largest finite f64"),
    ]

    for number_type in CLCNumberType.integer_types():
        suffix = number_type.value.upper()
        constants.append(CLCConstant(
            f"MIN_{suffix}", CLCInteger(number_type.min_value, number_type), f"Smallest {number_type} value"
        ))
        constants.append(CLCConstant(
            f"MAX_{suffix}", CLCInteger(number_type.max_value, number_type), f"Largest {number_type} value"
        ))

    return {constant.name: constant for constant in constants}


def _cast_function(number_type: CLCNumberType) -> CLCFunction:
    """Explicit casts drop the unit; implicit coercions keep it."""
    def impl(args: List[CLCValue]) -> CLCValue:
        return cast_value(args[0], number_type).without_unit()

    return CLCFunction(number_type.value, CLCFunctionKind.CAST, 1, None, impl, f"Cast to {number_type}")


def _unit_function(unit: CLCUnit) -> CLCFunction:
    """Conversion into a unit; a dimensionless argument just gets the unit attached."""
    def impl(args: List[CLCValue]) -> CLCValue:
        return convert_value(args[0], unit)

    return CLCFunction(unit.name, CLCFunctionKind.UNIT, 1, None, impl, f"Convert to {unit.name} ({unit.symbol})")


def _build_functions() -> Dict[str, CLCFunction]:
    """Build the functions namespace: math functions, casts and unit conversions."""
    math_functions = CLCMathFunctions(CLCOperators())

    functions = [
        CLCFunction(
            name, CLCFunctionKind.UNARY, 1, CLCNumberType.F64, math_functions.float_function(name), description
        )
        for name, description in FLOAT_FUNCTION_DESCRIPTIONS.items()
    ]

    functions += [
        CLCFunction('abs', CLCFunctionKind.UNARY, 1, None, math_functions.builtin_abs, "Absolute value"),
        CLCFunction('pow', CLCFunctionKind.BINARY, 2, None, math_functions.builtin_pow, "Raise to a power"),
        CLCFunction('min', CLCFunctionKind.BINARY, 2, None, math_functions.builtin_min, "Smaller of two values"),
        CLCFunction('max', CLCFunctionKind.BINARY, 2, None, math_functions.builtin_max, "Larger of two values"),
    ]

    functions += [_cast_function(number_type) for number_type in CLCNumberType]
    functions += [_unit_function(unit) for unit in ALL_UNITS]

    return {function.name: function for function in functions}
