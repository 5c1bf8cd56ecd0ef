"""CLC (command-line calculator) package: typed numeric expressions with units."""

# Main API
from clc.clc import CLC

# Exceptions (for error handling)
from clc.clc_error import (
    CLCError, CLCLexError, CLCParseError, CLCTypeError, CLCEvalError,
    CLCDivisionByZeroError, CLCHistoryOutOfRangeError, CLCUnknownIdentifierError, CLCArityMismatchError,
    ErrorMessageBuilder
)

# Values, types and units
from clc.clc_number_type import CLCNumberType, DEFAULT_INTEGER_TYPE, DEFAULT_FLOAT_TYPE
from clc.clc_unit import CLCUnit, CLCUnitCategory
from clc.clc_value import CLCValue, CLCInteger, CLCFloat, cast_value, convert_value

# Lower-level components (for advanced usage)
from clc.clc_token import CLCToken, CLCTokenType
from clc.clc_lexer import CLCLexer
from clc.clc_parser import CLCParser
from clc.clc_evaluator import CLCEvaluator
from clc.clc_environment import CLCEnvironment
from clc.clc_history import CLCHistory
from clc.clc_registry import CLCRegistry, CLCConstant, CLCFunction, CLCFunctionKind


__all__ = [
    # Main API
    "CLC",

    # Exceptions
    "CLCError", "CLCLexError", "CLCParseError", "CLCTypeError", "CLCEvalError",
    "CLCDivisionByZeroError", "CLCHistoryOutOfRangeError", "CLCUnknownIdentifierError", "CLCArityMismatchError",
    "ErrorMessageBuilder",

    # Values, types and units
    "CLCNumberType", "DEFAULT_INTEGER_TYPE", "DEFAULT_FLOAT_TYPE",
    "CLCUnit", "CLCUnitCategory",
    "CLCValue", "CLCInteger", "CLCFloat", "cast_value", "convert_value",

    # Lower-level components
    "CLCToken", "CLCTokenType", "CLCLexer", "CLCParser", "CLCEvaluator", "CLCEnvironment", "CLCHistory",
    "CLCRegistry", "CLCConstant", "CLCFunction", "CLCFunctionKind"
]
