"""Main CLC (command-line calculator) class with detailed error messages."""

import logging

from clc.clc_environment import CLCEnvironment
from clc.clc_evaluator import CLCEvaluator, DEFAULT_EVAL_DEPTH
from clc.clc_formatter import format_value
from clc.clc_history import CLCHistory, DEFAULT_HISTORY_SIZE
from clc.clc_lexer import CLCLexer
from clc.clc_parser import CLCParser, DEFAULT_MAX_DEPTH
from clc.clc_registry import CLCRegistry
from clc.clc_value import CLCValue


class CLC:
    """
    Calculator for typed numeric expressions with units.

    Each call to evaluate() handles exactly one expression. Successful results
    are appended to the history, where later expressions can refer to them
    as $0, $1, ...

    Errors carry:
    - A clear explanation of what went wrong
    - The position in the expression where it happened
    - What was expected and what was received
    - Suggestions and examples of correct usage
    """

    def __init__(
        self,
        history: CLCHistory | None = None,
        registry: CLCRegistry | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_eval_depth: int = DEFAULT_EVAL_DEPTH
    ):
        """
        Initialize the calculator.

        Args:
            history: Previous results; a new empty history is used if not given
            registry: Built-in names; the default registry if not given
            max_depth: Maximum nesting of parentheses, calls and prefix operators
            max_eval_depth: Maximum depth of the syntax tree during evaluation
        """
        self.history = history if history is not None else CLCHistory(DEFAULT_HISTORY_SIZE)
        self.registry = registry or CLCRegistry.default()
        self.max_depth = max_depth
        self.max_eval_depth = max_eval_depth
        self._logger = logging.getLogger("CLC")

    def evaluate(self, expression: str) -> CLCValue:
        """
        Evaluate a CLC expression.

        Args:
            expression: Expression string to evaluate

        Returns:
            The typed result

        Raises:
            CLCLexError: If lexing fails
            CLCParseError: If parsing fails
            CLCTypeError: If operands have incompatible types or units
            CLCEvalError: If evaluation fails
        """
        tokens = CLCLexer().lex(expression)

        parser = CLCParser(tokens, expression, max_depth=self.max_depth)
        parsed_expr = parser.parse()

        evaluator = CLCEvaluator(max_depth=self.max_eval_depth)
        result = evaluator.evaluate(parsed_expr, CLCEnvironment(self.history, self.registry))

        self.history.append(result)
        self._logger.debug("%r = %s", expression, result.describe())
        return result

    def evaluate_and_format(self, expression: str) -> str:
        """
        Evaluate a CLC expression and return the formatted result.

        Raises:
            CLCError: If the expression cannot be evaluated
        """
        return format_value(self.evaluate(expression))
