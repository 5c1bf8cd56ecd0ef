"""Tree-walking evaluator for CLC expressions with detailed error messages."""

import logging
from typing import List

from clc.clc_ast import (
    CLCExpr, CLCLiteral, CLCHistoryRef, CLCConstantRef, CLCUnaryOp, CLCBinaryOp, CLCCall
)
from clc.clc_environment import CLCEnvironment
from clc.clc_error import (
    CLCError, CLCEvalError, CLCHistoryOutOfRangeError, CLCUnknownIdentifierError,
    CLCArityMismatchError, ErrorMessageBuilder
)
from clc.clc_operators import CLCOperators
from clc.clc_registry import CLCFunction
from clc.clc_value import CLCValue, cast_value


DEFAULT_EVAL_DEPTH = 200


class CLCEvaluator:
    """
    Evaluates CLC syntax trees to a single typed value.

    Evaluation never modifies the tree or the environment. Operands are
    evaluated left to right and the first error aborts evaluation.
    """

    def __init__(self, max_depth: int = DEFAULT_EVAL_DEPTH, operators: CLCOperators | None = None) -> None:
        """
        Initialize the evaluator.

        Args:
            max_depth: Maximum depth of the syntax tree
            operators: Operator implementations to use
        """
        self.max_depth = max_depth
        self.operators = operators or CLCOperators()
        self.message_builder = ErrorMessageBuilder()
        self._logger = logging.getLogger("CLCEvaluator")

    def evaluate(self, expr: CLCExpr, env: CLCEnvironment | None = None) -> CLCValue:
        """
        Evaluate a syntax tree.

        Args:
            expr: Root of the tree to evaluate
            env: History and registry to resolve names against

        Returns:
            The resulting value

        Raises:
            CLCError: If evaluation fails
        """
        if env is None:
            env = CLCEnvironment()

        try:
            result = self._evaluate_expression(expr, env, 0)

        except CLCError:
            raise

        except RecursionError as e:
            raise CLCEvalError(
                message="Expression too deeply nested to evaluate",
                position=expr.position,
                suggestion="Split the calculation and use $0 to refer to the previous result"
            ) from e

        except Exception as e:
            # Wrap other exceptions with context
            raise CLCEvalError(
                message=f"Unexpected error during evaluation: {e}",
                context=f"While evaluating {expr.describe()}",
                suggestion="This is an internal error - please report this issue"
            ) from e

        self._logger.debug("evaluated to %s (%s)", result.describe(), result.type_name())
        return result

    def _evaluate_expression(self, expr: CLCExpr, env: CLCEnvironment, depth: int) -> CLCValue:
        """Dispatch on the node type."""
        if depth > self.max_depth:
            raise CLCEvalError(
                message=f"Expression too deeply nested (max depth: {self.max_depth})",
                position=expr.position,
                suggestion="Split the calculation and use $0 to refer to the previous result",
                example="First: 1 + 2 + 3, then: $0 + 4"
            )

        if isinstance(expr, CLCLiteral):
            return expr.value

        if isinstance(expr, CLCHistoryRef):
            return self._evaluate_history_ref(expr, env)

        if isinstance(expr, CLCConstantRef):
            return self._evaluate_constant_ref(expr, env)

        if isinstance(expr, CLCUnaryOp):
            operand = self._evaluate_expression(expr.operand, env, depth + 1)
            try:
                return self.operators.apply_unary(expr.op, operand)

            except CLCError as e:
                raise e.at_position(expr.position)

        if isinstance(expr, CLCBinaryOp):
            return self._evaluate_binary_chain(expr, env, depth)

        if isinstance(expr, CLCCall):
            return self._evaluate_call(expr, env, depth)

        raise CLCEvalError(
            message=f"Unexpected node type: {type(expr).__name__}",
            position=expr.position,
            suggestion="This is an internal error - please report this issue"
        )

    def _evaluate_binary_chain(self, expr: CLCBinaryOp, env: CLCEnvironment, depth: int) -> CLCValue:
        """
        Evaluate a binary operator and the left-nested operators beneath it.

        `1 + 2 + 3 + ...` nests along its left operands; the chain is folded in a
        loop so that long flat expressions do not count as deep ones.
        """
        chain = [expr]
        innermost = expr
        while isinstance(innermost.left, CLCBinaryOp):
            innermost = innermost.left
            chain.append(innermost)

        result = self._evaluate_expression(innermost.left, env, depth + 1)
        for node in reversed(chain):
            right = self._evaluate_expression(node.right, env, depth + 1)
            try:
                result = self.operators.apply_binary(node.op, result, right)

            except CLCError as e:
                raise e.at_position(node.position)

        return result

    def _evaluate_history_ref(self, expr: CLCHistoryRef, env: CLCEnvironment) -> CLCValue:
        value = env.lookup_history(expr.index)
        if value is None:
            size = len(env.history)
            available = f"$0 to ${size - 1}" if size else "none - the history is empty"
            raise CLCHistoryOutOfRangeError(
                message=f"History reference out of range: ${expr.index}",
                position=expr.position,
                received=f"${expr.index}",
                expected=f"An index below {size} (available: {available})",
                suggestion="$0 is the most recent result, $1 the one before it",
                context=f"The history holds {size} of at most {env.history.capacity} results"
            )

        return value

    def _evaluate_constant_ref(self, expr: CLCConstantRef, env: CLCEnvironment) -> CLCValue:
        constant = env.lookup_constant(expr.name)
        if constant is not None:
            return constant.value

        if env.lookup_function(expr.name) is not None:
            raise CLCUnknownIdentifierError(
                message=f"'{expr.name}' is a function, not a constant",
                position=expr.position,
                received=f"Bare name: {expr.name}",
                expected="A call with parentheses",
                example=self.message_builder.create_function_example(expr.name),
                suggestion=f"Call it: {expr.name}(...)"
            )

        similar = self.message_builder.suggest_similar_names(expr.name, env.registry.constant_names())
        raise CLCUnknownIdentifierError(
            message=f"Unknown constant: {expr.name}",
            position=expr.position,
            received=f"Name: {expr.name}",
            expected="A built-in constant such as PI, E, INF or MAX_U8",
            suggestion=f"Did you mean: {', '.join(similar)}?" if similar else "Names are case sensitive",
            context="User-defined variables are not supported"
        )

    def _evaluate_call(self, expr: CLCCall, env: CLCEnvironment, depth: int) -> CLCValue:
        function = env.lookup_function(expr.name)
        if function is None:
            raise self._unknown_function_error(expr, env)

        args = [self._evaluate_expression(arg, env, depth + 1) for arg in expr.args]

        if len(args) != function.arity:
            plural = "" if function.arity == 1 else "s"
            raise CLCArityMismatchError(
                message=f"{expr.name} takes {function.arity} argument{plural}, got {len(args)}",
                position=expr.position,
                received=f"Call: {expr.describe()}",
                expected=f"{function.arity} argument{plural}",
                example=self.message_builder.create_function_example(expr.name)
            )

        return self._call_function(function, args, expr.position)

    def _call_function(self, function: CLCFunction, args: List[CLCValue], position: int) -> CLCValue:
        """Cast the arguments to the declared parameter type and invoke the implementation."""
        if function.param_type is not None:
            args = [cast_value(arg, function.param_type) for arg in args]

        try:
            return function.impl(args)

        except CLCError as e:
            raise e.at_position(position)

        except Exception as e:
            self._logger.warning("Built-in function %s failed", function.name, exc_info=True)
            raise CLCEvalError(
                message=f"Error in built-in function '{function.name}'",
                position=position,
                context=str(e),
                suggestion="This is an internal error - please report this issue"
            ) from e

    def _unknown_function_error(self, expr: CLCCall, env: CLCEnvironment) -> CLCUnknownIdentifierError:
        if env.lookup_constant(expr.name) is not None:
            return CLCUnknownIdentifierError(
                message=f"'{expr.name}' is a constant, not a function",
                position=expr.position,
                received=f"Call: {expr.describe()}",
                expected="A function name",
                suggestion=f"Use the constant without parentheses: {expr.name}"
            )

        similar = self.message_builder.suggest_similar_names(expr.name, env.registry.function_names())
        return CLCUnknownIdentifierError(
            message=f"Unknown function: {expr.name}",
            position=expr.position,
            received=f"Call: {expr.describe()}",
            expected="A built-in function, cast (u8 ... i64, f64) or unit (kilobyte, celsius, ...)",
            suggestion=f"Did you mean: {', '.join(similar)}?" if similar else "Names are case sensitive",
            context="User-defined functions are not supported"
        )
