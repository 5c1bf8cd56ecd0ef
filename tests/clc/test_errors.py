"""Tests for error classes, messages and suggestions."""

import pytest

from clc import (
    CLC, CLCArityMismatchError, CLCConstant, CLCDivisionByZeroError, CLCError, CLCEvalError, CLCFunction,
    CLCFunctionKind, CLCHistoryOutOfRangeError, CLCInteger, CLCLexError, CLCParseError, CLCRegistry,
    CLCTypeError, CLCUnknownIdentifierError, ErrorMessageBuilder
)


class TestErrorHierarchy:
    """Test how the error classes relate."""

    @pytest.mark.parametrize("error_class", [CLCLexError, CLCParseError, CLCTypeError, CLCEvalError])
    def test_categories_are_clc_errors(self, error_class):
        """Every category can be caught as CLCError."""
        assert issubclass(error_class, CLCError)

    @pytest.mark.parametrize("error_class", [
        CLCDivisionByZeroError,
        CLCHistoryOutOfRangeError,
        CLCUnknownIdentifierError,
        CLCArityMismatchError,
    ])
    def test_evaluation_failures_are_eval_errors(self, error_class):
        """Specific evaluation failures are evaluation errors."""
        assert issubclass(error_class, CLCEvalError)

    @pytest.mark.parametrize("expression,error_class", [
        ("1 # 2", CLCLexError),
        ("1 +", CLCParseError),
        ("1K + 1°C", CLCTypeError),
        ("1 / 0", CLCDivisionByZeroError),
        ("$3", CLCHistoryOutOfRangeError),
        ("FOO", CLCUnknownIdentifierError),
        ("sqrt(1, 2)", CLCArityMismatchError),
    ])
    def test_each_stage_raises_its_own_category(self, clc, expression, error_class):
        """Each stage reports failures with its own error class."""
        with pytest.raises(error_class):
            clc.evaluate(expression)


class TestErrorMessages:
    """Test the detailed error message format."""

    def test_message_includes_all_details(self):
        """str() lists every detail that was given, one per line."""
        error = CLCError(
            "Something failed",
            context="While testing",
            expected="A number",
            received="A word",
            suggestion="Use a number",
            example="1 + 2",
            position=4
        )

        assert str(error) == "\n".join([
            "Error: Something failed",
            "Position: 4",
            "Received: A word",
            "Expected: A number",
            "Context: While testing",
            "Suggestion: Use a number",
            "Example: 1 + 2",
        ])

    def test_message_omits_missing_details(self):
        """Only the core message appears when nothing else is known."""
        assert str(CLCError("Plain")) == "Error: Plain"

    def test_at_position_sets_missing_position(self):
        """at_position records a position and refreshes the message."""
        error = CLCEvalError("Failed").at_position(7)
        assert error.position == 7
        assert "Position: 7" in str(error)

    def test_at_position_keeps_existing_position(self):
        """A position already known is not overwritten."""
        error = CLCEvalError("Failed", position=2).at_position(7)
        assert error.position == 2

    def test_function_examples(self):
        """Common functions have a usage example; others get a generic one."""
        assert ErrorMessageBuilder.create_function_example("sqrt") == "sqrt(16) → 4"
        assert ErrorMessageBuilder.create_function_example("log2") == "log2(...)"

    def test_similar_names(self):
        """Fuzzy matching finds close names."""
        assert ErrorMessageBuilder.suggest_similar_names("sqr", ["sqrt", "sin", "cos"]) == ["sqrt"]
        assert not ErrorMessageBuilder.suggest_similar_names("", ["sqrt"])
        assert not ErrorMessageBuilder.suggest_similar_names("xyz", [])


class TestUnknownNames:
    """Test errors for names the registry does not know."""

    def test_unknown_constant_suggests_similar(self, clc):
        """A misspelled constant suggests the closest names."""
        with pytest.raises(CLCUnknownIdentifierError, match="Unknown constant: PII") as exc_info:
            clc.evaluate("2 * PII")

        assert exc_info.value.position == 4
        assert "PI" in exc_info.value.suggestion

    def test_unknown_constant_mentions_case(self, clc):
        """Names are case sensitive; the error says so when nothing is close."""
        with pytest.raises(CLCUnknownIdentifierError) as exc_info:
            clc.evaluate("pi")

        assert exc_info.value.suggestion == "Names are case sensitive"

    def test_unknown_function_suggests_similar(self, clc):
        """A misspelled function suggests the closest names."""
        with pytest.raises(CLCUnknownIdentifierError, match="Unknown function: sqr") as exc_info:
            clc.evaluate("sqr(4)")

        assert "sqrt" in exc_info.value.suggestion

    def test_unknown_function_is_reported_before_arguments(self, clc):
        """The function name is checked before its arguments are evaluated."""
        with pytest.raises(CLCUnknownIdentifierError, match="Unknown function"):
            clc.evaluate("nosuch(1 / 0)")

    def test_function_used_as_constant(self, clc):
        """A bare function name is explained, with an example call."""
        with pytest.raises(CLCUnknownIdentifierError, match="'sqrt' is a function, not a constant") as exc_info:
            clc.evaluate("sqrt")

        assert exc_info.value.example == "sqrt(16) → 4"

    def test_constant_used_as_function(self, clc):
        """Calling a constant is explained."""
        with pytest.raises(CLCUnknownIdentifierError, match="'PI' is a constant, not a function"):
            clc.evaluate("PI(2)")


class TestEvaluationLimits:
    """Test evaluation depth and internal error handling."""

    def test_long_flat_sum_is_not_deep(self, clc, clc_custom):
        """A left associative chain evaluates however long it is."""
        assert clc.evaluate(" + ".join(["1"] * 1000)).value == 1000
        assert clc.evaluate(" - ".join(["1000"] + ["1"] * 250)).value == 750
        assert clc_custom(max_eval_depth=5).evaluate(" * ".join(["2"] * 20)).value == 1 << 20

    @pytest.mark.parametrize("expression", [
        "abs(abs(abs(abs(abs(abs(1))))))",
        "1 + (1 + (1 + (1 + (1 + (1 + 1)))))",
        "------1",
    ])
    def test_evaluation_depth_limit(self, clc_custom, expression):
        """Real nesting deeper than the evaluation limit is rejected."""
        clc = clc_custom(max_eval_depth=5)
        assert clc.evaluate("abs(abs(1)) + (1 + 1)").value == 3

        with pytest.raises(CLCEvalError, match="too deeply nested"):
            clc.evaluate(expression)

    def test_operator_errors_in_chains_keep_their_position(self, clc):
        """An error inside a long chain points at the failing operator."""
        with pytest.raises(CLCDivisionByZeroError) as exc_info:
            clc.evaluate("1 + 2 + 3 / 0 + 4")

        assert exc_info.value.position == 10

    def test_internal_function_failure_is_wrapped(self):
        """An unexpected exception in a built-in becomes a CLCEvalError."""
        def broken(args):
            raise RuntimeError("boom")

        registry = CLCRegistry(
            {"ONE": CLCConstant("ONE", CLCInteger(1))},
            {"broken": CLCFunction("broken", CLCFunctionKind.UNARY, 1, None, broken)}
        )
        clc = CLC(registry=registry)

        with pytest.raises(CLCEvalError, match="Error in built-in function 'broken'") as exc_info:
            clc.evaluate("broken(ONE)")

        assert exc_info.value.context == "boom"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_errors_do_not_touch_history(self, clc):
        """A failed evaluation leaves the history unchanged."""
        for expression in ("1 # 2", "(1", "1K + 1°C", "1 / 0", "FOO"):
            with pytest.raises(CLCError):
                clc.evaluate(expression)

        assert len(clc.history) == 0
