"""Shared fixtures and utilities for CLC tests."""

import math

import pytest

from clc import CLC, CLCFloat, CLCHistory, CLCInteger, CLCNumberType, CLCValue


@pytest.fixture
def clc():
    """Create a fresh CLC instance with an empty history for each test."""
    return CLC()


@pytest.fixture
def clc_custom():
    """Factory for CLC instances with custom configuration."""
    def _create_clc(history_size: int = 10, max_depth: int = 50, max_eval_depth: int = 200) -> CLC:
        return CLC(CLCHistory(history_size), max_depth=max_depth, max_eval_depth=max_eval_depth)
    return _create_clc


class CLCTestHelpers:
    """Helper utilities for CLC testing."""

    @staticmethod
    def assert_evaluates_to(clc: CLC, expression: str, expected: str) -> None:
        """Assert that expression evaluates to the expected formatted result."""
        result = clc.evaluate_and_format(expression)
        assert result == expected, f"Expected '{expected}' for {expression!r}, got '{result}'"

    @staticmethod
    def assert_integer(value: CLCValue, expected: int, number_type: CLCNumberType) -> None:
        """Assert that a value is an integer of a given type and interpreted value."""
        assert isinstance(value, CLCInteger), f"Expected an integer, got {value!r}"
        assert value.integer_type == number_type, f"Expected {number_type}, got {value.integer_type}"
        assert value.value == expected, f"Expected {expected}, got {value.value}"

    @staticmethod
    def assert_float(value: CLCValue, expected: float, rel_tol: float = 1e-9) -> None:
        """Assert that a value is an f64 close to expected (NaN matches NaN)."""
        assert isinstance(value, CLCFloat), f"Expected a float, got {value!r}"
        if math.isnan(expected):
            assert math.isnan(value.value), f"Expected NaN, got {value.value}"
            return

        assert math.isclose(value.value, expected, rel_tol=rel_tol, abs_tol=1e-12), \
            f"Expected {expected}, got {value.value}"

    @staticmethod
    def build_nested_expression(depth: int, base_value: str = "1") -> str:
        """Build an expression nested `depth` parentheses deep."""
        return "(" * depth + base_value + ")" * depth


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return CLCTestHelpers
