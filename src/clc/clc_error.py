"""Exception classes for CLC (command-line calculator) expressions with detailed context."""

from typing import List, Optional
import difflib


class CLCError(Exception):
    """Base exception for CLC errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
        suggestion: Optional[str] = None,
        example: Optional[str] = None,
        position: Optional[int] = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
            position: Character position where error occurred
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.position = position

        super().__init__(self._format_detailed_message())

    def at_position(self, position: int) -> 'CLCError':
        """Record where the error occurred, unless a position is already known."""
        if self.position is None:
            self.position = position
            self.args = (self._format_detailed_message(),)

        return self

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.position is not None:
            parts.append(f"Position: {self.position}")

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        if self.example:
            parts.append(f"Example: {self.example}")

        return "\n".join(parts)


class CLCLexError(CLCError):
    """Lexing errors: invalid characters and malformed literals."""


class CLCParseError(CLCError):
    """Parsing errors: unexpected tokens, unbalanced parentheses, trailing input."""


class CLCTypeError(CLCError):
    """Type errors: incompatible units, operators or arguments of the wrong type."""


class CLCEvalError(CLCError):
    """Evaluation errors."""


class CLCDivisionByZeroError(CLCEvalError):
    """Integer division or modulo by zero."""


class CLCHistoryOutOfRangeError(CLCEvalError):
    """A history reference points past the end of the history."""


class CLCUnknownIdentifierError(CLCEvalError):
    """A constant or function name is not in the registry."""


class CLCArityMismatchError(CLCEvalError):
    """A function was called with the wrong number of arguments."""


class ErrorMessageBuilder:
    """Helper class for building detailed error messages."""

    @staticmethod
    def suggest_similar_names(target: str, available_names: List[str], max_suggestions: int = 3) -> List[str]:
        """Suggest similar names using fuzzy matching."""
        if not target or not available_names:
            return []

        return difflib.get_close_matches(target, available_names, n=max_suggestions, cutoff=0.6)

    @staticmethod
    def create_function_example(func_name: str) -> str:
        """Create usage example for common functions."""
        examples = {
            # Casting
            'u8': "u8(0x1FF) → 255",
            'i8': "i8(0xFF) → -1",
            'u64': "u64(3.9) → 3",
            'f64': "f64(7) / 2 → 3.50",

            # Math
            'sin': "sin(PI / 2) → 1",
            'sqrt': "sqrt(16) → 4",
            'abs': "abs(-5) → 5",
            'round': "round(3.7) → 4",
            'pow': "pow(2, 10) → 1024",
            'min': "min(3, 4) → 3",
            'max': "max(3, 4) → 4",

            # Units
            'kilobyte': "kilobyte(2048B) → 2K",
            'celsius': "celsius(212°F) → 100°C",
            'fahrenheit': "fahrenheit(100°C) → 212°F",
            'kelvin': "kelvin(0°C) → 273.15°K",
        }

        return examples.get(func_name, f"{func_name}(...)")
