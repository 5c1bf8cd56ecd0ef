"""Lexer for CLC expressions with detailed error messages."""

import string
from typing import Iterator, List

from clc.clc_error import CLCLexError
from clc.clc_number_type import DEFAULT_INTEGER_TYPE
from clc.clc_token import CLCToken, CLCTokenType
from clc.clc_unit import unit_from_suffix
from clc.clc_value import CLCFloat, CLCInteger, CLCValue, attach_unit


DIGITS = "0123456789"
IDENTIFIER_START = string.ascii_letters + "_"
IDENTIFIER_CHARS = IDENTIFIER_START + DIGITS
DEGREE = "°"

# Longest operators first so that '<<' is not lexed as two '<'.
OPERATORS = (
    "&&", "||", "<<", ">>", "==", "!=", "<=", ">=",
    "+", "-", "*", "/", "%", "&", "|", "^", "~", "!", "<", ">",
)

RADIX_PREFIXES = {
    "x": (16, "0123456789abcdefABCDEF", "hexadecimal"),
    "o": (8, "01234567", "octal"),
    "b": (2, "01", "binary"),
}

SIZE_SUFFIXES = "BKMGTP"
TEMPERATURE_LETTERS = "CFK"


class CLCLexer:
    """
    Lexes CLC expressions into tokens with detailed error messages.

    Tokens are produced lazily. Iterating a lexer constructed with an
    expression starts a fresh pass over the same text every time.
    """

    def __init__(self, expression: str = "") -> None:
        """
        Initialize the lexer.

        Args:
            expression: Expression used when the lexer itself is iterated
        """
        self.expression = expression

    def __iter__(self) -> Iterator[CLCToken]:
        return self.tokens(self.expression)

    def lex(self, expression: str) -> List[CLCToken]:
        """
        Lex a CLC expression with detailed error reporting.

        Args:
            expression: The expression string to lex

        Returns:
            List of tokens, always terminated by an EOF token

        Raises:
            CLCLexError: If lexing fails
        """
        return list(self.tokens(expression))

    def tokens(self, expression: str) -> Iterator[CLCToken]:
        """
        Lazily produce the tokens of an expression.

        Raises:
            CLCLexError: When the offending character is reached
        """
        i = 0
        while i < len(expression):
            char = expression[i]

            if char.isspace():
                i += 1
                continue

            if char in DIGITS or (char == "." and self._digit_at(expression, i + 1)):
                token = self._read_number(expression, i)
                yield token
                i += token.length
                continue

            if char == "$":
                token = self._read_history_ref(expression, i)
                yield token
                i += token.length
                continue

            if char in IDENTIFIER_START:
                token = self._read_identifier(expression, i)
                yield token
                i += token.length
                continue

            if char == "(":
                yield CLCToken(CLCTokenType.LPAREN, "(", i)
                i += 1
                continue

            if char == ")":
                yield CLCToken(CLCTokenType.RPAREN, ")", i)
                i += 1
                continue

            if char == ",":
                yield CLCToken(CLCTokenType.COMMA, ",", i)
                i += 1
                continue

            operator = self._match_operator(expression, i)
            if operator is not None:
                yield CLCToken(CLCTokenType.OPERATOR, operator, i, len(operator))
                i += len(operator)
                continue

            raise self._invalid_character_error(expression, i)

        yield CLCToken(CLCTokenType.EOF, None, len(expression), 0)

    def _digit_at(self, expression: str, pos: int) -> bool:
        """Check if there is a decimal digit at a position."""
        return pos < len(expression) and expression[pos] in DIGITS

    def _match_operator(self, expression: str, pos: int) -> str | None:
        """Return the longest operator starting at pos, if any."""
        for operator in OPERATORS:
            if expression.startswith(operator, pos):
                return operator

        return None

    def _read_number(self, expression: str, start: int) -> CLCToken:
        """
        Read a numeric literal and any unit suffix glued to it.

        Raises:
            CLCLexError: If the literal is malformed
        """
        i = start
        value: CLCValue
        prefix = expression[start + 1:start + 2] if expression[start] == "0" else ""

        if prefix in RADIX_PREFIXES:
            radix, allowed, radix_name = RADIX_PREFIXES[prefix]
            i = start + 2
            while i < len(expression) and expression[i] in allowed:
                i += 1

            if i == start + 2:
                raise CLCLexError(
                    message=f"Expected digit in {radix_name} literal",
                    position=start,
                    received=f"Literal: {expression[start:i + 1]}",
                    expected=f"At least one {radix_name} digit after '{expression[start:start + 2]}'",
                    example="Valid: 0xFF, 0o755, 0b1010",
                    suggestion=f"Add {radix_name} digits after the prefix"
                )

            value = self._make_integer(expression, start, int(expression[start + 2:i], radix))

        else:
            while i < len(expression) and expression[i] in DIGITS:
                i += 1

            if i < len(expression) and expression[i] == ".":
                i += 1
                fraction_start = i
                while i < len(expression) and expression[i] in DIGITS:
                    i += 1

                if i == fraction_start:
                    raise CLCLexError(
                        message="Expected digit in float literal",
                        position=start,
                        received=f"Literal: {expression[start:i]}",
                        expected="At least one digit after the decimal point",
                        example="Valid: 1.5, 0.25, .5\nInvalid: 1., 2.x",
                        suggestion="Add digits after the decimal point"
                    )

                value = CLCFloat(float(expression[start:i]))

            else:
                value = self._make_integer(expression, start, int(expression[start:i]))

        suffix_length = self._suffix_length(expression, i)
        if suffix_length:
            suffix = expression[i:i + suffix_length]
            unit = unit_from_suffix(suffix)
            if unit is None:
                raise CLCLexError(
                    message=f"Unknown unit suffix: {suffix}",
                    position=i,
                    received=f"Suffix: {suffix}",
                    expected="One of B K M G T P ° °C °F °K"
                )

            value = attach_unit(value, unit)
            i += suffix_length

        if i < len(expression) and (expression[i] in IDENTIFIER_CHARS or expression[i] in ".°"):
            end = i
            while end < len(expression) and (expression[end] in IDENTIFIER_CHARS or expression[end] in ".°"):
                end += 1

            literal = expression[start:end]
            raise CLCLexError(
                message=f"Invalid numeric literal: {literal}",
                position=start,
                received=f"Malformed number token: {literal}",
                expected="Digits, optionally followed by one unit suffix: B K M G T P ° °C °F °K",
                example="Valid: 42, 1.5, 0xFF, 4K, 100°F\nInvalid: 12abc, 1.2.3, 4KB",
                suggestion=f"Unexpected character '{expression[i]}' at position {i}",
                context="Numbers may only be followed by an operator, a parenthesis, a comma or whitespace"
            )

        return CLCToken(CLCTokenType.NUMBER, value, start, i - start)

    def _make_integer(self, expression: str, start: int, number: int) -> CLCInteger:
        """Build an integer literal of the default type, rejecting values that do not fit."""
        if number > DEFAULT_INTEGER_TYPE.max_value:
            raise CLCLexError(
                message="Integer literal too large",
                position=start,
                received=f"Value: {number}",
                expected=f"At most {DEFAULT_INTEGER_TYPE.max_value} ({DEFAULT_INTEGER_TYPE})",
                suggestion="Use a float literal such as 18446744073709551616.0 for larger magnitudes"
            )

        return CLCInteger(number, DEFAULT_INTEGER_TYPE)

    def _suffix_length(self, expression: str, pos: int) -> int:
        """Return the length of a unit suffix at pos, or 0 if there isn't one."""
        if pos >= len(expression):
            return 0

        char = expression[pos]
        if char == DEGREE:
            if pos + 1 < len(expression) and expression[pos + 1] in TEMPERATURE_LETTERS:
                return 2

            return 1

        if char in SIZE_SUFFIXES:
            return 1

        return 0

    def _read_history_ref(self, expression: str, start: int) -> CLCToken:
        """
        Read a history reference such as $0 or $12.

        Raises:
            CLCLexError: If the reference has no digits, a leading zero, or trailing letters
        """
        i = start + 1
        while i < len(expression) and expression[i] in DIGITS:
            i += 1

        digits = expression[start + 1:i]
        if not digits:
            raise CLCLexError(
                message="Expected digit after '$'",
                position=start,
                received=f"Found: {expression[start:start + 2]}",
                expected="History reference: $ followed by digits",
                example="Valid: $0 (most recent result), $1, $2",
                suggestion="Use $0 to refer to the previous result"
            )

        if len(digits) > 1 and digits[0] == "0":
            raise CLCLexError(
                message=f"Invalid history reference: ${digits}",
                position=start,
                received=f"Reference: ${digits}",
                expected="No leading zeros",
                example=f"Valid: ${int(digits)}",
                suggestion="Remove the leading zeros"
            )

        if i < len(expression) and (expression[i] in IDENTIFIER_CHARS or expression[i] == "."):
            raise CLCLexError(
                message=f"Invalid character in history reference: {expression[i]}",
                position=i,
                received=f"Reference: {expression[start:i + 1]}",
                expected="Only digits after '$'",
                example="Valid: $0, $3"
            )

        return CLCToken(CLCTokenType.HISTORY_REF, int(digits), start, i - start)

    def _read_identifier(self, expression: str, start: int) -> CLCToken:
        """Read an identifier (constant, function or cast name)."""
        i = start
        while i < len(expression) and expression[i] in IDENTIFIER_CHARS:
            i += 1

        return CLCToken(CLCTokenType.IDENTIFIER, expression[start:i], start, i - start)

    def _invalid_character_error(self, expression: str, pos: int) -> CLCLexError:
        """Build the error for a character that cannot start any token."""
        char = expression[pos]
        char_code = ord(char)

        if char_code < 32:
            char_display = f"\\u{char_code:04x}"
            return CLCLexError(
                message=f"Invalid control character in expression: {char_display}",
                position=pos,
                received=f"Control character: {char_display} (code {char_code})",
                expected="Numbers, names, operators, parentheses or commas",
                suggestion="Remove the control character"
            )

        suggestions = {
            DEGREE: "Temperature suffixes must follow a number directly: 100°F, not 100 °F",
            ".": "Decimal points must be followed by digits: .5 or 0.5",
            "=": "Use == to compare values",
            "[": "Use parentheses ( ) for grouping, not brackets [ ]",
            "]": "Use parentheses ( ) for grouping, not brackets [ ]",
            "{": "Use parentheses ( ) for grouping, not braces { }",
            "}": "Use parentheses ( ) for grouping, not braces { }",
        }

        return CLCLexError(
            message=f"Invalid character: {char}",
            position=pos,
            received=f"Character: {char} (code {char_code})",
            expected="Numbers, names, operators, parentheses or commas",
            example="Valid: (1 + 2) * 3, sin(PI / 2), 4K + 512B, $0 * 2",
            suggestion=suggestions.get(char, f"'{char}' is not a valid character in an expression")
        )
