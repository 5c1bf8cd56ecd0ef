"""Parser for CLC expressions with detailed error messages."""

from dataclasses import dataclass
from typing import List, Tuple

from clc.clc_ast import (
    CLCExpr, CLCLiteral, CLCHistoryRef, CLCConstantRef, CLCUnaryOp, CLCBinaryOp, CLCCall
)
from clc.clc_error import CLCParseError
from clc.clc_token import CLCToken, CLCTokenType


# Binary operators, lowest precedence first. Every level is left associative.
BINARY_PRECEDENCE: Tuple[Tuple[str, ...], ...] = (
    ("||",),
    ("&&",),
    ("|",),
    ("^",),
    ("&",),
    ("==", "!=", "<", ">", "<=", ">="),
    ("<<", ">>"),
    ("+", "-"),
    ("*", "/", "%"),
)

UNARY_OPERATORS = ("-", "~", "!", "+")

DEFAULT_MAX_DEPTH = 50


@dataclass
class ParenStackFrame:
    """Represents an unclosed opening parenthesis with context."""
    position: int
    expression_type: str
    context_snippet: str


class CLCParser:
    """Parses tokens into an abstract syntax tree by recursive descent, with detailed error messages."""

    def __init__(self, tokens: List[CLCToken], expression: str = "", max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize parser with tokens and original expression.

        Args:
            tokens: List of tokens to parse, terminated by an EOF token
            expression: Original expression string for error context
            max_depth: Maximum nesting of parentheses, calls and unary operators
        """
        if not tokens or tokens[-1].type != CLCTokenType.EOF:
            tokens = list(tokens) + [CLCToken(CLCTokenType.EOF, None, len(expression), 0)]

        self.tokens = tokens
        self.pos = 0
        self.current_token: CLCToken = tokens[0]
        self.expression = expression
        self.max_depth = max_depth
        self.depth = 0

        # Paren stack for tracking unclosed groups and calls
        self.paren_stack: List[ParenStackFrame] = []

    def parse(self) -> CLCExpr:
        """
        Parse tokens into an AST with detailed error reporting.

        Returns:
            Root node of the parsed expression

        Raises:
            CLCParseError: If parsing fails
        """
        if self.current_token.type == CLCTokenType.EOF:
            raise CLCParseError(
                message="Empty expression",
                position=0,
                expected="A numeric expression",
                example="42 or (1 + 2) * 3 or sqrt(2)",
                suggestion="Provide a complete expression to evaluate",
                context="Expression cannot be empty or contain only whitespace"
            )

        try:
            expr = self._parse_expression()

        except RecursionError as e:
            raise CLCParseError(
                message="Expression too deeply nested to parse",
                position=self.current_token.position,
                expected="Fewer levels of parentheses, calls or prefix operators",
                suggestion=f"Simplify the expression or lower max_depth (currently {self.max_depth})"
            ) from e

        token = self.current_token
        if token.type == CLCTokenType.RPAREN:
            raise CLCParseError(
                message="Unmatched closing parenthesis",
                position=token.position,
                received="Found: ')'",
                expected="End of expression",
                example="Correct: (1 + 2) * 3\nIncorrect: 1 + 2) * 3",
                suggestion="Remove the extra ')' or add a matching '('"
            )

        if token.type != CLCTokenType.EOF:
            raise CLCParseError(
                message="Unexpected token after complete expression",
                position=token.position,
                received=f"Found: {token.describe()}",
                expected="An operator or end of expression",
                example="Correct: 2 * 3\nIncorrect: 2 3",
                suggestion="Add an operator between the values or remove the extra tokens",
                context="Each evaluation can only handle one complete expression"
            )

        return expr

    def _parse_expression(self) -> CLCExpr:
        """Parse a full expression, starting at the lowest precedence level."""
        return self._parse_binary(0)

    def _parse_binary(self, level: int) -> CLCExpr:
        """Parse a left associative chain of the binary operators at one precedence level."""
        if level == len(BINARY_PRECEDENCE):
            return self._parse_unary()

        operators = BINARY_PRECEDENCE[level]
        left = self._parse_binary(level + 1)

        while self.current_token.type == CLCTokenType.OPERATOR and self.current_token.value in operators:
            op_token = self.current_token
            self._advance()
            right = self._parse_binary(level + 1)
            left = CLCBinaryOp(op_token.value, left, right, position=op_token.position)

        return left

    def _parse_unary(self) -> CLCExpr:
        """Parse prefix operators; they bind tighter than any binary operator."""
        token = self.current_token
        if token.type == CLCTokenType.OPERATOR and token.value in UNARY_OPERATORS:
            self._advance()
            self._enter(token.position)
            try:
                operand = self._parse_unary()

            finally:
                self.depth -= 1

            return CLCUnaryOp(token.value, operand, position=token.position)

        return self._parse_primary()

    def _parse_primary(self) -> CLCExpr:
        """Parse a number, history reference, name, call or parenthesized expression."""
        token = self.current_token

        if token.type == CLCTokenType.NUMBER:
            self._advance()
            return CLCLiteral(token.value, position=token.position)

        if token.type == CLCTokenType.HISTORY_REF:
            self._advance()
            return CLCHistoryRef(token.value, position=token.position)

        if token.type == CLCTokenType.IDENTIFIER:
            self._advance()
            if self.current_token.type == CLCTokenType.LPAREN:
                return self._parse_call(token)

            return CLCConstantRef(token.value, position=token.position)

        if token.type == CLCTokenType.LPAREN:
            return self._parse_group()

        raise self._unexpected_token_error(token)

    def _parse_group(self) -> CLCExpr:
        """Parse ( expr )."""
        start_pos = self.current_token.position
        self._enter(start_pos)
        self._push_paren_frame(start_pos, "parenthesized expression")
        self._advance()  # consume '('

        try:
            expr = self._parse_expression()

        finally:
            self.depth -= 1

        if self.current_token.type != CLCTokenType.RPAREN:
            raise self._missing_close_error(start_pos)

        self._pop_paren_frame()
        self._advance()  # consume ')'
        return expr

    def _parse_call(self, name_token: CLCToken) -> CLCCall:
        """
        Parse the argument list of name(arg, ...).

        Raises:
            CLCParseError: For empty arguments or an unterminated argument list
        """
        start_pos = self.current_token.position
        self._enter(start_pos)
        self._push_paren_frame(start_pos, f"call to {name_token.value}")
        self._advance()  # consume '('

        args: List[CLCExpr] = []
        try:
            if self.current_token.type != CLCTokenType.RPAREN:
                while True:
                    if self.current_token.type in (CLCTokenType.COMMA, CLCTokenType.RPAREN):
                        raise self._empty_argument_error(name_token.value, self.current_token)

                    args.append(self._parse_expression())

                    if self.current_token.type == CLCTokenType.COMMA:
                        self._advance()
                        continue

                    break

        finally:
            self.depth -= 1

        if self.current_token.type != CLCTokenType.RPAREN:
            raise self._missing_close_error(start_pos)

        self._pop_paren_frame()
        self._advance()  # consume ')'
        return CLCCall(name_token.value, tuple(args), position=name_token.position)

    def _enter(self, position: int) -> None:
        """Increase the nesting depth, rejecting expressions nested too deeply."""
        self.depth += 1
        if self.depth > self.max_depth:
            raise CLCParseError(
                message=f"Expression too deeply nested (max depth: {self.max_depth})",
                position=position,
                expected=f"At most {self.max_depth} levels of parentheses, calls or prefix operators",
                suggestion="Simplify the expression or increase max_depth"
            )

    def _push_paren_frame(self, position: int, expression_type: str) -> None:
        """Push a new opening paren onto the tracking stack."""
        self.paren_stack.append(ParenStackFrame(
            position=position,
            expression_type=expression_type,
            context_snippet=self._get_context_snippet(position)
        ))

    def _pop_paren_frame(self) -> None:
        """Pop an opening paren from the stack when it's successfully closed."""
        assert self.paren_stack, "Paren stack underflow - trying to pop from empty stack"
        self.paren_stack.pop()

    def _get_context_snippet(self, position: int, length: int = 30) -> str:
        """
        Get a snippet of the expression starting at position for error display.

        Args:
            position: Starting character position
            length: Maximum length of snippet

        Returns:
            Formatted context snippet with ellipsis if truncated
        """
        end = min(position + length, len(self.expression))
        snippet = ' '.join(self.expression[position:end].split())

        if end < len(self.expression):
            snippet += "..."

        return snippet

    def _missing_close_error(self, start_pos: int) -> CLCParseError:
        """
        Build the error for a '(' that is not closed where it should be.

        At end of input the message lists every unclosed parenthesis.
        """
        token = self.current_token
        if token.type != CLCTokenType.EOF:
            return CLCParseError(
                message="Expected ')'",
                position=token.position,
                received=f"Found: {token.describe()}",
                expected="')' or an operator",
                example="Correct: (1 + 2) * 3, max(1, 2)\nIncorrect: (1 2), max(1 2)",
                suggestion="Separate function arguments with ',' and join values with an operator",
                context=f"Inside the parenthesis opened at position {start_pos}"
            )

        depth = len(self.paren_stack)
        stack_lines = [
            f"  {i}. {frame.expression_type} at position {frame.position}: {frame.context_snippet}"
            for i, frame in enumerate(self.paren_stack, 1)
        ]
        paren_word = "parenthesis" if depth == 1 else "parentheses"
        closing_parens = " ".join(")" * depth)

        return CLCParseError(
            message=f"Unmatched opening parenthesis - missing {depth} closing {paren_word}",
            position=self.paren_stack[-1].position if self.paren_stack else start_pos,
            received="Reached end of input",
            expected=f"Add \"{closing_parens}\" to close all groups",
            example="Correct: (1 + 2) * 3\nIncorrect: (1 + 2 * 3",
            suggestion=f"Add {depth} closing {paren_word}: {closing_parens}",
            context="Unclosed parentheses:\n" + "\n".join(stack_lines)
        )

    def _empty_argument_error(self, name: str, token: CLCToken) -> CLCParseError:
        """Build the error for a missing argument such as f(1,) or f(,1)."""
        return CLCParseError(
            message=f"Empty argument in call to {name}",
            position=token.position,
            received=f"Found: {token.describe()}",
            expected="An expression before each ',' and before ')' after a ','",
            example="Correct: max(1, 2)\nIncorrect: max(1,), max(,2)",
            suggestion="Remove the stray ',' or add the missing argument"
        )

    def _unexpected_token_error(self, token: CLCToken) -> CLCParseError:
        """Build the error for a token that cannot start an operand."""
        if token.type == CLCTokenType.EOF:
            return CLCParseError(
                message="Unexpected end of expression",
                position=token.position,
                received="Reached end of input",
                expected="A number, name, '$N', '(' or a prefix operator",
                example="Correct: 1 + 2\nIncorrect: 1 +",
                suggestion="Complete the expression after the last operator"
            )

        if token.type == CLCTokenType.RPAREN:
            return CLCParseError(
                message="Unexpected ')'",
                position=token.position,
                received="Found: ')'",
                expected="A number, name, '$N', '(' or a prefix operator",
                example="Correct: (1 + 2)\nIncorrect: (), (1 + )",
                suggestion="Parentheses must contain an expression"
            )

        return CLCParseError(
            message=f"Unexpected token: {token.describe()}",
            position=token.position,
            received=f"Token: {token.describe()} (type: {token.type.name})",
            expected="A number, name, '$N', '(' or a prefix operator",
            example="Valid starts: 42, 0xFF, PI, sqrt(2), $0, (, -",
            suggestion="Binary operators need a value on both sides",
            context=f"{token.describe()} cannot start an operand"
        )

    def _advance(self) -> None:
        """Move to the next token; stays on the final EOF token."""
        if self.pos < len(self.tokens) - 1:
            self.pos += 1

        self.current_token = self.tokens[self.pos]
