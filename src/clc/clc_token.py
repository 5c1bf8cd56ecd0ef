"""Token types and token representation for CLC expressions."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CLCTokenType(Enum):
    """Token types for CLC expressions."""
    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"
    OPERATOR = "OPERATOR"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    HISTORY_REF = "$"
    EOF = "EOF"


@dataclass(frozen=True)
class CLCToken:
    """Represents a single token in a CLC expression."""
    type: CLCTokenType
    value: Any
    position: int
    length: int = 1

    def describe(self) -> str:
        """Describe the token for error messages."""
        if self.type == CLCTokenType.EOF:
            return "end of input"

        if self.type == CLCTokenType.HISTORY_REF:
            return f"'${self.value}'"

        if self.type == CLCTokenType.NUMBER:
            return f"number {self.value.describe()}"

        return f"'{self.value}'"

    def __repr__(self) -> str:
        return f"CLCToken({self.type.name}, {self.value!r}, pos={self.position})"
