"""CLC AST node hierarchy - the immutable output of the parser.

Every node records the character position of the source text it came from
so that evaluation errors can point back into the expression.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Tuple

from clc.clc_value import CLCValue


@dataclass(frozen=True)
class CLCExpr(ABC):
    """Abstract base class for all CLC AST nodes."""
    position: int = field(default=0, kw_only=True, compare=False)

    @abstractmethod
    def describe(self) -> str:
        """Render the node back into expression syntax."""


@dataclass(frozen=True)
class CLCLiteral(CLCExpr):
    """A numeric literal, with its unit already attached."""
    value: CLCValue

    def describe(self) -> str:
        return self.value.describe()


@dataclass(frozen=True)
class CLCHistoryRef(CLCExpr):
    """A reference to a previous result: $0 is the most recent."""
    index: int

    def describe(self) -> str:
        return f"${self.index}"


@dataclass(frozen=True)
class CLCConstantRef(CLCExpr):
    """A bare name, resolved against the constants of the registry."""
    name: str

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class CLCUnaryOp(CLCExpr):
    """A prefix operator: - ~ ! +"""
    op: str
    operand: CLCExpr

    def describe(self) -> str:
        return f"{self.op}{self.operand.describe()}"


@dataclass(frozen=True)
class CLCBinaryOp(CLCExpr):
    """An infix operator applied to two subexpressions."""
    op: str
    left: CLCExpr
    right: CLCExpr

    def describe(self) -> str:
        return f"({self.left.describe()} {self.op} {self.right.describe()})"


@dataclass(frozen=True)
class CLCCall(CLCExpr):
    """A call of a named function with zero or more arguments."""
    name: str
    args: Tuple[CLCExpr, ...] = ()

    def describe(self) -> str:
        return f"{self.name}({', '.join(arg.describe() for arg in self.args)})"
